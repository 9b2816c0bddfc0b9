"""Exceptions raised by the Smith form driver."""


class SmithFormError(Exception):
    """Base class for errors raised by pirsnf."""


class ConfigurationError(SmithFormError, ValueError):
    """A Smith form request was rejected before any elimination started.

    Raised for an unknown algorithm name, a modulus the chosen algorithm
    cannot work with, a malformed input matrix, or a matrix larger than the
    configured dimension limit. The input matrix is never touched when this
    is raised.
    """
