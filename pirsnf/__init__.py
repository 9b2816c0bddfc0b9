import logging as _logging

from .errors import ConfigurationError, SmithFormError
from .matrix import RingMatrix
from .ring import IntegerRing, Local2_32, LocalRingZModPK, RingZModN
from .snf import (
    Algorithm,
    SmithFormConfig,
    SmithFormResult,
    smith_form,
    smith_form_in,
    solve,
)

__all__ = [
    "Algorithm",
    "ConfigurationError",
    "IntegerRing",
    "Local2_32",
    "LocalRingZModPK",
    "RingMatrix",
    "RingZModN",
    "SmithFormConfig",
    "SmithFormError",
    "SmithFormResult",
    "smith_form",
    "smith_form_in",
    "solve",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
