"""Smith normal form front-end: strategy selection and result reporting.

Four strategies are available, chosen by name:

* ``"ilio"``: Iliopoulos elimination over Z/m for an arbitrary modulus m.
  When m is a proper multiple of the integer determinant this is the
  integer Smith form; otherwise it is the Smith form modulo m.
* ``"local"``: elimination over Z/p^k; the modulus must be a prime power.
* ``"2local"``: elimination over Z/2^32 with word-width arithmetic.
* ``"adaptive"``: exact integer Smith form, no modulus needed.

Everything about a request is validated before the matrix is touched; a
rejected request raises ``ConfigurationError``.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Integral
from typing import List, Optional, Tuple, Union

import numpy as np
from sympy import isprime, perfect_power

from .adaptive import smith_form_adaptive
from .diagonal import diagonal_entries, distinct, normalize_diagonal_in
from .diagonalization import diagonalization_in
from .errors import ConfigurationError
from .local import smith_form_local
from .matrix import RingMatrix
from .ring import PIR, IntegerRing, Local2_32, LocalRingZModPK, RingZModN

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    ILIO = "ilio"
    LOCAL = "local"
    LOCAL2_32 = "2local"
    ADAPTIVE = "adaptive"


@dataclass(frozen=True)
class SmithFormConfig:
    """Parameters of a Smith form request.

    Attributes:
        algorithm: Strategy name or ``Algorithm`` member.
        modulus: Required by ``ilio`` and ``local``; must be omitted (or be
            exactly 2^32) for ``2local`` and omitted for ``adaptive``.
        max_dimension: Reject matrices with more rows or columns than
            this. ``None`` means no limit.
    """

    algorithm: Union[Algorithm, str] = Algorithm.ILIO
    modulus: Optional[int] = None
    max_dimension: Optional[int] = None

    def validate(self) -> "SmithFormConfig":
        """Return a checked copy with ``algorithm`` resolved to an
        ``Algorithm`` member.

        Raises:
            ConfigurationError: If the combination cannot be run.
        """

        try:
            algorithm = Algorithm(self.algorithm)
        except ValueError:
            names = ", ".join(a.value for a in Algorithm)
            raise ConfigurationError(
                f"Unknown algorithm {self.algorithm!r}; expected one of {names}"
            ) from None

        m = self.modulus
        if m is not None and (isinstance(m, bool) or not isinstance(m, Integral)):
            raise ConfigurationError(f"Modulus must be an integer, got {m!r}")

        if self.max_dimension is not None and self.max_dimension < 0:
            raise ConfigurationError(
                f"max_dimension must be non-negative, got {self.max_dimension}"
            )

        if algorithm in (Algorithm.ILIO, Algorithm.LOCAL):
            if m is None:
                raise ConfigurationError(f"Algorithm {algorithm.value!r} needs a modulus")
            if m < 2:
                raise ConfigurationError(f"Modulus must be at least 2, got {m}")
            if algorithm is Algorithm.LOCAL:
                _prime_power(int(m))
        elif algorithm is Algorithm.LOCAL2_32:
            if m is not None and m != 1 << Local2_32.BITS:
                raise ConfigurationError(
                    f"Algorithm '2local' works modulo 2^{Local2_32.BITS} only, got modulus {m}"
                )
        elif m is not None:
            raise ConfigurationError("Algorithm 'adaptive' does not take a modulus")

        return replace(self, algorithm=algorithm)


def _prime_power(m: int) -> Tuple[int, int]:
    if isprime(m):
        return m, 1
    root = perfect_power(m)
    if root and isprime(root[0]):
        return int(root[0]), int(root[1])
    raise ConfigurationError(f"Algorithm 'local' needs a prime power modulus, got {m}")


def resolve_ring(config: SmithFormConfig) -> PIR:
    """Ring the strategy of a validated config computes over."""
    algorithm = config.algorithm
    if algorithm is Algorithm.ILIO:
        return RingZModN(config.modulus)
    if algorithm is Algorithm.LOCAL:
        p, k = _prime_power(int(config.modulus))
        return LocalRingZModPK(p, k)
    if algorithm is Algorithm.LOCAL2_32:
        return Local2_32()
    return IntegerRing()


@dataclass
class SmithFormResult:
    """Invariant factors of a matrix.

    ``factors`` has one entry per diagonal position, ``min(nrows, ncols)``
    in all, canonical and in divisibility order with zeros last.
    """

    factors: List[int]
    algorithm: Algorithm
    modulus: Optional[int] = None

    @property
    def pairs(self) -> List[Tuple[int, int]]:
        """(value, multiplicity) pairs of ``factors``."""
        return distinct(self.factors)

    @property
    def rank(self) -> int:
        return sum(1 for d in self.factors if d != 0)


def smith_form_in(A: RingMatrix, ring: Optional[PIR] = None) -> RingMatrix:
    """
    Smith form of A, in place, over any PIR.

    A is diagonalized and its diagonal normalized to d_1 | d_2 | ...;
    the returned matrix is A itself. Copy A first to keep the original.
    """
    ring = A.ring if ring is None else ring
    diagonalization_in(A, ring)
    normalize_diagonal_in(A, ring)
    return A


def solve(A: RingMatrix) -> list:
    """Invariant factors of A, leaving A untouched."""
    B = A.copy()
    smith_form_in(B)
    return diagonal_entries(B)


def smith_form(
    matrix,
    algorithm: Union[Algorithm, str] = Algorithm.ILIO,
    modulus: Optional[int] = None,
    *,
    max_dimension: Optional[int] = None,
    config: Optional[SmithFormConfig] = None,
) -> SmithFormResult:
    """Invariant factors of an integer matrix with the chosen strategy.

    Args:
        matrix: Rows of integers (a list of lists or a 2D integer array).
        algorithm: ``"ilio"``, ``"local"``, ``"2local"`` or ``"adaptive"``.
        modulus: Modulus for ``ilio`` and ``local``.
        max_dimension: Optional limit on the number of rows and columns.
        config: A ``SmithFormConfig``; overrides the three arguments above.

    Returns:
        A ``SmithFormResult``.

    Raises:
        ConfigurationError: For an invalid request or malformed matrix.
    """

    if config is None:
        config = SmithFormConfig(algorithm, modulus, max_dimension)
    config = config.validate()
    rows = _read_matrix(matrix, config)
    ring = resolve_ring(config)
    nrows = len(rows)
    ncols = len(rows[0]) if rows else 0
    logger.info(
        "Smith form of %dx%d matrix: algorithm=%s ring=%r",
        nrows, ncols, config.algorithm.value, ring,
    )

    A = RingMatrix(ring, rows)
    if config.algorithm is Algorithm.ADAPTIVE:
        factors = smith_form_adaptive(A)
    elif config.algorithm in (Algorithm.LOCAL, Algorithm.LOCAL2_32):
        factors = smith_form_local(A, ring)
    else:
        factors = diagonal_entries(smith_form_in(A, ring))

    result = SmithFormResult(factors, config.algorithm, getattr(ring, "N", None))
    logger.debug("invariant factors: %s", result.pairs)
    return result


def _read_matrix(matrix, config: SmithFormConfig) -> List[List[int]]:
    """Validate a user matrix and return it as rows of Python ints."""
    if isinstance(matrix, RingMatrix):
        matrix = matrix.data
    if isinstance(matrix, np.ndarray):
        if matrix.ndim != 2:
            raise ConfigurationError(f"Matrix must be two-dimensional, got {matrix.ndim}D")
        matrix = matrix.tolist()

    try:
        rows = [list(row) for row in matrix]
    except TypeError:
        raise ConfigurationError("Matrix must be a sequence of rows") from None

    ncols = len(rows[0]) if rows else 0
    for i, row in enumerate(rows):
        if len(row) != ncols:
            raise ConfigurationError(
                f"Row {i} has {len(row)} entries, expected {ncols}"
            )
        for j, x in enumerate(row):
            if isinstance(x, bool) or not isinstance(x, Integral):
                raise ConfigurationError(f"Entry ({i}, {j}) is not an integer: {x!r}")

    limit = config.max_dimension
    if limit is not None and (len(rows) > limit or ncols > limit):
        raise ConfigurationError(
            f"Matrix {len(rows)}x{ncols} exceeds max_dimension={limit}"
        )
    return [[int(x) for x in row] for row in rows]
