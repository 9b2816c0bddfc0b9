"""Smith form over a local ring Z/p^k.

In a local ring every non-unit is a power of p times a unit, so the pivot
search reduces to finding an entry of minimal p-adic valuation. Such a pivot
divides everything left in the matrix, hence plain Gaussian elimination with
exact quotients suffices and the invariant factors come out in order.
"""

import logging
from typing import List, Optional, Tuple

from .matrix import RingMatrix
from .ring import LocalRingZModPK
from .vector import VectorDomain

logger = logging.getLogger(__name__)


def smith_form_local(A: RingMatrix, ring: LocalRingZModPK) -> List[int]:
    """Compute the invariant factors of A over a local ring.

    ``A`` is destroyed: it is reduced in place to a matrix whose leading
    diagonal holds the pivots.

    Args:
        A: Matrix over ``ring``.
        ring: A ``LocalRingZModPK`` (or ``Local2_32``).

    Returns:
        ``min(nrows, ncols)`` factors ``p^e1, p^e2, ...`` with
        non-decreasing exponents, followed by zeros for the rank deficit.
    """

    vd = VectorDomain(ring)
    n = min(A.nrows, A.ncols)
    factors = []

    sub = A
    while sub.nrows and sub.ncols:
        pos = _min_valuation_entry(sub, ring)
        if pos is None:
            break
        i, j = pos
        a = sub.data
        if i:
            a[[0, i], :] = a[[i, 0], :]
        if j:
            a[:, [0, j]] = a[:, [j, 0]]

        pivot = a[0, 0]
        for r in range(1, sub.nrows):
            if not ring.is_zero(a[r, 0]):
                q = ring.neg(ring.div(a[r, 0], pivot))
                vd.axpyin(a[r, :], q, a[0, :])
        # Column 0 is zero below the pivot: clearing row 0 touches nothing else.
        a[0, 1:] = ring.zero

        factors.append(ring.normal(pivot))
        sub = sub.view(1, 1, sub.nrows - 1, sub.ncols - 1)

    logger.debug("local elimination mod %d: rank %d of %d", ring.N, len(factors), n)
    factors.extend([ring.zero] * (n - len(factors)))
    return factors


def _min_valuation_entry(
    A: RingMatrix, ring: LocalRingZModPK
) -> Optional[Tuple[int, int]]:
    """Position of an entry of least valuation, or None if A is zero."""
    best = None
    best_v = ring.k
    for (i, j), x in _nonzero_entries(A):
        if ring.is_unit(x):
            return i, j
        v = ring.valuation(x)
        if v < best_v:
            best, best_v = (i, j), v
    return best


def _nonzero_entries(A: RingMatrix):
    for i, row in enumerate(A.rows()):
        for j, x in enumerate(row):
            if x != 0:
                yield (i, j), x
