"""Integer Smith form without a caller supplied modulus.

The product ``d_1 * ... * d_r`` of the non-zero invariant factors of an
integer matrix of rank ``r`` divides every ``r x r`` minor, so each ``d_i``
divides any non-zero such minor ``D``. For each prime power ``p^e`` exactly
dividing ``D`` the local Smith form modulo ``p^(e+1)`` therefore yields the
exact p-part of every ``d_i``; the p-parts over the pairwise coprime moduli
are recombined (Chinese remaindering of prime-power parts is their product)
into the integer invariant factors.
"""

import logging
from typing import List, Tuple

import numpy as np
from sympy import factorint

from .local import smith_form_local
from .matrix import RingMatrix
from .ring import IntegerRing, LocalRingZModPK

logger = logging.getLogger(__name__)


def integer_rank_and_minor(A: RingMatrix) -> Tuple[int, int]:
    """Rank of an integer matrix and the absolute value of a non-zero
    maximal minor, by fraction-free (Bareiss) elimination.

    After the k-th pivot step every entry of the trailing block is a
    (k+1) x (k+1) minor of the input, so all divisions by the previous pivot
    are exact and the last pivot is the determinant of the rank x rank
    submatrix on the pivot rows and columns.

    Returns:
        ``(rank, |minor|)``; the minor is 0 when the rank is 0.
    """

    a = A.data.copy()
    m, n = a.shape
    rank = 0
    prev = 1

    for c in range(n):
        if rank == m:
            break
        nonzero = [r for r in range(rank, m) if a[r, c] != 0]
        if not nonzero:
            continue
        r0 = nonzero[0]
        if r0 != rank:
            a[[rank, r0], :] = a[[r0, rank], :]

        p = a[rank, c]
        below = a[rank + 1:, c].copy()
        a[rank + 1:, c + 1:] = (
            p * a[rank + 1:, c + 1:] - np.multiply.outer(below, a[rank, c + 1:])
        ) // prev
        a[rank + 1:, c] = 0
        prev = p
        rank += 1

    return rank, abs(prev) if rank else 0


def smith_form_adaptive(A: RingMatrix) -> List[int]:
    """Exact integer invariant factors of A, padded with zeros.

    Args:
        A: Matrix over ``IntegerRing``. It is not modified.

    Returns:
        ``min(nrows, ncols)`` non-negative integers ``d_1 | d_2 | ...``,
        zeros last.
    """

    if not isinstance(A.ring, IntegerRing):
        raise ValueError(f"Adaptive Smith form needs an integer matrix, got {A.ring!r}")

    n = min(A.nrows, A.ncols)
    rank, minor = integer_rank_and_minor(A)
    logger.debug("adaptive: rank %d, maximal minor %d", rank, minor)
    if rank == 0:
        return [0] * n

    factors = [1] * rank
    for p, e in sorted(factorint(minor).items()):
        ring = LocalRingZModPK(int(p), int(e) + 1)
        logger.debug("adaptive: local elimination mod %d^%d", p, e + 1)
        local = smith_form_local(RingMatrix(ring, A.data), ring)
        for i in range(rank):
            factors[i] *= local[i]

    return factors + [0] * (n - rank)
