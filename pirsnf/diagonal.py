"""Invariant factors from a diagonalized matrix."""

from itertools import groupby
from typing import List, Sequence, Tuple

from pirsnf.matrix import RingMatrix
from pirsnf.ring import PIR


def normalize_diagonal_in(A: RingMatrix, ring: PIR) -> RingMatrix:
    """Turn the diagonal of A into a divisibility chain, in place.

    For each position ``i`` the later diagonal entries are folded into
    ``d_i``: ``d_i`` becomes ``g = gcd(d_i, d_j)`` and ``d_j`` becomes
    ``(d_j / g) * d_i``, which keeps ``d_i * d_j`` unchanged up to a unit.
    A zero ``d_i`` trades places with the first non-zero ``d_j`` so zeros
    end up last. Each ``d_i`` is finally replaced by its canonical
    associate.

    Only the diagonal is read or written; off-diagonal entries are assumed
    to be zero already (see ``diagonalization_in``).

    Args:
        A: Diagonal matrix over ``ring``.
        ring: Ring providing ``gcd``, ``div`` and ``normal``.

    Returns:
        ``A`` itself, with ``d_0 | d_1 | ... | d_{k-1}`` on its diagonal.
    """

    n = min(A.nrows, A.ncols)
    d = A.data

    for i in range(n):
        for j in range(i + 1, n):
            if ring.is_unit(d[i, i]):
                break
            elif ring.is_zero(d[j, j]):
                continue
            elif ring.is_zero(d[i, i]):
                d[i, i], d[j, j] = d[j, j], d[i, i]
            else:
                g = ring.gcd(d[j, j], d[i, i])
                d[j, j] = ring.mul(ring.div(d[j, j], g), d[i, i])
                d[i, i] = g
        d[i, i] = ring.normal(d[i, i])

    return A


def diagonal_entries(A: RingMatrix) -> list:
    """Read the min(nrows, ncols) diagonal entries of A."""
    return [A.data[i, i] for i in range(min(A.nrows, A.ncols))]


def distinct(values: Sequence) -> List[Tuple[object, int]]:
    """Run-length encode values as (value, multiplicity) pairs, in order.

    >>> distinct([1, 1, 2, 12, 0, 0])
    [(1, 2), (2, 1), (12, 1), (0, 2)]
    """
    return [(value, sum(1 for _ in run)) for value, run in groupby(values)]
