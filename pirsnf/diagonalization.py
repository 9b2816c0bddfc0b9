"""Diagonalization of a matrix over a PIR by repeated row/column elimination."""

import logging

from .elimination import elimination_col, elimination_row
from .matrix import RingMatrix
from .ring import PIR
from .vector import VectorDomain

logger = logging.getLogger(__name__)


def check(A: RingMatrix, ring: PIR) -> bool:
    """True iff A[0, 0] is zero or divides every other entry of the first row."""
    row0 = A.row(0)
    pivot = row0[0]
    if ring.is_zero(pivot):
        return True
    return all(ring.is_divisor(pivot, x) for x in row0[1:])


def diagonalization_in(A: RingMatrix, ring: PIR) -> RingMatrix:
    """
    Diagonalize A in place.

    At each level the first row and column are eliminated alternately until
    the pivot divides the rest of its row, the row is cleared, and the
    same is done on the trailing (m-1) x (n-1) view. Eliminating the column
    can refill the row over a ring that is not a field, hence the loop; each
    extra round strictly enlarges the ideal generated by the pivot, so it
    terminates.

    Returns A.
    """
    sub = A
    level = 0
    while sub.nrows and sub.ncols:
        rounds = 0
        while True:
            elimination_row(sub, ring)
            elimination_col(sub, ring)
            rounds += 1
            if check(sub, ring):
                break
        _clear_first_row(sub, ring)
        if rounds > 1:
            logger.debug("level %d converged after %d rounds", level, rounds)
        sub = sub.view(1, 1, sub.nrows - 1, sub.ncols - 1)
        level += 1
    return A


def _clear_first_row(A: RingMatrix, ring: PIR) -> None:
    # Column 0 is zero below the pivot, so subtracting multiples of it only
    # changes row 0.
    pivot = A[0, 0]
    if ring.is_zero(pivot):
        return
    vd = VectorDomain(ring)
    row0 = A.row(0)
    for j in range(1, A.ncols):
        if not ring.is_zero(row0[j]):
            q = ring.neg(ring.div(row0[j], pivot))
            vd.axpyin(A.col(j), q, A.col(0))
