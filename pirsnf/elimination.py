"""Iliopoulos elimination of the first row or column of a matrix.

``elimination_row`` brings the first row of a matrix to the form
``(g, 0, ..., 0)`` using column operations only; ``elimination_col`` does the
same for the first column using row operations. Every operation applied is
unimodular, so the Smith form of the matrix is unchanged, and no element is
ever divided by a non-unit unless the quotient is known to exist.

The elimination follows

    C. Iliopoulos, "Worst-case complexity bounds on algorithms for computing
    the canonical structure of finite abelian groups and the Hermite and
    Smith normal forms of an integer matrix", SIAM J. Comput. 18 (1989).

Both routines work in place and return the matrix they were given, which may
be a view into a larger matrix.

Preconditions on the ring (``xgcd`` returning a generator of the ideal,
``div`` being exact on the quotients it is asked for) are not re-checked
here; the rings in ``pirsnf.ring`` raise ``ValueError`` from ``div`` when an
impossible quotient is requested.
"""

import numpy as np

from .matrix import RingMatrix
from .ring import PIR
from .vector import VectorDomain


def elimination_row(A: RingMatrix, ring: PIR) -> RingMatrix:
    """Make the first row of A equal to (g, 0, ..., 0) by column operations.

    Args:
        A: Matrix (or view) to reduce in place.
        ring: Ring the entries of ``A`` live in.

    Returns:
        ``A`` itself. If the first row is entirely zero there is no pivot and
        ``A`` is left unchanged.
    """

    if A.ncols <= 1:
        return A
    _eliminate_first_row(A.data, ring)
    return A


def elimination_col(A: RingMatrix, ring: PIR) -> RingMatrix:
    """Make the first column of A equal to (g, 0, ..., 0) by row operations.

    Row operations on ``A`` are column operations on its transpose, so this
    runs the row elimination on a transposed view of the same storage.
    """

    if A.nrows <= 1:
        return A
    _eliminate_first_row(A.data.T, ring)
    return A


def _eliminate_first_row(a: np.ndarray, ring: PIR) -> None:
    vd = VectorDomain(ring)
    ncols = a.shape[1]
    row0 = a[0, :]
    col0 = a[:, 0]

    if ring.is_unit(row0[0]):
        # Scale the pivot column to bring a[0, 0] to one.
        if not ring.is_one(row0[0]):
            vd.mulin(col0, ring.inv(row0[0]))
    else:
        if not ring.is_zero(row0[0]):
            # Replace (a00, a01) by (0, g) with the unimodular transform
            # [[-a01/g, s], [a00/g, t]] on columns 0 and 1.
            col1 = a[:, 1]
            g, s, t, y2, y1 = ring.dxgcd(row0[0], row0[1])
            y1 = ring.neg(y1)

            tmp1 = vd.mul(col0, y1)
            vd.axpyin(tmp1, y2, col1)
            tmp2 = vd.mul(col0, s)
            vd.axpyin(tmp2, t, col1)
            vd.copy(col0, tmp1)
            vd.copy(col1, tmp2)

            if not ring.is_zero(row0[0]):
                q = ring.neg(ring.div(row0[0], g))
                vd.axpyin(col0, q, col1)

        # a[0, 0] is zero now. Accumulate a generator of the ideal spanned
        # by the rest of the row; tmp_v holds the weights of each column.
        tmp_v = np.empty(ncols, dtype=object)
        tmp_v[...] = ring.zero
        tmp_v[0] = ring.one
        tmp_v[1] = ring.one
        g = row0[1]
        for j in range(2, ncols):
            g, s, tmp_v[j] = ring.xgcd(g, row0[j])
            if not ring.is_one(s):
                tmp_v[1:j] = ring.mul(tmp_v[1:j], s)

        # No pivot: the whole row is zero.
        if ring.is_zero(g):
            return

        # Column 0 += sum of weighted columns, which puts g at a[0, 0].
        for row in a:
            row[0] = vd.dot(row, tmp_v)

    # A pivot divides every entry of the first row: clear them.
    g = row0[0]
    for j in range(1, ncols):
        if not ring.is_zero(row0[j]):
            q = ring.neg(ring.div(row0[j], g))
            vd.axpyin(a[:, j], q, col0)
