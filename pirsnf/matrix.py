import operator
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from pirsnf.ring import PIR


def _to_object_array(data) -> np.ndarray:
    """Copy rows of integers into a 2D numpy object array of Python ints."""
    if isinstance(data, np.ndarray):
        if data.ndim != 2:
            raise ValueError("Matrix data must be two-dimensional")
        if data.size == 0:
            return np.empty(data.shape, dtype=object)
        data = data.tolist()
    rows = [list(row) for row in data]
    if not rows:
        return np.empty((0, 0), dtype=object)
    ncols = len(rows[0])
    for row in rows:
        if len(row) != ncols:
            raise ValueError("All rows must have the same length")
    arr = np.empty((len(rows), ncols), dtype=object)
    for i, row in enumerate(rows):
        # operator.index rejects floats and keeps arbitrary precision
        arr[i, :] = [operator.index(x) for x in row]
    return arr


@dataclass(eq=False)
class RingMatrix:
    """
    Dense matrix over a principal ideal ring.

    ``data`` is a numpy object array of canonical ring elements. A matrix
    obtained from ``view`` shares its storage with the matrix it was taken
    from: row and column operations on the view are operations on the
    parent.
    """

    ring: PIR
    data: np.ndarray

    def __post_init__(self):
        self.data = self.ring.init(_to_object_array(self.data))
        self._parent = None

    @classmethod
    def _wrap(cls, ring: PIR, array: np.ndarray, parent=None) -> "RingMatrix":
        # No copy, no reduction: array is already canonical.
        M = cls.__new__(cls)
        M.ring = ring
        M.data = array
        M._parent = parent
        return M

    @property
    def nrows(self) -> int:
        return self.data.shape[0]

    @property
    def ncols(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.nrows, self.ncols

    @property
    def is_view(self) -> bool:
        return self._parent is not None

    @classmethod
    def from_rows(cls, ring: PIR, rows: List[List[int]]) -> "RingMatrix":
        return cls(ring=ring, data=rows)

    @classmethod
    def identity(cls, ring: PIR, n: int) -> "RingMatrix":
        rows = [[1 if i == j else 0 for j in range(n)] for i in range(n)]
        return cls(ring, rows)

    @classmethod
    def diagonal(cls, ring: PIR, diag: List[int]) -> "RingMatrix":
        n = len(diag)
        rows = [[0]*n for _ in range(n)]
        for i, v in enumerate(diag):
            rows[i][i] = v
        return cls(ring, rows)

    def __getitem__(self, idx):
        return self.data[idx]

    def __setitem__(self, idx, value):
        self.data[idx] = self.ring.init(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RingMatrix):
            return NotImplemented
        return (
            self.ring is other.ring
            and self.shape == other.shape
            and bool(np.array_equal(self.data, other.data))
        )

    def row(self, i: int) -> np.ndarray:
        """Mutable view of row i."""
        return self.data[i, :]

    def col(self, j: int) -> np.ndarray:
        """Mutable view of column j."""
        return self.data[:, j]

    def rows(self) -> Iterator[np.ndarray]:
        for i in range(self.nrows):
            yield self.data[i, :]

    def cols(self) -> Iterator[np.ndarray]:
        for j in range(self.ncols):
            yield self.data[:, j]

    def view(self, row_start: int, col_start: int,
             nrows: int, ncols: int) -> "RingMatrix":
        """
        Window of nrows x ncols starting at (row_start, col_start).

        The returned matrix aliases this one's storage; nothing is copied.
        """
        if (row_start < 0 or col_start < 0 or nrows < 0 or ncols < 0
                or row_start + nrows > self.nrows
                or col_start + ncols > self.ncols):
            raise ValueError(
                f"View ({row_start}, {col_start}, {nrows}, {ncols}) "
                f"out of bounds for shape {self.shape}"
            )
        window = self.data[row_start:row_start + nrows,
                           col_start:col_start + ncols]
        return RingMatrix._wrap(self.ring, window, parent=self)

    def transposed_view(self) -> "RingMatrix":
        """Transpose sharing storage with this matrix."""
        return RingMatrix._wrap(self.ring, self.data.T, parent=self)

    def resize(self, nrows: int, ncols: int, fill=None) -> None:
        """
        Resize in place, keeping the overlapping entries and filling new
        ones with ``fill`` (the ring's zero by default).
        """
        if self.is_view:
            raise ValueError("Cannot resize a view")
        if nrows < 0 or ncols < 0:
            raise ValueError(f"Invalid shape ({nrows}, {ncols})")
        value = self.ring.zero if fill is None else self.ring.init(fill)
        new = np.full((nrows, ncols), value, dtype=object)
        r = min(nrows, self.nrows)
        c = min(ncols, self.ncols)
        new[:r, :c] = self.data[:r, :c]
        self.data = new

    def copy(self) -> "RingMatrix":
        return RingMatrix._wrap(self.ring, self.data.copy())

    def transpose(self) -> "RingMatrix":
        return RingMatrix._wrap(self.ring, self.data.T.copy())

    def submatrix(self, row_start: int, row_end: int,
                  col_start: int, col_end: int) -> "RingMatrix":
        """
        Return a copy of rows [row_start:row_end) and
        cols [col_start:col_end).
        """
        block = self.data[row_start:row_end, col_start:col_end].copy()
        return RingMatrix._wrap(self.ring, block)

    def __matmul__(self, other: "RingMatrix") -> "RingMatrix":
        if self.ring is not other.ring:
            raise ValueError("Cannot multiply matrices over different rings")
        if self.ncols != other.nrows:
            raise ValueError(f"Dimension mismatch: {self.ncols} != {other.nrows}")

        rA, cB = self.nrows, other.ncols
        C = np.empty((rA, cB), dtype=object)
        C[...] = 0
        A = self.data
        B = other.data
        for k in range(self.ncols):
            # Rank-one update, exact on Python ints.
            C += np.multiply.outer(A[:, k], B[k, :])
        return RingMatrix._wrap(self.ring, self.ring.init(C))

    def to_list(self) -> List[List[int]]:
        return [list(row) for row in self.data]

    def to_sympy(self):
        import sympy as sp
        return sp.Matrix(self.nrows, self.ncols, lambda i, j: self.data[i, j])

    def pprint(self):
        from sympy import pprint
        pprint(self.to_sympy())
