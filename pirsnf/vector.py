"""Element-wise vector arithmetic over a ring.

Vectors are one-dimensional numpy ``object`` arrays, usually row or column
views into a ``RingMatrix``; the in-place operations write through such views.
"""

import numpy as np

from .ring import PIR


class VectorDomain:
    def __init__(self, ring: PIR):
        self.ring = ring

    def mul(self, v: np.ndarray, a) -> np.ndarray:
        """Return a new vector a*v."""
        return self.ring.mul(v, a)

    def mulin(self, v: np.ndarray, a) -> None:
        """v <- a*v."""
        v[...] = self.ring.mul(v, a)

    def axpyin(self, y: np.ndarray, a, x: np.ndarray) -> None:
        """y <- y + a*x."""
        y[...] = self.ring.add(y, self.ring.mul(a, x))

    def copy(self, dst: np.ndarray, src: np.ndarray) -> None:
        dst[...] = src

    def dot(self, u: np.ndarray, v: np.ndarray):
        if len(u) != len(v):
            raise ValueError(f"Dimension mismatch: {len(u)} != {len(v)}")
        return self.ring.init(sum(x * y for x, y in zip(u, v)))
