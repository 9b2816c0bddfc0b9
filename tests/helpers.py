import math
import random

from sympy import Matrix, ZZ, prime
from sympy.matrices.normalforms import smith_normal_form as sympy_snf

from pirsnf.matrix import RingMatrix
from pirsnf.ring import PIR


def make_random_matrix(
    ring: PIR,
    nrows: int,
    ncols: int,
    bound: int,
) -> RingMatrix:
    """Random matrix with entries drawn from [0, bound)."""
    data = [
        [random.randint(0, bound - 1) for _ in range(ncols)]
        for _ in range(nrows)
    ]
    return RingMatrix.from_rows(ring, data)


def det_ring_matrix(M: RingMatrix):
    """
    Naive determinant for small square matrices, by cofactor expansion
    along the first row using the ring operations of M.
    """
    ring = M.ring
    data = M.data
    n = M.nrows
    assert n == M.ncols

    if n == 0:
        return ring.one
    if n == 1:
        return data[0, 0]

    det = ring.zero
    for j in range(n):
        minor = [
            [data[i, k] for k in range(n) if k != j]
            for i in range(1, n)
        ]
        sub_det = det_ring_matrix(RingMatrix(ring, minor))
        term = ring.mul(data[0, j], sub_det)
        if j % 2 == 0:
            det = ring.add(det, term)
        else:
            det = ring.sub(det, term)
    return det


def is_diagonal(M: RingMatrix) -> bool:
    return all(
        M.ring.is_zero(M.data[r, c])
        for r in range(M.nrows)
        for c in range(M.ncols)
        if r != c
    )


def is_divisibility_chain(values, ring: PIR) -> bool:
    """d_i | d_{i+1} for every consecutive pair."""
    return all(
        ring.is_divisor(values[i], values[i + 1])
        for i in range(len(values) - 1)
    )


def get_normalized_invariants(values, N: int) -> list[int]:
    """
    Normalizes invariant factors to ideal generators of Z/N:
    invariant = gcd(d_i, N), so a zero factor becomes N.
    """
    invariants = [math.gcd(int(d), N) for d in values]
    invariants.sort()
    return invariants


def chain_sorted(values) -> list[int]:
    """Non-negative integer invariants in chain order, zeros last."""
    return sorted((abs(int(d)) for d in values), key=lambda d: (d == 0, d))


def sympy_integer_invariants(rows: list[list[int]]) -> list[int]:
    """Integer invariant factors computed by SymPy over ZZ."""
    nrows = len(rows)
    ncols = len(rows[0]) if rows else 0
    S = sympy_snf(Matrix(rows), domain=ZZ)
    return chain_sorted(S[i, i] for i in range(min(nrows, ncols)))


def matrix_with_invariants(ring: PIR, diag, nrows: int, ncols: int) -> RingMatrix:
    """nrows x ncols matrix carrying ``diag`` on its leading diagonal."""
    rows = [[0] * ncols for _ in range(nrows)]
    for i, d in enumerate(diag):
        rows[i][i] = d
    return RingMatrix.from_rows(ring, rows)


def scramble(M: RingMatrix, ops: int | None = None) -> RingMatrix:
    """
    Hide the structure of M behind random unimodular operations, in place:
    each step adds a random column to another and a random row to another.
    The Smith form of M is unchanged.
    """
    ring = M.ring
    data = M.data
    if ops is None:
        ops = 2 * max(M.nrows, M.ncols)
    for _ in range(ops):
        if M.ncols > 1:
            i, j = random.sample(range(M.ncols), 2)
            data[:, i] = ring.add(data[:, i], data[:, j])
        if M.nrows > 1:
            i, j = random.sample(range(M.nrows), 2)
            data[i, :] = ring.add(data[i, :], data[j, :])
    return M


def fib_matrix(ring: PIR, n: int) -> RingMatrix:
    """
    Block diagonal matrix of tridiagonal {-1, 0, 1} blocks of order
    1, 2, 3, ...; the block of order i has Smith form diag(1, ..., 1, fib(i))
    with fib(1) = 1, fib(2) = 2. The last block may be truncated.
    Scrambled before returning.
    """
    rows = [[1 if i == j else 0 for j in range(n)] for i in range(n)]
    sign = 1
    block, end = 1, 0
    for i in range(n - 1):
        if i == end:
            rows[i][i + 1] = 0
            block += 1
            end += block
        else:
            rows[i][i + 1] = sign
            sign = -sign
        rows[i + 1][i] = -rows[i][i + 1]
    return scramble(RingMatrix.from_rows(ring, rows))


def random_rough_matrix(ring: PIR, n: int) -> RingMatrix:
    """
    Scrambled diagonal matrix whose invariant factors involve the primes
    103, 107, 109, ...: the j-th of them fills 2*j diagonal slots.
    """
    diag = []
    j = 1
    while len(diag) < n:
        diag.extend([prime(26 + j)] * (2 * j))
        j += 1
    M = RingMatrix.diagonal(ring, diag[:n])
    return scramble(M)
