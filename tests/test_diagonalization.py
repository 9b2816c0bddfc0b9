import random

import numpy as np
import pytest

from pirsnf.diagonalization import check, diagonalization_in
from pirsnf.matrix import RingMatrix
from pirsnf.ring import IntegerRing, RingZModN
from tests.helpers import det_ring_matrix, is_diagonal, make_random_matrix


def test_check_divisibility_of_first_row():
    ring = RingZModN(12)
    assert check(RingMatrix.from_rows(ring, [[2, 4, 10]]), ring)
    assert not check(RingMatrix.from_rows(ring, [[4, 6]]), ring)
    # A zero pivot means there is nothing left to do at this level.
    assert check(RingMatrix.from_rows(ring, [[0, 0, 0]]), ring)
    assert check(RingMatrix.from_rows(ring, [[7]]), ring)


def test_zero_matrix_terminates_immediately():
    ring = RingZModN(12)
    A = RingMatrix.from_rows(ring, [[0] * 3 for _ in range(3)])
    diagonalization_in(A, ring)
    assert A.to_list() == [[0] * 3 for _ in range(3)]


@pytest.mark.parametrize("shape", [(0, 0), (0, 4), (3, 0)])
def test_empty_dimensions(shape):
    ring = RingZModN(5)
    A = RingMatrix(ring, np.zeros(shape, dtype=np.int64))
    diagonalization_in(A, ring)
    assert A.shape == shape


def test_one_by_one_is_already_diagonal():
    ring = RingZModN(21)
    A = RingMatrix.from_rows(ring, [[7]])
    diagonalization_in(A, ring)
    assert A.to_list() == [[7]]


def test_integer_matrix_needing_several_rounds():
    Z = IntegerRing()
    A = RingMatrix.from_rows(Z, [[2, 0], [2, 1]])
    diagonalization_in(A, Z)
    assert is_diagonal(A)
    assert abs(A[0, 0] * A[1, 1]) == 2


@pytest.mark.parametrize("N", [12, 8, 9, 30, 64, 97])
@pytest.mark.parametrize("shape", [(4, 4), (3, 5), (6, 2)])
def test_random_matrices_become_diagonal(N, shape):
    random.seed(N * 31 + shape[0])
    ring = RingZModN(N)
    A = make_random_matrix(ring, *shape, N)
    det_before = det_ring_matrix(A) if shape[0] == shape[1] else None

    diagonalization_in(A, ring)

    assert is_diagonal(A)
    if det_before is not None:
        prod = 1
        for i in range(shape[0]):
            prod = ring.mul(prod, A[i, i])
        assert ring.normal(prod) == ring.normal(det_before)


def test_diagonalization_of_view_leaves_border_alone():
    ring = RingZModN(10)
    A = RingMatrix.from_rows(ring, [
        [1, 2, 3],
        [4, 6, 8],
        [5, 4, 2],
    ])
    diagonalization_in(A.view(1, 1, 2, 2), ring)
    assert list(A.row(0)) == [1, 2, 3]
    assert list(A.col(0)) == [1, 4, 5]
    assert A[1, 2] == 0 and A[2, 1] == 0
