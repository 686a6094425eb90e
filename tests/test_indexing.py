import numpy as np
import pytest

from pydgfem.core.indexing import (
    face_nodes, face_shape, for_each_lgl, for_each_lgl_xy, for_each_lgl_x,
    index3, index4, unflatten3, unflatten4,
)

SHAPE = (2, 3, 4)


def test_index3_is_a_bijection():
    seen = [index3(i, j, k, SHAPE) for i, j, k in for_each_lgl(SHAPE)]
    assert seen == list(range(24))
    for n in range(24):
        assert index3(*unflatten3(n, SHAPE), SHAPE) == n


def test_k_runs_fastest():
    assert index3(0, 0, 1, SHAPE) == 1
    assert index3(0, 1, 0, SHAPE) == 4
    assert index3(1, 0, 0, SHAPE) == 12


def test_index4_components_are_blocks():
    assert index4(0, 1, 2, 3, SHAPE) == 23
    assert index4(1, 0, 0, 0, SHAPE) == 24
    assert index4(2, 1, 0, 2, SHAPE, n_comp=3) == 2 * 24 + 14
    assert unflatten4(62, SHAPE, n_comp=3) == (2, 1, 0, 2)
    flat = [index4(c, i, j, k, SHAPE) for c in range(3) for i, j, k in for_each_lgl(SHAPE)]
    assert flat == list(range(72))


def test_array_arguments():
    i, j, k = np.array([0, 1]), np.array([2, 0]), np.array([3, 1])
    n = index3(i, j, k, SHAPE)
    assert n.tolist() == [11, 13]
    ii, jj, kk = unflatten3(n, SHAPE)
    assert ii.tolist() == [0, 1] and jj.tolist() == [2, 0] and kk.tolist() == [3, 1]


@pytest.mark.parametrize("args", [(2, 0, 0), (0, 3, 0), (0, 0, 4), (-1, 0, 0)])
def test_out_of_range(args):
    with pytest.raises(IndexError):
        index3(*args, SHAPE)


def test_out_of_range_component_and_flat():
    with pytest.raises(IndexError):
        index4(3, 0, 0, 0, SHAPE, n_comp=3)
    with pytest.raises(IndexError):
        unflatten3(24, SHAPE)
    with pytest.raises(IndexError):
        unflatten4(72, SHAPE, n_comp=3)


def test_partial_loops():
    assert list(for_each_lgl_xy(SHAPE)) == [(i, j) for i in range(2) for j in range(3)]
    assert list(for_each_lgl_x(SHAPE)) == [0, 1]


def test_face_nodes():
    # xi = -1 face: i == 0
    assert face_nodes(SHAPE, 0).tolist() == list(range(12))
    # zeta = +1 face: k == 3
    assert face_nodes(SHAPE, 5).tolist() == [index3(i, j, 3, SHAPE) for i in range(2) for j in range(3)]
    assert face_shape(SHAPE, 2) == (2, 4)
    for lf in range(6):
        assert face_nodes(SHAPE, lf).size == np.prod(face_shape(SHAPE, lf))
