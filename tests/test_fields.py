import numpy as np
import pytest

from pydgfem.core import Discretization, allocate, expand, from_low_order
from pydgfem.core.fields import element_block


def test_single_element_value_fills_all_nodes(ctx2):
    field = allocate(ctx2, 1)
    field[0] = 3.25
    out = expand(field, ctx2)
    assert out is field
    assert np.array_equal(field, np.full(8, 3.25))


def test_matches_repeat_for_tensor_values(ctx2):
    rng = np.random.default_rng(7)
    values = rng.normal(size=(5, 3, 3))
    field = from_low_order(values, ctx2)
    assert field.shape == (40, 3, 3)
    assert np.array_equal(field, np.repeat(values, 8, axis=0))
    assert np.array_equal(element_block(field, ctx2, 3), np.broadcast_to(values[3], (8, 3, 3)))


def test_vector_values_on_faces():
    ctx = Discretization.create(3, 2, 4)
    values = np.arange(12.0).reshape(4, 3)
    field = from_low_order(values, ctx, entity="face")
    assert field.shape == (4 * 12, 3)
    for f in range(4):
        assert np.array_equal(element_block(field, ctx, f, "face"), np.tile(values[f], (12, 1)))


def test_integer_fields(ctx2):
    field = from_low_order(np.array([4, 9, -1]), ctx2)
    assert field.dtype.kind == "i"
    assert field.tolist() == [4] * 8 + [9] * 8 + [-1] * 8


def test_single_node_is_a_no_op():
    ctx = Discretization.create(1)
    field = np.array([1.0, 2.0, 3.0])
    assert expand(field, ctx) is field
    assert field.tolist() == [1.0, 2.0, 3.0]


def test_re_expansion(ctx2):
    once = from_low_order([2.0], ctx2)
    twice = expand(once.copy(), ctx2)
    assert np.array_equal(once, twice)

    values = np.array([1.0, -2.0, 5.0])
    field = from_low_order(values, ctx2)
    first = field.copy()
    field[:3] = values
    assert np.array_equal(expand(field, ctx2), first)


def test_rejects_unsuitable_arrays(ctx2):
    with pytest.raises(ValueError):
        expand(np.zeros(32)[::2], ctx2)
    ro = np.zeros(16)
    ro.setflags(write=False)
    with pytest.raises(ValueError):
        expand(ro, ctx2)
    with pytest.raises(ValueError):
        expand(np.zeros(10), ctx2)
    with pytest.raises(KeyError):
        expand(np.zeros(16), ctx2, entity="edge")


def test_empty_storage(ctx2):
    field = from_low_order(np.zeros(0), ctx2)
    assert field.shape == (0,)
    empty = allocate(ctx2, 0, (3,), entity="face")
    assert expand(empty, ctx2, entity="face") is empty
    assert empty.shape == (0, 3)
