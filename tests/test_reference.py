import numpy as np
import pytest

from pydgfem.core.indexing import index3
from pydgfem.fem.reference import get_reference


@pytest.fixture
def ref():
    return get_reference(2, 3, 4)


def test_anisotropic_shapes(ref):
    assert ref.shape == (2, 3, 4)
    assert ref.np == 24
    for d, n in enumerate(ref.shape):
        assert ref.psi[d].shape == (n, n)
        assert ref.dpsi[d].shape == (n, n)
        assert ref.xgl[d].size == n and ref.wgl[d].size == n


def test_points_follow_index3(ref):
    pts = ref.points()
    for i, j, k in [(0, 0, 0), (1, 2, 3), (0, 1, 2), (1, 0, 3)]:
        n = index3(i, j, k, ref.shape)
        assert np.allclose(pts[n], [ref.xgl[0][i], ref.xgl[1][j], ref.xgl[2][k]])
    assert np.isclose(ref.weights().sum(), 8.0)


def test_gradient_is_product_rule(ref):
    ii, jj, kk, i, j, k = 1, 2, 0, 0, 1, 3
    g = ref.gradient(ii, jj, kk, i, j, k)
    psi, dpsi = ref.psi, ref.dpsi
    assert np.isclose(g[0], dpsi[0][ii, i] * psi[1][jj, j] * psi[2][kk, k])
    assert np.isclose(g[1], psi[0][ii, i] * dpsi[1][jj, j] * psi[2][kk, k])
    assert np.isclose(g[2], psi[0][ii, i] * psi[1][jj, j] * dpsi[2][kk, k])
    G = ref.gradient_table()
    assert np.allclose(G[index3(ii, jj, kk, ref.shape), index3(i, j, k, ref.shape)], g)


def test_gradient_table_of_constant(ref):
    G = ref.gradient_table()
    assert G.shape == (24, 24, 3)
    assert np.allclose(G.sum(axis=0), 0.0, atol=1e-12)


def test_reference_gradient_exact_for_tensor_polynomials(ref):
    pts = ref.points()
    x, y, z = pts.T
    u = x * y ** 2 * z ** 3 + 2 * y
    g = ref.reference_gradient(u)
    exact = np.column_stack([y ** 2 * z ** 3, 2 * x * y * z ** 3 + 2, 3 * x * y ** 2 * z ** 2])
    assert g.shape == (24, 3)
    assert np.allclose(g, exact, atol=1e-11)


def test_reference_gradient_batched(ref):
    x, y, z = ref.points().T
    u = np.stack([x, y, z])            # three fields at once
    g = ref.reference_gradient(u)
    assert g.shape == (3, 24, 3)
    assert np.allclose(g[0], [1, 0, 0]) and np.allclose(g[1], [0, 1, 0]) and np.allclose(g[2], [0, 0, 1])


def test_interpolate_off_nodes(ref):
    x, y, z = ref.points().T
    u = 1 + x - y * z ** 2
    p = np.array([[0.3, -0.2, 0.5], [-0.9, 0.1, 0.0]])
    assert np.allclose(ref.interpolate(u, p), 1 + p[:, 0] - p[:, 1] * p[:, 2] ** 2)


def test_factory_is_cached():
    assert get_reference(3, 3, 3) is get_reference(3, 3, 3)
    assert get_reference(3, 3, 3, "gauss") is not get_reference(3, 3, 3)


def test_annotations_resolve_to_numpy():
    import typing
    from pydgfem.fem.reference import TensorBasis
    hints = typing.get_type_hints(TensorBasis.reference_gradient)
    assert hints["return"] is np.ndarray
    assert get_reference(2, 2, 2).np == 8
