import numpy as np
import pytest

from pydgfem.core.context import Discretization, init_basis, init_poly
from pydgfem.errors import ConfigurationError
from pydgfem.utils.config import DGSettings


def test_isotropic_defaults(ctx2):
    assert ctx2.shape == (2, 2, 2)
    assert ctx2.np == 8 and ctx2.npf == 4
    assert ctx2.npmat
    assert ctx2.kind == "lobatto"
    assert np.allclose(ctx2.xgl[0], [-1.0, 1.0])


def test_anisotropic_face_block():
    ctx = Discretization.create(3, 2, 4)
    assert ctx.np == 24
    assert ctx.npf == 12
    assert ctx.block_size("cell") == 24 and ctx.block_size("face") == 12
    with pytest.raises(KeyError):
        ctx.block_size("edge")


def test_single_node():
    ctx = Discretization.create(1)
    assert ctx.np == 1 and ctx.npf == 1
    assert not ctx.npmat


def test_init_poly_and_basis_agree():
    settings = DGSettings(npx=4, npy=3, npz=2, quadrature="gauss")
    xgl, wgl = init_poly(settings)
    ref = init_basis(settings)
    for d in range(3):
        assert np.array_equal(xgl[d], ref.xgl[d])
        assert np.isclose(wgl[d].sum(), 2.0)


def test_context_index_helpers():
    ctx = Discretization.create(2, 3, 4)
    assert ctx.index3(1, 2, 3) == 23
    assert ctx.unflatten4(ctx.index4(1, 1, 0, 2)) == (1, 1, 0, 2)


def test_contexts_are_independent():
    a = Discretization.create(2)
    b = Discretization.create(3, quadrature="gauss")
    assert a.np == 8 and b.np == 27
    assert a.reference is not b.reference


@pytest.mark.parametrize("kw", [dict(npx=0), dict(npy=-2), dict(npz=1.5),
                                dict(quadrature="radau"), dict(newton_tol=0.0),
                                dict(newton_maxiter=0)])
def test_settings_validation(kw):
    with pytest.raises(ConfigurationError):
        DGSettings(**kw)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Discretization.create(0)


def test_from_env(monkeypatch):
    monkeypatch.setenv("PYDGFEM_NPX", "3")
    monkeypatch.setenv("PYDGFEM_NPZ", "1")
    monkeypatch.setenv("PYDGFEM_QUADRATURE", " Gauss ")
    s = DGSettings.from_env()
    assert s.order == (3, 2, 1)
    assert s.quadrature == "gauss"
    assert s.with_order(4, 4, 4).order == (4, 4, 4)


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("PYDGFEM_NPY", "two")
    with pytest.raises(ConfigurationError):
        DGSettings.from_env()
