import numpy as np
import pytest
from numpy.polynomial.legendre import Legendre

from pydgfem.integration.legendre import legendre


def test_degree_zero_and_one():
    assert legendre(0, 0.3) == (1.0, 0.0, 0.0)
    L0, L0_1, L0_2 = legendre(1, -0.7)
    assert np.isclose(L0, -0.7) and L0_1 == 1.0 and L0_2 == 0.0


@pytest.mark.parametrize("p", [2, 3, 7, 12, 20])
def test_matches_numpy_legendre(p):
    x = np.linspace(-1.0, 1.0, 17)
    P = Legendre.basis(p)
    L0, L0_1, L0_2 = legendre(p, x)
    assert np.allclose(L0, P(x), atol=1e-12)
    assert np.allclose(L0_1, P.deriv(1)(x), atol=1e-9)
    assert np.allclose(L0_2, P.deriv(2)(x), atol=1e-7)


def test_end_point_values():
    for p in range(0, 15):
        assert np.isclose(legendre(p, 1.0)[0], 1.0)
        assert np.isclose(legendre(p, -1.0)[0], (-1.0) ** p)
        # P_p'(1) = p(p+1)/2
        assert np.isclose(legendre(p, 1.0)[1], p * (p + 1) / 2)


def test_scalar_returns_floats():
    out = legendre(4, 0.25)
    assert all(isinstance(v, float) for v in out)
