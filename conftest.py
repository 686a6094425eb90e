# conftest.py
import matplotlib
import numpy as np
import pytest

@pytest.fixture(autouse=True)
def mpl_test_backend():
    """Switch to a non-interactive backend for all tests."""
    matplotlib.use('Agg')


@pytest.fixture
def ctx2():
    """Isotropic 2x2x2 Gauss-Lobatto discretization (NP = 8)."""
    from pydgfem.core import Discretization
    return Discretization.create(2)


@pytest.fixture
def cube():
    """Single hexahedron [-1,1]^3, identical to the reference element."""
    from pydgfem.utils.meshgen import unit_cube
    return unit_cube(2.0)


@pytest.fixture
def distorted_mesh():
    """2x2x2 box mesh with the shared interior vertex pushed off-centre."""
    from pydgfem.core.mesh import HexMesh
    from pydgfem.utils.meshgen import structured_hex
    base = structured_hex(2.0, 2.0, 2.0, nx=2, ny=2, nz=2)
    verts = base.vertices.copy()
    centre = np.flatnonzero(np.all(np.isclose(verts, 1.0), axis=1))[0]
    verts[centre] += np.array([0.15, -0.1, 0.2])
    return HexMesh(verts, base.cells)
