"""pydgfem: basis, quadrature and geometry core of a tensor-product DG solver."""
from pydgfem.core import Discretization, HexMesh, expand, init_basis, init_poly
from pydgfem.errors import ConfigurationError, DGError, GeometryError
from pydgfem.fem.transform import GeometricFactors, init_geom
from pydgfem.utils.config import DGSettings

__version__ = "0.1.0"

__all__ = ["Discretization", "HexMesh", "expand", "init_poly", "init_basis", "init_geom",
           "GeometricFactors", "DGSettings", "DGError", "ConfigurationError", "GeometryError"]
