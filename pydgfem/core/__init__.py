from .context import Discretization, init_poly, init_basis
from .mesh import HexMesh
from .topology import Element, Face
from .fields import expand, allocate, from_low_order
__all__ = ['Discretization', 'init_poly', 'init_basis', 'HexMesh', 'Element', 'Face',
           'expand', 'allocate', 'from_low_order']
