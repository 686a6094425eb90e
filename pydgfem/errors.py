"""pydgfem.errors
Exceptions raised while building the discretization.
"""


class DGError(Exception):
    """Base class for all pydgfem errors."""


class ConfigurationError(DGError, ValueError):
    """Invalid order triple, quadrature kind or non-convergent root search."""


class GeometryError(DGError, ValueError):
    """Degenerate or inverted element found while building the geometry."""

    def __init__(self, message: str, elem_id: int | None = None, node: int | None = None):
        super().__init__(message)
        self.elem_id = elem_id
        self.node = node
