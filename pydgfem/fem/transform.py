"""pydgfem.fem.transform
Reference -> physical mapping of hexahedral elements.

    J[a, b]    = dx_a / dxi_b            (at every DG node of every element)
    Jinv[b, a] = dxi_b / dx_a
    df/dx_a    = sum_b Jinv[b, a] df/dxi_b

The Jacobian is assembled from the nodal positions with the same derivative
tables used for the solution, so curved (high-order) elements are handled
whenever the caller supplies curved node positions.
"""
import logging
from dataclasses import dataclass

import numpy as np

from pydgfem.errors import ConfigurationError, GeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometricFactors:
    jac: np.ndarray     # (n_elements, NP, 3, 3)
    detj: np.ndarray    # (n_elements, NP)
    jinv: np.ndarray    # (n_elements, NP, 3, 3)

    @property
    def n_elements(self) -> int:
        return self.jac.shape[0]


def nodal_jacobian(ctx, coords: np.ndarray) -> np.ndarray:
    """J at every node from nodal positions ``coords`` (n_elements, NP, 3)."""
    coords = np.asarray(coords, dtype=float)
    n_elem = coords.shape[0]
    if coords.shape[1:] != (ctx.np, 3):
        raise ValueError(f"Node coordinates must have shape (n, {ctx.np}, 3), got {coords.shape}")
    X = coords.reshape((n_elem,) + ctx.shape + (3,))
    psi, dpsi = ctx.psi, ctx.dpsi
    cols = (
        np.einsum("eabcx,ai,bj,ck->eijkx", X, dpsi[0], psi[1], psi[2]),
        np.einsum("eabcx,ai,bj,ck->eijkx", X, psi[0], dpsi[1], psi[2]),
        np.einsum("eabcx,ai,bj,ck->eijkx", X, psi[0], psi[1], dpsi[2]),
    )
    return np.stack(cols, axis=-1).reshape(n_elem, ctx.np, 3, 3)


def init_geom(ctx, mesh=None, *, coords=None) -> GeometricFactors:
    """Jacobians, determinants and inverse Jacobians of every element.

    Node positions come from ``coords`` when given, else from
    ``mesh.node_coordinates(ctx)``. A direction with a single node has
    identically zero derivative tables; its Jacobian column is then taken
    from the mesh's trilinear corner map.

    Raises:
        GeometryError: a determinant <= ``ctx.settings.det_tol``.
    """
    if coords is None:
        if mesh is None:
            raise ValueError("init_geom needs a mesh or node coordinates")
        coords = mesh.node_coordinates(ctx)
    jac = nodal_jacobian(ctx, coords)

    flat_dirs = [d for d, n in enumerate(ctx.shape) if n == 1]
    if flat_dirs:
        if mesh is None:
            raise ConfigurationError(
                f"Order {ctx.shape} has single-node directions {flat_dirs}; "
                "the corner map of a mesh is needed to build their Jacobian")
        cj = mesh.corner_jacobian(ctx.reference.points())
        for d in flat_dirs:
            jac[..., :, d] = cj[..., :, d]

    detj = np.linalg.det(jac)
    bad = np.argwhere(~(detj > ctx.settings.det_tol))
    if bad.size:
        e, n = (int(v) for v in bad[0])
        raise GeometryError(
            f"Element {e}: non-positive or singular Jacobian (detJ={detj[e, n]!r}) at node {n}; "
            f"{len(bad)} bad node(s) in total", elem_id=e, node=n)

    ratio = detj.min(axis=1) / detj.max(axis=1)
    for e in np.flatnonzero(ratio < 1e-6):
        logger.warning(f"Element {e} is strongly distorted (min/max detJ = {ratio[e]:.3e})")

    jinv = np.linalg.inv(jac)
    for arr in (jac, detj, jinv):
        arr.setflags(write=False)
    logger.info(f"Geometry built for {jac.shape[0]} elements, NP={ctx.np}")
    return GeometricFactors(jac=jac, detj=detj, jinv=jinv)


def map_grad(jinv: np.ndarray, grad_ref: np.ndarray) -> np.ndarray:
    """Physical gradient from the reference gradient (chain rule, last axis)."""
    return np.einsum("...ba,...b->...a", jinv, grad_ref)


def x_mapping(ctx, coords: np.ndarray, elem_id: int, xi) -> np.ndarray:
    """Physical position of reference point(s) ``xi`` (M, 3) in one element."""
    X = np.asarray(coords, dtype=float)[elem_id]          # (NP, 3)
    return ctx.reference.interpolate(X.T, xi).T


def element_volume(ctx, geom: GeometricFactors) -> np.ndarray:
    """Quadrature of detJ over each element."""
    return np.einsum("n,en->e", ctx.reference.weights(), geom.detj)
