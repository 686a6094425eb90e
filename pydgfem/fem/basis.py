"""pydgfem.fem.basis
One-dimensional nodal (Lagrange) bases on a quadrature node set.

Table convention shared with the tensor assembler:

    psi[i, j]  = L_i(x_j)      value of basis function i at node j
    dpsi[i, j] = L_i'(x_j)     derivative of basis function i at node j
"""
from dataclasses import dataclass

import numpy as np

from pydgfem.errors import ConfigurationError
from pydgfem.integration.legendre import legendre
from pydgfem.integration.quadrature import quadrature_rule


def _as_nodes(xgl) -> np.ndarray:
    x = np.asarray(xgl, dtype=float).ravel()
    if x.size == 0:
        raise ConfigurationError("Empty node set")
    return x


def barycentric_weights(xgl) -> np.ndarray:
    """w_i = 1 / prod_{m != i} (x_i - x_m)."""
    x = _as_nodes(xgl)
    diff = x[:, None] - x[None, :]
    np.fill_diagonal(diff, 1.0)
    return 1.0 / np.prod(diff, axis=1)


def cardinal_basis(i: int, xgl, x=None) -> np.ndarray:
    """Values of the i-th Lagrange interpolant through ``xgl``.

    Evaluated at ``x`` (defaults to the nodes themselves, where the result is
    exactly the unit vector e_i).
    """
    nodes = _as_nodes(xgl)
    pts = nodes if x is None else np.atleast_1d(np.asarray(x, dtype=float))
    psi = np.ones_like(pts)
    for m, xm in enumerate(nodes):
        if m == i:
            continue
        psi *= (pts - xm) / (nodes[i] - xm)
    return psi


def differentiation_matrix(xgl, method: str = "lagrange") -> np.ndarray:
    """D[j, i] = L_i'(x_j).

    ``method="lagrange"`` works for any distinct nodes (barycentric form, the
    diagonal is the negative off-diagonal row sum). ``method="legendre"``
    uses the closed form valid only on Gauss-Lobatto nodes.
    """
    x = _as_nodes(xgl)
    N = x.size
    if N == 1:
        return np.zeros((1, 1))

    diff = x[:, None] - x[None, :]
    off = ~np.eye(N, dtype=bool)
    D = np.zeros((N, N))

    if method == "lagrange":
        w = barycentric_weights(x)
        D[off] = (w[None, :] / w[:, None])[off] / diff[off]
        D[np.diag_indices(N)] = -np.sum(D, axis=1)
    elif method == "legendre":
        p = N - 1
        L0, _, _ = legendre(p, x)
        D[off] = (L0[:, None] / L0[None, :])[off] / diff[off]
        D[0, 0] = -p * (p + 1) / 4.0
        D[-1, -1] = p * (p + 1) / 4.0
    else:
        raise ValueError(f"Unknown differentiation method '{method}'")
    return D


def lagrange_basis_derivative(i: int, xgl) -> np.ndarray:
    """Derivative of the i-th Lagrange interpolant at every node."""
    return differentiation_matrix(xgl, "lagrange")[:, i].copy()


def legendre_basis_derivative(i: int, xgl) -> np.ndarray:
    """Same as :func:`lagrange_basis_derivative` for Gauss-Lobatto nodes."""
    return differentiation_matrix(xgl, "legendre")[:, i].copy()


@dataclass(frozen=True)
class Basis1D:
    """Nodal basis along one reference direction."""
    nodes: np.ndarray
    weights: np.ndarray
    psi: np.ndarray
    dpsi: np.ndarray
    kind: str = "lobatto"

    @property
    def n(self) -> int:
        return self.nodes.size

    @classmethod
    def build(cls, kind: str, N: int, **rule_kw) -> "Basis1D":
        nodes, weights = quadrature_rule(kind, N, **rule_kw)
        method = "legendre" if kind == "lobatto" and N > 1 else "lagrange"
        psi = np.array([cardinal_basis(i, nodes) for i in range(N)])
        dpsi = differentiation_matrix(nodes, method).T.copy()
        psi.setflags(write=False)
        dpsi.setflags(write=False)
        return cls(nodes=nodes, weights=weights, psi=psi, dpsi=dpsi, kind=kind)

    def interpolate(self, values, x) -> np.ndarray:
        """Evaluate the interpolant of nodal ``values`` at points ``x``."""
        values = np.asarray(values, dtype=float)
        rows = np.array([cardinal_basis(i, self.nodes, x) for i in range(self.n)])
        return values @ rows
