# pydgfem.fem.reference
"""
Order-agnostic tensor-product reference hexahedron [-1,1]^3.

Basis functions and nodes are both numbered (i, j, k) with
0 <= i < NPX, 0 <= j < NPY, 0 <= k < NPZ and flattened with ``index3``
(k fastest).
"""
from __future__ import annotations

from functools import lru_cache

import numpy as np

from pydgfem.fem.basis import Basis1D, cardinal_basis
from pydgfem.utils.config import DEFAULT_SETTINGS


class TensorBasis:
    def __init__(self, bx: Basis1D, by: Basis1D, bz: Basis1D):
        self.bases = (bx, by, bz)
        self.psi = tuple(b.psi for b in self.bases)
        self.dpsi = tuple(b.dpsi for b in self.bases)
        self.xgl = tuple(b.nodes for b in self.bases)
        self.wgl = tuple(b.weights for b in self.bases)
        self.shape = tuple(b.n for b in self.bases)

    @property
    def np(self) -> int:
        npx, npy, npz = self.shape
        return npx * npy * npz

    def __repr__(self):
        return f"<TensorBasis {self.shape[0]}x{self.shape[1]}x{self.shape[2]} ({self.bases[0].kind})>"

    @lru_cache(maxsize=None)
    def points(self) -> np.ndarray:
        X, Y, Z = np.meshgrid(*self.xgl, indexing="ij")
        pts = np.column_stack([X.ravel(), Y.ravel(), Z.ravel()])
        pts.setflags(write=False)
        return pts

    @lru_cache(maxsize=None)
    def weights(self) -> np.ndarray:
        w = np.einsum("i,j,k->ijk", *self.wgl).ravel()
        w.setflags(write=False)
        return w

    def gradient(self, ii, jj, kk, i, j, k) -> np.ndarray:
        """Reference gradient of basis (ii, jj, kk) at node (i, j, k)."""
        psi, dpsi = self.psi, self.dpsi
        return np.array([
            dpsi[0][ii, i] * psi[1][jj, j] * psi[2][kk, k],
            psi[0][ii, i] * dpsi[1][jj, j] * psi[2][kk, k],
            psi[0][ii, i] * psi[1][jj, j] * dpsi[2][kk, k],
        ])

    @lru_cache(maxsize=None)
    def gradient_table(self) -> np.ndarray:
        """(NP basis, NP nodes, 3) table of all reference gradients."""
        psi, dpsi = self.psi, self.dpsi
        gx = np.einsum("ai,bj,ck->abcijk", dpsi[0], psi[1], psi[2])
        gy = np.einsum("ai,bj,ck->abcijk", psi[0], dpsi[1], psi[2])
        gz = np.einsum("ai,bj,ck->abcijk", psi[0], psi[1], dpsi[2])
        n = self.np
        G = np.stack([gx.reshape(n, n), gy.reshape(n, n), gz.reshape(n, n)], axis=-1)
        G.setflags(write=False)
        return G

    def reference_gradient(self, u) -> np.ndarray:
        """Reference gradient at the nodes of nodal coefficients ``u``.

        ``u`` has shape (..., NP); the result has shape (..., NP, 3).
        """
        u = np.asarray(u, dtype=float)
        lead = u.shape[:-1]
        u = u.reshape(lead + self.shape)
        psi, dpsi = self.psi, self.dpsi
        gx = np.einsum("...abc,ai,bj,ck->...ijk", u, dpsi[0], psi[1], psi[2])
        gy = np.einsum("...abc,ai,bj,ck->...ijk", u, psi[0], dpsi[1], psi[2])
        gz = np.einsum("...abc,ai,bj,ck->...ijk", u, psi[0], psi[1], dpsi[2])
        return np.stack([g.reshape(lead + (self.np,)) for g in (gx, gy, gz)], axis=-1)

    def interpolate(self, u, pts) -> np.ndarray:
        """Evaluate nodal coefficients ``u`` (..., NP) at reference points (M, 3)."""
        u = np.asarray(u, dtype=float)
        pts = np.atleast_2d(np.asarray(pts, dtype=float))
        lead = u.shape[:-1]
        u = u.reshape(lead + self.shape)
        rows = [np.array([cardinal_basis(a, b.nodes, pts[:, d]) for a in range(b.n)])
                for d, b in enumerate(self.bases)]
        return np.einsum("...abc,am,bm,cm->...m", u, *rows)


@lru_cache(maxsize=None)
def get_reference(npx: int, npy: int, npz: int, kind: str = "lobatto",
                  tol: float = DEFAULT_SETTINGS.newton_tol,
                  maxiter: int = DEFAULT_SETTINGS.newton_maxiter) -> TensorBasis:
    bases = [Basis1D.build(kind, n, tol=tol, maxiter=maxiter) for n in (npx, npy, npz)]
    return TensorBasis(*bases)
