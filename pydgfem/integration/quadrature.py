"""pydgfem.integration.quadrature
Gauss and Gauss-Lobatto rules on [-1, 1] (any number of nodes >= 1) and
their tensor products on the reference hexahedron.
"""
import logging
from functools import lru_cache

import numpy as np

from pydgfem.errors import ConfigurationError
from pydgfem.integration.legendre import legendre
from pydgfem.utils.config import DEFAULT_SETTINGS, QUADRATURE_KINDS

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Root finding
# -------------------------------------------------------------------------
def _newton(fn, x0: float, tol: float, maxiter: int, what: str) -> float:
    """Newton-Raphson on ``fn(x) -> (f, df)`` starting from ``x0``."""
    x = float(x0)
    dx = float("nan")
    for it in range(maxiter):
        f, df = fn(x)
        if df == 0.0:
            raise ConfigurationError(f"{what}: zero slope at x={x!r} (iteration {it})")
        dx = -f / df
        x += dx
        if abs(dx) <= tol:
            return x
    raise ConfigurationError(
        f"{what}: Newton did not converge after {maxiter} iterations (x={x!r}, last step={dx!r})")


def _check_rule(x: np.ndarray, w: np.ndarray, what: str):
    if x.size > 1 and not np.all(np.diff(x) > 0.0):
        raise ConfigurationError(f"{what}: nodes are not distinct and increasing: {x}")
    if not np.all(w > 0.0):
        raise ConfigurationError(f"{what}: non-positive weights: {w}")
    if not np.isclose(w.sum(), 2.0, rtol=0.0, atol=1e-12 * x.size):
        raise ConfigurationError(f"{what}: weights sum to {w.sum()!r} instead of 2")


def _check_order(N):
    if int(N) != N or N < 1:
        raise ConfigurationError(f"Quadrature order must be a positive integer, got {N!r}")
    return int(N)


# -------------------------------------------------------------------------
# 1-D rules
# -------------------------------------------------------------------------
def legendre_gauss(N: int, *, tol: float = DEFAULT_SETTINGS.newton_tol,
                   maxiter: int = DEFAULT_SETTINGS.newton_maxiter):
    """Gauss-Legendre nodes (roots of P_N) and weights.

    Only the non-positive half is found by Newton; the rest follows from the
    symmetry of P_N.
    """
    N = _check_order(N)
    what = f"legendre_gauss(N={N})"
    x = np.zeros(N)
    w = np.zeros(N)

    def fn(z):
        L0, L0_1, _ = legendre(N, z)
        return L0, L0_1

    for i in range(N // 2):
        seed = -np.cos(np.pi * (i + 0.75) / (N + 0.5))
        xi = _newton(fn, seed, tol, maxiter, what)
        _, L0_1, _ = legendre(N, xi)
        x[i], x[N - 1 - i] = xi, -xi
        w[i] = w[N - 1 - i] = 2.0 / ((1.0 - xi * xi) * L0_1 * L0_1)

    if N % 2:
        _, L0_1, _ = legendre(N, 0.0)
        x[N // 2] = 0.0
        w[N // 2] = 2.0 / (L0_1 * L0_1)

    _check_rule(x, w, what)
    logger.debug(f"{what}: nodes={x}, weights={w}")
    return x, w


def legendre_gauss_lobatto(N: int, *, tol: float = DEFAULT_SETTINGS.newton_tol,
                           maxiter: int = DEFAULT_SETTINGS.newton_maxiter):
    """Gauss-Lobatto-Legendre nodes and weights.

    The nodes are -1, 1 and the N-2 roots of P'_{N-1}; the weights are
    ``2 / (N (N-1) P_{N-1}(x)^2)``, which is ``2 / (N (N-1))`` at both ends.
    A single-node rule has no room for the end points and falls back to the
    midpoint rule ``{0}, {2}``.
    """
    N = _check_order(N)
    what = f"legendre_gauss_lobatto(N={N})"
    if N == 1:
        return np.zeros(1), np.full(1, 2.0)

    p = N - 1
    x = np.zeros(N)
    x[0], x[-1] = -1.0, 1.0

    def fn(z):
        _, L0_1, L0_2 = legendre(p, z)
        return L0_1, L0_2

    for i in range(1, (N - 2) // 2 + 1):
        seed = -np.cos(np.pi * i / p)
        xi = _newton(fn, seed, tol, maxiter, what)
        x[i], x[N - 1 - i] = xi, -xi
    # odd N: x[p // 2] stays exactly 0

    L0, _, _ = legendre(p, x)
    w = 2.0 / (p * (p + 1) * L0 * L0)

    _check_rule(x, w, what)
    logger.debug(f"{what}: nodes={x}, weights={w}")
    return x, w


_RULES = {
    "gauss": legendre_gauss,
    "lobatto": legendre_gauss_lobatto,
}


@lru_cache(maxsize=None)
def quadrature_rule(kind: str, N: int, tol: float = DEFAULT_SETTINGS.newton_tol,
                    maxiter: int = DEFAULT_SETTINGS.newton_maxiter):
    """Cached (read-only) nodes and weights for ``kind`` in ``QUADRATURE_KINDS``."""
    if kind not in _RULES:
        raise ConfigurationError(f"Unknown quadrature '{kind}'. Expected one of {QUADRATURE_KINDS}.")
    x, w = _RULES[kind](N, tol=tol, maxiter=maxiter)
    x.setflags(write=False)
    w.setflags(write=False)
    return x, w


def integrate(f, kind: str, N: int) -> float:
    """Approximate the integral of ``f`` over [-1, 1] with an N-point rule."""
    x, w = quadrature_rule(kind, N)
    return float(np.dot(w, f(x)))


# -------------------------------------------------------------------------
# Tensor-product rule on [-1,1]^3
# -------------------------------------------------------------------------
@lru_cache(maxsize=None)
def hex_rule(kind: str, npx: int, npy: int, npz: int):
    """Points (NP, 3) and weights (NP,) ordered like ``index3`` (k fastest)."""
    (x, wx), (y, wy), (z, wz) = (quadrature_rule(kind, n) for n in (npx, npy, npz))
    X, Y, Z = np.meshgrid(x, y, z, indexing="ij")
    pts = np.column_stack([X.ravel(), Y.ravel(), Z.ravel()])
    wts = np.einsum("i,j,k->ijk", wx, wy, wz).ravel()
    pts.setflags(write=False)
    wts.setflags(write=False)
    return pts, wts
