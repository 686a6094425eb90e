import numba as _nb
import numpy as np

# Reference corners of the 8-node hexahedron in VTK order.
HEX8_CORNERS = np.array([
    [-1.0, -1.0, -1.0],
    [ 1.0, -1.0, -1.0],
    [ 1.0,  1.0, -1.0],
    [-1.0,  1.0, -1.0],
    [-1.0, -1.0,  1.0],
    [ 1.0, -1.0,  1.0],
    [ 1.0,  1.0,  1.0],
    [-1.0,  1.0,  1.0],
])


@_nb.njit(cache=True, fastmath=True, parallel=True)
def _tabulate_hex8(pts, corners, N, dN):
    """
    Tabulates the trilinear corner map of the 8-node hexahedron at
    reference points ``pts`` (M, 3): N (M, 8) and dN (M, 8, 3).
    """
    nQ = pts.shape[0]
    for q in _nb.prange(nQ):
        s = pts[q, 0]; t = pts[q, 1]; u = pts[q, 2]
        for v in range(8):
            a = 1.0 + corners[v, 0] * s
            b = 1.0 + corners[v, 1] * t
            c = 1.0 + corners[v, 2] * u
            N[q, v] = 0.125 * a * b * c
            dN[q, v, 0] = 0.125 * corners[v, 0] * b * c
            dN[q, v, 1] = 0.125 * a * corners[v, 1] * c
            dN[q, v, 2] = 0.125 * a * b * corners[v, 2]


def tabulate_hex8(pts):
    """Trilinear shape functions (M, 8) and reference gradients (M, 8, 3)."""
    pts = np.ascontiguousarray(np.atleast_2d(pts), dtype=float)
    N = np.empty((pts.shape[0], 8))
    dN = np.empty((pts.shape[0], 8, 3))
    _tabulate_hex8(pts, HEX8_CORNERS, N, dN)
    return N, dN
