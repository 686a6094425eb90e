"""pydgfem.utils.meshgen
Mesh generators for quick tests.
"""
from typing import Optional, Tuple

import numba
import numpy as np

from pydgfem.core.mesh import HexMesh

__all__ = ["structured_hex", "unit_cube"]


def structured_hex(Lx: float, Ly: float, Lz: float, *, nx: int, ny: int, nz: int,
                   offset: Optional[Tuple[float, float, float]] = None) -> HexMesh:
    """
    Axis-aligned box [0,Lx]x[0,Ly]x[0,Lz] (shifted by ``offset``) split into
    nx*ny*nz hexahedra.
    """
    if min(nx, ny, nz) < 1:
        raise ValueError("Partition counts must be positive.")
    vertices, cells = _structured_hex_numba(float(Lx), float(Ly), float(Lz), nx, ny, nz)
    if offset is not None:
        vertices += np.asarray(offset, dtype=np.float64)
    return HexMesh(vertices, cells)


def unit_cube(side: float = 2.0) -> HexMesh:
    """Single element [-side/2, side/2]^3; side 2 coincides with the reference cube."""
    h = 0.5 * side
    return structured_hex(side, side, side, nx=1, ny=1, nz=1, offset=(-h, -h, -h))


@numba.jit(nopython=True, parallel=True, cache=True)
def _structured_hex_numba(Lx: float, Ly: float, Lz: float, nx: int, ny: int, nz: int):
    """
    Raw vertex coordinates and VTK-ordered cell connectivity. Vertices and
    cells are both numbered with k (z) fastest.
    """
    mx, my, mz = nx + 1, ny + 1, nz + 1
    vertices = np.zeros((mx * my * mz, 3), dtype=np.float64)
    xs = np.linspace(0.0, Lx, mx)
    ys = np.linspace(0.0, Ly, my)
    zs = np.linspace(0.0, Lz, mz)
    for i in numba.prange(mx):
        for j in range(my):
            for k in range(mz):
                vid = (i * my + j) * mz + k
                vertices[vid, 0] = xs[i]
                vertices[vid, 1] = ys[j]
                vertices[vid, 2] = zs[k]

    cells = np.empty((nx * ny * nz, 8), dtype=np.int64)
    for e in numba.prange(nx * ny * nz):
        i = e // (ny * nz)
        j = (e // nz) % ny
        k = e % nz
        v000 = (i * my + j) * mz + k
        v100 = ((i + 1) * my + j) * mz + k
        v110 = ((i + 1) * my + j + 1) * mz + k
        v010 = (i * my + j + 1) * mz + k
        cells[e, 0] = v000
        cells[e, 1] = v100
        cells[e, 2] = v110
        cells[e, 3] = v010
        cells[e, 4] = v000 + 1
        cells[e, 5] = v100 + 1
        cells[e, 6] = v110 + 1
        cells[e, 7] = v010 + 1
    return vertices, cells
