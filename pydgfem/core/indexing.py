"""pydgfem.core.indexing
Flattened (component, i, j, k) index space of one element's nodal storage.

    index4(c, i, j, k) = c*NPX*NPY*NPZ + i*NPY*NPZ + j*NPZ + k
    index3(i, j, k)    = i*NPY*NPZ + j*NPZ + k

Both are bijections onto [0, NC*NP) and [0, NP). All functions accept
integers or integer numpy arrays.
"""
from itertools import product
from typing import Iterator, Tuple

import numpy as np

Shape = Tuple[int, int, int]

# local hex faces as (direction, side); side 0 is xi_dir = -1
HEX_FACES = ((0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1))


def _check(name, v, n):
    va = np.asarray(v)
    if np.any(va < 0) or np.any(va >= n):
        raise IndexError(f"{name}={v} out of range [0, {n})")


def index3(i, j, k, shape: Shape):
    npx, npy, npz = shape
    _check("i", i, npx)
    _check("j", j, npy)
    _check("k", k, npz)
    return i * npy * npz + j * npz + k


def index4(c, i, j, k, shape: Shape, n_comp: int | None = None):
    npx, npy, npz = shape
    if n_comp is not None:
        _check("c", c, n_comp)
    else:
        _check("c", c, np.iinfo(np.int64).max)
    return c * npx * npy * npz + index3(i, j, k, shape)


def unflatten3(idx, shape: Shape):
    npx, npy, npz = shape
    _check("idx", idx, npx * npy * npz)
    i, rem = np.divmod(idx, npy * npz)
    j, k = np.divmod(rem, npz)
    if np.ndim(idx) == 0:
        return int(i), int(j), int(k)
    return i, j, k


def unflatten4(idx, shape: Shape, n_comp: int | None = None):
    n = shape[0] * shape[1] * shape[2]
    if n_comp is not None:
        _check("idx", idx, n_comp * n)
    else:
        _check("idx", idx, np.iinfo(np.int64).max)
    c, rem = np.divmod(idx, n)
    i, j, k = unflatten3(rem, shape)
    if np.ndim(idx) == 0:
        return int(c), i, j, k
    return c, i, j, k


# ---------- loops over the node lattice ----------

def for_each_lgl(shape: Shape) -> Iterator[Tuple[int, int, int]]:
    """(i, j, k) in storage order."""
    return product(range(shape[0]), range(shape[1]), range(shape[2]))


def for_each_lgl_xy(shape: Shape):
    return product(range(shape[0]), range(shape[1]))


def for_each_lgl_xz(shape: Shape):
    return product(range(shape[0]), range(shape[2]))


def for_each_lgl_yz(shape: Shape):
    return product(range(shape[1]), range(shape[2]))


def for_each_lgl_x(shape: Shape):
    return iter(range(shape[0]))


def for_each_lgl_y(shape: Shape):
    return iter(range(shape[1]))


def for_each_lgl_z(shape: Shape):
    return iter(range(shape[2]))


def face_nodes(shape: Shape, local_face: int) -> np.ndarray:
    """``index3`` offsets of the nodes on local face ``local_face`` (see HEX_FACES).

    Only meaningful for node sets containing the end points (Gauss-Lobatto).
    """
    direction, side = HEX_FACES[local_face]
    fixed = 0 if side == 0 else shape[direction] - 1
    ranges = [np.arange(n) for n in shape]
    ranges[direction] = np.array([fixed])
    I, J, K = np.meshgrid(*ranges, indexing="ij")
    return index3(I.ravel(), J.ravel(), K.ravel(), shape)


def face_shape(shape: Shape, local_face: int) -> Tuple[int, int]:
    direction, _ = HEX_FACES[local_face]
    return tuple(n for d, n in enumerate(shape) if d != direction)
