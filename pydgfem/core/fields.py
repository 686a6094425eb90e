"""pydgfem.core.fields
Promotion of one-value-per-entity data to full nodal storage.

A mesh field is a C-contiguous array whose first axis runs over nodes
(``n_entities * block`` rows, block = NP for cells, NPF for faces); any
trailing axes hold the value (scalar, vector, tensor). Low-order data is
packed at the front, one row per entity:

    before:  [v0, v1, v2, ..., v_{n-1}, <unused>]
    after:   [v0 x block, v1 x block, ..., v_{n-1} x block]

``expand`` works in place, walking from the last row downward. The
destination rows of entity e are [e*block, (e+1)*block), all >= e, and every
entity above e has already been written, so the source row of each entity is
still intact when it is read. Running it again on an already expanded
multi-entity field is not a no-op: the front rows then hold copies of
entity 0, so re-seed the representative values first.
"""
import logging

import numba
import numpy as np

logger = logging.getLogger(__name__)


@numba.njit(cache=True)
def _expand_inplace(data, block):
    n_rows, n_comp = data.shape
    for i in range(n_rows - 1, -1, -block):
        e = i // block
        for c in range(n_comp):
            v = data[e, c]
            for j in range(block):
                data[i - j, c] = v


def expand(field: np.ndarray, ctx, entity: str = "cell") -> np.ndarray:
    """Expand ``field`` in place and return it (see module docstring)."""
    block = ctx.block_size(entity)
    if not ctx.npmat or block == 1:
        return field
    if not isinstance(field, np.ndarray) or not field.flags.c_contiguous:
        raise ValueError("expand needs a C-contiguous numpy array")
    if not field.flags.writeable:
        raise ValueError("expand needs a writeable array")
    n_rows = field.shape[0]
    if n_rows == 0:
        return field
    if n_rows % block:
        raise ValueError(f"Field has {n_rows} rows, not a multiple of the {entity} block size {block}")

    data = field.reshape(n_rows, -1)
    _expand_inplace(data, block)
    logger.debug(f"Expanded {n_rows // block} {entity} values to blocks of {block}")
    return field


def allocate(ctx, n_entities: int, value_shape=(), entity: str = "cell", dtype=float) -> np.ndarray:
    """Zeroed nodal storage for ``n_entities`` cells or faces."""
    return np.zeros((n_entities * ctx.block_size(entity),) + tuple(value_shape), dtype=dtype)


def from_low_order(values, ctx, entity: str = "cell") -> np.ndarray:
    """Nodal field seeded from one value per entity (e.g. a finite-volume restart)."""
    values = np.asarray(values)
    field = allocate(ctx, values.shape[0], values.shape[1:], entity, dtype=values.dtype)
    field[:values.shape[0]] = values
    return expand(field, ctx, entity)


def element_block(field: np.ndarray, ctx, elem_id: int, entity: str = "cell") -> np.ndarray:
    """View of the rows belonging to one cell or face."""
    block = ctx.block_size(entity)
    return field[elem_id * block:(elem_id + 1) * block]
