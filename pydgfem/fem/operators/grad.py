"""pydgfem.fem.operators.grad"""
import numpy as np

from pydgfem.fem.transform import map_grad


def grad(field, ctx, geom):
    """Physical gradient of a nodal cell field at every node.

    ``field`` has shape (n_elements*NP, *value_shape); the result has shape
    (n_elements*NP, *value_shape, 3). For a vector field the last two axes
    are grad(U)[i, j] = dU_i/dx_j.
    """
    field = np.asarray(field, dtype=float)
    n_elem = geom.n_elements
    vshape = field.shape[1:]
    u = np.moveaxis(field.reshape((n_elem, ctx.np) + vshape), 1, -1)
    g_ref = np.moveaxis(ctx.reference.reference_gradient(u), -2, 1)
    jinv = geom.jinv.reshape((n_elem, ctx.np) + (1,) * len(vshape) + (3, 3))
    return map_grad(jinv, g_ref).reshape(field.shape + (3,))


def jump(grad_left, grad_right, normal):
    """Normal jump [[grad u . n]] across a face, owner minus neighbour."""
    return (np.asarray(grad_left) - np.asarray(grad_right)) @ np.asarray(normal)


def average(grad_left, grad_right):
    return 0.5 * (np.asarray(grad_left) + np.asarray(grad_right))
