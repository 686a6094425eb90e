"""pydgfem.fem.operators.tensor
Point-wise 3x3 tensor algebra over the last two axes.
"""
import numpy as np

I3 = np.eye(3)


def trn(T):
    return np.swapaxes(T, -1, -2)


def sym(T):
    return 0.5 * (T + trn(T))


def skw(T):
    return 0.5 * (T - trn(T))


def tr(T):
    return np.trace(T, axis1=-2, axis2=-1)


def dev(T, factor: float = 1.0):
    """T - factor * tr(T)/3 I; ``dev(T, 2)`` removes two thirds of the trace."""
    return T - (factor * tr(T) / 3.0)[..., None, None] * I3


def ddot(A, B):
    """Double contraction A : B."""
    return np.einsum("...ij,...ij->...", A, B)


def mag(v):
    return np.linalg.norm(v, axis=-1)
