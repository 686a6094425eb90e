"""pydgfem.integration.legendre
Legendre polynomials and their first two derivatives.
"""
import numpy as np


def legendre(p: int, x):
    """Evaluate P_p and its first two derivatives at ``x``.

    Uses the three-term recurrence

        P_i = ((2i-1) x P_{i-1} - (i-1) P_{i-2}) / i

    with the derivative recurrences carried alongside, so no powers of ``x``
    are ever formed.

    Args:
        p: Polynomial degree, ``p >= 0``.
        x: Evaluation point(s). Scalars give floats, arrays are evaluated
            element-wise.

    Returns:
        (L0, L0_1, L0_2): P_p(x), P_p'(x), P_p''(x).
    """
    xa = np.asarray(x, dtype=float)
    L1 = L1_1 = L1_2 = np.zeros_like(xa)
    L0, L0_1, L0_2 = np.ones_like(xa), np.zeros_like(xa), np.zeros_like(xa)

    for i in range(1, p + 1):
        L2, L2_1, L2_2 = L1, L1_1, L1_2
        L1, L1_1, L1_2 = L0, L0_1, L0_2
        a = (2 * i - 1) / i
        b = (i - 1) / i
        L0 = a * xa * L1 - b * L2
        L0_1 = a * (L1 + xa * L1_1) - b * L2_1
        L0_2 = a * (2 * L1_1 + xa * L1_2) - b * L2_2

    if xa.ndim == 0:
        return float(L0), float(L0_1), float(L0_2)
    return L0, L0_1, L0_2
