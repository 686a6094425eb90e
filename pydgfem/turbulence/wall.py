"""pydgfem.turbulence.wall
Law of the wall and the data a wall function needs.
"""
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class WallModel(Enum):
    NONE = "none"
    STANDARD = "standard"      # u* from the log law and the near-wall velocity
    LAUNDER = "launder"        # u* = Cmu^(1/4) sqrt(k)  (Launder-Spalding)


@dataclass(frozen=True)
class LawOfWall:
    kappa: float = 0.41
    E: float = 9.793
    yp_lam: float = field(init=False)

    def __post_init__(self):
        # intersection of u+ = y+ and u+ = ln(E y+)/kappa
        yp = 11.0
        for _ in range(100):
            yp_new = np.log(self.E * yp) / self.kappa
            if abs(yp_new - yp) < 1e-12:
                break
            yp = yp_new
        object.__setattr__(self, "yp_lam", float(yp_new))

    def up(self, yp):
        """Dimensionless velocity u+ at y+ (linear sublayer / log layer)."""
        yp = np.asarray(yp, dtype=float)
        return np.where(yp < self.yp_lam, yp, np.log(self.E * np.maximum(yp, 1e-300)) / self.kappa)

    def ustar(self, nu, U, y, tol: float = 1e-12, maxiter: int = 50):
        """Friction velocity from the velocity magnitude ``U`` at wall distance ``y``.

        Starts from the viscous-sublayer value and switches to Newton on
        ``u* ln(E u* y / nu) / kappa - U`` where the resulting y+ lies in
        the log layer.
        """
        scalar = np.ndim(U) == 0 and np.ndim(y) == 0
        U, y = np.broadcast_arrays(np.atleast_1d(np.abs(np.asarray(U, dtype=float))),
                                   np.atleast_1d(np.asarray(y, dtype=float)))
        us = np.sqrt(nu * U / y)
        log = us * y / nu >= self.yp_lam
        if np.any(log):
            ul, yl = U[log], y[log]
            u = us[log]
            for _ in range(maxiter):
                lg = np.log(self.E * u * yl / nu)
                f = u * lg / self.kappa - ul
                df = (lg + 1.0) / self.kappa
                du = f / df
                u = u - du
                if np.all(np.abs(du) <= tol * np.abs(u)):
                    break
            else:
                raise RuntimeError(f"Law-of-wall u* iteration did not converge in {maxiter} steps")
            us[log] = u
        return float(us[0]) if scalar else us


@dataclass
class WallData:
    """Near-wall cells, their wall distance and tangential velocity magnitude."""
    cells: np.ndarray
    y: np.ndarray
    u_mag: np.ndarray

    def __post_init__(self):
        self.cells = np.asarray(self.cells, dtype=np.int64)
        self.y = np.broadcast_to(np.asarray(self.y, dtype=float), self.cells.shape).copy()
        self.u_mag = np.broadcast_to(np.asarray(self.u_mag, dtype=float), self.cells.shape).copy()
        if np.any(self.y <= 0.0):
            raise ValueError("Wall distances must be positive")
