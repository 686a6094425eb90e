"""pydgfem.utils.config
Run-wide discretization settings, optionally read from ``PYDGFEM_*``
environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace

from pydgfem.errors import ConfigurationError

QUADRATURE_KINDS = ("lobatto", "gauss")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name}={raw!r} is not an integer") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name}={raw!r} is not a number") from None


@dataclass(frozen=True)
class DGSettings:
    npx: int = 2
    npy: int = 2
    npz: int = 2
    quadrature: str = "lobatto"
    newton_tol: float = 1e-14
    newton_maxiter: int = 100
    det_tol: float = 0.0

    def __post_init__(self):
        for name in ("npx", "npy", "npz"):
            val = getattr(self, name)
            if int(val) != val or val < 1:
                raise ConfigurationError(f"{name.upper()} must be a positive integer, got {val!r}")
        if self.quadrature not in QUADRATURE_KINDS:
            raise ConfigurationError(
                f"Unknown quadrature '{self.quadrature}'. Expected one of {QUADRATURE_KINDS}.")
        if not self.newton_tol > 0.0:
            raise ConfigurationError(f"newton_tol must be positive, got {self.newton_tol}")
        if self.newton_maxiter < 1:
            raise ConfigurationError(f"newton_maxiter must be >= 1, got {self.newton_maxiter}")

    @property
    def order(self) -> tuple[int, int, int]:
        return (self.npx, self.npy, self.npz)

    def with_order(self, npx: int, npy: int, npz: int) -> "DGSettings":
        return replace(self, npx=npx, npy=npy, npz=npz)

    @classmethod
    def from_env(cls, prefix: str = "PYDGFEM_") -> "DGSettings":
        """Build settings from ``<prefix>NPX`` etc., falling back to defaults."""
        d = cls.__dataclass_fields__
        return cls(
            npx=_env_int(prefix + "NPX", d["npx"].default),
            npy=_env_int(prefix + "NPY", d["npy"].default),
            npz=_env_int(prefix + "NPZ", d["npz"].default),
            quadrature=os.getenv(prefix + "QUADRATURE", d["quadrature"].default).strip().lower(),
            newton_tol=_env_float(prefix + "NEWTON_TOL", d["newton_tol"].default),
            newton_maxiter=_env_int(prefix + "NEWTON_MAXITER", d["newton_maxiter"].default),
            det_tol=_env_float(prefix + "DET_TOL", d["det_tol"].default),
        )


DEFAULT_SETTINGS = DGSettings()
