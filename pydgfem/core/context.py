"""pydgfem.core.context
The discretization context: order triple, quadrature sets and basis tables.

Built once at start-up and read-only afterwards, so several independent
discretizations can coexist and concurrent readers need no locking.
"""
import logging
from dataclasses import dataclass

from pydgfem.core import indexing
from pydgfem.fem.reference import TensorBasis, get_reference
from pydgfem.integration.quadrature import quadrature_rule
from pydgfem.utils.config import DGSettings

logger = logging.getLogger(__name__)


def init_poly(settings: DGSettings):
    """Quadrature sets ``(xgl, wgl)``, one node/weight array per direction."""
    rules = [quadrature_rule(settings.quadrature, n, settings.newton_tol, settings.newton_maxiter)
             for n in settings.order]
    xgl = tuple(x for x, _ in rules)
    wgl = tuple(w for _, w in rules)
    return xgl, wgl


def init_basis(settings: DGSettings) -> TensorBasis:
    """Basis/derivative tables ``psi[dir]``, ``dpsi[dir]`` for the order triple."""
    return get_reference(*settings.order, settings.quadrature,
                         settings.newton_tol, settings.newton_maxiter)


@dataclass(frozen=True)
class Discretization:
    settings: DGSettings
    reference: TensorBasis

    @classmethod
    def from_settings(cls, settings: DGSettings) -> "Discretization":
        xgl, _ = init_poly(settings)
        reference = init_basis(settings)
        ctx = cls(settings=settings, reference=reference)
        logger.info(f"Discretization {ctx.shape} ({settings.quadrature}): NP={ctx.np}, NPF={ctx.npf}")
        logger.debug(f"xgl={xgl}")
        return ctx

    @classmethod
    def create(cls, npx: int = 2, npy: int | None = None, npz: int | None = None, *,
               quadrature: str = "lobatto", **settings_kw) -> "Discretization":
        """``create(3)`` is the isotropic 3x3x3 discretization."""
        npy = npx if npy is None else npy
        npz = npx if npz is None else npz
        return cls.from_settings(DGSettings(npx=npx, npy=npy, npz=npz,
                                            quadrature=quadrature, **settings_kw))

    # ---------- order metadata ----------
    @property
    def shape(self) -> tuple[int, int, int]:
        return self.settings.order

    @property
    def npx(self) -> int:
        return self.settings.npx

    @property
    def npy(self) -> int:
        return self.settings.npy

    @property
    def npz(self) -> int:
        return self.settings.npz

    @property
    def np(self) -> int:
        return self.npx * self.npy * self.npz

    @property
    def npf(self) -> int:
        """Nodes per face block; the largest face so all faces share one stride."""
        return max(self.npx * self.npy, self.npx * self.npz, self.npy * self.npz)

    @property
    def npmat(self) -> bool:
        """True when elements carry more than one node."""
        return self.np > 1

    @property
    def kind(self) -> str:
        return self.settings.quadrature

    # ---------- tables ----------
    @property
    def xgl(self):
        return self.reference.xgl

    @property
    def wgl(self):
        return self.reference.wgl

    @property
    def psi(self):
        return self.reference.psi

    @property
    def dpsi(self):
        return self.reference.dpsi

    # ---------- flattened index space ----------
    def index3(self, i, j, k):
        return indexing.index3(i, j, k, self.shape)

    def index4(self, c, i, j, k, n_comp: int | None = None):
        return indexing.index4(c, i, j, k, self.shape, n_comp)

    def unflatten3(self, idx):
        return indexing.unflatten3(idx, self.shape)

    def unflatten4(self, idx, n_comp: int | None = None):
        return indexing.unflatten4(idx, self.shape, n_comp)

    def block_size(self, entity: str) -> int:
        if entity == "cell":
            return self.np
        if entity == "face":
            return self.npf
        raise KeyError(entity)
