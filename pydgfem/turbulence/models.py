"""pydgfem.turbulence.models
RANS closures fed by the DG velocity gradient.

With the Boussinesq assumption the Reynolds stress is

    R = 2 mu_t dev(sym(grad U)) - 2/3 rho k I

and the momentum equation only needs an effective viscosity
``mu + mu_t`` (treated implicitly) plus the explicit stress
``mu_t dev(grad U^T, 2)``; the ``2/3 rho k`` part is absorbed into the
pressure. The set of models is closed: pick one with :func:`create_model`
and a :class:`ModelKind`.

The transport equations for k and epsilon/omega belong to the outer solver;
the models here read those fields as given arrays.
"""
import logging
from enum import Enum

import numpy as np

from pydgfem.errors import ConfigurationError
from pydgfem.fem.operators.tensor import I3, ddot, dev, skw, sym, trn
from pydgfem.turbulence.wall import LawOfWall, WallData, WallModel

logger = logging.getLogger(__name__)


class ModelKind(Enum):
    LAMINAR = "laminar"
    MIXING_LENGTH = "mixing_length"
    K_EPSILON = "k_epsilon"
    K_OMEGA = "k_omega"


class Capability(Enum):
    EDDY_VISCOSITY = "compute_eddy_viscosity"
    REYNOLDS_STRESS = "compute_reynolds_stress"
    WALL_FUNCTION = "apply_wall_function"


class StrainMeasure(Enum):
    SMAGORINSKY = "smagorinsky"   # 2 S:S
    BALDWIN = "baldwin"           # 2 W:W
    KATO = "kato"                 # 2 sqrt(S:S W:W)


def strain_rate_sq(grad_u, measure: StrainMeasure = StrainMeasure.SMAGORINSKY):
    """Squared strain magnitude S2 used for mu_t and production."""
    grad_u = np.asarray(grad_u, dtype=float)
    if measure is StrainMeasure.SMAGORINSKY:
        S = sym(grad_u)
        mag = ddot(S, S)
    elif measure is StrainMeasure.BALDWIN:
        W = skw(grad_u)
        mag = ddot(W, W)
    elif measure is StrainMeasure.KATO:
        S, W = sym(grad_u), skw(grad_u)
        mag = np.sqrt(ddot(S, S) * ddot(W, W))
    else:
        raise KeyError(measure)
    return 2.0 * mag


class TurbulenceModel:
    """Laminar flow: only the viscous stress acts."""
    kind = ModelKind.LAMINAR
    capabilities = frozenset()

    def __init__(self, rho: float = 1.0, nu: float = 1e-5):
        if rho <= 0.0 or nu <= 0.0:
            raise ConfigurationError(f"rho and nu must be positive, got rho={rho}, nu={nu}")
        self.rho = float(rho)
        self.nu = float(nu)

    def __repr__(self):
        return f"<{type(self).__name__} rho={self.rho} nu={self.nu}>"

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def viscous_stress(self, grad_u):
        """V = 2 rho nu sym(grad U)."""
        return 2.0 * self.rho * self.nu * sym(np.asarray(grad_u, dtype=float))

    def compute_eddy_viscosity(self, grad_u):
        return np.zeros(np.shape(grad_u)[:-2])

    def turbulent_kinetic_energy(self, n: int):
        return np.zeros(n)

    def compute_reynolds_stress(self, grad_u):
        return np.zeros(np.shape(grad_u))

    def apply_wall_function(self, wall: WallData):
        return None

    def momentum_stress(self, grad_u):
        """(effective viscosity, explicit stress) for the momentum equation."""
        grad_u = np.asarray(grad_u, dtype=float)
        mu_t = self.compute_eddy_viscosity(grad_u)
        eff_mu = self.rho * self.nu + mu_t
        explicit = mu_t[..., None, None] * dev(trn(grad_u), 2.0)
        return eff_mu, explicit


class EddyViscosityModel(TurbulenceModel):
    """Boussinesq closures; subclasses supply ``_eddy_mu``."""
    capabilities = frozenset({Capability.EDDY_VISCOSITY, Capability.REYNOLDS_STRESS,
                              Capability.WALL_FUNCTION})
    default_wall_model = WallModel.STANDARD

    def __init__(self, rho: float = 1.0, nu: float = 1e-5, *,
                 strain_measure: StrainMeasure = StrainMeasure.SMAGORINSKY,
                 wall_model: WallModel | None = None, law_of_wall: LawOfWall | None = None):
        super().__init__(rho, nu)
        self.strain_measure = StrainMeasure(strain_measure)
        self.wall_model = WallModel(wall_model or self.default_wall_model)
        self.law_of_wall = law_of_wall or LawOfWall()
        self.eddy_mu = None

    def _eddy_mu(self, grad_u, S2):
        raise NotImplementedError

    def compute_eddy_viscosity(self, grad_u):
        grad_u = np.asarray(grad_u, dtype=float)
        S2 = strain_rate_sq(grad_u, self.strain_measure)
        self.eddy_mu = np.asarray(self._eddy_mu(grad_u, S2), dtype=float)
        logger.debug(f"{type(self).__name__}: mu_t in [{self.eddy_mu.min():.3e}, {self.eddy_mu.max():.3e}]")
        return self.eddy_mu

    def compute_reynolds_stress(self, grad_u):
        grad_u = np.asarray(grad_u, dtype=float)
        if self.eddy_mu is None or self.eddy_mu.shape != grad_u.shape[:-2]:
            self.compute_eddy_viscosity(grad_u)
        k = self.turbulent_kinetic_energy(self.eddy_mu.size).reshape(self.eddy_mu.shape)
        return (2.0 * self.eddy_mu[..., None, None] * dev(sym(grad_u))
                - (2.0 * self.rho * k / 3.0)[..., None, None] * I3)

    def _wall_eddy_mu(self, ustar, y):
        yp = ustar * y / self.nu
        up = self.law_of_wall.up(yp)
        return self.rho * self.nu * (yp / up - 1.0)

    def apply_wall_function(self, wall: WallData):
        """Overwrite mu_t in the wall cells with the law-of-the-wall value."""
        if self.wall_model is WallModel.NONE:
            return None
        if self.eddy_mu is None:
            raise RuntimeError("compute_eddy_viscosity must run before apply_wall_function")
        ustar = self.law_of_wall.ustar(self.nu, wall.u_mag, wall.y)
        self.eddy_mu[wall.cells] = self._wall_eddy_mu(ustar, wall.y)
        return ustar


class MixingLengthModel(EddyViscosityModel):
    """mu_t = rho (C l)^2 sqrt(S2), with l the local length scale (e.g. cell size)."""
    kind = ModelKind.MIXING_LENGTH

    def __init__(self, rho: float = 1.0, nu: float = 1e-5, *, length=1.0, C: float = 0.17, **kw):
        super().__init__(rho, nu, **kw)
        self.length = np.asarray(length, dtype=float)
        self.C = float(C)

    def _eddy_mu(self, grad_u, S2):
        return self.rho * (self.C * self.length) ** 2 * np.sqrt(S2)


class KXModel(EddyViscosityModel):
    """Two-equation k-x models; x is epsilon or omega.

    The transport of k and x is solved outside this package. The model only
    carries the coefficients that solver reads: the diffusion numbers
    ``SigmaK``/``SigmaX``, the source constants ``C1x``/``C2x`` and the
    under-relaxation factors ``k_UR``/``x_UR``.
    """
    default_wall_model = WallModel.LAUNDER
    x_name = "x"

    def __init__(self, rho: float = 1.0, nu: float = 1e-5, *, k=None, x=None,
                 Cmu: float = 0.09, k_UR: float = 0.7, x_UR: float = 0.7, **kw):
        super().__init__(rho, nu, **kw)
        self.Cmu = float(Cmu)
        self.k_UR = float(k_UR)
        self.x_UR = float(x_UR)
        self.k = None if k is None else np.array(k, dtype=float)
        self.x = None if x is None else np.array(x, dtype=float)
        self.Pk = None

    def set_fields(self, k, x):
        self.k = np.array(k, dtype=float)
        self.x = np.array(x, dtype=float)
        if self.k.shape != self.x.shape:
            raise ValueError(f"k {self.k.shape} and {self.x_name} {self.x.shape} differ in shape")

    def _require_fields(self):
        if self.k is None or self.x is None:
            raise RuntimeError(f"{type(self).__name__} needs k and {self.x_name}; call set_fields first")

    def turbulent_kinetic_energy(self, n: int):
        self._require_fields()
        return self.k

    def calc_x(self, ustar, kappa, y):
        raise NotImplementedError

    def compute_eddy_viscosity(self, grad_u):
        self._require_fields()
        grad_u = np.asarray(grad_u, dtype=float)
        S2 = strain_rate_sq(grad_u, self.strain_measure)
        self.eddy_mu = np.asarray(self._eddy_mu(grad_u, S2), dtype=float)
        self.Pk = S2 * self.eddy_mu
        return self.eddy_mu

    def apply_wall_function(self, wall: WallData):
        """Wall values of u*, k, x, mu_t and (Launder-Spalding) production."""
        if self.wall_model is WallModel.NONE:
            return None
        self._require_fields()
        if self.eddy_mu is None:
            raise RuntimeError("compute_eddy_viscosity must run before apply_wall_function")
        c, y = wall.cells, wall.y
        kappa = self.law_of_wall.kappa

        if self.wall_model is WallModel.STANDARD:
            ustar = self.law_of_wall.ustar(self.nu, wall.u_mag, y)
            self.k[c] = ustar ** 2 / np.sqrt(self.Cmu)
        else:
            ustar = self.Cmu ** 0.25 * np.sqrt(self.k[c])
        self.x[c] = self.calc_x(ustar, kappa, y)
        self.eddy_mu[c] = self._wall_eddy_mu(ustar, y)

        if self.wall_model is WallModel.LAUNDER:
            mag_dudy = wall.u_mag / y
            mag_dudy_log = ustar / (kappa * y)
            self.Pk[c] = mag_dudy * mag_dudy_log * self.eddy_mu[c]
        return ustar


class KEpsilonModel(KXModel):
    """Standard k-epsilon: mu_t = rho Cmu k^2 / eps."""
    kind = ModelKind.K_EPSILON
    x_name = "epsilon"

    def __init__(self, rho: float = 1.0, nu: float = 1e-5, *, SigmaK: float = 1.0,
                 SigmaX: float = 1.3, C1x: float = 1.44, C2x: float = 1.92, **kw):
        super().__init__(rho, nu, **kw)
        self.SigmaK, self.SigmaX, self.C1x, self.C2x = SigmaK, SigmaX, C1x, C2x

    def _eddy_mu(self, grad_u, S2):
        return self.rho * self.Cmu * self.k ** 2 / np.maximum(self.x, np.finfo(float).tiny)

    def calc_x(self, ustar, kappa, y):
        return ustar ** 3 / (kappa * y)


class KOmegaModel(KXModel):
    """Wilcox k-omega: mu_t = rho k / omega."""
    kind = ModelKind.K_OMEGA
    x_name = "omega"

    def __init__(self, rho: float = 1.0, nu: float = 1e-5, *, SigmaK: float = 0.5,
                 SigmaX: float = 0.5, C1x: float = 5.0 / 9.0, C2x: float = 0.075, **kw):
        super().__init__(rho, nu, **kw)
        self.SigmaK, self.SigmaX, self.C1x, self.C2x = SigmaK, SigmaX, C1x, C2x

    def _eddy_mu(self, grad_u, S2):
        return self.rho * self.k / np.maximum(self.x, np.finfo(float).tiny)

    def calc_x(self, ustar, kappa, y):
        return ustar / (np.sqrt(self.Cmu) * kappa * y)


_MODELS = {
    ModelKind.LAMINAR: TurbulenceModel,
    ModelKind.MIXING_LENGTH: MixingLengthModel,
    ModelKind.K_EPSILON: KEpsilonModel,
    ModelKind.K_OMEGA: KOmegaModel,
}


def create_model(kind, **params) -> TurbulenceModel:
    """Instantiate the closure selected by ``kind`` (ModelKind or its value)."""
    try:
        kind = ModelKind(kind)
    except ValueError:
        raise ConfigurationError(
            f"Unknown turbulence model '{kind}'. Expected one of {[m.value for m in ModelKind]}.") from None
    model = _MODELS[kind](**params)
    logger.info(f"Turbulence model: {model!r}")
    return model
