from .models import (
    ModelKind, Capability, StrainMeasure, strain_rate_sq, create_model,
    TurbulenceModel, EddyViscosityModel, MixingLengthModel, KXModel, KEpsilonModel, KOmegaModel,
)
from .wall import LawOfWall, WallData, WallModel

__all__ = [
    "ModelKind", "Capability", "StrainMeasure", "strain_rate_sq", "create_model",
    "TurbulenceModel", "EddyViscosityModel", "MixingLengthModel", "KXModel",
    "KEpsilonModel", "KOmegaModel", "LawOfWall", "WallData", "WallModel",
]
