from .legendre import legendre
from .quadrature import (
    legendre_gauss, legendre_gauss_lobatto, quadrature_rule, hex_rule, integrate,
)

__all__ = ["legendre", "legendre_gauss", "legendre_gauss_lobatto",
           "quadrature_rule", "hex_rule", "integrate"]
