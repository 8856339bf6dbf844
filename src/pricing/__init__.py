"""
Bonding curve pricers.

- BondingCurvePricer: float pricing
- FixedPointBondingCurvePricer: integer (wei) pricing, округление в пользу пула
"""

from src.pricing.fixed_point_pricer import FixedPointBondingCurvePricer
from src.pricing.pricer import BondingCurvePricer, PricerConfig

__all__ = [
    "BondingCurvePricer",
    "FixedPointBondingCurvePricer",
    "PricerConfig",
]
