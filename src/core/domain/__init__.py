"""
Domain models and value objects.

Contains the bonding curve state, purchase/sale requests and quotes.
"""

from src.core.domain.curve_state import (
    CurveState,
    FixedPointCurveState,
    FixedPointPurchaseQuote,
    FixedPointPurchaseRequest,
    FixedPointSaleQuote,
    FixedPointSaleRequest,
    PurchaseQuote,
    PurchaseRequest,
    SaleQuote,
    SaleRequest,
)

__all__ = [
    # Float models
    "CurveState",
    "PurchaseRequest",
    "SaleRequest",
    "PurchaseQuote",
    "SaleQuote",
    # Fixed-point models
    "FixedPointCurveState",
    "FixedPointPurchaseRequest",
    "FixedPointSaleRequest",
    "FixedPointPurchaseQuote",
    "FixedPointSaleQuote",
]
