"""
Contract Validation Module

Модуль для валидации JSON контрактов bonding curve pricer'а.
"""

from .validators import (
    ContractValidator,
    CurveStateValidator,
    PurchaseRequestValidator,
    SaleRequestValidator,
    SchemaLoader,
    validate_curve_state_payload,
    validate_purchase_request_payload,
    validate_sale_request_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CurveStateValidator",
    "PurchaseRequestValidator",
    "SaleRequestValidator",
    # Functions
    "validate_curve_state_payload",
    "validate_purchase_request_payload",
    "validate_sale_request_payload",
]
