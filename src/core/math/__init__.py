"""
Core math modules для bonding curve pricer

Формулы кривой (float и fixed-point) и численные примитивы.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_ROUND_TRIP_REL,
    is_close,
    is_valid_float,
    is_within,
)

# Bonding Curve
from src.core.math.bonding_curve import (
    DEFAULT_BOOTSTRAP_RATIO,
    INITIAL_TOKEN_SUPPLY,
    MUST_SEND_ETHER_MESSAGE,
    RESERVE_RATIO,
    WITHDRAWAL_FEE_PERCENTAGE,
    InvalidInput,
    InvalidState,
    PricingError,
    PricingErrorCode,
    calculate_purchase_return,
    calculate_sale_return,
    calculate_spot_price,
    is_bootstrap_state,
    validate_curve_state,
    validate_deposit,
    validate_sell_amount,
)

# Fixed Point
from src.core.math.fixed_point import (
    DEFAULT_DECIMALS,
    WEI_PER_ETHER,
    calculate_purchase_return_wei,
    calculate_sale_return_wei,
    format_units,
    parse_units,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_ROUND_TRIP_REL",
    # Numerical Safeguards — Functions
    "is_close",
    "is_valid_float",
    "is_within",
    # Bonding Curve — Constants
    "DEFAULT_BOOTSTRAP_RATIO",
    "INITIAL_TOKEN_SUPPLY",
    "MUST_SEND_ETHER_MESSAGE",
    "RESERVE_RATIO",
    "WITHDRAWAL_FEE_PERCENTAGE",
    # Bonding Curve — Exceptions
    "InvalidInput",
    "InvalidState",
    "PricingError",
    "PricingErrorCode",
    # Bonding Curve — Functions
    "calculate_purchase_return",
    "calculate_sale_return",
    "calculate_spot_price",
    "is_bootstrap_state",
    "validate_curve_state",
    "validate_deposit",
    "validate_sell_amount",
    # Fixed Point — Constants
    "DEFAULT_DECIMALS",
    "WEI_PER_ETHER",
    # Fixed Point — Functions
    "calculate_purchase_return_wei",
    "calculate_sale_return_wei",
    "format_units",
    "parse_units",
]
