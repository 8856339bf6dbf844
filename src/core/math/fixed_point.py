"""
Fixed Point — Integer Curve Pricing in Wei

Fixed-point версия формул bonding curve: все величины — целые числа,
масштабированные на 10**decimals (по умолчанию 18, как wei для ether).

ПОЛИТИКА ОКРУГЛЕНИЯ: всегда вниз ("favor the pool").
- Выпущенные токены ≤ точного вещественного значения (нет over-issuance)
- Возвращённый reserve ≤ точного вещественного значения (нет over-payment)

ФОРМУЛЫ (точные floor вещественных формул):
    minted   = isqrt(S^2 * (R + d) // R) - S
    returned = R * a * (2S - a) // S^2

Вывод:
    S * sqrt((R + d) / R) = sqrt(S^2 * (R + d) / R), а isqrt(floor(y)) = floor(sqrt(y))
    R * (1 - (1 - a/S)^2) = R * a * (2S - a) / S^2

Полный выкуп (a = S): R * S * S // S^2 = R точно.
"""

import math
from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import Final, Union

from src.core.math.bonding_curve import (
    is_bootstrap_state,
    validate_curve_state,
    validate_deposit,
    validate_sell_amount,
)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Число десятичных знаков reserve currency (ether → wei)
DEFAULT_DECIMALS: Final[int] = 18

# 1 ether в wei
WEI_PER_ETHER: Final[int] = 10**DEFAULT_DECIMALS


# =============================================================================
# КОНВЕРСИЯ ЕДИНИЦ
# =============================================================================


def parse_units(value: Union[str, int, Decimal], decimals: int = DEFAULT_DECIMALS) -> int:
    """
    Конверсия десятичного значения в целые единицы (аналог parseEther/parseUnits).

    Конверсия точная: значение с большим числом знаков, чем decimals,
    отвергается, а не округляется. float не принимается — его двоичное
    представление не точно (используйте str).

    Raises:
        ValueError: некорректная строка, NaN/Inf, лишние знаки или decimals < 0
        TypeError: value имеет тип float

    Examples:
        >>> parse_units("1")
        1000000000000000000
        >>> parse_units("0.5", decimals=6)
        500000
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    if isinstance(value, float):
        raise TypeError("parse_units does not accept float; pass a str or Decimal")

    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid decimal value: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Value must be finite, got {value!r}")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + decimals + 1)
        scaled = amount.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise ValueError(f"Value {value!r} has more than {decimals} decimal places")

    return int(scaled)


def format_units(wei: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """
    Конверсия целых единиц в Decimal (аналог formatUnits).

    Examples:
        >>> format_units(1500000000000000000)
        Decimal('1.500000000000000000')
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    _require_int("wei", wei)

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(abs(wei))) + 1)
        return Decimal(wei).scaleb(-decimals)


# =============================================================================
# FIXED-POINT ФОРМУЛЫ
# =============================================================================


def _require_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int (wei), got {type(value).__name__}")


def calculate_purchase_return_wei(
    total_supply_wei: int,
    reserve_balance_wei: int,
    deposit_wei: int,
    bootstrap_ratio: Union[int, Decimal] = 1,
) -> int:
    """
    Fixed-point purchase return (округление вниз).

    Args:
        total_supply_wei: Supply токена в минимальных единицах
        reserve_balance_wei: Reserve в wei
        deposit_wei: Депозит в wei (> 0)
        bootstrap_ratio: Токенов за единицу reserve при S = R = 0
            (int или Decimal, результат округляется вниз)

    Returns:
        Выпущенные токены в минимальных единицах

    Raises:
        TypeError: аргументы не int
        InvalidInput: deposit_wei ≤ 0
        InvalidState: состояние нарушает инварианты

    Examples:
        >>> calculate_purchase_return_wei(100, 100, 300)
        100
        >>> calculate_purchase_return_wei(100, 100, 1)  # 100 * (sqrt(1.01) - 1) = 0.4987...
        0
    """
    _require_int("total_supply_wei", total_supply_wei)
    _require_int("reserve_balance_wei", reserve_balance_wei)
    _require_int("deposit_wei", deposit_wei)

    validate_curve_state(total_supply_wei, reserve_balance_wei)
    validate_deposit(deposit_wei)

    if is_bootstrap_state(total_supply_wei, reserve_balance_wei):
        return math.floor(Fraction(bootstrap_ratio) * deposit_wei)

    radicand = total_supply_wei * total_supply_wei * (reserve_balance_wei + deposit_wei)
    return math.isqrt(radicand // reserve_balance_wei) - total_supply_wei


def calculate_sale_return_wei(
    total_supply_wei: int,
    reserve_balance_wei: int,
    sell_amount_wei: int,
) -> int:
    """
    Fixed-point sale return (округление вниз).

    Raises:
        TypeError: аргументы не int
        InvalidState: S = 0 или состояние нарушает инварианты
        InvalidInput: a < 0 или a > S

    Examples:
        >>> calculate_sale_return_wei(100, 100, 50)
        75
        >>> calculate_sale_return_wei(3, 10, 1)  # 10 * 5 / 9 = 5.55...
        5
    """
    _require_int("total_supply_wei", total_supply_wei)
    _require_int("reserve_balance_wei", reserve_balance_wei)
    _require_int("sell_amount_wei", sell_amount_wei)

    validate_curve_state(total_supply_wei, reserve_balance_wei)
    validate_sell_amount(sell_amount_wei, total_supply_wei)

    numerator = reserve_balance_wei * sell_amount_wei * (2 * total_supply_wei - sell_amount_wei)
    return numerator // (total_supply_wei * total_supply_wei)
