"""
Bonding Curve — Quadratic Curve Pricing (Reserve Ratio 0.5)

Модуль вычисляет обмен reserve currency ↔ token по фиксированной bonding curve
с постоянным reserve ratio = 0.5 (квадратичная кривая: price ∝ supply):

ФОРМУЛЫ:
    purchase_return = S * (sqrt(1 + d / R) - 1)          (токены за депозит d)
    sale_return     = R * (1 - (1 - a / S)^2)           (reserve за продажу a)
    spot_price      = R / (S * RESERVE_RATIO)           (маржинальная цена)

где S = total_supply, R = reserve_balance.

BOOTSTRAP (S = 0, R = 0):
    Формула purchase_return не определена (деление на ноль). Первая покупка
    обрабатывается отдельным правилом: tokens = d * bootstrap_ratio
    (по умолчанию 1:1), после чего состояние {S = d * ratio, R = d}.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. R > 0 тогда и только тогда, когда S > 0 (кривая начинается в origin)
2. sale_return(S) == R точно (полный выкуп опустошает reserve)
3. sale_return(0) == 0 точно
4. Нарушение инвариантов состояния → InvalidState, некорректный запрос → InvalidInput
5. NaN никогда не возвращается
"""

import math
from enum import Enum
from typing import Final

from src.core.math.numerical_safeguards import is_valid_float

# =============================================================================
# ПАРАМЕТРЫ КРИВОЙ
# =============================================================================

# Reserve ratio кривой (фиксирован: квадратичная кривая)
RESERVE_RATIO: Final[float] = 0.5

# Начальный supply токена в исходном контракте (для сценариев)
INITIAL_TOKEN_SUPPLY: Final[int] = 100_000

# Комиссия за вывод (в процентах) исходного контракта
WITHDRAWAL_FEE_PERCENTAGE: Final[float] = 10.0

# Коэффициент bootstrap: токенов за единицу reserve в первой покупке
DEFAULT_BOOTSTRAP_RATIO: Final[float] = 1.0

# Сообщение об отказе при покупке без депозита
MUST_SEND_ETHER_MESSAGE: Final[str] = "ERC20: Must send ether to buy tokens."


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PricingErrorCode(str, Enum):
    """Машиночитаемый код ошибки pricing."""

    # InvalidInput
    DEPOSIT_REQUIRED = "DEPOSIT_REQUIRED"
    DEPOSIT_NOT_FINITE = "DEPOSIT_NOT_FINITE"
    DEPOSIT_TOO_SMALL = "DEPOSIT_TOO_SMALL"
    SELL_AMOUNT_NEGATIVE = "SELL_AMOUNT_NEGATIVE"
    SELL_AMOUNT_NOT_FINITE = "SELL_AMOUNT_NOT_FINITE"
    SELL_AMOUNT_EXCEEDS_SUPPLY = "SELL_AMOUNT_EXCEEDS_SUPPLY"
    RESULT_OVERFLOW = "RESULT_OVERFLOW"

    # InvalidState
    BALANCE_NOT_FINITE = "BALANCE_NOT_FINITE"
    NEGATIVE_SUPPLY = "NEGATIVE_SUPPLY"
    NEGATIVE_RESERVE = "NEGATIVE_RESERVE"
    INCONSISTENT_ZERO_STATE = "INCONSISTENT_ZERO_STATE"
    EMPTY_SUPPLY = "EMPTY_SUPPLY"


class PricingError(ValueError):
    """
    Базовая ошибка pricing.

    Идентичность ошибки — класс и code, а не текст: message предназначен
    для человека (например, для revert reason во внешнем контракте).
    """

    def __init__(self, code: PricingErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class InvalidInput(PricingError):
    """
    Запрос вне домена: депозит ≤ 0 / NaN / Inf, sell_amount вне [0, S],
    либо результат не представим конечным float (RESULT_OVERFLOW).
    """


class InvalidState(PricingError):
    """
    CurveState нарушает инварианты: отрицательные или NaN балансы,
    несогласованное нулевое состояние, продажа при нулевом supply.

    Трактуется как ошибка интеграции вызывающей стороны: не восстанавливается.
    """


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_curve_state(total_supply: float, reserve_balance: float) -> None:
    """
    Проверка инвариантов состояния кривой.

    Работает одинаково для float (единицы токена) и int (wei).

    Raises:
        InvalidState: NaN/Inf, отрицательные балансы или S = 0 xor R = 0
    """
    if not is_valid_float(total_supply) or not is_valid_float(reserve_balance):
        raise InvalidState(
            PricingErrorCode.BALANCE_NOT_FINITE,
            f"Curve balances must be finite, got total_supply={total_supply}, "
            f"reserve_balance={reserve_balance}",
        )

    if total_supply < 0:
        raise InvalidState(
            PricingErrorCode.NEGATIVE_SUPPLY,
            f"total_supply cannot be negative: {total_supply}",
        )

    if reserve_balance < 0:
        raise InvalidState(
            PricingErrorCode.NEGATIVE_RESERVE,
            f"reserve_balance cannot be negative: {reserve_balance}",
        )

    if (total_supply == 0) != (reserve_balance == 0):
        raise InvalidState(
            PricingErrorCode.INCONSISTENT_ZERO_STATE,
            f"Inconsistent curve state: total_supply={total_supply}, "
            f"reserve_balance={reserve_balance} (both must be zero or both positive)",
        )


def validate_deposit(deposit_amount: float) -> None:
    """
    Проверка депозита покупки.

    Raises:
        InvalidInput: депозит NaN/Inf или ≤ 0
    """
    if not is_valid_float(deposit_amount):
        raise InvalidInput(
            PricingErrorCode.DEPOSIT_NOT_FINITE,
            f"deposit_amount must be finite, got {deposit_amount}",
        )

    if deposit_amount <= 0:
        raise InvalidInput(PricingErrorCode.DEPOSIT_REQUIRED, MUST_SEND_ETHER_MESSAGE)


def validate_sell_amount(sell_amount: float, total_supply: float) -> None:
    """
    Проверка объёма продажи относительно текущего supply.

    Raises:
        InvalidState: total_supply == 0 (нечего продавать)
        InvalidInput: sell_amount NaN/Inf, < 0 или > total_supply
    """
    if total_supply == 0:
        raise InvalidState(
            PricingErrorCode.EMPTY_SUPPLY,
            "Cannot sell tokens: total_supply is zero",
        )

    if not is_valid_float(sell_amount):
        raise InvalidInput(
            PricingErrorCode.SELL_AMOUNT_NOT_FINITE,
            f"sell_amount must be finite, got {sell_amount}",
        )

    if sell_amount < 0:
        raise InvalidInput(
            PricingErrorCode.SELL_AMOUNT_NEGATIVE,
            f"sell_amount cannot be negative: {sell_amount}",
        )

    if sell_amount > total_supply:
        raise InvalidInput(
            PricingErrorCode.SELL_AMOUNT_EXCEEDS_SUPPLY,
            f"sell_amount {sell_amount} exceeds total_supply {total_supply}",
        )


# =============================================================================
# FLOAT ФОРМУЛЫ
# =============================================================================


def _require_finite_result(value: float, operation: str) -> float:
    if not is_valid_float(value):
        raise InvalidInput(
            PricingErrorCode.RESULT_OVERFLOW,
            f"{operation} result is not representable as a finite float: {value}",
        )
    return value


def is_bootstrap_state(total_supply: float, reserve_balance: float) -> bool:
    """Кривая не инициализирована (S = 0 и R = 0): следующая покупка — bootstrap."""
    return total_supply == 0 and reserve_balance == 0


def calculate_purchase_return(
    total_supply: float,
    reserve_balance: float,
    deposit_amount: float,
    bootstrap_ratio: float = DEFAULT_BOOTSTRAP_RATIO,
) -> float:
    """
    Количество токенов, выпускаемых за депозит reserve currency.

    Формула:
        S * (sqrt(1 + d/R) - 1)

    Вычисляется в эквивалентной форме без катастрофического сокращения:
        S * (x / (sqrt(1 + x) + 1)),   x = d / R

    (при d << R разность sqrt(1 + x) - 1 теряет значащие разряды)

    Args:
        total_supply: Текущий supply токена (S ≥ 0)
        reserve_balance: Текущий reserve (R ≥ 0)
        deposit_amount: Депозит reserve currency (d > 0)
        bootstrap_ratio: Токенов за единицу reserve при S = R = 0

    Returns:
        Количество выпускаемых токенов (> 0 для валидных входов)

    Raises:
        InvalidInput: депозит ≤ 0 или NaN/Inf
        InvalidInput: результат не представим конечным float (RESULT_OVERFLOW)
        InvalidState: состояние нарушает инварианты

    Examples:
        >>> calculate_purchase_return(100.0, 100.0, 300.0)  # 100 * (sqrt(4) - 1)
        100.0
        >>> calculate_purchase_return(0.0, 0.0, 1.0)  # bootstrap 1:1
        1.0
    """
    validate_curve_state(total_supply, reserve_balance)
    validate_deposit(deposit_amount)

    if is_bootstrap_state(total_supply, reserve_balance):
        return _require_finite_result(deposit_amount * bootstrap_ratio, "purchase_return")

    # Множитель sqrt(1 + x) - 1 ~ sqrt(x) вычисляется до умножения на S
    x = deposit_amount / reserve_balance
    if math.isinf(x):
        # d / R вне float: sqrt(1 + x) = sqrt(x) с точностью float
        growth = math.sqrt(deposit_amount) / math.sqrt(reserve_balance) - 1.0
    else:
        growth = x / (math.sqrt(1.0 + x) + 1.0)

    minted = total_supply * growth
    return _require_finite_result(minted, "purchase_return")


def calculate_sale_return(
    total_supply: float,
    reserve_balance: float,
    sell_amount: float,
) -> float:
    """
    Количество reserve currency, возвращаемое за продажу токенов.

    Формула:
        R * (1 - (1 - a/S)^2)

    Вычисляется в эквивалентной форме R * (f * (2 - f)), f = a / S:
    1 - (1 - f)^2 теряет разряды при малых f.

    Полный выкуп (a = S): f = 1.0 точно, результат R * 1.0 * 1.0 = R.

    Raises:
        InvalidState: S = 0 или состояние нарушает инварианты
        InvalidInput: a < 0, a > S или NaN/Inf

    Examples:
        >>> calculate_sale_return(100.0, 100.0, 50.0)  # 100 * (1 - 0.25)
        75.0
        >>> calculate_sale_return(100.0, 42.0, 100.0)
        42.0
    """
    validate_curve_state(total_supply, reserve_balance)
    validate_sell_amount(sell_amount, total_supply)

    sold_fraction = sell_amount / total_supply
    return reserve_balance * (sold_fraction * (2.0 - sold_fraction))


def calculate_spot_price(total_supply: float, reserve_balance: float) -> float:
    """
    Маржинальная цена токена в reserve currency.

    Для кривой с reserve ratio r: price = R / (S * r).
    При r = 0.5: price = 2R / S.

    Raises:
        InvalidState: S = 0 (цена не определена) или состояние невалидно
    """
    validate_curve_state(total_supply, reserve_balance)

    if total_supply == 0:
        raise InvalidState(
            PricingErrorCode.EMPTY_SUPPLY,
            "Spot price is undefined at zero total_supply",
        )

    return reserve_balance / (total_supply * RESERVE_RATIO)
