"""
Numerical Safeguards — Float Primitives for Curve Pricing

Модуль содержит численные примитивы, общие для float-версии bonding curve:
- Проверка finite (NaN/Inf никогда не попадают в формулы)
- Epsilon-сравнения float с учётом машинной точности
- Сравнение "в пределах delta" (аналог closeTo(expected, delta))

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все функции чистые и детерминированные
2. NaN/Inf распознаются явно, а не пропагируют молча
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для сравнения float
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность для сравнения float
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Относительная толерантность round-trip (mint → sell обратно)
# Формулы взаимно обратны точно в вещественной арифметике,
# расхождение определяется только ошибкой округления double
EPS_ROUND_TRIP_REL: Final[float] = 1e-9


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли значение конечным числом (не NaN, не Inf).

    int (произвольной длины, например wei) всегда конечен: math.isfinite
    на int больше 1e308 бросает OverflowError, поэтому int не конвертируется.
    """
    if isinstance(value, int):
        return True
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_within(actual: float, expected: float, delta: float) -> bool:
    """
    Проверка |actual - expected| <= delta.

    Семантика closeTo(expected, delta): delta задаётся в абсолютных единицах
    (например, в wei или в токенах), а не относительно.

    Raises:
        ValueError: Если delta < 0 или любое значение NaN/Inf

    Examples:
        >>> is_within(10.4, 10.0, 0.5)
        True
        >>> is_within(10.6, 10.0, 0.5)
        False
    """
    for name, value in (("actual", actual), ("expected", expected), ("delta", delta)):
        if not is_valid_float(value):
            raise ValueError(f"{name} must be a valid number (not NaN/Inf), got {value}")

    if delta < 0:
        raise ValueError(f"delta must be non-negative, got {delta}")

    return abs(actual - expected) <= delta
