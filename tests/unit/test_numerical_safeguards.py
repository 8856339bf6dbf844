"""
Тесты для Numerical Safeguards

Проверяемые инварианты:
1. NaN/Inf распознаются для float, int (включая очень большие wei) всегда конечен
2. is_close учитывает относительную и абсолютную толерантность
3. is_within реализует семантику closeTo(expected, delta)
"""

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    is_close,
    is_valid_float,
    is_within,
)


class TestIsValidFloat:
    """Тесты is_valid_float."""

    def test_finite_values(self):
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1e308)

    def test_nan_inf(self):
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_huge_int_is_finite(self):
        """int больше диапазона double не вызывает OverflowError."""
        assert is_valid_float(10**400)


class TestIsClose:
    """Тесты is_close."""

    def test_relative_tolerance(self):
        assert is_close(1e10, 1e10 + 1.0)
        assert not is_close(1.0, 1.1)

    def test_absolute_tolerance_near_zero(self):
        assert is_close(0.0, EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_close(0.0, 1e-6)

    def test_custom_tolerance(self):
        assert is_close(100.0, 101.0, rel_tol=0.02)


class TestIsWithin:
    """Тесты is_within: |actual - expected| <= delta."""

    @pytest.mark.parametrize(
        "actual, expected, delta, result",
        [
            (10.4, 10.0, 0.5, True),
            (9.5, 10.0, 0.5, True),
            (10.6, 10.0, 0.5, False),
            (10.0, 10.0, 0.0, True),
            (10**18 + 5, 10**18, 10, True),
        ],
    )
    def test_band(self, actual, expected, delta, result):
        assert is_within(actual, expected, delta) is result

    def test_negative_delta_rejected(self):
        with pytest.raises(ValueError, match="delta must be non-negative"):
            is_within(1.0, 1.0, -0.1)

    def test_nan_rejected(self):
        with pytest.raises(ValueError, match="NaN/Inf"):
            is_within(float("nan"), 1.0, 1.0)

        with pytest.raises(ValueError, match="NaN/Inf"):
            is_within(1.0, 1.0, float("inf"))
