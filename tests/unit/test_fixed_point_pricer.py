"""
Тесты для FixedPointBondingCurvePricer

Проверяет:
1. Bootstrap-покупку в wei (1 ether → 1e18 минимальных единиц)
2. Отказ от покупки, не выпускающей токенов (DEPOSIT_TOO_SMALL)
3. Комиссию за вывод с округлением вверх
4. Полный выкуп: кривая возвращается в origin
5. Согласованность с float pricer'ом
"""

import logging
from decimal import Decimal

import pytest

from src.core.domain import (
    CurveState,
    FixedPointCurveState,
    FixedPointPurchaseRequest,
    FixedPointSaleRequest,
    PurchaseRequest,
)
from src.core.math.bonding_curve import (
    INITIAL_TOKEN_SUPPLY,
    MUST_SEND_ETHER_MESSAGE,
    InvalidInput,
    PricingErrorCode,
    validate_curve_state,
)
from src.core.math.fixed_point import WEI_PER_ETHER, format_units, parse_units
from src.core.math.numerical_safeguards import is_within
from src.pricing import BondingCurvePricer, FixedPointBondingCurvePricer, PricerConfig


@pytest.fixture
def pricer() -> FixedPointBondingCurvePricer:
    return FixedPointBondingCurvePricer()


@pytest.fixture
def state() -> FixedPointCurveState:
    return FixedPointCurveState(
        total_supply_wei=INITIAL_TOKEN_SUPPLY * WEI_PER_ETHER,
        reserve_balance_wei=parse_units("12.5"),
    )


class TestFixedPointPurchase:
    """Покупка в wei."""

    def test_bootstrap_one_ether(self, pricer, caplog):
        caplog.set_level(logging.INFO, logger="src.pricing.fixed_point_pricer")

        quote = pricer.apply_purchase(
            FixedPointCurveState.origin(), FixedPointPurchaseRequest(deposit_wei=WEI_PER_ETHER)
        )

        assert quote.is_bootstrap is True
        assert quote.tokens_minted_wei == WEI_PER_ETHER
        assert quote.state_after == FixedPointCurveState(
            total_supply_wei=WEI_PER_ETHER, reserve_balance_wei=WEI_PER_ETHER
        )
        assert "Bootstrap purchase" in caplog.text

    def test_bootstrap_ratio_from_config(self):
        pricer = FixedPointBondingCurvePricer(PricerConfig(bootstrap_ratio=0.1))

        quote = pricer.apply_purchase(
            FixedPointCurveState.origin(), FixedPointPurchaseRequest(deposit_wei=25)
        )

        assert quote.tokens_minted_wei == 2

    def test_infinite_bootstrap_ratio_rejected(self):
        """Бесконечный ratio отвергается при создании конфигурации."""
        with pytest.raises(ValueError, match="bootstrap_ratio"):
            FixedPointBondingCurvePricer(PricerConfig(bootstrap_ratio=float("inf")))

    def test_one_ether_purchase(self, pricer, state):
        """Выпуск > 0 и в пределах 1 ether от float-формулы."""
        quote = pricer.apply_purchase(state, FixedPointPurchaseRequest(deposit_wei=WEI_PER_ETHER))

        float_minted = BondingCurvePricer().purchase_return(
            CurveState(total_supply=float(INITIAL_TOKEN_SUPPLY), reserve_balance=12.5),
            PurchaseRequest(deposit_amount=1.0),
        )

        assert quote.tokens_minted_wei > 0
        assert is_within(quote.tokens_minted_wei, parse_units(repr(float_minted)), WEI_PER_ETHER)
        assert quote.state_after.reserve_balance_wei == parse_units("13.5")

    def test_zero_deposit(self, pricer, state):
        with pytest.raises(InvalidInput) as exc_info:
            pricer.apply_purchase(state, FixedPointPurchaseRequest(deposit_wei=0))
        assert exc_info.value.message == MUST_SEND_ETHER_MESSAGE

    def test_dust_deposit_rejected(self, pricer, caplog):
        """Депозит, не выпускающий ни одной единицы, отклоняется."""
        caplog.set_level(logging.WARNING, logger="src.pricing.fixed_point_pricer")
        state = FixedPointCurveState(total_supply_wei=100, reserve_balance_wei=100)

        assert pricer.purchase_return(state, FixedPointPurchaseRequest(deposit_wei=1)) == 0

        with pytest.raises(InvalidInput) as exc_info:
            pricer.apply_purchase(state, FixedPointPurchaseRequest(deposit_wei=1))

        assert exc_info.value.code is PricingErrorCode.DEPOSIT_TOO_SMALL
        assert "DEPOSIT_TOO_SMALL" in caplog.text


class TestFixedPointSale:
    """Продажа в wei."""

    def test_full_redemption(self, pricer, state):
        quote = pricer.apply_sale(
            state, FixedPointSaleRequest(sell_amount_wei=state.total_supply_wei)
        )

        assert quote.reserve_returned_wei == state.reserve_balance_wei
        assert quote.withdrawal_fee_wei == 0
        assert quote.state_after == FixedPointCurveState.origin()

    def test_fee_rounds_up(self):
        """gross 5 wei, комиссия 10% = 0.5 → 1 wei, net 4."""
        pricer = FixedPointBondingCurvePricer(PricerConfig(withdrawal_fee_pct=10.0))
        state = FixedPointCurveState(total_supply_wei=3, reserve_balance_wei=10)

        quote = pricer.apply_sale(state, FixedPointSaleRequest(sell_amount_wei=1))

        assert quote.reserve_returned_wei == 5
        assert quote.withdrawal_fee_wei == 1
        assert quote.net_reserve_returned_wei == 4
        assert quote.state_after == FixedPointCurveState(
            total_supply_wei=2, reserve_balance_wei=6
        )

    def test_withdrawal_fee_helper(self):
        pricer = FixedPointBondingCurvePricer(PricerConfig(withdrawal_fee_pct=10.0))
        assert pricer.withdrawal_fee(75 * WEI_PER_ETHER) == parse_units("7.5")
        assert pricer.withdrawal_fee(0) == 0

    def test_partial_sale_keeps_invariants(self, pricer, state):
        quote = pricer.apply_sale(
            state, FixedPointSaleRequest(sell_amount_wei=state.total_supply_wei - 1)
        )

        after = quote.state_after
        validate_curve_state(after.total_supply_wei, after.reserve_balance_wei)
        assert after.total_supply_wei == 1
        assert after.reserve_balance_wei >= 1

    def test_decimals_exposed(self):
        assert FixedPointBondingCurvePricer(PricerConfig(decimals=6)).decimals == 6


class TestFixedPointLifecycle:
    """Bootstrap → покупки → продажа всего supply → origin."""

    def test_cycle(self, pricer):
        current = FixedPointCurveState.origin()
        for deposit in ["1", "0.25", "3.000000000000000001"]:
            current = pricer.apply_purchase(
                current, FixedPointPurchaseRequest(deposit_wei=parse_units(deposit))
            ).state_after

        assert format_units(current.reserve_balance_wei) == Decimal("4.250000000000000001")

        final = pricer.apply_sale(
            current, FixedPointSaleRequest(sell_amount_wei=current.total_supply_wei)
        )
        assert final.net_reserve_returned_wei == parse_units("4.250000000000000001")
        assert final.state_after.is_bootstrap()
