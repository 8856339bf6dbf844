"""FixedPointBondingCurvePricer — pricing в целых единицах (wei).

Все результаты округляются в пользу пула:
- выпущенные токены и gross sale return — вниз
- комиссия за вывод — вверх (значит net к выплате — вниз)

Покупка, которая после округления не выпускает ни одной минимальной
единицы токена, отклоняется (InvalidInput DEPOSIT_TOO_SMALL) в
apply_purchase: депозит иначе был бы принят без выпуска токенов.
"""

import logging
import math
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from src.core.domain.curve_state import (
    FixedPointCurveState,
    FixedPointPurchaseQuote,
    FixedPointPurchaseRequest,
    FixedPointSaleQuote,
    FixedPointSaleRequest,
)
from src.core.math.bonding_curve import (
    InvalidInput,
    PricingError,
    PricingErrorCode,
)
from src.core.math.fixed_point import (
    calculate_purchase_return_wei,
    calculate_sale_return_wei,
    format_units,
)
from src.pricing.pricer import PricerConfig

logger = logging.getLogger(__name__)


class FixedPointBondingCurvePricer:
    """Fixed-point pricer для bonding curve с reserve ratio 0.5."""

    def __init__(self, config: Optional[PricerConfig] = None):
        self.config = config or PricerConfig()
        # str() убирает артефакты двоичного float (0.1 → Decimal('0.1'))
        self._bootstrap_ratio = Decimal(str(self.config.bootstrap_ratio))
        self._withdrawal_fee_frac = Fraction(str(self.config.withdrawal_fee_pct)) / 100

    @property
    def decimals(self) -> int:
        return self.config.decimals

    def purchase_return(
        self, state: FixedPointCurveState, request: FixedPointPurchaseRequest
    ) -> int:
        """Выпущенные токены в минимальных единицах (округление вниз)."""
        try:
            return calculate_purchase_return_wei(
                state.total_supply_wei,
                state.reserve_balance_wei,
                request.deposit_wei,
                bootstrap_ratio=self._bootstrap_ratio,
            )
        except PricingError as e:
            logger.warning("Purchase rejected [%s]: %s", e.code.value, e.message)
            raise

    def sale_return(self, state: FixedPointCurveState, request: FixedPointSaleRequest) -> int:
        """Gross reserve в wei за продажу (округление вниз, без комиссии)."""
        try:
            return calculate_sale_return_wei(
                state.total_supply_wei,
                state.reserve_balance_wei,
                request.sell_amount_wei,
            )
        except PricingError as e:
            logger.warning("Sale rejected [%s]: %s", e.code.value, e.message)
            raise

    def withdrawal_fee(self, reserve_returned_wei: int) -> int:
        """Комиссия за вывод в wei (округление вверх)."""
        return math.ceil(reserve_returned_wei * self._withdrawal_fee_frac)

    def apply_purchase(
        self, state: FixedPointCurveState, request: FixedPointPurchaseRequest
    ) -> FixedPointPurchaseQuote:
        tokens_minted_wei = self.purchase_return(state, request)
        is_bootstrap = state.is_bootstrap()

        if tokens_minted_wei == 0:
            error = InvalidInput(
                PricingErrorCode.DEPOSIT_TOO_SMALL,
                f"Deposit of {request.deposit_wei} wei mints zero tokens",
            )
            logger.warning("Purchase rejected [%s]: %s", error.code.value, error.message)
            raise error

        state_after = FixedPointCurveState(
            total_supply_wei=state.total_supply_wei + tokens_minted_wei,
            reserve_balance_wei=state.reserve_balance_wei + request.deposit_wei,
        )

        if is_bootstrap:
            logger.info(
                "Bootstrap purchase: deposit=%s minted=%s (ratio=%s)",
                format_units(request.deposit_wei, self.decimals),
                format_units(tokens_minted_wei, self.decimals),
                self._bootstrap_ratio,
            )
        else:
            logger.debug(
                "Purchase quote: deposit_wei=%d minted_wei=%d",
                request.deposit_wei, tokens_minted_wei,
            )

        return FixedPointPurchaseQuote(
            tokens_minted_wei=tokens_minted_wei,
            deposit_wei=request.deposit_wei,
            is_bootstrap=is_bootstrap,
            state_before=state,
            state_after=state_after,
        )

    def apply_sale(
        self, state: FixedPointCurveState, request: FixedPointSaleRequest
    ) -> FixedPointSaleQuote:
        """Quote продажи; полный выкуп освобождается от комиссии."""
        reserve_returned_wei = self.sale_return(state, request)

        full_redemption = request.sell_amount_wei == state.total_supply_wei
        withdrawal_fee_wei = 0 if full_redemption else self.withdrawal_fee(reserve_returned_wei)
        net_reserve_returned_wei = reserve_returned_wei - withdrawal_fee_wei

        state_after = FixedPointCurveState(
            total_supply_wei=state.total_supply_wei - request.sell_amount_wei,
            reserve_balance_wei=state.reserve_balance_wei - net_reserve_returned_wei,
        )

        logger.debug(
            "Sale quote: sell_wei=%d gross_wei=%d fee_wei=%d net_wei=%d",
            request.sell_amount_wei, reserve_returned_wei,
            withdrawal_fee_wei, net_reserve_returned_wei,
        )

        return FixedPointSaleQuote(
            sell_amount_wei=request.sell_amount_wei,
            reserve_returned_wei=reserve_returned_wei,
            withdrawal_fee_wei=withdrawal_fee_wei,
            net_reserve_returned_wei=net_reserve_returned_wei,
            state_before=state,
            state_after=state_after,
        )
