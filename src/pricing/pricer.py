"""BondingCurvePricer — float pricing на кривой с reserve ratio 0.5.

Stateless компонент: состояние кривой передаётся на каждый вызов и не
хранится. Конфигурация (bootstrap ratio, комиссия за вывод) неизменяемая,
поэтому один экземпляр можно разделять между потоками.

Операции:
- purchase_return / sale_return — чистые формулы кривой
- spot_price — маржинальная цена
- apply_purchase / apply_sale — quote с состоянием после операции
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from src.core.domain.curve_state import (
    CurveState,
    PurchaseQuote,
    PurchaseRequest,
    SaleQuote,
    SaleRequest,
)
from src.core.math.bonding_curve import (
    DEFAULT_BOOTSTRAP_RATIO,
    PricingError,
    calculate_purchase_return,
    calculate_sale_return,
    calculate_spot_price,
)
from src.core.math.fixed_point import DEFAULT_DECIMALS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricerConfig:
    """Конфигурация pricer'а.

    - bootstrap_ratio: токенов за единицу reserve в первой покупке (S = R = 0)
    - withdrawal_fee_pct: комиссия за вывод в процентах от gross sale return,
      остаётся в reserve (0 по умолчанию; исходный контракт использовал 10)
    - decimals: масштаб fixed-point единиц (используется fixed-point pricer'ом)
    """
    bootstrap_ratio: float = DEFAULT_BOOTSTRAP_RATIO
    withdrawal_fee_pct: float = 0.0
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        if not (math.isfinite(self.bootstrap_ratio) and self.bootstrap_ratio > 0):
            raise ValueError(
                f"bootstrap_ratio must be positive and finite, got {self.bootstrap_ratio}"
            )
        if not 0 <= self.withdrawal_fee_pct < 100:
            raise ValueError(
                f"withdrawal_fee_pct must be in [0, 100), got {self.withdrawal_fee_pct}"
            )
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")


class BondingCurvePricer:
    """Float pricer для bonding curve с reserve ratio 0.5.

    Ошибки (InvalidInput / InvalidState) пробрасываются вызывающей стороне
    без повторов; перед пробросом отказ логируется на уровне WARNING.
    """

    def __init__(self, config: Optional[PricerConfig] = None):
        self.config = config or PricerConfig()

    # -------------------------------------------------------------------------
    # Чистые формулы
    # -------------------------------------------------------------------------

    def purchase_return(self, state: CurveState, request: PurchaseRequest) -> float:
        """Количество токенов, выпускаемых за request.deposit_amount."""
        try:
            return calculate_purchase_return(
                state.total_supply,
                state.reserve_balance,
                request.deposit_amount,
                bootstrap_ratio=self.config.bootstrap_ratio,
            )
        except PricingError as e:
            logger.warning("Purchase rejected [%s]: %s", e.code.value, e.message)
            raise

    def sale_return(self, state: CurveState, request: SaleRequest) -> float:
        """Gross reserve за продажу request.sell_amount (без комиссии)."""
        try:
            return calculate_sale_return(
                state.total_supply,
                state.reserve_balance,
                request.sell_amount,
            )
        except PricingError as e:
            logger.warning("Sale rejected [%s]: %s", e.code.value, e.message)
            raise

    def spot_price(self, state: CurveState) -> float:
        return calculate_spot_price(state.total_supply, state.reserve_balance)

    # -------------------------------------------------------------------------
    # Quotes с состоянием после операции
    # -------------------------------------------------------------------------

    def apply_purchase(self, state: CurveState, request: PurchaseRequest) -> PurchaseQuote:
        """Quote покупки и состояние кривой после неё."""
        tokens_minted = self.purchase_return(state, request)
        is_bootstrap = state.is_bootstrap()

        state_after = CurveState(
            total_supply=state.total_supply + tokens_minted,
            reserve_balance=state.reserve_balance + request.deposit_amount,
        )

        if is_bootstrap:
            logger.info(
                "Bootstrap purchase: deposit=%s minted=%s (ratio=%s)",
                request.deposit_amount, tokens_minted, self.config.bootstrap_ratio,
            )
        else:
            logger.debug(
                "Purchase quote: deposit=%s minted=%s supply=%s->%s",
                request.deposit_amount, tokens_minted,
                state.total_supply, state_after.total_supply,
            )

        return PurchaseQuote(
            tokens_minted=tokens_minted,
            deposit_amount=request.deposit_amount,
            is_bootstrap=is_bootstrap,
            state_before=state,
            state_after=state_after,
        )

    def apply_sale(self, state: CurveState, request: SaleRequest) -> SaleQuote:
        """Quote продажи с учётом комиссии за вывод.

        Полный выкуп supply освобождается от комиссии: кривая должна
        вернуться в origin (S = 0 ⇔ R = 0).
        """
        reserve_returned = self.sale_return(state, request)

        full_redemption = request.sell_amount == state.total_supply
        if full_redemption:
            withdrawal_fee = 0.0
        else:
            withdrawal_fee = reserve_returned * self.config.withdrawal_fee_pct / 100.0
        net_reserve_returned = reserve_returned - withdrawal_fee

        if full_redemption:
            state_after = CurveState.origin()
        else:
            state_after = CurveState(
                total_supply=state.total_supply - request.sell_amount,
                reserve_balance=state.reserve_balance - net_reserve_returned,
            )

        logger.debug(
            "Sale quote: sell=%s gross=%s fee=%s net=%s",
            request.sell_amount, reserve_returned, withdrawal_fee, net_reserve_returned,
        )

        return SaleQuote(
            sell_amount=request.sell_amount,
            reserve_returned=reserve_returned,
            withdrawal_fee=withdrawal_fee,
            net_reserve_returned=net_reserve_returned,
            state_before=state,
            state_after=state_after,
        )
