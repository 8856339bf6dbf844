"""
CurveState — Модели состояния bonding curve и запросов

Immutable Pydantic модели, которые передаются pricer'у на каждом вызове.
Pricer не хранит состояние: внешний ledger сохраняет state_after из quote.

Модели не проверяют инварианты кривой при создании (кроме типов):
нарушения выявляет pricer и сообщает через InvalidState / InvalidInput.
Совместимость с JSON Schema: contracts/schema/{curve_state,purchase_request,sale_request}.json.
"""

from pydantic import BaseModel, Field

from src.core.math.bonding_curve import is_bootstrap_state


# =============================================================================
# FLOAT МОДЕЛИ
# =============================================================================


class CurveState(BaseModel):
    """
    Позиция на bonding curve.

    Инварианты (проверяются pricer'ом):
    - total_supply ≥ 0, reserve_balance ≥ 0, оба конечны
    - total_supply == 0 ⇔ reserve_balance == 0
    """

    total_supply: float = Field(..., description="Текущий supply токена")
    reserve_balance: float = Field(..., description="Reserve currency на кривой")

    model_config = {"frozen": True}

    @classmethod
    def origin(cls) -> "CurveState":
        """Неинициализированная кривая (S = 0, R = 0)."""
        return cls(total_supply=0.0, reserve_balance=0.0)

    def is_bootstrap(self) -> bool:
        """Следующая покупка будет bootstrap-покупкой."""
        return is_bootstrap_state(self.total_supply, self.reserve_balance)


class PurchaseRequest(BaseModel):
    """Покупка токенов за депозит reserve currency."""

    deposit_amount: float = Field(..., description="Депозит reserve currency (> 0)")

    model_config = {"frozen": True}


class SaleRequest(BaseModel):
    """Продажа токенов обратно в кривую."""

    sell_amount: float = Field(..., description="Продаваемые токены (0 ≤ a ≤ total_supply)")

    model_config = {"frozen": True}


class PurchaseQuote(BaseModel):
    """
    Результат покупки.

    state_after — состояние, которое внешний ledger должен сохранить.
    """

    tokens_minted: float = Field(..., ge=0, description="Выпущенные токены")
    deposit_amount: float = Field(..., gt=0, description="Принятый депозит")
    is_bootstrap: bool = Field(..., description="Покупка по bootstrap-правилу (S = R = 0)")
    state_before: CurveState
    state_after: CurveState

    model_config = {"frozen": True}


class SaleQuote(BaseModel):
    """
    Результат продажи.

    net_reserve_returned = reserve_returned - withdrawal_fee.
    Комиссия остаётся в reserve кривой.
    """

    sell_amount: float = Field(..., ge=0, description="Проданные токены")
    reserve_returned: float = Field(..., ge=0, description="Gross reserve по формуле кривой")
    withdrawal_fee: float = Field(..., ge=0, description="Комиссия за вывод")
    net_reserve_returned: float = Field(..., ge=0, description="Reserve к выплате продавцу")
    state_before: CurveState
    state_after: CurveState

    model_config = {"frozen": True}


# =============================================================================
# FIXED-POINT МОДЕЛИ (wei)
# =============================================================================


class FixedPointCurveState(BaseModel):
    """Позиция на bonding curve в минимальных единицах (10**decimals)."""

    total_supply_wei: int = Field(..., description="Supply токена в минимальных единицах")
    reserve_balance_wei: int = Field(..., description="Reserve в wei")

    model_config = {"frozen": True}

    @classmethod
    def origin(cls) -> "FixedPointCurveState":
        return cls(total_supply_wei=0, reserve_balance_wei=0)

    def is_bootstrap(self) -> bool:
        return is_bootstrap_state(self.total_supply_wei, self.reserve_balance_wei)


class FixedPointPurchaseRequest(BaseModel):
    deposit_wei: int = Field(..., description="Депозит в wei (> 0)")

    model_config = {"frozen": True}


class FixedPointSaleRequest(BaseModel):
    sell_amount_wei: int = Field(..., description="Продаваемые токены в минимальных единицах")

    model_config = {"frozen": True}


class FixedPointPurchaseQuote(BaseModel):
    tokens_minted_wei: int = Field(..., ge=0)
    deposit_wei: int = Field(..., gt=0)
    is_bootstrap: bool
    state_before: FixedPointCurveState
    state_after: FixedPointCurveState

    model_config = {"frozen": True}


class FixedPointSaleQuote(BaseModel):
    sell_amount_wei: int = Field(..., ge=0)
    reserve_returned_wei: int = Field(..., ge=0)
    withdrawal_fee_wei: int = Field(..., ge=0)
    net_reserve_returned_wei: int = Field(..., ge=0)
    state_before: FixedPointCurveState
    state_after: FixedPointCurveState

    model_config = {"frozen": True}
