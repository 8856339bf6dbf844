"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Детекция нарушений constraints (minimum, согласованное нулевое состояние)
- Интеграция с Pydantic моделями
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    CurveStateValidator,
    PurchaseRequestValidator,
    SaleRequestValidator,
    SchemaLoader,
    validate_curve_state_payload,
    validate_purchase_request_payload,
    validate_sale_request_payload,
)
from src.core.domain import CurveState, PurchaseRequest, SaleRequest
from src.pricing import BondingCurvePricer


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_curve_state():
    return {"total_supply": 100000.0, "reserve_balance": 12.5}


@pytest.fixture
def valid_purchase_request():
    return {"deposit_amount": 1.0}


@pytest.fixture
def valid_sale_request():
    return {"sell_amount": 500.0}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    @pytest.mark.parametrize("name", ["curve_state", "purchase_request", "sale_request"])
    def test_load_schema(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["title"] == name

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("curve_state") is loader.load_schema("curve_state")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("market_state")


# =============================================================================
# CURVE STATE
# =============================================================================


class TestCurveStateContract:
    """Тесты контракта curve_state."""

    def test_valid(self, valid_curve_state):
        validate_curve_state_payload(valid_curve_state)

    def test_origin_valid(self):
        validate_curve_state_payload({"total_supply": 0, "reserve_balance": 0})

    def test_zero_supply_positive_reserve(self):
        with pytest.raises(ValidationError):
            validate_curve_state_payload({"total_supply": 0, "reserve_balance": 5.0})

    def test_positive_supply_zero_reserve(self):
        with pytest.raises(ValidationError):
            validate_curve_state_payload({"total_supply": 5.0, "reserve_balance": 0})

    def test_negative_balance(self):
        assert not CurveStateValidator().is_valid({"total_supply": -1, "reserve_balance": 1})

    def test_missing_required(self, valid_curve_state):
        del valid_curve_state["reserve_balance"]
        with pytest.raises(ValidationError, match="reserve_balance"):
            validate_curve_state_payload(valid_curve_state)

    def test_wrong_type(self, valid_curve_state):
        valid_curve_state["total_supply"] = "100000"
        with pytest.raises(ValidationError):
            validate_curve_state_payload(valid_curve_state)

    def test_additional_properties(self, valid_curve_state):
        valid_curve_state["owner"] = "0xabc"
        with pytest.raises(ValidationError):
            validate_curve_state_payload(valid_curve_state)

    def test_iter_errors(self):
        errors = list(CurveStateValidator().iter_errors({"total_supply": "x"}))
        assert len(errors) >= 2


# =============================================================================
# REQUESTS
# =============================================================================


class TestRequestContracts:
    """Тесты контрактов purchase_request / sale_request."""

    def test_valid_purchase(self, valid_purchase_request):
        validate_purchase_request_payload(valid_purchase_request)

    def test_zero_deposit_invalid(self):
        assert not PurchaseRequestValidator().is_valid({"deposit_amount": 0})

    def test_valid_sale(self, valid_sale_request):
        validate_sale_request_payload(valid_sale_request)

    def test_zero_sale_valid(self):
        assert SaleRequestValidator().is_valid({"sell_amount": 0})

    def test_negative_sale_invalid(self):
        with pytest.raises(ValidationError):
            validate_sale_request_payload({"sell_amount": -1})


# =============================================================================
# INTEGRATION WITH PYDANTIC
# =============================================================================


class TestPydanticIntegration:
    """model_dump() моделей проходит контракты."""

    def test_models_match_contracts(self):
        validate_curve_state_payload(
            CurveState(total_supply=10.0, reserve_balance=2.0).model_dump()
        )
        validate_purchase_request_payload(PurchaseRequest(deposit_amount=3.0).model_dump())
        validate_sale_request_payload(SaleRequest(sell_amount=1.0).model_dump())

    def test_payload_to_quote(self, valid_curve_state, valid_purchase_request):
        """Payload → контракт → модель → pricer → state_after снова проходит контракт."""
        validate_curve_state_payload(valid_curve_state)
        validate_purchase_request_payload(valid_purchase_request)

        quote = BondingCurvePricer().apply_purchase(
            CurveState.model_validate(valid_curve_state),
            PurchaseRequest.model_validate(valid_purchase_request),
        )

        validate_curve_state_payload(quote.state_after.model_dump())

    def test_quote_states_after_sale(self, valid_curve_state):
        quote = BondingCurvePricer().apply_sale(
            CurveState.model_validate(valid_curve_state),
            SaleRequest(sell_amount=valid_curve_state["total_supply"]),
        )
        validate_curve_state_payload(quote.state_after.model_dump())
