"""
JSON Schema Contract Validators

Модуль для валидации JSON payload'ов bonding curve согласно формальным
JSON Schema контрактам (Draft 2020-12, библиотека jsonschema).

Схемы:
- curve_state.json
- purchase_request.json
- sale_request.json

Контракты описывают границу с внешним ledger'ом: payload, прошедший схему,
строится в pydantic модель и передаётся pricer'у.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла (с кэшированием).

        Args:
            schema_name: Имя схемы без расширения (например, 'curve_state')

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class CurveStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("curve_state")


class PurchaseRequestValidator(ContractValidator):
    def __init__(self):
        super().__init__("purchase_request")


class SaleRequestValidator(ContractValidator):
    def __init__(self):
        super().__init__("sale_request")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_curve_state_payload(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют curve_state.json
    """
    CurveStateValidator().validate(data)


def validate_purchase_request_payload(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют purchase_request.json
    """
    PurchaseRequestValidator().validate(data)


def validate_sale_request_payload(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют sale_request.json
    """
    SaleRequestValidator().validate(data)
