"""
JSON Schema Contract Validators

JSON-представления множеств, покрытий и отчётов о мере сверяются
с контрактами contracts/schema/*.json (Draft 2020-12, jsonschema).

Контракты:
- interval: концы — рациональные литералы "p/q" или null (±∞)
- real_set: компоненты в нормальной форме
- cover: конечный префикс + описание ленивого хвоста
- measure_report: значение μ*, свидетельское покрытие, сертификаты

Сериализаторы (Cover.to_dict, OuterMeasureResult.to_dict) проверяют
свой результат через conform() перед возвратом.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

CONTRACTS: Final[tuple[str, ...]] = ("interval", "real_set", "cover", "measure_report")

SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик контрактов из contracts/schema/ с кэшем по имени.

    Каждая схема проходит meta-валидацию Draft 2020-12 при первой загрузке.
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        if not schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта по имени без расширения ('real_set', 'cover', ...).

        Raises:
            FileNotFoundError: Если файла схемы нет
            ValueError: Если файл не является JSON Schema 2020-12
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
    """Проверка JSON-представления против одного контракта."""

    def __init__(self, schema_name: str):
        if schema_name not in CONTRACTS:
            raise ValueError(f"unknown contract {schema_name!r}, expected one of {CONTRACTS}")
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные нарушают контракт
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_paths(self, data: Dict[str, Any]) -> list[str]:
        """JSON-пути нарушений вида '$.certificates[0].terms_examined'."""
        return sorted(error.json_path for error in self.iter_errors(data))


class IntervalValidator(ContractValidator):
    def __init__(self):
        super().__init__("interval")


class RealSetValidator(ContractValidator):
    def __init__(self):
        super().__init__("real_set")


class CoverValidator(ContractValidator):
    def __init__(self):
        super().__init__("cover")


class MeasureReportValidator(ContractValidator):
    def __init__(self):
        super().__init__("measure_report")


@lru_cache(maxsize=None)
def contract_validator(schema_name: str) -> ContractValidator:
    """Общий экземпляр валидатора контракта (компилируется один раз)."""
    return ContractValidator(schema_name)


def conform(schema_name: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Проверка данных против контракта; возвращает те же данные.

    Raises:
        ValidationError: Если данные нарушают контракт
    """
    contract_validator(schema_name).validate(data)
    return data


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_interval(data: Dict[str, Any]) -> None:
    conform("interval", data)


def validate_real_set(data: Dict[str, Any]) -> None:
    conform("real_set", data)


def validate_cover(data: Dict[str, Any]) -> None:
    conform("cover", data)


def validate_measure_report(data: Dict[str, Any]) -> None:
    conform("measure_report", data)
