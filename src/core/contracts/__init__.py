"""
Contract Validation Module

Модуль для валидации JSON контрактов: интервалы, множества, покрытия,
отчёты о внешней мере.
"""

from .validators import (
    CONTRACTS,
    ContractValidator,
    CoverValidator,
    IntervalValidator,
    MeasureReportValidator,
    RealSetValidator,
    SchemaLoader,
    conform,
    contract_validator,
    validate_cover,
    validate_interval,
    validate_measure_report,
    validate_real_set,
)

__all__ = [
    "CONTRACTS",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntervalValidator",
    "RealSetValidator",
    "CoverValidator",
    "MeasureReportValidator",
    # Functions
    "conform",
    "contract_validator",
    "validate_interval",
    "validate_real_set",
    "validate_cover",
    "validate_measure_report",
]
