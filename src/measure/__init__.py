"""Measure — внешняя мера Лебега, критерий Каратеодори, мера Лебега.

Порядок зависимостей:
- length: функционал длины [a, b)
- outer: μ* как infimum по покрытиям
- subadditivity: аргумент компактности (нижняя оценка)
- caratheodory: измеримые множества, лучи
- borel / lebesgue: сужение μ* на борелевские множества
"""

from .borel import NotBorelError, decompose, is_borel
from .caratheodory import (
    NotMeasurableError,
    RaySplitCase,
    is_measurable,
    is_ray_measurable,
    ray_split_lengths,
)
from .config import DEFAULT_CONFIG, MeasureConfig
from .lebesgue import (
    lebesgue_measure,
    measure_icc,
    measure_ico,
    measure_ioc,
    measure_ioo,
    measure_singleton,
    measure_split,
)
from .length import interval_length, length
from .outer import canonical_cover, cover_sum, outer_measure, outer_measure_countable
from .report import OuterMeasureResult, outer_measure_report
from .subadditivity import CompactnessError, CoveringCertificate, certify_interval_cover

__all__ = [
    "MeasureConfig",
    "DEFAULT_CONFIG",
    "interval_length",
    "length",
    "canonical_cover",
    "cover_sum",
    "outer_measure",
    "outer_measure_countable",
    "OuterMeasureResult",
    "outer_measure_report",
    "CompactnessError",
    "CoveringCertificate",
    "certify_interval_cover",
    "NotMeasurableError",
    "RaySplitCase",
    "is_measurable",
    "is_ray_measurable",
    "ray_split_lengths",
    "NotBorelError",
    "decompose",
    "is_borel",
    "lebesgue_measure",
    "measure_ico",
    "measure_icc",
    "measure_ioc",
    "measure_ioo",
    "measure_singleton",
    "measure_split",
]
