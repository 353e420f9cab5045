"""
Lebesgue — Мера Лебега как сужение μ* на борелевские множества

Построение:
1. Лучи (−∞, c) измеримы по Каратеодори (разбор четырёх случаев)
2. Борелевская σ-алгебра порождена лучами, измеримые множества образуют
   σ-алгебру ⇒ Borel ⊆ Carathéodory
3. λ = μ* на борелевских множествах

Производные значения:
- λ([a, b)) = b − a
- λ({a}) = λ([a, a+1)) − λ((a, a+1)) = 0
- λ((a, b)) = sup_t λ([a + t(b − a), b)) = b − a  (монотонный предел)

Мера определяется именно сужением на Borel; равенство с пополнением
внешней меры не утверждается.
"""

import logging
from fractions import Fraction
from typing import Iterable, Optional

from src.core.domain.interval import Interval
from src.core.math.completeness import affine_limit_at_zero
from src.core.math.ennreal import ZERO, ENNReal
from src.core.math.numerical_safeguards import RealLike, to_real
from src.measure.borel import NotBorelError, generating_cutpoints, is_borel
from src.measure.caratheodory import NotMeasurableError, is_ray_measurable
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.outer import SetLike, as_real_set, outer_measure

logger = logging.getLogger(__name__)


def borel_subset_caratheodory(
    cutpoints: Iterable[RealLike], config: Optional[MeasureConfig] = None
) -> bool:
    """
    Все порождающие лучи (−∞, c) измеримы ⇒ порождённая ими σ-алгебра
    содержится в измеримых по Каратеодори множествах.
    """
    for c in cutpoints:
        if not is_ray_measurable(c, config=config):
            logger.debug("generating ray (-inf, %s) is not measurable", c)
            return False
    return True


def lebesgue_measure(s: SetLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """
    λ(s) — сужение внешней меры на борелевские множества.

    Args:
        s: Борелевское множество
        config: Параметры

    Returns:
        λ(s) = μ*(s)

    Raises:
        NotBorelError: Если s не выражается через лучи
        NotMeasurableError: Если порождающий луч не измерим
    """
    config = config or DEFAULT_CONFIG
    s = as_real_set(s)

    if not is_borel(s, config):
        raise NotBorelError(f"{s} is not generated by rays")

    if not borel_subset_caratheodory(generating_cutpoints(s, config), config):
        raise NotMeasurableError(f"rays generating {s} are not Caratheodory-measurable")

    return outer_measure(s, config)


# =============================================================================
# ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ
# =============================================================================


def measure_ico(a: RealLike, b: RealLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """λ([a, b)) = max(0, b − a)."""
    return lebesgue_measure(Interval.ico(a, b), config)


def measure_icc(a: RealLike, b: RealLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """λ([a, b]) = max(0, b − a)."""
    return lebesgue_measure(Interval.icc(a, b), config)


def measure_ioc(a: RealLike, b: RealLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """λ((a, b]) = max(0, b − a)."""
    return lebesgue_measure(Interval.ioc(a, b), config)


def measure_singleton(a: RealLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """
    λ({a}) как разность мер: {a} = [a, a+1) \\ (a, a+1).

    (a, a+1) ⊆ [a, a+1) и λ((a, a+1)) < ∞, поэтому разность мер
    равна мере разности.
    """
    a = to_real(a, "a")
    b = a + 1

    whole = lebesgue_measure(Interval.ico(a, b), config)
    inner = lebesgue_measure(Interval.ioo(a, b), config)
    return whole - inner


def measure_ioo(a: RealLike, b: RealLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """
    λ((a, b)) как предел возрастающей последовательности [a + t(b − a), b), t ↓ 0.
    """
    config = config or DEFAULT_CONFIG
    a = to_real(a, "a")
    b = to_real(b, "b")

    if a >= b:
        return ZERO

    def approximant(t: Fraction) -> ENNReal:
        return lebesgue_measure(Interval.ico(a + t * (b - a), b), config)

    return affine_limit_at_zero(approximant, config.limit_probes)


def measure_split(
    a: RealLike, m: RealLike, b: RealLike, config: Optional[MeasureConfig] = None
) -> tuple[ENNReal, ENNReal]:
    """
    (λ([a, m)), λ([m, b))) для a ≤ m ≤ b — измеримое разбиение [a, b).

    Raises:
        ValueError: Если m вне [a, b]
    """
    a, m, b = to_real(a, "a"), to_real(m, "m"), to_real(b, "b")

    if not a <= m <= b:
        raise ValueError(f"m must lie in [{a}, {b}], got {m}")

    return measure_ico(a, m, config), measure_ico(m, b, config)
