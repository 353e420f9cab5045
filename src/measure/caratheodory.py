"""
Carathéodory — Критерий измеримости относительно внешней меры

E измеримо ⇔ для любого тестового T:  μ*(T) = μ*(T ∩ E) + μ*(T \\ E)

Измеримые множества образуют σ-алгебру:
- дополнение: равенство симметрично по E и ℝ \\ E
- счётное объединение: через субаддитивность μ*

Лучи (−∞, c) проверяются напрямую разбором четырёх случаев
расположения тестового [a, b) относительно c:
- EMPTY:    a ≥ b, обе части пусты
- BELOW:    b ≤ c, [a, b) целиком в луче
- ABOVE:    c ≤ a, [a, b) целиком вне луча
- STRADDLE: a < c < b, части [a, c) и [c, b)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Iterable, Optional

from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.core.math.ennreal import ZERO, ENNReal
from src.core.math.numerical_safeguards import RealLike, to_real
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.length import interval_length
from src.measure.outer import SetLike, as_real_set, outer_measure

logger = logging.getLogger(__name__)


class NotMeasurableError(Exception):
    """Множество не прошло критерий Каратеодори."""
    pass


class RaySplitCase(str, Enum):
    """Положение [a, b) относительно луча (−∞, c)."""

    EMPTY = "EMPTY"
    BELOW = "BELOW"
    ABOVE = "ABOVE"
    STRADDLE = "STRADDLE"


@dataclass(frozen=True)
class CaratheodorySplit:
    """Результат разбиения тестового множества по E."""

    test_set: RealSet
    test_measure: ENNReal
    inside: ENNReal
    outside: ENNReal
    additive: bool


# =============================================================================
# РАЗБИЕНИЕ ТЕСТОВОГО МНОЖЕСТВА
# =============================================================================


def caratheodory_split(
    test: SetLike, e: SetLike, config: Optional[MeasureConfig] = None
) -> CaratheodorySplit:
    """
    μ*(T), μ*(T ∩ E), μ*(T \\ E) и проверка аддитивности.
    """
    test = as_real_set(test)
    e = as_real_set(e)

    test_measure = outer_measure(test, config)
    inside = outer_measure(test.intersection(e), config)
    outside = outer_measure(test.difference(e), config)

    return CaratheodorySplit(
        test_set=test,
        test_measure=test_measure,
        inside=inside,
        outside=outside,
        additive=test_measure == inside + outside,
    )


def default_test_sets(e: SetLike, config: Optional[MeasureConfig] = None) -> list[RealSet]:
    """
    Тестовое семейство для E.

    ℝ, E, ℝ \\ E и все [p, q) на сетке: концы E, их середины и точки
    на расстоянии test_grid_padding за крайними концами.
    """
    config = config or DEFAULT_CONFIG
    e = as_real_set(e)

    grid = e.breakpoints() or [Fraction(0)]
    pad = config.test_grid_padding
    midpoints = [(p + q) / 2 for p, q in zip(grid, grid[1:])]
    grid = sorted(set(grid) | set(midpoints) | {grid[0] - pad, grid[-1] + pad})

    tests = [RealSet.real_line(), e, e.complement()]
    tests.extend(
        RealSet.of(Interval.ico(p, q)) for i, p in enumerate(grid) for q in grid[i + 1:]
    )
    return tests


def is_measurable(
    e: SetLike,
    test_sets: Optional[Iterable[SetLike]] = None,
    config: Optional[MeasureConfig] = None,
) -> bool:
    """
    Критерий Каратеодори на тестовом семействе.

    Args:
        e: Проверяемое множество
        test_sets: Тестовые множества (None — default_test_sets)
        config: Параметры

    Returns:
        True если разбиение аддитивно на каждом тестовом множестве
    """
    e = as_real_set(e)
    tests = default_test_sets(e, config) if test_sets is None else test_sets

    for test in tests:
        split = caratheodory_split(test, e, config)
        if not split.additive:
            logger.debug(
                "%s fails on test %s: %s != %s + %s",
                e, split.test_set, split.test_measure, split.inside, split.outside,
            )
            return False

    return True


# =============================================================================
# ЛУЧИ
# =============================================================================


def ray_split_case(c: RealLike, a: RealLike, b: RealLike) -> RaySplitCase:
    c, a, b = to_real(c, "c"), to_real(a, "a"), to_real(b, "b")

    if a >= b:
        return RaySplitCase.EMPTY
    if b <= c:
        return RaySplitCase.BELOW
    if c <= a:
        return RaySplitCase.ABOVE
    return RaySplitCase.STRADDLE


def ray_split_lengths(c: RealLike, a: RealLike, b: RealLike) -> tuple[ENNReal, ENNReal]:
    """
    Длины [a, b) ∩ (−∞, c) и [a, b) \\ (−∞, c), вычисленные по случаям.

    Examples:
        >>> ray_split_lengths(3, 1, 5)
        (ENNReal(2), ENNReal(2))
    """
    case = ray_split_case(c, a, b)
    c, a, b = to_real(c, "c"), to_real(a, "a"), to_real(b, "b")

    if case == RaySplitCase.EMPTY:
        return ZERO, ZERO
    if case == RaySplitCase.BELOW:
        return interval_length(a, b), ZERO
    if case == RaySplitCase.ABOVE:
        return ZERO, interval_length(a, b)
    return interval_length(a, c), interval_length(c, b)


def ray_test_intervals(c: RealLike, config: Optional[MeasureConfig] = None) -> list[Interval]:
    """Все [a, b) на сетке вокруг c, включая a ≥ b (случай EMPTY)."""
    config = config or DEFAULT_CONFIG
    c = to_real(c, "c")
    pad = config.test_grid_padding

    grid = [c - pad, c - pad / 2, c, c + pad / 2, c + pad]
    return [Interval.ico(a, b) for a in grid for b in grid]


def is_ray_measurable(
    c: RealLike,
    test_intervals: Optional[Iterable[Interval]] = None,
    config: Optional[MeasureConfig] = None,
) -> bool:
    """
    Измеримость (−∞, c): на каждом тестовом [a, b) длины частей по случаям
    складываются в b − a и совпадают с μ* реальных частей.

    Raises:
        ValueError: Если тестовый интервал не полуоткрытый
    """
    c = to_real(c, "c")
    ray = RealSet.of(Interval.ray_below(c))
    tests = ray_test_intervals(c, config) if test_intervals is None else test_intervals

    for t in tests:
        if not t.is_half_open:
            raise ValueError(f"test interval must be half-open [a, b), got {t}")

        inside, outside = ray_split_lengths(c, t.left, t.right)
        if inside + outside != interval_length(t.left, t.right):
            logger.debug("ray (-inf, %s): lengths do not add up on %s", c, t)
            return False

        piece = RealSet.of(t)
        if outer_measure(piece.intersection(ray), config) != inside:
            return False
        if outer_measure(piece.difference(ray), config) != outside:
            return False

    return True


# =============================================================================
# σ-АЛГЕБРА ИЗМЕРИМЫХ МНОЖЕСТВ
# =============================================================================


def _require_measurable(e: RealSet, config: Optional[MeasureConfig]) -> None:
    if not is_measurable(e, config=config):
        raise NotMeasurableError(f"{e} is not Caratheodory-measurable")


def measurable_complement(e: SetLike, config: Optional[MeasureConfig] = None) -> RealSet:
    """
    Дополнение измеримого множества (снова измеримо).

    Raises:
        NotMeasurableError: Если e не измеримо
    """
    e = as_real_set(e)
    _require_measurable(e, config)
    return e.complement()


def measurable_union(
    sets: Iterable[SetLike], config: Optional[MeasureConfig] = None
) -> RealSet:
    """
    Объединение измеримых множеств.

    Критерий проверяется для каждого члена и затем для самого объединения
    на его тестовом семействе.

    Raises:
        NotMeasurableError: Если какое-то множество или объединение не измеримо
    """
    family = [as_real_set(s) for s in sets]
    for s in family:
        _require_measurable(s, config)

    union = RealSet.empty().union(*family)
    _require_measurable(union, config)
    return union
