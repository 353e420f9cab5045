"""
Outer Measure — Внешняя мера Лебега как infimum по покрытиям

μ*(S) = inf { Σ L(c_i) : (c_i) — последовательность [a_i, b_i), S ⊆ ⋃ c_i }

Вычисление:
1. canonical_cover(S, ε) — покрытие каждой ограниченной компоненты ⟨l, r⟩
   интервалом [l, r + pad_i), pad_i = ε / 2^(i+1) если r ∈ S, иначе 0;
   неограниченные компоненты — ленивым хвостом единичных интервалов (Σ = ∞)
2. Сумма канонического покрытия аффинна по ε
3. μ*(S) = lim_{ε→0+} = inf по ε > 0 (affine_limit_at_zero)

Нижняя оценка (никакое покрытие не короче) — аргумент компактности,
см. src.measure.subadditivity.

ИНВАРИАНТЫ:
1. μ*(∅) = 0
2. S ⊆ T ⇒ μ*(S) ≤ μ*(T)
3. μ*(⋃ S_i) ≤ Σ μ*(S_i)
4. μ*([a, b)) = b − a при a ≤ b
"""

import logging
from fractions import Fraction
from typing import Callable, Optional, Sequence, Union

from src.core.domain.cover import Cover, CoverError, CoverTail, point_cover
from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.core.math.completeness import affine_limit_at_zero
from src.core.math.ennreal import INFINITY, ZERO, ENNReal, tsum
from src.core.math.numerical_safeguards import RealLike, validate_positive
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.length import term_length

logger = logging.getLogger(__name__)

SetLike = Union[RealSet, Interval]


def as_real_set(s: SetLike) -> RealSet:
    """Interval → RealSet; RealSet без изменений."""
    if isinstance(s, Interval):
        return RealSet.of(s)
    if isinstance(s, RealSet):
        return s
    raise TypeError(f"expected RealSet or Interval, got {type(s).__name__}")


# =============================================================================
# КАНОНИЧЕСКИЕ ПОКРЫТИЯ
# =============================================================================


def _unit_steps(
    left: Optional[Fraction], right: Optional[Fraction]
) -> Callable[[int], Interval]:
    """Нумерация единичных [k, k+1), покрывающих неограниченный ⟨left, right⟩."""
    if left is not None:
        return lambda n: Interval.ico(left + n, left + n + 1)
    if right is not None:
        return lambda n: Interval.ico(right - n - 1, right - n)

    def whole_line(n: int) -> Interval:
        k = n // 2 if n % 2 == 0 else -(n + 1) // 2
        return Interval.ico(k, k + 1)

    return whole_line


def canonical_cover(s: SetLike, eps: RealLike) -> Cover:
    """
    Каноническое ε-покрытие множества.

    Args:
        s: Множество
        eps: Положительный бюджет дополнения

    Returns:
        Cover, покрывающий s; сумма = Σ ширин + ε · Σ_{r_i ∈ S} 2^-(i+1)
        (или ∞, если s неограничено)
    """
    s = as_real_set(s)
    eps = validate_positive(eps, "eps")

    terms = []
    steps = []
    span = []

    for i, c in enumerate(s.components):
        pad = eps / 2 ** (i + 1) if c.right_closed else Fraction(0)
        right = None if c.right is None else c.right + pad

        if c.is_bounded:
            terms.append(Interval.ico(c.left, right))
        else:
            steps.append(_unit_steps(c.left, right))
            span.append(Interval(left=c.left, right=right, left_closed=c.left is not None))

    if not steps:
        return Cover(terms=tuple(terms))

    def tail_term(n: int) -> Interval:
        return steps[n % len(steps)](n // len(steps))

    return Cover(
        terms=tuple(terms),
        tail=CoverTail(
            term=tail_term,
            total=INFINITY,
            span=RealSet.of(*span),
            description="unit steps over unbounded components",
        ),
    )


# =============================================================================
# СУММЫ ПОКРЫТИЙ
# =============================================================================


def cover_sum(cover: Cover) -> ENNReal:
    """
    Σ L(c_i) как supremum частичных сумм.

    Для ленивого хвоста используется его замкнутая форма total.
    """
    prefix = tsum(term_length(t) for t in cover.terms)
    if cover.tail is None:
        return prefix
    return prefix + cover.tail.total


def outer_measure_upper_bound(
    s: SetLike, cover: Cover, config: Optional[MeasureConfig] = None
) -> ENNReal:
    """
    Верхняя оценка μ*(s) ≤ Σ L(c_i) по заданному покрытию.

    Raises:
        CoverError: Если cover не покрывает s
    """
    config = config or DEFAULT_CONFIG
    s = as_real_set(s)

    if not cover.covers(s, max_terms=config.max_cover_terms):
        raise CoverError(f"cover does not cover {s}")

    return cover_sum(cover)


# =============================================================================
# ВНЕШНЯЯ МЕРА
# =============================================================================


def outer_measure(s: SetLike, config: Optional[MeasureConfig] = None) -> ENNReal:
    """
    μ*(s) — infimum сумм покрытий, как предел канонических ε-покрытий.

    Args:
        s: Множество (RealSet или Interval)
        config: Параметры (None — DEFAULT_CONFIG)

    Returns:
        Точное значение в [0, ∞]

    Examples:
        >>> outer_measure(Interval.ico(2, 5))
        ENNReal(3)
        >>> outer_measure(Interval.ico(5, 2))
        ENNReal(0)
    """
    config = config or DEFAULT_CONFIG
    s = as_real_set(s)

    if s.is_empty:
        return ZERO

    def total_at(eps: Fraction) -> ENNReal:
        cover = canonical_cover(s, eps)
        return outer_measure_upper_bound(s, cover, config)

    value = affine_limit_at_zero(total_at, config.limit_probes)
    logger.debug("outer_measure(%s) = %s", s, value)
    return value


def outer_measure_countable(
    points: Union[Sequence[RealLike], Callable[[int], RealLike]],
    config: Optional[MeasureConfig] = None,
) -> ENNReal:
    """
    μ* счётного множества {p_0, p_1, ...}, заданного лениво.

    Геометрические покрытия point_cover(points, ε) имеют сумму ≤ ε,
    поэтому infimum равен 0.
    """
    config = config or DEFAULT_CONFIG

    def total_at(eps: Fraction) -> ENNReal:
        return cover_sum(point_cover(points, eps))

    return affine_limit_at_zero(total_at, config.limit_probes)
