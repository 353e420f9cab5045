"""
Borel — Порождение борелевских множеств лучами (−∞, c)

Борелевская σ-алгебра порождается лучами (−∞, c) с рациональными c.
decompose(S) строит явное выражение S через лучи, дополнения,
разности и счётные объединения / пересечения:

    [a, b)  = (−∞, b) \\ (−∞, a)
    [a, ∞)  = ℝ \\ (−∞, a)
    (a, b⟩  = ⋃_n [a + δ_n, b⟩,      δ_n = w / (n + 2) ↓ 0
    ⟨a, b]  = ⋂_n ⟨a, b + 1/(n+1))

Все точки разреза — концы S и их рациональные сдвиги, поэтому для
RealSet с Fraction-концами разложение всегда существует.
Счётные узлы ленивы: члены строятся по номеру, предел известен точно.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Iterator, Optional

from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.outer import SetLike, as_real_set

logger = logging.getLogger(__name__)


class NotBorelError(Exception):
    """Множество не удалось выразить через лучи (−∞, c)."""
    pass


# =============================================================================
# ВЫРАЖЕНИЯ ЧЕРЕЗ ЛУЧИ
# =============================================================================


class SetExpr(ABC):
    """Выражение множества в σ-алгебре, порождённой лучами."""

    @abstractmethod
    def evaluate(self) -> RealSet:
        """Точное значение выражения."""

    @abstractmethod
    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        """Точки c используемых лучей (счётные узлы — первые depth членов)."""


@dataclass(frozen=True)
class RayExpr(SetExpr):
    c: Fraction

    def evaluate(self) -> RealSet:
        return RealSet.of(Interval.ray_below(self.c))

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        yield self.c


@dataclass(frozen=True)
class ComplementExpr(SetExpr):
    inner: SetExpr

    def evaluate(self) -> RealSet:
        return self.inner.evaluate().complement()

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        yield from self.inner.cutpoints(depth)


@dataclass(frozen=True)
class DifferenceExpr(SetExpr):
    minuend: SetExpr
    subtrahend: SetExpr

    def evaluate(self) -> RealSet:
        return self.minuend.evaluate().difference(self.subtrahend.evaluate())

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        yield from self.minuend.cutpoints(depth)
        yield from self.subtrahend.cutpoints(depth)


@dataclass(frozen=True)
class UnionExpr(SetExpr):
    parts: tuple[SetExpr, ...]

    def evaluate(self) -> RealSet:
        return RealSet.empty().union(*(p.evaluate() for p in self.parts))

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        for p in self.parts:
            yield from p.cutpoints(depth)


@dataclass(frozen=True)
class CountableUnionExpr(SetExpr):
    """⋃_n term(n) — возрастающая последовательность с известным пределом."""

    term: Callable[[int], SetExpr]
    limit: RealSet

    def evaluate(self) -> RealSet:
        return self.limit

    def partial(self, n: int) -> RealSet:
        return RealSet.empty().union(*(self.term(k).evaluate() for k in range(n)))

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        for k in range(depth):
            yield from self.term(k).cutpoints(depth)


@dataclass(frozen=True)
class CountableIntersectionExpr(SetExpr):
    """⋂_n term(n) — убывающая последовательность с известным пределом."""

    term: Callable[[int], SetExpr]
    limit: RealSet

    def evaluate(self) -> RealSet:
        return self.limit

    def partial(self, n: int) -> RealSet:
        result = RealSet.real_line()
        for k in range(n):
            result = result.intersection(self.term(k).evaluate())
        return result

    def cutpoints(self, depth: int) -> Iterator[Fraction]:
        for k in range(depth):
            yield from self.term(k).cutpoints(depth)


# =============================================================================
# РАЗЛОЖЕНИЕ
# =============================================================================


def _half_open_expr(left: Optional[Fraction], right: Optional[Fraction]) -> SetExpr:
    """[left, right) с возможными бесконечными концами."""
    if left is None and right is None:
        return UnionExpr((RayExpr(Fraction(0)), ComplementExpr(RayExpr(Fraction(0)))))
    if left is None:
        return RayExpr(right)
    if right is None:
        return ComplementExpr(RayExpr(left))
    return DifferenceExpr(RayExpr(right), RayExpr(left))


def _component_expr(c: Interval) -> SetExpr:
    if c.right is not None and c.right_closed:

        def shrink_right(n: int) -> SetExpr:
            return _component_expr(
                Interval(left=c.left, right=c.right + Fraction(1, n + 1), left_closed=c.left_closed)
            )

        return CountableIntersectionExpr(term=shrink_right, limit=RealSet.of(c))

    if c.left is not None and not c.left_closed:
        step = c.width if c.is_bounded else Fraction(1)

        def grow_left(n: int) -> SetExpr:
            return _component_expr(
                Interval(left=c.left + step / (n + 2), right=c.right, left_closed=True)
            )

        return CountableUnionExpr(term=grow_left, limit=RealSet.of(c))

    return _half_open_expr(c.left, c.right)


def decompose(s: SetLike) -> SetExpr:
    """
    Выражение множества через лучи (−∞, c).

    Examples:
        >>> decompose(Interval.ico(2, 5)).evaluate() == RealSet.of(Interval.ico(2, 5))
        True
    """
    s = as_real_set(s)

    if s.is_empty:
        return DifferenceExpr(RayExpr(Fraction(0)), RayExpr(Fraction(0)))

    parts = tuple(_component_expr(c) for c in s.components)
    if len(parts) == 1:
        return parts[0]
    return UnionExpr(parts)


# =============================================================================
# ПРОВЕРКА ПОРОЖДЕНИЯ
# =============================================================================


def verify_generation(expr: SetExpr, terms: int) -> bool:
    """
    Проверка счётных узлов на первых terms членах.

    Объединения: частичные объединения возрастают и лежат в пределе.
    Пересечения: частичные пересечения убывают и содержат предел.
    Рекурсивно для подвыражений.
    """
    if isinstance(expr, RayExpr):
        return True
    if isinstance(expr, ComplementExpr):
        return verify_generation(expr.inner, terms)
    if isinstance(expr, DifferenceExpr):
        return verify_generation(expr.minuend, terms) and verify_generation(
            expr.subtrahend, terms
        )
    if isinstance(expr, UnionExpr):
        return all(verify_generation(p, terms) for p in expr.parts)

    if isinstance(expr, CountableUnionExpr):
        previous = RealSet.empty()
        for n in range(1, terms + 1):
            current = expr.partial(n)
            if not (previous.issubset(current) and current.issubset(expr.limit)):
                logger.debug("union partial #%d breaks monotonicity toward %s", n, expr.limit)
                return False
            previous = current
        return all(verify_generation(expr.term(k), terms) for k in range(terms))

    if isinstance(expr, CountableIntersectionExpr):
        previous = RealSet.real_line()
        for n in range(1, terms + 1):
            current = expr.partial(n)
            if not (current.issubset(previous) and expr.limit.issubset(current)):
                logger.debug("intersection partial #%d breaks monotonicity toward %s", n, expr.limit)
                return False
            previous = current
        return all(verify_generation(expr.term(k), terms) for k in range(terms))

    raise TypeError(f"unknown set expression {type(expr).__name__}")


def is_borel(s: SetLike, config: Optional[MeasureConfig] = None) -> bool:
    """
    S лежит в σ-алгебре, порождённой лучами: разложение вычисляется в S,
    счётные узлы монотонно сходятся к своим пределам.
    """
    config = config or DEFAULT_CONFIG
    s = as_real_set(s)

    expr = decompose(s)
    if expr.evaluate() != s:
        return False

    return verify_generation(expr, config.generation_probe_terms)


def generating_cutpoints(s: SetLike, config: Optional[MeasureConfig] = None) -> list[Fraction]:
    """Точки c лучей (−∞, c), участвующих в разложении (по возрастанию)."""
    config = config or DEFAULT_CONFIG
    expr = decompose(s)
    return sorted(set(expr.cutpoints(config.generation_probe_terms)))
