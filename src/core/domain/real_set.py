"""
RealSet — Конечное объединение интервалов

Immutable Pydantic модель подмножества прямой в нормальной форме:
- компоненты непусты
- отсортированы по левому концу
- попарно не пересекаются и не соприкасаются (соседние склеены)

Нормальная форма делает равенство моделей равенством множеств.
Класс замкнут относительно объединения, пересечения, разности и
дополнения, и содержит все интервалы, лучи и конечные множества точек.
"""

from fractions import Fraction
from typing import Iterable

from pydantic import BaseModel, Field, field_validator

from src.core.domain.interval import Interval, _max_right
from src.core.math.numerical_safeguards import RealLike, to_real


class RealSet(BaseModel):
    """Подмножество ℝ — объединение непересекающихся интервалов."""

    components: tuple[Interval, ...] = Field(
        default=(), description="Компоненты связности в нормальной форме"
    )

    model_config = {"frozen": True}

    @field_validator("components", mode="after")
    @classmethod
    def normalize_components(cls, v: tuple[Interval, ...]) -> tuple[Interval, ...]:
        """Приведение к нормальной форме"""
        return _normalize(v)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, *intervals: Interval) -> "RealSet":
        return cls(components=tuple(intervals))

    @classmethod
    def empty(cls) -> "RealSet":
        return cls()

    @classmethod
    def real_line(cls) -> "RealSet":
        return cls.of(Interval.real_line())

    @classmethod
    def points(cls, *ps: RealLike) -> "RealSet":
        """Конечное множество точек."""
        return cls.of(*(Interval.point(p) for p in ps))

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.components

    @property
    def is_bounded(self) -> bool:
        return all(c.is_bounded for c in self.components)

    def breakpoints(self) -> list[Fraction]:
        """Все конечные концы компонент по возрастанию."""
        points = set()
        for c in self.components:
            if c.left is not None:
                points.add(c.left)
            if c.right is not None:
                points.add(c.right)
        return sorted(points)

    def contains(self, x: RealLike) -> bool:
        x = to_real(x, "x")
        return any(c.contains(x) for c in self.components)

    # -------------------------------------------------------------------------
    # Булевы операции
    # -------------------------------------------------------------------------

    def union(self, *others: "RealSet") -> "RealSet":
        parts = list(self.components)
        for other in others:
            parts.extend(other.components)
        return RealSet(components=tuple(parts))

    def intersection(self, other: "RealSet") -> "RealSet":
        parts = [
            a.intersect(b) for a in self.components for b in other.components
        ]
        return RealSet(components=tuple(parts))

    def complement(self) -> "RealSet":
        gaps = []
        gap_left, gap_left_closed = None, False

        for c in self.components:
            if c.left is not None:
                gaps.append(
                    Interval(
                        left=gap_left,
                        right=c.left,
                        left_closed=gap_left_closed,
                        right_closed=not c.left_closed,
                    )
                )
            if c.right is None:
                return RealSet(components=tuple(gaps))
            gap_left, gap_left_closed = c.right, not c.right_closed

        gaps.append(Interval(left=gap_left, right=None, left_closed=gap_left_closed))
        return RealSet(components=tuple(gaps))

    def difference(self, other: "RealSet") -> "RealSet":
        return self.intersection(other.complement())

    def issubset(self, other: "RealSet") -> bool:
        return self.difference(other).is_empty

    def translate(self, t: RealLike) -> "RealSet":
        return RealSet(components=tuple(c.translate(t) for c in self.components))

    def __str__(self) -> str:
        if self.is_empty:
            return "∅"
        return " ∪ ".join(str(c) for c in self.components)


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def _left_key(c: Interval) -> tuple:
    # −∞ раньше всего; при равных концах закрытый раньше открытого
    if c.left is None:
        return (0, Fraction(0), 0)
    return (1, c.left, 0 if c.left_closed else 1)


def _touches(cur: Interval, nxt: Interval) -> bool:
    """Пересекаются или соприкасаются (при nxt, идущем не раньше cur)."""
    if cur.right is None or nxt.left is None:
        return True
    if nxt.left < cur.right:
        return True
    if nxt.left == cur.right:
        return cur.right_closed or nxt.left_closed
    return False


def _normalize(intervals: Iterable[Interval]) -> tuple[Interval, ...]:
    parts = sorted((c for c in intervals if not c.is_empty), key=_left_key)
    merged: list[Interval] = []

    for c in parts:
        if merged and _touches(merged[-1], c):
            cur = merged[-1]
            right, right_closed = _max_right(
                (cur.right, cur.right_closed), (c.right, c.right_closed)
            )
            merged[-1] = Interval(
                left=cur.left,
                right=right,
                left_closed=cur.left_closed,
                right_closed=right_closed,
            )
        else:
            merged.append(c)

    return tuple(merged)
