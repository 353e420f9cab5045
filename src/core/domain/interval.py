"""
Interval — Модель интервала вещественной прямой

Immutable Pydantic модель интервала с открытыми/закрытыми концами и
бесконечными концами (None = ±∞). Концы хранятся как точные Fraction.

Основной рабочий тип — полуоткрытый интервал [a, b): именно им
покрывается множество при построении внешней меры. При a ≥ b интервал
[a, b) пуст (нормализация, а не ошибка).
"""

from fractions import Fraction
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from src.core.math.numerical_safeguards import (
    RealLike,
    format_real,
    positive_part,
    to_real,
)


class Interval(BaseModel):
    """
    Интервал ⟨left, right⟩.

    Бесконечный конец (None) всегда открыт.
    """

    left: Optional[Fraction] = Field(None, description="Левый конец (None = −∞)")
    right: Optional[Fraction] = Field(None, description="Правый конец (None = +∞)")
    left_closed: bool = Field(False, description="Левый конец включён")
    right_closed: bool = Field(False, description="Правый конец включён")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("left", "right", mode="before")
    @classmethod
    def coerce_endpoint(cls, v: Optional[RealLike]) -> Optional[Fraction]:
        """Конверсия конца в Fraction (None остаётся бесконечностью)"""
        if v is None:
            return None
        return to_real(v, "endpoint")

    @field_validator("left_closed")
    @classmethod
    def validate_left_closed(cls, v: bool, info) -> bool:
        """−∞ не может быть включён"""
        if v and "left" in info.data and info.data["left"] is None:
            raise ValueError("infinite left endpoint cannot be closed")
        return v

    @field_validator("right_closed")
    @classmethod
    def validate_right_closed(cls, v: bool, info) -> bool:
        """+∞ не может быть включён"""
        if v and "right" in info.data and info.data["right"] is None:
            raise ValueError("infinite right endpoint cannot be closed")
        return v

    @field_serializer("left", "right", when_used="json")
    def serialize_endpoint(self, v: Optional[Fraction]) -> Optional[str]:
        return None if v is None else format_real(v)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def ico(cls, a: RealLike, b: RealLike) -> "Interval":
        """[a, b) — пуст при a ≥ b."""
        return cls(left=a, right=b, left_closed=True, right_closed=False)

    @classmethod
    def icc(cls, a: RealLike, b: RealLike) -> "Interval":
        """[a, b]"""
        return cls(left=a, right=b, left_closed=True, right_closed=True)

    @classmethod
    def ioo(cls, a: RealLike, b: RealLike) -> "Interval":
        """(a, b)"""
        return cls(left=a, right=b, left_closed=False, right_closed=False)

    @classmethod
    def ioc(cls, a: RealLike, b: RealLike) -> "Interval":
        """(a, b]"""
        return cls(left=a, right=b, left_closed=False, right_closed=True)

    @classmethod
    def point(cls, p: RealLike) -> "Interval":
        """{p} = [p, p]"""
        return cls.icc(p, p)

    @classmethod
    def ray_below(cls, c: RealLike) -> "Interval":
        """(−∞, c)"""
        return cls(left=None, right=c)

    @classmethod
    def ray_above(cls, c: RealLike) -> "Interval":
        """[c, +∞)"""
        return cls(left=c, right=None, left_closed=True)

    @classmethod
    def real_line(cls) -> "Interval":
        """(−∞, +∞)"""
        return cls()

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_bounded(self) -> bool:
        return self.left is not None and self.right is not None

    @property
    def is_half_open(self) -> bool:
        """Форма [a, b) с конечными a, b (включая пустой [a, b) при a ≥ b)."""
        return self.is_bounded and self.left_closed and not self.right_closed

    @property
    def is_empty(self) -> bool:
        if not self.is_bounded:
            return False
        if self.left < self.right:
            return False
        if self.left == self.right:
            return not (self.left_closed and self.right_closed)
        return True

    @property
    def width(self) -> Optional[Fraction]:
        """max(0, right − left); None для неограниченного интервала."""
        if not self.is_bounded:
            return None
        return positive_part(self.right - self.left)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def contains(self, x: RealLike) -> bool:
        x = to_real(x, "x")

        if self.left is not None:
            if x < self.left or (x == self.left and not self.left_closed):
                return False

        if self.right is not None:
            if x > self.right or (x == self.right and not self.right_closed):
                return False

        return True

    def intersect(self, other: "Interval") -> "Interval":
        """Пересечение — снова интервал (возможно пустой)."""
        left, left_closed = _max_left(
            (self.left, self.left_closed), (other.left, other.left_closed)
        )
        right, right_closed = _min_right(
            (self.right, self.right_closed), (other.right, other.right_closed)
        )
        return Interval(
            left=left, right=right, left_closed=left_closed, right_closed=right_closed
        )

    def translate(self, t: RealLike) -> "Interval":
        t = to_real(t, "t")
        return Interval(
            left=None if self.left is None else self.left + t,
            right=None if self.right is None else self.right + t,
            left_closed=self.left_closed,
            right_closed=self.right_closed,
        )

    def __str__(self) -> str:
        lb = "[" if self.left_closed else "("
        rb = "]" if self.right_closed else ")"
        left = "-inf" if self.left is None else str(self.left)
        right = "inf" if self.right is None else str(self.right)
        return f"{lb}{left}, {right}{rb}"


# =============================================================================
# СРАВНЕНИЕ КОНЦОВ
# =============================================================================

Endpoint = tuple[Optional[Fraction], bool]


def _max_left(a: Endpoint, b: Endpoint) -> Endpoint:
    """Более правый из двух левых концов (None = −∞)."""
    if a[0] is None:
        return b
    if b[0] is None:
        return a
    if a[0] != b[0]:
        return a if a[0] > b[0] else b
    return (a[0], a[1] and b[1])


def _min_right(a: Endpoint, b: Endpoint) -> Endpoint:
    """Более левый из двух правых концов (None = +∞)."""
    if a[0] is None:
        return b
    if b[0] is None:
        return a
    if a[0] != b[0]:
        return a if a[0] < b[0] else b
    return (a[0], a[1] and b[1])


def _max_right(a: Endpoint, b: Endpoint) -> Endpoint:
    """Более правый из двух правых концов (None = +∞)."""
    if a[0] is None:
        return a
    if b[0] is None:
        return b
    if a[0] != b[0]:
        return a if a[0] > b[0] else b
    return (a[0], a[1] or b[1])
