"""
ENNReal — Extended Nonnegative Reals [0, ∞]

Кодомен длины, внешней меры и меры Лебега.

Значение — либо неотрицательное Fraction, либо выделенное ∞.

ИНВАРИАНТЫ:
1. Значение никогда не бывает отрицательным (вычитание усечено в 0)
2. ∞ поглощает сложение: x + ∞ = ∞
3. 0 · ∞ = 0 (соглашение теории меры)
4. Сложение и supremum монотонны и ассоциативны
5. Счётные суммы — supremum частичных сумм (tsum)
"""

from dataclasses import dataclass
from fractions import Fraction
from functools import total_ordering
from itertools import islice
from typing import Iterable, Optional, Union

from src.core.math.numerical_safeguards import RealLike, to_real, validate_non_negative


@total_ordering
@dataclass(frozen=True, eq=False)
class ENNReal:
    """
    Элемент [0, ∞].

    Создавать через ENNReal.of(x) / ENNReal.infinity() или константы
    ZERO / ONE / INFINITY.
    """

    value: Fraction
    infinite: bool = False

    def __post_init__(self) -> None:
        if self.infinite:
            # Нормализация: у ∞ нет конечной части
            object.__setattr__(self, "value", Fraction(0))
        elif self.value < 0:
            raise ValueError(f"ENNReal value must be non-negative, got {self.value}")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, x: Union["ENNReal", RealLike]) -> "ENNReal":
        """
        Конверсия неотрицательного вещественного в ENNReal.

        Raises:
            ValueError: Если x < 0 или не является вещественным
        """
        if isinstance(x, ENNReal):
            return x
        return cls(validate_non_negative(x, "ENNReal value"))

    @classmethod
    def infinity(cls) -> "ENNReal":
        return cls(Fraction(0), infinite=True)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_finite(self) -> bool:
        return not self.infinite

    def to_fraction(self) -> Fraction:
        """
        Конечное значение как Fraction.

        Raises:
            ValueError: Если значение равно ∞
        """
        if self.infinite:
            raise ValueError("cannot convert infinite ENNReal to Fraction")
        return self.value

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Union["ENNReal", RealLike]) -> "ENNReal":
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.infinite or other.infinite:
            return INFINITY
        return ENNReal(self.value + other.value)

    __radd__ = __add__

    def __mul__(self, scalar: Union["ENNReal", RealLike]) -> "ENNReal":
        other = _coerce(scalar)
        if other is NotImplemented:
            return NotImplemented
        # 0 · ∞ = 0
        if self.is_zero() or other.is_zero():
            return ZERO
        if self.infinite or other.infinite:
            return INFINITY
        return ENNReal(self.value * other.value)

    __rmul__ = __mul__

    def __sub__(self, other: Union["ENNReal", RealLike]) -> "ENNReal":
        """Усечённое вычитание: max(0, self − other), ∞ − конечное = ∞."""
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if other.infinite:
            return ZERO
        if self.infinite:
            return INFINITY
        return ENNReal(max(Fraction(0), self.value - other.value))

    def is_zero(self) -> bool:
        return not self.infinite and self.value == 0

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, float) and other == float("inf"):
            return self.infinite
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            # Отрицательные и NaN не лежат в [0, ∞]
            if not other >= 0:
                return False
            other = ENNReal.of(other)
        if not isinstance(other, ENNReal):
            return NotImplemented
        return self.infinite == other.infinite and self.value == other.value

    def __lt__(self, other: Union["ENNReal", RealLike]) -> bool:
        if isinstance(other, float) and other == float("inf"):
            return not self.infinite
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool) and other < 0:
            return False
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.infinite:
            return False
        if other.infinite:
            return True
        return self.value < other.value

    def __hash__(self) -> int:
        if self.infinite:
            return hash(float("inf"))
        return hash(self.value)

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __float__(self) -> float:
        if self.infinite:
            return float("inf")
        return float(self.value)

    def __str__(self) -> str:
        if self.infinite:
            return "inf"
        return str(self.value)

    def __repr__(self) -> str:
        return f"ENNReal({self})"


ZERO = ENNReal(Fraction(0))
ONE = ENNReal(Fraction(1))
INFINITY = ENNReal.infinity()


def _coerce(x: object) -> ENNReal:
    if isinstance(x, ENNReal):
        return x
    if isinstance(x, (int, float, Fraction)) and not isinstance(x, bool):
        return ENNReal.of(x)
    return NotImplemented


def parse_ennreal(text: str) -> ENNReal:
    """Обратная операция к str(): "inf" → ∞, иначе рациональный литерал."""
    if text == "inf":
        return INFINITY
    return ENNReal.of(to_real(text, "ENNReal literal"))


# =============================================================================
# СЧЁТНЫЕ СУММЫ И ГРАНИ
# =============================================================================


def tsum(terms: Iterable[ENNReal], max_terms: Optional[int] = None) -> ENNReal:
    """
    Сумма счётного семейства как supremum частичных сумм.

    Члены потребляются лениво. Частичные суммы не убывают, поэтому
    supremum — последняя вычисленная частичная сумма. Для бесконечных
    последовательностей max_terms обязателен, иначе итерация не закончится.

    Args:
        terms: Ленивая последовательность слагаемых
        max_terms: Сколько членов просмотреть (None — все)

    Returns:
        Supremum частичных сумм по просмотренным членам

    Examples:
        >>> tsum([ONE, ONE, ENNReal.of("1/2")])
        ENNReal(5/2)
        >>> tsum([ONE, INFINITY, ONE])
        ENNReal(inf)
    """
    total = Fraction(0)
    for term in islice(terms, max_terms):
        term = ENNReal.of(term)
        if term.infinite:
            return INFINITY
        total += term.value
    return ENNReal(total)


def supremum(values: Iterable[ENNReal]) -> ENNReal:
    """Supremum конечного семейства, sup ∅ = 0."""
    result = ZERO
    for v in values:
        result = max(result, ENNReal.of(v))
    return result


def infimum(values: Iterable[ENNReal]) -> ENNReal:
    """Infimum конечного семейства, inf ∅ = ∞."""
    result = INFINITY
    for v in values:
        result = min(result, ENNReal.of(v))
    return result
