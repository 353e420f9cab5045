"""
Completeness — Order Completeness Primitives for Exact Reals

Единственный неконструктивный ингредиент построения меры — свойство
точной верхней грани (least-upper-bound). Здесь оно реализовано точно
для двух классов множеств, которые реально возникают в вычислениях:

1. superlevel_supremum — sup {x ∈ [lo, hi] : f(x) ≥ 0} для непрерывной
   кусочно-линейной f (функция покрытия s(x) − (x − a) в аргументе
   компактности)
2. affine_limit_at_zero — предел t → 0+ семейства, аффинного по t
   (суммы канонических ε-покрытий, монотонные приближения интервалов).
   Для неубывающего по t семейства это infimum по t > 0, для
   невозрастающего — supremum.

Никакой плавающей точки: результат точный либо CompletenessError.
"""

from fractions import Fraction
from typing import Callable, Final, Iterable, Optional, Sequence

from src.core.math.ennreal import INFINITY, ENNReal
from src.core.math.numerical_safeguards import RealLike, to_real

# Минимум точек для проверки аффинности (две точки задают любую прямую)
MIN_LIMIT_PROBES: Final[int] = 3


class CompletenessError(Exception):
    """
    Семейство не удовлетворяет условиям точного предела / грани.

    Возникает при неаффинном семействе, смеси конечных и бесконечных
    значений, отрицательном пределе или некорректных точках-пробах.
    """
    pass


# =============================================================================
# SUPREMUM НАДУРОВНЕВОГО МНОЖЕСТВА
# =============================================================================


def superlevel_supremum(
    f: Callable[[Fraction], Fraction],
    breakpoints: Iterable[Fraction],
    lo: Fraction,
    hi: Fraction,
) -> Optional[Fraction]:
    """
    Точный sup {x ∈ [lo, hi] : f(x) ≥ 0}.

    f обязана быть непрерывной и линейной между соседними breakpoints
    (точки вне (lo, hi) игнорируются). Множество замкнуто, поэтому
    supremum ему принадлежит.

    Алгоритм: сканирование сегментов справа налево; первый сегмент,
    где f меняет знак с ≥ 0 на < 0, даёт корень линейной интерполяцией.

    Args:
        f: Непрерывная кусочно-линейная функция
        breakpoints: Точки излома f
        lo: Левая граница
        hi: Правая граница (lo ≤ hi)

    Returns:
        Supremum или None, если множество пусто

    Raises:
        ValueError: Если lo > hi

    Examples:
        >>> superlevel_supremum(lambda x: 1 - x, [], Fraction(0), Fraction(3))
        Fraction(1, 1)
    """
    if lo > hi:
        raise ValueError(f"lo must be <= hi, got lo={lo}, hi={hi}")

    points = sorted({lo, hi} | {p for p in breakpoints if lo < p < hi})
    values = [f(p) for p in points]

    for j in range(len(points) - 1, 0, -1):
        if values[j] >= 0:
            return points[j]
        if values[j - 1] >= 0:
            left, right = points[j - 1], points[j]
            # f(left) >= 0 > f(right): единственный корень на сегменте
            return left + values[j - 1] * (right - left) / (values[j - 1] - values[j])

    if values[0] >= 0:
        return points[0]
    return None


# =============================================================================
# ПРЕДЕЛ АФФИННОГО СЕМЕЙСТВА
# =============================================================================


def affine_limit_at_zero(
    f: Callable[[Fraction], ENNReal],
    probes: Sequence[RealLike],
) -> ENNReal:
    """
    Предел lim_{t→0+} f(t) для семейства, аффинного по t.

    На точках-пробах проверяется, что f(t) = A + B·t; тогда
    inf_{t>0} f(t) = A при B ≥ 0 и sup_{t>0} f(t) = A при B ≤ 0.
    Семейство, тождественно равное ∞, имеет предел ∞.

    Args:
        f: Семейство t ↦ ENNReal (вызывается только при t > 0)
        probes: Строго убывающие положительные t (не меньше MIN_LIMIT_PROBES)

    Returns:
        Точный предел A

    Raises:
        CompletenessError: Если пробы некорректны, семейство не аффинно
            на пробах, смешивает ∞ и конечные значения или A < 0
    """
    ts = [to_real(t, "probe") for t in probes]

    if len(ts) < MIN_LIMIT_PROBES:
        raise CompletenessError(
            f"need at least {MIN_LIMIT_PROBES} probes, got {len(ts)}"
        )
    if any(t <= 0 for t in ts):
        raise CompletenessError(f"probes must be positive, got {ts}")
    if any(ts[i + 1] >= ts[i] for i in range(len(ts) - 1)):
        raise CompletenessError(f"probes must be strictly decreasing, got {ts}")

    values = [ENNReal.of(f(t)) for t in ts]

    if all(v.infinite for v in values):
        return INFINITY
    if any(v.infinite for v in values):
        raise CompletenessError(
            f"family mixes finite and infinite values: {[str(v) for v in values]}"
        )

    finite = [v.to_fraction() for v in values]
    slopes = {
        (finite[i + 1] - finite[i]) / (ts[i + 1] - ts[i])
        for i in range(len(ts) - 1)
    }
    if len(slopes) != 1:
        raise CompletenessError(
            f"family is not affine on probes: values={[str(v) for v in finite]}"
        )

    slope = slopes.pop()
    limit = finite[0] - slope * ts[0]

    if limit < 0:
        raise CompletenessError(f"limit must be non-negative, got {limit}")

    return ENNReal(limit)
