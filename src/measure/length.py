"""
Length — Функционал длины полуоткрытого интервала

L([a, b)) = b − a при a ≤ b; пустой [a, b) при a > b имеет длину 0.
Для любого множества, не представимого как один [a, b), L = ∞.

Функционал тотален: ∞ — значение по умолчанию, а не ошибка.
"""

from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.core.math.ennreal import INFINITY, ZERO, ENNReal
from src.core.math.numerical_safeguards import RealLike, positive_part, to_real


def interval_length(a: RealLike, b: RealLike) -> ENNReal:
    """
    Длина [a, b): max(0, b − a).

    Examples:
        >>> interval_length(2, 5)
        ENNReal(3)
        >>> interval_length(5, 2)
        ENNReal(0)
    """
    return ENNReal(positive_part(to_real(b, "b") - to_real(a, "a")))


def term_length(term: Interval) -> ENNReal:
    """Длина члена покрытия; не полуоткрытый интервал → ∞."""
    if not term.is_half_open:
        return INFINITY
    return interval_length(term.left, term.right)


def length(s: RealSet) -> ENNReal:
    """
    L(s) = inf {b − a : s = [a, b), a ≤ b}.

    - ∅ = [a, a) → 0
    - ровно один полуоткрытый ограниченный компонент → его ширина
    - иначе ∞
    """
    if s.is_empty:
        return ZERO

    if len(s.components) == 1 and s.components[0].is_half_open:
        return term_length(s.components[0])

    return INFINITY
