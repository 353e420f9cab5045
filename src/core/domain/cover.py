"""
Cover — Счётное покрытие полуоткрытыми интервалами

Покрытие — последовательность [c_n, d_n), индексированная ℕ:
- конечный префикс terms (материализован)
- необязательный ленивый хвост CoverTail (члены строятся по запросу)

Хвост несёт замкнутую форму суммы длин (total) и, если известно,
точное объединение своих членов (span). Это позволяет работать с
бесконечными покрытиями, не материализуя их.

Конечное покрытие считается дополненным пустыми [0, 0) до длины ℕ.
"""

from dataclasses import dataclass
from fractions import Fraction
from itertools import count, islice
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Union

from src.core.contracts.validators import conform
from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.core.math.ennreal import ENNReal, tsum
from src.core.math.numerical_safeguards import (
    RealLike,
    format_real,
    to_real,
    validate_positive,
)

EMPTY_TERM = Interval.ico(0, 0)


class CoverError(Exception):
    """
    Некорректное покрытие.

    Член покрытия не является полуоткрытым интервалом [a, b) с конечными
    концами, либо покрытие не покрывает заявленное множество.
    """
    pass


def _check_term(term: Interval, index: int) -> Interval:
    if not term.is_half_open:
        raise CoverError(f"cover term #{index} must be a half-open interval [a, b), got {term}")
    return term


@dataclass(frozen=True)
class CoverTail:
    """Ленивый бесконечный хвост покрытия."""

    term: Callable[[int], Interval]
    total: ENNReal
    span: Optional[RealSet] = None
    description: str = ""


@dataclass(frozen=True)
class Cover:
    """Покрытие: конечный префикс + необязательный ленивый хвост."""

    terms: tuple[Interval, ...] = ()
    tail: Optional[CoverTail] = None

    def __post_init__(self) -> None:
        for i, term in enumerate(self.terms):
            _check_term(term, i)

    @classmethod
    def of(cls, *intervals: Interval) -> "Cover":
        return cls(terms=tuple(intervals))

    @classmethod
    def single(cls, interval: Interval) -> "Cover":
        """Покрытие интервала самим собой (дополненное пустыми)."""
        return cls.of(interval)

    @property
    def is_finite(self) -> bool:
        return self.tail is None

    def term(self, n: int) -> Interval:
        """n-й член; после конечного покрытия — пустой [0, 0)."""
        if n < 0:
            raise ValueError(f"term index must be non-negative, got {n}")
        if n < len(self.terms):
            return self.terms[n]
        if self.tail is None:
            return EMPTY_TERM
        return _check_term(self.tail.term(n - len(self.terms)), n)

    def iter_terms(self) -> Iterator[Interval]:
        """Ленивый перебор членов (без дополнения пустыми)."""
        yield from self.terms
        if self.tail is not None:
            for n in count():
                yield _check_term(self.tail.term(n), len(self.terms) + n)

    def lengths(self) -> Iterator[ENNReal]:
        for term in self.iter_terms():
            yield ENNReal.of(term.width)

    def total(self) -> ENNReal:
        """Σ длин: префикс плюс замкнутая форма хвоста."""
        prefix = tsum(ENNReal.of(term.width) for term in self.terms)
        if self.tail is None:
            return prefix
        return prefix + self.tail.total

    def partial_sums(self, max_terms: Optional[int] = None) -> Iterator[ENNReal]:
        """Неубывающие частичные суммы Σ_{i<n} L(c_i)."""
        running = Fraction(0)
        for term in islice(self.iter_terms(), max_terms):
            running += term.width
            yield ENNReal(running)

    def union(self, max_terms: Optional[int] = None) -> RealSet:
        """
        Объединение членов.

        Если span хвоста известен — точное объединение; иначе хвост
        учитывается первыми max_terms членами.
        """
        covered = RealSet.of(*self.terms)
        if self.tail is None:
            return covered
        if self.tail.span is not None:
            return covered.union(self.tail.span)
        if max_terms is None:
            raise CoverError("tail span is unknown: max_terms is required")
        tail_terms = [self.term(len(self.terms) + n) for n in range(max_terms)]
        return covered.union(RealSet.of(*tail_terms))

    def covers(self, s: RealSet, max_terms: Optional[int] = None) -> bool:
        return s.issubset(self.union(max_terms))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-представление, проверенное по контракту cover."""
        return conform("cover", {
            "terms": [
                {"left": format_real(t.left), "right": format_real(t.right)}
                for t in self.terms
            ],
            "tail": None
            if self.tail is None
            else {"total": str(self.tail.total), "description": self.tail.description},
        })


# =============================================================================
# ПОКРЫТИЕ СЧЁТНОГО МНОЖЕСТВА
# =============================================================================


def point_cover(
    points: Union[Sequence[RealLike], Callable[[int], RealLike]],
    eps: RealLike,
) -> Cover:
    """
    Геометрическое покрытие [p_n, p_n + eps / 2^(n+1)) счётного множества.

    Args:
        points: Конечная последовательность точек или ленивая нумерация n ↦ p_n
        eps: Положительный бюджет длины

    Returns:
        Cover с суммой длин ≤ eps (ровно eps для бесконечной нумерации)
    """
    eps = validate_positive(eps, "eps")

    def term(n: int, p: RealLike) -> Interval:
        p = to_real(p, "point")
        return Interval.ico(p, p + eps / 2 ** (n + 1))

    if callable(points):
        enumeration = points
        return Cover(
            tail=CoverTail(
                term=lambda n: term(n, enumeration(n)),
                total=ENNReal.of(eps),
                description="geometric point cover",
            )
        )

    return Cover(terms=tuple(term(n, p) for n, p in enumerate(points)))
