"""
Subadditivity — Аргумент компактности для покрытий интервала

Доказательство нижней оценки Σ L(c_i) ≥ b − a для любого покрытия
(c_i = [c_i, d_i)) интервала [a, b), выполненное как алгоритм:

1. s(x) — длина покрытой части [a, x) (перекрытия считаются один раз)
2. M = {x ∈ [a, b] : x − a ≤ s(x)} — точки, до которых «прогресс» оплачен
3. a ∈ M, M ограничено b; x* = sup M ∈ M (s непрерывна, M замкнуто)
4. Если x* < b и какой-то член [c_k, d_k) содержит x*, то справа от x*
   s растёт не медленнее x − a — противоречие с максимальностью x*.
   Значит, x* < b возможно только для точки, не покрытой членами
5. x* = b ⇒ [a, b) покрыт и Σ L(c_i) ≥ s(b) = b − a

Пустые, повторяющиеся и вырожденные (c_i ≥ d_i) члены дают вклад 0.
Для ленивого бесконечного покрытия префикс удваивается до бюджета
max_cover_terms; x* не убывает при удлинении префикса. На каждом шаге
x* читается проходом по отсортированным членам (first_uncovered_point),
а не перебором точек излома s, так что бюджет в n членов стоит O(n log n).

Также содержит проверки счётной субаддитивности и монотонности μ*.
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from itertools import islice
from typing import Iterable, Optional, Sequence

from src.core.domain.cover import Cover
from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet
from src.core.math.completeness import superlevel_supremum
from src.core.math.ennreal import ENNReal, tsum
from src.core.math.numerical_safeguards import RealLike, positive_part, to_real
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.outer import SetLike, as_real_set, cover_sum, outer_measure

logger = logging.getLogger(__name__)


class CompactnessError(Exception):
    """
    Нарушен внутренний инвариант аргумента компактности.

    x* < b оказался внутри члена покрытия, либо заявленная сумма покрытия
    меньше сертифицированной длины (некорректный total ленивого хвоста).
    """
    pass


@dataclass(frozen=True)
class CoveringCertificate:
    """Результат аргумента компактности для [a, b)."""

    a: Fraction
    b: Fraction
    covered: bool
    exhausted: bool

    # sup M и оплаченный прогресс
    x_star: Fraction
    certified_length: Fraction
    covered_length: Fraction

    cover_total: ENNReal
    terms_examined: int

    # Непокрытая точка [a, b) (только при covered=False и не exhausted)
    gap_witness: Optional[Fraction]

    details: str

    @property
    def lower_bound(self) -> ENNReal:
        """Сертифицированная оценка Σ L(c_i) ≥ x* − a."""
        return ENNReal(self.certified_length)


@dataclass(frozen=True)
class SubadditivityResult:
    """Результат проверки μ*(⋃ S_i) ≤ Σ μ*(S_i)."""

    union_measure: ENNReal
    sum_of_measures: ENNReal
    holds: bool
    sets_examined: int
    details: str


# =============================================================================
# ФУНКЦИЯ ПОКРЫТОЙ ДЛИНЫ
# =============================================================================


def covered_length_up_to(
    terms: Sequence[Interval], x: RealLike, a: Optional[RealLike] = None
) -> Fraction:
    """
    s(x) — длина покрытой части (−∞, x), либо [a, x) при заданном a.

    Перекрытия считаются один раз, поэтому
    s(x) ≤ Σ max(0, min(d_i, x) − max(c_i, a)) ≤ Σ L(c_i).

    Examples:
        >>> covered_length_up_to([Interval.ico(0, 2), Interval.ico(1, 3)], 2)
        Fraction(2, 1)
        >>> covered_length_up_to([Interval.ico(0, 2), Interval.ico(1, 3)], 3, a=1)
        Fraction(2, 1)
    """
    x = to_real(x, "x")
    floor = None if a is None else to_real(a, "a")

    pieces = sorted(
        (t.left if floor is None else max(t.left, floor), min(t.right, x))
        for t in terms
    )

    total = Fraction(0)
    reach: Optional[Fraction] = None
    for left, right in pieces:
        if left >= right:
            continue
        if reach is not None and left < reach:
            left = reach
        total += positive_part(right - left)
        reach = right if reach is None else max(reach, right)

    return total


def progress_supremum(a: RealLike, b: RealLike, terms: Sequence[Interval]) -> Fraction:
    """
    x* = sup {x ∈ [a, b] : x − a ≤ s(x)}.

    Множество непусто (содержит a), поэтому результат всегда определён.
    """
    a = to_real(a, "a")
    b = to_real(b, "b")

    def slack(x: Fraction) -> Fraction:
        return covered_length_up_to(terms, x, a) - (x - a)

    breakpoints = [p for t in terms for p in (t.left, t.right)]
    x_star = superlevel_supremum(slack, breakpoints, a, b)

    if x_star is None:
        # s(a) ≥ 0 = a − a, так что a ∈ M всегда
        raise CompactnessError(f"progress set is empty on [{a}, {b})")

    return x_star


def first_uncovered_point(a: RealLike, b: RealLike, terms: Sequence[Interval]) -> Fraction:
    """
    Первая точка x ≥ a, с которой начинается непокрытый промежуток, усечённая до b.

    slack(x) = s(x) − (x − a) не возрастает (наклон 0 или −1) и slack(a) = 0,
    поэтому M = [a, x*] и x* совпадает с progress_supremum. Проход по членам,
    упорядоченным по левому концу, стоит O(n log n).

    Examples:
        >>> first_uncovered_point(0, 4, [Interval.ico(0, 1), Interval.ico(2, 3)])
        Fraction(1, 1)
    """
    a = to_real(a, "a")
    b = to_real(b, "b")

    reach = a
    for t in sorted(terms, key=lambda t: t.left):
        if reach >= b or t.left > reach:
            break
        if t.right > reach:
            reach = t.right

    return min(reach, b)


# =============================================================================
# СЕРТИФИКАТ ПОКРЫТИЯ
# =============================================================================


def certify_interval_cover(
    a: RealLike,
    b: RealLike,
    cover: Cover,
    config: Optional[MeasureConfig] = None,
) -> CoveringCertificate:
    """
    Аргумент компактности: покрывает ли cover интервал [a, b), и если да —
    сертификат Σ L(c_i) ≥ b − a.

    Args:
        a: Левый конец
        b: Правый конец (a ≥ b — пустой интервал, тривиально покрыт)
        cover: Покрытие (конечное или ленивое)
        config: Параметры (бюджет max_cover_terms)

    Returns:
        CoveringCertificate

    Raises:
        CompactnessError: При нарушении инварианта шага 4
    """
    config = config or DEFAULT_CONFIG
    a = to_real(a, "a")
    b = to_real(b, "b")
    cover_total = cover_sum(cover)

    if a >= b:
        return CoveringCertificate(
            a=a,
            b=b,
            covered=True,
            exhausted=False,
            x_star=a,
            certified_length=Fraction(0),
            covered_length=Fraction(0),
            cover_total=cover_total,
            terms_examined=0,
            gap_witness=None,
            details=f"[{a}, {b}) is empty",
        )

    examined: list[Interval] = []
    terms = cover.iter_terms()
    budget = 1

    while True:
        batch = list(islice(terms, budget - len(examined)))
        finished = len(examined) + len(batch) < budget
        examined.extend(batch)

        x_star = first_uncovered_point(a, b, examined)
        covered_length = covered_length_up_to(examined, x_star, a)

        if x_star == b:
            if cover_total < b - a:
                raise CompactnessError(
                    f"cover total {cover_total} below certified length {b - a}"
                )
            logger.debug(
                "[%s, %s) covered after %d terms, total=%s",
                a, b, len(examined), cover_total,
            )
            return CoveringCertificate(
                a=a,
                b=b,
                covered=True,
                exhausted=False,
                x_star=x_star,
                certified_length=b - a,
                covered_length=covered_length,
                cover_total=cover_total,
                terms_examined=len(examined),
                gap_witness=None,
                details=f"PASS: sum of lengths >= s(b) = {covered_length} >= {b - a}",
            )

        # Шаг 4: x* < b не может лежать внутри просмотренного члена
        for t in examined:
            if t.contains(x_star):
                raise CompactnessError(
                    f"x*={x_star} < b={b} lies inside cover term {t}"
                )

        exhausted = not finished and len(examined) >= config.max_cover_terms

        if finished or exhausted:
            logger.debug(
                "[%s, %s) not certified: x*=%s, terms=%d, exhausted=%s",
                a, b, x_star, len(examined), exhausted,
            )
            return CoveringCertificate(
                a=a,
                b=b,
                covered=False,
                exhausted=exhausted,
                x_star=x_star,
                certified_length=x_star - a,
                covered_length=covered_length,
                cover_total=cover_total,
                terms_examined=len(examined),
                gap_witness=None if exhausted else x_star,
                details=(
                    f"term budget {config.max_cover_terms} exhausted at x*={x_star}"
                    if exhausted
                    else f"point {x_star} of [{a}, {b}) is not covered"
                ),
            )

        budget = min(budget * 2, config.max_cover_terms)


# =============================================================================
# СВОЙСТВА ВНЕШНЕЙ МЕРЫ
# =============================================================================


def check_countable_subadditivity(
    sets: Iterable[SetLike],
    config: Optional[MeasureConfig] = None,
    max_terms: Optional[int] = None,
) -> SubadditivityResult:
    """
    Проверка μ*(⋃ S_i) ≤ Σ μ*(S_i) на первых max_terms множествах семейства.

    Семейство потребляется лениво; по умолчанию бюджет — max_cover_terms.
    """
    config = config or DEFAULT_CONFIG
    limit = max_terms if max_terms is not None else config.max_cover_terms

    family = [as_real_set(s) for s in islice(sets, limit)]
    union = RealSet.empty().union(*family)

    union_measure = outer_measure(union, config)
    sum_of_measures = tsum(outer_measure(s, config) for s in family)
    holds = union_measure <= sum_of_measures

    return SubadditivityResult(
        union_measure=union_measure,
        sum_of_measures=sum_of_measures,
        holds=holds,
        sets_examined=len(family),
        details=f"mu*(union)={union_measure}, sum={sum_of_measures}",
    )


def check_monotonicity(
    s: SetLike, t: SetLike, config: Optional[MeasureConfig] = None
) -> bool:
    """
    Проверка μ*(s) ≤ μ*(t) для s ⊆ t.

    Raises:
        ValueError: Если s не является подмножеством t
    """
    s = as_real_set(s)
    t = as_real_set(t)

    if not s.issubset(t):
        raise ValueError(f"{s} must be a subset of {t}")

    return outer_measure(s, config) <= outer_measure(t, config)
