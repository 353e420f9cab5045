"""
Тесты для меры Лебега λ = μ* |Borel

Проверяемые свойства:
1. λ([a, b)) = b − a, λ совпадает с μ* на борелевских множествах
2. λ({a}) = 0 как разность мер интервалов
3. λ((a, b)) = b − a как монотонный предел
4. Аддитивность разбиения [a, b) = [a, m) ∪ [m, b)
5. Ошибки: не борелевское / не измеримое порождение
"""

from fractions import Fraction

import pytest

from src.core.domain import Interval, RealSet
from src.core.math.ennreal import INFINITY, ZERO
from src.measure import lebesgue
from src.measure.borel import NotBorelError
from src.measure.caratheodory import NotMeasurableError
from src.measure.config import MeasureConfig
from src.measure.lebesgue import (
    borel_subset_caratheodory,
    lebesgue_measure,
    measure_icc,
    measure_ico,
    measure_ioc,
    measure_ioo,
    measure_singleton,
    measure_split,
)
from src.measure.outer import outer_measure


class TestIntervalMeasures:
    def test_half_open(self) -> None:
        """λ([2, 5)) = 3"""
        assert measure_ico(2, 5) == 3

    def test_reversed(self) -> None:
        assert measure_ico(5, 2) == ZERO

    def test_closed_and_half_closed(self) -> None:
        assert measure_icc(2, 5) == 3
        assert measure_ioc(2, 5) == 3

    def test_open_as_monotone_limit(self) -> None:
        """λ((a, b)) = sup_t λ([a + t(b − a), b)) = b − a"""
        assert measure_ioo(2, 5) == 3
        assert measure_ioo("1/3", "1/2") == Fraction(1, 6)

    @pytest.mark.parametrize(
        "probes",
        [
            (Fraction(1, 10), Fraction(1, 100), Fraction(1, 1000)),
            (1, "1/3", "1/9", "1/27"),
        ],
    )
    def test_open_agrees_with_outer_measure_under_custom_probes(self, probes) -> None:
        """Пробы из (0, 1] дают непустые приближения [a + t(b − a), b)"""
        config = MeasureConfig(limit_probes=probes)
        assert measure_ioo(2, 5, config) == 3
        assert measure_ioo(2, 5, config) == outer_measure(Interval.ioo(2, 5), config)

    def test_open_reversed(self) -> None:
        assert measure_ioo(5, 2) == ZERO
        assert measure_ioo(2, 2) == ZERO


class TestPointMass:
    @pytest.mark.parametrize("a", [0, 7, "-5/3"])
    def test_singleton_has_measure_zero(self, a) -> None:
        """λ({a}) = λ([a, a+1)) − λ((a, a+1)) = 0"""
        assert measure_singleton(a) == ZERO

    def test_finite_set(self) -> None:
        assert lebesgue_measure(RealSet.points(1, 2, 3)) == ZERO


class TestSplit:
    def test_split_round_trip(self) -> None:
        """λ([a, m)) + λ([m, b)) = λ([a, b))"""
        left, right = measure_split(0, 2, 5)
        assert (left, right) == (2, 3)
        assert left + right == measure_ico(0, 5)

    def test_split_at_ends(self) -> None:
        assert measure_split(0, 0, 5) == (ZERO, 5)
        assert measure_split(0, 5, 5) == (5, ZERO)

    def test_split_point_outside(self) -> None:
        with pytest.raises(ValueError, match="m must lie in"):
            measure_split(0, 6, 5)


class TestAgreesWithOuterMeasure:
    @pytest.mark.parametrize(
        "s",
        [
            Interval.ico(2, 5),
            Interval.icc("-1/2", "1/2"),
            RealSet.of(Interval.ico(0, 1), Interval.ioo(2, 3)),
            Interval.ray_below(0),
            RealSet.real_line(),
            RealSet.empty(),
        ],
    )
    def test_restriction(self, s) -> None:
        assert lebesgue_measure(s) == outer_measure(s)

    def test_unbounded(self) -> None:
        assert lebesgue_measure(Interval.ray_above(0)) == INFINITY


class TestGeneration:
    def test_rays_generate_inside_caratheodory(self) -> None:
        assert borel_subset_caratheodory([0, "1/2", -3])

    def test_not_borel(self, monkeypatch) -> None:
        monkeypatch.setattr(lebesgue, "is_borel", lambda s, config=None: False)

        with pytest.raises(NotBorelError, match="not generated by rays"):
            lebesgue_measure(Interval.ico(0, 1))

    def test_non_measurable_ray(self, monkeypatch) -> None:
        monkeypatch.setattr(lebesgue, "is_ray_measurable", lambda c, config=None: False)

        assert not borel_subset_caratheodory([0])
        with pytest.raises(NotMeasurableError, match="not Caratheodory-measurable"):
            lebesgue_measure(Interval.ico(0, 1))
