"""
Тесты для порождения борелевских множеств лучами (−∞, c)
"""

from fractions import Fraction

import pytest

from src.core.domain import Interval, RealSet
from src.measure.borel import (
    ComplementExpr,
    CountableIntersectionExpr,
    CountableUnionExpr,
    DifferenceExpr,
    RayExpr,
    UnionExpr,
    decompose,
    generating_cutpoints,
    is_borel,
    verify_generation,
)
from src.measure.config import MeasureConfig


# =============================================================================
# РАЗЛОЖЕНИЕ
# =============================================================================


class TestDecompose:
    def test_half_open_is_ray_difference(self) -> None:
        """[2, 5) = (−∞, 5) \\ (−∞, 2)"""
        expr = decompose(Interval.ico(2, 5))
        assert expr == DifferenceExpr(RayExpr(Fraction(5)), RayExpr(Fraction(2)))
        assert expr.evaluate() == RealSet.of(Interval.ico(2, 5))

    def test_rays(self) -> None:
        assert decompose(Interval.ray_below(1)) == RayExpr(Fraction(1))
        assert decompose(Interval.ray_above(1)) == ComplementExpr(RayExpr(Fraction(1)))

    def test_real_line(self) -> None:
        expr = decompose(RealSet.real_line())
        assert isinstance(expr, UnionExpr)
        assert expr.evaluate() == RealSet.real_line()

    def test_empty(self) -> None:
        assert decompose(RealSet.empty()).evaluate().is_empty

    def test_closed_right_end_is_countable_intersection(self) -> None:
        """[2, 5] = ⋂_n [2, 5 + 1/(n+1))"""
        expr = decompose(Interval.icc(2, 5))
        assert isinstance(expr, CountableIntersectionExpr)
        assert expr.partial(1) == RealSet.of(Interval.ico(2, 6))
        assert expr.partial(3) == RealSet.of(Interval.ico(2, Fraction(16, 3)))
        assert expr.evaluate() == RealSet.of(Interval.icc(2, 5))

    def test_open_left_end_is_countable_union(self) -> None:
        """(2, 5) = ⋃_n [2 + 3/(n+2), 5)"""
        expr = decompose(Interval.ioo(2, 5))
        assert isinstance(expr, CountableUnionExpr)
        assert expr.partial(1) == RealSet.of(Interval.ico("7/2", 5))
        assert expr.partial(2) == RealSet.of(Interval.ico(3, 5))
        assert expr.evaluate() == RealSet.of(Interval.ioo(2, 5))

    def test_point(self) -> None:
        expr = decompose(RealSet.points(3))
        assert isinstance(expr, CountableIntersectionExpr)
        assert expr.partial(4) == RealSet.of(Interval.ico(3, "13/4"))

    def test_open_ray_above(self) -> None:
        """(0, ∞) = ⋃_n [1/(n+2), ∞)"""
        expr = decompose(Interval(left=0, right=None))
        assert isinstance(expr, CountableUnionExpr)
        assert expr.partial(1) == RealSet.of(Interval.ray_above("1/2"))

    def test_several_components(self) -> None:
        s = RealSet.of(Interval.ico(0, 1), Interval.point(3))
        expr = decompose(s)
        assert isinstance(expr, UnionExpr)
        assert len(expr.parts) == 2
        assert expr.evaluate() == s


# =============================================================================
# ПРОВЕРКА ПОРОЖДЕНИЯ
# =============================================================================


class TestIsBorel:
    @pytest.mark.parametrize(
        "s",
        [
            Interval.ico(2, 5),
            Interval.icc(2, 5),
            Interval.ioo(2, 5),
            Interval.ioc(2, 5),
            Interval.point(0),
            Interval.ray_above(0),
            RealSet.real_line(),
            RealSet.empty(),
            RealSet.of(Interval.ioc(-1, 0), Interval.ray_above(3)),
        ],
    )
    def test_all_real_sets_borel(self, s) -> None:
        assert is_borel(s)

    def test_broken_union_limit(self) -> None:
        """Частичное объединение вылезает за заявленный предел"""
        expr = CountableUnionExpr(
            term=lambda n: DifferenceExpr(RayExpr(Fraction(1, n + 1)), RayExpr(Fraction(0))),
            limit=RealSet.of(Interval.ico(0, "1/2")),
        )
        assert not verify_generation(expr, 3)

    def test_broken_intersection_limit(self) -> None:
        """Предел не содержится в частичном пересечении"""
        expr = CountableIntersectionExpr(
            term=lambda n: DifferenceExpr(RayExpr(Fraction(n + 1)), RayExpr(Fraction(0))),
            limit=RealSet.of(Interval.ico(0, 2)),
        )
        assert not verify_generation(expr, 3)

    def test_unknown_expression(self) -> None:
        with pytest.raises(TypeError, match="unknown set expression"):
            verify_generation(object(), 1)


class TestGeneratingCutpoints:
    def test_half_open(self) -> None:
        assert generating_cutpoints(Interval.ico(2, 5)) == [Fraction(2), Fraction(5)]

    def test_closed_uses_shifted_cutpoints(self) -> None:
        cutpoints = generating_cutpoints(Interval.icc(0, 1))
        assert cutpoints == [
            Fraction(0),
            Fraction(5, 4),
            Fraction(4, 3),
            Fraction(3, 2),
            Fraction(2),
        ]

    def test_depth_from_config(self) -> None:
        config = MeasureConfig(generation_probe_terms=2)
        assert generating_cutpoints(Interval.icc(0, 1), config) == [
            Fraction(0),
            Fraction(3, 2),
            Fraction(2),
        ]
