"""
Тесты для примитивов полноты: superlevel_supremum, affine_limit_at_zero
"""

from fractions import Fraction

import pytest

from src.core.math.completeness import (
    CompletenessError,
    affine_limit_at_zero,
    superlevel_supremum,
)
from src.core.math.ennreal import INFINITY, ENNReal

PROBES = (Fraction(1), Fraction(1, 2), Fraction(1, 4))


# =============================================================================
# SUPERLEVEL SUPREMUM
# =============================================================================


class TestSuperlevelSupremum:
    def test_linear_root(self) -> None:
        """sup {x : 1 − x ≥ 0} на [0, 3] = 1"""
        assert superlevel_supremum(lambda x: 1 - x, [], Fraction(0), Fraction(3)) == 1

    def test_whole_interval(self) -> None:
        """f ≥ 0 всюду → sup = hi"""
        assert superlevel_supremum(lambda x: x, [], Fraction(0), Fraction(3)) == 3

    def test_empty_set(self) -> None:
        assert superlevel_supremum(lambda x: Fraction(-1), [], Fraction(0), Fraction(3)) is None

    def test_piecewise_rightmost_component(self) -> None:
        """f = |x − 2| − 1 на [0, 5]: {f ≥ 0} = [0, 1] ∪ [3, 5] → sup = 5"""
        def f(x: Fraction) -> Fraction:
            return abs(x - 2) - 1

        assert superlevel_supremum(f, [Fraction(2)], Fraction(0), Fraction(5)) == 5

    def test_piecewise_tent(self) -> None:
        """f = 1 − |x − 2| на [0, 5]: {f ≥ 0} = [1, 3] → sup = 3"""
        def f(x: Fraction) -> Fraction:
            return 1 - abs(x - 2)

        assert superlevel_supremum(f, [Fraction(2)], Fraction(0), Fraction(5)) == 3

    def test_flat_zero_then_negative(self) -> None:
        """f = 0 на [0, 1], затем убывает: sup = 1"""
        def f(x: Fraction) -> Fraction:
            return 1 - x - abs(x - 1)

        assert superlevel_supremum(f, [Fraction(1)], Fraction(0), Fraction(5)) == 1

    def test_exact_rational_root(self) -> None:
        root = superlevel_supremum(lambda x: 1 - 3 * x, [], Fraction(0), Fraction(1))
        assert root == Fraction(1, 3)

    def test_outside_breakpoints_ignored(self) -> None:
        assert superlevel_supremum(lambda x: 1 - x, [Fraction(-5), Fraction(10)], Fraction(0), Fraction(3)) == 1

    def test_degenerate_interval(self) -> None:
        assert superlevel_supremum(lambda x: Fraction(0), [], Fraction(2), Fraction(2)) == 2

    def test_lo_above_hi(self) -> None:
        with pytest.raises(ValueError, match="lo must be <= hi"):
            superlevel_supremum(lambda x: x, [], Fraction(3), Fraction(0))


# =============================================================================
# AFFINE LIMIT
# =============================================================================


class TestAffineLimitAtZero:
    def test_increasing_family_infimum(self) -> None:
        """3 + t → inf по t > 0 = 3"""
        assert affine_limit_at_zero(lambda t: ENNReal(3 + t), PROBES) == 3

    def test_decreasing_family_supremum(self) -> None:
        """2(1 − t) → sup по t ∈ (0, 1] = 2"""
        assert affine_limit_at_zero(lambda t: ENNReal(2 * (1 - t)), PROBES) == 2

    def test_constant_family(self) -> None:
        assert affine_limit_at_zero(lambda t: ENNReal(Fraction(5, 2)), PROBES) == Fraction(5, 2)

    def test_infinite_family(self) -> None:
        assert affine_limit_at_zero(lambda t: INFINITY, PROBES) == INFINITY

    def test_mixed_infinite(self) -> None:
        with pytest.raises(CompletenessError, match="mixes finite and infinite"):
            affine_limit_at_zero(lambda t: INFINITY if t == 1 else ENNReal(t), PROBES)

    def test_non_affine(self) -> None:
        with pytest.raises(CompletenessError, match="not affine"):
            affine_limit_at_zero(lambda t: ENNReal(t * t), PROBES)

    def test_negative_limit(self) -> None:
        """4t − 1 неотрицательно на пробах, но экстраполяция к 0 даёт −1"""
        probes = (Fraction(1), Fraction(1, 2), Fraction(3, 8))
        with pytest.raises(CompletenessError, match="non-negative"):
            affine_limit_at_zero(lambda t: ENNReal(4 * t - 1), probes)

    def test_too_few_probes(self) -> None:
        with pytest.raises(CompletenessError, match="at least 3 probes"):
            affine_limit_at_zero(lambda t: ENNReal(t), (Fraction(1), Fraction(1, 2)))

    def test_non_positive_probe(self) -> None:
        with pytest.raises(CompletenessError, match="positive"):
            affine_limit_at_zero(lambda t: ENNReal(t), (Fraction(1), Fraction(1, 2), Fraction(0)))

    def test_not_decreasing(self) -> None:
        with pytest.raises(CompletenessError, match="strictly decreasing"):
            affine_limit_at_zero(lambda t: ENNReal(t), (Fraction(1), Fraction(1), Fraction(1, 2)))

    def test_probes_accept_literals(self) -> None:
        assert affine_limit_at_zero(lambda t: ENNReal(1 + t), ("1", "1/2", "1/4")) == 1
