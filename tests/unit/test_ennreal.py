"""
Тесты для ENNReal — расширенных неотрицательных вещественных [0, ∞]

Проверяемые инварианты:
1. Неотрицательность (усечённое вычитание)
2. ∞ поглощает сложение
3. 0 · ∞ = 0
4. Полный порядок, согласованный с int/Fraction
5. tsum — supremum частичных сумм, ленивое потребление
"""

from fractions import Fraction
from itertools import count

import pytest

import src.core.math as core_math
from src.core.math.ennreal import (
    INFINITY,
    ONE,
    ZERO,
    ENNReal,
    infimum,
    parse_ennreal,
    supremum,
    tsum,
)


class TestConstruction:
    def test_of_converts(self) -> None:
        assert ENNReal.of(3) == 3
        assert ENNReal.of("5/2") == Fraction(5, 2)
        assert ENNReal.of(ONE) is ONE

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ENNReal.of(-1)

        with pytest.raises(ValueError, match="non-negative"):
            ENNReal(Fraction(-1))

    def test_infinity(self) -> None:
        assert INFINITY.infinite
        assert not INFINITY.is_finite
        assert ENNReal.infinity() == INFINITY

    def test_to_fraction(self) -> None:
        assert ENNReal.of(7).to_fraction() == Fraction(7)

        with pytest.raises(ValueError, match="infinite"):
            INFINITY.to_fraction()


class TestArithmetic:
    def test_addition(self) -> None:
        assert ENNReal.of(2) + ENNReal.of(3) == 5
        assert ENNReal.of(2) + 3 == 5
        assert 3 + ENNReal.of(2) == 5

    def test_infinity_absorbs(self) -> None:
        assert ENNReal.of(2) + INFINITY == INFINITY
        assert INFINITY + INFINITY == INFINITY

    def test_builtin_sum(self) -> None:
        assert sum([ONE, ONE, ENNReal.of("1/2")]) == Fraction(5, 2)

    def test_multiplication(self) -> None:
        assert ENNReal.of(2) * 3 == 6
        assert ZERO * INFINITY == ZERO
        assert 0 * INFINITY == ZERO
        assert INFINITY * 2 == INFINITY

    def test_truncated_subtraction(self) -> None:
        """x − y = max(0, x − y)"""
        assert ENNReal.of(5) - 3 == 2
        assert ENNReal.of(3) - 5 == ZERO
        assert INFINITY - 5 == INFINITY
        assert ENNReal.of(5) - INFINITY == ZERO

    def test_float_operands(self) -> None:
        """Конечные float переводятся точно, как и в остальных операциях"""
        assert ENNReal.of(1) + 0.5 == Fraction(3, 2)
        assert 0.5 + ONE == Fraction(3, 2)
        assert ENNReal.of(3) * 0.25 == Fraction(3, 4)
        assert ONE - 0.25 == Fraction(3, 4)
        assert INFINITY + 2.5 == INFINITY
        assert ZERO + 0.1 == Fraction(0.1)

    def test_invalid_float_operands(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ONE + (-0.5)

        with pytest.raises(ValueError, match="not NaN/Inf"):
            ONE + float("nan")

    def test_addition_associative(self) -> None:
        a, b, c = ENNReal.of("1/3"), ENNReal.of("1/6"), INFINITY
        assert (a + b) + c == a + (b + c)
        assert (a + b) + ONE == a + (b + ONE)


class TestOrder:
    def test_total_order(self) -> None:
        assert ZERO < ONE < INFINITY
        assert INFINITY > ENNReal.of(10**100)
        assert not INFINITY < INFINITY
        assert INFINITY <= INFINITY

    def test_mixed_comparisons(self) -> None:
        assert ENNReal.of(3) == Fraction(3)
        assert ENNReal.of(3) < 4
        assert ENNReal.of(3) >= Fraction(5, 2)
        assert ENNReal.of(0) > -1
        assert ENNReal.of(0) != -1

    def test_float_comparisons(self) -> None:
        assert ENNReal.of("1/2") == 0.5
        assert ONE < 1.5
        assert ONE >= 0.75
        assert ZERO > -0.5
        assert ZERO != float("nan")
        assert INFINITY == float("inf")
        assert ENNReal.of(10**100) < float("inf")
        assert not INFINITY < float("inf")

    def test_hash_consistent_with_eq(self) -> None:
        assert hash(ENNReal.of(3)) == hash(Fraction(3))
        assert len({ENNReal.of(1), ONE, ENNReal.of("1")}) == 1

    def test_min_max(self) -> None:
        assert max(ONE, INFINITY) == INFINITY
        assert min(ONE, INFINITY) == ONE


class TestPackageExports:
    def test_constants_are_ennreal(self) -> None:
        """Константы пакета src.core.math — элементы [0, ∞], а не Fraction"""
        assert core_math.ZERO is ZERO
        assert core_math.ONE is ONE
        assert core_math.INFINITY is INFINITY
        assert all(isinstance(c, ENNReal) for c in (core_math.ZERO, core_math.ONE))


class TestRepresentation:
    def test_str_and_parse(self) -> None:
        assert str(INFINITY) == "inf"
        assert str(ENNReal.of("5/2")) == "5/2"
        assert parse_ennreal("inf") == INFINITY
        assert parse_ennreal("5/2") == Fraction(5, 2)

    def test_float(self) -> None:
        assert float(ENNReal.of("1/4")) == 0.25
        assert float(INFINITY) == float("inf")


class TestSums:
    def test_finite_tsum(self) -> None:
        assert tsum([ONE, ONE, ENNReal.of("1/2")]) == Fraction(5, 2)
        assert tsum([]) == ZERO

    def test_infinite_term(self) -> None:
        assert tsum([ONE, INFINITY, ONE]) == INFINITY

    def test_lazy_infinite_sequence(self) -> None:
        """Ленивая бесконечная последовательность: supremum первых max_terms частичных сумм"""
        halves = (ENNReal(Fraction(1, 2 ** (n + 1))) for n in count())
        assert tsum(halves, max_terms=3) == Fraction(7, 8)

    def test_infinite_term_stops_consumption(self) -> None:
        """После ∞ последовательность дальше не потребляется"""
        def terms():
            yield ONE
            yield INFINITY
            raise AssertionError("must not be consumed")

        assert tsum(terms()) == INFINITY

    def test_supremum_infimum(self) -> None:
        assert supremum([ONE, ENNReal.of(3), ZERO]) == 3
        assert supremum([]) == ZERO
        assert infimum([ONE, ENNReal.of(3)]) == ONE
        assert infimum([]) == INFINITY
