"""
Numerical Safeguards — Exact Real Primitives

Модуль обеспечивает единое представление вещественных чисел во всех
вычислениях меры:
- Точная рациональная арифметика (fractions.Fraction) вместо float
- Конверсия входов (int / Fraction / str / finite float) в Fraction
- NaN/Inf отвергаются на входе, а не санитизируются
- Валидация неотрицательности и диапазонов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все endpoint-ы и длины — Fraction (никакого накопления ошибки округления)
2. NaN/Inf никогда не попадают внутрь (ValueError на входе)
3. bool не считается числом
4. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import Decimal
from fractions import Fraction
from numbers import Rational
from typing import Final, Union

# =============================================================================
# ТИПЫ И КОНСТАНТЫ
# =============================================================================

# Всё, что допускается на входе публичных операций
RealLike = Union[int, float, str, Decimal, Fraction]

ZERO: Final[Fraction] = Fraction(0)


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# КОНВЕРСИЯ В ТОЧНЫЕ ВЕЩЕСТВЕННЫЕ
# =============================================================================


def to_real(value: RealLike, name: str = "value") -> Fraction:
    """
    Конверсия входного значения в точное рациональное число.

    Float конвертируется по своему точному двоичному значению
    (Fraction(0.1) != Fraction(1, 10)). Для десятичных литералов
    используйте строки: "0.1", "5/2".

    Args:
        value: int, Fraction, Decimal, str или конечный float
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Fraction

    Raises:
        ValueError: Если значение NaN/Inf, bool, не парсится или имеет
            неподдерживаемый тип

    Examples:
        >>> to_real(3)
        Fraction(3, 1)
        >>> to_real("5/2")
        Fraction(5, 2)
        >>> to_real("2.5")
        Fraction(5, 2)
        >>> to_real(0.5)
        Fraction(1, 2)
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a real number, got bool {value!r}")

    if isinstance(value, Fraction):
        return value

    if isinstance(value, int):
        return Fraction(value)

    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)

    if isinstance(value, float):
        if not is_valid_float(value):
            raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")
        return Fraction(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"{name} must be a finite decimal (not NaN/Inf), got {value}")
        return Fraction(value)

    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except (ValueError, ZeroDivisionError) as e:
            raise ValueError(f"{name} must be a rational literal, got {value!r}") from e

    raise ValueError(f"{name} must be int/Fraction/str/float, got {type(value).__name__}")


def format_real(value: Fraction) -> str:
    """
    Каноническая строка для JSON: "3", "-5/2".

    Args:
        value: Fraction

    Returns:
        str(value) — обратимо через to_real
    """
    return str(value)


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(
    value: Fraction,
    min_value: Fraction | None = None,
    max_value: Fraction | None = None,
) -> Fraction:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(Fraction(-3), ZERO)
        Fraction(0, 1)
        >>> clamp(Fraction(15), ZERO, Fraction(10))
        Fraction(10, 1)
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def positive_part(value: Fraction) -> Fraction:
    """max(0, value)."""
    return clamp(value, min_value=ZERO)


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: RealLike, name: str) -> Fraction:
    """
    Валидация, что значение строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение как Fraction

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    real = to_real(value, name)

    if real <= 0:
        raise ValueError(f"{name} must be positive, got {real}")

    return real


def validate_non_negative(value: RealLike, name: str) -> Fraction:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение как Fraction

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    real = to_real(value, name)

    if real < 0:
        raise ValueError(f"{name} must be non-negative, got {real}")

    return real


def validate_in_range(
    value: RealLike,
    name: str,
    min_value: Fraction | None = None,
    max_value: Fraction | None = None,
) -> Fraction:
    """
    Валидация, что значение в заданном диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение как Fraction

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    real = to_real(value, name)

    if min_value is not None and real < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {real}")

    if max_value is not None and real > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {real}")

    return real
