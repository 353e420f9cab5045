"""
Core math modules

Точные вещественные, расширенные неотрицательные вещественные [0, ∞]
и примитивы полноты (supremum, пределы).
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    RealLike,
    clamp,
    format_real,
    is_valid_float,
    positive_part,
    to_real,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)

# Extended nonnegative reals
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

# Completeness
from src.core.math.completeness import (
    MIN_LIMIT_PROBES,
    CompletenessError,
    affine_limit_at_zero,
    superlevel_supremum,
)

__all__ = [
    # Numerical Safeguards — Types
    "RealLike",
    # Numerical Safeguards — Functions
    "clamp",
    "format_real",
    "is_valid_float",
    "positive_part",
    "to_real",
    "validate_in_range",
    "validate_non_negative",
    "validate_positive",
    # ENNReal
    "ENNReal",
    "ZERO",
    "ONE",
    "INFINITY",
    "infimum",
    "parse_ennreal",
    "supremum",
    "tsum",
    # Completeness
    "MIN_LIMIT_PROBES",
    "CompletenessError",
    "affine_limit_at_zero",
    "superlevel_supremum",
]
