"""
Domain models and value objects.

Contains interval, finite-union set and lazy cover models.
"""

from src.core.domain.cover import (
    EMPTY_TERM,
    Cover,
    CoverError,
    CoverTail,
    point_cover,
)
from src.core.domain.interval import Interval
from src.core.domain.real_set import RealSet

__all__ = [
    # Interval model
    "Interval",
    # Set model
    "RealSet",
    # Cover model
    "Cover",
    "CoverTail",
    "CoverError",
    "EMPTY_TERM",
    "point_cover",
]
