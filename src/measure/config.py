"""Конфигурация вычислений внешней меры и меры Лебега."""

from dataclasses import dataclass
from fractions import Fraction
from typing import Final

from src.core.math.completeness import MIN_LIMIT_PROBES
from src.core.math.numerical_safeguards import to_real

# Точки-пробы t → 0+ для предела аффинных семейств (ε-покрытия, приближения)
LIMIT_PROBES_DEFAULT: Final[tuple[Fraction, ...]] = (
    Fraction(1),
    Fraction(1, 2),
    Fraction(1, 4),
)

# Сколько членов ленивого покрытия просматривается максимум
MAX_COVER_TERMS_DEFAULT: Final[int] = 4096

# Отступ сетки тестовых множеств от крайних точек множества
TEST_GRID_PADDING_DEFAULT: Final[Fraction] = Fraction(1)

# Сколько членов счётных объединений / пересечений проверяется
GENERATION_PROBE_TERMS_DEFAULT: Final[int] = 4

# ε свидетельского покрытия в отчёте
REPORT_EPS_DEFAULT: Final[Fraction] = Fraction(1, 1000)


@dataclass(frozen=True)
class MeasureConfig:
    """Параметры вычислений.

    - limit_probes: строго убывающие t из (0, 1] для предела t → 0+;
      при t > 1 приближение [a + t(b − a), b) пусто
    - max_cover_terms: бюджет членов ленивого покрытия
    - test_grid_padding: отступ сетки тестовых интервалов Каратеодори
    - generation_probe_terms: членов счётных операций при проверке борелевости
    - report_eps: ε свидетельского покрытия в OuterMeasureResult
    """
    limit_probes: tuple[Fraction, ...] = LIMIT_PROBES_DEFAULT
    max_cover_terms: int = MAX_COVER_TERMS_DEFAULT
    test_grid_padding: Fraction = TEST_GRID_PADDING_DEFAULT
    generation_probe_terms: int = GENERATION_PROBE_TERMS_DEFAULT
    report_eps: Fraction = REPORT_EPS_DEFAULT

    def __post_init__(self) -> None:
        probes = tuple(to_real(t, "limit probe") for t in self.limit_probes)
        if len(probes) < MIN_LIMIT_PROBES:
            raise ValueError(
                f"limit_probes needs at least {MIN_LIMIT_PROBES} values, got {len(probes)}"
            )
        if any(not 0 < t <= 1 for t in probes):
            raise ValueError(f"limit_probes must lie in (0, 1], got {[str(t) for t in probes]}")
        if any(later >= earlier for earlier, later in zip(probes, probes[1:])):
            raise ValueError(
                f"limit_probes must be strictly decreasing, got {[str(t) for t in probes]}"
            )
        object.__setattr__(self, "limit_probes", probes)

        if self.max_cover_terms < 1:
            raise ValueError(f"max_cover_terms must be positive, got {self.max_cover_terms}")
        if self.generation_probe_terms < 1:
            raise ValueError(
                f"generation_probe_terms must be positive, got {self.generation_probe_terms}"
            )
        if self.test_grid_padding <= 0:
            raise ValueError(f"test_grid_padding must be positive, got {self.test_grid_padding}")
        if self.report_eps <= 0:
            raise ValueError(f"report_eps must be positive, got {self.report_eps}")


DEFAULT_CONFIG = MeasureConfig()
