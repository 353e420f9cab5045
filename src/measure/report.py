"""
Outer Measure Report — значение μ* со свидетелями

Отчёт объединяет обе стороны равенства μ*(S) = value:
- верхняя оценка: каноническое покрытие при ε = report_eps и его сумма
- нижняя оценка: сертификаты компактности для каждой ограниченной
  компоненты ⟨l, r⟩ на отрезке [l, r)

to_dict() проверяется по контракту measure_report.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Optional

from src.core.contracts.validators import conform
from src.core.domain.real_set import RealSet
from src.core.math.numerical_safeguards import format_real
from src.core.math.ennreal import ENNReal
from src.measure.config import DEFAULT_CONFIG, MeasureConfig
from src.measure.outer import SetLike, as_real_set, canonical_cover, cover_sum, outer_measure
from src.measure.subadditivity import CoveringCertificate, certify_interval_cover


@dataclass(frozen=True)
class OuterMeasureResult:
    """Значение внешней меры с диагностикой."""

    real_set: RealSet
    value: ENNReal

    # Свидетельское покрытие
    witness_eps: Fraction
    witness_total: ENNReal

    certificates: tuple[CoveringCertificate, ...]

    details: str

    def to_dict(self) -> Dict[str, Any]:
        """JSON-представление, проверенное по контракту measure_report."""
        return conform("measure_report", {
            "set": self.real_set.model_dump(mode="json"),
            "value": str(self.value),
            "witness_eps": format_real(self.witness_eps),
            "witness_total": str(self.witness_total),
            "certificates": [
                {
                    "a": format_real(c.a),
                    "b": format_real(c.b),
                    "covered": c.covered,
                    "x_star": format_real(c.x_star),
                    "terms_examined": c.terms_examined,
                }
                for c in self.certificates
            ],
            "details": self.details,
        })


def outer_measure_report(
    s: SetLike, config: Optional[MeasureConfig] = None
) -> OuterMeasureResult:
    """
    μ*(s) вместе со свидетельским покрытием и сертификатами нижней оценки.

    Args:
        s: Множество
        config: Параметры (report_eps, бюджеты)

    Returns:
        OuterMeasureResult
    """
    config = config or DEFAULT_CONFIG
    s = as_real_set(s)

    value = outer_measure(s, config)
    witness = canonical_cover(s, config.report_eps)
    witness_total = cover_sum(witness)

    certificates = tuple(
        certify_interval_cover(c.left, c.right, witness, config)
        for c in s.components
        if c.is_bounded and c.left < c.right
    )

    if all(c.covered for c in certificates):
        details = f"PASS: {value} <= mu* <= {witness_total} at eps={config.report_eps}"
    else:
        failed = [str(c.a) for c in certificates if not c.covered]
        details = f"FAIL: witness does not cover components starting at {', '.join(failed)}"

    return OuterMeasureResult(
        real_set=s,
        value=value,
        witness_eps=config.report_eps,
        witness_total=witness_total,
        certificates=certificates,
        details=details,
    )
