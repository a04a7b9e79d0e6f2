"""
scoring/confidence_calculator.py - Ranking Electoral

How much the system trusts its own data about a candidate. This says
nothing about the candidate's behavior.

Formula:
    verification = round(verification_level / 100 × 50)
    coverage     = round(coverage_level / 100 × 50)
    total        = verification + coverage

Data-quality tier:
    total ≥ 70 → high | total ≥ 40 → medium | otherwise low
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog

from electoral_scoring.models.candidate import CandidateData
from electoral_scoring.scoring.utils import percent, scale_percent

logger = structlog.get_logger(__name__)


@dataclass
class ConfidenceResult:
    """Output of ConfidenceCalculator.calculate()."""
    verification: Decimal  # 0-50
    coverage: Decimal      # 0-50
    total: Decimal         # 0-100
    data_quality: str      # "high", "medium" or "low"


class ConfidenceCalculator:
    """Verification and coverage composite."""

    HIGH_THRESHOLD = 70
    MEDIUM_THRESHOLD = 40
    COMPONENT_MAX = 50

    def data_quality(self, total: Decimal) -> str:
        if total >= self.HIGH_THRESHOLD:
            return "high"
        if total >= self.MEDIUM_THRESHOLD:
            return "medium"
        return "low"

    def calculate(self, candidate: CandidateData) -> ConfidenceResult:
        verification = scale_percent(percent(candidate.verification_level), self.COMPONENT_MAX)
        coverage = scale_percent(percent(candidate.coverage_level), self.COMPONENT_MAX)
        total = verification + coverage

        logger.debug(
            "confidence_calculated",
            verification=int(verification),
            coverage=int(coverage),
            total=int(total),
        )

        return ConfidenceResult(
            verification=verification,
            coverage=coverage,
            total=total,
            data_quality=self.data_quality(total),
        )
