# electoral_scoring/scoring/performance_calculator.py
"""
Performance Calculator - Ranking Electoral

Incumbent performance, None for anyone not currently in office.

    score = 50 + (budget_execution_pct − 50) × 0.5 − 10 × audit_reports
    a direct performance_score replaces the computed value
    clamped to [0, 100]
"""
from decimal import Decimal
from typing import Optional

import structlog

from electoral_scoring.models.candidate import CandidateData, EnhancedIntegrityData
from electoral_scoring.scoring.utils import clamp, quantize, to_count, to_decimal

logger = structlog.get_logger(__name__)

BASE_SCORE = Decimal("50")
BUDGET_MIDPOINT = Decimal("50")
BUDGET_FACTOR = Decimal("0.5")
AUDIT_REPORT_PENALTY = Decimal("10")


class PerformanceCalculator:

    def calculate(self, candidate: CandidateData) -> Optional[Decimal]:
        if not isinstance(candidate, EnhancedIntegrityData) or not candidate.is_incumbent:
            return None

        if candidate.performance_score is not None:
            score = to_decimal(candidate.performance_score)
        else:
            score = BASE_SCORE
            if candidate.budget_execution_pct is not None:
                budget = clamp(to_decimal(candidate.budget_execution_pct))
                score += (budget - BUDGET_MIDPOINT) * BUDGET_FACTOR
            score -= AUDIT_REPORT_PENALTY * to_count(candidate.audit_report_count)

        result = quantize(clamp(score))

        logger.debug(
            "performance_calculated",
            overridden=candidate.performance_score is not None,
            budget_execution_pct=candidate.budget_execution_pct,
            audit_report_count=candidate.audit_report_count,
            performance=float(result),
        )
        return result
