# electoral_scoring/scoring/leadership_calculator.py
"""
Leadership Calculator - Ranking Electoral

    seniority = max(SENIORITY_POINTS) over leadership records, capped 14
    stability = tiered on merged leadership years (7+ → 6, 4+ → 4, 2+ → 2)
    total     = min(seniority + stability, 20)

Only records flagged ``is_leadership`` that carry a seniority level count.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import structlog

from electoral_scoring.models.candidate import ExperienceRecord
from electoral_scoring.models.enumerations import SeniorityLevel
from electoral_scoring.scoring.interval_merger import ExperienceIntervalMerger
from electoral_scoring.scoring.utils import tier_points

logger = structlog.get_logger(__name__)

SENIORITY_POINTS: Dict[SeniorityLevel, int] = {
    SeniorityLevel.INDIVIDUAL_CONTRIBUTOR: 2,
    SeniorityLevel.COORDINADOR: 6,
    SeniorityLevel.JEFATURA: 8,
    SeniorityLevel.GERENCIA: 10,
    SeniorityLevel.DIRECCION: 14,
}

STABILITY_TIERS = [(7, 6), (4, 4), (2, 2)]

MAX_SENIORITY = 14
MAX_TOTAL = 20


@dataclass
class LeadershipResult:
    """Output of LeadershipCalculator.calculate()."""
    seniority: int
    stability: int
    total: int
    leadership_years: int = 0


class LeadershipCalculator:

    def __init__(self, merger: Optional[ExperienceIntervalMerger] = None):
        self.merger = merger or ExperienceIntervalMerger()

    def calculate(
        self,
        experience: Sequence[ExperienceRecord],
        reference_year: int,
    ) -> LeadershipResult:
        leadership = [e for e in experience if e.is_leadership and e.seniority_level]
        if not leadership:
            return LeadershipResult(seniority=0, stability=0, total=0)

        seniority = min(
            max(SENIORITY_POINTS[e.seniority_level] for e in leadership),
            MAX_SENIORITY,
        )
        merged = self.merger.merge(
            ((e.start_year, e.end_year) for e in leadership),
            reference_year,
        )
        stability = tier_points(merged.unique_years, STABILITY_TIERS)
        total = min(seniority + stability, MAX_TOTAL)

        logger.debug(
            "leadership_calculated",
            record_count=len(leadership),
            leadership_years=merged.unique_years,
            seniority=seniority,
            stability=stability,
            total=total,
        )

        return LeadershipResult(
            seniority=seniority,
            stability=stability,
            total=total,
            leadership_years=merged.unique_years,
        )
