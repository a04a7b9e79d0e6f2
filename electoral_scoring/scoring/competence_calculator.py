# electoral_scoring/scoring/competence_calculator.py
"""
Competence Calculator - Ranking Electoral
------------------------------------------
Sole place where the four competence components are summed and capped.

Formula:
    competence = min(education(30) + experience_total(25)
                     + experience_relevant(25) + leadership(20), 100)
"""
from dataclasses import dataclass
from decimal import Decimal

import structlog

from electoral_scoring.models.candidate import CandidateData
from electoral_scoring.models.enumerations import CargoType
from electoral_scoring.scoring.education_calculator import EducationCalculator, EducationResult
from electoral_scoring.scoring.experience_calculator import ExperienceCalculator
from electoral_scoring.scoring.interval_merger import ExperienceIntervalMerger
from electoral_scoring.scoring.leadership_calculator import LeadershipCalculator, LeadershipResult
from electoral_scoring.scoring.utils import HUNDRED, quantize

logger = structlog.get_logger(__name__)


@dataclass
class CompetenceResult:
    """Output of CompetenceCalculator.calculate()."""
    education: EducationResult
    experience_total: int
    experience_relevant: Decimal
    leadership: LeadershipResult
    total: Decimal
    unique_years: int = 0
    has_overlap: bool = False


class CompetenceCalculator:
    """Aggregate education, experience and leadership into Competence."""

    def __init__(self):
        merger = ExperienceIntervalMerger()
        self.education = EducationCalculator()
        self.experience = ExperienceCalculator(merger)
        self.leadership = LeadershipCalculator(merger)

    def calculate(
        self,
        candidate: CandidateData,
        cargo: CargoType,
        reference_year: int,
    ) -> CompetenceResult:
        education = self.education.calculate(candidate.education)
        experience = self.experience.calculate(candidate.experience, cargo, reference_year)
        leadership = self.leadership.calculate(candidate.experience, reference_year)

        raw = (
            Decimal(education.total)
            + Decimal(experience.experience_total)
            + experience.experience_relevant
            + Decimal(leadership.total)
        )
        total = quantize(min(raw, HUNDRED))

        logger.debug(
            "competence_calculated",
            education=education.total,
            experience_total=experience.experience_total,
            experience_relevant=float(experience.experience_relevant),
            leadership=leadership.total,
            total=float(total),
        )

        return CompetenceResult(
            education=education,
            experience_total=experience.experience_total,
            experience_relevant=experience.experience_relevant,
            leadership=leadership,
            total=total,
            unique_years=experience.unique_years,
            has_overlap=experience.has_overlap,
        )
