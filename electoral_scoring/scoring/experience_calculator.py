# electoral_scoring/scoring/experience_calculator.py
"""
Experience Calculator - Ranking Electoral
------------------------------------------
Two experience components, both driven by the same tenure records:

    experience_total    tiered on merged (unique) years, max 25
    experience_relevant Σ min(years_i, 10) × relevance[cargo][role_type], max 25

Total tiers (unique years):
    15+ → 25 | 11-14 → 20 | 8-10 → 16 | 5-7 → 12 | 2-4 → 6 | 0-1 → 0

Relevance is per record, NOT merged: two concurrent relevant roles both
count, but each is capped at 10 years.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Sequence

import structlog

from electoral_scoring.models.candidate import ExperienceRecord
from electoral_scoring.models.enumerations import CargoType, RoleType
from electoral_scoring.scoring.interval_merger import ExperienceIntervalMerger
from electoral_scoring.scoring.utils import quantize, tier_points

logger = structlog.get_logger(__name__)

EXPERIENCE_TIERS = [(15, 25), (11, 20), (8, 16), (5, 12), (2, 6)]

MAX_YEARS_PER_RECORD = 10
MAX_RELEVANT = Decimal("25")

_EXECUTIVE_ROW: Dict[RoleType, Decimal] = {
    RoleType.ELECTIVO_ALTO: Decimal("3.0"),
    RoleType.EJECUTIVO_PUBLICO_ALTO: Decimal("3.0"),
    RoleType.EJECUTIVO_PRIVADO_ALTO: Decimal("2.8"),
    RoleType.EJECUTIVO_PUBLICO_MEDIO: Decimal("2.0"),
    RoleType.EJECUTIVO_PRIVADO_MEDIO: Decimal("1.8"),
    RoleType.INTERNACIONAL: Decimal("1.8"),
    RoleType.ELECTIVO_MEDIO: Decimal("1.5"),
    RoleType.TECNICO_PROFESIONAL: Decimal("1.2"),
    RoleType.ACADEMIA: Decimal("1.0"),
    RoleType.PARTIDARIO: Decimal("0.6"),
}

_LEGISLATIVE_ROW: Dict[RoleType, Decimal] = {
    RoleType.ELECTIVO_ALTO: Decimal("3.0"),
    RoleType.EJECUTIVO_PUBLICO_ALTO: Decimal("2.6"),
    RoleType.ELECTIVO_MEDIO: Decimal("2.2"),
    RoleType.EJECUTIVO_PUBLICO_MEDIO: Decimal("2.0"),
    RoleType.EJECUTIVO_PRIVADO_ALTO: Decimal("1.8"),
    RoleType.TECNICO_PROFESIONAL: Decimal("1.6"),
    RoleType.EJECUTIVO_PRIVADO_MEDIO: Decimal("1.4"),
    RoleType.ACADEMIA: Decimal("1.4"),
    RoleType.INTERNACIONAL: Decimal("1.2"),
    RoleType.PARTIDARIO: Decimal("0.8"),
}

# Points per year of tenure, by target cargo and role type
RELEVANCE_BY_CARGO: Dict[CargoType, Dict[RoleType, Decimal]] = {
    CargoType.PRESIDENTE: _EXECUTIVE_ROW,
    CargoType.VICEPRESIDENTE: _EXECUTIVE_ROW,
    CargoType.SENADOR: _LEGISLATIVE_ROW,
    CargoType.DIPUTADO: _LEGISLATIVE_ROW,
    CargoType.PARLAMENTO_ANDINO: {
        RoleType.INTERNACIONAL: Decimal("3.0"),
        RoleType.ELECTIVO_ALTO: Decimal("2.2"),
        RoleType.EJECUTIVO_PUBLICO_ALTO: Decimal("2.2"),
        RoleType.ACADEMIA: Decimal("1.8"),
        RoleType.TECNICO_PROFESIONAL: Decimal("1.6"),
        RoleType.EJECUTIVO_PRIVADO_ALTO: Decimal("1.6"),
        RoleType.EJECUTIVO_PUBLICO_MEDIO: Decimal("1.6"),
        RoleType.ELECTIVO_MEDIO: Decimal("1.6"),
        RoleType.EJECUTIVO_PRIVADO_MEDIO: Decimal("1.2"),
        RoleType.PARTIDARIO: Decimal("0.8"),
    },
}


@dataclass
class ExperienceResult:
    """Output of ExperienceCalculator.calculate()."""
    experience_total: int         # 0-25, tiered on unique years
    experience_relevant: Decimal  # 0-25, cargo-weighted
    unique_years: int
    raw_years: int
    has_overlap: bool


class ExperienceCalculator:
    """Score total and cargo-relevant experience."""

    def __init__(self, merger: Optional[ExperienceIntervalMerger] = None):
        self.merger = merger or ExperienceIntervalMerger()

    def calculate(
        self,
        experience: Sequence[ExperienceRecord],
        cargo: CargoType,
        reference_year: int,
    ) -> ExperienceResult:
        """
        Args:
            experience: Tenure records.
            cargo: Office the candidate runs for; selects the relevance row.
            reference_year: Closes ongoing tenures.
        """
        merged = self.merger.merge(
            ((e.start_year, e.end_year) for e in experience),
            reference_year,
        )
        experience_total = tier_points(merged.unique_years, EXPERIENCE_TIERS)

        relevance = RELEVANCE_BY_CARGO[cargo]
        relevant_sum = Decimal("0")
        for exp in experience:
            end = exp.end_year if exp.end_year is not None else reference_year
            years = min(max(end - exp.start_year, 0), MAX_YEARS_PER_RECORD)
            relevant_sum += Decimal(years) * relevance[exp.role_type]
        experience_relevant = quantize(min(relevant_sum, MAX_RELEVANT))

        logger.debug(
            "experience_calculated",
            cargo=cargo.value,
            unique_years=merged.unique_years,
            raw_years=merged.raw_years,
            experience_total=experience_total,
            experience_relevant=float(experience_relevant),
        )

        return ExperienceResult(
            experience_total=experience_total,
            experience_relevant=experience_relevant,
            unique_years=merged.unique_years,
            raw_years=merged.raw_years,
            has_overlap=merged.has_overlap,
        )
