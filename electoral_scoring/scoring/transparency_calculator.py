# electoral_scoring/scoring/transparency_calculator.py
"""
Transparency Calculator - Ranking Electoral
--------------------------------------------
Scores how completely and coherently a candidate discloses.

Formula:
    completeness   = round(completeness_pct / 100 × 35)
    consistency    = round(consistency_pct  / 100 × 35)
    assets_quality = round(quality_pct      / 100 × 30)
    onpe_penalty   = min(15 × sanctions, 30)
    total          = max(completeness + consistency + assets_quality − onpe_penalty, 0)

The three percentages come from one of two sources:

    declared  derived from the profile sections and the sworn income/asset
              declaration (points below, scaled to a percentage)
    legacy    the precomputed ``declaration_completeness``,
              ``declaration_consistency`` and ``assets_quality`` fields

Declared points:
    completeness /35   profile: education 1→2, 2→3, 3+→5; experience 1→2,
                       2→3, 3→4, 4+→5; political 1→1, 2+→2; birth date 2;
                       plan URL 3. With a declaration: DNI 1, DJHV 1, penal
                       section 1, civil section 1, income > 0 → 5, any
                       itemized source → 3, vehicles 3, real estate 3
    consistency  /35   no declaration → 0; nothing declared → flat 5;
                       otherwise income match (≤5% → 25, ≤15% → 18,
                       ≤30% → 10, ≤50% → 5) + 5 per coherent asset class
    quality      /30   itemized sources 0/1/2/3/4+ → 0/4/8/12/15; valued
                       vehicles 5; valued real estate 5; public and
                       private income both present 5
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

import structlog

from electoral_scoring.models.candidate import AssetsDeclaration, CandidateData, ProfileFields
from electoral_scoring.scoring.utils import (
    HUNDRED,
    ZERO,
    percent,
    quantize,
    scale_percent,
    tier_points,
    to_count,
    to_decimal,
)

logger = structlog.get_logger(__name__)

COMPLETENESS_MAX = 35
CONSISTENCY_MAX = 35
QUALITY_MAX = 30

ONPE_SANCTION_PENALTY = Decimal("15")
MAX_ONPE_PENALTY = Decimal("30")

SOURCE_AUTO = "auto"
SOURCE_DECLARED = "declared"
SOURCE_LEGACY = "legacy"

EDUCATION_COUNT_TIERS = [(3, 5), (2, 3), (1, 2)]
EXPERIENCE_COUNT_TIERS = [(4, 5), (3, 4), (2, 3), (1, 2)]
POLITICAL_COUNT_TIERS = [(2, 2), (1, 1)]
INCOME_SOURCE_TIERS = [(4, 15), (3, 12), (2, 8), (1, 4)]

# (max mismatch ratio, points), checked in order
INCOME_MATCH_TIERS = [
    (Decimal("0.05"), 25),
    (Decimal("0.15"), 18),
    (Decimal("0.30"), 10),
    (Decimal("0.50"), 5),
]
UNDECLARED_INCOME_CONSISTENCY = 5
COHERENT_ASSET_POINTS = 5


@dataclass
class TransparencyResult:
    """Output of TransparencyCalculator.calculate()."""
    completeness: Decimal     # 0-35
    consistency: Decimal      # 0-35
    assets_quality: Decimal   # 0-30
    onpe_penalty: Decimal     # 0-30
    total: Decimal            # 0-100
    source: str               # "declared" or "legacy"
    completeness_pct: Decimal = ZERO
    consistency_pct: Decimal = ZERO
    quality_pct: Decimal = ZERO


def _positive(value) -> bool:
    return to_decimal(value) > 0


class TransparencyCalculator:
    """Disclosure completeness, consistency and asset quality."""

    def __init__(self, source: str = SOURCE_AUTO):
        if source not in (SOURCE_AUTO, SOURCE_DECLARED, SOURCE_LEGACY):
            raise ValueError(f"Unknown transparency source: {source!r}")
        self.source = source

    # ------------------------------------------------------------------
    # Declared points
    # ------------------------------------------------------------------

    def completeness_points(
        self,
        profile: Optional[ProfileFields],
        declaration: Optional[AssetsDeclaration],
    ) -> int:
        points = 0
        if profile is not None:
            points += tier_points(to_count(profile.education_count), EDUCATION_COUNT_TIERS)
            points += tier_points(to_count(profile.experience_count), EXPERIENCE_COUNT_TIERS)
            points += tier_points(to_count(profile.political_count), POLITICAL_COUNT_TIERS)
            points += 2 if profile.has_birth_date else 0
            points += 3 if profile.has_plan_url else 0

        if declaration is not None:
            # Sworn-declaration sections only count when a declaration exists
            if profile is not None:
                points += 1 if profile.has_dni else 0
                points += 1 if profile.has_djhv_url else 0
                points += 1 if profile.has_penal_array else 0
                points += 1 if profile.has_civil_array else 0
            points += 5 if _positive(declaration.total_income) else 0
            points += 3 if any(_positive(v) for v in declaration.income_sources) else 0
            points += 3 if to_count(declaration.vehicle_count) or _positive(declaration.vehicle_total) else 0
            points += 3 if (
                to_count(declaration.real_estate_count) or _positive(declaration.real_estate_total)
            ) else 0

        return min(points, COMPLETENESS_MAX)

    def consistency_points(self, declaration: Optional[AssetsDeclaration]) -> int:
        if declaration is None:
            return 0

        total = max(to_decimal(declaration.total_income), ZERO)
        sources = sum((max(to_decimal(v), ZERO) for v in declaration.income_sources), ZERO)
        if total == 0 and sources == 0:
            return UNDECLARED_INCOME_CONSISTENCY

        mismatch = abs(sources - total) / max(total, sources)
        points = 0
        for max_ratio, tier in INCOME_MATCH_TIERS:
            if mismatch <= max_ratio:
                points = tier
                break

        for count, value in (
            (declaration.vehicle_count, declaration.vehicle_total),
            (declaration.real_estate_count, declaration.real_estate_total),
        ):
            if (to_count(count) > 0) == _positive(value):
                points += COHERENT_ASSET_POINTS

        return min(points, CONSISTENCY_MAX)

    def quality_points(self, declaration: Optional[AssetsDeclaration]) -> int:
        if declaration is None:
            return 0

        itemized = sum(1 for v in declaration.income_sources if _positive(v))
        points = tier_points(itemized, INCOME_SOURCE_TIERS)
        points += 5 if _positive(declaration.vehicle_total) else 0
        points += 5 if _positive(declaration.real_estate_total) else 0
        has_public = any(_positive(v) for v in declaration.public_sources)
        has_private = any(_positive(v) for v in declaration.private_sources)
        points += 5 if has_public and has_private else 0

        return min(points, QUALITY_MAX)

    # ------------------------------------------------------------------
    # Percentages
    # ------------------------------------------------------------------

    def resolve_source(self, candidate: CandidateData) -> str:
        if self.source != SOURCE_AUTO:
            return self.source
        return SOURCE_DECLARED if candidate.has_declared_transparency else SOURCE_LEGACY

    def percentages(self, candidate: CandidateData) -> Tuple[str, Decimal, Decimal, Decimal]:
        source = self.resolve_source(candidate)
        if source == SOURCE_LEGACY:
            return (
                source,
                percent(candidate.declaration_completeness),
                percent(candidate.declaration_consistency),
                percent(candidate.assets_quality),
            )

        declaration = candidate.assets_declaration
        completeness = self.completeness_points(candidate.profile_fields, declaration)
        consistency = self.consistency_points(declaration)
        quality = self.quality_points(declaration)
        return (
            source,
            Decimal(completeness) * HUNDRED / COMPLETENESS_MAX,
            Decimal(consistency) * HUNDRED / CONSISTENCY_MAX,
            Decimal(quality) * HUNDRED / QUALITY_MAX,
        )

    def calculate(self, candidate: CandidateData) -> TransparencyResult:
        source, completeness_pct, consistency_pct, quality_pct = self.percentages(candidate)

        completeness = scale_percent(completeness_pct, COMPLETENESS_MAX)
        consistency = scale_percent(consistency_pct, CONSISTENCY_MAX)
        assets_quality = scale_percent(quality_pct, QUALITY_MAX)

        sanctions = to_count(candidate.onpe_sanction_count)
        onpe_penalty = min(ONPE_SANCTION_PENALTY * sanctions, MAX_ONPE_PENALTY)

        total = max(completeness + consistency + assets_quality - onpe_penalty, ZERO)

        logger.debug(
            "transparency_calculated",
            source=source,
            completeness=int(completeness),
            consistency=int(consistency),
            assets_quality=int(assets_quality),
            onpe_penalty=int(onpe_penalty),
            total=int(total),
        )

        return TransparencyResult(
            completeness=completeness,
            consistency=consistency,
            assets_quality=assets_quality,
            onpe_penalty=onpe_penalty,
            total=total,
            source=source,
            completeness_pct=quantize(completeness_pct),
            consistency_pct=quantize(consistency_pct),
            quality_pct=quantize(quality_pct),
        )
