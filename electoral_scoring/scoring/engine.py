"""
scoring/engine.py - Ranking Electoral

Full pipeline: candidate record bundle → ScoreResult.

Class: ScoringEngine
Method: score(candidate, cargo, reference_year, weights=None) → ScoreResult

Pipeline steps:
  1.  Validate the candidate bundle and cargo at the boundary
  2.  CompetenceCalculator → education, experience, leadership
  3.  IntegrityCalculator, or EnhancedIntegrityCalculator for enhanced data
  4.  TransparencyCalculator → completeness, consistency, asset quality
  5.  ConfidenceCalculator → verification and coverage
  6.  PerformanceCalculator → incumbents only
  7.  WeightedCombiner → preset composites (+ presidential, + custom)

Scoring is a pure function of (candidate, cargo, reference_year, weights):
no I/O, no clock, no shared mutable state, so batches run on a thread pool.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, fields, is_dataclass
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import structlog
from pydantic import ValidationError

from electoral_scoring.config import Settings, get_settings
from electoral_scoring.core.exceptions import InvalidCandidateDataError, InvalidEnumError
from electoral_scoring.models.candidate import CandidateData, EnhancedIntegrityData
from electoral_scoring.models.enumerations import (
    CargoType,
    CivilSentenceType,
    DiscrepancySeverity,
    EducationLevel,
    PresetType,
    RoleType,
    SeniorityLevel,
    TaxCondition,
    TaxStatus,
)
from electoral_scoring.scoring.competence_calculator import CompetenceCalculator, CompetenceResult
from electoral_scoring.scoring.confidence_calculator import ConfidenceCalculator, ConfidenceResult
from electoral_scoring.scoring.enhanced_integrity_calculator import (
    EnhancedIntegrityCalculator,
    IntegrityBreakdown,
)
from electoral_scoring.scoring.integrity_calculator import IntegrityCalculator, IntegrityResult
from electoral_scoring.scoring.performance_calculator import PerformanceCalculator
from electoral_scoring.scoring.transparency_calculator import TransparencyCalculator, TransparencyResult
from electoral_scoring.scoring.utils import clamp, quantize, to_decimal
from electoral_scoring.scoring.weighted_combiner import (
    PillarScores,
    RankedCandidate,
    WeightedCombiner,
    Weights,
)

logger = structlog.get_logger(__name__)

# Field name → closed enum, used to report out-of-range categorical values
_ENUM_FIELDS = {
    "level": EducationLevel,
    "role_type": RoleType,
    "seniority_level": SeniorityLevel,
    "type": CivilSentenceType,
    "tax_condition": TaxCondition,
    "tax_status": TaxStatus,
    "discrepancy_severity": DiscrepancySeverity,
}

_ENHANCED_FIELDS = frozenset(EnhancedIntegrityData.model_fields) - frozenset(CandidateData.model_fields)

CandidateInput = Union[CandidateData, Mapping[str, Any]]


def _to_jsonable(value: Any) -> Any:
    """Recursively convert result objects to JSON-ready primitives."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(_to_jsonable(k)): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


@dataclass
class ScoreResult:
    """Everything the persistence and display layers read for one candidate."""
    cargo: CargoType
    reference_year: int
    competence: CompetenceResult
    integrity: IntegrityResult
    transparency: TransparencyResult
    confidence: ConfidenceResult
    performance: Optional[Decimal]
    integrity_breakdown: Optional[IntegrityBreakdown]
    scores: Dict[str, Optional[Decimal]] = field(default_factory=dict)
    plan_viability: Optional[Decimal] = None
    custom_weights: Optional[Weights] = None

    def pillars(self, candidate_id: Any = None) -> PillarScores:
        return PillarScores(
            competence=self.competence.total,
            integrity=self.integrity.total,
            transparency=self.transparency.total,
            plan_viability=self.plan_viability,
            candidate_id=candidate_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Stable JSON-ready shape (Decimals as floats, enums as values)."""
        return _to_jsonable({
            "cargo": self.cargo,
            "reference_year": self.reference_year,
            "competence": self.competence,
            "integrity": self.integrity,
            "transparency": self.transparency,
            "confidence": self.confidence,
            "performance": self.performance,
            "integrity_breakdown": self.integrity_breakdown,
            "scores": self.scores,
            "custom_weights": self.custom_weights.as_dict() if self.custom_weights else None,
        })


class ScoringEngine:
    """Score candidates across all pillars and combine them into composites."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self.competence = CompetenceCalculator()
        self.integrity = IntegrityCalculator()
        self.enhanced_integrity = EnhancedIntegrityCalculator(self.integrity)
        self.transparency = TransparencyCalculator(self.settings.TRANSPARENCY_SOURCE)
        self.confidence = ConfidenceCalculator()
        self.performance = PerformanceCalculator()
        self.combiner = WeightedCombiner(self.settings.weight_limits)

    # ------------------------------------------------------------------
    # Boundary validation
    # ------------------------------------------------------------------

    def parse_candidate(self, candidate: CandidateInput) -> CandidateData:
        """
        Accept a model instance or a plain mapping.

        Mappings carrying any enhanced-integrity key are parsed as
        EnhancedIntegrityData. Out-of-enum categorical values raise
        InvalidEnumError; any other structural problem raises
        InvalidCandidateDataError.
        """
        if isinstance(candidate, CandidateData):
            return candidate
        if not isinstance(candidate, Mapping):
            raise InvalidCandidateDataError(
                f"Candidate must be a mapping or CandidateData, got {type(candidate).__name__}"
            )

        model = EnhancedIntegrityData if _ENHANCED_FIELDS & set(candidate) else CandidateData
        try:
            return model.model_validate(candidate)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            for err in errors:
                if err["type"] == "enum" and err["loc"]:
                    name = str(err["loc"][-1])
                    enum_cls = _ENUM_FIELDS.get(name)
                    allowed = [m.value for m in enum_cls] if enum_cls else None
                    loc = ".".join(str(part) for part in err["loc"])
                    raise InvalidEnumError(loc, err.get("input"), allowed) from e
            raise InvalidCandidateDataError("Invalid candidate data", errors=errors) from e

    def parse_cargo(self, cargo: Union[CargoType, str]) -> CargoType:
        try:
            return CargoType(cargo)
        except ValueError as e:
            raise InvalidEnumError("cargo", cargo, [c.value for c in CargoType]) from e

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        candidate: CandidateInput,
        cargo: Union[CargoType, str],
        reference_year: int,
        weights: Optional[Union[Weights, Mapping[str, Any]]] = None,
    ) -> ScoreResult:
        """
        Score one candidate.

        Args:
            candidate: CandidateData / EnhancedIntegrityData or an equivalent mapping.
            cargo: Office the candidate runs for.
            reference_year: Closes ongoing tenures. Never read from the clock here.
            weights: Optional custom weights (w_c, w_i, w_t[, w_p]); normalized
                     before use and reported under scores["custom"].

        Returns:
            ScoreResult with every pillar breakdown and the composites.
        """
        data = self.parse_candidate(candidate)
        cargo = self.parse_cargo(cargo)
        if isinstance(reference_year, bool) or not isinstance(reference_year, int):
            raise InvalidCandidateDataError(
                f"reference_year must be an integer, got {reference_year!r}"
            )

        competence = self.competence.calculate(data, cargo, reference_year)

        integrity_breakdown = None
        if isinstance(data, EnhancedIntegrityData):
            integrity = self.enhanced_integrity.calculate(data)
            integrity_breakdown = integrity.breakdown
        else:
            integrity = self.integrity.calculate(data)

        transparency = self.transparency.calculate(data)
        confidence = self.confidence.calculate(data)
        performance = self.performance.calculate(data)

        plan = None
        if data.plan_viability is not None:
            plan = quantize(clamp(to_decimal(data.plan_viability)))

        pillars = (competence.total, integrity.total, transparency.total)
        scores: Dict[str, Optional[Decimal]] = {
            "competence": competence.total,
            "integrity": integrity.total,
            "transparency": transparency.total,
            "confidence": confidence.total,
            "performance": performance,
        }
        for preset in (PresetType.BALANCED, PresetType.MERIT, PresetType.INTEGRITY_FIRST):
            scores[preset.value] = self.combiner.combine(*pillars, self.combiner.preset(preset))

        if cargo == CargoType.PRESIDENTE and plan is not None:
            scores["plan_viability"] = plan
            scores["presidential"] = self.combiner.combine(
                *pillars,
                self.combiner.preset(PresetType.BALANCED, presidential=True),
                plan_viability=plan,
            )

        custom = None
        if weights is not None:
            custom = self.combiner.normalize_weights(weights)
            scores[PresetType.CUSTOM.value] = self.combiner.combine(
                *pillars, custom, plan_viability=plan if custom.w_p is not None else None
            )

        logger.info(
            "candidate_scored",
            cargo=cargo.value,
            reference_year=reference_year,
            enhanced=integrity_breakdown is not None,
            competence=float(competence.total),
            integrity=float(integrity.total),
            transparency=float(transparency.total),
            confidence=float(confidence.total),
            balanced=float(scores[PresetType.BALANCED.value]),
        )

        return ScoreResult(
            cargo=cargo,
            reference_year=reference_year,
            competence=competence,
            integrity=integrity,
            transparency=transparency,
            confidence=confidence,
            performance=performance,
            integrity_breakdown=integrity_breakdown,
            scores=scores,
            plan_viability=plan,
            custom_weights=custom,
        )

    def score_many(
        self,
        items: Iterable[Tuple[CandidateInput, Union[CargoType, str]]],
        reference_year: int,
        weights: Optional[Union[Weights, Mapping[str, Any]]] = None,
        max_workers: Optional[int] = None,
    ) -> List[ScoreResult]:
        """Score (candidate, cargo) pairs on a thread pool. Output order matches input."""
        items = list(items)
        workers = max_workers or self.settings.BATCH_MAX_WORKERS
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(
                lambda item: self.score(item[0], item[1], reference_year, weights),
                items,
            ))
        logger.info("batch_scored", count=len(results), workers=workers)
        return results

    def rank(
        self,
        scored: Sequence[Tuple[Any, ScoreResult]],
        preset: PresetType = PresetType.BALANCED,
        weights: Optional[Union[Weights, Mapping[str, Any]]] = None,
    ) -> List[RankedCandidate]:
        """Rank (candidate_id, ScoreResult) pairs by preset or custom composite."""
        return self.combiner.rank(
            [result.pillars(candidate_id) for candidate_id, result in scored],
            preset=preset,
            weights=weights,
        )


@lru_cache
def get_engine() -> ScoringEngine:
    return ScoringEngine()


def score(
    candidate: CandidateInput,
    cargo: Union[CargoType, str],
    reference_year: int,
    weights: Optional[Union[Weights, Mapping[str, Any]]] = None,
) -> ScoreResult:
    """Score one candidate with the default engine."""
    return get_engine().score(candidate, cargo, reference_year, weights)
