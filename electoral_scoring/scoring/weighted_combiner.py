# electoral_scoring/scoring/weighted_combiner.py
"""
Weighted Combiner - Ranking Electoral
--------------------------------------
Combines the pillar scores into a single composite.

Formula:
    composite = wC × competence + wI × integrity + wT × transparency
                (+ wP × plan_viability for the presidential variant)
    clamped to [0, 100]

Presets (wC / wI / wT):
    balanced         0.45 / 0.45 / 0.10
    merit            0.60 / 0.30 / 0.10
    integrity_first  0.30 / 0.60 / 0.10

Presidential presets (wC / wI / wT / wP):
    balanced         0.40 / 0.40 / 0.10 / 0.10
    merit            0.50 / 0.25 / 0.10 / 0.15
    integrity_first  0.25 / 0.50 / 0.10 / 0.15

Custom weights are clamped to their guardrails, then scaled to sum to 1.0
(3 decimals) with the rounding residual pushed onto the largest weight.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import structlog

from electoral_scoring.core.exceptions import WeightValidationError
from electoral_scoring.models.enumerations import PresetType
from electoral_scoring.scoring.utils import ZERO, clamp, quantize, to_decimal

logger = structlog.get_logger(__name__)

SUM_TOLERANCE = Decimal("0.001")
WEIGHT_PLACES = Decimal("0.001")

# Residual goes to the first of the largest weights in this order
PILLARS = ("w_c", "w_i", "w_t", "w_p")

DEFAULT_WEIGHT_LIMITS: Dict[str, Tuple[Decimal, Decimal]] = {
    "w_c": (Decimal("0.20"), Decimal("0.55")),
    "w_i": (Decimal("0.20"), Decimal("0.55")),
    "w_t": (Decimal("0.05"), Decimal("0.20")),
    "w_p": (Decimal("0.05"), Decimal("0.20")),
}


@dataclass(frozen=True)
class Weights:
    """Composite weights. ``w_p`` is set only for the 4-pillar presidential variant."""
    w_c: Decimal
    w_i: Decimal
    w_t: Decimal
    w_p: Optional[Decimal] = None

    @property
    def total(self) -> Decimal:
        return self.w_c + self.w_i + self.w_t + (self.w_p or ZERO)

    def as_dict(self) -> Dict[str, Decimal]:
        values = {"w_c": self.w_c, "w_i": self.w_i, "w_t": self.w_t}
        if self.w_p is not None:
            values["w_p"] = self.w_p
        return values


PRESETS: Dict[PresetType, Weights] = {
    PresetType.BALANCED: Weights(Decimal("0.45"), Decimal("0.45"), Decimal("0.10")),
    PresetType.MERIT: Weights(Decimal("0.60"), Decimal("0.30"), Decimal("0.10")),
    PresetType.INTEGRITY_FIRST: Weights(Decimal("0.30"), Decimal("0.60"), Decimal("0.10")),
}

PRESIDENTIAL_PRESETS: Dict[PresetType, Weights] = {
    PresetType.BALANCED: Weights(Decimal("0.40"), Decimal("0.40"), Decimal("0.10"), Decimal("0.10")),
    PresetType.MERIT: Weights(Decimal("0.50"), Decimal("0.25"), Decimal("0.10"), Decimal("0.15")),
    PresetType.INTEGRITY_FIRST: Weights(Decimal("0.25"), Decimal("0.50"), Decimal("0.10"), Decimal("0.15")),
}


@dataclass
class PillarScores:
    """The inputs of one composite."""
    competence: Decimal
    integrity: Decimal
    transparency: Decimal
    plan_viability: Optional[Decimal] = None
    candidate_id: Any = None


@dataclass
class RankedCandidate:
    position: int
    candidate_id: Any
    composite: Decimal


class WeightedCombiner:
    """Weighted composite, presets, weight normalization and ranking."""

    def __init__(self, limits: Optional[Mapping[str, Tuple[float, float]]] = None):
        # Pillars missing from ``limits`` keep their default guardrail
        self.limits = dict(DEFAULT_WEIGHT_LIMITS)
        if limits is not None:
            self.limits.update({
                pillar: (to_decimal(low), to_decimal(high))
                for pillar, (low, high) in limits.items()
            })

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def parse_weights(self, weights: Union[Weights, Mapping[str, Any]]) -> Weights:
        """Build Weights from a mapping with w_c, w_i, w_t and optional w_p."""
        if isinstance(weights, Weights):
            return weights

        missing = [p for p in ("w_c", "w_i", "w_t") if weights.get(p) is None]
        if missing:
            raise WeightValidationError(f"Missing weight(s): {', '.join(missing)}")

        parsed = {}
        for pillar in PILLARS:
            raw = weights.get(pillar)
            if raw is None:
                continue
            try:
                value = Decimal(str(raw))
            except (ArithmeticError, ValueError) as e:
                raise WeightValidationError(f"Weight {pillar} is not a number: {raw!r}") from e
            if not value.is_finite():
                raise WeightValidationError(f"Weight {pillar} must be finite, got {raw!r}")
            parsed[pillar] = value
        return Weights(**parsed)

    def clamp_weight(self, pillar: str, value: Decimal) -> Decimal:
        low, high = self.limits[pillar]
        clamped = clamp(value, low, high)
        if clamped != value:
            logger.warning(
                "weight_clamped",
                pillar=pillar,
                requested=float(value),
                clamped=float(clamped),
            )
        return clamped

    def normalize_weights(self, weights: Union[Weights, Mapping[str, Any]]) -> Weights:
        """
        Clamp every weight to its guardrail and rescale so the set sums to 1.0.

        Returns the clamped weights unchanged when they already sum to
        1.0 ± 0.001. Otherwise each weight is scaled by 1/total, rounded to
        3 decimals, and any residual is added to the largest weight.
        """
        parsed = self.parse_weights(weights)
        values = {
            pillar: self.clamp_weight(pillar, value)
            for pillar, value in parsed.as_dict().items()
        }

        total = sum(values.values(), ZERO)
        if abs(total - Decimal("1")) < SUM_TOLERANCE:
            return Weights(**values)
        if total == 0:
            raise WeightValidationError("Weights sum to zero")

        factor = Decimal("1") / total
        values = {
            pillar: (value * factor).quantize(WEIGHT_PLACES, rounding=ROUND_HALF_UP)
            for pillar, value in values.items()
        }

        diff = Decimal("1") - sum(values.values(), ZERO)
        if diff != 0:
            largest = max(values.values())
            target = next(p for p in PILLARS if values.get(p) == largest)
            values[target] = (values[target] + diff).quantize(WEIGHT_PLACES, rounding=ROUND_HALF_UP)

        logger.debug("weights_normalized", **{k: float(v) for k, v in values.items()})
        return Weights(**values)

    def are_weights_valid(self, weights: Union[Weights, Mapping[str, Any]]) -> bool:
        """True when every weight is within its guardrail and the sum is 1.0 ± 0.001."""
        try:
            parsed = self.parse_weights(weights)
        except WeightValidationError:
            return False
        for pillar, value in parsed.as_dict().items():
            low, high = self.limits[pillar]
            if not low <= value <= high:
                return False
        return abs(parsed.total - Decimal("1")) < SUM_TOLERANCE

    def preset(self, preset: PresetType, presidential: bool = False) -> Weights:
        table = PRESIDENTIAL_PRESETS if presidential else PRESETS
        try:
            return table[PresetType(preset)]
        except (KeyError, ValueError) as e:
            raise WeightValidationError(f"No weights for preset {preset!r}") from e

    # ------------------------------------------------------------------
    # Composite
    # ------------------------------------------------------------------

    def combine(
        self,
        competence: Decimal,
        integrity: Decimal,
        transparency: Decimal,
        weights: Weights,
        plan_viability: Optional[Decimal] = None,
    ) -> Decimal:
        """Weighted composite in [0, 100], quantized to 0.01."""
        if weights.w_p is not None and plan_viability is None:
            raise WeightValidationError("w_p requires a plan viability score")

        composite = (
            weights.w_c * clamp(to_decimal(competence))
            + weights.w_i * clamp(to_decimal(integrity))
            + weights.w_t * clamp(to_decimal(transparency))
        )
        if weights.w_p is not None:
            composite += weights.w_p * clamp(to_decimal(plan_viability))

        return quantize(clamp(composite))

    def rank(
        self,
        candidates: Sequence[PillarScores],
        preset: PresetType = PresetType.BALANCED,
        weights: Optional[Union[Weights, Mapping[str, Any]]] = None,
    ) -> List[RankedCandidate]:
        """
        Order candidates by composite, highest first.

        Custom ``weights`` (normalized first) take precedence over ``preset``.
        Candidates keep their input order on ties.
        """
        chosen = self.normalize_weights(weights) if weights is not None else self.preset(preset)
        scored = [
            (
                c.candidate_id,
                self.combine(
                    c.competence,
                    c.integrity,
                    c.transparency,
                    chosen,
                    c.plan_viability if chosen.w_p is not None else None,
                ),
            )
            for c in candidates
        ]
        scored.sort(key=lambda item: item[1], reverse=True)

        logger.info("candidates_ranked", count=len(scored), preset=getattr(preset, "value", preset))

        return [
            RankedCandidate(position=i, candidate_id=cid, composite=composite)
            for i, (cid, composite) in enumerate(scored, start=1)
        ]
