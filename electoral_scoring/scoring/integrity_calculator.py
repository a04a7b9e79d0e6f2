# electoral_scoring/scoring/integrity_calculator.py
"""
Integrity Calculator - Ranking Electoral
-----------------------------------------
Penalty model: start at 100 and subtract.

Penal sentences:
    ≥2 firm → 85 | 1 firm → 70 | + 35 per pending (non-firm) sentence
    running penal penalty capped at 85

Civil sentences (grouped by type, in order of first appearance):
    n-th sentence of a type (0-indexed) weighs base × (1.0, 0.5, 0.25, 0.25, …)

        type          base   cap
        violence       50     70
        alimentos      35     50
        laboral        25     40
        contractual    15     25

    sum of per-type penalties capped at 85

Party resignations:
    0 → 0 | 1 → 5 | 2-3 → 10 | 4+ → 15

    total = max(100 − penal − civil − resignations, 0)
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Sequence

import structlog

from electoral_scoring.models.candidate import CandidateData, CivilSentence, PenalSentence
from electoral_scoring.models.enumerations import CivilSentenceType
from electoral_scoring.scoring.utils import HUNDRED, ZERO, quantize, tier_points, to_count

logger = structlog.get_logger(__name__)

FIRM_SINGLE_PENALTY = Decimal("70")
FIRM_MULTIPLE_PENALTY = Decimal("85")
PENDING_PENALTY = Decimal("35")
MAX_PENAL_PENALTY = Decimal("85")

CIVIL_BASE_PENALTY: Dict[CivilSentenceType, Decimal] = {
    CivilSentenceType.VIOLENCE: Decimal("50"),
    CivilSentenceType.ALIMENTOS: Decimal("35"),
    CivilSentenceType.LABORAL: Decimal("25"),
    CivilSentenceType.CONTRACTUAL: Decimal("15"),
}

CIVIL_TYPE_CAP: Dict[CivilSentenceType, Decimal] = {
    CivilSentenceType.VIOLENCE: Decimal("70"),
    CivilSentenceType.ALIMENTOS: Decimal("50"),
    CivilSentenceType.LABORAL: Decimal("40"),
    CivilSentenceType.CONTRACTUAL: Decimal("25"),
}

# Weight of the 1st, 2nd and 3rd-onward sentence of the same type
CIVIL_REPEAT_MULTIPLIERS = (Decimal("1.0"), Decimal("0.5"), Decimal("0.25"))
MAX_CIVIL_PENALTY = Decimal("85")

RESIGNATION_TIERS = [(4, 15), (2, 10), (1, 5)]


def civil_multiplier(index: int) -> Decimal:
    """Multiplier for the index-th (0-based) sentence of one type."""
    return CIVIL_REPEAT_MULTIPLIERS[min(index, len(CIVIL_REPEAT_MULTIPLIERS) - 1)]


@dataclass
class CivilPenalty:
    """Per-type civil penalty line."""
    type: CivilSentenceType
    count: int
    raw_penalty: Decimal  # after diminishing returns, before the type cap
    penalty: Decimal      # after the type cap
    cap: Decimal
    capped: bool


@dataclass
class IntegrityResult:
    """Output of IntegrityCalculator.calculate()."""
    penal_penalty: Decimal
    civil_penalties: List[CivilPenalty] = field(default_factory=list)
    total_civil_penalty: Decimal = ZERO
    civil_penalties_capped: bool = False
    resignation_penalty: Decimal = ZERO
    total: Decimal = HUNDRED
    firm_sentence_count: int = 0
    pending_sentence_count: int = 0


class IntegrityCalculator:
    """Traditional integrity: penal, civil and resignation penalties."""

    def penal_penalty(self, sentences: Sequence[PenalSentence]) -> Decimal:
        firm = sum(1 for s in sentences if s.is_firm)
        pending = len(sentences) - firm

        if firm >= 2:
            penalty = FIRM_MULTIPLE_PENALTY
        elif firm == 1:
            penalty = FIRM_SINGLE_PENALTY
        else:
            penalty = ZERO
        penalty += PENDING_PENALTY * pending
        return min(penalty, MAX_PENAL_PENALTY)

    def civil_penalties(self, sentences: Sequence[CivilSentence]) -> List[CivilPenalty]:
        counts: Dict[CivilSentenceType, int] = {}
        for s in sentences:
            counts[s.type] = counts.get(s.type, 0) + 1

        lines = []
        for civil_type, count in counts.items():
            base = CIVIL_BASE_PENALTY[civil_type]
            cap = CIVIL_TYPE_CAP[civil_type]
            raw = sum((base * civil_multiplier(i) for i in range(count)), ZERO)
            lines.append(CivilPenalty(
                type=civil_type,
                count=count,
                raw_penalty=quantize(raw),
                penalty=quantize(min(raw, cap)),
                cap=cap,
                capped=raw > cap,
            ))
        return lines

    def resignation_penalty(self, resignations: int) -> Decimal:
        return Decimal(tier_points(to_count(resignations), RESIGNATION_TIERS))

    def calculate(self, candidate: CandidateData) -> IntegrityResult:
        penal = self.penal_penalty(candidate.penal_sentences)

        civil_lines = self.civil_penalties(candidate.civil_sentences)
        civil_sum = sum((line.penalty for line in civil_lines), ZERO)
        total_civil = min(civil_sum, MAX_CIVIL_PENALTY)

        resignation = self.resignation_penalty(candidate.party_resignations)

        total = quantize(max(HUNDRED - penal - total_civil - resignation, ZERO))
        firm = sum(1 for s in candidate.penal_sentences if s.is_firm)

        logger.debug(
            "integrity_calculated",
            penal_penalty=float(penal),
            civil_penalty=float(total_civil),
            civil_capped=civil_sum > MAX_CIVIL_PENALTY,
            resignation_penalty=float(resignation),
            total=float(total),
        )

        return IntegrityResult(
            penal_penalty=penal,
            civil_penalties=civil_lines,
            total_civil_penalty=quantize(total_civil),
            civil_penalties_capped=civil_sum > MAX_CIVIL_PENALTY,
            resignation_penalty=resignation,
            total=total,
            firm_sentence_count=firm,
            pending_sentence_count=len(candidate.penal_sentences) - firm,
        )
