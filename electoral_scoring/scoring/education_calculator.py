# electoral_scoring/scoring/education_calculator.py
"""
Education Calculator - Ranking Electoral
-----------------------------------------
Scores declared studies on a 30-point scale.

Formula:
    level = max(points(record)) capped at 22
    depth = 2 × #(other records with points ≥ 10), capped at 8
    total = min(level + depth, 30)

Point table:
    sin_informacion 0    tecnico_completo 10        titulo_profesional 16
    primaria 2           universitario_incompleto 9  maestria 18
    secundaria_inc 4     universitario_completo 14   doctorado 22
    secundaria_comp 6
    tecnico_inc 7
"""
from dataclasses import dataclass
from typing import Dict, Sequence

import structlog

from electoral_scoring.models.candidate import EducationRecord
from electoral_scoring.models.enumerations import EducationLevel

logger = structlog.get_logger(__name__)

EDUCATION_POINTS: Dict[EducationLevel, int] = {
    EducationLevel.SIN_INFORMACION: 0,
    EducationLevel.PRIMARIA: 2,
    EducationLevel.SECUNDARIA_INCOMPLETA: 4,
    EducationLevel.SECUNDARIA_COMPLETA: 6,
    EducationLevel.TECNICO_INCOMPLETO: 7,
    EducationLevel.TECNICO_COMPLETO: 10,
    EducationLevel.UNIVERSITARIO_INCOMPLETO: 9,
    EducationLevel.UNIVERSITARIO_COMPLETO: 14,
    EducationLevel.TITULO_PROFESIONAL: 16,
    EducationLevel.MAESTRIA: 18,
    EducationLevel.DOCTORADO: 22,
}

MAX_LEVEL = 22
DEPTH_THRESHOLD = 10
DEPTH_PER_RECORD = 2
MAX_DEPTH = 8
MAX_TOTAL = 30


@dataclass
class EducationResult:
    """Output of EducationCalculator.calculate()."""
    level: int
    depth: int
    total: int


class EducationCalculator:
    """Score level of studies plus breadth of additional degrees."""

    def calculate(self, education: Sequence[EducationRecord]) -> EducationResult:
        if not education:
            return EducationResult(level=0, depth=0, total=0)

        points = sorted((EDUCATION_POINTS[e.level] for e in education), reverse=True)

        level = min(points[0], MAX_LEVEL)
        extra = sum(1 for p in points[1:] if p >= DEPTH_THRESHOLD)
        depth = min(extra * DEPTH_PER_RECORD, MAX_DEPTH)
        total = min(level + depth, MAX_TOTAL)

        logger.debug(
            "education_calculated",
            record_count=len(education),
            level=level,
            depth=depth,
            total=total,
        )

        return EducationResult(level=level, depth=depth, total=total)
