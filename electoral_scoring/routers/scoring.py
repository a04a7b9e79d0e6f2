"""
Candidate Scoring API Router
electoral_scoring/routers/scoring.py

Endpoints:
  GET  /api/v1/scoring/presets             Preset and presidential weights, guardrails
  POST /api/v1/scoring/weights/normalize   Clamp + normalize custom weights
  POST /api/v1/scoring/candidates/score    Score one candidate
  POST /api/v1/scoring/candidates/rank     Score and rank a batch of candidates

The router never fetches or persists candidates: callers send the record
bundle and receive the breakdown.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from fastapi import APIRouter, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from electoral_scoring.config import get_settings
from electoral_scoring.core.exceptions import (
    InvalidCandidateDataError,
    InvalidEnumError,
    ScoringException,
    WeightValidationError,
)
from electoral_scoring.models.enumerations import CargoType, PresetType
from electoral_scoring.scoring.engine import get_engine
from electoral_scoring.scoring.weighted_combiner import PRESETS, PRESIDENTIAL_PRESETS

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/scoring", tags=["Scoring"])


# =====================================================================
# Error handlers
# =====================================================================

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "enum": "Field '{field}' has an unknown value",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "too_short": "Field '{field}' is too short",
    "model_type": "Field '{field}' must be an object",
    "list_type": "Field '{field}' must be a list",
    "bool_type": "Field '{field}' must be a boolean",
}


def get_validation_message(field: str, error_type: str) -> str:
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def _error_body(error_code: str, message: str, details: Any = None) -> Dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    field = ".".join(str(part) for part in err.get("loc", []) if part != "body")
    code = "INVALID_ENUM" if error_type == "enum" else "VALIDATION_ERROR"
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            code,
            get_validation_message(field, error_type),
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def scoring_exception_handler(request: Request, exc: ScoringException):
    if isinstance(exc, InvalidEnumError):
        body = _error_body(
            "INVALID_ENUM",
            str(exc),
            {"field": exc.field, "value": exc.value, "allowed": exc.allowed},
        )
    elif isinstance(exc, InvalidCandidateDataError):
        details = [
            {"loc": list(e.get("loc", [])), "msg": e.get("msg"), "type": e.get("type")}
            for e in exc.errors
        ]
        body = _error_body("INVALID_CANDIDATE", exc.message, details or None)
    elif isinstance(exc, WeightValidationError):
        body = _error_body("INVALID_WEIGHTS", exc.message)
    else:
        body = _error_body("SCORING_ERROR", str(exc))

    logger.warning("scoring_request_rejected", error_code=body["error_code"], message=body["message"])
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body)


# =====================================================================
# Request / Response Models
# =====================================================================

class WeightsPayload(BaseModel):
    w_c: float = Field(..., description="Competence weight")
    w_i: float = Field(..., description="Integrity weight")
    w_t: float = Field(..., description="Transparency weight")
    w_p: Optional[float] = Field(default=None, description="Plan viability weight (presidential only)")


class ScoreRequest(BaseModel):
    """One candidate bundle. ``candidate`` follows CandidateData / EnhancedIntegrityData."""
    candidate: Dict[str, Any]
    cargo: CargoType
    reference_year: Optional[int] = Field(default=None, ge=1900, le=2100)
    weights: Optional[WeightsPayload] = None


class RankEntry(BaseModel):
    candidate_id: str = Field(..., min_length=1)
    cargo: CargoType
    candidate: Dict[str, Any]


class RankRequest(BaseModel):
    candidates: List[RankEntry] = Field(..., min_length=1)
    preset: PresetType = PresetType.BALANCED
    weights: Optional[WeightsPayload] = None
    reference_year: Optional[int] = Field(default=None, ge=1900, le=2100)


class RankedItem(BaseModel):
    position: int
    candidate_id: str
    composite: float
    scores: Dict[str, Optional[float]]


class RankResponse(BaseModel):
    preset: str
    reference_year: int
    ranking: List[RankedItem]


class PresetsResponse(BaseModel):
    presets: Dict[str, Dict[str, float]]
    presidential_presets: Dict[str, Dict[str, float]]
    weight_limits: Dict[str, Dict[str, float]]


class NormalizeResponse(BaseModel):
    requested: Dict[str, Optional[float]]
    normalized: Dict[str, float]
    valid: bool


# =====================================================================
# Helpers
# =====================================================================

def resolve_reference_year(requested: Optional[int]) -> int:
    """Request value, then DEFAULT_REFERENCE_YEAR, then the server clock."""
    if requested is not None:
        return requested
    configured = get_settings().DEFAULT_REFERENCE_YEAR
    if configured is not None:
        return configured
    return datetime.now(timezone.utc).year


def _weights_dict(weights: Optional[WeightsPayload]) -> Optional[Dict[str, Any]]:
    return weights.model_dump(exclude_none=True) if weights is not None else None


def _as_floats(weights) -> Dict[str, float]:
    return {k: float(v) for k, v in weights.as_dict().items()}


# =====================================================================
# Endpoints
# =====================================================================

@router.get("/presets", response_model=PresetsResponse, summary="Preset weights and guardrails")
async def get_presets():
    settings = get_settings()
    return PresetsResponse(
        presets={p.value: _as_floats(w) for p, w in PRESETS.items()},
        presidential_presets={p.value: _as_floats(w) for p, w in PRESIDENTIAL_PRESETS.items()},
        weight_limits={
            pillar: {"min": low, "max": high}
            for pillar, (low, high) in settings.weight_limits.items()
        },
    )


@router.post(
    "/weights/normalize",
    response_model=NormalizeResponse,
    summary="Clamp custom weights to guardrails and normalize to 1.0",
)
async def normalize_weights(weights: WeightsPayload):
    combiner = get_engine().combiner
    requested = _weights_dict(weights)
    normalized = combiner.normalize_weights(requested)
    return NormalizeResponse(
        requested=weights.model_dump(),
        normalized=_as_floats(normalized),
        valid=combiner.are_weights_valid(requested),
    )


@router.post("/candidates/score", summary="Score one candidate")
async def score_candidate(request: ScoreRequest) -> Dict[str, Any]:
    reference_year = resolve_reference_year(request.reference_year)
    result = get_engine().score(
        request.candidate,
        request.cargo,
        reference_year,
        weights=_weights_dict(request.weights),
    )
    return result.to_dict()


@router.post("/candidates/rank", response_model=RankResponse, summary="Score and rank candidates")
async def rank_candidates(request: RankRequest):
    ids = [entry.candidate_id for entry in request.candidates]
    if len(set(ids)) != len(ids):
        raise InvalidCandidateDataError("candidate_id values must be unique")

    engine = get_engine()
    reference_year = resolve_reference_year(request.reference_year)
    weights = _weights_dict(request.weights)

    results = engine.score_many(
        [(entry.candidate, entry.cargo) for entry in request.candidates],
        reference_year,
        weights=weights,
    )
    by_id = {entry.candidate_id: result for entry, result in zip(request.candidates, results)}
    ranked = engine.rank(
        [(entry.candidate_id, result) for entry, result in zip(request.candidates, results)],
        preset=request.preset,
        weights=weights,
    )

    return RankResponse(
        preset=PresetType.CUSTOM.value if weights is not None else request.preset.value,
        reference_year=reference_year,
        ranking=[
            RankedItem(
                position=r.position,
                candidate_id=r.candidate_id,
                composite=float(r.composite),
                scores={
                    k: (float(v) if v is not None else None)
                    for k, v in by_id[r.candidate_id].scores.items()
                },
            )
            for r in ranked
        ],
    )
