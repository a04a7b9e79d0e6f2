"""
Health Check Router - Ranking Electoral
electoral_scoring/routers/health.py

The engine has no external dependencies, so health reduces to "the
settings load and a reference candidate scores".
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from electoral_scoring.config import get_settings
from electoral_scoring.core.exceptions import ScoringException
from electoral_scoring.models.candidate import CandidateData
from electoral_scoring.scoring.engine import get_engine

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Checks


def check_engine() -> str:
    """Score an empty candidate; a clean record must come out at integrity 100."""
    try:
        result = get_engine().score(CandidateData(), "diputado", 2026)
        if result.integrity.total != 100:
            return f"unhealthy: unexpected integrity {result.integrity.total}"
        return "healthy"
    except ScoringException as e:
        return f"unhealthy: {e}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Engine healthy"},
        503: {"description": "Engine unhealthy"},
    },
    summary="Health check",
)
async def health_check():
    settings = get_settings()
    dependencies = {"engine": check_engine()}
    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
