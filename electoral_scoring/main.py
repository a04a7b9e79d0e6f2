from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from electoral_scoring.config import get_settings
from electoral_scoring.core.exceptions import ScoringException
from electoral_scoring.logging_config import configure_logging

# IMPORT ROUTERS
from electoral_scoring.routers.health import router as health_router
from electoral_scoring.routers.scoring import router as scoring_router
from electoral_scoring.routers.scoring import (
    scoring_exception_handler,
    validation_exception_handler,
)

settings = get_settings()
logger = configure_logging(settings)


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ScoringException, scoring_exception_handler)

# REGISTER ROUTERS
app.include_router(health_router)    # Health
app.include_router(scoring_router, prefix=settings.API_V1_PREFIX)   # Scoring


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


logger.info("app_configured", env=settings.APP_ENV, transparency_source=settings.TRANSPARENCY_SOURCE)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "electoral_scoring.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
