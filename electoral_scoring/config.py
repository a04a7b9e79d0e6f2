"""Application configuration with comprehensive validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine and API settings. Scoring tables are fixed; guardrails are tunable."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Ranking Electoral Scoring Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    DEFAULT_REFERENCE_YEAR: Optional[int] = Field(
        default=None,
        ge=1900,
        le=2100,
        description="Year used by the HTTP layer when a request omits one; server clock otherwise",
    )

    # Transparency input source
    TRANSPARENCY_SOURCE: Literal["auto", "declared", "legacy"] = "auto"

    # Custom weight guardrails
    W_COMPETENCE_MIN: float = Field(default=0.20, ge=0.0, le=1.0)
    W_COMPETENCE_MAX: float = Field(default=0.55, ge=0.0, le=1.0)
    W_INTEGRITY_MIN: float = Field(default=0.20, ge=0.0, le=1.0)
    W_INTEGRITY_MAX: float = Field(default=0.55, ge=0.0, le=1.0)
    W_TRANSPARENCY_MIN: float = Field(default=0.05, ge=0.0, le=1.0)
    W_TRANSPARENCY_MAX: float = Field(default=0.20, ge=0.0, le=1.0)
    W_PLAN_MIN: float = Field(default=0.05, ge=0.0, le=1.0)
    W_PLAN_MAX: float = Field(default=0.20, ge=0.0, le=1.0)

    # Batch re-scoring
    BATCH_MAX_WORKERS: int = Field(default=4, ge=1, le=64)

    @model_validator(mode="after")
    def validate_weight_guardrails(self):
        """Each guardrail must be a non-empty range."""
        pairs = {
            "W_COMPETENCE": (self.W_COMPETENCE_MIN, self.W_COMPETENCE_MAX),
            "W_INTEGRITY": (self.W_INTEGRITY_MIN, self.W_INTEGRITY_MAX),
            "W_TRANSPARENCY": (self.W_TRANSPARENCY_MIN, self.W_TRANSPARENCY_MAX),
            "W_PLAN": (self.W_PLAN_MIN, self.W_PLAN_MAX),
        }
        for name, (low, high) in pairs.items():
            if low >= high:
                raise ValueError(f"{name}_MIN must be < {name}_MAX, got {low} >= {high}")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production is not running in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def weight_limits(self) -> dict:
        """Guardrails keyed by pillar, as (min, max)."""
        return {
            "w_c": (self.W_COMPETENCE_MIN, self.W_COMPETENCE_MAX),
            "w_i": (self.W_INTEGRITY_MIN, self.W_INTEGRITY_MAX),
            "w_t": (self.W_TRANSPARENCY_MIN, self.W_TRANSPARENCY_MAX),
            "w_p": (self.W_PLAN_MIN, self.W_PLAN_MAX),
        }

@lru_cache
def get_settings() -> Settings:
    return Settings()
