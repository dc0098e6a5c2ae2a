"""Application configuration with validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Shinko OS Valuation API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL_OPPORTUNITY: int = Field(default=300, ge=1)    # 5 minutes
    CACHE_TTL_LEGEND: int = Field(default=86400, ge=1)       # 24 hours

    # Rating controls (creation-flow bounds, not used by the engine itself)
    RATING_MIN: int = Field(default=1, ge=0)
    RATING_MAX: int = Field(default=5, ge=1)
    DRAFT_RATING_DEFAULT: int = Field(default=1, ge=0)
    CLAMP_RATINGS: bool = False

    # Tenancy
    DEFAULT_ORGANIZATION_ID: int = 3

    # Optional JSON export loaded into the store at startup
    SEED_FILE: Optional[str] = None

    @model_validator(mode="after")
    def validate_rating_bounds(self):
        """Slider bounds must form a non-empty range containing the draft default."""
        if self.RATING_MIN >= self.RATING_MAX:
            raise ValueError(
                f"RATING_MIN must be below RATING_MAX, got {self.RATING_MIN} >= {self.RATING_MAX}"
            )
        if not self.RATING_MIN <= self.DRAFT_RATING_DEFAULT <= self.RATING_MAX:
            raise ValueError("DRAFT_RATING_DEFAULT must lie within [RATING_MIN, RATING_MAX]")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
