"""Application configuration with validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Panel Evaluation Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Credentials (token issuance happens elsewhere; we only verify)
    JWT_SECRET: Optional[SecretStr] = None
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"

    # Record store
    STORE_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "panel_eval"

    # Rubric
    RUBRIC_PATH: Optional[str] = Field(
        default=None,
        description="JSON rubric definition; the built-in MEDIA rubric is used when unset",
    )

    # Aggregation
    TOP_COMMENTS_LIMIT: int = Field(default=3, ge=1, le=50)

    # Initial feature settings (admins change these at runtime)
    FEATURE_CHAT_ENABLED: bool = True
    FEATURE_DIRECT_DECISION_ENABLED: bool = True
    FEATURE_PRINT_ENABLED: bool = True
    FEATURE_EXPORT_ENABLED: bool = True

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required security settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.JWT_SECRET is None:
                raise ValueError("JWT_SECRET is required in production")
            if len(self.JWT_SECRET.get_secret_value()) < 32:
                raise ValueError("JWT_SECRET must be ≥32 characters in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
