"""
Application configuration using pydantic-settings.

WHAT: Centralized config from environment variables
WHY: Type-safe, validated config with sensible defaults
HOW: Pydantic BaseSettings reads from .env and environment
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from pathlib import Path
from typing import get_args

from ..models.negotiation import LocaleTag, NegotiationPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App metadata
    APP_NAME: str = "ShopMate Assistant"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Negotiation tuning (percent values)
    NEGOTIATION_BASE_DISCOUNT_PERCENT: float = 5.0
    NEGOTIATION_DISCOUNT_INCREMENT_PERCENT: float = 3.0
    NEGOTIATION_MAX_DISCOUNT_PERCENT: float = 20.0

    # Localization
    DEFAULT_LANGUAGE: LocaleTag = "en"
    SUPPORTED_LANGUAGES: str = "en,hi,kn"
    CURRENCY_SYMBOL: str = "₹"

    # Display pacing (milliseconds), cosmetic only
    REPLY_DELAY_MS: int = 500
    NAVIGATION_DELAY_MS: int = 1000

    # Conversation cache
    CONVERSATION_TTL_MINUTES: int = 60
    CONVERSATION_CLEANUP_INTERVAL_SECONDS: int = Field(default=300, gt=0)

    # CORS - accepts comma-separated string or list
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE_LEVEL: str = "DEBUG"
    LOG_FILE: str = "./data/logs/app.log"

    @field_validator(
        "NEGOTIATION_BASE_DISCOUNT_PERCENT",
        "NEGOTIATION_DISCOUNT_INCREMENT_PERCENT",
        "NEGOTIATION_MAX_DISCOUNT_PERCENT",
    )
    @classmethod
    def validate_percent(cls, v: float) -> float:
        """Percent knobs must stay within 0-100."""
        if v < 0 or v > 100:
            raise ValueError("percentage must be between 0 and 100")
        return v

    @field_validator("CORS_ORIGINS", "SUPPORTED_LANGUAGES", mode="before")
    @classmethod
    def join_lists(cls, v):
        """Accept either a list or a comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return v

    @field_validator("SUPPORTED_LANGUAGES")
    @classmethod
    def validate_languages(cls, v: str) -> str:
        """Only locales with reply templates can be enabled."""
        known = get_args(LocaleTag)
        unknown = [lang.strip() for lang in v.split(",") if lang.strip() and lang.strip() not in known]
        if unknown:
            raise ValueError(f"unsupported locale(s) {unknown}; expected a subset of {list(known)}")
        return v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_supported_languages(self) -> list[str]:
        """Get supported locale tags as a list."""
        return [lang.strip() for lang in self.SUPPORTED_LANGUAGES.split(",") if lang.strip()]

    def get_negotiation_policy(self) -> NegotiationPolicy:
        """Build the counteroffer policy from the tuning knobs."""
        return NegotiationPolicy(
            base_percent=self.NEGOTIATION_BASE_DISCOUNT_PERCENT,
            increment_percent=self.NEGOTIATION_DISCOUNT_INCREMENT_PERCENT,
            max_discount_percent=self.NEGOTIATION_MAX_DISCOUNT_PERCENT,
        )

    class Config:
        # Look for .env in project root first, then backend/.env
        env_file = [
            str(Path(__file__).parent.parent.parent.parent / ".env"),
            str(Path(__file__).parent.parent.parent / ".env"),
        ]
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
