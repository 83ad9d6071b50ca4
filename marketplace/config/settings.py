"""Application Settings using Pydantic.

Environment-based configuration with validation.
Every field can be overridden with a MARKETPLACE_-prefixed variable.

Environment Variables:
    MARKETPLACE_ENVIRONMENT: development | staging | production
    MARKETPLACE_DEBUG: Enable debug mode (default: False)
    MARKETPLACE_LOG_FORMAT: json | console
    MARKETPLACE_DEFAULT_CURRENCY: Currency for commands that omit one

Example .env file:
    MARKETPLACE_ENVIRONMENT=production
    MARKETPLACE_LOG_LEVEL=INFO
    MARKETPLACE_MAX_SEARCH_RADIUS_KM=250
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Domain core не читає settings: тут тільки policy, яку застосовує
    application layer (auction duration bounds, paging, search radius, retry).
    """

    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Core ====================
    app_name: str = "Marketplace Listings"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ==================== Listings ====================
    default_currency: str = Field(default="USD", min_length=1)
    min_auction_duration_hours: int = Field(default=1, ge=1)
    max_auction_duration_days: int = Field(default=30, ge=1)

    # Paging
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Spatial search
    max_search_radius_km: float = Field(default=500.0, gt=0)

    # ==================== Concurrency ====================
    concurrency_max_retries: int = Field(default=3, ge=0, le=10)
    concurrency_retry_base_delay: float = Field(default=0.05, ge=0, description="Base delay in seconds")
    concurrency_retry_max_delay: float = Field(default=1.0, ge=0, description="Max delay in seconds")

    # ==================== Validators ====================

    @field_validator("default_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        """Upper-case currency code ("usd" → "USD")."""
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_bounds(self) -> "Settings":
        """Cross-field sanity checks."""
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        if self.min_auction_duration_hours > self.max_auction_duration_days * 24:
            raise ValueError("min auction duration cannot exceed max auction duration")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings instance.
    """
    return Settings()
