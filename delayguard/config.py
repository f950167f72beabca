"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PRODUCTION_ITEMS = (
    "Standard Widget",
    "Premium Gadget",
    "Smart Device",
    "Industrial Component",
    "Custom Assembly",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Analysis lifecycle
    simulated_delay_ms: int = Field(
        default=2000, ge=0, description="Simulated processing delay before an estimate is published"
    )

    # Risk estimation
    jitter_min: float = Field(default=-5.0, description="Lower bound of the estimation jitter")
    jitter_max: float = Field(default=5.0, description="Upper bound of the estimation jitter")
    low_threshold: float = Field(
        default=25.0, ge=0.0, le=100.0, description="Adjusted risk below this is low"
    )
    high_threshold: float = Field(
        default=60.0, ge=0.0, le=100.0, description="Adjusted risk at or above this is high"
    )
    rng_seed: Optional[int] = Field(
        default=None, description="Seed for the jitter generator (unseeded when empty)"
    )

    # Catalog
    production_item_catalog: str = Field(
        default=",".join(DEFAULT_PRODUCTION_ITEMS),
        description="Selectable production items (comma-separated)",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @model_validator(mode="after")
    def check_ranges(self) -> "Settings":
        """Ensure jitter and band thresholds describe non-empty ranges."""
        if self.jitter_min > self.jitter_max:
            raise ValueError("jitter_min must not exceed jitter_max")
        if self.low_threshold > self.high_threshold:
            raise ValueError("low_threshold must not exceed high_threshold")
        return self

    @property
    def item_catalog(self) -> tuple[str, ...]:
        """Parse comma-separated production item catalog."""
        return tuple(
            item.strip() for item in self.production_item_catalog.split(",") if item.strip()
        )

    @property
    def simulated_delay_seconds(self) -> float:
        return self.simulated_delay_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
