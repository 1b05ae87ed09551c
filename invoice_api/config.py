"""
Configuration management using pydantic-settings.
All settings loaded from environment variables (12-factor app).
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_reload: bool = Field(default=True, description="Enable hot reload")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Analytics defaults
    analytics_window_months: int = Field(
        default=6, ge=1, le=24, description="Trailing months in the monthly series"
    )
    top_clients_limit: int = Field(
        default=5, ge=1, le=50, description="Number of clients in the revenue ranking"
    )
    analytics_timezone: str = Field(
        default="UTC", description="Timezone used to resolve 'now' when the caller omits it"
    )
    unknown_customer_name: str = Field(
        default="Unknown", description="Client name used when an invoice has none"
    )

    # Risk tiers (days outstanding, inclusive upper bounds)
    risk_low_max_days: int = Field(default=15, ge=0, description="Upper bound of the low tier")
    risk_medium_max_days: int = Field(
        default=45, ge=0, description="Upper bound of the medium tier"
    )

    # Payment score bands
    score_excellent_threshold: int = Field(
        default=80, ge=0, le=100, description="Minimum score for 'excellent'"
    )
    score_moderate_threshold: int = Field(
        default=50, ge=0, le=100, description="Minimum score for 'moderate'"
    )
    good_payment_ratio: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Paid share above which a client's history reads as 'good'",
    )

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("risk_medium_max_days")
    @classmethod
    def validate_risk_bounds(cls, v: int, info) -> int:
        """Medium tier must not end before the low tier."""
        low = info.data.get("risk_low_max_days")
        if low is not None and v < low:
            raise ValueError("risk_medium_max_days must be >= risk_low_max_days")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
