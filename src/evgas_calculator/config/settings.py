"""Runtime settings — outbound endpoints, credentials, cache and logging."""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVEL_ALIASES = {"verbose": "DEBUG", "lite": "WARNING"}


class Settings(BaseSettings):
    """Root settings, read from ``EVGAS_*`` environment variables.

    The two third-party credentials also accept their conventional
    unprefixed names (``EIA_API_KEY``, ``NREL_API_KEY``).
    """

    http_timeout_seconds: float = Field(
        default=8.0, gt=0, description="Timeout applied to every outbound request",
    )
    cache_ttl_seconds: float = Field(
        default=12 * 60 * 60, gt=0, description="How long a cached region price stays fresh",
    )
    cache_max_entries: int = Field(
        default=1024, ge=1, description="Upper bound on cached price entries across all kinds",
    )
    user_agent: str = Field(default="EVvsGasCalculator/1.0")

    zippopotam_base_url: str = "https://api.zippopotam.us"
    aaa_base_url: str = "https://gasprices.aaa.com/"
    eia_base_url: str = "https://api.eia.gov/v2"
    nrel_base_url: str = "https://developer.nrel.gov/api/alt-fuel-stations/v1"
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"

    eia_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("EVGAS_EIA_API_KEY", "EIA_API_KEY"),
        description="EIA open-data key; live electricity rates are skipped when empty",
    )
    nrel_api_key: str = Field(
        default="DEMO_KEY",
        validation_alias=AliasChoices("EVGAS_NREL_API_KEY", "NREL_API_KEY"),
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"

    model_config = SettingsConfigDict(
        env_prefix="EVGAS_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def expand_log_level_alias(cls, v: object) -> object:
        """``verbose`` shows every fallback decision; ``lite`` only failures."""
        if isinstance(v, str):
            return LOG_LEVEL_ALIASES.get(v.strip().lower(), v.strip().upper())
        return v


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
