"""
Application Configuration
=========================
Centralized configuration management using Pydantic Settings.
"""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    ``tariff_config_path`` and ``kitchens_config_path`` are resolved against
    the working directory. When the service starts elsewhere, set them to
    absolute paths (``TARIFF_CONFIG_PATH``, ``KITCHENS_CONFIG_PATH``);
    otherwise a missing tariff file falls back to the built-in default tariff
    and a missing kitchen file leaves no kitchens, each with only a warning log.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Metrics
    metrics_enabled: bool = True

    # Pricing
    tariff_config_path: str = "config/tariff.yaml"
    kitchens_config_path: str = "config/kitchens.yaml"
    rounding_mode: Literal["half_up", "half_even"] = "half_up"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def decimal_rounding(self) -> str:
        """Return the decimal module rounding constant for money output."""
        return ROUND_HALF_EVEN if self.rounding_mode == "half_even" else ROUND_HALF_UP


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
