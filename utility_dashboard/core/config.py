"""Application configuration settings."""

import os
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_default_database_url() -> str:
    """Get the default database URL, using Fly Volume path if available."""
    if os.path.isdir("/data"):
        return "sqlite:////data/utility_dashboard.db"
    return "sqlite:///./utility_dashboard.db"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Utility Dashboard"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Database - defaults to Fly Volume path if /data exists
    DATABASE_URL: str = _get_default_database_url()

    # Tariffs and loss model
    CURRENCY: str = "OMR"
    ELECTRICITY_UNIT_RATE: Decimal = Decimal("0.025")  # per kWh
    WATER_UNIT_RATE: Decimal = Decimal("0")  # no tariff in the source data
    WATER_LOSS_RATE: Decimal = Decimal("0.003")  # building-level metering slack


settings = Settings()
