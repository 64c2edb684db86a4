"""Meter record schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, field_validator

from utility_dashboard.models.enums import WaterLevel
from utility_dashboard.services.months import ELECTRICITY_HISTORY, WATER_HISTORY, MonthIndex


def _validate_readings(v: dict[str, Decimal], history: MonthIndex) -> dict[str, Decimal]:
    """Readings must use known month keys and be non-negative."""
    for key, value in v.items():
        if key not in history:
            raise ValueError(f"Unknown month key '{key}'")
        if value < 0:
            raise ValueError(f"Reading for '{key}' must not be negative")
    return v


class MeterRecordBase(BaseModel):
    """Fields shared by all meter records."""

    name: str
    account: str | None = None
    type: str | None = None
    readings: dict[str, Decimal] = {}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the meter name is not blank."""
        if not v or not v.strip():
            raise ValueError("Meter name must not be empty")
        return v.strip()


class ElectricityMeterCreate(MeterRecordBase):
    """Schema for importing an electricity meter record."""

    @field_validator("readings")
    @classmethod
    def validate_readings(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        return _validate_readings(v, ELECTRICITY_HISTORY)


class WaterMeterCreate(MeterRecordBase):
    """Schema for importing a water meter record."""

    label: WaterLevel
    zone: str | None = None

    @field_validator("readings")
    @classmethod
    def validate_readings(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        return _validate_readings(v, WATER_HISTORY)


class ElectricityMeterBulkCreate(BaseModel):
    """Schema for importing many electricity meter records at once."""

    meters: list[ElectricityMeterCreate]


class WaterMeterBulkCreate(BaseModel):
    """Schema for importing many water meter records at once."""

    meters: list[WaterMeterCreate]


class MeterRecordResponse(BaseModel):
    """Schema for a stored meter record."""

    id: int
    name: str
    account: str | None
    type: str | None
    label: str | None = None
    zone: str | None = None
    readings: dict[str, Decimal]
    created_at: datetime
