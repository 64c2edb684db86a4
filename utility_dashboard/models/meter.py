"""Meter record database models.

Each row is one physical or logical meter. Monthly consumption is stored as
JSON mapping month keys (e.g. "may_24") to decimal strings, the same way
formula terms were stored before. Month keys are validated against the
domain's month index on the way in.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from utility_dashboard.core.database import Base


class MeterRecordMixin:
    """Columns shared by every metered domain."""

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(150))
    account: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    type: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    readings_json: Mapped[str] = mapped_column(Text, default="{}")  # {"month_key": "value"}
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    def get_readings(self) -> dict[str, Decimal]:
        """Parse the stored JSON readings into a dict of Decimal values."""
        raw = json.loads(self.readings_json or "{}")
        return {k: Decimal(str(v)) for k, v in raw.items()}

    def set_readings(self, readings: dict[str, Decimal]) -> None:
        """Serialize a readings dict to JSON for storage."""
        self.readings_json = json.dumps({k: str(v) for k, v in readings.items()})


class ElectricityMeter(MeterRecordMixin, Base):
    """Electricity meter - flat, categorized by type only."""

    __tablename__ = "electricity_meters"


class WaterMeter(MeterRecordMixin, Base):
    """Water meter - placed in the L1..L4 hierarchy and a zone."""

    __tablename__ = "water_meters"

    label: Mapped[str] = mapped_column(String(5), index=True)
    zone: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
