"""Immutable meter record snapshots consumed by the aggregation engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from utility_dashboard.models.meter import ElectricityMeter, WaterMeter

ZERO = Decimal("0")


@dataclass(frozen=True)
class MeterRecord:
    """One meter with its monthly consumption values.

    Readings absent for a month, or stored as null, count as zero; the engine
    never mutates a record, only reads it.
    """

    name: str
    account: str | None = None
    type: str | None = None
    label: str | None = None  # water hierarchy level
    zone: str | None = None
    readings: Mapping[str, Decimal | None] = field(default_factory=dict)
    id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "readings",
            MappingProxyType(
                {k: Decimal(str(v)) for k, v in self.readings.items() if v is not None}
            ),
        )

    def value(self, month_key: str) -> Decimal:
        """Consumption for a month, zero when the reading is missing."""
        return self.readings.get(month_key, ZERO)


def record_from_model(meter: ElectricityMeter | WaterMeter) -> MeterRecord:
    """Snapshot a database row as an immutable record."""
    return MeterRecord(
        id=meter.id,
        name=meter.name,
        account=meter.account,
        type=meter.type,
        label=getattr(meter, "label", None),
        zone=getattr(meter, "zone", None),
        readings=meter.get_readings(),
    )
