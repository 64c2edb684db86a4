"""Dashboard response schemas shaped for charts, cards and tables."""

from decimal import Decimal

from pydantic import BaseModel


class MonthOption(BaseModel):
    """One selectable slot of a month index."""

    index: int
    label: str
    key: str


class SelectedRange(BaseModel):
    """The month range an aggregate was computed for."""

    start: int
    end: int
    start_label: str
    end_label: str
    is_empty: bool


class TopConsumerSummary(BaseModel):
    """The meter with the highest consumption in the range."""

    id: int | None
    name: str
    account: str | None
    type: str | None
    consumption: Decimal
    cost: Decimal


class MonthlyConsumption(BaseModel):
    """A point of the monthly trend chart."""

    month: str
    consumption: Decimal


class CategoryConsumption(BaseModel):
    """A bar of the consumption-by-type chart."""

    name: str
    value: Decimal
    meter_count: int


class MeterRangeRow(BaseModel):
    """A meter's consumption and cost over the selected range."""

    id: int | None
    name: str
    account: str | None
    type: str | None
    consumption: Decimal
    cost: Decimal


class ElectricityOverview(BaseModel):
    """Electricity consumption overview for a range."""

    range: SelectedRange
    currency: str
    unit_rate: Decimal
    total_consumption: Decimal
    total_cost: Decimal
    meter_count: int
    top_consumer: TopConsumerSummary | None
    monthly_trend: list[MonthlyConsumption]
    consumption_by_type: list[CategoryConsumption]


class TypeAnalysis(BaseModel):
    """Electricity overview scoped to a single meter type."""

    type: str
    range: SelectedRange
    currency: str
    unit_rate: Decimal
    total_consumption: Decimal
    total_cost: Decimal
    meter_count: int
    top_consumer: TopConsumerSummary | None
    monthly_trend: list[MonthlyConsumption]
    meters: list[MeterRangeRow]


class DatabaseRow(BaseModel):
    """A meter with its all-time consumption across the stored history."""

    id: int | None
    name: str
    account: str | None
    type: str | None
    label: str | None = None
    zone: str | None = None
    total_consumption: Decimal
    total_cost: Decimal


class MeterDatabase(BaseModel):
    """All meters of a domain with all-time totals."""

    months: list[str]
    currency: str
    meters: list[DatabaseRow]


class LevelTotalsOut(BaseModel):
    """Consumption per water hierarchy level."""

    a1: Decimal
    a2: Decimal
    a3: Decimal
    a4: Decimal


class LevelCountsOut(BaseModel):
    """Meter counts per water hierarchy label."""

    total: int
    l1: int
    l2: int
    l3: int
    l4: int
    dc: int


class StageLossesOut(BaseModel):
    """Inter-level water losses."""

    stage1: Decimal
    stage2: Decimal
    stage3: Decimal
    total: Decimal
    stage1_pct: Decimal
    stage2_pct: Decimal
    stage3_pct: Decimal
    total_pct: Decimal


class MonthlyLoss(BaseModel):
    """Level totals and losses for one month of the range."""

    month: str
    levels: LevelTotalsOut
    losses: StageLossesOut


class WaterOverview(BaseModel):
    """Water hierarchy overview for a range."""

    range: SelectedRange
    currency: str
    unit_rate: Decimal
    loss_rate: Decimal
    total_consumption: Decimal
    total_cost: Decimal
    meter_count: int
    counts: LevelCountsOut
    levels: LevelTotalsOut
    losses: StageLossesOut
    top_consumer: TopConsumerSummary | None
    monthly: list[MonthlyLoss]


class ZoneMeter(BaseModel):
    """A meter of a zone with its range consumption."""

    id: int | None
    name: str
    account: str | None
    label: str | None
    type: str | None
    consumption: Decimal


class ZoneMonthlyPoint(BaseModel):
    """Zone bulk, building total and loss for one month."""

    month: str
    bulk: Decimal
    individual: Decimal
    loss: Decimal


class ZoneAnalysisOut(BaseModel):
    """Zone bulk versus building meters for a range."""

    zone: str
    range: SelectedRange
    bulk_total: Decimal
    individual_total: Decimal
    loss: Decimal
    loss_pct: Decimal
    efficiency: Decimal
    bulk_meters: list[ZoneMeter]
    individual_meters: list[ZoneMeter]
    monthly: list[ZoneMonthlyPoint]


class WaterTypeConsumption(BaseModel):
    """Water consumption grouped by type for a range."""

    range: SelectedRange
    types: list[CategoryConsumption]
