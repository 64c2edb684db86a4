"""Water distribution hierarchy: level totals and stage losses.

Levels L1..L4 are independently metered sets of records. A1..A4 are their
range totals. Losses are accounting differences between adjacent levels:

    stage1 = max(0, A1 - A2)
    stage2 = max(0, A2 - A3)
    stage3 = A3 * loss_rate

Percentages divide by the upstream level total of each stage (A1 for the
overall loss). A zero denominator gives a percentage of exactly zero.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from utility_dashboard.models.enums import WaterLevel
from utility_dashboard.services.aggregation import (
    filter_by_category,
    sum_keys,
    total_consumption,
)
from utility_dashboard.services.months import MonthIndex, MonthRange
from utility_dashboard.services.records import ZERO, MeterRecord

log = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class LevelTotals:
    """Consumption per hierarchy level."""

    a1: Decimal = ZERO
    a2: Decimal = ZERO
    a3: Decimal = ZERO
    a4: Decimal = ZERO


@dataclass(frozen=True)
class LevelCounts:
    """Number of meters per hierarchy label."""

    total: int = 0
    l1: int = 0
    l2: int = 0
    l3: int = 0
    l4: int = 0
    dc: int = 0


@dataclass(frozen=True)
class StageLosses:
    """Inter-level losses and their percentages."""

    stage1: Decimal = ZERO
    stage2: Decimal = ZERO
    stage3: Decimal = ZERO
    total: Decimal = ZERO
    stage1_pct: Decimal = ZERO
    stage2_pct: Decimal = ZERO
    stage3_pct: Decimal = ZERO
    total_pct: Decimal = ZERO


@dataclass(frozen=True)
class MonthlyLossPoint:
    """Level totals and losses for a single month."""

    label: str
    key: str
    levels: LevelTotals
    losses: StageLosses


@dataclass(frozen=True)
class ZoneMonthPoint:
    """Zone bulk, building total and loss for a single month."""

    label: str
    key: str
    bulk: Decimal
    individual: Decimal
    loss: Decimal


@dataclass(frozen=True)
class ZoneAnalysis:
    """Zone bulk meter versus the building meters downstream of it."""

    zone: str
    bulk_total: Decimal
    individual_total: Decimal
    loss: Decimal
    loss_pct: Decimal
    efficiency: Decimal
    bulk_meters: list[MeterRecord] = field(default_factory=list)
    individual_meters: list[MeterRecord] = field(default_factory=list)
    monthly: list[ZoneMonthPoint] = field(default_factory=list)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or zero when whole is zero."""
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def by_level(records: Iterable[MeterRecord], level: WaterLevel) -> list[MeterRecord]:
    """Records on one hierarchy level, in input order."""
    return filter_by_category(records, level.value, field="label")


def level_counts(records: Sequence[MeterRecord]) -> LevelCounts:
    """Count meters per hierarchy label."""
    return LevelCounts(
        total=len(records),
        l1=len(by_level(records, WaterLevel.L1)),
        l2=len(by_level(records, WaterLevel.L2)),
        l3=len(by_level(records, WaterLevel.L3)),
        l4=len(by_level(records, WaterLevel.L4)),
        dc=len(by_level(records, WaterLevel.DC)),
    )


def level_totals(
    records: Sequence[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
) -> LevelTotals:
    """A1..A4 over the range."""
    return LevelTotals(
        a1=total_consumption(by_level(records, WaterLevel.L1), index, month_range),
        a2=total_consumption(by_level(records, WaterLevel.L2), index, month_range),
        a3=total_consumption(by_level(records, WaterLevel.L3), index, month_range),
        a4=total_consumption(by_level(records, WaterLevel.L4), index, month_range),
    )


def compute_losses(levels: LevelTotals, loss_rate: Decimal) -> StageLosses:
    """Stage losses for a set of level totals.

    Stages 1 and 2 are clamped at zero since metering error can make a
    downstream level read higher than its upstream one. Stage 3 models
    building-level slack as a fixed share of A3, not as A3 - A4.
    """
    stage1 = max(ZERO, levels.a1 - levels.a2)
    stage2 = max(ZERO, levels.a2 - levels.a3)
    stage3 = max(ZERO, levels.a3 * loss_rate)
    total = stage1 + stage2 + stage3

    if levels.a2 > levels.a1 or levels.a3 > levels.a2:
        log.debug("Downstream level exceeds upstream, clamping loss: %s", levels)

    return StageLosses(
        stage1=stage1,
        stage2=stage2,
        stage3=stage3,
        total=total,
        stage1_pct=percentage(stage1, levels.a1),
        stage2_pct=percentage(stage2, levels.a2),
        stage3_pct=percentage(stage3, levels.a3),
        total_pct=percentage(total, levels.a1),
    )


def monthly_loss_breakdown(
    records: Sequence[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
    loss_rate: Decimal,
) -> list[MonthlyLossPoint]:
    """Apply the loss formulas independently to each month of the range."""
    index.validate(month_range)
    levels = {level: by_level(records, level) for level in WaterLevel}

    points: list[MonthlyLossPoint] = []
    for i in month_range.positions():
        key = index.key_at(i)
        totals = LevelTotals(
            a1=sum((r.value(key) for r in levels[WaterLevel.L1]), ZERO),
            a2=sum((r.value(key) for r in levels[WaterLevel.L2]), ZERO),
            a3=sum((r.value(key) for r in levels[WaterLevel.L3]), ZERO),
            a4=sum((r.value(key) for r in levels[WaterLevel.L4]), ZERO),
        )
        points.append(
            MonthlyLossPoint(
                label=index.label_at(i),
                key=key,
                levels=totals,
                losses=compute_losses(totals, loss_rate),
            )
        )
    return points


def available_zones(records: Iterable[MeterRecord]) -> list[str]:
    """Distinct zones in first-seen order."""
    zones: dict[str, None] = {}
    for r in records:
        if r.zone:
            zones.setdefault(r.zone, None)
    return list(zones)


def zone_analysis(
    records: Sequence[MeterRecord],
    zone: str,
    index: MonthIndex,
    month_range: MonthRange,
) -> ZoneAnalysis:
    """Compare a zone's bulk (L2) meters with its building (L3) meters."""
    keys = index.keys_in(month_range)
    in_zone = [r for r in records if r.zone == zone]
    bulk_meters = by_level(in_zone, WaterLevel.L2)
    individual_meters = by_level(in_zone, WaterLevel.L3)

    bulk_total = sum((sum_keys(r, keys) for r in bulk_meters), ZERO)
    individual_total = sum((sum_keys(r, keys) for r in individual_meters), ZERO)
    loss = max(ZERO, bulk_total - individual_total)

    monthly: list[ZoneMonthPoint] = []
    for i in month_range.positions():
        key = index.key_at(i)
        bulk = sum((r.value(key) for r in bulk_meters), ZERO)
        individual = sum((r.value(key) for r in individual_meters), ZERO)
        monthly.append(
            ZoneMonthPoint(
                label=index.label_at(i),
                key=key,
                bulk=bulk,
                individual=individual,
                loss=max(ZERO, bulk - individual),
            )
        )

    return ZoneAnalysis(
        zone=zone,
        bulk_total=bulk_total,
        individual_total=individual_total,
        loss=loss,
        loss_pct=percentage(loss, bulk_total),
        efficiency=percentage(individual_total, bulk_total),
        bulk_meters=bulk_meters,
        individual_meters=individual_meters,
        monthly=monthly,
    )
