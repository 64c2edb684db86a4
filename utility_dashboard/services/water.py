"""Water dashboard service: hierarchy losses, zones and types."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from utility_dashboard.core.config import settings
from utility_dashboard.models.enums import Domain
from utility_dashboard.schemas.dashboard import (
    LevelCountsOut,
    LevelTotalsOut,
    MeterDatabase,
    MonthlyLoss,
    StageLossesOut,
    WaterOverview,
    WaterTypeConsumption,
    ZoneAnalysisOut,
    ZoneMeter,
    ZoneMonthlyPoint,
)
from utility_dashboard.services.aggregation import consumption_by_category, record_total
from utility_dashboard.services.domains import DomainConfig, water_config
from utility_dashboard.services.hierarchy import (
    LevelTotals,
    StageLosses,
    available_zones,
    zone_analysis,
)
from utility_dashboard.services.meters import load_snapshot
from utility_dashboard.services.months import MonthRange
from utility_dashboard.services.presentation import (
    category_series,
    meter_database,
    resolve_range,
    selected_range,
    top_consumer_summary,
)
from utility_dashboard.services.records import MeterRecord
from utility_dashboard.services.session import DashboardSession


def _levels_out(levels: LevelTotals) -> LevelTotalsOut:
    return LevelTotalsOut(a1=levels.a1, a2=levels.a2, a3=levels.a3, a4=levels.a4)


def _losses_out(losses: StageLosses) -> StageLossesOut:
    return StageLossesOut(
        stage1=losses.stage1,
        stage2=losses.stage2,
        stage3=losses.stage3,
        total=losses.total,
        stage1_pct=losses.stage1_pct,
        stage2_pct=losses.stage2_pct,
        stage3_pct=losses.stage3_pct,
        total_pct=losses.total_pct,
    )


def _zone_meter(record: MeterRecord, config: DomainConfig, month_range: MonthRange) -> ZoneMeter:
    return ZoneMeter(
        id=record.id,
        name=record.name,
        account=record.account,
        label=record.label,
        type=record.type,
        consumption=record_total(record, config.months, month_range),
    )


def get_overview(db: Session, start: int | None, end: int | None) -> WaterOverview:
    """Level totals, stage losses and the monthly loss trend."""
    config = water_config()
    month_range = resolve_range(config.months, start, end)
    session = DashboardSession(config, load_snapshot(db, Domain.WATER), month_range=month_range)
    summary = session.summary
    hierarchy = summary.hierarchy
    if hierarchy is None or config.loss_rate is None:
        raise RuntimeError("Water domain is configured without a loss rate")

    c = hierarchy.counts
    return WaterOverview(
        range=selected_range(config.months, month_range),
        currency=settings.CURRENCY,
        unit_rate=config.unit_rate,
        loss_rate=config.loss_rate,
        total_consumption=summary.total_consumption,
        total_cost=summary.total_cost,
        meter_count=summary.meter_count,
        counts=LevelCountsOut(total=c.total, l1=c.l1, l2=c.l2, l3=c.l3, l4=c.l4, dc=c.dc),
        levels=_levels_out(hierarchy.levels),
        losses=_losses_out(hierarchy.losses),
        top_consumer=top_consumer_summary(summary.top_consumer, config),
        monthly=[
            MonthlyLoss(
                month=point.label,
                levels=_levels_out(point.levels),
                losses=_losses_out(point.losses),
            )
            for point in hierarchy.monthly
        ],
    )


def get_zones(db: Session) -> list[str]:
    """Zones present in the data, first-seen order."""
    return available_zones(load_snapshot(db, Domain.WATER))


def get_zone_analysis(
    db: Session,
    zone: str,
    start: int | None,
    end: int | None,
) -> ZoneAnalysisOut:
    """Zone bulk meter versus building meters over the range, with a monthly trend."""
    config = water_config()
    month_range = resolve_range(config.months, start, end)
    records = load_snapshot(db, Domain.WATER)
    if zone not in available_zones(records):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Zone '{zone}' not found",
        )

    analysis = zone_analysis(records, zone, config.months, month_range)
    return ZoneAnalysisOut(
        zone=zone,
        range=selected_range(config.months, month_range),
        bulk_total=analysis.bulk_total,
        individual_total=analysis.individual_total,
        loss=analysis.loss,
        loss_pct=analysis.loss_pct,
        efficiency=analysis.efficiency,
        bulk_meters=[_zone_meter(r, config, month_range) for r in analysis.bulk_meters],
        individual_meters=[
            _zone_meter(r, config, month_range) for r in analysis.individual_meters
        ],
        monthly=[
            ZoneMonthlyPoint(
                month=point.label,
                bulk=point.bulk,
                individual=point.individual,
                loss=point.loss,
            )
            for point in analysis.monthly
        ],
    )


def get_consumption_by_type(
    db: Session,
    start: int | None,
    end: int | None,
) -> WaterTypeConsumption:
    """Water consumption grouped by meter type over the range."""
    config = water_config()
    month_range = resolve_range(config.months, start, end)
    records = load_snapshot(db, Domain.WATER)
    return WaterTypeConsumption(
        range=selected_range(config.months, month_range),
        types=category_series(consumption_by_category(records, config.months, month_range)),
    )


def get_database(db: Session) -> MeterDatabase:
    """Every water meter with its all-time totals."""
    config = water_config()
    return meter_database(load_snapshot(db, Domain.WATER), config, settings.CURRENCY)
