"""Electricity dashboard service."""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from utility_dashboard.core.config import settings
from utility_dashboard.models.enums import Domain
from utility_dashboard.schemas.dashboard import (
    ElectricityOverview,
    MeterDatabase,
    MeterRangeRow,
    TypeAnalysis,
)
from utility_dashboard.services.aggregation import (
    available_categories,
    cost,
    record_total,
)
from utility_dashboard.services.domains import electricity_config
from utility_dashboard.services.meters import load_snapshot
from utility_dashboard.services.presentation import (
    category_series,
    meter_database,
    monthly_trend,
    resolve_range,
    selected_range,
    top_consumer_summary,
)
from utility_dashboard.services.session import DashboardSession


def get_overview(db: Session, start: int | None, end: int | None) -> ElectricityOverview:
    """Totals, cost, meter count, top consumer and trends for all meters."""
    config = electricity_config()
    month_range = resolve_range(config.months, start, end)
    records = load_snapshot(db, Domain.ELECTRICITY)
    session = DashboardSession(config, records, month_range=month_range)
    summary = session.summary

    return ElectricityOverview(
        range=selected_range(config.months, month_range),
        currency=settings.CURRENCY,
        unit_rate=config.unit_rate,
        total_consumption=summary.total_consumption,
        total_cost=summary.total_cost,
        meter_count=summary.meter_count,
        top_consumer=top_consumer_summary(summary.top_consumer, config),
        monthly_trend=monthly_trend(summary.monthly),
        consumption_by_type=category_series(summary.by_type),
    )


def get_types(db: Session) -> list[str]:
    """Meter types present in the data, first-seen order."""
    return available_categories(load_snapshot(db, Domain.ELECTRICITY))


def get_type_analysis(
    db: Session,
    meter_type: str,
    start: int | None,
    end: int | None,
) -> TypeAnalysis:
    """The overview cards and a per-meter table restricted to one type."""
    config = electricity_config()
    month_range = resolve_range(config.months, start, end)
    session = DashboardSession(
        config,
        load_snapshot(db, Domain.ELECTRICITY),
        category=meter_type,
        month_range=month_range,
    )
    records = session.active_records()
    if not records:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No electricity meters of type '{meter_type}'",
        )
    summary = session.summary

    rows = []
    for record in records:
        consumption = record_total(record, config.months, month_range)
        rows.append(
            MeterRangeRow(
                id=record.id,
                name=record.name,
                account=record.account,
                type=record.type,
                consumption=consumption,
                cost=cost(consumption, config.unit_rate),
            )
        )

    return TypeAnalysis(
        type=meter_type,
        range=selected_range(config.months, month_range),
        currency=settings.CURRENCY,
        unit_rate=config.unit_rate,
        total_consumption=summary.total_consumption,
        total_cost=summary.total_cost,
        meter_count=summary.meter_count,
        top_consumer=top_consumer_summary(summary.top_consumer, config),
        monthly_trend=monthly_trend(summary.monthly),
        meters=rows,
    )


def get_database(db: Session) -> MeterDatabase:
    """Every electricity meter with its all-time totals."""
    config = electricity_config()
    return meter_database(load_snapshot(db, Domain.ELECTRICITY), config, settings.CURRENCY)
