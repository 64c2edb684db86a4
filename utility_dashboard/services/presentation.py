"""Shape engine results into dashboard response schemas."""

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status

from utility_dashboard.schemas.dashboard import (
    CategoryConsumption,
    DatabaseRow,
    MeterDatabase,
    MonthlyConsumption,
    MonthOption,
    SelectedRange,
    TopConsumerSummary,
)
from utility_dashboard.services.aggregation import (
    CategoryTotal,
    MonthlyPoint,
    all_time_total,
    cost,
)
from utility_dashboard.services.domains import DomainConfig
from utility_dashboard.services.months import InvalidMonthRange, MonthIndex, MonthRange
from utility_dashboard.services.records import MeterRecord
from utility_dashboard.services.top_consumer import TopConsumer

log = logging.getLogger(__name__)


def resolve_range(index: MonthIndex, start: int | None, end: int | None) -> MonthRange:
    """Build the requested range, defaulting to the whole index.

    Out-of-bounds positions are rejected with 400 rather than clamped.
    """
    full = index.full_range()
    try:
        return index.make_range(
            full.start if start is None else start,
            full.end if end is None else end,
        )
    except InvalidMonthRange as e:
        log.warning("Rejected month range start=%s end=%s: %s", start, end, e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


def month_options(index: MonthIndex) -> list[MonthOption]:
    return [
        MonthOption(index=i, label=label, key=key)
        for i, (label, key) in enumerate(zip(index.labels, index.keys, strict=True))
    ]


def selected_range(index: MonthIndex, month_range: MonthRange) -> SelectedRange:
    return SelectedRange(
        start=month_range.start,
        end=month_range.end,
        start_label=index.label_at(month_range.start),
        end_label=index.label_at(month_range.end),
        is_empty=month_range.is_empty,
    )


def top_consumer_summary(
    leader: TopConsumer | None,
    config: DomainConfig,
) -> TopConsumerSummary | None:
    if leader is None:
        return None
    return TopConsumerSummary(
        id=leader.record.id,
        name=leader.record.name,
        account=leader.record.account,
        type=leader.record.type,
        consumption=leader.consumption,
        cost=cost(leader.consumption, config.unit_rate),
    )


def monthly_trend(points: Iterable[MonthlyPoint]) -> list[MonthlyConsumption]:
    return [MonthlyConsumption(month=p.label, consumption=p.consumption) for p in points]


def category_series(totals: Iterable[CategoryTotal]) -> list[CategoryConsumption]:
    return [
        CategoryConsumption(name=t.name, value=t.consumption, meter_count=t.meter_count)
        for t in totals
    ]


def meter_database(
    records: Iterable[MeterRecord],
    config: DomainConfig,
    currency: str,
) -> MeterDatabase:
    """All-time totals per meter over the full stored history.

    This view ignores any selected range on purpose; it is not the range
    total.
    """
    rows = []
    for record in records:
        total = all_time_total(record, config.history)
        rows.append(
            DatabaseRow(
                id=record.id,
                name=record.name,
                account=record.account,
                type=record.type,
                label=record.label,
                zone=record.zone,
                total_consumption=total,
                total_cost=cost(total, config.unit_rate),
            )
        )
    return MeterDatabase(months=list(config.history.labels), currency=currency, meters=rows)
