"""Per-domain configuration and the combined range summary.

Electricity and water share one aggregation core. They differ only in the
month indices, the unit rate, and whether the water hierarchy is layered on
top.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from utility_dashboard.core.config import Settings, settings
from utility_dashboard.models.enums import Domain
from utility_dashboard.services.aggregation import (
    CategoryTotal,
    MonthlyPoint,
    consumption_by_category,
    cost,
    monthly_series,
    total_consumption,
)
from utility_dashboard.services.hierarchy import (
    LevelCounts,
    LevelTotals,
    MonthlyLossPoint,
    StageLosses,
    compute_losses,
    level_counts,
    level_totals,
    monthly_loss_breakdown,
)
from utility_dashboard.services.months import (
    ELECTRICITY_HISTORY,
    ELECTRICITY_MONTHS,
    WATER_HISTORY,
    WATER_MONTHS,
    MonthIndex,
    MonthRange,
)
from utility_dashboard.services.records import MeterRecord
from utility_dashboard.services.top_consumer import TopConsumer, top_consumer


@dataclass(frozen=True)
class DomainConfig:
    """Fixed configuration of one metered domain."""

    domain: Domain
    months: MonthIndex  # range-selectable slots
    history: MonthIndex  # full stored history
    unit_rate: Decimal
    loss_rate: Decimal | None = None  # set for hierarchical domains only

    @property
    def hierarchical(self) -> bool:
        return self.loss_rate is not None


def electricity_config(cfg: Settings = settings) -> DomainConfig:
    return DomainConfig(
        domain=Domain.ELECTRICITY,
        months=ELECTRICITY_MONTHS,
        history=ELECTRICITY_HISTORY,
        unit_rate=cfg.ELECTRICITY_UNIT_RATE,
    )


def water_config(cfg: Settings = settings) -> DomainConfig:
    return DomainConfig(
        domain=Domain.WATER,
        months=WATER_MONTHS,
        history=WATER_HISTORY,
        unit_rate=cfg.WATER_UNIT_RATE,
        loss_rate=cfg.WATER_LOSS_RATE,
    )


def config_for(domain: Domain, cfg: Settings = settings) -> DomainConfig:
    """Configuration for a domain."""
    if domain == Domain.WATER:
        return water_config(cfg)
    return electricity_config(cfg)


@dataclass(frozen=True)
class HierarchySummary:
    """Water hierarchy view of a range."""

    levels: LevelTotals
    counts: LevelCounts
    losses: StageLosses
    monthly: list[MonthlyLossPoint]


@dataclass(frozen=True)
class RangeSummary:
    """Every aggregate shown for one range and record subset."""

    month_range: MonthRange
    total_consumption: Decimal
    total_cost: Decimal
    meter_count: int
    top_consumer: TopConsumer | None
    monthly: list[MonthlyPoint]
    by_type: list[CategoryTotal]
    hierarchy: HierarchySummary | None = None


def summarize(
    records: Sequence[MeterRecord],
    config: DomainConfig,
    month_range: MonthRange,
) -> RangeSummary:
    """Compute all range aggregates for a record subset.

    Stage losses are computed once from the range level totals. The monthly
    loss trend is a separate per-month computation, not a re-aggregation.
    """
    config.months.validate(month_range)
    consumption = total_consumption(records, config.months, month_range)

    hierarchy = None
    if config.loss_rate is not None:
        levels = level_totals(records, config.months, month_range)
        hierarchy = HierarchySummary(
            levels=levels,
            counts=level_counts(records),
            losses=compute_losses(levels, config.loss_rate),
            monthly=monthly_loss_breakdown(
                records, config.months, month_range, config.loss_rate
            ),
        )

    return RangeSummary(
        month_range=month_range,
        total_consumption=consumption,
        total_cost=cost(consumption, config.unit_rate),
        meter_count=len(records),
        top_consumer=top_consumer(records, config.months, month_range),
        monthly=monthly_series(records, config.months, month_range),
        by_type=consumption_by_category(records, config.months, month_range),
        hierarchy=hierarchy,
    )
