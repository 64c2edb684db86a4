"""Range-scoped consumption aggregation.

Every function here is pure: it takes records, a month index and a range,
and returns totals. Two aggregation scopes exist and stay separate:

* range totals (`total_consumption`, `record_total`) sum the months a user
  selected on the domain's range index;
* all-time totals (`all_time_total`) sum every month of the stored history,
  regardless of any selection.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from utility_dashboard.services.months import MonthIndex, MonthRange
from utility_dashboard.services.records import ZERO, MeterRecord

UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class MonthlyPoint:
    """Consumption for one month of a range."""

    label: str
    key: str
    consumption: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Range consumption for one category."""

    name: str
    consumption: Decimal
    meter_count: int


def filter_by_category(
    records: Iterable[MeterRecord],
    value: str,
    field: str = "type",
) -> list[MeterRecord]:
    """Records whose `field` equals `value`, in input order."""
    return [r for r in records if getattr(r, field) == value]


def available_categories(records: Iterable[MeterRecord], field: str = "type") -> list[str]:
    """Distinct non-empty values of `field`, in first-seen order."""
    seen: dict[str, None] = {}
    for r in records:
        value = getattr(r, field)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def sum_keys(record: MeterRecord, keys: Iterable[str]) -> Decimal:
    """Sum a record's readings over the given month keys."""
    return sum((record.value(k) for k in keys), ZERO)


def record_total(record: MeterRecord, index: MonthIndex, month_range: MonthRange) -> Decimal:
    """Consumption of one record over the range (inclusive)."""
    return sum_keys(record, index.keys_in(month_range))


def total_consumption(
    records: Iterable[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
) -> Decimal:
    """Consumption of all records over the range."""
    keys = index.keys_in(month_range)
    return sum((sum_keys(r, keys) for r in records), ZERO)


def cost(consumption: Decimal, unit_rate: Decimal) -> Decimal:
    """Cost of a consumption at a fixed unit rate."""
    return consumption * unit_rate


def all_time_total(record: MeterRecord, history: MonthIndex) -> Decimal:
    """Consumption of one record over its entire stored history."""
    return sum_keys(record, history.keys)


def monthly_series(
    records: Sequence[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
) -> list[MonthlyPoint]:
    """Per-month consumption across all records for each month in the range."""
    index.validate(month_range)
    return [
        MonthlyPoint(
            label=index.label_at(i),
            key=index.key_at(i),
            consumption=sum((r.value(index.key_at(i)) for r in records), ZERO),
        )
        for i in month_range.positions()
    ]


def consumption_by_category(
    records: Iterable[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
    field: str = "type",
) -> list[CategoryTotal]:
    """Range consumption grouped by category, largest first.

    Records without a category are grouped under "Unknown". Equal totals keep
    first-seen order.
    """
    keys = index.keys_in(month_range)
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for r in records:
        name = getattr(r, field) or UNKNOWN_CATEGORY
        totals[name] = totals.get(name, ZERO) + sum_keys(r, keys)
        counts[name] = counts.get(name, 0) + 1

    grouped = [CategoryTotal(name, total, counts[name]) for name, total in totals.items()]
    # sorted() is stable, so ties stay in first-seen order
    return sorted(grouped, key=lambda c: c.consumption, reverse=True)
