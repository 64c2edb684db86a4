"""Top consumer selection."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from utility_dashboard.services.aggregation import sum_keys
from utility_dashboard.services.months import MonthIndex, MonthRange
from utility_dashboard.services.records import MeterRecord


@dataclass(frozen=True)
class TopConsumer:
    """The record with the highest range consumption."""

    record: MeterRecord
    consumption: Decimal


def top_consumer(
    records: Iterable[MeterRecord],
    index: MonthIndex,
    month_range: MonthRange,
) -> TopConsumer | None:
    """Find the record with the strictly highest consumption over the range.

    The first record reaching the maximum wins ties. Only positive totals
    qualify: with no data, an empty range, or all-zero readings there is no
    top consumer and None is returned.
    """
    keys = index.keys_in(month_range)
    leader: TopConsumer | None = None
    for record in records:
        consumption = sum_keys(record, keys)
        if consumption <= 0:
            continue
        if leader is None or consumption > leader.consumption:
            leader = TopConsumer(record=record, consumption=consumption)
    return leader
