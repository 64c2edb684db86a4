"""Range selection state and full recompute on change.

A slider produces many intermediate ranges while dragging. Those land in the
pending slot of `RangeSelection`; only `commit()` moves a range into the
committed slot that aggregates are computed from. Whatever debounces the
user input decides when to commit.
"""

import logging
from collections.abc import Sequence

from utility_dashboard.services.aggregation import filter_by_category
from utility_dashboard.services.domains import DomainConfig, RangeSummary, summarize
from utility_dashboard.services.months import MonthIndex, MonthRange
from utility_dashboard.services.records import MeterRecord

log = logging.getLogger(__name__)


class RangeSelection:
    """Pending and committed month ranges over one month index."""

    def __init__(self, index: MonthIndex, initial: MonthRange | None = None) -> None:
        self.index = index
        self._committed = index.validate(initial) if initial is not None else index.full_range()
        self._pending: MonthRange | None = None

    @property
    def committed(self) -> MonthRange:
        return self._committed

    @property
    def pending(self) -> MonthRange | None:
        return self._pending

    def propose(self, start: int, end: int) -> MonthRange:
        """Record an intermediate range; rejected if out of bounds."""
        self._pending = self.index.make_range(start, end)
        return self._pending

    def commit(self) -> bool:
        """Promote the pending range. Returns False if nothing was pending."""
        if self._pending is None:
            return False
        self._committed, self._pending = self._pending, None
        return True


class DashboardSession:
    """Owns one record snapshot and recomputes aggregates on every change."""

    def __init__(
        self,
        config: DomainConfig,
        records: Sequence[MeterRecord],
        category: str | None = None,
        month_range: MonthRange | None = None,
    ) -> None:
        self.config = config
        self.records: tuple[MeterRecord, ...] = tuple(records)
        self.selection = RangeSelection(config.months, month_range)
        self.category = category
        self.recomputing = False
        self.summary: RangeSummary = self.recompute()

    def select_range(self, start: int, end: int) -> MonthRange:
        """Stage a range change without recomputing."""
        return self.selection.propose(start, end)

    def commit_range(self) -> RangeSummary:
        """Commit the staged range and recompute."""
        if self.selection.commit():
            self.recompute()
        return self.summary

    def set_range(self, start: int, end: int) -> RangeSummary:
        """Stage and commit a range in one step."""
        self.select_range(start, end)
        return self.commit_range()

    def set_category(self, category: str | None) -> RangeSummary:
        """Restrict aggregates to one type, or clear the filter with None."""
        self.category = category
        return self.recompute()

    def active_records(self) -> list[MeterRecord]:
        if self.category is None:
            return list(self.records)
        return filter_by_category(self.records, self.category)

    def recompute(self) -> RangeSummary:
        """Rebuild all aggregates from the full snapshot."""
        self.recomputing = True
        try:
            month_range = self.selection.committed
            log.debug(
                "Recomputing %s aggregates for %s (category=%s)",
                self.config.domain.value,
                month_range,
                self.category,
            )
            self.summary = summarize(self.active_records(), self.config, month_range)
        finally:
            self.recomputing = False
        return self.summary
