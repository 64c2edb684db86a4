"""Month index and month range handling.

A month index is the fixed, ordered list of billing months a domain stores
readings under. Each slot pairs a display label ("May-24") with its storage
key ("may_24"). Ranges are closed intervals of positions into an index.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass


class InvalidMonthRange(ValueError):
    """Raised when a range addresses a position outside the month index."""


def month_key_for_label(label: str) -> str:
    """Convert a display label to its storage key: "Jan-25" -> "jan_25"."""
    return label.lower().replace("-", "_")


@dataclass(frozen=True)
class MonthRange:
    """Closed interval [start, end] of month index positions.

    An interval with end < start is empty; it is valid and selects nothing.
    """

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def positions(self) -> range:
        """Positions covered by the range, in index order."""
        return range(self.start, self.end + 1)


class MonthIndex(Sequence[str]):
    """Immutable ordered sequence of month storage keys with display labels."""

    def __init__(self, labels: Sequence[str]) -> None:
        self._labels: tuple[str, ...] = tuple(labels)
        self._keys: tuple[str, ...] = tuple(month_key_for_label(lbl) for lbl in self._labels)
        if len(set(self._keys)) != len(self._keys):
            raise ValueError("Month index contains duplicate months")

    def __len__(self) -> int:
        return len(self._keys)

    def __getitem__(self, i):  # type: ignore[override]
        return self._keys[i]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __repr__(self) -> str:
        return f"MonthIndex({list(self._labels)!r})"

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def key_at(self, i: int) -> str:
        """Storage key at position i."""
        return self._keys[self._check_position(i)]

    def label_at(self, i: int) -> str:
        """Display label at position i."""
        return self._labels[self._check_position(i)]

    def full_range(self) -> MonthRange:
        """Range covering every month of the index."""
        return MonthRange(0, len(self) - 1)

    def make_range(self, start: int, end: int) -> MonthRange:
        """Build a validated range over this index.

        Both ends must lie inside the index, even when end < start makes the
        range empty. Out-of-bounds positions are never clamped.
        """
        self._check_position(start)
        self._check_position(end)
        return MonthRange(start, end)

    def validate(self, month_range: MonthRange) -> MonthRange:
        """Check that an existing range fits this index."""
        return self.make_range(month_range.start, month_range.end)

    def keys_in(self, month_range: MonthRange) -> tuple[str, ...]:
        """Storage keys selected by a range, in index order."""
        self.validate(month_range)
        if month_range.is_empty:
            return ()
        return self._keys[month_range.start : month_range.end + 1]

    def labels_in(self, month_range: MonthRange) -> tuple[str, ...]:
        """Display labels selected by a range, in index order."""
        self.validate(month_range)
        if month_range.is_empty:
            return ()
        return self._labels[month_range.start : month_range.end + 1]

    def _check_position(self, i: int) -> int:
        if isinstance(i, bool) or not isinstance(i, int) or not 0 <= i < len(self._keys):
            raise InvalidMonthRange(
                f"Month position {i!r} is outside the index (0..{len(self._keys) - 1})"
            )
        return i


def month_labels(first: str, last: str) -> list[str]:
    """Inclusive list of "Mon-YY" labels between two labels."""
    names = [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ]  # fmt: skip

    def ordinal(label: str) -> int:
        month, year = label.split("-")
        return int(year) * 12 + names.index(month)

    lo, hi = ordinal(first), ordinal(last)
    if hi < lo:
        raise ValueError(f"Month {last} precedes {first}")
    return [f"{names[n % 12]}-{n // 12:02d}" for n in range(lo, hi + 1)]


# Range-selectable slots per domain
ELECTRICITY_MONTHS = MonthIndex(month_labels("May-24", "Jul-24"))
WATER_MONTHS = MonthIndex(month_labels("Jan-25", "Jul-25"))

# Full stored history per domain, used by the all-time (database/export) view
ELECTRICITY_HISTORY = MonthIndex(month_labels("Apr-24", "Jul-25"))
WATER_HISTORY = MonthIndex(month_labels("Jan-24", "Jul-25"))
