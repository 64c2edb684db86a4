"""Tests for the water hierarchy resolver."""

from decimal import Decimal

import pytest

from utility_dashboard.services.hierarchy import (
    LevelTotals,
    available_zones,
    compute_losses,
    level_counts,
    level_totals,
    monthly_loss_breakdown,
    percentage,
    zone_analysis,
)
from utility_dashboard.services.months import MonthIndex, MonthRange
from utility_dashboard.services.records import MeterRecord

LOSS_RATE = Decimal("0.003")


def _meter(name: str, label: str, zone: str | None = None, **readings: str | int) -> MeterRecord:
    """Helper: build a water record from month-key keyword readings."""
    return MeterRecord(
        name=name,
        label=label,
        zone=zone,
        readings={k: Decimal(str(v)) for k, v in readings.items()},
    )


@pytest.fixture
def network() -> list[MeterRecord]:
    """A small network: one source, two zones, buildings and apartments."""
    return [
        _meter("Main Bulk (NAMA)", "L1", "Main Bulk", jan_25=1000, feb_25=1200, mar_25=1100),
        _meter("Zone 8 Bulk", "L2", "Zone_08", jan_25=500, feb_25=600, mar_25=520),
        _meter("Zone 3A Bulk", "L2", "Zone_03_(A)", jan_25=400, feb_25=450, mar_25=430),
        _meter("Z8-11", "L3", "Zone_08", jan_25=250, feb_25=310, mar_25=260),
        _meter("Z8-13", "L3", "Zone_08", jan_25=200, feb_25=240, mar_25="215.5"),
        _meter("D-44 Building", "L3", "Zone_03_(A)", jan_25=350, feb_25=390, mar_25=377),
        _meter("Z3-44(1A)", "L4", "Zone_03_(A)", jan_25=120, feb_25=130, mar_25=140),
        _meter("Hotel", "DC", "Direct Connection", jan_25=900, feb_25=950, mar_25=999),
    ]


class TestComputeLosses:
    """Unit tests for stage loss formulas."""

    def test_reference_scenario(self) -> None:
        """Test A1=1000, A2=900, A3=800 with a 0.3% building loss rate."""
        losses = compute_losses(
            LevelTotals(a1=Decimal("1000"), a2=Decimal("900"), a3=Decimal("800")),
            LOSS_RATE,
        )
        assert losses.stage1 == Decimal("100")
        assert losses.stage1_pct == Decimal("10")
        assert losses.stage2 == Decimal("100")
        assert losses.stage2_pct.quantize(Decimal("0.1")) == Decimal("11.1")
        assert losses.stage3 == Decimal("2.4")
        assert losses.stage3_pct == Decimal("0.3")
        assert losses.total == Decimal("202.4")
        assert losses.total_pct == Decimal("20.24")

    def test_stage3_ignores_a4(self) -> None:
        """Test that stage 3 is a share of A3, not a comparison with A4."""
        with_a4 = compute_losses(
            LevelTotals(a1=Decimal("10"), a2=Decimal("10"), a3=Decimal("1000"), a4=Decimal("1")),
            LOSS_RATE,
        )
        assert with_a4.stage3 == Decimal("3")

    @pytest.mark.parametrize(
        "a1,a2,a3",
        [
            ("100", "500", "50"),
            ("100", "50", "900"),
            ("0", "10", "20"),
            ("1e9", "2e9", "3e9"),
        ],
    )
    def test_losses_never_negative(self, a1: str, a2: str, a3: str) -> None:
        """Test that losses stay non-negative when downstream exceeds upstream."""
        losses = compute_losses(
            LevelTotals(a1=Decimal(a1), a2=Decimal(a2), a3=Decimal(a3)),
            LOSS_RATE,
        )
        assert losses.stage1 >= 0
        assert losses.stage2 >= 0
        assert losses.stage3 >= 0
        assert losses.total >= 0

    def test_zero_denominators_give_zero_percent(self) -> None:
        """Test that zero level totals give exactly zero percentages."""
        losses = compute_losses(LevelTotals(), LOSS_RATE)
        assert losses.stage1_pct == 0
        assert losses.stage2_pct == 0
        assert losses.stage3_pct == 0
        assert losses.total_pct == 0
        assert not losses.total_pct.is_nan()

    def test_zero_a1_with_downstream_data(self) -> None:
        """Test that a missing source meter still yields finite percentages."""
        losses = compute_losses(
            LevelTotals(a1=Decimal("0"), a2=Decimal("300"), a3=Decimal("100")),
            LOSS_RATE,
        )
        assert losses.stage1 == 0
        assert losses.stage1_pct == 0
        assert losses.total_pct == 0
        assert losses.stage2_pct.quantize(Decimal("0.01")) == Decimal("66.67")

    def test_percentage_guard(self) -> None:
        assert percentage(Decimal("5"), Decimal("0")) == 0
        assert percentage(Decimal("5"), Decimal("20")) == Decimal("25")


class TestLevelTotals:
    """Unit tests for level classification and totals."""

    def test_level_totals(self, quarter_index: MonthIndex, network) -> None:
        levels = level_totals(network, quarter_index, MonthRange(0, 0))
        assert levels == LevelTotals(
            a1=Decimal("1000"),
            a2=Decimal("900"),
            a3=Decimal("800"),
            a4=Decimal("120"),
        )

    def test_direct_connections_excluded(self, quarter_index: MonthIndex, network) -> None:
        """Test that DC meters are counted but not part of A1..A4."""
        counts = level_counts(network)
        assert (counts.total, counts.l1, counts.l2, counts.l3, counts.l4, counts.dc) == (
            8,
            1,
            2,
            3,
            1,
            1,
        )
        levels = level_totals(network, quarter_index, MonthRange(0, 2))
        assert levels.a1 == Decimal("3300")

    def test_empty_range(self, quarter_index: MonthIndex, network) -> None:
        """Test that an empty range gives zero levels and zero losses."""
        levels = level_totals(network, quarter_index, MonthRange(2, 1))
        assert levels == LevelTotals()
        losses = compute_losses(levels, LOSS_RATE)
        assert losses.total == 0
        assert losses.total_pct == 0


class TestMonthlyBreakdown:
    """Unit tests for per-month loss computation."""

    def test_one_point_per_month(self, quarter_index: MonthIndex, network) -> None:
        points = monthly_loss_breakdown(network, quarter_index, MonthRange(1, 2), LOSS_RATE)
        assert [p.label for p in points] == ["Feb-25", "Mar-25"]
        assert points[0].levels.a1 == Decimal("1200")
        assert points[0].losses.stage1 == Decimal("150")

    def test_losses_computed_per_month(self, quarter_index: MonthIndex) -> None:
        """Test that each month clamps independently rather than netting out."""
        records = [
            _meter("Source", "L1", jan_25=100, feb_25=100),
            _meter("Zone", "L2", jan_25=150, feb_25=40),
        ]
        points = monthly_loss_breakdown(records, quarter_index, MonthRange(0, 1), LOSS_RATE)
        assert [p.losses.stage1 for p in points] == [Decimal("0"), Decimal("60")]

        range_levels = level_totals(records, quarter_index, MonthRange(0, 1))
        assert compute_losses(range_levels, LOSS_RATE).stage1 == Decimal("10")

    def test_stage3_monthly_sum_matches_range(self, quarter_index: MonthIndex, network) -> None:
        """Test that summing monthly stage 3 losses equals the range stage 3 loss."""
        month_range = MonthRange(0, 2)
        points = monthly_loss_breakdown(network, quarter_index, month_range, LOSS_RATE)
        monthly_stage3 = sum((p.losses.stage3 for p in points), Decimal("0"))

        range_losses = compute_losses(
            level_totals(network, quarter_index, month_range),
            LOSS_RATE,
        )
        assert monthly_stage3 == range_losses.stage3

    def test_empty_range_has_no_points(self, quarter_index: MonthIndex, network) -> None:
        assert monthly_loss_breakdown(network, quarter_index, MonthRange(1, 0), LOSS_RATE) == []


class TestZoneAnalysis:
    """Unit tests for zone bulk versus building meters."""

    def test_zone_analysis(self, quarter_index: MonthIndex, network) -> None:
        analysis = zone_analysis(network, "Zone_08", quarter_index, MonthRange(0, 0))
        assert analysis.bulk_total == Decimal("500")
        assert analysis.individual_total == Decimal("450")
        assert analysis.loss == Decimal("50")
        assert analysis.loss_pct == Decimal("10")
        assert analysis.efficiency == Decimal("90")
        assert [m.name for m in analysis.bulk_meters] == ["Zone 8 Bulk"]
        assert [m.name for m in analysis.individual_meters] == ["Z8-11", "Z8-13"]

    def test_zone_loss_clamped(self, quarter_index: MonthIndex) -> None:
        records = [
            _meter("Bulk", "L2", "Z", jan_25=100),
            _meter("Villa", "L3", "Z", jan_25=130),
        ]
        analysis = zone_analysis(records, "Z", quarter_index, MonthRange(0, 0))
        assert analysis.loss == 0
        assert analysis.efficiency == Decimal("130")

    def test_zone_without_bulk(self, quarter_index: MonthIndex) -> None:
        """Test that a zone with no bulk reading reports zero percentages."""
        records = [_meter("Villa", "L3", "Z", jan_25=30)]
        analysis = zone_analysis(records, "Z", quarter_index, MonthRange(0, 2))
        assert analysis.loss_pct == 0
        assert analysis.efficiency == 0

    def test_zone_monthly_trend(self, quarter_index: MonthIndex, network) -> None:
        """Test that each month of the range gets its own bulk, building and loss values."""
        analysis = zone_analysis(network, "Zone_08", quarter_index, MonthRange(0, 2))
        assert [p.label for p in analysis.monthly] == ["Jan-25", "Feb-25", "Mar-25"]
        assert [p.bulk for p in analysis.monthly] == [
            Decimal("500"),
            Decimal("600"),
            Decimal("520"),
        ]
        assert [p.individual for p in analysis.monthly] == [
            Decimal("450"),
            Decimal("550"),
            Decimal("475.5"),
        ]
        assert [p.loss for p in analysis.monthly] == [Decimal("50"), Decimal("50"), Decimal("44.5")]
        assert sum((p.loss for p in analysis.monthly), Decimal("0")) == analysis.loss

    def test_zone_monthly_loss_clamped(self, quarter_index: MonthIndex) -> None:
        records = [
            _meter("Bulk", "L2", "Z", jan_25=100, feb_25=100),
            _meter("Villa", "L3", "Z", jan_25=130, feb_25=40),
        ]
        analysis = zone_analysis(records, "Z", quarter_index, MonthRange(0, 1))
        assert [p.loss for p in analysis.monthly] == [Decimal("0"), Decimal("60")]

    def test_zone_monthly_empty_range(self, quarter_index: MonthIndex, network) -> None:
        analysis = zone_analysis(network, "Zone_08", quarter_index, MonthRange(2, 0))
        assert analysis.monthly == []

    def test_available_zones(self, network) -> None:
        assert available_zones(network) == [
            "Main Bulk",
            "Zone_08",
            "Zone_03_(A)",
            "Direct Connection",
        ]
