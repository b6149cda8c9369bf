"""Tests for dashboard statistics."""

from datetime import datetime, timedelta, timezone

import pytest

from rental_engine.metrics import compute_dashboard_stats, current_month_start, occupancy_rate
from rental_engine.schemas import DashboardStats


class TestComputeDashboardStats:
    """Tests for compute_dashboard_stats."""

    def test_flat_counts(self) -> None:
        """Counts follow the declared flat status."""
        flats = [
            {"status": "occupied"},
            {"status": "vacant"},
            {"status": "maintenance"},
            {"status": "occupied"},
        ]

        stats = compute_dashboard_stats(flats, [])

        assert stats.total_flats == 4
        assert stats.occupied_flats == 2
        assert stats.vacant_flats == 1
        assert stats.maintenance_flats == 1

    def test_payment_figures(self) -> None:
        """Collected sums paid rows, pending sums pending and overdue rows."""
        payments = [
            {"status": "paid", "amount": 500},
            {"status": "pending", "amount": 300},
            {"status": "overdue", "amount": 200},
        ]

        stats = compute_dashboard_stats([], payments)

        assert stats.total_rent_collected == 500
        assert stats.total_rent_pending == 500
        assert stats.pending_payments == 1
        assert stats.overdue_payments == 1

    def test_empty_inputs(self) -> None:
        """No rows gives all-zero stats."""
        assert compute_dashboard_stats([], []) == DashboardStats()

    def test_amounts_as_strings(self) -> None:
        """Numeric strings are summed, unparseable amounts count as zero."""
        payments = [
            {"status": "paid", "amount": "1200.50"},
            {"status": "paid", "amount": "n/a"},
            {"status": "pending", "amount": None},
        ]

        stats = compute_dashboard_stats([], payments)

        assert stats.total_rent_collected == pytest.approx(1200.50)
        assert stats.total_rent_pending == 0
        assert stats.pending_payments == 1

    def test_unknown_flat_status_counted_in_total_only(self) -> None:
        """A status outside the known set still counts towards the total."""
        stats = compute_dashboard_stats([{"status": "renovating"}, {"status": "vacant"}], [])

        assert stats.total_flats == 2
        assert stats.occupied_flats + stats.vacant_flats + stats.maintenance_flats == 1

    def test_missing_columns(self) -> None:
        """Rows without status or amount columns do not raise."""
        stats = compute_dashboard_stats([{"id": "f1"}], [{"id": "p1"}])

        assert stats.total_flats == 1
        assert stats.occupied_flats == 0
        assert stats.total_rent_collected == 0

    def test_partition_properties(self) -> None:
        """Status counts never exceed the totals they partition."""
        flats = [{"status": s} for s in ("occupied", "vacant", "maintenance", "occupied", "vacant")]
        payments = [
            {"status": "paid", "amount": 10},
            {"status": "paid", "amount": 20},
            {"status": "pending", "amount": 30},
        ]

        stats = compute_dashboard_stats(flats, payments)

        assert stats.occupied_flats + stats.vacant_flats + stats.maintenance_flats == stats.total_flats
        assert stats.total_rent_collected + stats.total_rent_pending == 60
        assert stats.total_rent_collected >= 0
        assert stats.total_rent_pending >= 0

    def test_serialises_camel_case(self) -> None:
        """API keys are camelCase."""
        stats = compute_dashboard_stats([{"status": "occupied"}], [{"status": "paid", "amount": 5}])

        data = stats.to_dict()

        assert data["totalFlats"] == 1
        assert data["occupiedFlats"] == 1
        assert data["totalRentCollected"] == 5


class TestOccupancyRate:
    """Tests for occupancy_rate."""

    def test_no_flats(self) -> None:
        """Zero flats gives zero, never a division error."""
        assert occupancy_rate(DashboardStats()) == 0

    def test_rounds(self) -> None:
        """Percentage is rounded half up to a whole number."""
        assert occupancy_rate(DashboardStats(total_flats=3, occupied_flats=2)) == 67
        assert occupancy_rate(DashboardStats(total_flats=8, occupied_flats=5)) == 63


class TestCurrentMonthStart:
    """Tests for current_month_start."""

    def test_first_of_month_utc(self) -> None:
        now = datetime(2024, 6, 15, 18, 45, 12, tzinfo=timezone.utc)

        assert current_month_start(now) == "2024-06-01T00:00:00+00:00"

    def test_converts_to_utc(self) -> None:
        """A local time already in the next month in UTC uses the UTC month."""
        now = datetime(2024, 6, 30, 22, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert current_month_start(now) == "2024-07-01T00:00:00+00:00"

    def test_naive_treated_as_utc(self) -> None:
        assert current_month_start(datetime(2024, 2, 29, 23, 59)) == "2024-02-01T00:00:00+00:00"
