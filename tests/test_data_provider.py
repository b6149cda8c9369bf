"""Tests for the demo fixtures."""

import data_provider
from rental_engine.metrics import occupancy_rate


class TestFixtures:
    """Consistency of the demo data set."""

    def test_dashboard_stats(self) -> None:
        stats = data_provider.get_mock_dashboard_stats()

        assert stats.total_flats == 8
        assert stats.occupied_flats == 5
        assert stats.vacant_flats == 2
        assert stats.maintenance_flats == 1
        assert stats.pending_payments == 2
        assert stats.overdue_payments == 0
        assert stats.total_rent_collected == 5250
        assert stats.total_rent_pending == 3550
        assert occupancy_rate(stats) == 63

    def test_flats_sorted_with_leases(self) -> None:
        flats = data_provider.get_mock_flats()

        numbers = [v.flat.flat_number for v in flats]
        assert numbers == sorted(numbers)
        leased = {v.flat.flat_number for v in flats if v.current_lease is not None}
        assert leased == {"101", "201", "202", "302", "401"}

    def test_payments_have_context(self) -> None:
        payments = data_provider.get_mock_payments()

        due_dates = [p.payment.due_date for p in payments]
        assert due_dates == sorted(due_dates, reverse=True)
        assert all(p.lease is not None and p.tenant_full_name for p in payments)

    def test_leases_and_tenants(self) -> None:
        assert len(data_provider.get_mock_leases()) == len(data_provider.LEASES)
        names = [t.tenant.full_name for t in data_provider.get_mock_tenants()]
        assert names == sorted(names)
        assert "Priya Nair" not in names

    def test_accessors_return_copies(self) -> None:
        flats = data_provider.get_mock_flats()
        flats[0].flat.status = "maintenance"
        first_status = data_provider.MOCK_FLATS[0].flat.status
        flats.clear()

        assert data_provider.get_mock_flats() == data_provider.MOCK_FLATS
        assert first_status == "occupied"
        assert len(data_provider.get_mock_flats()) == 8


class TestApplyDemoPaymentUpdate:
    """Tests for apply_demo_payment_update."""

    def test_returns_updated_copy(self) -> None:
        updated = data_provider.apply_demo_payment_update("payment-004", "paid", "2024-06-20T10:00:00+00:00")

        assert updated.payment.status == "paid"
        assert updated.tenant_full_name == "Chen Wei"
        original = next(p for p in data_provider.MOCK_PAYMENTS if p.payment.id == "payment-004")
        assert original.payment.status == "pending"
        assert original.payment.payment_date is None

    def test_unknown_id(self) -> None:
        assert data_provider.apply_demo_payment_update("nope", "paid", None) is None
