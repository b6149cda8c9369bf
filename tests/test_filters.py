"""Tests for payment list filtering."""

import pytest

from rental_engine.exceptions import ValidationError
from rental_engine.filters import PaymentFilter, filter_payments, payment_status_counts
from rental_engine.merge import merge_payments_with_context


@pytest.fixture
def payments(payment_rows, lease_rows, flat_rows, tenant_rows):
    return merge_payments_with_context(payment_rows, lease_rows, flat_rows, tenant_rows)


class TestFilterPayments:
    """Tests for filter_payments."""

    def test_all_and_empty_search_is_identity(self, payments) -> None:
        result = filter_payments(payments, "all", "")

        assert result == payments
        assert result is not payments

    def test_status(self, payments) -> None:
        result = filter_payments(payments, "overdue")

        assert [p.payment.id for p in result] == ["p3"]

    def test_search_tenant_case_insensitive(self, payments) -> None:
        result = filter_payments(payments, "all", "bOB")

        assert [p.payment.id for p in result] == ["p2", "p3"]

    def test_search_flat_number(self, payments) -> None:
        result = filter_payments(payments, "all", "101")

        assert [p.payment.id for p in result] == ["p1"]

    def test_filters_commute(self, payments) -> None:
        """Status then search equals search then status."""
        a = filter_payments(filter_payments(payments, "pending"), "all", "stone")
        b = filter_payments(filter_payments(payments, "all", "stone"), "pending")

        assert a == b

    def test_missing_context_never_matches_search(self, payment_rows) -> None:
        """Payments without lease context only pass when the search is empty."""
        views = merge_payments_with_context(payment_rows, [], [], [])

        assert filter_payments(views, "all", "alice") == []
        assert len(filter_payments(views, "all", "")) == 3

    def test_unknown_status(self, payments) -> None:
        with pytest.raises(ValidationError):
            filter_payments(payments, "refunded")


class TestPaymentStatusCounts:
    """Tests for payment_status_counts."""

    def test_counts(self, payments) -> None:
        assert payment_status_counts(payments) == {"all": 3, "pending": 1, "paid": 1, "overdue": 1}

    def test_empty(self) -> None:
        assert payment_status_counts([]) == {"all": 0, "pending": 0, "paid": 0, "overdue": 0}


class TestPaymentFilter:
    """Tests for PaymentFilter."""

    def test_defaults_inactive(self) -> None:
        assert PaymentFilter().is_active is False

    def test_from_args(self) -> None:
        f = PaymentFilter.from_args({"status": " Paid ", "q": " 101 "})

        assert f == PaymentFilter(status="paid", search="101")
        assert f.is_active is True

    def test_from_args_unknown_status(self) -> None:
        """Unknown statuses from a query string fall back to all."""
        assert PaymentFilter.from_args({"status": "bogus"}).status == "all"

    def test_apply(self, payments) -> None:
        assert [p.payment.id for p in PaymentFilter(status="paid").apply(payments)] == ["p1"]

    def test_immutable(self) -> None:
        f = PaymentFilter()

        with pytest.raises(AttributeError):
            f.status = "paid"
