"""
Fallback resolution for every dashboard read.

Each fetch either reaches the live data source and returns ``Live(view)`` or
serves the matching demo fixture as ``Fallback(view, reason)``. Read paths
never raise past this module. The one mutation (payment status update)
validates its input and reports failures to the caller, except in demo mode
where it only touches a copy of the demo fixture.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
import logging
from typing import Any, Callable, Dict, List, Optional

import data_provider
from config import PaymentRules
from rental_engine import (
    compute_dashboard_stats,
    current_month_start,
    merge_flats_with_active_lease,
    merge_payments_with_context,
    merge_leases_with_context,
    merge_tenants_with_active_lease,
)
from rental_engine.exceptions import ConnectivityError, PaymentNotFoundError, ValidationError
from rental_engine.schemas import LeaseStatus, PaymentView
from storage.service import DataSource

logger = logging.getLogger(__name__)

FLATS = "flats"
TENANTS = "tenants"
LEASES = "leases"
PAYMENTS = "rent_payments"


class FallbackReason(str, Enum):
    """Why demo data was served."""
    NOT_CONFIGURED = "not_configured"
    CONNECTIVITY_ERROR = "connectivity_error"


@dataclass
class Live:
    """Data read from the live source."""
    data: Any

    @property
    def is_demo(self) -> bool:
        return False


@dataclass
class Fallback:
    """Demo data served in place of the live source."""
    data: Any
    reason: FallbackReason
    detail: str = ""

    @property
    def is_demo(self) -> bool:
        return True


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_instant(value: str) -> datetime:
    # fromisoformat does not accept a trailing Z before Python 3.11
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return datetime.fromisoformat(text)


class FallbackResolver:
    """
    Wraps a DataSource with the demo-mode substitution policy.

    Usage:
        resolver = FallbackResolver(SupabaseDataSource(config.data_source))
        result = resolver.fetch_flats()
        if result.is_demo:
            ...show the demo banner...
    """

    def __init__(
        self,
        source: DataSource,
        payment_rules: Optional[PaymentRules] = None,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.source = source
        self.payment_rules = payment_rules or PaymentRules()
        self.clock = clock

    # ------------------------------------------------------------------
    # Resolution core
    # ------------------------------------------------------------------

    def _probe(self, collection: str) -> None:
        """One-row read that fails fast before the real queries run."""
        rows = self.source.query(collection, select="id", limit=1)
        if rows is None:
            raise ConnectivityError(f"Connection probe on '{collection}' returned no data")

    def _resolve(
        self,
        label: str,
        probe_collection: str,
        live_fetch: Callable[[], Any],
        mock_fetch: Callable[[], Any]
    ):
        if not self.source.is_configured():
            logger.info(f"[RESOLVER] {label}: data source not configured, serving demo data")
            return Fallback(mock_fetch(), FallbackReason.NOT_CONFIGURED)

        try:
            self._probe(probe_collection)
            data = live_fetch()
        except Exception as e:
            # Boundary: no data source fault reaches the presentation layer
            logger.error(f"[RESOLVER] {label}: live fetch failed, serving demo data: {e}", exc_info=True)
            return Fallback(mock_fetch(), FallbackReason.CONNECTIVITY_ERROR, str(e))

        return Live(data)

    # ------------------------------------------------------------------
    # Live reads
    # ------------------------------------------------------------------

    def _live_dashboard_stats(self):
        flats = self.source.query(FLATS, select="status")
        payments = self.source.query(
            PAYMENTS,
            select="status,amount",
            filters=[("due_date", "gte", current_month_start(self.clock()))]
        )
        return compute_dashboard_stats(flats, payments)

    def _live_flats(self):
        flats = self.source.query(FLATS, order=[("flat_number", True)])
        active_leases = self.source.query(
            LEASES,
            select="flat_id,tenant:tenants!inner(full_name)",
            filters=[("status", "eq", LeaseStatus.ACTIVE.value)]
        )
        lookup = [
            {
                "flat_id": row.get("flat_id"),
                "tenant_full_name": (row.get("tenant") or {}).get("full_name"),
            }
            for row in active_leases
        ]
        return merge_flats_with_active_lease(flats, lookup)

    def _live_payments(self):
        payments = self.source.query(PAYMENTS, order=[("due_date", False)])
        leases = self.source.query(LEASES)
        flats = self.source.query(FLATS, select="id,flat_number")
        tenants = self.source.query(TENANTS, select="id,full_name")
        return merge_payments_with_context(payments, leases, flats, tenants)

    def _live_leases(self):
        leases = self.source.query(LEASES, order=[("start_date", False)])
        flats = self.source.query(FLATS, select="id,flat_number,floor")
        tenants = self.source.query(TENANTS, select="id,full_name,email,phone")
        return merge_leases_with_context(leases, flats, tenants)

    def _live_tenants(self):
        tenants = self.source.query(TENANTS, order=[("full_name", True)])
        leases = self.source.query(LEASES, filters=[("status", "eq", LeaseStatus.ACTIVE.value)])
        flats = self.source.query(FLATS, select="id,flat_number,monthly_rent")
        return merge_tenants_with_active_lease(tenants, leases, flats)

    # ------------------------------------------------------------------
    # Public fetch operations
    # ------------------------------------------------------------------

    def fetch_dashboard_stats(self):
        """Dashboard statistics for the current month."""
        return self._resolve("dashboard stats", FLATS, self._live_dashboard_stats,
                             data_provider.get_mock_dashboard_stats)

    def fetch_flats(self):
        """All flats ordered by flat number, with active lease tenant."""
        return self._resolve("flats", FLATS, self._live_flats, data_provider.get_mock_flats)

    def fetch_payments(self):
        """All payments, most recent due date first, with lease context."""
        return self._resolve("payments", PAYMENTS, self._live_payments, data_provider.get_mock_payments)

    def fetch_leases(self):
        """All leases, most recent start first, with flat and tenant summaries."""
        return self._resolve("leases", LEASES, self._live_leases, data_provider.get_mock_leases)

    def fetch_tenants(self):
        """Tenants holding an active lease, ordered by name."""
        return self._resolve("tenants", TENANTS, self._live_tenants, data_provider.get_mock_tenants)

    def check_connection(self):
        """Connection status for the settings page: Live(True) or Fallback(False, reason)."""
        return self._resolve("connection check", FLATS, lambda: True, lambda: False)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _validate_update(self, payment_id: str, status: str, payment_date: Optional[str]) -> None:
        if not payment_id or not str(payment_id).strip():
            raise ValidationError("Payment id is required")

        if status not in self.payment_rules.allowed_statuses:
            raise ValidationError(
                f"Invalid payment status '{status}'. "
                f"Expected one of: {', '.join(self.payment_rules.allowed_statuses)}"
            )

        if payment_date is not None:
            if not isinstance(payment_date, str):
                raise ValidationError("payment_date must be an ISO-8601 string")
            try:
                _parse_instant(payment_date)
            except ValueError:
                raise ValidationError(f"payment_date '{payment_date}' is not a valid ISO-8601 instant")

    def _payment_context(self, payment_row: Dict[str, Any]) -> PaymentView:
        """Rebuild lease/flat/tenant context for a freshly updated row."""
        leases: List[Dict[str, Any]] = []
        flats: List[Dict[str, Any]] = []
        tenants: List[Dict[str, Any]] = []
        try:
            leases = self.source.query(LEASES, filters=[("id", "eq", payment_row.get("lease_id"))])
            if leases:
                flats = self.source.query(
                    FLATS, select="id,flat_number", filters=[("id", "eq", leases[0].get("flat_id"))]
                )
                tenants = self.source.query(
                    TENANTS, select="id,full_name", filters=[("id", "eq", leases[0].get("tenant_id"))]
                )
        except ConnectivityError as e:
            # The write itself succeeded; report it without context rather than as a failure
            logger.warning(f"[RESOLVER] Payment {payment_row.get('id')} updated, context unavailable: {e}")

        return merge_payments_with_context([payment_row], leases, flats, tenants)[0]

    def _demo_update(self, payment_id: str, status: str, payment_date: Optional[str]) -> PaymentView:
        updated = data_provider.apply_demo_payment_update(payment_id, status, payment_date)
        if updated is None:
            raise PaymentNotFoundError(f"Payment '{payment_id}' not found")
        logger.info(f"[RESOLVER] Payment {payment_id} set to {status} (demo mode, not persisted)")
        return updated

    def update_payment_status(self, payment_id: str, status: str, payment_date: Optional[str] = None):
        """
        Change a payment's status.

        Marking a payment paid stamps ``payment_date`` (the supplied value or
        the current instant); any other status clears it.

        Returns:
            Live(PaymentView) after a real write, or Fallback(PaymentView) in
            demo mode (not configured, or the source failed its probe) where
            only a copy of the fixture is changed

        Raises:
            ValidationError: Unknown status, missing id or malformed date
            PaymentNotFoundError: No payment with that id
            ConnectivityError: The probe passed but the live write failed
        """
        self._validate_update(payment_id, status, payment_date)

        if status == self.payment_rules.paid_status:
            resolved_date = payment_date or self.clock().isoformat()
        else:
            resolved_date = None

        if not self.source.is_configured():
            return Fallback(
                self._demo_update(payment_id, status, resolved_date),
                FallbackReason.NOT_CONFIGURED
            )

        # A failed probe means the reads served demo rows, so the update targets them too
        try:
            self._probe(PAYMENTS)
        except Exception as e:
            logger.error(f"[RESOLVER] Payment update: data source unreachable, applying to demo data: {e}", exc_info=True)
            return Fallback(
                self._demo_update(payment_id, status, resolved_date),
                FallbackReason.CONNECTIVITY_ERROR,
                str(e)
            )

        rows = self.source.update(
            PAYMENTS,
            {"status": status, "payment_date": resolved_date},
            [("id", "eq", payment_id)]
        )
        if not rows:
            raise PaymentNotFoundError(f"Payment '{payment_id}' not found")

        logger.info(f"[RESOLVER] Payment {payment_id} set to {status}")
        return Live(self._payment_context(rows[0]))
