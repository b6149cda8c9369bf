"""
Dashboard statistics calculation.
"""
import math

import pandas as pd
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .schemas import DashboardStats, FlatStatus, PaymentStatus, OUTSTANDING_PAYMENT_STATUSES


def compute_dashboard_stats(
    flats: List[Dict[str, Any]],
    payments: List[Dict[str, Any]]
) -> DashboardStats:
    """
    Calculate occupancy and collection figures from raw rows.

    Args:
        flats: Flat rows, each with at least a ``status``
        payments: Payment rows with ``status`` and ``amount``, already limited
            by the caller to the current month's due dates

    Returns:
        DashboardStats with exact counts and sums over the inputs
    """
    stats = DashboardStats()

    # Empty frames have no columns at all, so guard before touching them
    if flats:
        flat_df = pd.DataFrame(flats)
        flat_status = flat_df["status"] if "status" in flat_df.columns else pd.Series(dtype="object")

        stats.total_flats = int(len(flat_df))
        stats.occupied_flats = int((flat_status == FlatStatus.OCCUPIED.value).sum())
        stats.vacant_flats = int((flat_status == FlatStatus.VACANT.value).sum())
        stats.maintenance_flats = int((flat_status == FlatStatus.MAINTENANCE.value).sum())

    if payments:
        payment_df = pd.DataFrame(payments)
        if "status" not in payment_df.columns:
            payment_df["status"] = None
        if "amount" not in payment_df.columns:
            payment_df["amount"] = 0
        amounts = pd.to_numeric(payment_df["amount"], errors="coerce").fillna(0)
        payment_status = payment_df["status"]

        stats.pending_payments = int((payment_status == PaymentStatus.PENDING.value).sum())
        stats.overdue_payments = int((payment_status == PaymentStatus.OVERDUE.value).sum())
        stats.total_rent_collected = float(amounts[payment_status == PaymentStatus.PAID.value].sum())
        stats.total_rent_pending = float(amounts[payment_status.isin(OUTSTANDING_PAYMENT_STATUSES)].sum())

    return stats


def occupancy_rate(stats: DashboardStats) -> int:
    """Rounded occupancy percentage; 0 when there are no flats."""
    if stats.total_flats <= 0:
        return 0
    # Halves round up (62.5 -> 63), not to even
    return int(math.floor(stats.occupied_flats / stats.total_flats * 100 + 0.5))


def current_month_start(now: Optional[datetime] = None) -> str:
    """ISO instant for midnight UTC on the first day of the current month."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    start = now.astimezone(timezone.utc).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start.isoformat()
