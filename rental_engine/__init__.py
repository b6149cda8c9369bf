"""
Rental Engine - aggregation core for the flat rental dashboard.
"""
from .exceptions import RentalEngineError, ConnectivityError, ValidationError, PaymentNotFoundError
from .schemas import (
    FlatStatus,
    LeaseStatus,
    PaymentStatus,
    Flat,
    Tenant,
    Lease,
    RentPayment,
    DashboardStats,
    CurrentLease,
    FlatView,
    PaymentLeaseContext,
    PaymentView,
    LeaseView,
    TenantView,
    views_to_dicts,
)
from .metrics import compute_dashboard_stats, occupancy_rate, current_month_start
from .merge import (
    merge_flats_with_active_lease,
    merge_payments_with_context,
    merge_leases_with_context,
    merge_tenants_with_active_lease,
)
from .filters import filter_payments, payment_status_counts, PaymentFilter

__all__ = [
    "RentalEngineError",
    "ConnectivityError",
    "ValidationError",
    "PaymentNotFoundError",
    "FlatStatus",
    "LeaseStatus",
    "PaymentStatus",
    "Flat",
    "Tenant",
    "Lease",
    "RentPayment",
    "DashboardStats",
    "CurrentLease",
    "FlatView",
    "PaymentLeaseContext",
    "PaymentView",
    "LeaseView",
    "TenantView",
    "views_to_dicts",
    "compute_dashboard_stats",
    "occupancy_rate",
    "current_month_start",
    "merge_flats_with_active_lease",
    "merge_payments_with_context",
    "merge_leases_with_context",
    "merge_tenants_with_active_lease",
    "filter_payments",
    "payment_status_counts",
    "PaymentFilter",
]
