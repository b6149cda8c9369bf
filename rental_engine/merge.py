"""
Join logic that assembles presentation views from normalized rows.

Every function here is read-only and keeps the order of its primary input;
ordering is the data source's job. Missing references never raise, they
leave the corresponding relation unset.
"""
from typing import Any, Dict, List

from .schemas import (
    CurrentLease,
    Flat,
    FlatView,
    Lease,
    LeaseFlatSummary,
    LeaseStatus,
    LeaseTenantSummary,
    LeaseView,
    PaymentLeaseContext,
    PaymentView,
    RentPayment,
    Tenant,
    TenantLeaseSummary,
    TenantView,
)


def _index_by_id(rows: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Map id -> row, keeping the first row seen for a duplicated id."""
    index = {}
    for row in rows or []:
        key = str(row.get("id"))
        if key not in index:
            index[key] = row
    return index


def merge_flats_with_active_lease(
    flats: List[Dict[str, Any]],
    active_leases_with_tenant: List[Dict[str, Any]]
) -> List[FlatView]:
    """
    Attach each flat's active lease tenant name.

    Args:
        flats: Flat rows, already sorted by flat_number
        active_leases_with_tenant: Entries with ``flat_id`` and ``tenant_full_name``

    Returns:
        One FlatView per flat, in input order. Flats without a matching entry
        have no current_lease. If several entries share a flat_id the first one
        wins and the rest are ignored.
    """
    first_lease_by_flat = {}
    for entry in active_leases_with_tenant or []:
        flat_id = str(entry.get("flat_id"))
        if flat_id not in first_lease_by_flat:
            first_lease_by_flat[flat_id] = entry

    views = []
    for row in flats or []:
        flat = Flat.from_row(row)
        entry = first_lease_by_flat.get(flat.id)
        current_lease = None
        if entry is not None:
            current_lease = CurrentLease(tenant_full_name=entry.get("tenant_full_name") or "")
        views.append(FlatView(flat=flat, current_lease=current_lease))

    return views


def merge_payments_with_context(
    payments: List[Dict[str, Any]],
    leases: List[Dict[str, Any]],
    flats: List[Dict[str, Any]],
    tenants: List[Dict[str, Any]]
) -> List[PaymentView]:
    """
    Join payment -> lease -> flat number and lease -> tenant name.

    Args:
        payments: Payment rows, already sorted by due_date descending
        leases: Lease rows referenced by the payments
        flats: Flat rows (at least id and flat_number)
        tenants: Tenant rows (at least id and full_name)

    Returns:
        One PaymentView per payment in input order
    """
    lease_index = _index_by_id(leases)
    flat_index = _index_by_id(flats)
    tenant_index = _index_by_id(tenants)

    views = []
    for row in payments or []:
        payment = RentPayment.from_row(row)
        lease_row = lease_index.get(payment.lease_id)
        context = None
        if lease_row is not None:
            lease = Lease.from_row(lease_row)
            flat_row = flat_index.get(lease.flat_id)
            tenant_row = tenant_index.get(lease.tenant_id)
            context = PaymentLeaseContext(
                lease=lease,
                flat_number=flat_row.get("flat_number") if flat_row else None,
                tenant_full_name=tenant_row.get("full_name") if tenant_row else None,
            )
        views.append(PaymentView(payment=payment, lease=context))

    return views


def merge_leases_with_context(
    leases: List[Dict[str, Any]],
    flats: List[Dict[str, Any]],
    tenants: List[Dict[str, Any]]
) -> List[LeaseView]:
    """Attach flat and tenant summaries to each lease, keeping lease order."""
    flat_index = _index_by_id(flats)
    tenant_index = _index_by_id(tenants)

    views = []
    for row in leases or []:
        lease = Lease.from_row(row)
        flat_row = flat_index.get(lease.flat_id)
        tenant_row = tenant_index.get(lease.tenant_id)
        views.append(LeaseView(
            lease=lease,
            flat=LeaseFlatSummary(
                flat_number=str(flat_row.get("flat_number") or ""),
                floor=int(flat_row.get("floor") or 0),
            ) if flat_row else None,
            tenant=LeaseTenantSummary(
                full_name=tenant_row.get("full_name") or "",
                email=tenant_row.get("email") or "",
                phone=tenant_row.get("phone") or "",
            ) if tenant_row else None,
        ))

    return views


def merge_tenants_with_active_lease(
    tenants: List[Dict[str, Any]],
    leases: List[Dict[str, Any]],
    flats: List[Dict[str, Any]]
) -> List[TenantView]:
    """
    Pair tenants with their active lease.

    Only tenants holding an active lease are returned, in tenant input order.
    The first active lease per tenant wins.
    """
    flat_index = _index_by_id(flats)

    first_lease_by_tenant = {}
    for row in leases or []:
        if row.get("status") != LeaseStatus.ACTIVE.value:
            continue
        tenant_id = str(row.get("tenant_id"))
        if tenant_id not in first_lease_by_tenant:
            first_lease_by_tenant[tenant_id] = row

    views = []
    for row in tenants or []:
        tenant = Tenant.from_row(row)
        lease_row = first_lease_by_tenant.get(tenant.id)
        if lease_row is None:
            continue
        lease = Lease.from_row(lease_row)
        flat_row = flat_index.get(lease.flat_id)
        rent = flat_row.get("monthly_rent") if flat_row else None
        views.append(TenantView(
            tenant=tenant,
            lease=TenantLeaseSummary(
                lease=lease,
                flat_number=flat_row.get("flat_number") if flat_row else None,
                flat_monthly_rent=float(rent) if rent is not None else None,
            ),
        ))

    return views
