"""
Data provider for the Flat Rental Dashboard demo mode.
Static sample data served whenever the live database is unavailable.

The raw rows below follow the entity schema exactly. The view fixtures are
assembled from them once, at import time, so the demo path hands out the
same shapes as the live path without recomputing anything per request.
Accessors always return deep copies; the module constants are never mutated.
"""

from copy import deepcopy

from rental_engine import (
    compute_dashboard_stats,
    merge_flats_with_active_lease,
    merge_payments_with_context,
    merge_leases_with_context,
    merge_tenants_with_active_lease,
)
from rental_engine.schemas import LeaseStatus

MOCK_DATA_VERSION = "2024.06"

# ============================================================================
# MOCK DATA STORAGE
# ============================================================================

FLATS = [
    {
        "id": "flat-101",
        "flat_number": "101",
        "floor": 1,
        "bedrooms": 1,
        "bathrooms": 1,
        "area_sqft": 650,
        "monthly_rent": 1200.00,
        "status": "occupied",
        "description": "Garden-facing one bedroom",
        "created_at": "2023-01-10T09:00:00+00:00"
    },
    {
        "id": "flat-102",
        "flat_number": "102",
        "floor": 1,
        "bedrooms": 2,
        "bathrooms": 1,
        "area_sqft": 850,
        "monthly_rent": 1500.00,
        "status": "vacant",
        "description": "Corner unit with extra storage",
        "created_at": "2023-01-10T09:00:00+00:00"
    },
    {
        "id": "flat-201",
        "flat_number": "201",
        "floor": 2,
        "bedrooms": 2,
        "bathrooms": 2,
        "area_sqft": 900,
        "monthly_rent": 1650.00,
        "status": "occupied",
        "description": "Balcony overlooking the courtyard",
        "created_at": "2023-01-10T09:00:00+00:00"
    },
    {
        "id": "flat-202",
        "flat_number": "202",
        "floor": 2,
        "bedrooms": 3,
        "bathrooms": 2,
        "area_sqft": 1150,
        "monthly_rent": 2100.00,
        "status": "occupied",
        "description": "Family unit, recently renovated kitchen",
        "created_at": "2023-01-10T09:00:00+00:00"
    },
    {
        "id": "flat-301",
        "flat_number": "301",
        "floor": 3,
        "bedrooms": 1,
        "bathrooms": 1,
        "area_sqft": 600,
        "monthly_rent": 1150.00,
        "status": "maintenance",
        "description": "Water damage repairs in progress",
        "created_at": "2023-02-01T09:00:00+00:00"
    },
    {
        "id": "flat-302",
        "flat_number": "302",
        "floor": 3,
        "bedrooms": 2,
        "bathrooms": 1,
        "area_sqft": 820,
        "monthly_rent": 1450.00,
        "status": "occupied",
        "description": "Top floor with skylight",
        "created_at": "2023-02-01T09:00:00+00:00"
    },
    {
        "id": "flat-401",
        "flat_number": "401",
        "floor": 4,
        "bedrooms": 3,
        "bathrooms": 2,
        "area_sqft": 1300,
        "monthly_rent": 2400.00,
        "status": "occupied",
        "description": "Penthouse with rooftop access",
        "created_at": "2023-03-15T09:00:00+00:00"
    },
    {
        "id": "flat-402",
        "flat_number": "402",
        "floor": 4,
        "bedrooms": 2,
        "bathrooms": 2,
        "area_sqft": 980,
        "monthly_rent": 1800.00,
        "status": "vacant",
        "description": "Open-plan living area",
        "created_at": "2023-03-15T09:00:00+00:00"
    }
]

TENANTS = [
    {
        "id": "tenant-001",
        "full_name": "Aisha Khan",
        "email": "aisha.khan@example.com",
        "phone": "555-0101",
        "emergency_contact": "Omar Khan",
        "emergency_phone": "555-0191",
        "id_number": "ID-482913",
        "occupation": "Software Engineer",
        "created_at": "2023-04-01T10:00:00+00:00"
    },
    {
        "id": "tenant-002",
        "full_name": "Daniel Okafor",
        "email": "daniel.okafor@example.com",
        "phone": "555-0102",
        "emergency_contact": "Grace Okafor",
        "emergency_phone": "555-0192",
        "id_number": "ID-593024",
        "occupation": "Nurse",
        "created_at": "2023-05-12T10:00:00+00:00"
    },
    {
        "id": "tenant-003",
        "full_name": "Maria Lopez",
        "email": "maria.lopez@example.com",
        "phone": "555-0103",
        "emergency_contact": "Carlos Lopez",
        "emergency_phone": "555-0193",
        "id_number": "ID-604135",
        "occupation": "Teacher",
        "created_at": "2023-06-20T10:00:00+00:00"
    },
    {
        "id": "tenant-004",
        "full_name": "Chen Wei",
        "email": "chen.wei@example.com",
        "phone": "555-0104",
        "emergency_contact": "Li Wei",
        "emergency_phone": "555-0194",
        "id_number": "ID-715246",
        "occupation": "Accountant",
        "created_at": "2023-08-03T10:00:00+00:00"
    },
    {
        "id": "tenant-005",
        "full_name": "Samuel Brooks",
        "email": "samuel.brooks@example.com",
        "phone": "555-0105",
        "emergency_contact": "Hannah Brooks",
        "emergency_phone": "555-0195",
        "id_number": "ID-826357",
        "occupation": "Graphic Designer",
        "created_at": "2023-09-18T10:00:00+00:00"
    },
    {
        "id": "tenant-006",
        "full_name": "Priya Nair",
        "email": "priya.nair@example.com",
        "phone": "555-0106",
        "emergency_contact": "Arjun Nair",
        "emergency_phone": "555-0196",
        "id_number": "ID-937468",
        "occupation": "Pharmacist",
        "created_at": "2022-11-02T10:00:00+00:00"
    }
]

LEASES = [
    {
        "id": "lease-001",
        "flat_id": "flat-101",
        "tenant_id": "tenant-001",
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
        "monthly_rent": 1200.00,
        "security_deposit": 2400.00,
        "status": "active",
        "created_at": "2023-12-15T10:00:00+00:00"
    },
    {
        "id": "lease-002",
        "flat_id": "flat-201",
        "tenant_id": "tenant-002",
        "start_date": "2024-02-01",
        "end_date": "2025-01-31",
        "monthly_rent": 1650.00,
        "security_deposit": 3300.00,
        "status": "active",
        "created_at": "2024-01-20T10:00:00+00:00"
    },
    {
        "id": "lease-003",
        "flat_id": "flat-202",
        "tenant_id": "tenant-003",
        "start_date": "2023-09-01",
        "end_date": "2024-08-31",
        "monthly_rent": 2100.00,
        "security_deposit": 4200.00,
        "status": "active",
        "created_at": "2023-08-10T10:00:00+00:00"
    },
    {
        "id": "lease-004",
        "flat_id": "flat-302",
        "tenant_id": "tenant-004",
        "start_date": "2024-03-15",
        "end_date": "2025-03-14",
        "monthly_rent": 1450.00,
        "security_deposit": 2900.00,
        "status": "active",
        "created_at": "2024-03-01T10:00:00+00:00"
    },
    {
        "id": "lease-005",
        "flat_id": "flat-401",
        "tenant_id": "tenant-005",
        "start_date": "2024-04-01",
        "end_date": "2025-03-31",
        "monthly_rent": 2400.00,
        "security_deposit": 4800.00,
        "status": "active",
        "created_at": "2024-03-20T10:00:00+00:00"
    },
    {
        "id": "lease-006",
        "flat_id": "flat-102",
        "tenant_id": "tenant-006",
        "start_date": "2023-01-01",
        "end_date": "2023-12-31",
        "monthly_rent": 1450.00,
        "security_deposit": 2900.00,
        "status": "expired",
        "created_at": "2022-12-10T10:00:00+00:00"
    }
]

PAYMENTS = [
    {
        "id": "payment-001",
        "lease_id": "lease-001",
        "amount": 1200.00,
        "payment_date": "2024-06-01T14:20:00+00:00",
        "due_date": "2024-06-01T00:00:00+00:00",
        "payment_method": "bank_transfer",
        "status": "paid",
        "notes": "",
        "created_at": "2024-05-25T08:00:00+00:00"
    },
    {
        "id": "payment-002",
        "lease_id": "lease-002",
        "amount": 1650.00,
        "payment_date": "2024-06-03T09:05:00+00:00",
        "due_date": "2024-06-01T00:00:00+00:00",
        "payment_method": "card",
        "status": "paid",
        "notes": "",
        "created_at": "2024-05-25T08:00:00+00:00"
    },
    {
        "id": "payment-003",
        "lease_id": "lease-003",
        "amount": 2100.00,
        "payment_date": None,
        "due_date": "2024-06-01T00:00:00+00:00",
        "payment_method": "bank_transfer",
        "status": "pending",
        "notes": "Tenant requested a one week extension",
        "created_at": "2024-05-25T08:00:00+00:00"
    },
    {
        "id": "payment-004",
        "lease_id": "lease-004",
        "amount": 1450.00,
        "payment_date": None,
        "due_date": "2024-06-01T00:00:00+00:00",
        "payment_method": "cash",
        "status": "pending",
        "notes": "",
        "created_at": "2024-05-25T08:00:00+00:00"
    },
    {
        "id": "payment-005",
        "lease_id": "lease-005",
        "amount": 2400.00,
        "payment_date": "2024-06-01T11:45:00+00:00",
        "due_date": "2024-06-01T00:00:00+00:00",
        "payment_method": "bank_transfer",
        "status": "paid",
        "notes": "",
        "created_at": "2024-05-25T08:00:00+00:00"
    },
    {
        "id": "payment-006",
        "lease_id": "lease-003",
        "amount": 2100.00,
        "payment_date": None,
        "due_date": "2024-05-01T00:00:00+00:00",
        "payment_method": "bank_transfer",
        "status": "overdue",
        "notes": "Reminder sent on 2024-05-10",
        "created_at": "2024-04-25T08:00:00+00:00"
    },
    {
        "id": "payment-007",
        "lease_id": "lease-001",
        "amount": 1200.00,
        "payment_date": "2024-05-02T16:30:00+00:00",
        "due_date": "2024-05-01T00:00:00+00:00",
        "payment_method": "bank_transfer",
        "status": "paid",
        "notes": "",
        "created_at": "2024-04-25T08:00:00+00:00"
    },
    {
        "id": "payment-008",
        "lease_id": "lease-004",
        "amount": 1450.00,
        "payment_date": "2024-05-05T10:10:00+00:00",
        "due_date": "2024-05-01T00:00:00+00:00",
        "payment_method": "cash",
        "status": "paid",
        "notes": "Paid late, no fee applied",
        "created_at": "2024-04-25T08:00:00+00:00"
    }
]

# Current-month rows used for the dashboard figures
_CURRENT_MONTH_DUE = "2024-06-01T00:00:00+00:00"

# ============================================================================
# PRE-AGGREGATED FIXTURES
# ============================================================================

MOCK_DASHBOARD_STATS = compute_dashboard_stats(
    FLATS,
    [p for p in PAYMENTS if p["due_date"] >= _CURRENT_MONTH_DUE]
)

MOCK_FLATS = merge_flats_with_active_lease(
    sorted(FLATS, key=lambda f: f["flat_number"]),
    [
        {
            "flat_id": lease["flat_id"],
            "tenant_full_name": next(t["full_name"] for t in TENANTS if t["id"] == lease["tenant_id"])
        }
        for lease in LEASES if lease["status"] == LeaseStatus.ACTIVE.value
    ]
)

MOCK_PAYMENTS = merge_payments_with_context(
    sorted(PAYMENTS, key=lambda p: p["due_date"], reverse=True),
    LEASES,
    FLATS,
    TENANTS
)

MOCK_LEASES = merge_leases_with_context(
    sorted(LEASES, key=lambda l: l["start_date"], reverse=True),
    FLATS,
    TENANTS
)

MOCK_TENANTS = merge_tenants_with_active_lease(
    sorted(TENANTS, key=lambda t: t["full_name"]),
    LEASES,
    FLATS
)


# ============================================================================
# ACCESSORS
# ============================================================================

def get_mock_dashboard_stats():
    """
    Returns the demo dashboard statistics.

    Returns:
        DashboardStats: Figures for the demo month
    """
    return deepcopy(MOCK_DASHBOARD_STATS)


def get_mock_flats():
    """
    Returns demo flats with their active lease tenant.

    Returns:
        list: FlatView objects sorted by flat number
    """
    return deepcopy(MOCK_FLATS)


def get_mock_payments():
    """
    Returns demo payments with lease, flat and tenant context.

    Returns:
        list: PaymentView objects, most recent due date first
    """
    return deepcopy(MOCK_PAYMENTS)


def get_mock_leases():
    """Returns demo leases, most recent start date first."""
    return deepcopy(MOCK_LEASES)


def get_mock_tenants():
    """Returns demo tenants holding an active lease, by name."""
    return deepcopy(MOCK_TENANTS)


def apply_demo_payment_update(payment_id, status, payment_date):
    """
    Applies a status change to a copy of the demo payment.

    The fixture itself is left untouched so every request keeps seeing the
    same demo data.

    Args:
        payment_id (str): The payment identifier
        status (str): New payment status
        payment_date (str or None): Payment instant to record

    Returns:
        PaymentView: The updated copy, or None if the payment is unknown
    """
    view = next((p for p in MOCK_PAYMENTS if p.payment.id == payment_id), None)
    if view is None:
        return None

    updated = deepcopy(view)
    updated.payment.status = status
    updated.payment.payment_date = payment_date
    return updated
