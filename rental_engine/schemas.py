"""
Entity schema and view containers for the rental dashboard.

Rows arrive from the data source (or the demo fixtures) as plain dicts. The
dataclasses here give them a typed shape; views combine several entities for
presentation. Relations that may be missing are modelled as Optional fields
and every consumer is expected to check them explicitly.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class FlatStatus(str, Enum):
    """Declared state of a flat."""
    VACANT = "vacant"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class LeaseStatus(str, Enum):
    """Lifecycle state of a lease."""
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"


class PaymentStatus(str, Enum):
    """Collection state of a rent payment."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


PAYMENT_STATUS_VALUES = tuple(s.value for s in PaymentStatus)
OUTSTANDING_PAYMENT_STATUSES = (PaymentStatus.PENDING.value, PaymentStatus.OVERDUE.value)


def _to_float(value: Any) -> float:
    # PostgREST serialises numeric columns as strings in some configurations
    if value is None or value == "":
        return 0.0
    return float(value)


def _to_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    return int(value)


@dataclass
class Flat:
    """A rentable unit."""
    id: str
    flat_number: str
    floor: int = 0
    bedrooms: int = 0
    bathrooms: int = 0
    area_sqft: float = 0.0
    monthly_rent: float = 0.0
    status: str = FlatStatus.VACANT.value
    description: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Flat":
        return cls(
            id=str(row["id"]),
            flat_number=str(row.get("flat_number") or ""),
            floor=_to_int(row.get("floor")),
            bedrooms=_to_int(row.get("bedrooms")),
            bathrooms=_to_int(row.get("bathrooms")),
            area_sqft=_to_float(row.get("area_sqft")),
            monthly_rent=_to_float(row.get("monthly_rent")),
            status=row.get("status") or FlatStatus.VACANT.value,
            description=row.get("description") or "",
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Tenant:
    """A person renting a flat."""
    id: str
    full_name: str
    email: str = ""
    phone: str = ""
    emergency_contact: str = ""
    emergency_phone: str = ""
    id_number: str = ""
    occupation: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Tenant":
        return cls(
            id=str(row["id"]),
            full_name=row.get("full_name") or "",
            email=row.get("email") or "",
            phone=row.get("phone") or "",
            emergency_contact=row.get("emergency_contact") or "",
            emergency_phone=row.get("emergency_phone") or "",
            id_number=row.get("id_number") or "",
            occupation=row.get("occupation") or "",
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Lease:
    """A rental agreement linking one tenant to one flat."""
    id: str
    flat_id: str
    tenant_id: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    monthly_rent: float = 0.0
    security_deposit: float = 0.0
    status: str = LeaseStatus.ACTIVE.value
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Lease":
        return cls(
            id=str(row["id"]),
            flat_id=str(row.get("flat_id") or ""),
            tenant_id=str(row.get("tenant_id") or ""),
            start_date=row.get("start_date"),
            end_date=row.get("end_date"),
            monthly_rent=_to_float(row.get("monthly_rent")),
            security_deposit=_to_float(row.get("security_deposit")),
            status=row.get("status") or LeaseStatus.ACTIVE.value,
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RentPayment:
    """One due or paid rent obligation tied to a lease."""
    id: str
    lease_id: str
    amount: float
    due_date: Optional[str] = None
    payment_date: Optional[str] = None
    payment_method: str = ""
    status: str = PaymentStatus.PENDING.value
    notes: str = ""
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "RentPayment":
        return cls(
            id=str(row["id"]),
            lease_id=str(row.get("lease_id") or ""),
            amount=_to_float(row.get("amount")),
            due_date=row.get("due_date"),
            payment_date=row.get("payment_date"),
            payment_method=row.get("payment_method") or "",
            status=row.get("status") or PaymentStatus.PENDING.value,
            notes=row.get("notes") or "",
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DashboardStats:
    """Occupancy and collection figures, recomputed on every request."""
    total_flats: int = 0
    occupied_flats: int = 0
    vacant_flats: int = 0
    maintenance_flats: int = 0
    pending_payments: int = 0
    overdue_payments: int = 0
    total_rent_collected: float = 0.0
    total_rent_pending: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the camelCase keys the dashboard API exposes."""
        return {
            "totalFlats": self.total_flats,
            "occupiedFlats": self.occupied_flats,
            "vacantFlats": self.vacant_flats,
            "maintenanceFlats": self.maintenance_flats,
            "pendingPayments": self.pending_payments,
            "overduePayments": self.overdue_payments,
            "totalRentCollected": self.total_rent_collected,
            "totalRentPending": self.total_rent_pending,
        }


# ============================================================================
# VIEWS
# ============================================================================

@dataclass
class CurrentLease:
    """Active lease summary attached to a flat."""
    tenant_full_name: str


@dataclass
class FlatView:
    """Flat with its active lease, if one exists."""
    flat: Flat
    current_lease: Optional[CurrentLease] = None

    @property
    def is_leased(self) -> bool:
        return self.current_lease is not None

    def to_dict(self) -> Dict[str, Any]:
        d = self.flat.to_dict()
        # Absent lease means no key at all; consumers use presence as the occupancy signal
        if self.current_lease is not None:
            d["current_lease"] = {"tenant": {"full_name": self.current_lease.tenant_full_name}}
        return d


@dataclass
class PaymentLeaseContext:
    """Lease context joined onto a payment."""
    lease: Lease
    flat_number: Optional[str] = None
    tenant_full_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = self.lease.to_dict()
        d["flat"] = {"flat_number": self.flat_number} if self.flat_number is not None else None
        d["tenant"] = {"full_name": self.tenant_full_name} if self.tenant_full_name is not None else None
        return d


@dataclass
class PaymentView:
    """Payment with lease, flat and tenant context."""
    payment: RentPayment
    lease: Optional[PaymentLeaseContext] = None

    @property
    def status(self) -> str:
        return self.payment.status

    @property
    def tenant_full_name(self) -> Optional[str]:
        if self.lease is None:
            return None
        return self.lease.tenant_full_name

    @property
    def flat_number(self) -> Optional[str]:
        if self.lease is None:
            return None
        return self.lease.flat_number

    def to_dict(self) -> Dict[str, Any]:
        d = self.payment.to_dict()
        d["lease"] = self.lease.to_dict() if self.lease is not None else None
        return d


@dataclass
class LeaseFlatSummary:
    flat_number: str
    floor: int = 0


@dataclass
class LeaseTenantSummary:
    full_name: str
    email: str = ""
    phone: str = ""


@dataclass
class LeaseView:
    """Lease with the flat and tenant it links."""
    lease: Lease
    flat: Optional[LeaseFlatSummary] = None
    tenant: Optional[LeaseTenantSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        d = self.lease.to_dict()
        d["flat"] = asdict(self.flat) if self.flat is not None else None
        d["tenant"] = asdict(self.tenant) if self.tenant is not None else None
        return d


@dataclass
class TenantLeaseSummary:
    """Active lease of a tenant, with the flat it covers."""
    lease: Lease
    flat_number: Optional[str] = None
    flat_monthly_rent: Optional[float] = None


@dataclass
class TenantView:
    """Tenant with their active lease."""
    tenant: Tenant
    lease: Optional[TenantLeaseSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        d = self.tenant.to_dict()
        if self.lease is None:
            d["lease"] = None
        else:
            lease = self.lease.lease.to_dict()
            lease["flat"] = None
            if self.lease.flat_number is not None:
                lease["flat"] = {
                    "flat_number": self.lease.flat_number,
                    "monthly_rent": self.lease.flat_monthly_rent,
                }
            d["lease"] = lease
        return d


def views_to_dicts(views: List[Any]) -> List[Dict[str, Any]]:
    """Serialise a list of views for JSON responses."""
    return [v.to_dict() for v in views]
