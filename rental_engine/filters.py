"""
Payment list filtering over an already-fetched list of views.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ValidationError
from .schemas import PAYMENT_STATUS_VALUES, PaymentView

STATUS_FILTER_ALL = "all"
STATUS_FILTER_VALUES = (STATUS_FILTER_ALL,) + PAYMENT_STATUS_VALUES


def _contains(value: Optional[str], needle: str) -> bool:
    if not value:
        return False
    return needle in str(value).lower()


def filter_payments(
    payments: List[PaymentView],
    status_filter: str = STATUS_FILTER_ALL,
    search_term: str = ""
) -> List[PaymentView]:
    """
    Filter payments by status and by tenant name / flat number search.

    Args:
        payments: Payment views in display order
        status_filter: "all" or one of the payment statuses
        search_term: Case-insensitive substring; empty disables the search

    Returns:
        New list with the payments matching both filters, order preserved

    Raises:
        ValidationError: If status_filter is not a known value
    """
    if status_filter not in STATUS_FILTER_VALUES:
        raise ValidationError(
            f"Unknown status filter '{status_filter}'. Expected one of: {', '.join(STATUS_FILTER_VALUES)}"
        )

    result = list(payments)

    if status_filter != STATUS_FILTER_ALL:
        result = [p for p in result if p.status == status_filter]

    if search_term:
        needle = search_term.lower()
        result = [
            p for p in result
            if _contains(p.tenant_full_name, needle) or _contains(p.flat_number, needle)
        ]

    return result


def payment_status_counts(payments: List[PaymentView]) -> Dict[str, int]:
    """Counts for the status filter dropdown."""
    counts = {STATUS_FILTER_ALL: len(payments)}
    for status in PAYMENT_STATUS_VALUES:
        counts[status] = len([p for p in payments if p.status == status])
    return counts


@dataclass(frozen=True)
class PaymentFilter:
    """Filter state for the payments list; owned by the caller."""
    status: str = STATUS_FILTER_ALL
    search: str = ""

    @property
    def is_active(self) -> bool:
        return self.status != STATUS_FILTER_ALL or bool(self.search)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "PaymentFilter":
        """Build from request query args; unknown statuses fall back to "all"."""
        status = (args.get("status") or STATUS_FILTER_ALL).strip().lower()
        if status not in STATUS_FILTER_VALUES:
            status = STATUS_FILTER_ALL
        search = (args.get("q") or "").strip()
        return cls(status=status, search=search)

    def apply(self, payments: List[PaymentView]) -> List[PaymentView]:
        return filter_payments(payments, self.status, self.search)
