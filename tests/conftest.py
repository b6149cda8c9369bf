"""Pytest configuration and fixtures."""

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from app import create_app
from rental_engine.exceptions import ConnectivityError
from storage.resolver import FallbackResolver
from storage.service import DataSource


FIXED_NOW = datetime(2024, 6, 15, 12, 30, tzinfo=timezone.utc)


class FakeDataSource(DataSource):
    """In-memory DataSource with optional failure injection."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None, configured: bool = True):
        self.tables = deepcopy(tables or {})
        self.configured = configured
        self.failing: set = set()
        self.fail_updates = False
        self.calls: List[tuple] = []

    def is_configured(self) -> bool:
        return self.configured

    @staticmethod
    def _matches(row: Dict[str, Any], filters) -> bool:
        for column, operator, value in filters or []:
            actual = row.get(column)
            if operator == "eq" and str(actual) != str(value):
                return False
            if operator == "gte" and (actual is None or str(actual) < str(value)):
                return False
        return True

    def query(self, collection, select="*", filters=None, order=None, limit=None):
        self.calls.append(("query", collection, select, filters))
        if collection in self.failing:
            raise ConnectivityError(f"{collection} unavailable", status_code=503)

        rows = [deepcopy(r) for r in self.tables.get(collection, []) if self._matches(r, filters)]
        for column, ascending in reversed(order or []):
            rows.sort(key=lambda r: str(r.get(column) or ""), reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    def update(self, collection, values, filters):
        self.calls.append(("update", collection, values, filters))
        if self.fail_updates:
            raise ConnectivityError("write rejected", status_code=500)

        updated = []
        for row in self.tables.get(collection, []):
            if self._matches(row, filters):
                row.update(values)
                updated.append(deepcopy(row))
        return updated


@pytest.fixture
def flat_rows() -> List[Dict[str, Any]]:
    """Three flats, one of them without an active lease."""
    return [
        {"id": "f1", "flat_number": "101", "floor": 1, "bedrooms": 1, "bathrooms": 1,
         "area_sqft": 600, "monthly_rent": 1000, "status": "occupied"},
        {"id": "f2", "flat_number": "102", "floor": 1, "bedrooms": 2, "bathrooms": 1,
         "area_sqft": 800, "monthly_rent": 1400, "status": "vacant"},
        {"id": "f3", "flat_number": "201", "floor": 2, "bedrooms": 2, "bathrooms": 2,
         "area_sqft": 900, "monthly_rent": 1600, "status": "occupied"},
    ]


@pytest.fixture
def tenant_rows() -> List[Dict[str, Any]]:
    return [
        {"id": "t1", "full_name": "Alice Moore", "email": "alice@example.com", "phone": "555-0101"},
        {"id": "t2", "full_name": "Bob Stone", "email": "bob@example.com", "phone": "555-0102"},
        {"id": "t3", "full_name": "Carla Diaz", "email": "carla@example.com", "phone": "555-0103"},
    ]


@pytest.fixture
def lease_rows() -> List[Dict[str, Any]]:
    """Leases carry an embedded tenant, as the active-lease select returns it."""
    return [
        {"id": "l1", "flat_id": "f1", "tenant_id": "t1", "start_date": "2024-01-01",
         "end_date": "2024-12-31", "monthly_rent": 1000, "security_deposit": 2000,
         "status": "active", "tenant": {"full_name": "Alice Moore"}},
        {"id": "l2", "flat_id": "f3", "tenant_id": "t2", "start_date": "2024-03-01",
         "end_date": "2025-02-28", "monthly_rent": 1600, "security_deposit": 3200,
         "status": "active", "tenant": {"full_name": "Bob Stone"}},
        {"id": "l3", "flat_id": "f2", "tenant_id": "t3", "start_date": "2023-01-01",
         "end_date": "2023-12-31", "monthly_rent": 1300, "security_deposit": 2600,
         "status": "expired", "tenant": {"full_name": "Carla Diaz"}},
    ]


@pytest.fixture
def payment_rows() -> List[Dict[str, Any]]:
    return [
        {"id": "p1", "lease_id": "l1", "amount": 1000, "due_date": "2024-06-01T00:00:00+00:00",
         "payment_date": "2024-06-02T10:00:00+00:00", "status": "paid"},
        {"id": "p2", "lease_id": "l2", "amount": 1600, "due_date": "2024-06-01T00:00:00+00:00",
         "payment_date": None, "status": "pending"},
        {"id": "p3", "lease_id": "l2", "amount": 1600, "due_date": "2024-05-01T00:00:00+00:00",
         "payment_date": None, "status": "overdue"},
    ]


@pytest.fixture
def tables(flat_rows, tenant_rows, lease_rows, payment_rows) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "flats": flat_rows,
        "tenants": tenant_rows,
        "leases": lease_rows,
        "rent_payments": payment_rows,
    }


@pytest.fixture
def live_source(tables) -> FakeDataSource:
    return FakeDataSource(tables)


@pytest.fixture
def demo_source() -> FakeDataSource:
    return FakeDataSource(configured=False)


@pytest.fixture
def live_resolver(live_source) -> FallbackResolver:
    return FallbackResolver(live_source, clock=lambda: FIXED_NOW)


@pytest.fixture
def demo_resolver(demo_source) -> FallbackResolver:
    return FallbackResolver(demo_source, clock=lambda: FIXED_NOW)


@pytest.fixture
def live_client(live_resolver):
    app = create_app(resolver=live_resolver)
    app.config['TESTING'] = True
    return app.test_client()


@pytest.fixture
def demo_client(demo_resolver):
    app = create_app(resolver=demo_resolver)
    app.config['TESTING'] = True
    return app.test_client()
