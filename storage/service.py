"""
Data source abstraction and the Supabase REST implementation.

The dashboard only needs shallow reads (select, equality/comparison filters,
ordering, limit) and a single-table update. Supabase exposes those through
its PostgREST endpoint, which is reached here with plain HTTP requests.
"""
from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from config import DataSourceConfig
from rental_engine.exceptions import ConnectivityError

logger = logging.getLogger(__name__)

Filter = Tuple[str, str, Any]
Order = Tuple[str, bool]

FILTER_OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte")


class DataSource(ABC):
    """Abstract base for the backing store of flats, tenants, leases and payments."""

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the source has a usable configuration. Performs no I/O."""
        pass

    @abstractmethod
    def query(
        self,
        collection: str,
        select: str = "*",
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[Sequence[Order]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Read rows from a collection. Raises ConnectivityError on failure."""
        pass

    @abstractmethod
    def update(
        self,
        collection: str,
        values: Dict[str, Any],
        filters: Sequence[Filter]
    ) -> List[Dict[str, Any]]:
        """Update matching rows and return them. Raises ConnectivityError on failure."""
        pass


def build_query_params(
    select: str = "*",
    filters: Optional[Sequence[Filter]] = None,
    order: Optional[Sequence[Order]] = None,
    limit: Optional[int] = None
) -> List[Tuple[str, str]]:
    """
    Translate select/filter/order/limit into PostgREST query parameters.

    Returned as a list of pairs so the same column may be filtered twice
    (e.g. a gte and an lt bound on due_date).
    """
    params = [("select", select)]

    for column, operator, value in filters or []:
        if operator not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator '{operator}' for column '{column}'")
        params.append((column, f"{operator}.{value}"))

    if order:
        params.append((
            "order",
            ",".join(f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in order)
        ))

    if limit is not None:
        params.append(("limit", str(int(limit))))

    return params


class SupabaseDataSource(DataSource):
    """
    Read/write rows through the Supabase PostgREST API.

    Every call is a single bounded HTTP request; there is no retry loop.
    Transport errors, non-2xx responses and malformed bodies all surface as
    ConnectivityError so that callers have a single failure type to handle.
    """

    def __init__(self, settings: DataSourceConfig, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.settings.is_configured()

    def _headers(self, write: bool = False) -> Dict[str, str]:
        headers = {
            'apikey': self.settings.key or '',
            'Authorization': f'Bearer {self.settings.key or ""}',
            'Accept': 'application/json',
        }
        if write:
            headers['Content-Type'] = 'application/json'
            headers['Prefer'] = 'return=representation'
        return headers

    def _parse_rows(self, response: requests.Response, collection: str) -> List[Dict[str, Any]]:
        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"[SUPABASE] {collection}: HTTP {response.status_code} - {response.text[:300]}")
            raise ConnectivityError(
                f"Supabase returned HTTP {response.status_code} for '{collection}'",
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ConnectivityError(f"Malformed response body for '{collection}': {e}") from e

        if payload is None:
            raise ConnectivityError(f"Empty response body for '{collection}'")
        if not isinstance(payload, list):
            raise ConnectivityError(
                f"Unexpected response for '{collection}': expected a list, got {type(payload).__name__}"
            )

        return payload

    def query(
        self,
        collection: str,
        select: str = "*",
        filters: Optional[Sequence[Filter]] = None,
        order: Optional[Sequence[Order]] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        url = f"{self.settings.rest_url}/{collection}"
        params = build_query_params(select, filters, order, limit)
        logger.debug(f"[SUPABASE] GET {collection} params={params}")

        try:
            response = self.session.get(
                url,
                headers=self._headers(),
                params=params,
                timeout=self.settings.timeout_seconds
            )
        except requests.RequestException as e:
            raise ConnectivityError(f"Request to '{collection}' failed: {e}") from e

        rows = self._parse_rows(response, collection)
        logger.debug(f"[SUPABASE] GET {collection} -> {len(rows)} rows")
        return rows

    def update(
        self,
        collection: str,
        values: Dict[str, Any],
        filters: Sequence[Filter]
    ) -> List[Dict[str, Any]]:
        if not filters:
            # PostgREST would update every row
            raise ValueError(f"Refusing to update '{collection}' without filters")

        url = f"{self.settings.rest_url}/{collection}"
        params = build_query_params("*", filters)
        logger.info(f"[SUPABASE] PATCH {collection} filters={list(filters)} values={values}")

        try:
            response = self.session.patch(
                url,
                headers=self._headers(write=True),
                params=params,
                json=values,
                timeout=self.settings.timeout_seconds
            )
        except requests.RequestException as e:
            raise ConnectivityError(f"Update of '{collection}' failed: {e}") from e

        return self._parse_rows(response, collection)
