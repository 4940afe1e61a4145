"""
Property Store Adapters

Read-only sources of candidate comparable properties.

- InMemoryPropertyStore: records held in memory (development and tests)
- RestPropertyStore: PostgREST-style HTTP endpoint (e.g. a hosted
  `properties` table)

All adapters implement PropertyStore and raise UpstreamDataUnavailable when
the store cannot be queried.
"""

from __future__ import annotations

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Final, Iterable, Optional

import requests

from .constants import COMPARABLE_LIMIT
from .errors import UpstreamDataUnavailable


logger = logging.getLogger(__name__)


DEFAULT_TABLE: Final[str] = "properties"
DEFAULT_REQUEST_TIMEOUT_SECONDS: Final[float] = 5.0


@dataclass
class ComparableQuery:
    """Coarse filters for a comparable search."""
    min_bedrooms: Optional[int] = None
    max_bedrooms: Optional[int] = None
    city: Optional[str] = None
    limit: int = COMPARABLE_LIMIT


@dataclass
class PropertyRecord:
    """
    A property row as held by the store.

    Rent and size may be missing; the Comparable Selector fills the gaps.
    """
    rent: Optional[float] = None
    square_feet: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    city: str = ""
    address: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PropertyRecord":
        """Build a record from a raw store row, tolerating missing fields."""
        return cls(
            rent=_to_number(row.get("rent")),
            square_feet=_to_number(row.get("square_feet")),
            bedrooms=_to_int(row.get("bedrooms")),
            bathrooms=_to_number(row.get("bathrooms")),
            city=str(row.get("city") or ""),
            address=row.get("address"),
            id=None if row.get("id") is None else str(row.get("id")),
        )

    def matches(self, query: ComparableQuery) -> bool:
        """Whether this record passes the query's filters."""
        if query.min_bedrooms is not None or query.max_bedrooms is not None:
            if self.bedrooms is None:
                return False
            if query.min_bedrooms is not None and self.bedrooms < query.min_bedrooms:
                return False
            if query.max_bedrooms is not None and self.bedrooms > query.max_bedrooms:
                return False
        if query.city and self.city.strip().casefold() != query.city.strip().casefold():
            return False
        return True


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_int(value: Any) -> Optional[int]:
    number = _to_number(value)
    return None if number is None else int(number)


class PropertyStore(ABC):
    """Abstract base class for comparable property sources."""

    @abstractmethod
    async def fetch_properties(self, query: ComparableQuery) -> list[PropertyRecord]:
        """
        Fetch properties matching the query.

        Args:
            query: Bedroom window, locality and result cap.

        Returns:
            Matching records, at most query.limit (may be empty).

        Raises:
            UpstreamDataUnavailable: The store could not be queried.
        """


class InMemoryPropertyStore(PropertyStore):
    """Property store backed by a list of records."""

    def __init__(self, records: Optional[Iterable[PropertyRecord]] = None):
        self._records = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    async def fetch_properties(self, query: ComparableQuery) -> list[PropertyRecord]:
        matched = [r for r in self._records if r.matches(query)]
        return matched[:query.limit]


class RestPropertyStore(PropertyStore):
    """
    Property store reached over a PostgREST-style HTTP API.

    Filters are pushed down as query parameters:
    bedrooms=gte.N, bedrooms=lte.M, city=eq.C, limit=K
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        table: str = DEFAULT_TABLE,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the REST store.

        Args:
            base_url: Project URL, e.g. https://example.supabase.co
            api_key: Anonymous API key sent as apikey/Bearer headers
            table: Table holding the properties
            timeout: Per-request timeout in seconds
            session: Optional requests session (default: new session)
        """
        if not base_url:
            raise ValueError("base_url is required for RestPropertyStore")
        self._endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def build_params(self, query: ComparableQuery) -> list[tuple[str, str]]:
        """Translate a query into PostgREST filter parameters."""
        params = [("select", "*")]
        if query.min_bedrooms is not None:
            params.append(("bedrooms", f"gte.{query.min_bedrooms}"))
        if query.max_bedrooms is not None:
            params.append(("bedrooms", f"lte.{query.max_bedrooms}"))
        if query.city:
            params.append(("city", f"eq.{query.city}"))
        params.append(("limit", str(query.limit)))
        return params

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _fetch_sync(self, query: ComparableQuery) -> list[PropertyRecord]:
        try:
            response = self._session.get(
                self._endpoint,
                params=self.build_params(query),
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
            rows = response.json()
        except (requests.RequestException, ValueError) as e:
            raise UpstreamDataUnavailable(f"Property store query failed: {e}") from e

        if not isinstance(rows, list):
            raise UpstreamDataUnavailable("Property store returned an unexpected payload")

        logger.debug("Property store returned %d rows from %s", len(rows), self._endpoint)
        return [PropertyRecord.from_row(row) for row in rows if isinstance(row, dict)]

    async def fetch_properties(self, query: ComparableQuery) -> list[PropertyRecord]:
        return await asyncio.to_thread(self._fetch_sync, query)


# Singleton instance for the application
_property_store: Optional[PropertyStore] = None


def build_property_store(config) -> PropertyStore:
    """
    Build the store named by configuration.

    Args:
        config: utils.config.Config

    Returns:
        PropertyStore ("memory" gives an empty in-memory store)
    """
    store_type = (config.property_store or "memory").lower().strip()
    if store_type == "rest":
        return RestPropertyStore(
            base_url=config.property_store_url,
            api_key=config.property_store_api_key,
            table=config.property_store_table,
            timeout=config.store_timeout_seconds,
        )
    if store_type == "memory":
        return InMemoryPropertyStore()
    raise ValueError(f"Unknown property store type: {config.property_store}")


def get_property_store(config=None) -> PropertyStore:
    """Get the property store singleton."""
    global _property_store
    if _property_store is None:
        if config is None:
            from utils.config import Config
            config = Config.load()
        _property_store = build_property_store(config)
    return _property_store
