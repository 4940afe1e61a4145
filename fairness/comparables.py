"""
Comparable Selector

Pulls a bounded set of comparable rentals for a subject property:
- Bedrooms within +/-1 of the subject (when the subject's count is known)
- Same city (when the subject's location is resolved)
- At most COMPARABLE_LIMIT results

The store query is the only slow step. It is bounded by a timeout and
fails open: a timeout, store error or empty result gives no comparables,
and the Market Aggregator falls back to size-based figures.
"""

import asyncio
import logging
from typing import List

from .constants import (
    BEDROOM_TOLERANCE,
    COMPARABLE_LIMIT,
    DEFAULT_COMPARABLE_AREA_UNITS,
    DEFAULT_COMPARABLE_RENT,
)
from .errors import UpstreamDataUnavailable
from .models import ComparableProperty, PropertyDetails
from .store import ComparableQuery, PropertyRecord, PropertyStore


logger = logging.getLogger(__name__)


DEFAULT_STORE_TIMEOUT_SECONDS = 5.0


def _positive_or(value, default: float) -> float:
    if value is None or value <= 0:
        return default
    return value


class ComparableSelector:
    """Selects comparable properties from a property store."""

    def __init__(
        self,
        store: PropertyStore,
        limit: int = COMPARABLE_LIMIT,
        timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS,
    ):
        """
        Initialize selector.

        Args:
            store: Source of candidate properties
            limit: Maximum comparables returned
            timeout_seconds: Upper bound on the store query
        """
        self._store = store
        self._limit = limit
        self._timeout = timeout_seconds

    @property
    def store(self) -> PropertyStore:
        return self._store

    def build_query(self, subject: PropertyDetails) -> ComparableQuery:
        """Coarse filters for the subject."""
        query = ComparableQuery(limit=self._limit)

        # Zero bedrooms is treated as unknown
        if subject.bedrooms:
            query.min_bedrooms = subject.bedrooms - BEDROOM_TOLERANCE
            query.max_bedrooms = subject.bedrooms + BEDROOM_TOLERANCE

        if subject.location_details is not None and subject.location_details.locality:
            query.city = subject.location_details.locality

        return query

    async def select(self, subject: PropertyDetails) -> List[ComparableProperty]:
        """
        Query the store for comparables.

        Args:
            subject: The property being evaluated

        Returns:
            Up to `limit` comparables; empty if the store is unavailable,
            too slow, or has no matches.
        """
        query = self.build_query(subject)

        try:
            records = await asyncio.wait_for(
                self._store.fetch_properties(query),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Comparable query timed out after %.1fs; using fallback market figures",
                self._timeout,
            )
            return []
        except UpstreamDataUnavailable as e:
            logger.warning("Comparable store unavailable (%s); using fallback market figures", e)
            return []

        if not records:
            logger.info("No comparables found for query %s", query)
            return []

        return [self._to_comparable(r, subject) for r in records[:self._limit]]

    @staticmethod
    def _to_comparable(record: PropertyRecord, subject: PropertyDetails) -> ComparableProperty:
        """Convert a store row, filling missing fields with defaults."""
        return ComparableProperty(
            rent=_positive_or(record.rent, DEFAULT_COMPARABLE_RENT),
            area_units=_positive_or(record.square_feet, DEFAULT_COMPARABLE_AREA_UNITS),
            bedrooms=record.bedrooms or subject.bedrooms,
            bathrooms=record.bathrooms or subject.bathrooms,
            address=record.address,
        )
