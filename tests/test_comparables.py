"""
Tests for comparable selection and property store adapters.

Verifies:
- Bedroom window and locality filters
- Result cap
- Missing store fields filled with defaults
- Store errors, timeouts and empty results fail open to no comparables
- REST store query building and error mapping
"""

import asyncio
import logging

import pytest
import requests
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fairness import (
    ComparableQuery,
    ComparableSelector,
    InMemoryPropertyStore,
    LocationDetails,
    PropertyDetails,
    PropertyRecord,
    PropertyStore,
    RestPropertyStore,
    UpstreamDataUnavailable,
)
from fairness.store import build_property_store
from utils.config import Config


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def create_subject():
    def _create(bedrooms: int = 2, city: str = None) -> PropertyDetails:
        return PropertyDetails(
            rent=1500,
            area_units=1000,
            bedrooms=bedrooms,
            bathrooms=1.5,
            location="12 Elm Street",
            location_details=LocationDetails(city=city) if city is not None else None,
            condition="good",
        )
    return _create


@pytest.fixture
def records():
    """Store rows across bedroom counts and cities."""
    return [
        PropertyRecord(rent=1400, square_feet=900, bedrooms=1, bathrooms=1, city="Austin", address="1 A St"),
        PropertyRecord(rent=1500, square_feet=1000, bedrooms=2, bathrooms=1, city="Austin", address="2 A St"),
        PropertyRecord(rent=1700, square_feet=1200, bedrooms=3, bathrooms=2, city="austin", address="3 A St"),
        PropertyRecord(rent=2200, square_feet=1500, bedrooms=4, bathrooms=2, city="Austin", address="4 A St"),
        PropertyRecord(rent=1600, square_feet=1000, bedrooms=2, bathrooms=1, city="Dallas", address="5 D St"),
        PropertyRecord(rent=1300, square_feet=800, bedrooms=0, bathrooms=1, city="Dallas", address="6 D St"),
    ]


class FailingStore(PropertyStore):
    async def fetch_properties(self, query):
        raise UpstreamDataUnavailable("connection refused")


class SlowStore(PropertyStore):
    async def fetch_properties(self, query):
        await asyncio.sleep(1)
        return [PropertyRecord(rent=1500, square_feet=1000, bedrooms=2)]


class BrokenStore(PropertyStore):
    async def fetch_properties(self, query):
        raise RuntimeError("unexpected")


class RecordingStore(PropertyStore):
    def __init__(self, rows):
        self.rows = rows
        self.queries = []

    async def fetch_properties(self, query):
        self.queries.append(query)
        return list(self.rows)


# =============================================================================
# Test: Query Building
# =============================================================================

class TestBuildQuery:
    """Coarse filters derived from the subject."""

    def test_bedroom_window(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore())
        query = selector.build_query(create_subject(bedrooms=2))

        assert query.min_bedrooms == 1
        assert query.max_bedrooms == 3
        assert query.city is None
        assert query.limit == 5

    def test_unknown_bedrooms_not_filtered(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore())
        query = selector.build_query(create_subject(bedrooms=0))

        assert query.min_bedrooms is None
        assert query.max_bedrooms is None

    def test_city_from_resolved_location(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore())
        assert selector.build_query(create_subject(city=" Austin ")).city == "Austin"

    def test_blank_city_ignored(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore())
        assert selector.build_query(create_subject(city="")).city is None

    def test_limit_configurable(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore(), limit=3)
        assert selector.build_query(create_subject()).limit == 3


# =============================================================================
# Test: Selection
# =============================================================================

class TestSelect:
    """Selection against a working store."""

    def test_filters_bedrooms_and_city(self, create_subject, records):
        selector = ComparableSelector(InMemoryPropertyStore(records))
        comps = asyncio.run(selector.select(create_subject(bedrooms=2, city="Austin")))

        assert [c.address for c in comps] == ["1 A St", "2 A St", "3 A St"]

    def test_without_city_all_localities(self, create_subject, records):
        selector = ComparableSelector(InMemoryPropertyStore(records))
        comps = asyncio.run(selector.select(create_subject(bedrooms=2)))

        assert [c.address for c in comps] == ["1 A St", "2 A St", "3 A St", "5 D St"]

    def test_capped(self, create_subject):
        rows = [PropertyRecord(rent=1500, square_feet=1000, bedrooms=2) for _ in range(12)]
        selector = ComparableSelector(InMemoryPropertyStore(rows))
        assert len(asyncio.run(selector.select(create_subject()))) == 5

    def test_cap_enforced_on_oversized_store_result(self, create_subject):
        rows = [PropertyRecord(rent=1500, square_feet=1000, bedrooms=2) for _ in range(8)]
        selector = ComparableSelector(RecordingStore(rows), limit=2)
        assert len(asyncio.run(selector.select(create_subject()))) == 2

    def test_missing_fields_defaulted(self, create_subject):
        rows = [PropertyRecord(rent=None, square_feet=0, bedrooms=None, bathrooms=None)]
        selector = ComparableSelector(RecordingStore(rows))
        comps = asyncio.run(selector.select(create_subject(bedrooms=2)))

        assert len(comps) == 1
        assert comps[0].rent == 1500
        assert comps[0].area_units == 1000
        assert comps[0].bedrooms == 2
        assert comps[0].bathrooms == 1.5

    def test_negative_rent_defaulted(self, create_subject):
        rows = [PropertyRecord(rent=-5, square_feet=900, bedrooms=2)]
        selector = ComparableSelector(RecordingStore(rows))
        comps = asyncio.run(selector.select(create_subject()))
        assert comps[0].rent == 1500
        assert comps[0].area_units == 900

    def test_each_call_requeries(self, create_subject):
        store = RecordingStore([])
        selector = ComparableSelector(store)
        asyncio.run(selector.select(create_subject()))
        asyncio.run(selector.select(create_subject()))
        assert len(store.queries) == 2


# =============================================================================
# Test: Fail-Open Behaviour
# =============================================================================

class TestFailOpen:
    """Upstream gaps give no comparables, never an error."""

    def test_empty_store(self, create_subject):
        selector = ComparableSelector(InMemoryPropertyStore())
        assert asyncio.run(selector.select(create_subject())) == []

    def test_store_error(self, create_subject, caplog):
        selector = ComparableSelector(FailingStore())
        with caplog.at_level(logging.WARNING, logger="fairness.comparables"):
            comps = asyncio.run(selector.select(create_subject()))

        assert comps == []
        assert "unavailable" in caplog.text

    def test_store_timeout(self, create_subject, caplog):
        selector = ComparableSelector(SlowStore(), timeout_seconds=0.01)
        with caplog.at_level(logging.WARNING, logger="fairness.comparables"):
            comps = asyncio.run(selector.select(create_subject()))

        assert comps == []
        assert "timed out" in caplog.text

    def test_unexpected_error_propagates(self, create_subject):
        selector = ComparableSelector(BrokenStore())
        with pytest.raises(RuntimeError):
            asyncio.run(selector.select(create_subject()))


# =============================================================================
# Test: In-Memory Store
# =============================================================================

class TestInMemoryStore:

    def test_records_without_bedrooms_skipped_when_filtering(self):
        store = InMemoryPropertyStore([PropertyRecord(rent=1500, bedrooms=None)])
        query = ComparableQuery(min_bedrooms=1, max_bedrooms=3)
        assert asyncio.run(store.fetch_properties(query)) == []

    def test_no_filters_returns_up_to_limit(self, records):
        store = InMemoryPropertyStore(records)
        result = asyncio.run(store.fetch_properties(ComparableQuery(limit=4)))
        assert len(result) == 4
        assert len(store) == 6


# =============================================================================
# Test: REST Store
# =============================================================================

class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class TestRestPropertyStore:
    """PostgREST-style queries over requests."""

    def test_endpoint(self):
        store = RestPropertyStore("https://example.supabase.co/", session=FakeSession())
        assert store.endpoint == "https://example.supabase.co/rest/v1/properties"

    def test_build_params(self):
        store = RestPropertyStore("https://example.supabase.co", session=FakeSession())
        params = store.build_params(
            ComparableQuery(min_bedrooms=1, max_bedrooms=3, city="Austin", limit=5)
        )
        assert params == [
            ("select", "*"),
            ("bedrooms", "gte.1"),
            ("bedrooms", "lte.3"),
            ("city", "eq.Austin"),
            ("limit", "5"),
        ]

    def test_build_params_without_filters(self):
        store = RestPropertyStore("https://example.supabase.co", session=FakeSession())
        assert store.build_params(ComparableQuery()) == [("select", "*"), ("limit", "5")]

    def test_fetch_parses_rows(self):
        rows = [
            {"id": 7, "rent": 1450, "square_feet": 950, "bedrooms": 2, "bathrooms": 1, "city": "Austin", "address": "7 B St"},
            {"id": 8, "rent": None, "square_feet": "1050", "bedrooms": 3, "city": None},
            "not-a-row",
        ]
        session = FakeSession(FakeResponse(rows))
        store = RestPropertyStore("https://example.supabase.co", api_key="anon-key", timeout=2.5, session=session)

        result = asyncio.run(store.fetch_properties(ComparableQuery(min_bedrooms=1, max_bedrooms=3)))

        assert len(result) == 2
        assert result[0] == PropertyRecord(
            rent=1450, square_feet=950, bedrooms=2, bathrooms=1, city="Austin", address="7 B St", id="7"
        )
        assert result[1].rent is None
        assert result[1].square_feet == 1050
        assert result[1].city == ""

        call = session.calls[0]
        assert call["headers"]["apikey"] == "anon-key"
        assert call["headers"]["Authorization"] == "Bearer anon-key"
        assert call["timeout"] == 2.5

    def test_http_error_is_upstream_unavailable(self):
        store = RestPropertyStore("https://example.supabase.co", session=FakeSession(FakeResponse([], 503)))
        with pytest.raises(UpstreamDataUnavailable):
            asyncio.run(store.fetch_properties(ComparableQuery()))

    def test_connection_error_is_upstream_unavailable(self):
        session = FakeSession(error=requests.ConnectionError("refused"))
        store = RestPropertyStore("https://example.supabase.co", session=session)
        with pytest.raises(UpstreamDataUnavailable):
            asyncio.run(store.fetch_properties(ComparableQuery()))

    def test_invalid_json_is_upstream_unavailable(self):
        session = FakeSession(FakeResponse(ValueError("bad json")))
        store = RestPropertyStore("https://example.supabase.co", session=session)
        with pytest.raises(UpstreamDataUnavailable):
            asyncio.run(store.fetch_properties(ComparableQuery()))

    def test_unexpected_payload_is_upstream_unavailable(self):
        session = FakeSession(FakeResponse({"message": "oops"}))
        store = RestPropertyStore("https://example.supabase.co", session=session)
        with pytest.raises(UpstreamDataUnavailable):
            asyncio.run(store.fetch_properties(ComparableQuery()))

    def test_selector_absorbs_rest_failure(self, create_subject):
        session = FakeSession(error=requests.Timeout("slow"))
        store = RestPropertyStore("https://example.supabase.co", session=session)
        selector = ComparableSelector(store)
        assert asyncio.run(selector.select(create_subject())) == []

    def test_base_url_required(self):
        with pytest.raises(ValueError):
            RestPropertyStore("")


# =============================================================================
# Test: Store Factory
# =============================================================================

class TestBuildPropertyStore:

    def test_memory_default(self):
        store = build_property_store(Config(property_store="memory"))
        assert isinstance(store, InMemoryPropertyStore)

    def test_rest(self):
        config = Config(
            property_store="REST",
            property_store_url="https://example.supabase.co",
            property_store_api_key="anon-key",
            property_store_table="listings",
            store_timeout_seconds=3.0,
        )
        store = build_property_store(config)
        assert isinstance(store, RestPropertyStore)
        assert store.endpoint == "https://example.supabase.co/rest/v1/listings"

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            build_property_store(Config(property_store="sqlite"))
