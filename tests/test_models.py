"""
Tests for rent fairness data models.

Verifies:
- Required amounts are validated, never defaulted
- Importance weights outside 0-100 are rejected
- Amenities have set semantics
- Condition labels map to a closed enumeration
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fairness import (
    ComparableProperty,
    Condition,
    EvaluationRequest,
    EvaluationResult,
    FairPriceRange,
    LocationDetails,
    MarketData,
    Metrics,
    PropertyDetails,
    ValidationError,
)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def metrics():
    return Metrics(
        location_importance=50,
        condition_importance=50,
        size_importance=50,
        amenities_importance=50,
        market_rate_importance=50,
    )


def make_subject(**overrides) -> PropertyDetails:
    values = dict(
        rent=1500,
        area_units=1000,
        bedrooms=2,
        bathrooms=1,
        location="12 Elm Street",
        amenities=[],
        condition="Good",
    )
    values.update(overrides)
    return PropertyDetails(**values)


# =============================================================================
# Test: PropertyDetails Validation
# =============================================================================

class TestPropertyDetailsValidation:
    """Rent and size must be present and positive."""

    @pytest.mark.parametrize("rent", [0, -100, None, float("nan"), True, "1500"])
    def test_invalid_rent_rejected(self, rent):
        with pytest.raises(ValidationError) as exc_info:
            make_subject(rent=rent)
        assert exc_info.value.field == "rent"

    @pytest.mark.parametrize("area_units", [0, -1, None, float("inf")])
    def test_invalid_area_rejected(self, area_units):
        with pytest.raises(ValidationError) as exc_info:
            make_subject(area_units=area_units)
        assert exc_info.value.field == "areaUnits"

    def test_negative_bedrooms_rejected(self):
        with pytest.raises(ValidationError):
            make_subject(bedrooms=-1)

    def test_half_bathrooms_allowed(self):
        subject = make_subject(bathrooms=1.5)
        assert subject.bathrooms == 1.5

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            make_subject(rent=0)

    def test_price_per_area(self):
        assert make_subject(rent=1500, area_units=1000).price_per_area == pytest.approx(1.5)

    def test_resolved_location(self):
        assert not make_subject().has_resolved_location
        subject = make_subject(location_details=LocationDetails(city="Austin"))
        assert subject.has_resolved_location


# =============================================================================
# Test: Amenities
# =============================================================================

class TestAmenities:
    """Duplicates and blanks are meaningless."""

    def test_duplicates_collapsed_case_insensitively(self):
        subject = make_subject(amenities=["Pool", "pool ", " Gym", "", "GYM", "Parking"])
        assert subject.amenities == ["Pool", "Gym", "Parking"]
        assert subject.amenity_count == 3

    def test_missing_amenities_is_empty(self):
        assert make_subject(amenities=None).amenity_count == 0


# =============================================================================
# Test: Condition
# =============================================================================

class TestCondition:
    """Free-text labels map onto the closed enumeration."""

    @pytest.mark.parametrize("label,expected", [
        ("Excellent", Condition.EXCELLENT),
        ("very good", Condition.VERY_GOOD),
        ("Very_Good", Condition.VERY_GOOD),
        ("very-good", Condition.VERY_GOOD),
        ("GOOD", Condition.GOOD),
        (" fair ", Condition.FAIR),
        ("Average", Condition.AVERAGE),
        ("poor", Condition.POOR),
        ("", Condition.NOT_SPECIFIED),
        (None, Condition.NOT_SPECIFIED),
        ("newly renovated", Condition.OTHER),
        ("other", Condition.OTHER),
    ])
    def test_from_string(self, label, expected):
        assert Condition.from_string(label) is expected

    def test_subject_condition_parsed_and_label_kept(self):
        subject = make_subject(condition="Very Good")
        assert subject.condition is Condition.VERY_GOOD
        assert subject.condition_label == "Very Good"

    def test_enum_passed_through(self):
        subject = make_subject(condition=Condition.POOR)
        assert subject.condition is Condition.POOR

    def test_classification(self):
        assert Condition.GOOD.is_favourable
        assert Condition.NOT_SPECIFIED.is_neutral
        assert Condition.FAIR.needs_improvement
        assert Condition.POOR.needs_improvement
        assert not Condition.OTHER.is_favourable
        assert not Condition.OTHER.is_neutral


# =============================================================================
# Test: Metrics
# =============================================================================

class TestMetrics:
    """Importance weights are bounded to 0-100 and rejected outside it."""

    def test_bounds_accepted(self):
        Metrics(0, 100, 0, 100, 50)

    @pytest.mark.parametrize("field_name", [
        "location_importance",
        "condition_importance",
        "size_importance",
        "amenities_importance",
        "market_rate_importance",
    ])
    @pytest.mark.parametrize("value", [-1, 100.5, float("nan")])
    def test_out_of_range_rejected(self, field_name, value):
        values = dict(
            location_importance=50,
            condition_importance=50,
            size_importance=50,
            amenities_importance=50,
            market_rate_importance=50,
        )
        values[field_name] = value
        with pytest.raises(ValidationError) as exc_info:
            Metrics(**values)
        assert exc_info.value.field == field_name

    def test_weights_need_not_sum_to_100(self):
        metrics = Metrics(100, 100, 100, 100, 100)
        assert metrics.location_importance == 100


# =============================================================================
# Test: Market and Comparables
# =============================================================================

class TestMarketModels:

    def test_comparable_rate(self):
        comp = ComparableProperty(rent=1450, area_units=950)
        assert comp.rate_per_area == pytest.approx(1450 / 950)

    def test_comparable_zero_area_rejected(self):
        with pytest.raises(ValidationError):
            ComparableProperty(rent=1450, area_units=0)

    def test_negative_average_rent_rejected(self):
        with pytest.raises(ValidationError):
            MarketData(average_rent=-1)

    def test_market_data_defaults_to_no_comparables(self):
        assert MarketData(average_rent=1500).comparable_properties == []


# =============================================================================
# Test: Request and Result
# =============================================================================

class TestRequestAndResult:

    def test_missing_property_details_rejected(self, metrics):
        with pytest.raises(ValidationError, match="propertyDetails"):
            EvaluationRequest(property_details=None, metrics=metrics)

    def test_missing_metrics_rejected(self):
        with pytest.raises(ValidationError, match="metrics"):
            EvaluationRequest(property_details=make_subject(), metrics=None)

    def test_result_to_dict_uses_response_keys(self):
        result = EvaluationResult(
            fairness_score=88,
            analysis="analysis",
            recommendations=["one"],
            fair_price_range=FairPriceRange(min=1350, max=1650),
            summary="summary",
        )
        assert result.to_dict() == {
            "fairnessScore": 88,
            "analysis": "analysis",
            "recommendations": ["one"],
            "fairPriceRange": {"min": 1350, "max": 1650},
            "summary": "summary",
        }

    def test_range_contains(self):
        band = FairPriceRange(min=1350, max=1650)
        assert band.contains(1500)
        assert not band.contains(1700)
