"""
Data models for the rent fairness engine.

Every model is built, used and discarded within a single evaluation.
Construction validates the fields the scorer depends on and raises
ValidationError instead of substituting defaults.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import ValidationError


class Condition(Enum):
    """
    Property condition classification.

    Favourable: excellent, very good, good
    Neutral: fair, average (and an unspecified condition)
    Anything else is treated as unfavourable.
    """
    EXCELLENT = "excellent"
    VERY_GOOD = "very good"
    GOOD = "good"
    FAIR = "fair"
    AVERAGE = "average"
    POOR = "poor"
    NOT_SPECIFIED = ""
    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Condition":
        """Convert a free-text label to Condition, case-insensitive."""
        if value is None:
            return cls.NOT_SPECIFIED
        normalised = " ".join(value.lower().replace("_", " ").replace("-", " ").split())
        if not normalised:
            return cls.NOT_SPECIFIED
        for member in cls:
            if member is not cls.OTHER and member.value == normalised:
                return member
        return cls.OTHER

    @property
    def is_favourable(self) -> bool:
        return self in (Condition.EXCELLENT, Condition.VERY_GOOD, Condition.GOOD)

    @property
    def is_neutral(self) -> bool:
        return self in (Condition.FAIR, Condition.AVERAGE, Condition.NOT_SPECIFIED)

    @property
    def needs_improvement(self) -> bool:
        """Whether improving the condition would justify the rent."""
        return self in (Condition.POOR, Condition.FAIR)


def _require_positive(value, name: str) -> float:
    """Check a required amount is a finite number greater than zero."""
    if value is None:
        raise ValidationError(f"{name} is required", field=name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be greater than zero", field=name)
    return float(value)


def _require_non_negative(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name)
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be non-negative", field=name)
    return value


def normalise_amenities(amenities: Optional[List[str]]) -> List[str]:
    """
    Collapse an amenity list to set semantics.

    Labels are stripped, blank labels dropped and duplicates removed
    case-insensitively. The first spelling of each label is kept.
    """
    seen = set()
    result = []
    for label in amenities or []:
        cleaned = str(label).strip()
        key = cleaned.casefold()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


@dataclass
class LocationDetails:
    """Structured address and geocoordinates for a resolved location."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    lat: float = 0.0
    lng: float = 0.0

    @property
    def locality(self) -> str:
        """City used to restrict comparables, blank if unresolved."""
        return (self.city or "").strip()


@dataclass
class PropertyDetails:
    """The subject rental property being evaluated."""
    rent: float  # Monthly rent
    area_units: float  # e.g. square feet
    bedrooms: int = 0
    bathrooms: float = 0
    location: str = ""
    location_details: Optional[LocationDetails] = None
    amenities: List[str] = field(default_factory=list)
    condition: Condition = Condition.NOT_SPECIFIED
    condition_label: str = ""

    def __post_init__(self):
        """Validate and normalise after initialization."""
        self.rent = _require_positive(self.rent, "rent")
        self.area_units = _require_positive(self.area_units, "areaUnits")
        if isinstance(self.bedrooms, bool) or not isinstance(self.bedrooms, int) or self.bedrooms < 0:
            raise ValidationError("bedrooms must be a non-negative integer", field="bedrooms")
        self.bathrooms = _require_non_negative(self.bathrooms, "bathrooms")
        self.amenities = normalise_amenities(self.amenities)
        if not isinstance(self.condition, Condition):
            label = "" if self.condition is None else str(self.condition)
            self.condition_label = self.condition_label or label.strip()
            self.condition = Condition.from_string(label)

    @property
    def amenity_count(self) -> int:
        return len(self.amenities)

    @property
    def price_per_area(self) -> float:
        return self.rent / self.area_units

    @property
    def has_resolved_location(self) -> bool:
        return self.location_details is not None


# Metric field names in the order they are reported
METRIC_FIELDS = (
    "location_importance",
    "condition_importance",
    "size_importance",
    "amenities_importance",
    "market_rate_importance",
)

MIN_IMPORTANCE = 0
MAX_IMPORTANCE = 100


@dataclass
class Metrics:
    """
    Importance weights, each in [0, 100].

    Weights are applied independently and need not sum to 100.
    Out-of-range values are rejected rather than clamped.
    """
    location_importance: float
    condition_importance: float
    size_importance: float
    amenities_importance: float
    market_rate_importance: float

    def __post_init__(self):
        for name in METRIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValidationError(f"{name} must be a number", field=name)
            if value < MIN_IMPORTANCE or value > MAX_IMPORTANCE:
                raise ValidationError(
                    f"{name} must be between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}",
                    field=name,
                )


@dataclass
class ComparableProperty:
    """A comparable rental in the subject's market."""
    rent: float
    area_units: float
    bedrooms: int = 0
    bathrooms: float = 0
    distance: Optional[float] = None  # Miles from the subject
    address: Optional[str] = None

    def __post_init__(self):
        self.rent = _require_positive(self.rent, "comparable rent")
        self.area_units = _require_positive(self.area_units, "comparable areaUnits")

    @property
    def rate_per_area(self) -> float:
        return self.rent / self.area_units


@dataclass
class MarketData:
    """Caller-supplied market summary, trusted as-is."""
    average_rent: float
    comparable_properties: List[ComparableProperty] = field(default_factory=list)

    def __post_init__(self):
        self.average_rent = _require_non_negative(self.average_rent, "averageRent")


@dataclass
class EvaluationRequest:
    """A single fairness evaluation request."""
    property_details: PropertyDetails
    metrics: Metrics
    market_data: Optional[MarketData] = None

    def __post_init__(self):
        if self.property_details is None:
            raise ValidationError("Missing required parameter: propertyDetails", field="propertyDetails")
        if self.metrics is None:
            raise ValidationError("Missing required parameter: metrics", field="metrics")


@dataclass(frozen=True)
class FairPriceRange:
    """Fair monthly rent band, min <= max."""
    min: int
    max: int

    def contains(self, rent: float) -> bool:
        return self.min <= rent <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class EvaluationResult:
    """
    Complete fairness verdict for a subject property.

    This is the sole output artifact; callers decide whether to store it.
    """
    fairness_score: int
    analysis: str
    recommendations: List[str]
    fair_price_range: FairPriceRange
    summary: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "fairnessScore": self.fairness_score,
            "analysis": self.analysis,
            "recommendations": list(self.recommendations),
            "fairPriceRange": self.fair_price_range.to_dict(),
            "summary": self.summary,
        }
