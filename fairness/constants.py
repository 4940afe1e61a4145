"""
Tunable constants for the rent fairness engine.

Module-level values are the defaults; ScoringConstants bundles them so a
scorer, aggregator or recommender can be built with different settings
without touching the pipeline.
"""

from dataclasses import dataclass
from typing import Final


# =============================================================================
# Comparable Selection
# =============================================================================

# Maximum comparables pulled from the property store per evaluation
COMPARABLE_LIMIT: Final[int] = 5

# Bedroom window around the subject (+/-)
BEDROOM_TOLERANCE: Final[int] = 1

# Substitutes for missing store fields
DEFAULT_COMPARABLE_RENT: Final[float] = 1500.0
DEFAULT_COMPARABLE_AREA_UNITS: Final[float] = 1000.0


# =============================================================================
# Market Aggregation
# =============================================================================

# Baseline area used to turn an average rent into a rate when no comps exist
REFERENCE_AREA_UNITS: Final[float] = 1000.0

# Size heuristic for the fallback average rent (rent per unit area)
FALLBACK_RATE_PER_AREA: Final[float] = 1.5


# =============================================================================
# Scoring Factors
# =============================================================================

LOCATION_RESOLVED_FACTOR: Final[float] = 1.0
LOCATION_UNRESOLVED_FACTOR: Final[float] = 0.9

CONDITION_FAVOURABLE_FACTOR: Final[float] = 1.1
CONDITION_NEUTRAL_FACTOR: Final[float] = 1.0
CONDITION_UNFAVOURABLE_FACTOR: Final[float] = 0.9

AMENITY_BONUS_STEP: Final[float] = 0.02
AMENITY_BONUS_CAP: Final[float] = 0.2

SIZE_THRESHOLD_UNITS: Final[int] = 800
SIZE_LARGE_FACTOR: Final[float] = 1.1
SIZE_SMALL_FACTOR: Final[float] = 0.9

# Fair price band around the market-rate price
FAIR_RANGE_LOW: Final[float] = 0.9
FAIR_RANGE_HIGH: Final[float] = 1.1

# Price-per-area positioning relative to market
ABOVE_MARKET_RATIO: Final[float] = 1.1
BELOW_MARKET_RATIO: Final[float] = 0.9


# =============================================================================
# Recommendations
# =============================================================================

ADJUST_RENT_BELOW_SCORE: Final[int] = 70
MIN_AMENITY_COUNT: Final[int] = 3


@dataclass(frozen=True)
class ScoringConstants:
    """Named constants injected into the engine components."""
    reference_area_units: float = REFERENCE_AREA_UNITS
    fallback_rate_per_area: float = FALLBACK_RATE_PER_AREA

    location_resolved_factor: float = LOCATION_RESOLVED_FACTOR
    location_unresolved_factor: float = LOCATION_UNRESOLVED_FACTOR
    condition_favourable_factor: float = CONDITION_FAVOURABLE_FACTOR
    condition_neutral_factor: float = CONDITION_NEUTRAL_FACTOR
    condition_unfavourable_factor: float = CONDITION_UNFAVOURABLE_FACTOR
    amenity_bonus_step: float = AMENITY_BONUS_STEP
    amenity_bonus_cap: float = AMENITY_BONUS_CAP
    size_threshold_units: float = SIZE_THRESHOLD_UNITS
    size_large_factor: float = SIZE_LARGE_FACTOR
    size_small_factor: float = SIZE_SMALL_FACTOR

    fair_range_low: float = FAIR_RANGE_LOW
    fair_range_high: float = FAIR_RANGE_HIGH
    above_market_ratio: float = ABOVE_MARKET_RATIO
    below_market_ratio: float = BELOW_MARKET_RATIO

    adjust_rent_below_score: int = ADJUST_RENT_BELOW_SCORE
    min_amenity_count: int = MIN_AMENITY_COUNT


DEFAULT_CONSTANTS = ScoringConstants()
