"""
Market Aggregator

Reduces a set of comparables to the two market figures the scorer needs:
average rent and average rent per unit area. When no comparables are
available the summary is explicitly tagged as a fallback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .constants import DEFAULT_CONSTANTS, ScoringConstants
from .models import ComparableProperty, MarketData, PropertyDetails


class MarketBasis(Enum):
    """Where the market figures came from."""
    COMPARABLES = "comparables"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class MarketSummary:
    """Aggregated market figures for one evaluation."""
    basis: MarketBasis
    average_rent: float
    average_rate_per_area: float
    comparable_count: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.basis is MarketBasis.FALLBACK


def aggregate(
    comparables: List[ComparableProperty],
    subject_area_units: float,
    fallback_average_rent: Optional[float] = None,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> MarketSummary:
    """
    Aggregate comparables into market figures.

    Args:
        comparables: Comparable properties (may be empty)
        subject_area_units: Subject size, drives the size-based fallback
        fallback_average_rent: Average rent to use when there are no
            comparables (default: subject_area_units x fallback rate)
        constants: Fallback rate and reference area

    Returns:
        MarketSummary tagged COMPARABLES or FALLBACK
    """
    if comparables:
        count = len(comparables)
        average_rent = sum(c.rent for c in comparables) / count
        average_rate = sum(c.rate_per_area for c in comparables) / count
        return MarketSummary(
            basis=MarketBasis.COMPARABLES,
            average_rent=average_rent,
            average_rate_per_area=average_rate,
            comparable_count=count,
        )

    if fallback_average_rent is None:
        fallback_average_rent = subject_area_units * constants.fallback_rate_per_area

    # No comps: assume the average rent describes a reference-sized unit
    return MarketSummary(
        basis=MarketBasis.FALLBACK,
        average_rent=fallback_average_rent,
        average_rate_per_area=fallback_average_rent / constants.reference_area_units,
        comparable_count=0,
    )


def fallback_average_rent_for(
    subject: PropertyDetails,
    market_data: Optional[MarketData] = None,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> float:
    """
    Average rent to fall back on when there are no comparables.

    A caller-supplied average wins; otherwise estimate from the subject's size.
    """
    if market_data is not None:
        return market_data.average_rent
    return subject.area_units * constants.fallback_rate_per_area
