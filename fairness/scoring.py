"""
Fairness Scorer

Compares the subject's rent per unit area with the market rate and folds in
importance-weighted adjustments for location, condition, amenities, size
and the market rate itself.

Scoring methodology:
- Base score: 100 minus the percentage deviation from the market rate
  (symmetric, clamped to 0-100)
- Adjustment factors centred near 1.0 for location, condition, amenities
  and size, plus the market/subject rate ratio
- Each factor is scaled by its importance weight / 100 and the sum
  multiplies the base score
- Final score clamped to 0-100 and rounded
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_CONSTANTS, ScoringConstants
from .errors import ComputationError, ValidationError
from .market import MarketSummary
from .models import FairPriceRange, Metrics, PropertyDetails


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class FactorBreakdown:
    """Adjustment factors used for one score."""
    location: float
    condition: float
    amenities: float
    size: float
    rate_ratio: float  # market rate / subject rate

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "condition": self.condition,
            "amenities": self.amenities,
            "size": self.size,
            "rate_ratio": self.rate_ratio,
        }


@dataclass(frozen=True)
class ScoreResult:
    """Score and fair price range for a subject property."""
    fairness_score: int
    fair_price_range: FairPriceRange
    price_per_area: float
    market_price_per_area: float
    base_score: float
    weighted_score: float
    factors: FactorBreakdown


class ScoringRules(ABC):
    """Weighting policy: how factors are derived and combined."""

    @abstractmethod
    def factors(
        self,
        subject: PropertyDetails,
        price_per_area: float,
        market_price_per_area: float,
    ) -> FactorBreakdown:
        """Derive the adjustment factors for a subject."""

    @abstractmethod
    def combine(self, base_score: float, factors: FactorBreakdown, metrics: Metrics) -> float:
        """Combine the base score with the weighted factors."""


class WeightedFactorRules(ScoringRules):
    """
    Default weighting policy.

    weighted = base x sum(factor x importance / 100)

    Importance weights are applied independently, so their total scales the
    result: five weights of 50 give a multiplier around 2.5.
    """

    def __init__(self, constants: ScoringConstants = DEFAULT_CONSTANTS):
        self._constants = constants

    def factors(
        self,
        subject: PropertyDetails,
        price_per_area: float,
        market_price_per_area: float,
    ) -> FactorBreakdown:
        return FactorBreakdown(
            location=self._location_factor(subject),
            condition=self._condition_factor(subject),
            amenities=self._amenities_factor(subject),
            size=self._size_factor(subject),
            rate_ratio=market_price_per_area / price_per_area,
        )

    def combine(self, base_score: float, factors: FactorBreakdown, metrics: Metrics) -> float:
        return base_score * (
            factors.location * (metrics.location_importance / 100)
            + factors.condition * (metrics.condition_importance / 100)
            + factors.amenities * (metrics.amenities_importance / 100)
            + factors.rate_ratio * (metrics.market_rate_importance / 100)
            + factors.size * (metrics.size_importance / 100)
        )

    def _location_factor(self, subject: PropertyDetails) -> float:
        """Unresolved locations are lower confidence."""
        if subject.has_resolved_location:
            return self._constants.location_resolved_factor
        return self._constants.location_unresolved_factor

    def _condition_factor(self, subject: PropertyDetails) -> float:
        if subject.condition.is_favourable:
            return self._constants.condition_favourable_factor
        if subject.condition.is_neutral:
            return self._constants.condition_neutral_factor
        return self._constants.condition_unfavourable_factor

    def _amenities_factor(self, subject: PropertyDetails) -> float:
        bonus = subject.amenity_count * self._constants.amenity_bonus_step
        return 1.0 + min(self._constants.amenity_bonus_cap, bonus)

    def _size_factor(self, subject: PropertyDetails) -> float:
        if subject.area_units > self._constants.size_threshold_units:
            return self._constants.size_large_factor
        return self._constants.size_small_factor


class FairnessScorer:
    """
    Produces a 0-100 fairness score and a fair price range.

    Deterministic: the same subject, metrics and market always give the
    same result.
    """

    def __init__(
        self,
        constants: ScoringConstants = DEFAULT_CONSTANTS,
        rules: Optional[ScoringRules] = None,
    ):
        """
        Initialize scorer.

        Args:
            constants: Range band and factor constants
            rules: Weighting policy (default: WeightedFactorRules)
        """
        self._constants = constants
        self._rules = rules or WeightedFactorRules(constants)

    @property
    def constants(self) -> ScoringConstants:
        return self._constants

    def score(
        self,
        subject: PropertyDetails,
        metrics: Metrics,
        market: MarketSummary,
    ) -> ScoreResult:
        """
        Score a subject property against the market.

        Args:
            subject: The property being evaluated
            metrics: Importance weights
            market: Aggregated market figures

        Returns:
            ScoreResult with score, fair price range and factor breakdown

        Raises:
            ValidationError: market rate is not positive
            ComputationError: arithmetic fault during scoring
        """
        market_price_per_area = market.average_rate_per_area
        if not market_price_per_area > 0:
            raise ValidationError(
                "Market rent per unit area must be greater than zero",
                field="marketData",
            )

        try:
            price_per_area = subject.price_per_area
            base_score = self._calculate_base_score(price_per_area, market_price_per_area)
            factors = self._rules.factors(subject, price_per_area, market_price_per_area)
            weighted_score = self._rules.combine(base_score, factors, metrics)
            fair_price = market_price_per_area * subject.area_units
        except (ZeroDivisionError, OverflowError) as e:
            raise ComputationError(f"Fairness score could not be computed: {e}") from e

        if not (math.isfinite(weighted_score) and math.isfinite(fair_price)):
            raise ComputationError("Fairness score could not be computed: non-finite result")

        fairness_score = round_half_up(max(0.0, min(100.0, weighted_score)))

        return ScoreResult(
            fairness_score=fairness_score,
            fair_price_range=self._calculate_fair_price_range(fair_price),
            price_per_area=price_per_area,
            market_price_per_area=market_price_per_area,
            base_score=base_score,
            weighted_score=weighted_score,
            factors=factors,
        )

    @staticmethod
    def _calculate_base_score(price_per_area: float, market_price_per_area: float) -> float:
        """Penalise deviation from the market rate in either direction."""
        deviation = abs(price_per_area / market_price_per_area - 1) * 100
        return 100 - min(100.0, deviation)

    def _calculate_fair_price_range(self, fair_price: float) -> FairPriceRange:
        return FairPriceRange(
            min=round_half_up(fair_price * self._constants.fair_range_low),
            max=round_half_up(fair_price * self._constants.fair_range_high),
        )
