"""
Result Assembler

Packages the score, fair price range and recommendations into an
EvaluationResult with a narrative analysis and a one-line summary.
"""

from enum import Enum
from typing import List

from utils.formatting import format_amount, format_area, format_rate

from .constants import DEFAULT_CONSTANTS, ScoringConstants
from .market import MarketSummary
from .models import EvaluationResult, FairPriceRange, PropertyDetails


class SummaryLabel(Enum):
    """
    One-line classification of a fairness score.

    >= 90: Exceptional
    >= 80: Fair
    >= 70: Reasonable (adjustable)
    >= 60: Somewhat overpriced
    < 60: Significantly overpriced
    """
    EXCEPTIONAL = "This property is priced exceptionally fairly relative to the market."
    FAIR = "This property is priced fairly relative to the market."
    REASONABLE = (
        "This property is priced reasonably but could be adjusted to better "
        "match the market."
    )
    SOMEWHAT_OVERPRICED = (
        "This property may be somewhat overpriced for its features and location."
    )
    SIGNIFICANTLY_OVERPRICED = (
        "This property appears to be significantly overpriced relative to the market."
    )

    @classmethod
    def for_score(cls, fairness_score: int) -> "SummaryLabel":
        if fairness_score >= 90:
            return cls.EXCEPTIONAL
        elif fairness_score >= 80:
            return cls.FAIR
        elif fairness_score >= 70:
            return cls.REASONABLE
        elif fairness_score >= 60:
            return cls.SOMEWHAT_OVERPRICED
        else:
            return cls.SIGNIFICANTLY_OVERPRICED


class MarketPosition(Enum):
    """Subject rate relative to the market rate."""
    ABOVE = "The property appears to be priced above market rates."
    BELOW = "The property appears to be priced below market rates."
    AT = "The property appears to be priced at fair market value."


def market_position(
    price_per_area: float,
    market_price_per_area: float,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
) -> MarketPosition:
    if price_per_area > market_price_per_area * constants.above_market_ratio:
        return MarketPosition.ABOVE
    if price_per_area < market_price_per_area * constants.below_market_ratio:
        return MarketPosition.BELOW
    return MarketPosition.AT


def build_analysis(
    subject: PropertyDetails,
    market: MarketSummary,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    currency: str = "USD",
) -> str:
    """Narrative comparing the subject's rate with the market rate."""
    price_per_area = subject.price_per_area
    market_price_per_area = market.average_rate_per_area
    position = market_position(price_per_area, market_price_per_area, constants)

    return (
        f"This property's rent is {format_amount(subject.rent, currency)} "
        f"for {format_area(subject.area_units)} square feet, which is "
        f"{format_rate(price_per_area, currency)} per square foot. "
        f"Based on comparable properties in the area, the market rate is "
        f"approximately {format_rate(market_price_per_area, currency)} per square foot. "
        f"{position.value}"
    )


def assemble(
    subject: PropertyDetails,
    market: MarketSummary,
    fairness_score: int,
    fair_price_range: FairPriceRange,
    recommendations: List[str],
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    currency: str = "USD",
) -> EvaluationResult:
    """
    Build the EvaluationResult.

    Args:
        subject: The property being evaluated
        market: Aggregated market figures
        fairness_score: Score from the Fairness Scorer
        fair_price_range: Fair price range from the Fairness Scorer
        recommendations: Output of the Recommendation Generator
        constants: Market positioning thresholds
        currency: Currency code for the narrative

    Returns:
        EvaluationResult
    """
    return EvaluationResult(
        fairness_score=fairness_score,
        analysis=build_analysis(subject, market, constants, currency),
        recommendations=list(recommendations),
        fair_price_range=fair_price_range,
        summary=SummaryLabel.for_score(fairness_score).value,
    )
