"""
Recommendation Generator

Rule-based remediation suggestions. Rules run in order and each adds at
most one recommendation (the rent rule may add a second, range-specific
line). The result is never empty.
"""

from typing import List

from utils.formatting import format_currency

from .constants import DEFAULT_CONSTANTS, ScoringConstants
from .models import FairPriceRange, PropertyDetails


ADJUST_RENT = "Consider adjusting the rent to be closer to fair market value."
LOWER_RENT = "Lower the rent closer to the fair price range of {min} - {max}."
ADD_AMENITIES = "Consider adding more amenities to justify the current rent level."
IMPROVE_CONDITION = "Improving the property condition could justify a higher rent."
KEEP_MONITORING = (
    "Continue monitoring market rates to ensure the property remains "
    "competitively priced."
)


def recommend(
    subject: PropertyDetails,
    fairness_score: int,
    fair_price_range: FairPriceRange,
    constants: ScoringConstants = DEFAULT_CONSTANTS,
    currency: str = "USD",
) -> List[str]:
    """
    Generate remediation recommendations.

    Args:
        subject: The property being evaluated
        fairness_score: Score from the Fairness Scorer
        fair_price_range: Fair price range from the Fairness Scorer
        constants: Score and amenity thresholds
        currency: Currency code for the range message

    Returns:
        Non-empty list of recommendations
    """
    recommendations = []

    if fairness_score < constants.adjust_rent_below_score:
        recommendations.append(ADJUST_RENT)
        if subject.rent > fair_price_range.max:
            recommendations.append(LOWER_RENT.format(
                min=format_currency(fair_price_range.min, currency),
                max=format_currency(fair_price_range.max, currency),
            ))

    if subject.amenity_count < constants.min_amenity_count:
        recommendations.append(ADD_AMENITIES)

    if subject.condition.needs_improvement:
        recommendations.append(IMPROVE_CONDITION)

    if not recommendations:
        recommendations.append(KEEP_MONITORING)

    return recommendations
