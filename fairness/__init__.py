"""
Rent Fairness Engine - Core Evaluation Logic

Pipeline:
1. Comparable Selector (property store query with timeout and fallback)
2. Market Aggregator (average rent and rent per unit area)
3. Fairness Scorer (0-100 score, fair price range)
4. Recommendation Generator (rule-based, never empty)
5. Result Assembler (analysis narrative and summary)
"""

from .errors import (
    FairnessEngineError,
    ValidationError,
    UpstreamDataUnavailable,
    ComputationError,
)
from .models import (
    Condition,
    LocationDetails,
    PropertyDetails,
    Metrics,
    ComparableProperty,
    MarketData,
    EvaluationRequest,
    FairPriceRange,
    EvaluationResult,
)
from .constants import ScoringConstants, DEFAULT_CONSTANTS
from .store import (
    ComparableQuery,
    PropertyRecord,
    PropertyStore,
    InMemoryPropertyStore,
    RestPropertyStore,
    get_property_store,
)
from .comparables import ComparableSelector
from .market import MarketBasis, MarketSummary, aggregate
from .scoring import (
    FactorBreakdown,
    ScoreResult,
    ScoringRules,
    WeightedFactorRules,
    FairnessScorer,
)
from .recommendations import recommend
from .assembler import SummaryLabel, MarketPosition, assemble
from .evaluator import RentFairnessEvaluator

__all__ = [
    # Errors
    "FairnessEngineError",
    "ValidationError",
    "UpstreamDataUnavailable",
    "ComputationError",
    # Models
    "Condition",
    "LocationDetails",
    "PropertyDetails",
    "Metrics",
    "ComparableProperty",
    "MarketData",
    "EvaluationRequest",
    "FairPriceRange",
    "EvaluationResult",
    "ScoringConstants",
    "DEFAULT_CONSTANTS",
    # Property store
    "ComparableQuery",
    "PropertyRecord",
    "PropertyStore",
    "InMemoryPropertyStore",
    "RestPropertyStore",
    "get_property_store",
    # Pipeline stages
    "ComparableSelector",
    "MarketBasis",
    "MarketSummary",
    "aggregate",
    "FactorBreakdown",
    "ScoreResult",
    "ScoringRules",
    "WeightedFactorRules",
    "FairnessScorer",
    "recommend",
    "SummaryLabel",
    "MarketPosition",
    "assemble",
    # Evaluator
    "RentFairnessEvaluator",
]

__version__ = "1.0"
