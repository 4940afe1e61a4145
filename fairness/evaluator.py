"""
Rent Fairness Evaluator - Integrated Evaluation Pipeline

Pipeline order:
1. SELECT - Query comparables (only when no market data is supplied)
2. AGGREGATE - Reduce comparables to market figures (or fall back)
3. SCORE - Fairness score and fair price range
4. RECOMMEND - Remediation suggestions
5. ASSEMBLE - Narrative analysis and summary

Stateless: every call works on its own inputs, so evaluations may run
concurrently without locking.
"""

import logging
from typing import List, Optional

from .assembler import assemble
from .comparables import DEFAULT_STORE_TIMEOUT_SECONDS, ComparableSelector
from .constants import COMPARABLE_LIMIT, DEFAULT_CONSTANTS, ScoringConstants
from .market import MarketSummary, aggregate, fallback_average_rent_for
from .models import ComparableProperty, EvaluationRequest, EvaluationResult
from .recommendations import recommend
from .scoring import FairnessScorer, ScoringRules
from .store import InMemoryPropertyStore, PropertyStore


logger = logging.getLogger(__name__)


class RentFairnessEvaluator:
    """
    Evaluates whether a rent is fair for a property.

    When the caller supplies market data it is trusted as-is; otherwise
    comparables are drawn from the property store.
    """

    def __init__(
        self,
        store: Optional[PropertyStore] = None,
        constants: ScoringConstants = DEFAULT_CONSTANTS,
        rules: Optional[ScoringRules] = None,
        comparable_limit: int = COMPARABLE_LIMIT,
        store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        currency: str = "USD",
    ):
        """
        Initialize the evaluator.

        Args:
            store: Comparable source (default: empty in-memory store)
            constants: Named engine constants
            rules: Weighting policy for the scorer
            comparable_limit: Maximum comparables per evaluation
            store_timeout_seconds: Upper bound on the store query
            currency: Currency code used in messages
        """
        self._constants = constants
        self._currency = currency
        self._selector = ComparableSelector(
            store if store is not None else InMemoryPropertyStore(),
            limit=comparable_limit,
            timeout_seconds=store_timeout_seconds,
        )
        self._scorer = FairnessScorer(constants=constants, rules=rules)

    @property
    def store(self) -> PropertyStore:
        """Comparable source queried when no market data is supplied."""
        return self._selector.store

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """
        Run the full evaluation pipeline.

        Args:
            request: Subject property, metrics and optional market data

        Returns:
            EvaluationResult

        Raises:
            ValidationError: Inputs cannot be scored
            ComputationError: Arithmetic fault during scoring
        """
        subject = request.property_details

        # Step 1: Comparables (caller data wins)
        if request.market_data is not None:
            comparables = list(request.market_data.comparable_properties)
        else:
            comparables = await self._selector.select(subject)

        # Step 2: Market figures
        market = self.summarize_market(request, comparables)

        # Step 3: Score
        scored = self._scorer.score(subject, request.metrics, market)

        # Step 4: Recommendations
        recommendations = recommend(
            subject,
            scored.fairness_score,
            scored.fair_price_range,
            constants=self._constants,
            currency=self._currency,
        )

        logger.info(
            "Rent fairness score %d (market basis=%s, comparables=%d)",
            scored.fairness_score,
            market.basis.value,
            market.comparable_count,
        )
        logger.debug(
            "Score breakdown: base=%.2f weighted=%.2f factors=%s",
            scored.base_score,
            scored.weighted_score,
            scored.factors.to_dict(),
        )

        # Step 5: Assemble
        return assemble(
            subject,
            market,
            scored.fairness_score,
            scored.fair_price_range,
            recommendations,
            constants=self._constants,
            currency=self._currency,
        )

    def summarize_market(
        self,
        request: EvaluationRequest,
        comparables: List[ComparableProperty],
    ) -> MarketSummary:
        """Aggregate comparables, falling back to the caller's or a size-based average."""
        subject = request.property_details
        market = aggregate(
            comparables,
            subject.area_units,
            fallback_average_rent_for(subject, request.market_data, self._constants),
            self._constants,
        )
        if market.is_fallback:
            logger.info(
                "No comparables available; using fallback average rent %.2f",
                market.average_rent,
            )
        return market
