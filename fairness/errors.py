"""
Error taxonomy for the rent fairness engine.

- ValidationError: bad caller input, surfaced as a 4xx.
- UpstreamDataUnavailable: the comparable store failed; absorbed by the
  Comparable Selector and replaced with fallback market figures.
- ComputationError: arithmetic fault during scoring, surfaced as a 5xx.
"""

from typing import Optional


class FairnessEngineError(Exception):
    """Base class for all engine errors."""


class ValidationError(FairnessEngineError, ValueError):
    """Missing or invalid evaluation input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UpstreamDataUnavailable(FairnessEngineError):
    """The property store could not be queried."""


class ComputationError(FairnessEngineError, ArithmeticError):
    """Scoring produced an arithmetic fault."""
