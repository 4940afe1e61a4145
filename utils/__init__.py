"""
Utility modules for the rent fairness engine.
"""

from .formatting import format_amount, format_area, format_currency, format_rate
from .config import Config

__all__ = ["format_amount", "format_area", "format_currency", "format_rate", "Config"]
