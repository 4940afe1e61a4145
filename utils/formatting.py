"""
Formatting utilities.
"""

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
}


def _symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get(currency, currency + " ")


def format_currency(amount: float, currency: str = "USD") -> str:
    """
    Format an amount as whole currency units.

    Args:
        amount: The amount (rounded to whole units for display).
        currency: Currency code (default USD).

    Returns:
        Formatted currency string, e.g. "$1,500".
    """
    return f"{_symbol(currency)}{amount:,.0f}"


def format_rate(value: float, currency: str = "USD", decimals: int = 2) -> str:
    """
    Format a per-unit rate, e.g. rent per square foot.

    Args:
        value: The rate.
        currency: Currency code (default USD).
        decimals: Number of decimal places.

    Returns:
        Formatted rate string, e.g. "$1.50".
    """
    return f"{_symbol(currency)}{value:,.{decimals}f}"


def format_area(value: float) -> str:
    """Format an area without trailing zeros, e.g. "1,000" or "812.5"."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_amount(amount: float, currency: str = "USD") -> str:
    """
    Format an amount as given: whole amounts without decimals, anything
    else to the cent, e.g. "$1,500" or "$1,499.60".
    """
    if float(amount).is_integer():
        return format_currency(amount, currency)
    return f"{_symbol(currency)}{amount:,.2f}"
