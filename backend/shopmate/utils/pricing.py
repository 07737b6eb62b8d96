"""
Price arithmetic and formatting utilities.

WHAT: Half-up rounding to whole currency units and price display
WHY: Offers are quoted in whole units; 0.5 must round up, not to even
HOW: floor(x + 0.5) for rounding, currency symbol prefix for display
"""

import math

from ..core.config import settings


def round_to_unit(amount: float) -> int:
    """
    Round an amount to the nearest whole currency unit, halves rounding up.

    Python's round() uses banker's rounding (round(922.5) == 922), which
    would make offers depend on the parity of the amount.

    Args:
        amount: Raw amount, possibly fractional

    Returns:
        Whole-unit amount
    """
    return int(math.floor(amount + 0.5))


def discounted_price(original_price: float, discount_percent: float) -> int:
    """Apply a percentage discount and round to whole units."""
    return round_to_unit(original_price * (1 - discount_percent / 100))


def format_price(amount: float, symbol: str | None = None) -> str:
    """
    Format an amount for display in replies.

    Whole amounts print without decimals (₹920); fractional catalog
    prices keep two decimals (₹499.50).
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    if float(amount).is_integer():
        return f"{symbol}{int(amount)}"
    return f"{symbol}{amount:.2f}"


def format_percent(percent: float) -> str:
    """Format a discount percentage without a trailing .0."""
    if float(percent).is_integer():
        return str(int(percent))
    return f"{percent:g}"
