"""Fibonacci retracement levels between the window high and low."""

from decimal import Decimal

from fibtrader.exceptions import InvalidPriceRangeError
from fibtrader.signals.models import FIBONACCI_RATIOS


def fibonacci_levels(high: Decimal, low: Decimal) -> tuple[Decimal, ...]:
    """Return the 7 retracement prices ordered high-to-low.

    Each level is ``high - (high - low) * ratio`` for ratios
    0, 0.25, 0.382, 0.5, 0.618, 0.75, 1.0, so index 0 is ``high`` and
    index 6 is ``low``.

    Raises:
        InvalidPriceRangeError: If high < low.
    """
    if high < low:
        raise InvalidPriceRangeError(f"high ({high}) must be >= low ({low})")
    diff = high - low
    return tuple(high - diff * ratio for ratio in FIBONACCI_RATIOS)


def within_band(price: Decimal, level: Decimal, band: Decimal) -> bool:
    """True when price lies within +/-``band`` (relative) of ``level``, inclusive."""
    return level * (Decimal("1") - band) <= price <= level * (Decimal("1") + band)
