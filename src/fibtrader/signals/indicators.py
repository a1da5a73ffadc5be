"""Exponential moving averages over the rolling price window.

Seeds the EMA with the first price of the sequence rather than an SMA of
the first ``period`` prices. The previous-window EMAs used for cross
detection are computed with the same rule, so the two stay comparable.

Arithmetic runs in a local decimal context with a fixed number of
significant digits, so results stay bounded for any price magnitude.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal, localcontext

from fibtrader.exceptions import InvalidPeriodError
from fibtrader.signals.models import CrossSignal, Indicators

#: Significant digits kept for EMA intermediate results.
_EMA_PRECISION = 28


def compute_ema(prices: list[Decimal], period: int) -> Decimal | None:
    """Compute the latest EMA value over ``prices`` (oldest first).

    Uses the recursive formula in its incremental form:
        k = 2 / (period + 1)
        EMA_t = EMA_{t-1} + k * (price_t - EMA_{t-1})

    which equals ``price_t * k + EMA_{t-1} * (1 - k)`` and leaves a
    constant series exactly unchanged.

    Args:
        prices: Ordered list of prices, oldest first.
        period: EMA period.

    Returns:
        The final EMA value, or None when fewer than ``period`` prices exist.

    Raises:
        InvalidPeriodError: If period < 1.
    """
    if period < 1:
        raise InvalidPeriodError(f"EMA period must be >= 1, got {period}")
    if len(prices) < period:
        return None

    with localcontext() as ctx:
        ctx.prec = _EMA_PRECISION
        k = Decimal("2") / (Decimal(period) + Decimal("1"))

        ema = prices[0]
        for price in prices[1:]:
            ema = ema + k * (price - ema)
    return ema


def compute_indicators(prices: list[Decimal], fast_period: int, slow_period: int) -> Indicators:
    """Fast and slow EMA over the same price sequence."""
    return Indicators(
        ema_fast=compute_ema(prices, fast_period),
        ema_slow=compute_ema(prices, slow_period),
    )


def detect_cross(previous: Indicators, current: Indicators) -> CrossSignal:
    """Classify a fast/slow EMA cross between two consecutive windows.

    cross_up:   prev_fast <= prev_slow and fast > slow
    cross_down: prev_fast >= prev_slow and fast < slow

    No cross is reported when any of the four values is unavailable.
    """
    if not (previous.ready and current.ready):
        return CrossSignal(cross_up=False, cross_down=False)

    cross_up = previous.ema_fast <= previous.ema_slow and current.ema_fast > current.ema_slow
    cross_down = previous.ema_fast >= previous.ema_slow and current.ema_fast < current.ema_slow
    return CrossSignal(cross_up=cross_up, cross_down=cross_down)
