"""Signal computations: EMA trend indicators and Fibonacci levels."""

from fibtrader.signals.indicators import compute_ema, compute_indicators, detect_cross
from fibtrader.signals.levels import fibonacci_levels, within_band
from fibtrader.signals.models import FIBONACCI_RATIOS, CrossSignal, Indicators

__all__ = [
    "FIBONACCI_RATIOS",
    "CrossSignal",
    "Indicators",
    "compute_ema",
    "compute_indicators",
    "detect_cross",
    "fibonacci_levels",
    "within_band",
]
