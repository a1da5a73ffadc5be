"""Signal data models: EMA snapshot and Fibonacci retracement levels.

CRITICAL: All indicator values use Decimal. Never use float for signal computations.
"""

from dataclasses import dataclass
from decimal import Decimal

#: Retracement ratios ordered high-to-low price (index 0 = high, 6 = low).
FIBONACCI_RATIOS: tuple[Decimal, ...] = (
    Decimal("0"),
    Decimal("0.25"),
    Decimal("0.382"),
    Decimal("0.5"),
    Decimal("0.618"),
    Decimal("0.75"),
    Decimal("1"),
)


@dataclass(frozen=True)
class Indicators:
    """Fast/slow EMA pair. None means not enough samples for that period."""

    ema_fast: Decimal | None
    ema_slow: Decimal | None

    @property
    def ready(self) -> bool:
        return self.ema_fast is not None and self.ema_slow is not None


@dataclass(frozen=True)
class CrossSignal:
    """EMA cross between the previous and current window."""

    cross_up: bool
    cross_down: bool
