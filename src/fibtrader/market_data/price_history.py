"""Fixed-capacity rolling window of price samples."""

from collections import deque
from decimal import Decimal

from fibtrader.exceptions import InsufficientHistoryError
from fibtrader.models import PriceSample

DEFAULT_CAPACITY = 21


class PriceHistory:
    """Chronological buffer of PriceSample, oldest evicted first.

    Args:
        capacity: Maximum number of samples retained.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._samples: deque[PriceSample] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._samples)

    def is_full(self) -> bool:
        return len(self._samples) >= self._capacity

    def push(self, sample: PriceSample) -> None:
        """Append a sample at the tail, evicting from the head past capacity."""
        self._samples.append(sample)
        while len(self._samples) > self._capacity:
            self._samples.popleft()

    def samples(self) -> list[PriceSample]:
        return list(self._samples)

    def prices(self) -> list[Decimal]:
        """Price values only, oldest first."""
        return [s.price for s in self._samples]

    @property
    def latest(self) -> PriceSample | None:
        return self._samples[-1] if self._samples else None

    def high_low(self) -> tuple[Decimal, Decimal]:
        """Return (max, min) over the window prices.

        Raises:
            InsufficientHistoryError: If the window is empty.
        """
        if not self._samples:
            raise InsufficientHistoryError("high_low requested on an empty price history")
        prices = self.prices()
        return max(prices), min(prices)
