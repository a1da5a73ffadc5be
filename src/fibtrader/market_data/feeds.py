"""Pull-based price sources for the driver loop.

The decision core never fetches prices itself; a PriceFeed is injected
into the TradingBot so tests can supply deterministic sequences while
production polls an exchange.
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal

import ccxt.async_support as ccxt_async

from fibtrader.config import FeedSettings
from fibtrader.exceptions import FeedError, FeedExhausted, InvalidPriceError
from fibtrader.logging import get_logger

logger = get_logger(__name__)

#: Random walk prices are rounded to 8 decimal places (satoshi precision).
_PRICE_QUANTIZE = Decimal("0.00000001")


class PriceFeed(ABC):
    """Abstract source of the next observed price."""

    @abstractmethod
    async def next_price(self) -> Decimal:
        """Return the next price.

        Raises:
            FeedError: If no price can be produced.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the feed."""


class SequenceFeed(PriceFeed):
    """Replays a fixed sequence of prices, then raises FeedExhausted."""

    def __init__(self, prices: Iterable[Decimal | int | str]) -> None:
        self._prices = iter(prices)

    async def next_price(self) -> Decimal:
        try:
            value = next(self._prices)
        except StopIteration:
            raise FeedExhausted("price sequence exhausted") from None
        return value if isinstance(value, Decimal) else Decimal(str(value))


class RandomWalkFeed(PriceFeed):
    """Multiplicative random walk: each step moves price by up to +/-volatility.

    Args:
        start_price: First price returned.
        volatility: Maximum relative move per step (0.02 = 2%).
        seed: Optional RNG seed for reproducible walks.
    """

    def __init__(
        self,
        start_price: Decimal,
        volatility: Decimal = Decimal("0.02"),
        seed: int | None = None,
    ) -> None:
        if start_price <= 0:
            raise InvalidPriceError(f"start_price must be positive, got {start_price}")
        if not Decimal("0") <= volatility < Decimal("1"):
            raise ValueError(f"volatility must be in [0, 1), got {volatility}")
        self._price = start_price
        self._volatility = volatility
        self._rng = random.Random(seed)
        self._started = False

    async def next_price(self) -> Decimal:
        if not self._started:
            self._started = True
            return self._price

        step = Decimal(str(self._rng.uniform(-1.0, 1.0))) * self._volatility
        next_price = (self._price * (Decimal("1") + step)).quantize(_PRICE_QUANTIZE)
        # Quantizing a tiny price can round to zero; hold the last price instead.
        if next_price > 0:
            self._price = next_price
        return self._price


class ExchangeFeed(PriceFeed):
    """Last traded price from a ccxt exchange's public ticker.

    Args:
        exchange_id: ccxt exchange id (e.g. "binance", "bybit").
        symbol: Unified market symbol (e.g. "DOGE/USDT").
        exchange: Pre-built ccxt async exchange, mainly for tests.
    """

    def __init__(
        self,
        exchange_id: str,
        symbol: str,
        exchange: ccxt_async.Exchange | None = None,
    ) -> None:
        if exchange is None:
            exchange_cls = getattr(ccxt_async, exchange_id, None)
            if exchange_cls is None:
                raise ValueError(f"Unknown ccxt exchange id: {exchange_id}")
            exchange = exchange_cls({"enableRateLimit": True})
        self._exchange = exchange
        self._exchange_id = exchange_id
        self._symbol = symbol

    @property
    def symbol(self) -> str:
        return self._symbol

    async def next_price(self) -> Decimal:
        try:
            ticker = await self._exchange.fetch_ticker(self._symbol)
        except ccxt_async.BaseError as e:
            raise FeedError(
                f"fetch_ticker failed for {self._symbol} on {self._exchange_id}: {e}"
            ) from e

        last = ticker.get("last")
        if last is None:
            raise FeedError(f"No last price in ticker for {self._symbol}")

        price = Decimal(str(last))
        if price <= 0:
            raise FeedError(f"Non-positive last price {price} for {self._symbol}")
        return price

    async def close(self) -> None:
        """Clean up ccxt async resources. Must be called to avoid resource leaks."""
        logger.info("closing_exchange_feed", exchange=self._exchange_id)
        await self._exchange.close()


def build_feed(settings: FeedSettings) -> PriceFeed:
    """Create the price feed selected by ``settings.source``."""
    if settings.source == "exchange":
        logger.info(
            "price_feed_selected",
            source="exchange",
            exchange=settings.exchange_id,
            symbol=settings.symbol,
        )
        return ExchangeFeed(settings.exchange_id, settings.symbol)

    logger.info(
        "price_feed_selected",
        source="random_walk",
        start_price=str(settings.start_price),
        volatility=str(settings.volatility),
        seed=settings.seed,
    )
    return RandomWalkFeed(settings.start_price, settings.volatility, settings.seed)
