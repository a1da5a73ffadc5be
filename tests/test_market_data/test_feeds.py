"""Tests for price feeds.

ExchangeFeed tests use a mocked ccxt exchange to avoid real API calls.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import ccxt.async_support as ccxt_async
import pytest

from fibtrader.config import FeedSettings
from fibtrader.exceptions import FeedError, FeedExhausted, InvalidPriceError
from fibtrader.market_data.feeds import ExchangeFeed, RandomWalkFeed, SequenceFeed, build_feed


class TestSequenceFeed:
    """Tests for SequenceFeed."""

    @pytest.mark.asyncio
    async def test_replays_prices_then_exhausts(self) -> None:
        feed = SequenceFeed([Decimal("0.1"), "0.2", 3])

        assert await feed.next_price() == Decimal("0.1")
        assert await feed.next_price() == Decimal("0.2")
        assert await feed.next_price() == Decimal("3")
        with pytest.raises(FeedExhausted):
            await feed.next_price()

    @pytest.mark.asyncio
    async def test_exhaustion_is_a_feed_error(self) -> None:
        with pytest.raises(FeedError):
            await SequenceFeed([]).next_price()


class TestRandomWalkFeed:
    """Tests for RandomWalkFeed."""

    @pytest.mark.asyncio
    async def test_first_price_is_start_price(self) -> None:
        feed = RandomWalkFeed(Decimal("0.1"), seed=1)
        assert await feed.next_price() == Decimal("0.1")

    @pytest.mark.asyncio
    async def test_same_seed_same_walk(self) -> None:
        a = RandomWalkFeed(Decimal("0.1"), Decimal("0.05"), seed=42)
        b = RandomWalkFeed(Decimal("0.1"), Decimal("0.05"), seed=42)
        walk_a = [await a.next_price() for _ in range(50)]
        walk_b = [await b.next_price() for _ in range(50)]
        assert walk_a == walk_b

    @pytest.mark.asyncio
    async def test_steps_stay_within_volatility(self) -> None:
        feed = RandomWalkFeed(Decimal("100"), Decimal("0.02"), seed=7)
        previous = await feed.next_price()
        for _ in range(200):
            price = await feed.next_price()
            assert price > 0
            # quantization may nudge a step by one unit in the last place
            assert abs(price - previous) <= previous * Decimal("0.02") + Decimal("0.00000001")
            previous = price

    def test_rejects_non_positive_start(self) -> None:
        with pytest.raises(InvalidPriceError):
            RandomWalkFeed(Decimal("0"))

    def test_rejects_volatility_of_one_or_more(self) -> None:
        with pytest.raises(ValueError):
            RandomWalkFeed(Decimal("1"), Decimal("1"))


def _mock_exchange(**fetch_kwargs) -> MagicMock:
    exchange = MagicMock()
    exchange.fetch_ticker = AsyncMock(**fetch_kwargs)
    exchange.close = AsyncMock()
    return exchange


class TestExchangeFeed:
    """Tests for ExchangeFeed."""

    @pytest.mark.asyncio
    async def test_returns_last_price_as_decimal(self) -> None:
        exchange = _mock_exchange(return_value={"symbol": "DOGE/USDT", "last": 0.08123})
        feed = ExchangeFeed("binance", "DOGE/USDT", exchange=exchange)

        assert await feed.next_price() == Decimal("0.08123")
        exchange.fetch_ticker.assert_awaited_once_with("DOGE/USDT")

    @pytest.mark.asyncio
    async def test_ccxt_error_wrapped_in_feed_error(self) -> None:
        exchange = _mock_exchange(side_effect=ccxt_async.NetworkError("timeout"))
        feed = ExchangeFeed("binance", "DOGE/USDT", exchange=exchange)

        with pytest.raises(FeedError, match="timeout"):
            await feed.next_price()

    @pytest.mark.asyncio
    async def test_missing_last_price_raises(self) -> None:
        exchange = _mock_exchange(return_value={"symbol": "DOGE/USDT", "last": None})
        feed = ExchangeFeed("binance", "DOGE/USDT", exchange=exchange)

        with pytest.raises(FeedError):
            await feed.next_price()

    @pytest.mark.asyncio
    async def test_close_releases_exchange(self) -> None:
        exchange = _mock_exchange(return_value={})
        feed = ExchangeFeed("binance", "DOGE/USDT", exchange=exchange)
        await feed.close()
        exchange.close.assert_awaited_once()

    def test_unknown_exchange_id_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown ccxt exchange"):
            ExchangeFeed("not_a_real_exchange", "DOGE/USDT")


class TestBuildFeed:
    """Tests for build_feed."""

    @pytest.mark.asyncio
    async def test_random_walk_by_default(self) -> None:
        feed = build_feed(FeedSettings(start_price=Decimal("0.5"), seed=3))
        assert isinstance(feed, RandomWalkFeed)
        assert await feed.next_price() == Decimal("0.5")
