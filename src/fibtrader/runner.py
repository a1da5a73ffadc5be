"""Async driver loop: pull a price, tick the engine, sleep, repeat.

The decision core is synchronous; this loop owns the scheduling. Time is
read from an injectable clock and passed to the engine as integer epoch
seconds, so cooldown and stop-loss behave identically under a simulated
clock.
"""

import asyncio
import time
from collections.abc import Callable
from decimal import Decimal

from fibtrader.config import RunnerSettings
from fibtrader.engine import BotState, DecisionEngine, TickResult
from fibtrader.exceptions import FeedError, FeedExhausted
from fibtrader.logging import get_logger
from fibtrader.market_data.feeds import PriceFeed
from fibtrader.models import TradeEvent

logger = get_logger(__name__)


class TradingBot:
    """Runs one DecisionEngine against one PriceFeed until stopped.

    Args:
        engine: Configured decision engine.
        feed: Source of prices, one per tick.
        state: Bot state created by ``engine.initialize``.
        settings: Tick interval and optional tick limit.
        clock: Returns current epoch seconds. Defaults to time.time.
    """

    def __init__(
        self,
        engine: DecisionEngine,
        feed: PriceFeed,
        state: BotState,
        settings: RunnerSettings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._engine = engine
        self._feed = feed
        self._state = state
        self._settings = settings
        self._clock = clock
        self._running = False
        self._stop_event = asyncio.Event()
        self._ticks = 0
        self._events: list[TradeEvent] = []
        self._last_price: Decimal | None = None

    @property
    def state(self) -> BotState:
        return self._state

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def events(self) -> list[TradeEvent]:
        return list(self._events)

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Run the tick loop until stop(), feed exhaustion, or max_ticks."""
        logger.info(
            "bot_starting",
            interval=self._settings.tick_interval_seconds,
            max_ticks=self._settings.max_ticks,
        )
        self._running = True
        self._stop_event.clear()
        try:
            await self._run_loop()
        finally:
            self._running = False
            self._log_summary()

    async def stop(self) -> None:
        """Signal the loop to stop after the current tick."""
        logger.info("bot_stopping_gracefully")
        self._running = False
        self._stop_event.set()

    async def close(self) -> None:
        """Release the price feed."""
        await self._feed.close()

    async def _run_loop(self) -> None:
        max_ticks = self._settings.max_ticks
        while self._running:
            try:
                await self.run_once()
            except FeedExhausted:
                logger.info("price_feed_exhausted", ticks=self._ticks)
                break
            except FeedError as e:
                logger.error("price_feed_error", error=str(e))

            if max_ticks is not None and self._ticks >= max_ticks:
                logger.info("max_ticks_reached", ticks=self._ticks)
                break

            if await self._wait(self._settings.tick_interval_seconds):
                break

    async def run_once(self) -> TickResult:
        """Fetch one price and feed it to the engine."""
        price = await self._feed.next_price()
        now = int(self._clock())
        result = self._engine.tick(self._state, price, now)
        self._ticks += 1
        self._last_price = price
        self._events.extend(result.events)

        for event in result.events:
            logger.info(
                "bot_trade",
                kind=event.kind.value,
                price=str(event.price),
                quote_balance=str(self._state.ledger.quote_balance),
                asset_balance=str(self._state.ledger.asset_balance),
            )
        return result

    async def _wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if stop() was called meanwhile."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    def _log_summary(self) -> None:
        ledger = self._state.ledger
        equity = ledger.equity(self._last_price) if self._last_price is not None else None
        logger.info(
            "bot_stopped",
            ticks=self._ticks,
            trades=len(self._events),
            quote_balance=str(ledger.quote_balance),
            asset_balance=str(ledger.asset_balance),
            equity=str(equity) if equity is not None else None,
        )
