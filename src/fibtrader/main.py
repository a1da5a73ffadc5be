"""Entry point for the trading simulator.

Wires settings, logging, price feed, decision engine and driver loop, then
runs until SIGINT/SIGTERM, feed exhaustion, or RUNNER_MAX_TICKS.

Component wiring order:
1. AppSettings (configuration)
2. Logging setup
3. PriceFeed (random walk or exchange ticker)
4. DecisionEngine + initial BotState
5. TradingBot (driver loop)
"""

import asyncio
import signal
from collections.abc import Callable

from fibtrader.config import AppSettings
from fibtrader.engine import DecisionEngine
from fibtrader.logging import get_logger, setup_logging
from fibtrader.market_data.feeds import build_feed
from fibtrader.runner import TradingBot


def build_bot(settings: AppSettings) -> TradingBot:
    """Build a TradingBot and its collaborators from settings."""
    feed = build_feed(settings.feed)
    engine = DecisionEngine(
        strategy=settings.strategy,
        risk=settings.risk,
        trading=settings.trading,
        fees=settings.fees,
    )
    state = engine.initialize(settings.trading.initial_quote_balance)
    return TradingBot(engine, feed, state, settings.runner)


#: Strong references to shutdown tasks spawned from signal handlers; the
#: event loop only keeps weak references to tasks.
_shutdown_tasks: set[asyncio.Task] = set()


def _make_stop_handler(bot: TradingBot) -> Callable[[], None]:
    """Return a sync signal callback that schedules ``bot.stop()``."""
    logger = get_logger("fibtrader.main")

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        task = asyncio.create_task(bot.stop())
        _shutdown_tasks.add(task)
        task.add_done_callback(_shutdown_tasks.discard)

    return _graceful_handler


def _setup_signal_handlers(bot: TradingBot) -> None:
    """Register SIGINT/SIGTERM to stop the bot gracefully.

    Must be called after the asyncio event loop is running.
    """
    loop = asyncio.get_running_loop()
    handler = _make_stop_handler(bot)
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handler)


async def run(settings: AppSettings | None = None) -> TradingBot:
    """Run the bot until it stops; returns it for inspection."""
    settings = settings or AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("fibtrader.main")

    bot = build_bot(settings)
    _setup_signal_handlers(bot)

    logger.info(
        "starting_trader",
        feed=settings.feed.source,
        quote_balance=str(settings.trading.initial_quote_balance),
        cooldown=settings.risk.cooldown_seconds,
        stop_loss=str(settings.risk.stop_loss_percent),
    )

    try:
        await bot.start()
    finally:
        await bot.close()
        logger.info("trader_stopped")
    return bot


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())
