"""Tests for entry-point wiring and signal handling."""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from fibtrader import main
from fibtrader.config import AppSettings, FeedSettings, TradingSettings
from fibtrader.market_data.feeds import RandomWalkFeed


@pytest.mark.asyncio
async def test_stop_handler_keeps_task_until_done() -> None:
    bot = MagicMock()
    bot.stop = AsyncMock()
    handler = main._make_stop_handler(bot)

    handler()

    assert len(main._shutdown_tasks) == 1
    task = next(iter(main._shutdown_tasks))
    await task
    await asyncio.sleep(0)

    bot.stop.assert_awaited_once()
    assert task not in main._shutdown_tasks


def test_build_bot_uses_settings() -> None:
    settings = AppSettings(
        trading=TradingSettings(initial_quote_balance=Decimal("50")),
        feed=FeedSettings(source="random_walk", seed=1),
    )
    bot = main.build_bot(settings)

    assert bot.state.ledger.quote_balance == Decimal("50")
    assert bot.state.ledger.trade_size == Decimal("5")
    assert bot.ticks == 0
    assert isinstance(bot._feed, RandomWalkFeed)
