"""Deterministic replay of a price sequence through the decision engine.

Walks the prices in order, stamping each with a simulated timestamp
``start_time + i * interval_seconds``, and records every fill plus a
mark-to-market equity point per tick.

CRITICAL: Never use time.time() here -- always use simulated timestamps.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from fibtrader.engine import BotState, DecisionEngine, HaltReason
from fibtrader.logging import get_logger
from fibtrader.models import OrderSide, TradeEvent

logger = get_logger(__name__)


@dataclass
class EquityPoint:
    """Mark-to-market value after a tick."""

    timestamp: int
    price: Decimal
    equity: Decimal


@dataclass
class ReplayResult:
    """Everything a replay produced."""

    state: BotState
    initial_equity: Decimal
    events: list[TradeEvent] = field(default_factory=list)
    equity_curve: list[EquityPoint] = field(default_factory=list)
    ticks: int = 0
    warmup_ticks: int = 0
    cooldown_ticks: int = 0

    @property
    def final_equity(self) -> Decimal:
        if not self.equity_curve:
            return self.initial_equity
        return self.equity_curve[-1].equity

    @property
    def net_return(self) -> Decimal:
        """Fractional change in equity over the replay."""
        if self.initial_equity == 0:
            return Decimal("0")
        return (self.final_equity - self.initial_equity) / self.initial_equity

    @property
    def buy_count(self) -> int:
        return sum(1 for e in self.events if e.kind.side is OrderSide.BUY)

    @property
    def sell_count(self) -> int:
        return sum(1 for e in self.events if e.kind.side is OrderSide.SELL)

    @property
    def stop_loss_count(self) -> int:
        return sum(1 for e in self.events if e.kind.is_stop_loss)


def replay(
    prices: Iterable[Decimal | int | str],
    engine: DecisionEngine | None = None,
    initial_quote_balance: Decimal | None = None,
    start_time: int = 0,
    interval_seconds: int = 4 * 60 * 60,
) -> ReplayResult:
    """Replay ``prices`` through a fresh bot state.

    Args:
        prices: Prices in chronological order.
        engine: Decision engine; default settings when omitted.
        initial_quote_balance: Starting quote balance; settings default when omitted.
        start_time: Epoch seconds of the first price.
        interval_seconds: Simulated gap between consecutive prices.

    Returns:
        ReplayResult with fills, equity curve and halt counters.
    """
    engine = engine or DecisionEngine()
    state = engine.initialize(initial_quote_balance)
    result = ReplayResult(state=state, initial_equity=state.ledger.quote_balance)

    for i, raw in enumerate(prices):
        price = raw if isinstance(raw, Decimal) else Decimal(str(raw))
        now = start_time + i * interval_seconds
        tick_result = engine.tick(state, price, now)

        result.ticks += 1
        result.events.extend(tick_result.events)
        if tick_result.halted is HaltReason.WARMUP:
            result.warmup_ticks += 1
        elif tick_result.halted is HaltReason.COOLDOWN:
            result.cooldown_ticks += 1
        result.equity_curve.append(
            EquityPoint(timestamp=now, price=price, equity=state.ledger.equity(price))
        )

    logger.info(
        "replay_complete",
        ticks=result.ticks,
        trades=len(result.events),
        stop_losses=result.stop_loss_count,
        final_equity=str(result.final_equity),
        net_return=str(result.net_return),
    )
    return result
