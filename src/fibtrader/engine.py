"""Per-tick trade decision engine.

Each tick:
  1. PUSH: record the price in the rolling window (always)
  2. WARM-UP: halt until the window is full and both EMAs exist
  3. COOLDOWN: halt while the last trade attempt is too recent
  4. LEVELS: Fibonacci retracement over the window high/low
  5. STOP-LOSS: forced exit against the last fill's reference price
  6. CROSS: compare EMAs of the window with and without the newest sample
  7. ENTRY: buy near the 0.25 level with the fast EMA above the slow one
  8. EXIT: sell near the 0.75 level with the fast EMA below the slow one

Entry and exit are evaluated independently, and both run after a
stop-loss fill in the same tick. The cooldown gate precedes the stop-loss,
so stop-losses cannot fire during cooldown.

All state lives in BotState and is passed explicitly; the engine itself
only holds configuration.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from fibtrader.config import FeeSettings, RiskSettings, StrategySettings, TradingSettings
from fibtrader.execution.ledger import Ledger
from fibtrader.logging import get_logger
from fibtrader.market_data.price_history import PriceHistory
from fibtrader.models import OrderSide, PriceSample, TradeEvent, TradeEventKind
from fibtrader.risk.stop_loss import StopLossGuard
from fibtrader.signals.indicators import compute_indicators, detect_cross
from fibtrader.signals.levels import fibonacci_levels, within_band
from fibtrader.signals.models import Indicators

logger = get_logger(__name__)


class HaltReason(str, Enum):
    """Why a tick stopped before signal evaluation."""

    WARMUP = "warmup"
    COOLDOWN = "cooldown"


@dataclass
class BotState:
    """Everything a bot mutates across ticks."""

    history: PriceHistory
    ledger: Ledger


@dataclass
class TickResult:
    """Outcome of a single tick."""

    state: BotState
    events: list[TradeEvent] = field(default_factory=list)
    indicators: Indicators | None = None
    levels: tuple[Decimal, ...] | None = None
    halted: HaltReason | None = None


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class DecisionEngine:
    """Combines indicators, levels and risk controls into trade decisions.

    Args:
        strategy: Window, EMA and Fibonacci band parameters.
        risk: Stop-loss percentage and cooldown.
        trading: Ledger sizing parameters.
        fees: Taker fee applied to fills.
    """

    def __init__(
        self,
        strategy: StrategySettings | None = None,
        risk: RiskSettings | None = None,
        trading: TradingSettings | None = None,
        fees: FeeSettings | None = None,
    ) -> None:
        self._strategy = strategy or StrategySettings()
        self._risk = risk or RiskSettings()
        self._trading = trading or TradingSettings()
        self._fees = fees or FeeSettings()
        self._stop_loss = StopLossGuard(self._risk)

    def initialize(self, initial_quote_balance: Decimal | int | float | str | None = None) -> BotState:
        """Create a fresh state: empty window, flat ledger.

        Args:
            initial_quote_balance: Starting quote balance. Defaults to
                TradingSettings.initial_quote_balance.
        """
        if initial_quote_balance is None:
            balance = self._trading.initial_quote_balance
        else:
            balance = _to_decimal(initial_quote_balance)

        state = BotState(
            history=PriceHistory(self._strategy.window_size),
            ledger=Ledger.open(balance, self._trading, self._fees),
        )
        logger.info(
            "bot_initialized",
            quote_balance=str(state.ledger.quote_balance),
            trade_size=str(state.ledger.trade_size),
        )
        return state

    def tick(
        self,
        state: BotState,
        current_price: Decimal | int | float | str,
        now: int,
    ) -> TickResult:
        """Advance ``state`` by one price observation at epoch seconds ``now``.

        Mutates ``state`` in place and returns it in the result together
        with any executed trades.
        """
        price = _to_decimal(current_price)
        history = state.history
        ledger = state.ledger

        history.push(PriceSample(timestamp=now, price=price))

        prices = history.prices()
        current = compute_indicators(
            prices, self._strategy.ema_fast_period, self._strategy.ema_slow_period
        )
        result = TickResult(state=state, indicators=current)

        if len(history) < self._strategy.window_size or not current.ready:
            result.halted = HaltReason.WARMUP
            logger.debug("tick_halted", reason="warmup", samples=len(history))
            return result

        elapsed = now - ledger.last_trade_time
        if elapsed < self._risk.cooldown_seconds:
            result.halted = HaltReason.COOLDOWN
            logger.debug(
                "tick_halted",
                reason="cooldown",
                elapsed=elapsed,
                cooldown=self._risk.cooldown_seconds,
            )
            return result

        high, low = history.high_low()
        levels = fibonacci_levels(high, low)
        result.levels = levels

        forced = self._stop_loss.check(price, ledger)
        if forced is not None:
            self._execute(ledger, price, now, forced, result)

        previous = compute_indicators(
            prices[:-1], self._strategy.ema_fast_period, self._strategy.ema_slow_period
        )
        cross = detect_cross(previous, current)
        band = self._strategy.level_band

        entry_level = levels[self._strategy.entry_level_index]
        if within_band(price, entry_level, band) and (
            cross.cross_up or current.ema_fast > current.ema_slow
        ):
            self._execute(ledger, price, now, TradeEventKind.BUY, result)

        exit_level = levels[self._strategy.exit_level_index]
        if within_band(price, exit_level, band) and (
            cross.cross_down or current.ema_fast < current.ema_slow
        ):
            self._execute(ledger, price, now, TradeEventKind.SELL, result)

        logger.debug(
            "tick_evaluated",
            price=str(price),
            ema_fast=str(current.ema_fast),
            ema_slow=str(current.ema_slow),
            entry_level=str(entry_level),
            exit_level=str(exit_level),
            trades=len(result.events),
        )
        return result

    def _execute(
        self,
        ledger: Ledger,
        price: Decimal,
        now: int,
        kind: TradeEventKind,
        result: TickResult,
    ) -> None:
        event = ledger.execute_trade(price, kind.side is OrderSide.BUY, now, kind=kind)
        if event is None:
            return
        result.events.append(event)
        logger.info(
            "trade_executed",
            kind=event.kind.value,
            price=str(event.price),
            quote_amount=str(event.quote_amount),
            asset_amount=str(event.asset_amount),
            fee=str(event.fee),
            quote_balance=str(ledger.quote_balance),
            asset_balance=str(ledger.asset_balance),
        )


def initialize(
    initial_quote_balance: Decimal | int | float | str,
    engine: DecisionEngine | None = None,
) -> BotState:
    """Create a bot state using default settings unless an engine is given."""
    return (engine or DecisionEngine()).initialize(initial_quote_balance)


def tick(
    state: BotState,
    current_price: Decimal | int | float | str,
    now: int,
    engine: DecisionEngine | None = None,
) -> TickResult:
    """Run one tick with default settings unless an engine is given."""
    return (engine or DecisionEngine()).tick(state, current_price, now)
