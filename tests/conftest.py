"""Shared test fixtures for the trading simulator."""

from collections.abc import Callable
from decimal import Decimal

import pytest

from fibtrader.config import FeeSettings, RiskSettings, StrategySettings, TradingSettings
from fibtrader.engine import BotState, DecisionEngine
from fibtrader.models import PriceSample

#: 2023-11-14T22:13:20Z, an arbitrary wall-clock origin for tests.
T0 = 1_700_000_000
HOUR = 60 * 60


@pytest.fixture
def engine() -> DecisionEngine:
    """DecisionEngine with explicit default settings (12/21 EMA, 12% stop, 4h cooldown)."""
    return DecisionEngine(
        strategy=StrategySettings(),
        risk=RiskSettings(),
        trading=TradingSettings(),
        fees=FeeSettings(),
    )


@pytest.fixture
def state(engine: DecisionEngine) -> BotState:
    """Fresh state funded with 10 quote units (trade size 1)."""
    return engine.initialize(Decimal("10"))


@pytest.fixture
def warm_up() -> Callable[[BotState, list[Decimal]], int]:
    """Return a helper that pushes prices straight into a state's history.

    Samples are one hour apart starting at T0. The helper returns the
    timestamp the next tick should use.
    """

    def _warm_up(state: BotState, prices: list[Decimal]) -> int:
        for i, price in enumerate(prices):
            state.history.push(PriceSample(timestamp=T0 + i * HOUR, price=price))
        return T0 + len(prices) * HOUR

    return _warm_up
