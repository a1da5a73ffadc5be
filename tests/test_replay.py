"""Tests for deterministic price replay."""

from decimal import Decimal

from fibtrader.config import RiskSettings
from fibtrader.engine import DecisionEngine
from fibtrader.models import TradeEventKind
from fibtrader.replay import replay

SUPPORT_PRICES = ["100"] + ["200"] * 19 + ["125"]


class TestReplay:
    """Tests for replay()."""

    def test_flat_prices_keep_equity(self) -> None:
        result = replay(["0.1"] * 30, initial_quote_balance=Decimal("10"))

        assert result.ticks == 30
        assert result.events == []
        assert result.warmup_ticks == 20
        assert result.cooldown_ticks == 0
        assert result.final_equity == Decimal("10")
        assert result.net_return == Decimal("0")

    def test_buy_recorded_with_equity(self) -> None:
        result = replay(SUPPORT_PRICES, initial_quote_balance=Decimal("10"), start_time=1_000)

        assert [e.kind for e in result.events] == [TradeEventKind.BUY]
        assert result.buy_count == 1
        assert result.sell_count == 0
        assert result.events[0].timestamp == 1_000 + 20 * 4 * 60 * 60
        # 9 quote + (1 / 125 * 0.999) asset marked at 125
        assert result.final_equity == Decimal("9.999")
        assert len(result.equity_curve) == 21

    def test_cooldown_ticks_counted(self) -> None:
        engine = DecisionEngine(risk=RiskSettings(cooldown_seconds=8 * 60 * 60))
        prices = SUPPORT_PRICES + ["190", "190"]

        result = replay(prices, engine=engine, initial_quote_balance=Decimal("10"))

        assert result.buy_count == 1
        assert result.cooldown_ticks == 1

    def test_empty_replay(self) -> None:
        result = replay([])
        assert result.ticks == 0
        assert result.final_equity == result.initial_equity
