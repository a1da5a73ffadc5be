"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class StrategySettings(BaseSettings):
    """Indicator windows and Fibonacci signal parameters."""

    model_config = SettingsConfigDict(env_prefix="STRATEGY_")

    window_size: int = 21  # rolling price history capacity
    ema_fast_period: int = 12
    ema_slow_period: int = 21
    level_band: Decimal = Decimal("0.01")  # +/-1% around a Fibonacci level
    entry_level_index: int = 5  # 0.25 retracement (support)
    exit_level_index: int = 1  # 0.75 retracement (resistance)


class RiskSettings(BaseSettings):
    """Stop-loss and trade pacing."""

    model_config = SettingsConfigDict(env_prefix="RISK_")

    stop_loss_percent: Decimal = Decimal("0.12")  # 12% adverse move
    cooldown_seconds: int = 4 * 60 * 60  # min gap between trade attempts


class TradingSettings(BaseSettings):
    """Ledger sizing parameters."""

    model_config = SettingsConfigDict(env_prefix="TRADING_")

    initial_quote_balance: Decimal = Decimal("10")
    trade_size_fraction: Decimal = Decimal("0.1")  # of initial quote balance
    # False keeps the historical behaviour: sells compare and deduct
    # trade_size directly against the asset balance.
    sell_size_in_quote_units: bool = False


class FeeSettings(BaseSettings):
    """Exchange fee structure (spot taker)."""

    model_config = SettingsConfigDict(env_prefix="FEES_")

    taker: Decimal = Decimal("0.001")  # 0.1%


class FeedSettings(BaseSettings):
    """Price source selection.

    ``random_walk`` simulates prices locally; ``exchange`` polls the last
    traded price from a ccxt exchange's public ticker endpoint.
    """

    model_config = SettingsConfigDict(env_prefix="FEED_")

    source: Literal["random_walk", "exchange"] = "random_walk"
    start_price: Decimal = Decimal("0.1")
    volatility: Decimal = Decimal("0.02")  # max relative step per tick
    seed: int | None = None
    exchange_id: str = "binance"
    symbol: str = "DOGE/USDT"


class RunnerSettings(BaseSettings):
    """Driver loop cadence."""

    model_config = SettingsConfigDict(env_prefix="RUNNER_")

    tick_interval_seconds: float = 4 * 60 * 60
    max_ticks: int | None = None  # None runs until stopped


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    strategy: StrategySettings = StrategySettings()
    risk: RiskSettings = RiskSettings()
    trading: TradingSettings = TradingSettings()
    fees: FeeSettings = FeeSettings()
    feed: FeedSettings = FeedSettings()
    runner: RunnerSettings = RunnerSettings()
