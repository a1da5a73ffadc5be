"""Shared data models for the trading simulator.

CRITICAL: All monetary values use Decimal. Never use float for prices, balances, or fees.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from fibtrader.exceptions import InvalidPriceError


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class TradeEventKind(str, Enum):
    """Why a trade was executed."""

    BUY = "buy"
    SELL = "sell"
    STOP_LOSS_BUY = "stop_loss_buy"
    STOP_LOSS_SELL = "stop_loss_sell"

    @property
    def side(self) -> OrderSide:
        if self in (TradeEventKind.BUY, TradeEventKind.STOP_LOSS_BUY):
            return OrderSide.BUY
        return OrderSide.SELL

    @property
    def is_stop_loss(self) -> bool:
        return self in (TradeEventKind.STOP_LOSS_BUY, TradeEventKind.STOP_LOSS_SELL)


@dataclass(frozen=True)
class PriceSample:
    """A single observed price at an epoch-seconds timestamp."""

    timestamp: int
    price: Decimal

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise InvalidPriceError(f"Price must be positive, got {self.price}")


@dataclass(frozen=True)
class TradeEvent:
    """An executed trade reported back to the driver.

    Amounts are absolute balance changes: ``quote_amount`` left (buy) or
    entered (sell) the quote balance, ``asset_amount`` entered (buy) or
    left (sell) the asset balance. ``fee`` is denominated in the acquired
    asset.
    """

    kind: TradeEventKind
    price: Decimal
    timestamp: int
    quote_amount: Decimal
    asset_amount: Decimal
    fee: Decimal
