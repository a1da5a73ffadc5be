"""In-memory quote/asset ledger with simulated fills.

Fills are instant at the given price. The taker fee is deducted from the
side being acquired. A trade that cannot be covered by the relevant
balance is skipped entirely (no partial fills), but still stamps
``last_trade_time`` so the cooldown restarts.

CRITICAL: All monetary values use Decimal. Never use float for prices, balances, or fees.
"""

from dataclasses import dataclass
from decimal import Decimal

from fibtrader.config import FeeSettings, TradingSettings
from fibtrader.logging import get_logger
from fibtrader.models import TradeEvent, TradeEventKind

logger = get_logger(__name__)


@dataclass
class Ledger:
    """Two fungible balances plus last-trade bookkeeping.

    ``last_buy_price`` and ``last_sell_price`` are mutually exclusive: they
    record the direction and reference price of the most recent fill.
    """

    quote_balance: Decimal
    asset_balance: Decimal
    trade_size: Decimal
    fee_rate: Decimal = Decimal("0.001")
    sell_size_in_quote_units: bool = False
    last_buy_price: Decimal | None = None
    last_sell_price: Decimal | None = None
    last_trade_time: int = 0

    @classmethod
    def open(
        cls,
        initial_quote_balance: Decimal,
        trading: TradingSettings,
        fees: FeeSettings,
    ) -> "Ledger":
        """Create a flat ledger funded with ``initial_quote_balance``."""
        return cls(
            quote_balance=initial_quote_balance,
            asset_balance=Decimal("0"),
            trade_size=initial_quote_balance * trading.trade_size_fraction,
            fee_rate=fees.taker,
            sell_size_in_quote_units=trading.sell_size_in_quote_units,
        )

    def execute_trade(
        self,
        price: Decimal,
        is_buy: bool,
        now: int,
        kind: TradeEventKind | None = None,
    ) -> TradeEvent | None:
        """Fill a buy or sell of ``trade_size`` at ``price``.

        Args:
            price: Fill price (quote per asset).
            is_buy: True to buy the asset with quote, False to sell it.
            now: Current epoch seconds; always recorded as last_trade_time.
            kind: Event tag to report; defaults to plain BUY / SELL.

        Returns:
            The TradeEvent for the fill, or None when the balance check failed.
        """
        self.last_trade_time = now
        if kind is None:
            kind = TradeEventKind.BUY if is_buy else TradeEventKind.SELL

        if is_buy:
            return self._buy(price, now, kind)
        return self._sell(price, now, kind)

    def _buy(self, price: Decimal, now: int, kind: TradeEventKind) -> TradeEvent | None:
        if self.quote_balance < self.trade_size:
            logger.info(
                "trade_skipped_insufficient_balance",
                side="buy",
                required=str(self.trade_size),
                available=str(self.quote_balance),
            )
            return None

        gross = self.trade_size / price
        received = gross * (Decimal("1") - self.fee_rate)
        self.quote_balance -= self.trade_size
        self.asset_balance += received
        self.last_buy_price = price
        self.last_sell_price = None

        return TradeEvent(
            kind=kind,
            price=price,
            timestamp=now,
            quote_amount=self.trade_size,
            asset_amount=received,
            fee=gross - received,
        )

    def _sell(self, price: Decimal, now: int, kind: TradeEventKind) -> TradeEvent | None:
        if self.sell_size_in_quote_units:
            size = self.trade_size / price
        else:
            # trade_size is quote-denominated but compared as asset units
            size = self.trade_size

        if self.asset_balance < size:
            logger.info(
                "trade_skipped_insufficient_balance",
                side="sell",
                required=str(size),
                available=str(self.asset_balance),
            )
            return None

        gross = size * price
        received = gross * (Decimal("1") - self.fee_rate)
        self.asset_balance -= size
        self.quote_balance += received
        self.last_sell_price = price
        self.last_buy_price = None

        return TradeEvent(
            kind=kind,
            price=price,
            timestamp=now,
            quote_amount=received,
            asset_amount=size,
            fee=gross - received,
        )

    def equity(self, price: Decimal) -> Decimal:
        """Mark-to-market value in quote units."""
        return self.quote_balance + self.asset_balance * price
