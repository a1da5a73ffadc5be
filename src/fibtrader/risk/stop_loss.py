"""Stop-loss check against the reference price of the most recent fill.

A long reference (last_buy_price) is stopped out when price falls to or
below ``last_buy_price * (1 - stop_loss_percent)``; a sell reference
(last_sell_price) when price rises to or above
``last_sell_price * (1 + stop_loss_percent)``. Both bounds are inclusive.
Since the ledger holds at most one reference, at most one side can fire.
"""

from decimal import Decimal

from fibtrader.config import RiskSettings
from fibtrader.execution.ledger import Ledger
from fibtrader.logging import get_logger
from fibtrader.models import TradeEventKind

logger = get_logger(__name__)


class StopLossGuard:
    """Forced-exit detector.

    Args:
        settings: Risk settings containing the stop-loss percentage.
    """

    def __init__(self, settings: RiskSettings) -> None:
        self._settings = settings

    def check(self, price: Decimal, ledger: Ledger) -> TradeEventKind | None:
        """Return the forced trade to execute at ``price``, or None.

        Returns:
            STOP_LOSS_SELL when a long reference is breached, STOP_LOSS_BUY
            when a sell reference is breached, otherwise None.
        """
        pct = self._settings.stop_loss_percent

        if ledger.last_buy_price is not None:
            trigger = ledger.last_buy_price * (Decimal("1") - pct)
            if price <= trigger:
                logger.warning(
                    "stop_loss_triggered",
                    side="sell",
                    price=str(price),
                    reference=str(ledger.last_buy_price),
                    trigger=str(trigger),
                )
                return TradeEventKind.STOP_LOSS_SELL

        if ledger.last_sell_price is not None:
            trigger = ledger.last_sell_price * (Decimal("1") + pct)
            if price >= trigger:
                logger.warning(
                    "stop_loss_triggered",
                    side="buy",
                    price=str(price),
                    reference=str(ledger.last_sell_price),
                    trigger=str(trigger),
                )
                return TradeEventKind.STOP_LOSS_BUY

        return None
