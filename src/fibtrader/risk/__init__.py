"""Risk controls applied before signal evaluation."""

from fibtrader.risk.stop_loss import StopLossGuard

__all__ = ["StopLossGuard"]
