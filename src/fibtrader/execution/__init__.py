"""Trade execution against the in-memory two-balance ledger."""

from fibtrader.execution.ledger import Ledger

__all__ = ["Ledger"]
