"""Single-asset EMA/Fibonacci trading simulator.

The decision core (``initialize`` / ``tick``) consumes one price and one
epoch-seconds timestamp per call and returns executed trades; price feeds
and the driver loop live around it.
"""

from fibtrader.engine import BotState, DecisionEngine, HaltReason, TickResult, initialize, tick
from fibtrader.models import PriceSample, TradeEvent, TradeEventKind

__all__ = [
    "BotState",
    "DecisionEngine",
    "HaltReason",
    "PriceSample",
    "TickResult",
    "TradeEvent",
    "TradeEventKind",
    "initialize",
    "tick",
]
