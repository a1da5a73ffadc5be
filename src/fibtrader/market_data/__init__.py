"""Market data: the rolling price window and pluggable price sources."""

from fibtrader.market_data.feeds import (
    ExchangeFeed,
    PriceFeed,
    RandomWalkFeed,
    SequenceFeed,
    build_feed,
)
from fibtrader.market_data.price_history import PriceHistory

__all__ = [
    "ExchangeFeed",
    "PriceFeed",
    "PriceHistory",
    "RandomWalkFeed",
    "SequenceFeed",
    "build_feed",
]
