"""Custom exceptions for the trading simulator.

Precondition violations (bad indicator period, inverted price range, empty
window) are programming errors and always raise. Normal "not enough data"
conditions never raise; they surface as None or a halted tick.
"""


class TraderError(Exception):
    """Base exception for all trader errors."""


class InvalidPeriodError(TraderError, ValueError):
    """Raised when an indicator period is smaller than 1."""


class InvalidPriceRangeError(TraderError, ValueError):
    """Raised when a price range has high below low."""


class InvalidPriceError(TraderError, ValueError):
    """Raised when a non-positive price enters the system."""


class InsufficientHistoryError(TraderError):
    """Raised when a window statistic is requested on an empty history."""


class FeedError(TraderError):
    """Raised when a price source cannot produce the next price."""


class FeedExhausted(FeedError):
    """Raised when a finite price source has no prices left."""
