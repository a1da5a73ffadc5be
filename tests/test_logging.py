"""Tests for structlog setup."""

import logging
from decimal import Decimal

import pytest

from fibtrader.logging import LOGGER_NAME, _decimals_to_str, get_logger, setup_logging


def test_decimal_context_values_rendered_as_strings() -> None:
    event = {"event": "trade_executed", "price": Decimal("0.125"), "kind": "buy"}
    result = _decimals_to_str(logging.getLogger("test"), "info", event)
    assert result == {"event": "trade_executed", "price": "0.125", "kind": "buy"}


def test_setup_configures_project_logger_tree() -> None:
    setup_logging("DEBUG", log_format="json")

    project_logger = logging.getLogger(LOGGER_NAME)
    assert project_logger.level == logging.DEBUG
    assert len(project_logger.handlers) == 1
    assert project_logger.propagate is False
    assert logging.getLogger("ccxt").level == logging.WARNING


def test_setup_is_idempotent() -> None:
    setup_logging("INFO")
    setup_logging("WARNING")
    project_logger = logging.getLogger(LOGGER_NAME)
    assert len(project_logger.handlers) == 1
    assert project_logger.level == logging.WARNING


@pytest.mark.parametrize("name", [None, "fibtrader.engine"])
def test_get_logger_returns_bound_logger(name: str | None) -> None:
    logger = get_logger() if name is None else get_logger(name)
    assert hasattr(logger, "info")
