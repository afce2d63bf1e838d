"""Domain tests for trade service."""

import pytest

from tradeclaims.domain.entities import TradeRecord
from tradeclaims.domain.errors import ConflictError, NotFoundError, ValidationError
from tradeclaims.domain.trade import validate_data_type


def test_create_and_get_trade(trade_service):
    """Test storing a trade and reading it back."""
    record = TradeRecord(trade_id="T1", counterparty="Citi", pnl_calculated="100", value_date="2024-01-17")
    trade_service.create_trade(record)

    stored = trade_service.get_trade("T1")
    assert stored.counterparty == "Citi"
    assert stored.pnl_calculated == "100"
    assert stored.value_date == "2024-01-17"
    assert trade_service.get_trade("missing") is None


def test_create_trade_stores_numbers_as_text(trade_service):
    """Test that numeric amounts are stored as text."""
    trade_service.create_trade(TradeRecord(trade_id="T1", pnl_calculated=25000, notional_amount=1.5))

    stored = trade_service.get_trade("T1")
    assert stored.pnl_calculated == "25000"
    assert stored.notional_amount == "1.5"


def test_create_duplicate_trade(trade_service):
    """Test that trade IDs are unique."""
    trade_service.create_trade(TradeRecord(trade_id="T1"))
    with pytest.raises(ConflictError):
        trade_service.create_trade(TradeRecord(trade_id="T1"))


def test_create_trade_requires_id(trade_service):
    """Test that a trade ID is required."""
    with pytest.raises(ValidationError):
        trade_service.create_trade(TradeRecord(trade_id="  "))


def test_create_trade_invalid_book(trade_service):
    """Test that unknown books are rejected."""
    with pytest.raises(ValidationError):
        trade_service.create_trade(TradeRecord(trade_id="T1", data_type="bonds"))


def test_list_trades_filters(trade_service):
    """Test filtering trades by book and counterparty."""
    trade_service.create_trade(TradeRecord(trade_id="T1", counterparty="Citi"))
    trade_service.create_trade(TradeRecord(trade_id="T2", counterparty="UBS", data_type="equity"))
    trade_service.create_trade(TradeRecord(trade_id="T3", counterparty="citi", data_type="equity"))

    assert [t.trade_id for t in trade_service.list_trades()] == ["T1", "T2", "T3"]
    assert [t.trade_id for t in trade_service.list_trades(data_type="equity")] == ["T2", "T3"]
    assert [t.trade_id for t in trade_service.list_trades(counterparty="CITI")] == ["T1", "T3"]
    assert [
        t.trade_id for t in trade_service.list_trades(data_type="EQUITY", counterparty="Citi")
    ] == ["T3"]
    assert trade_service.count_trades() == 3
    assert trade_service.count_trades(data_type="fx") == 1


def test_delete_trade(trade_service):
    """Test deleting a trade."""
    trade_service.create_trade(TradeRecord(trade_id="T1"))
    trade_service.delete_trade("T1")

    assert trade_service.get_trade("T1") is None
    with pytest.raises(NotFoundError):
        trade_service.delete_trade("T1")


def test_validate_data_type():
    """Test normalizing book names."""
    assert validate_data_type(" FX ") == "fx"
    with pytest.raises(ValidationError):
        validate_data_type("")
