"""Tests for Database interface returning domain models."""

import pytest
from datetime import datetime
from decimal import Decimal

from tradeclaims.domain import entities
from tradeclaims.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_trade_returns_domain_model(self, temp_db):
        """Test that get_trade returns a domain TradeRecord entity."""
        temp_db.create_trade(entities.TradeRecord(trade_id="T1", counterparty="Citi", pnl_calculated="10"))

        trade = temp_db.get_trade("T1")

        assert isinstance(trade, entities.TradeRecord)
        assert trade.trade_id == "T1"
        assert trade.pnl_calculated == "10"
        assert isinstance(trade.imported_at, datetime)
        assert temp_db.trade_exists("T1")
        assert not temp_db.trade_exists("T2")

    def test_list_trades_returns_domain_models(self, temp_db):
        """Test that list_trades returns domain TradeRecord entities."""
        temp_db.create_trade(entities.TradeRecord(trade_id="T1"))
        temp_db.create_trade(entities.TradeRecord(trade_id="T2"))

        trades = temp_db.list_trades()

        assert len(trades) == 2
        for trade in trades:
            assert isinstance(trade, entities.TradeRecord)

    def test_delete_missing_trade(self, temp_db):
        """Test that deleting a missing trade raises NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.delete_trade("missing")

    def test_import_format_returns_domain_model(self, temp_db):
        """Test that import formats and mappings are domain entities."""
        format_id = temp_db.create_import_format(name="Broker", data_type="fx")
        temp_db.add_column_mapping(format_id=format_id, column_name="Result", field_name="pnl_calculated")

        fmt = temp_db.get_import_format(format_id)
        assert isinstance(fmt, entities.ImportFormat)
        assert isinstance(fmt.created_at, datetime)
        assert temp_db.get_import_format_by_name("Broker") == fmt

        mappings = temp_db.get_column_mappings(format_id)
        assert len(mappings) == 1
        assert isinstance(mappings[0], entities.ColumnMapping)
        assert mappings[0].column_name == "Result"

    def test_counterparty_rate_returns_domain_model(self, temp_db):
        """Test that counterparty rates are domain entities with Decimal rates."""
        temp_db.set_counterparty_rate("Citi", Decimal("0.0325"))

        rate = temp_db.get_counterparty_rate("CITI")

        assert isinstance(rate, entities.CounterpartyRate)
        assert isinstance(rate.annual_rate, Decimal)
        assert rate.annual_rate == Decimal("0.0325")

    def test_delete_missing_rate(self, temp_db):
        """Test that deleting a missing rate raises NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.delete_counterparty_rate("Nobody")

    def test_claim_snapshots_replace(self, temp_db):
        """Test that saving snapshots replaces earlier ones."""
        row = {
            "claim_id": "CLM-1",
            "trade_id": "T1",
            "counterparty": "Citi",
            "claim_type": "Receivable",
            "categories": "Failed Confirmation",
            "sla_breach_days": 3,
            "interest_amount": Decimal("12.34"),
        }
        temp_db.replace_claim_snapshots([row, {**row, "claim_id": "CLM-2", "trade_id": "T2"}])
        assert temp_db.replace_claim_snapshots([row]) == 1

        snapshots = temp_db.list_claim_snapshots()
        assert len(snapshots) == 1
        assert isinstance(snapshots[0], entities.ClaimSnapshot)
        assert snapshots[0].interest_amount == Decimal("12.34")

    def test_claim_remarks(self, temp_db):
        """Test that remarks are domain entities and blank text clears them."""
        temp_db.set_claim_remark("CLM-1", "Chased")
        remarks = temp_db.list_claim_remarks()
        assert isinstance(remarks[0], entities.ClaimRemark)
        assert remarks[0].remark == "Chased"

        temp_db.set_claim_remark("CLM-1", None)
        assert temp_db.list_claim_remarks() == []

    def test_claim_statuses(self, temp_db):
        """Test that claim statuses are upserted and returned as domain entities."""
        temp_db.set_claim_status("CLM-1", "In Progress")
        temp_db.set_claim_status("CLM-1", "Settled")

        statuses = temp_db.list_claim_statuses()
        assert len(statuses) == 1
        assert isinstance(statuses[0], entities.ClaimStatusEntry)
        assert statuses[0].status == entities.ClaimStatus.SETTLED


def test_for_sqlite_file_creates_directory(tmp_path):
    """Test that opening a database file creates missing parent directories."""
    from tradeclaims.database.sqlalchemy_db import SQLAlchemyDatabase

    db_path = tmp_path / "nested" / "dir" / "claims.db"
    db = SQLAlchemyDatabase.for_sqlite_file(str(db_path))
    try:
        assert db.database_url == f"sqlite:///{db_path}"
        assert db.count_trades() == 0
    finally:
        db.disconnect()
    assert db_path.exists()
