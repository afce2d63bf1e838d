"""Tests for database mappers."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from tradeclaims.database.models import (
    Trade as ORMTrade,
    ImportFormat as ORMImportFormat,
    ColumnMapping as ORMColumnMapping,
    CounterpartyRate as ORMCounterpartyRate,
    ClaimSnapshot as ORMClaimSnapshot,
    ClaimRemark as ORMClaimRemark,
    ClaimStatus as ORMClaimStatus,
)
from tradeclaims.database.mappers import (
    trade_to_domain,
    trade_to_orm,
    import_format_to_domain,
    column_mapping_to_domain,
    counterparty_rate_to_domain,
    claim_snapshot_to_domain,
    claim_remark_to_domain,
    claim_status_to_domain,
)
from tradeclaims.domain.entities import (
    TradeRecord,
    ImportFormat,
    ColumnMapping,
    CounterpartyRate,
    ClaimSnapshot,
    ClaimRemark,
    ClaimStatus,
    ClaimStatusEntry,
)


class TestTradeMapper:
    """Tests for Trade mapper."""

    def test_trade_to_domain(self):
        """Test converting ORM Trade to domain TradeRecord."""
        orm_trade = ORMTrade(
            id=1,
            trade_id="TRD-000002",
            counterparty="Morgan Stanley",
            value_date="2024-01-17",
            settlement_date="2024-01-20",
            pnl_calculated="12500.50",
            confirmation_status="Failed",
            data_type="fx",
            imported_at=datetime.now(UTC),
        )
        record = trade_to_domain(orm_trade)

        assert isinstance(record, TradeRecord)
        assert record.trade_id == "TRD-000002"
        assert record.settlement_date == "2024-01-20"
        assert record.pnl_calculated == "12500.50"
        assert record.imported_at == orm_trade.imported_at

    def test_trade_to_orm(self):
        """Test converting domain TradeRecord to ORM Trade with text amounts."""
        record = TradeRecord(
            trade_id="T1",
            notional_amount=Decimal("1500000"),
            pnl_calculated=25000,
            data_type="equity",
        )
        orm_trade = trade_to_orm(record)

        assert isinstance(orm_trade, ORMTrade)
        assert orm_trade.trade_id == "T1"
        assert orm_trade.notional_amount == "1500000"
        assert orm_trade.pnl_calculated == "25000"
        assert orm_trade.data_type == "equity"
        assert orm_trade.currency is None


class TestImportFormatMappers:
    """Tests for import format mappers."""

    def test_import_format_to_domain(self):
        """Test converting ORM ImportFormat to domain ImportFormat."""
        orm_format = ORMImportFormat(id=1, name="Broker", data_type="fx", created_at=datetime.now(UTC))
        fmt = import_format_to_domain(orm_format)

        assert isinstance(fmt, ImportFormat)
        assert fmt.name == "Broker"
        assert fmt.data_type == "fx"

    def test_column_mapping_to_domain(self):
        """Test converting ORM ColumnMapping to domain ColumnMapping."""
        orm_mapping = ORMColumnMapping(id=3, format_id=1, column_name="Result", field_name="pnl_calculated")
        mapping = column_mapping_to_domain(orm_mapping)

        assert isinstance(mapping, ColumnMapping)
        assert mapping.format_id == 1
        assert mapping.field_name == "pnl_calculated"


class TestClaimMappers:
    """Tests for rate, snapshot and remark mappers."""

    def test_counterparty_rate_to_domain(self):
        """Test converting ORM CounterpartyRate to domain CounterpartyRate."""
        orm_rate = ORMCounterpartyRate(
            id=1, counterparty="Citi", annual_rate=Decimal("0.045"), updated_at=datetime.now(UTC)
        )
        rate = counterparty_rate_to_domain(orm_rate)

        assert isinstance(rate, CounterpartyRate)
        assert rate.annual_rate == Decimal("0.045")

    def test_claim_snapshot_to_domain(self):
        """Test converting ORM ClaimSnapshot to domain ClaimSnapshot."""
        orm_snapshot = ORMClaimSnapshot(
            id=1,
            claim_id="CLM-1",
            trade_id="T1",
            counterparty="Citi",
            claim_type="Payable",
            categories="Cost Allocation Failed",
            sla_breach_days=4,
            interest_amount=Decimal("10.50"),
            saved_at=datetime.now(UTC),
        )
        snapshot = claim_snapshot_to_domain(orm_snapshot)

        assert isinstance(snapshot, ClaimSnapshot)
        assert snapshot.claim_type == "Payable"
        assert snapshot.interest_amount == Decimal("10.50")

    def test_claim_remark_to_domain(self):
        """Test converting ORM ClaimRemark to domain ClaimRemark."""
        orm_remark = ORMClaimRemark(claim_id="CLM-1", remark="Chased", updated_at=datetime.now(UTC))
        remark = claim_remark_to_domain(orm_remark)

        assert isinstance(remark, ClaimRemark)
        assert remark.remark == "Chased"

    def test_claim_status_to_domain(self):
        """Test converting ORM ClaimStatus to domain ClaimStatusEntry."""
        orm_status = ORMClaimStatus(claim_id="CLM-1", status="In Progress", updated_at=datetime.now(UTC))
        entry = claim_status_to_domain(orm_status)

        assert isinstance(entry, ClaimStatusEntry)
        assert entry.status == ClaimStatus.IN_PROGRESS

    def test_domain_entities_are_frozen(self):
        """Test that mapped entities are immutable."""
        remark = claim_remark_to_domain(
            ORMClaimRemark(claim_id="CLM-1", remark="Chased", updated_at=datetime.now(UTC))
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            remark.remark = "Changed"
