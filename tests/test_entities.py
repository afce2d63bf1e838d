"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from tradeclaims.domain.entities import (
    ClaimStatus,
    ClaimSummary,
    ClaimType,
    ClassificationResult,
    CounterpartyRate,
    TradeRecord,
    generate_trade_id,
)


class TestTradeRecord:
    """Tests for TradeRecord entity."""

    def test_from_mapping_with_headers(self):
        """Test building a record from blotter headers."""
        record = TradeRecord.from_mapping(
            {
                "Trade ID": " TRD-000002 ",
                "Counterparty": "Morgan Stanley",
                "Value Date": "2024-01-17",
                "Settlement Date": "2024-01-20",
                "Notional Amount": "850000",
                "PnL Calculated": "12500.50",
                "Confirmation Status": "Failed",
                "Currency": "",
            }
        )

        assert record.trade_id == "TRD-000002"
        assert record.counterparty == "Morgan Stanley"
        assert record.value_date == "2024-01-17"
        assert record.notional_amount == "850000"
        assert record.pnl_calculated == "12500.50"
        assert record.confirmation_status == "Failed"
        assert record.currency is None
        assert record.expense_approval_status is None
        assert record.data_type == "fx"

    def test_from_mapping_keeps_numbers(self):
        """Test that numeric amounts are kept as numbers."""
        record = TradeRecord.from_mapping({"tradeId": "T1", "pnl": 25000, "notionalAmount": 1.5})
        assert record.pnl_calculated == 25000
        assert record.notional_amount == 1.5

    def test_from_mapping_data_type(self):
        """Test that the book is read from the data_type key."""
        record = TradeRecord.from_mapping({"trade_id": "T1", "data_type": "EQUITY"})
        assert record.data_type == "equity"

    def test_generated_trade_id_is_stable(self):
        """Test that rows without an ID get the same derived ID every time."""
        row = {"Counterparty": "Citi", "PnL": "-3100", "Value Date": "2024-01-22"}

        first = TradeRecord.from_mapping(row)
        second = TradeRecord.from_mapping(dict(row))
        other = TradeRecord.from_mapping({**row, "PnL": "-3101"})

        assert first.trade_id.startswith("TRD-")
        assert len(first.trade_id) == 14
        assert first.trade_id == second.trade_id
        assert first.trade_id != other.trade_id

    def test_generate_trade_id_ignores_trade_id_field(self):
        """Test that the derived ID only depends on the other fields."""
        assert generate_trade_id({"trade_id": "X", "counterparty": "Citi"}) == generate_trade_id(
            {"counterparty": "Citi"}
        )

    def test_trade_record_immutability(self):
        """Test that TradeRecord entities are immutable."""
        record = TradeRecord(trade_id="T1")
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            record.trade_id = "T2"


class TestClaimType:
    """Tests for ClaimType enum."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Receivable", ClaimType.RECEIVABLE),
            ("receivable", ClaimType.RECEIVABLE),
            ("PAYABLE", ClaimType.PAYABLE),
            ("N/A", ClaimType.NOT_APPLICABLE),
            ("n/a", ClaimType.NOT_APPLICABLE),
            ("na", ClaimType.NOT_APPLICABLE),
            ("not_applicable", ClaimType.NOT_APPLICABLE),
        ],
    )
    def test_parse(self, value, expected):
        """Test parsing claim types from user input."""
        assert ClaimType.parse(value) == expected

    def test_parse_unknown(self):
        """Test that unknown claim types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown claim type"):
            ClaimType.parse("refund")

    def test_value_is_display_string(self):
        """Test that the enum compares equal to its display string."""
        assert ClaimType.NOT_APPLICABLE == "N/A"
        assert ClaimType.RECEIVABLE.value == "Receivable"


class TestClassificationResult:
    """Tests for ClassificationResult entity."""

    def make_result(self, claim_type=ClaimType.RECEIVABLE, labels=("Failed Confirmation",)):
        return ClassificationResult(
            claim_id="CLM-0000000001",
            trade_id="T1",
            counterparty="Citi",
            claim_type=claim_type,
            category_labels=labels,
            sla_breach_days=3,
            interest_rate=Decimal("0.05"),
            interest_amount=Decimal("10"),
            pnl=Decimal("100"),
            notional_amount=Decimal("1000000"),
            currency="USD",
            reason="test",
        )

    def test_category_label(self):
        """Test joining category labels for display."""
        result = self.make_result(labels=("Failed Confirmation", "Settlement Delay"))
        assert result.category_label == "Failed Confirmation, Settlement Delay"

    def test_is_claim(self):
        """Test that N/A results are not claims."""
        assert self.make_result().is_claim
        assert self.make_result(claim_type=ClaimType.PAYABLE).is_claim
        assert not self.make_result(claim_type=ClaimType.NOT_APPLICABLE).is_claim

    def test_warnings_default_empty(self):
        """Test that warnings default to an empty tuple."""
        assert self.make_result().warnings == ()


def test_counterparty_rate_entity():
    """Test creating a CounterpartyRate entity."""
    rate = CounterpartyRate(
        id=1, counterparty="Citi", annual_rate=Decimal("0.045"), updated_at=datetime.now(UTC)
    )
    assert rate.annual_rate == Decimal("0.045")


def test_claim_summary_claim_count():
    """Test that claim_count adds receivables and payables."""
    summary = ClaimSummary(
        total_results=5,
        receivable_count=2,
        payable_count=1,
        total_interest=Decimal("0"),
        receivable_interest=Decimal("0"),
        payable_interest=Decimal("0"),
        average_claim_pnl=Decimal("0"),
        high_value_count=0,
        sla_breach_count=0,
        warning_count=0,
        category_counts=(),
        counterparty_interest=(),
        pending_count=3,
        settled_count=0,
    )
    assert summary.claim_count == 3


class TestClaimStatus:
    """Tests for parsing claim settlement statuses."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Pending", ClaimStatus.PENDING),
            ("settled", ClaimStatus.SETTLED),
            ("in progress", ClaimStatus.IN_PROGRESS),
            ("In-Progress", ClaimStatus.IN_PROGRESS),
            ("in_progress", ClaimStatus.IN_PROGRESS),
            ("  REJECTED ", ClaimStatus.REJECTED),
        ],
    )
    def test_parse(self, value, expected):
        """Test that statuses parse case-insensitively."""
        assert ClaimStatus.parse(value) == expected

    @pytest.mark.parametrize("value", ["", "paid", "done"])
    def test_parse_unknown(self, value):
        """Test that unknown statuses are rejected."""
        with pytest.raises(ValueError, match="Unknown claim status"):
            ClaimStatus.parse(value)
