"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from tradeclaims.domain.entities import (
    TradeRecord,
    ImportFormat,
    ColumnMapping,
    CounterpartyRate,
    ClaimSnapshot,
    ClaimRemark,
    ClaimStatusEntry,
)


class Database(ABC):
    """Abstract database interface for tradeclaims."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Trade operations
    @abstractmethod
    def create_trade(self, record: TradeRecord) -> int:
        """Store a trade. Returns the row ID."""
        pass

    @abstractmethod
    def get_trade(self, trade_id: str) -> Optional[TradeRecord]:
        """Get trade by trade ID."""
        pass

    @abstractmethod
    def trade_exists(self, trade_id: str) -> bool:
        """Check if a trade with given trade ID exists."""
        pass

    @abstractmethod
    def list_trades(
        self,
        data_type: Optional[str] = None,
        counterparty: Optional[str] = None,
    ) -> list[TradeRecord]:
        """List trades in import order with optional filters.

        Args:
            data_type: Optional book filter (fx, equity)
            counterparty: Optional counterparty filter (case-insensitive)
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade."""
        pass

    @abstractmethod
    def count_trades(self, data_type: Optional[str] = None) -> int:
        """Count stored trades."""
        pass

    # Import format operations
    @abstractmethod
    def create_import_format(self, name: str, data_type: str) -> int:
        """Create a new import format. Returns format ID."""
        pass

    @abstractmethod
    def get_import_format(self, format_id: int) -> Optional[ImportFormat]:
        """Get import format by ID."""
        pass

    @abstractmethod
    def get_import_format_by_name(self, name: str) -> Optional[ImportFormat]:
        """Get import format by name."""
        pass

    @abstractmethod
    def list_import_formats(self) -> list[ImportFormat]:
        """List import formats."""
        pass

    @abstractmethod
    def delete_import_format(self, format_id: int) -> None:
        """Delete an import format and its mappings."""
        pass

    # Column mapping operations
    @abstractmethod
    def add_column_mapping(self, format_id: int, column_name: str, field_name: str) -> int:
        """Add a column mapping to an import format. Returns mapping ID."""
        pass

    @abstractmethod
    def get_column_mappings(self, format_id: int) -> list[ColumnMapping]:
        """Get all column mappings for a format."""
        pass

    # Counterparty rate operations
    @abstractmethod
    def set_counterparty_rate(self, counterparty: str, annual_rate: Decimal) -> int:
        """Create or update the rate for a counterparty. Returns rate ID."""
        pass

    @abstractmethod
    def get_counterparty_rate(self, counterparty: str) -> Optional[CounterpartyRate]:
        """Get rate for a counterparty (case-insensitive)."""
        pass

    @abstractmethod
    def list_counterparty_rates(self) -> list[CounterpartyRate]:
        """List all counterparty rates."""
        pass

    @abstractmethod
    def delete_counterparty_rate(self, counterparty: str) -> None:
        """Delete the rate for a counterparty."""
        pass

    # Claim snapshot operations
    @abstractmethod
    def replace_claim_snapshots(self, snapshots: list[dict]) -> int:
        """Replace all saved claim snapshots. Returns number saved."""
        pass

    @abstractmethod
    def list_claim_snapshots(self) -> list[ClaimSnapshot]:
        """List saved claim snapshots."""
        pass

    # Claim remark operations
    @abstractmethod
    def set_claim_remark(self, claim_id: str, remark: Optional[str]) -> None:
        """Set or clear the remark for a claim."""
        pass

    @abstractmethod
    def list_claim_remarks(self) -> list[ClaimRemark]:
        """List all claim remarks."""
        pass

    # Claim status operations
    @abstractmethod
    def set_claim_status(self, claim_id: str, status: str) -> None:
        """Set the settlement status for a claim."""
        pass

    @abstractmethod
    def list_claim_statuses(self) -> list[ClaimStatusEntry]:
        """List all recorded claim statuses."""
        pass
