"""Trade domain service."""

from typing import Optional
from tradeclaims.database.base import Database
from tradeclaims.domain.entities import DATA_TYPES, TradeRecord
from tradeclaims.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_trade,
    invalid_data_type,
    trade_not_found,
)


def validate_data_type(data_type: str) -> str:
    """Normalize and validate a trade book name.

    Raises:
        ValidationError: If the book is unknown
    """
    normalized = (data_type or "").strip().lower()
    if normalized not in DATA_TYPES:
        raise ValidationError(invalid_data_type(data_type, DATA_TYPES))
    return normalized


class TradeService:
    """Service for managing stored trades."""

    def __init__(self, db: Database):
        """Initialize trade service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_trade(self, record: TradeRecord) -> int:
        """Store a trade.

        Args:
            record: Trade to store

        Returns:
            Row ID of the stored trade

        Raises:
            ValidationError: If the trade has no ID or an unknown data type
            ConflictError: If a trade with the same ID already exists
        """
        if not record.trade_id or not record.trade_id.strip():
            raise ValidationError("Trade ID is required")
        validate_data_type(record.data_type)

        if self.db.trade_exists(record.trade_id):
            raise ConflictError(duplicate_trade(record.trade_id))

        return self.db.create_trade(record)

    def get_trade(self, trade_id: str) -> Optional[TradeRecord]:
        """Get trade by trade ID.

        Args:
            trade_id: Trade ID

        Returns:
            Trade or None if not found
        """
        return self.db.get_trade(trade_id)

    def list_trades(
        self,
        data_type: Optional[str] = None,
        counterparty: Optional[str] = None,
    ) -> list[TradeRecord]:
        """List trades with optional filters.

        Args:
            data_type: Optional book filter (fx, equity)
            counterparty: Optional counterparty filter

        Returns:
            Trades in import order
        """
        if data_type is not None:
            data_type = validate_data_type(data_type)
        return self.db.list_trades(data_type=data_type, counterparty=counterparty)

    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade.

        Raises:
            NotFoundError: If the trade doesn't exist
        """
        if not self.db.trade_exists(trade_id):
            raise NotFoundError(trade_not_found(trade_id))
        self.db.delete_trade(trade_id)

    def count_trades(self, data_type: Optional[str] = None) -> int:
        """Count stored trades, optionally for one book."""
        if data_type is not None:
            data_type = validate_data_type(data_type)
        return self.db.count_trades(data_type=data_type)
