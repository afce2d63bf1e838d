"""Counterparty interest rate domain service."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from tradeclaims.database.base import Database
from tradeclaims.domain.classification import DEFAULT_INTEREST_RATE, TableRateProvider
from tradeclaims.domain.entities import CounterpartyRate
from tradeclaims.domain.errors import NotFoundError, ValidationError, rate_not_found

MAX_ANNUAL_RATE = Decimal("1")


def parse_rate(value: Union[Decimal, int, float, str]) -> Decimal:
    """Parse an annual rate given as a fraction (0.05) or a percentage ("5%").

    Raises:
        ValidationError: If the value is not a rate between 0 and 1
    """
    text = str(value).strip()
    is_percent = text.endswith("%")
    if is_percent:
        text = text[:-1].strip()
    try:
        rate = Decimal(text)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid interest rate '{value}'") from e
    if is_percent:
        rate = rate / 100
    if not rate.is_finite() or rate < 0 or rate > MAX_ANNUAL_RATE:
        raise ValidationError(
            f"Invalid interest rate '{value}'. Must be between 0 and {MAX_ANNUAL_RATE} (or 0% to 100%)"
        )
    return rate


class RateService:
    """Service for managing per-counterparty annual interest rates."""

    def __init__(self, db: Database):
        """Initialize rate service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_rate(self, counterparty: str, rate: Union[Decimal, int, float, str]) -> int:
        """Set the annual rate for a counterparty, replacing any existing rate.

        Args:
            counterparty: Counterparty name (matched case-insensitively)
            rate: Annual rate as a fraction, or a percentage string like "4.5%"

        Returns:
            Rate ID

        Raises:
            ValidationError: If the counterparty is blank or the rate is out of range
        """
        counterparty = (counterparty or "").strip()
        if not counterparty:
            raise ValidationError("Counterparty is required")
        return self.db.set_counterparty_rate(counterparty, parse_rate(rate))

    def get_rate(self, counterparty: str) -> Optional[CounterpartyRate]:
        """Get the rate for a counterparty, or None if none is set."""
        return self.db.get_counterparty_rate(counterparty)

    def list_rates(self) -> list[CounterpartyRate]:
        """List all counterparty rates, by counterparty name."""
        return self.db.list_counterparty_rates()

    def delete_rate(self, counterparty: str) -> None:
        """Delete the rate for a counterparty.

        Raises:
            NotFoundError: If no rate is set for the counterparty
        """
        if self.db.get_counterparty_rate(counterparty) is None:
            raise NotFoundError(rate_not_found(counterparty))
        self.db.delete_counterparty_rate(counterparty)

    def build_rate_provider(self, default_rate: Decimal = DEFAULT_INTEREST_RATE) -> TableRateProvider:
        """Build a rate provider from the stored rates.

        Args:
            default_rate: Rate for counterparties without a stored rate

        Returns:
            TableRateProvider over the current rate table
        """
        rates = {r.counterparty: r.annual_rate for r in self.list_rates()}
        return TableRateProvider(rates, default_rate=default_rate)
