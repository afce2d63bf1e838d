"""Domain model entities for tradeclaims.

These are pure data classes representing business concepts, independent of
database schema. Trades keep their raw ingested text for dates and amounts so
that classification decides how malformed values degrade and can report them.
"""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union

from tradeclaims.domain.fields import CANONICAL_FIELDS, lookup

RawAmount = Union[Decimal, int, float, str, None]

DATA_TYPES = frozenset({"fx", "equity"})


class ClaimType(str, Enum):
    """Claim classification from the firm's perspective."""

    RECEIVABLE = "Receivable"
    PAYABLE = "Payable"
    NOT_APPLICABLE = "N/A"

    @classmethod
    def parse(cls, value: str) -> "ClaimType":
        """Parse a claim type from user input (case-insensitive)."""
        needle = value.strip().lower()
        for member in cls:
            if member.value.lower() == needle or member.name.lower() == needle:
                return member
        if needle in ("na", "none"):
            return cls.NOT_APPLICABLE
        raise ValueError(
            f"Unknown claim type '{value}'. Must be one of: "
            + ", ".join(m.value for m in cls)
        )


class ClaimStatus(str, Enum):
    """Settlement progress of a claim."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    SETTLED = "Settled"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: str) -> "ClaimStatus":
        """Parse a claim status from user input (case-insensitive)."""
        needle = " ".join((value or "").replace("-", " ").replace("_", " ").split()).lower()
        for member in cls:
            if member.value.lower() == needle:
                return member
        raise ValueError(
            f"Unknown claim status '{value}'. Must be one of: "
            + ", ".join(m.value for m in cls)
        )


def generate_trade_id(values: Mapping[str, Any]) -> str:
    """Derive a trade ID from a row's content when the blotter carries none.

    The same row always gets the same ID, so re-importing a file without an ID
    column is still detected as a duplicate.
    """
    payload = "|".join(
        "" if values.get(name) is None else str(values.get(name)).strip()
        for name in CANONICAL_FIELDS
        if name != "trade_id"
    )
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    return f"TRD-{digest[:10].upper()}"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class TradeRecord:
    """Trade as ingested from a blotter."""

    trade_id: str
    client_id: Optional[str] = None
    counterparty: Optional[str] = None
    trade_date: Optional[str] = None
    value_date: Optional[str] = None
    settlement_date: Optional[str] = None
    notional_amount: RawAmount = None
    pnl_calculated: RawAmount = None
    confirmation_status: Optional[str] = None
    expense_approval_status: Optional[str] = None
    cost_allocation_status: Optional[str] = None
    currency: Optional[str] = None
    data_type: str = "fx"
    imported_at: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "TradeRecord":
        """Build a record from a flat mapping keyed by canonical names or synonyms.

        Blank values become None. Dates and amounts are kept as given. A row
        without a trade ID gets one derived from its content.
        """
        def amount(field_name: str) -> RawAmount:
            value = lookup(row, field_name)
            if isinstance(value, (Decimal, int, float)):
                return value
            return _text(value)

        values = dict(
            client_id=_text(lookup(row, "client_id")),
            counterparty=_text(lookup(row, "counterparty")),
            trade_date=_text(lookup(row, "trade_date")),
            value_date=_text(lookup(row, "value_date")),
            settlement_date=_text(lookup(row, "settlement_date")),
            notional_amount=amount("notional_amount"),
            pnl_calculated=amount("pnl_calculated"),
            confirmation_status=_text(lookup(row, "confirmation_status")),
            expense_approval_status=_text(lookup(row, "expense_approval_status")),
            cost_allocation_status=_text(lookup(row, "cost_allocation_status")),
            currency=_text(lookup(row, "currency")),
        )
        return cls(
            trade_id=_text(lookup(row, "trade_id")) or generate_trade_id(values),
            **values,
            data_type=(_text(row.get("data_type")) or "fx").lower(),
        )


@dataclass(frozen=True)
class ClassificationResult:
    """Claim derived from one trade. Recomputed on every read."""

    claim_id: str
    trade_id: str
    counterparty: str
    claim_type: ClaimType
    category_labels: tuple[str, ...]
    sla_breach_days: int
    interest_rate: Decimal
    interest_amount: Decimal
    pnl: Decimal
    notional_amount: Decimal
    currency: str
    reason: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def category_label(self) -> str:
        """Category labels joined for display."""
        return ", ".join(self.category_labels)

    @property
    def is_claim(self) -> bool:
        """True for receivable and payable results."""
        return self.claim_type != ClaimType.NOT_APPLICABLE


@dataclass(frozen=True)
class ImportFormat:
    """Named column-mapping profile for a blotter layout."""

    id: int
    name: str
    data_type: str
    created_at: datetime


@dataclass(frozen=True)
class ColumnMapping:
    """Maps one file column to a canonical trade field."""

    id: int
    format_id: int
    column_name: str
    field_name: str


@dataclass(frozen=True)
class CounterpartyRate:
    """Annual interest rate agreed with a counterparty."""

    id: int
    counterparty: str
    annual_rate: Decimal
    updated_at: datetime


@dataclass(frozen=True)
class ClaimSnapshot:
    """Persisted copy of a classification result (a cache, not authoritative)."""

    id: int
    claim_id: str
    trade_id: str
    counterparty: str
    claim_type: str
    categories: str
    sla_breach_days: int
    interest_amount: Decimal
    saved_at: datetime


@dataclass(frozen=True)
class ClaimRemark:
    """Free-text remark attached to a claim."""

    claim_id: str
    remark: str
    updated_at: datetime


@dataclass(frozen=True)
class ClaimStatusEntry:
    """Settlement status recorded for a claim."""

    claim_id: str
    status: ClaimStatus
    updated_at: datetime


@dataclass(frozen=True)
class ClaimSummary:
    """KPI figures over a set of classification results."""

    total_results: int
    receivable_count: int
    payable_count: int
    total_interest: Decimal
    receivable_interest: Decimal
    payable_interest: Decimal
    average_claim_pnl: Decimal
    high_value_count: int
    sla_breach_count: int
    warning_count: int
    category_counts: tuple[tuple[str, int], ...]
    counterparty_interest: tuple[tuple[str, Decimal], ...]
    pending_count: int
    settled_count: int

    @property
    def claim_count(self) -> int:
        """Receivable plus payable claims."""
        return self.receivable_count + self.payable_count
