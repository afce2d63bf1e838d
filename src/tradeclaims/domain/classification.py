"""Claim classification and settlement-interest engine.

A trade becomes a claim when a processing failure or a pending approval
stands between the firm and its PnL. Positive PnL blocked by such an issue is
money owed to the firm (receivable); negative PnL compounded by a failed or
rejected cost allocation is money the firm may owe (payable).

Classification is a pure function of the trade: no I/O, no state, and no
exceptions on missing or malformed fields. Anything that had to be defaulted
because it could not be read is reported in ``ClassificationResult.warnings``.
"""

import hashlib
import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from tradeclaims.domain.entities import ClaimType, ClassificationResult, TradeRecord
from tradeclaims.utils.amount_parser import try_parse_amount
from tradeclaims.utils.date_parser import try_parse_date

logger = logging.getLogger(__name__)

DEFAULT_INTEREST_RATE = Decimal("0.05")
DEFAULT_NOTIONAL = Decimal("1000000")
# Amounts of larger magnitude are treated as unreadable
MAX_AMOUNT = Decimal("1e18")
DEFAULT_STATUS = "Pending"
DEFAULT_CURRENCY = "USD"
DAYS_IN_YEAR = Decimal(365)
# Breaches of a single day are within the expected next-day settlement
SLA_TOLERANCE_DAYS = 1

FAILED_CONFIRMATION = "Failed Confirmation"
EXPENSE_REJECTED = "Expense Rejected"
COST_ALLOCATION_FAILED = "Cost Allocation Failed"
SETTLEMENT_DELAY = "Settlement Delay"
PENDING_APPROVAL = "Pending Approval"
NO_ISSUES = "No Issues"

_ISSUE_STATUSES = frozenset({"failed", "rejected"})

TradeInput = Union[TradeRecord, Mapping[str, Any]]


def as_decimal(value) -> Decimal:
    """Convert a number to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class RateProvider(Protocol):
    """Supplies the annual interest rate for a trade's claim."""

    def rate_for(self, record: TradeRecord) -> Decimal:
        ...


class FixedRateProvider:
    """Same annual rate for every claim."""

    def __init__(self, rate: Decimal = DEFAULT_INTEREST_RATE):
        self.rate = as_decimal(rate)

    def rate_for(self, record: TradeRecord) -> Decimal:
        return self.rate


class TableRateProvider:
    """Per-counterparty annual rates with a fallback default.

    Counterparty names are matched case-insensitively.
    """

    def __init__(self, rates: Mapping[str, Decimal], default_rate: Decimal = DEFAULT_INTEREST_RATE):
        self.rates = {name.strip().lower(): as_decimal(rate) for name, rate in rates.items()}
        self.default_rate = as_decimal(default_rate)

    def rate_for(self, record: TradeRecord) -> Decimal:
        counterparty = (record.counterparty or "").strip().lower()
        return self.rates.get(counterparty, self.default_rate)


def _status(value: Optional[str]) -> str:
    """Normalize a status for comparison; missing statuses count as pending."""
    text = (value or "").strip()
    return (text or DEFAULT_STATUS).lower()


def generate_claim_id(trade_id: str, category_labels: Iterable[str]) -> str:
    """Derive a stable claim ID from the trade and what is wrong with it.

    Re-running classification on the same data yields the same IDs regardless
    of the order trades are listed in.
    """
    payload = "|".join([trade_id, *category_labels])
    digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()
    return f"CLM-{digest[:10].upper()}"


class ClaimClassificationEngine:
    """Classifies trades into receivable/payable claims with accrued interest."""

    def __init__(
        self,
        rate_provider: Optional[RateProvider] = None,
        default_notional: Decimal = DEFAULT_NOTIONAL,
    ):
        """Initialize the engine.

        Args:
            rate_provider: Source of annual interest rates; defaults to a fixed 5%
            default_notional: Notional used when a trade carries none
        """
        self.rate_provider = rate_provider or FixedRateProvider()
        self.default_notional = as_decimal(default_notional)

    def classify(self, record: TradeInput) -> ClassificationResult:
        """Classify a single trade.

        Args:
            record: TradeRecord or a flat mapping of field name to value

        Returns:
            Fully populated ClassificationResult. Never raises.
        """
        warnings: list[str] = []
        if not isinstance(record, TradeRecord):
            if not isinstance(record, Mapping):
                warnings.append(f"Unsupported record of type {type(record).__name__}; classified as empty")
                record = {}
            record = TradeRecord.from_mapping(record)

        pnl = self._pnl(record, warnings)
        notional = self._notional(record, warnings)
        breach_days = self.sla_breach_days(record, warnings)

        labels = self.categorize(record, breach_days)
        claim_type = self.determine_claim_type(record, pnl)
        rate = self._rate(record, warnings)
        interest = self.accrued_interest(notional, breach_days, rate, warnings)

        for warning in warnings:
            logger.debug("Trade %s: %s", record.trade_id, warning)

        return ClassificationResult(
            claim_id=generate_claim_id(record.trade_id, labels),
            trade_id=record.trade_id,
            counterparty=record.counterparty or "Unknown",
            claim_type=claim_type,
            category_labels=labels,
            sla_breach_days=breach_days,
            interest_rate=rate,
            interest_amount=interest,
            pnl=pnl,
            notional_amount=notional,
            currency=record.currency or DEFAULT_CURRENCY,
            reason=self.claim_type_reason(record, pnl, claim_type),
            warnings=tuple(warnings),
        )

    def classify_all(self, records: Iterable[TradeInput]) -> list[ClassificationResult]:
        """Classify a batch of trades, preserving input order."""
        return [self.classify(record) for record in records]

    def categorize(self, record: TradeRecord, breach_days: int) -> tuple[str, ...]:
        """Tag every issue that applies to a trade, in a fixed order."""
        confirmation = _status(record.confirmation_status)
        expense = _status(record.expense_approval_status)
        allocation = _status(record.cost_allocation_status)

        labels = []
        if confirmation == "failed":
            labels.append(FAILED_CONFIRMATION)
        if expense == "rejected":
            labels.append(EXPENSE_REJECTED)
        if allocation == "failed":
            labels.append(COST_ALLOCATION_FAILED)
        if breach_days > SLA_TOLERANCE_DAYS:
            labels.append(SETTLEMENT_DELAY)
        if "pending" in (confirmation, expense, allocation):
            labels.append(PENDING_APPROVAL)

        return tuple(labels) if labels else (NO_ISSUES,)

    def determine_claim_type(self, record: TradeRecord, pnl: Decimal) -> ClaimType:
        """Decide whether a trade is a receivable or payable claim."""
        statuses = (
            _status(record.confirmation_status),
            _status(record.expense_approval_status),
            _status(record.cost_allocation_status),
        )
        has_issues = any(s in _ISSUE_STATUSES for s in statuses)
        has_pending = "pending" in statuses

        if pnl > 0 and (has_issues or has_pending):
            return ClaimType.RECEIVABLE
        if pnl < 0 and statuses[2] in _ISSUE_STATUSES:
            return ClaimType.PAYABLE
        return ClaimType.NOT_APPLICABLE

    def claim_type_reason(self, record: TradeRecord, pnl: Decimal, claim_type: ClaimType) -> str:
        """Explain a claim type decision in plain words."""
        amount = f"${pnl.copy_abs():,.2f}"
        if claim_type == ClaimType.RECEIVABLE:
            statuses = (
                _status(record.confirmation_status),
                _status(record.expense_approval_status),
                _status(record.cost_allocation_status),
            )
            if any(s in _ISSUE_STATUSES for s in statuses):
                return (
                    f"Receivable: positive PnL ({amount}) with settlement issues or rejections. "
                    "The firm is owed money due to failed confirmations, rejected expenses, "
                    "or cost allocation failures."
                )
            return (
                f"Receivable: positive PnL ({amount}) with pending settlement. "
                "Expected profit was delayed by pending approvals."
            )
        if claim_type == ClaimType.PAYABLE:
            return (
                f"Payable: negative PnL ({amount}) with cost allocation issues. "
                "The counterparty may raise a claim against the firm for unallocated or rejected costs."
            )
        return (
            "N/A: the trade does not meet the receivable or payable criteria "
            "for its PnL and status conditions."
        )

    def sla_breach_days(self, record: TradeRecord, warnings: Optional[list[str]] = None) -> int:
        """Days between value date and settlement date.

        Missing or unparseable dates count as no breach and add a warning.
        """
        if warnings is None:
            warnings = []

        value_date = try_parse_date(record.value_date)
        settlement_date = try_parse_date(record.settlement_date)

        for label, raw, parsed in (
            ("value date", record.value_date, value_date),
            ("settlement date", record.settlement_date, settlement_date),
        ):
            if raw is None:
                warnings.append(f"Missing {label}; SLA breach treated as 0 days")
            elif parsed is None:
                warnings.append(f"Unparseable {label} '{raw}'; SLA breach treated as 0 days")

        if value_date is None or settlement_date is None:
            return 0
        return (settlement_date - value_date).days

    def accrued_interest(
        self,
        notional: Decimal,
        breach_days: int,
        rate: Decimal,
        warnings: Optional[list[str]] = None,
    ) -> Decimal:
        """Simple interest on the notional for the breach period, ACT/365.

        Arithmetic that overflows the decimal range yields 0 and a warning.
        """
        if breach_days <= SLA_TOLERANCE_DAYS:
            return Decimal("0")
        try:
            interest = rate * notional.copy_abs() * breach_days / DAYS_IN_YEAR
        except ArithmeticError:
            interest = None
        if interest is None or not interest.is_finite():
            if warnings is not None:
                warnings.append(
                    f"Interest could not be computed for notional {notional} at rate {rate}; treated as 0"
                )
            return Decimal("0")
        return interest

    def _pnl(self, record: TradeRecord, warnings: list[str]) -> Decimal:
        if record.pnl_calculated is None:
            return Decimal("0")
        pnl = try_parse_amount(record.pnl_calculated)
        if pnl is None:
            warnings.append(f"Unparseable PnL '{record.pnl_calculated}'; treated as 0")
            return Decimal("0")
        if pnl.copy_abs() > MAX_AMOUNT:
            warnings.append(f"PnL '{record.pnl_calculated}' is out of range; treated as 0")
            return Decimal("0")
        return pnl

    def _notional(self, record: TradeRecord, warnings: list[str]) -> Decimal:
        if record.notional_amount is None:
            return self.default_notional
        notional = try_parse_amount(record.notional_amount)
        if notional is None:
            warnings.append(
                f"Unparseable notional amount '{record.notional_amount}'; "
                f"using default {self.default_notional:,.0f}"
            )
            return self.default_notional
        if notional.copy_abs() > MAX_AMOUNT:
            warnings.append(
                f"Notional amount '{record.notional_amount}' is out of range; "
                f"using default {self.default_notional:,.0f}"
            )
            return self.default_notional
        return notional

    def _rate(self, record: TradeRecord, warnings: list[str]) -> Decimal:
        try:
            rate = as_decimal(self.rate_provider.rate_for(record))
        except Exception as e:
            warnings.append(f"No interest rate available ({e}); interest treated as 0")
            return Decimal("0")
        if not rate.is_finite() or rate < 0:
            warnings.append(f"Invalid interest rate '{rate}'; interest treated as 0")
            return Decimal("0")
        return rate


def classify(record: TradeInput, rate_provider: Optional[RateProvider] = None) -> ClassificationResult:
    """Classify a single trade with a default engine."""
    return ClaimClassificationEngine(rate_provider=rate_provider).classify(record)


def classify_all(
    records: Iterable[TradeInput], rate_provider: Optional[RateProvider] = None
) -> list[ClassificationResult]:
    """Classify a batch of trades with a default engine."""
    return ClaimClassificationEngine(rate_provider=rate_provider).classify_all(records)
