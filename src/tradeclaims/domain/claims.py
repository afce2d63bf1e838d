"""Claim workflow domain service."""

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

from tradeclaims.database.base import Database
from tradeclaims.domain.classification import (
    DEFAULT_INTEREST_RATE,
    ClaimClassificationEngine,
)
from tradeclaims.domain.entities import (
    ClaimSnapshot,
    ClaimStatus,
    ClaimType,
    ClassificationResult,
)
from tradeclaims.domain.errors import ValidationError
from tradeclaims.domain.rates import RateService
from tradeclaims.domain.trade import TradeService

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    "Claim ID",
    "Trade ID",
    "Counterparty",
    "Claim Type",
    "Category",
    "SLA Breach Days",
    "Interest Rate",
    "Interest Amount",
    "PnL",
    "Notional Amount",
    "Currency",
    "Status",
    "Remark",
    "Reason",
)


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount to cents regardless of its number of digits."""
    return Decimal(f"{amount:.2f}")


class ClaimService:
    """Service for classifying stored trades and managing claim follow-up."""

    def __init__(self, db: Database, default_rate: Decimal = DEFAULT_INTEREST_RATE):
        """Initialize claim service.

        Args:
            db: Database instance
            default_rate: Annual rate for counterparties without a stored rate
        """
        self.db = db
        self.default_rate = default_rate
        self.trade_service = TradeService(db)
        self.rate_service = RateService(db)

    def build_engine(self) -> ClaimClassificationEngine:
        """Create an engine over the current counterparty rate table."""
        provider = self.rate_service.build_rate_provider(default_rate=self.default_rate)
        return ClaimClassificationEngine(rate_provider=provider)

    def classify_trades(
        self,
        data_type: Optional[str] = None,
        counterparty: Optional[str] = None,
        claim_type: Optional[ClaimType] = None,
    ) -> list[ClassificationResult]:
        """Classify stored trades.

        Results are recomputed from the trades on every call.

        Args:
            data_type: Optional book filter (fx, equity)
            counterparty: Optional counterparty filter
            claim_type: Optional claim type filter, applied after classification

        Returns:
            Classification results in import order
        """
        trades = self.trade_service.list_trades(data_type=data_type, counterparty=counterparty)
        results = self.build_engine().classify_all(trades)

        with_warnings = sum(1 for r in results if r.warnings)
        if with_warnings:
            logger.warning("%d of %d trade(s) classified with data warnings", with_warnings, len(results))

        if claim_type is not None:
            results = [r for r in results if r.claim_type == claim_type]
        return results

    def save_snapshot(self, results: Iterable[ClassificationResult]) -> int:
        """Save results as the current claim snapshot, replacing the previous one.

        Returns:
            Number of results saved
        """
        snapshots = [
            {
                "claim_id": r.claim_id,
                "trade_id": r.trade_id,
                "counterparty": r.counterparty,
                "claim_type": r.claim_type.value,
                "categories": r.category_label,
                "sla_breach_days": r.sla_breach_days,
                "interest_amount": to_cents(r.interest_amount),
            }
            for r in results
        ]
        return self.db.replace_claim_snapshots(snapshots)

    def list_snapshot(self) -> list[ClaimSnapshot]:
        """List the saved claim snapshot."""
        return self.db.list_claim_snapshots()

    def set_remark(self, claim_id: str, remark: Optional[str]) -> None:
        """Set the remark for a claim. Blank text clears it.

        Raises:
            ValidationError: If the claim ID is blank
        """
        claim_id = (claim_id or "").strip()
        if not claim_id:
            raise ValidationError("Claim ID is required")
        self.db.set_claim_remark(claim_id, (remark or "").strip() or None)

    def get_remarks(self) -> dict[str, str]:
        """Get all remarks as a claim ID -> text dict."""
        return {r.claim_id: r.remark for r in self.db.list_claim_remarks()}

    def set_status(self, claim_id: str, status: str) -> ClaimStatus:
        """Record the settlement status of a claim.

        Args:
            claim_id: Claim ID
            status: One of Pending, In Progress, Settled, Rejected (case-insensitive)

        Returns:
            The parsed status

        Raises:
            ValidationError: If the claim ID is blank or the status is unknown
        """
        claim_id = (claim_id or "").strip()
        if not claim_id:
            raise ValidationError("Claim ID is required")
        try:
            parsed = ClaimStatus.parse(status)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        self.db.set_claim_status(claim_id, parsed.value)
        logger.info("Claim %s marked %s", claim_id, parsed.value)
        return parsed

    def get_statuses(self) -> dict[str, ClaimStatus]:
        """Get recorded statuses as a claim ID -> status dict.

        Claims without an entry are pending.
        """
        return {s.claim_id: s.status for s in self.db.list_claim_statuses()}

    def export_csv(self, results: Iterable[ClassificationResult], file_path: str) -> int:
        """Write claims to a CSV file, one row per result.

        Args:
            results: Classification results to export
            file_path: Destination path; parent directories must exist

        Returns:
            Number of rows written
        """
        remarks = self.get_remarks()
        statuses = self.get_statuses()
        count = 0
        with open(Path(file_path), "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            for r in results:
                writer.writerow(
                    {
                        "Claim ID": r.claim_id,
                        "Trade ID": r.trade_id,
                        "Counterparty": r.counterparty,
                        "Claim Type": r.claim_type.value,
                        "Category": r.category_label,
                        "SLA Breach Days": r.sla_breach_days,
                        "Interest Rate": f"{r.interest_rate}",
                        "Interest Amount": f"{to_cents(r.interest_amount)}",
                        "PnL": f"{r.pnl}",
                        "Notional Amount": f"{r.notional_amount}",
                        "Currency": r.currency,
                        "Status": statuses.get(r.claim_id, ClaimStatus.PENDING).value,
                        "Remark": remarks.get(r.claim_id, ""),
                        "Reason": r.reason,
                    }
                )
                count += 1
        logger.info("Exported %d claim(s) to %s", count, file_path)
        return count
