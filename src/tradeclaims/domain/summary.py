"""Claim KPI summary."""

from collections import Counter, defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from tradeclaims.domain.classification import SLA_TOLERANCE_DAYS
from tradeclaims.domain.entities import (
    ClaimStatus,
    ClaimSummary,
    ClaimType,
    ClassificationResult,
)

HIGH_VALUE_THRESHOLD = Decimal("50000")


def build_summary(
    results: Iterable[ClassificationResult],
    statuses: Optional[Mapping[str, ClaimStatus]] = None,
) -> ClaimSummary:
    """Compute dashboard KPIs over classification results.

    Interest totals and the average PnL cover receivable and payable claims
    only; N/A results count toward the total, SLA breaches and warnings.
    Settlement counts cover claims; claims without a recorded status are
    pending.

    Args:
        results: Classification results
        statuses: Optional claim ID -> settlement status

    Returns:
        ClaimSummary for the results
    """
    results = list(results)
    claims = [r for r in results if r.is_claim]
    receivables = [r for r in claims if r.claim_type == ClaimType.RECEIVABLE]
    payables = [r for r in claims if r.claim_type == ClaimType.PAYABLE]

    receivable_interest = sum((r.interest_amount for r in receivables), Decimal("0"))
    payable_interest = sum((r.interest_amount for r in payables), Decimal("0"))

    if claims:
        average_claim_pnl = sum((abs(r.pnl) for r in claims), Decimal("0")) / len(claims)
    else:
        average_claim_pnl = Decimal("0")

    category_counts = Counter(label for r in results for label in r.category_labels)

    statuses = statuses or {}
    claim_statuses = [statuses.get(r.claim_id, ClaimStatus.PENDING) for r in claims]

    counterparty_interest: dict[str, Decimal] = defaultdict(Decimal)
    for r in claims:
        counterparty_interest[r.counterparty] += r.interest_amount

    return ClaimSummary(
        total_results=len(results),
        receivable_count=len(receivables),
        payable_count=len(payables),
        total_interest=receivable_interest + payable_interest,
        receivable_interest=receivable_interest,
        payable_interest=payable_interest,
        average_claim_pnl=average_claim_pnl,
        high_value_count=sum(1 for r in claims if abs(r.pnl) > HIGH_VALUE_THRESHOLD),
        sla_breach_count=sum(1 for r in results if r.sla_breach_days > SLA_TOLERANCE_DAYS),
        warning_count=sum(1 for r in results if r.warnings),
        category_counts=tuple(sorted(category_counts.items(), key=lambda item: (-item[1], item[0]))),
        counterparty_interest=tuple(
            sorted(counterparty_interest.items(), key=lambda item: (-item[1], item[0]))
        ),
        pending_count=claim_statuses.count(ClaimStatus.PENDING),
        settled_count=claim_statuses.count(ClaimStatus.SETTLED),
    )
