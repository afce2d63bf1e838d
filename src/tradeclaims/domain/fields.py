"""Canonical trade fields and the header synonym table.

Blotters exported from different brokers and booking systems name the same
column in many ways ("Trade ID", "TradeID", "trade_id", ...). This module is
the single place where those spellings are resolved to canonical field names,
once, at ingestion time.
"""

import re

# Canonical field -> header spellings, most specific first.
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "trade_id": ("Trade ID", "TradeID", "Trade Ref", "Trade Reference", "Deal ID", "id"),
    "client_id": ("Client ID", "ClientID", "Client Code", "Account ID"),
    "counterparty": ("Counterparty", "Counter Party", "Broker", "Counterparty Name"),
    "trade_date": ("Trade Date", "TradeDate", "Deal Date", "Date"),
    "value_date": ("Value Date", "ValueDate", "Val Date"),
    "settlement_date": ("Settlement Date", "SettlementDate", "Settle Date", "Actual Settlement Date", "Settlement"),
    "notional_amount": (
        "Notional Amount",
        "Notional",
        "Trade Value",
        "Principal Amount",
        "Amount",
        "Value",
    ),
    "pnl_calculated": (
        "PnL Calculated",
        "Calculated PnL",
        "PnL",
        "P&L",
        "Profit Loss",
        "FX Gain Loss",
    ),
    "confirmation_status": ("Confirmation Status", "Confirmation"),
    "expense_approval_status": ("Expense Approval Status", "Expense Approval", "Approval Status"),
    "cost_allocation_status": ("Cost Allocation Status", "Cost Allocation", "Allocation Status"),
    "currency": ("Currency", "CCY", "Settlement Currency", "Deal Currency", "Base Currency"),
}

CANONICAL_FIELDS: tuple[str, ...] = tuple(FIELD_SYNONYMS)

# The claim type cannot be decided without PnL.
REQUIRED_FIELDS: frozenset[str] = frozenset({"pnl_calculated"})

_HEADER_NOISE = re.compile(r"[\s_\-./]+")


def normalize_header(name: str) -> str:
    """Normalize a header for comparison.

    Case, whitespace, underscores, hyphens, dots and slashes are ignored, so
    "Trade ID", "trade_id" and "TRADE-ID" all normalize to "tradeid".
    """
    return _HEADER_NOISE.sub("", str(name)).lower()


def _build_index() -> dict[str, str]:
    index: dict[str, str] = {}
    for field, synonyms in FIELD_SYNONYMS.items():
        index.setdefault(normalize_header(field), field)
        for synonym in synonyms:
            index.setdefault(normalize_header(synonym), field)
    return index


_SYNONYM_INDEX = _build_index()


def field_for_header(header: str) -> str | None:
    """Return the canonical field a header refers to, or None."""
    return _SYNONYM_INDEX.get(normalize_header(header))


def auto_map_columns(headers) -> dict[str, str]:
    """Map file headers to canonical fields using the synonym table.

    When several headers resolve to the same field, the one matching the
    earliest (most specific) synonym wins; "Notional Amount" beats "Amount".

    Args:
        headers: Header names as they appear in the file

    Returns:
        Dict of header -> canonical field name, for matched headers only
    """
    by_normalized: dict[str, str] = {}
    for header in headers:
        if header is None:
            continue
        by_normalized.setdefault(normalize_header(header), header)

    mapping: dict[str, str] = {}
    for field, synonyms in FIELD_SYNONYMS.items():
        for candidate in (field, *synonyms):
            header = by_normalized.get(normalize_header(candidate))
            if header is not None and header not in mapping:
                mapping[header] = field
                break
    return mapping


def lookup(row, field: str):
    """Return the first non-blank value for a canonical field in a raw row.

    The row may be keyed by canonical names or by any known synonym.
    """
    normalized_row = {normalize_header(k): v for k, v in row.items() if k is not None}
    for candidate in (field, *FIELD_SYNONYMS.get(field, ())):
        value = normalized_row.get(normalize_header(candidate))
        if value is not None and str(value).strip() != "":
            return value
    return None
