"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or file does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def trade_not_found(trade_id: str) -> str:
    """Return message for missing trade."""
    return f"Trade '{trade_id}' not found"


def duplicate_trade(trade_id: str) -> str:
    """Return message for duplicate trade ID."""
    return f"Trade with trade_id '{trade_id}' already exists"


def format_not_found(name: str | int) -> str:
    """Return message for missing import format by name or ID."""
    if isinstance(name, int):
        return f"Import format {name} not found"
    return f"Import format '{name}' not found"


def invalid_data_type(data_type: str, valid: set[str]) -> str:
    """Return message for an unknown trade book."""
    return f"Invalid data type '{data_type}'. Must be one of: {', '.join(sorted(valid))}"


def rate_not_found(counterparty: str) -> str:
    """Return message for missing counterparty rate."""
    return f"No interest rate set for counterparty '{counterparty}'"
