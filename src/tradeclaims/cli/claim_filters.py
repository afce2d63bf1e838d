"""CLI helpers for claim filters shared by the claim commands."""

import click

from tradeclaims.domain.entities import DATA_TYPES, ClaimType


def claim_filter_options(command):
    """Add --type, --data-type and --counterparty options to a command."""
    command = click.option("--counterparty", help="Only trades with this counterparty")(command)
    command = click.option(
        "--data-type",
        type=click.Choice(sorted(DATA_TYPES), case_sensitive=False),
        help="Only trades from this book",
    )(command)
    command = click.option(
        "--type",
        "claim_type",
        help="Only claims of this type (receivable, payable, n/a)",
    )(command)
    return command


def resolve_claim_type(ctx: click.Context, value: str | None) -> ClaimType | None:
    """Parse a --type option value, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return ClaimType.parse(value)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
