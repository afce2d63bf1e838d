"""Main CLI entry point."""

from pathlib import Path

import click

from tradeclaims.database.sqlalchemy_db import SQLAlchemyDatabase
from tradeclaims.domain.classification import DEFAULT_INTEREST_RATE
from tradeclaims.domain.errors import ValidationError
from tradeclaims.domain.rates import parse_rate
from tradeclaims.logging_config import setup_logging

# Import and register all commands at module level
from tradeclaims.cli.commands import (
    claims,
    format,
    import_cmd,
    rate,
    summary,
    trades,
)

DEFAULT_DB_PATH = Path.home() / ".tradeclaims" / "tradeclaims.db"


def _parse_default_rate(ctx, param, value):
    if value is None:
        return DEFAULT_INTEREST_RATE
    try:
        return parse_rate(value)
    except ValidationError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file, default ~/.tradeclaims/tradeclaims.db "
    "(overrides TRADECLAIMS_DB_PATH environment variable)",
    envvar="TRADECLAIMS_DB_PATH",
)
@click.option(
    "--default-rate",
    callback=_parse_default_rate,
    help="Annual interest rate for counterparties without a stored rate, e.g. 0.05 or 5% "
    "(overrides TRADECLAIMS_DEFAULT_RATE environment variable)",
    envvar="TRADECLAIMS_DEFAULT_RATE",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (overrides TRADECLAIMS_LOG_LEVEL environment variable)",
    envvar="TRADECLAIMS_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, default_rate, log_level: str):
    """Tradeclaims - Trade claim classification and settlement interest.

    Import trade blotters, classify trades into receivable and payable claims,
    and track interest accrued on late settlement.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = SQLAlchemyDatabase.for_sqlite_file(db_path or str(DEFAULT_DB_PATH))
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["default_rate"] = default_rate
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
format.register_commands(cli)
rate.register_commands(cli)
trades.register_commands(cli)
claims.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
