"""Trade listing command."""

import click

from tradeclaims.domain.entities import DATA_TYPES
from tradeclaims.domain.trade import TradeService


@click.command("trades")
@click.option(
    "--data-type",
    type=click.Choice(sorted(DATA_TYPES), case_sensitive=False),
    help="Only trades from this book",
)
@click.option("--counterparty", help="Only trades with this counterparty")
@click.pass_context
def list_trades(ctx, data_type: str | None, counterparty: str | None):
    """List imported trades."""
    db = ctx.obj["db"]
    service = TradeService(db)

    trades = service.list_trades(data_type=data_type, counterparty=counterparty)
    if not trades:
        click.echo("No trades found.")
        return

    click.echo(f"\nFound {len(trades)} trade(s):")
    click.echo("-" * 120)
    click.echo(
        f"{'Trade ID':<16} {'Counterparty':<20} {'Value Date':<12} {'Settlement':<12} "
        f"{'PnL':>14} {'Confirmation':<14} {'Expense':<10} {'Allocation':<10}"
    )
    click.echo("-" * 120)
    for t in trades:
        click.echo(
            f"{t.trade_id:<16} {(t.counterparty or '')[:20]:<20} {t.value_date or '':<12} "
            f"{t.settlement_date or '':<12} {str(t.pnl_calculated or ''):>14} "
            f"{t.confirmation_status or '':<14} {t.expense_approval_status or '':<10} "
            f"{t.cost_allocation_status or '':<10}"
        )


def register_commands(cli):
    """Register trades command with main CLI."""
    cli.add_command(list_trades)
