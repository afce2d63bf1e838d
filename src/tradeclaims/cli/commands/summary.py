"""Claim summary command."""

import click

from tradeclaims.cli.claim_filters import claim_filter_options, resolve_claim_type
from tradeclaims.cli.error_handling import handle_domain_error
from tradeclaims.domain.claims import ClaimService
from tradeclaims.domain.errors import DomainError
from tradeclaims.domain.summary import build_summary


@click.command("summary")
@claim_filter_options
@click.pass_context
def summary(ctx, claim_type, data_type, counterparty):
    """Show claim KPIs: counts, interest totals and top categories."""
    db = ctx.obj["db"]
    service = ClaimService(db, default_rate=ctx.obj["default_rate"])

    try:
        results = service.classify_trades(
            data_type=data_type,
            counterparty=counterparty,
            claim_type=resolve_claim_type(ctx, claim_type),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not results:
        click.echo("No trades found.")
        return

    s = build_summary(results, statuses=service.get_statuses())

    click.echo("\nClaim Summary:")
    click.echo("-" * 60)
    click.echo(f"{'Trades classified':<40} {s.total_results:>19}")
    click.echo(f"{'Claims':<40} {s.claim_count:>19}")
    click.echo(f"{'  Receivable':<40} {s.receivable_count:>19}")
    click.echo(f"{'  Payable':<40} {s.payable_count:>19}")
    click.echo(f"{'  Pending settlement':<40} {s.pending_count:>19}")
    click.echo(f"{'  Settled':<40} {s.settled_count:>19}")
    click.echo(f"{'Total interest':<40} {s.total_interest:>19,.2f}")
    click.echo(f"{'  Receivable interest':<40} {s.receivable_interest:>19,.2f}")
    click.echo(f"{'  Payable interest':<40} {s.payable_interest:>19,.2f}")
    click.echo(f"{'Average claim PnL':<40} {s.average_claim_pnl:>19,.2f}")
    click.echo(f"{'High value claims (PnL > 50,000)':<40} {s.high_value_count:>19}")
    click.echo(f"{'SLA breaches':<40} {s.sla_breach_count:>19}")
    if s.warning_count:
        click.echo(f"{'Trades with data warnings':<40} {s.warning_count:>19}")

    click.echo("\nBy Category:")
    click.echo("-" * 60)
    for label, count in s.category_counts:
        click.echo(f"{label:<40} {count:>19}")

    if s.counterparty_interest:
        click.echo("\nInterest by Counterparty:")
        click.echo("-" * 60)
        for name, amount in s.counterparty_interest:
            click.echo(f"{name[:40]:<40} {amount:>19,.2f}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
