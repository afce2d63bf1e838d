"""Claim classification commands."""

import click

from tradeclaims.cli.claim_filters import claim_filter_options, resolve_claim_type
from tradeclaims.cli.error_handling import handle_domain_error
from tradeclaims.domain.claims import ClaimService
from tradeclaims.domain.entities import ClaimStatus
from tradeclaims.domain.errors import DomainError


def _classify_or_exit(ctx, service: ClaimService, claim_type, data_type, counterparty):
    try:
        return service.classify_trades(
            data_type=data_type,
            counterparty=counterparty,
            claim_type=resolve_claim_type(ctx, claim_type),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.command("claims")
@claim_filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show reason, interest rate, remarks and warnings")
@click.option("--save", is_flag=True, help="Save the results as the current claim snapshot")
@click.pass_context
def list_claims(ctx, claim_type, data_type, counterparty, verbose: bool, save: bool):
    """Classify imported trades and list the resulting claims.

    Use --verbose to show the reason for each classification and any data
    quality warnings.
    """
    db = ctx.obj["db"]
    service = ClaimService(db, default_rate=ctx.obj["default_rate"])

    results = _classify_or_exit(ctx, service, claim_type, data_type, counterparty)
    if not results:
        click.echo("No claims found.")
        return

    if verbose:
        remarks = service.get_remarks()
        statuses = service.get_statuses()
        click.echo(f"\nFound {len(results)} result(s):")
        click.echo("=" * 100)
        for r in results:
            click.echo(f"\nClaim ID: {r.claim_id}")
            click.echo(f"  Trade ID: {r.trade_id}")
            click.echo(f"  Counterparty: {r.counterparty}")
            click.echo(f"  Claim Type: {r.claim_type.value}")
            click.echo(f"  Category: {r.category_label}")
            click.echo(f"  PnL: {r.currency} {r.pnl:,.2f}")
            click.echo(f"  Notional: {r.currency} {r.notional_amount:,.2f}")
            click.echo(f"  SLA Breach: {r.sla_breach_days} day(s)")
            click.echo(f"  Interest: {r.currency} {r.interest_amount:,.2f} at {r.interest_rate:.4%}")
            if r.is_claim:
                click.echo(f"  Status: {statuses.get(r.claim_id, ClaimStatus.PENDING).value}")
            click.echo(f"  Reason: {r.reason}")
            if r.claim_id in remarks:
                click.echo(f"  Remark: {remarks[r.claim_id]}")
            for warning in r.warnings:
                click.echo(f"  Warning: {warning}")
            click.echo("-" * 100)
    else:
        click.echo(f"\nFound {len(results)} result(s):")
        click.echo("-" * 120)
        click.echo(
            f"{'Claim ID':<16} {'Trade ID':<16} {'Counterparty':<20} {'Type':<11} "
            f"{'Breach':>6} {'Interest':>14} {'Category':<30}"
        )
        click.echo("-" * 120)
        for r in results:
            interest_str = f"{r.interest_amount:,.2f}"
            click.echo(
                f"{r.claim_id:<16} {r.trade_id:<16} {r.counterparty[:20]:<20} "
                f"{r.claim_type.value:<11} {r.sla_breach_days:>6} {interest_str:>14} "
                f"{r.category_label[:30]:<30}"
            )

    if save:
        try:
            count = service.save_snapshot(results)
        except DomainError as e:
            handle_domain_error(ctx, e)
            return
        click.echo(f"\nSaved {count} claim(s) to snapshot.")


@click.command("claims-export")
@click.argument("output_file", type=click.Path(dir_okay=False, writable=True))
@claim_filter_options
@click.pass_context
def export_claims(ctx, output_file: str, claim_type, data_type, counterparty):
    """Export classified claims to a CSV file."""
    db = ctx.obj["db"]
    service = ClaimService(db, default_rate=ctx.obj["default_rate"])

    results = _classify_or_exit(ctx, service, claim_type, data_type, counterparty)
    try:
        count = service.export_csv(results, output_file)
    except OSError as e:
        click.echo(f"Error: Could not write {output_file}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported {count} claim(s) to {output_file}")


@click.command("remark")
@click.argument("claim_id")
@click.argument("text", required=False, default="")
@click.pass_context
def set_remark(ctx, claim_id: str, text: str):
    """Set a remark on a claim. Omit TEXT to clear it."""
    db = ctx.obj["db"]
    service = ClaimService(db)

    try:
        service.set_remark(claim_id, text)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    if text.strip():
        click.echo(f"Saved remark for {claim_id}")
    else:
        click.echo(f"Cleared remark for {claim_id}")


@click.command("claim-status")
@click.argument("claim_id")
@click.argument("status")
@click.pass_context
def set_claim_status(ctx, claim_id: str, status: str):
    """Record the settlement status of a claim.

    STATUS is one of: Pending, In Progress, Settled, Rejected.
    """
    db = ctx.obj["db"]
    service = ClaimService(db)

    try:
        parsed = service.set_status(claim_id, status)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Marked {claim_id.strip()} as {parsed.value}")


def register_commands(cli):
    """Register claim commands with main CLI."""
    cli.add_command(list_claims)
    cli.add_command(export_claims)
    cli.add_command(set_remark)
    cli.add_command(set_claim_status)
