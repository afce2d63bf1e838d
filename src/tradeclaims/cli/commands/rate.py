"""Counterparty interest rate commands."""

import click

from tradeclaims.cli.error_handling import handle_domain_error
from tradeclaims.domain.errors import DomainError
from tradeclaims.domain.rates import RateService


@click.group()
def rate_group():
    """Manage counterparty interest rates."""
    pass


@rate_group.command("set")
@click.argument("counterparty")
@click.argument("rate")
@click.pass_context
def set_rate(ctx, counterparty: str, rate: str):
    """Set the annual interest rate for a counterparty (e.g. 0.045 or 4.5%)."""
    db = ctx.obj["db"]
    service = RateService(db)

    try:
        service.set_rate(counterparty, rate)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    stored = service.get_rate(counterparty)
    click.echo(f"Set rate for '{stored.counterparty}' to {stored.annual_rate:.4%}")


@rate_group.command("list")
@click.pass_context
def list_rates(ctx):
    """List counterparty interest rates."""
    db = ctx.obj["db"]
    service = RateService(db)

    default_rate = ctx.obj["default_rate"]
    rates = service.list_rates()
    if not rates:
        click.echo(f"No counterparty rates set. All claims use the default rate of {default_rate:.4%}.")
        return

    click.echo(f"\n{'Counterparty':<30} {'Annual Rate':>12}")
    click.echo("-" * 43)
    for r in rates:
        click.echo(f"{r.counterparty:<30} {r.annual_rate:>12.4%}")
    click.echo(f"\nOther counterparties use the default rate of {default_rate:.4%}.")


@rate_group.command("delete")
@click.argument("counterparty")
@click.pass_context
def delete_rate(ctx, counterparty: str):
    """Delete the interest rate for a counterparty."""
    db = ctx.obj["db"]
    service = RateService(db)

    try:
        service.delete_rate(counterparty)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted rate for '{counterparty}'")


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
