"""Trade blotter import command."""

import click

from tradeclaims.cli.error_handling import handle_domain_error
from tradeclaims.domain.entities import DATA_TYPES
from tradeclaims.domain.errors import DomainError
from tradeclaims.domain.trade_import import TradeImportService


@click.command("import")
@click.argument("trade_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", help="Import format name (headers are auto-mapped when omitted)")
@click.option(
    "--data-type",
    type=click.Choice(sorted(DATA_TYPES), case_sensitive=False),
    default="fx",
    show_default=True,
    help="Book for the imported trades (ignored when --format is given)",
)
@click.pass_context
def import_trades(ctx, trade_file: str, format: str | None, data_type: str):
    """Import trades from a CSV or Excel blotter."""
    db = ctx.obj["db"]
    service = TradeImportService(db)

    try:
        result = service.import_file(file_path=trade_file, format_name=format, data_type=data_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} trades")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    for detail in result["skipped_details"]:
        click.echo(f"    Row {detail['row_num']}: {detail['trade_id']} already imported")
    if result["unmapped_columns"]:
        click.echo(f"  Ignored columns: {', '.join(result['unmapped_columns'])}")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_trades)
