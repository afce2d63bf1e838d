"""Import format management commands."""

import click

from tradeclaims.cli.error_handling import handle_domain_error
from tradeclaims.domain.entities import DATA_TYPES
from tradeclaims.domain.errors import DomainError
from tradeclaims.domain.fields import CANONICAL_FIELDS, FIELD_SYNONYMS, REQUIRED_FIELDS
from tradeclaims.domain.import_format import ImportFormatService


def _get_format_or_exit(ctx, service: ImportFormatService, format_name: str):
    fmt = service.get_format_by_name(format_name)
    if fmt is None:
        click.echo(f"Error: Import format '{format_name}' not found", err=True)
        ctx.exit(1)
    return fmt


@click.group()
def format_group():
    """Manage import formats."""
    pass


@format_group.command("create")
@click.argument("name")
@click.option(
    "--data-type",
    type=click.Choice(sorted(DATA_TYPES), case_sensitive=False),
    default="fx",
    show_default=True,
    help="Book that trades imported with this format belong to",
)
@click.pass_context
def create_format(ctx, name: str, data_type: str):
    """Create a new import format."""
    db = ctx.obj["db"]
    service = ImportFormatService(db)

    try:
        format_id = service.create_format(name=name, data_type=data_type)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created import format '{name}' (ID: {format_id}, Data type: {data_type.lower()})")
    click.echo("Use 'format map' to add column mappings.")


@format_group.command("map")
@click.argument("format_name")
@click.argument("column")
@click.argument("field")
@click.pass_context
def map_column(ctx, format_name: str, column: str, field: str):
    """Map a file column to a trade field."""
    db = ctx.obj["db"]
    service = ImportFormatService(db)
    fmt = _get_format_or_exit(ctx, service, format_name)

    try:
        mapping_id = service.add_mapping(format_id=fmt.id, column_name=column, field_name=field)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Mapped column '{column}' to '{field}' (ID: {mapping_id})")


@format_group.command("list")
@click.pass_context
def list_formats(ctx):
    """List import formats."""
    db = ctx.obj["db"]
    service = ImportFormatService(db)

    formats = service.list_formats()
    if not formats:
        click.echo("No import formats found.")
        return

    click.echo("\nImport Formats:")
    click.echo("-" * 60)
    for fmt in formats:
        mappings = service.get_mappings(fmt.id)
        is_valid, missing = service.validate_format(fmt.id)

        status = "✓" if is_valid else "✗"
        click.echo(f"{status} {fmt.name} (ID: {fmt.id}, Data type: {fmt.data_type})")
        if not is_valid:
            click.echo(f"  Missing required fields: {', '.join(missing)}")
        if mappings:
            click.echo("  Mappings:")
            for m in mappings:
                click.echo(f"    {m.column_name} -> {m.field_name}")


@format_group.command("show")
@click.argument("format_name")
@click.pass_context
def show_format(ctx, format_name: str):
    """Show details of an import format."""
    db = ctx.obj["db"]
    service = ImportFormatService(db)
    fmt = _get_format_or_exit(ctx, service, format_name)

    mappings = service.get_mappings(fmt.id)
    is_valid, missing = service.validate_format(fmt.id)

    click.echo(f"\nFormat: {fmt.name}")
    click.echo(f"ID: {fmt.id}")
    click.echo(f"Data type: {fmt.data_type}")
    click.echo(f"Valid: {'Yes' if is_valid else 'No'}")
    if not is_valid:
        click.echo(f"Missing required fields: {', '.join(missing)}")

    click.echo("\nColumn Mappings:")
    if not mappings:
        click.echo("  (none)")
    else:
        for m in mappings:
            click.echo(f"  {m.column_name} -> {m.field_name}")


@format_group.command("delete")
@click.argument("format_name")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_format(ctx, format_name: str, yes: bool) -> None:
    """Delete an import format.

    Examples:
        tradeclaims format delete "Broker A Blotter"
    """
    db = ctx.obj["db"]
    service = ImportFormatService(db)
    fmt = _get_format_or_exit(ctx, service, format_name)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete format '{format_name}' (ID: {fmt.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_format(fmt.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted format '{format_name}'")


@format_group.command("fields")
def list_fields():
    """List trade fields and the headers recognized for them."""
    click.echo("\nTrade Fields:")
    click.echo("-" * 60)
    for field in CANONICAL_FIELDS:
        req = " (required)" if field in REQUIRED_FIELDS else ""
        click.echo(f"{field}{req}")
        click.echo(f"  Headers: {', '.join(FIELD_SYNONYMS[field])}")


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
