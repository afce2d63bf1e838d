"""Import format domain service."""

from typing import Optional
from tradeclaims.database.base import Database
from tradeclaims.domain.entities import (
    ImportFormat as ImportFormatEntity,
    ColumnMapping as ColumnMappingEntity,
)
from tradeclaims.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    format_not_found,
)
from tradeclaims.domain.fields import CANONICAL_FIELDS, REQUIRED_FIELDS
from tradeclaims.domain.trade import validate_data_type


class ImportFormatService:
    """Service for managing import formats."""

    def __init__(self, db: Database):
        """Initialize import format service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_format(self, name: str, data_type: str = "fx") -> int:
        """Create a new import format.

        Args:
            name: Format name
            data_type: Book the imported trades belong to (fx, equity)

        Returns:
            Format ID

        Raises:
            ValidationError: If the name is blank or the data type is unknown
            ConflictError: If a format with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Format name is required")
        data_type = validate_data_type(data_type)

        if self.db.get_import_format_by_name(name) is not None:
            raise ConflictError(f"Import format with name '{name}' already exists")

        return self.db.create_import_format(name=name, data_type=data_type)

    def get_format(self, format_id: int) -> Optional[ImportFormatEntity]:
        """Get import format by ID.

        Args:
            format_id: Format ID

        Returns:
            Format entity or None if not found
        """
        return self.db.get_import_format(format_id)

    def get_format_by_name(self, name: str) -> Optional[ImportFormatEntity]:
        """Get import format by name.

        Args:
            name: Format name

        Returns:
            Format entity or None if not found
        """
        return self.db.get_import_format_by_name(name)

    def list_formats(self) -> list[ImportFormatEntity]:
        """List import formats."""
        return self.db.list_import_formats()

    def add_mapping(self, format_id: int, column_name: str, field_name: str) -> int:
        """Add a column mapping to a format.

        Args:
            format_id: Format ID
            column_name: Column header in the uploaded file
            field_name: Canonical trade field (trade_id, pnl_calculated, etc.)

        Returns:
            Mapping ID

        Raises:
            NotFoundError: If the format doesn't exist
            ValidationError: If the field is not a canonical field
            ConflictError: If the field is already mapped in this format
        """
        if self.db.get_import_format(format_id) is None:
            raise NotFoundError(format_not_found(format_id))

        column_name = (column_name or "").strip()
        if not column_name:
            raise ValidationError("Column name is required")

        if field_name not in CANONICAL_FIELDS:
            raise ValidationError(
                f"Invalid field '{field_name}'. "
                f"Must be one of: {', '.join(sorted(CANONICAL_FIELDS))}"
            )

        for existing in self.db.get_column_mappings(format_id):
            if existing.field_name == field_name:
                raise ConflictError(
                    f"Field '{field_name}' is already mapped to column '{existing.column_name}'"
                )

        return self.db.add_column_mapping(
            format_id=format_id,
            column_name=column_name,
            field_name=field_name,
        )

    def get_mappings(self, format_id: int) -> list[ColumnMappingEntity]:
        """Get all column mappings for a format.

        Args:
            format_id: Format ID

        Returns:
            List of mapping entities
        """
        return self.db.get_column_mappings(format_id)

    def get_column_map(self, format_id: int) -> dict[str, str]:
        """Get the format's mappings as a column -> field dict."""
        return {m.column_name: m.field_name for m in self.get_mappings(format_id)}

    def validate_format(self, format_id: int) -> tuple[bool, list[str]]:
        """Validate that a format maps all required fields.

        Args:
            format_id: Format ID

        Returns:
            Tuple of (is_valid, sorted list of missing required fields)

        Note:
            trade_id is optional; trades without one get an ID derived from
            their content.
        """
        mapped_fields = {m.field_name for m in self.get_mappings(format_id)}
        missing = sorted(REQUIRED_FIELDS - mapped_fields)
        return (len(missing) == 0, missing)

    def delete_format(self, format_id: int) -> None:
        """Delete an import format.

        Args:
            format_id: Format ID to delete

        Raises:
            NotFoundError: If the format doesn't exist
        """
        if self.db.get_import_format(format_id) is None:
            raise NotFoundError(format_not_found(format_id))

        self.db.delete_import_format(format_id)
