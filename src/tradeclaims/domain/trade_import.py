"""Trade blotter import domain service."""

import csv
import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from tradeclaims.database.base import Database
from tradeclaims.domain.entities import TradeRecord
from tradeclaims.domain.errors import (
    DomainError,
    NotFoundError,
    ValidationError,
    format_not_found,
)
from tradeclaims.domain.fields import REQUIRED_FIELDS, auto_map_columns
from tradeclaims.domain.import_format import ImportFormatService
from tradeclaims.domain.trade import TradeService, validate_data_type

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = {".csv", ".txt"}
EXCEL_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}


class TradeImportService:
    """Service for importing trade blotters from CSV and Excel files."""

    def __init__(self, db: Database):
        """Initialize trade import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.trade_service = TradeService(db)
        self.format_service = ImportFormatService(db)

    def import_file(
        self,
        file_path: str,
        format_name: Optional[str] = None,
        data_type: str = "fx",
    ) -> dict[str, Any]:
        """Import trades from a CSV or Excel file.

        Args:
            file_path: Path to the blotter
            format_name: Optional import format; headers are auto-mapped when omitted
            data_type: Book for imported trades when no format is given

        Returns:
            Dict with import statistics:
            - imported: number of trades imported
            - skipped: number of trades skipped (duplicates)
            - skipped_details: list of {"row_num", "trade_id"} for skipped rows
            - errors: list of row-level error messages, in input order
            - unmapped_columns: headers that did not map to any field

        Raises:
            NotFoundError: If the file or format doesn't exist
            ValidationError: If the format is invalid, the file type is not
                supported, or required columns are missing
        """
        column_map: Optional[dict[str, str]] = None
        if format_name is not None:
            fmt = self.format_service.get_format_by_name(format_name)
            if fmt is None:
                raise NotFoundError(format_not_found(format_name))

            is_valid, missing = self.format_service.validate_format(fmt.id)
            if not is_valid:
                raise ValidationError(
                    f"Import format '{format_name}' is missing required mappings: {', '.join(missing)}"
                )
            column_map = self.format_service.get_column_map(fmt.id)
            data_type = fmt.data_type
        data_type = validate_data_type(data_type)

        path = Path(file_path)
        if not path.exists():
            raise NotFoundError(f"File not found: {file_path}")

        headers, rows = self._read_rows(path)
        if not headers:
            raise ValidationError("File has no columns")

        if column_map is None:
            column_map = auto_map_columns(headers)
        else:
            missing_columns = sorted(
                column for column, field_name in column_map.items()
                if field_name in REQUIRED_FIELDS and column not in headers
            )
            if missing_columns:
                raise ValidationError(
                    f"File missing required columns: {', '.join(missing_columns)}"
                )
            column_map = {c: f for c, f in column_map.items() if c in headers}

        missing_fields = sorted(REQUIRED_FIELDS - set(column_map.values()))
        if missing_fields:
            raise ValidationError(
                f"File missing required columns for: {', '.join(missing_fields)}"
            )

        unmapped_columns = [h for h in headers if h not in column_map]
        if unmapped_columns:
            logger.info("Ignoring unmapped columns: %s", ", ".join(unmapped_columns))

        imported = 0
        skipped = 0
        skipped_details = []
        errors = []

        # Start at 2 (header is row 1)
        for row_num, row in enumerate(rows, start=2):
            values: dict[str, Any] = {}
            for column, field_name in column_map.items():
                raw = row.get(column)
                values[field_name] = raw.strip() if isinstance(raw, str) else raw

            if all(v is None or v == "" for v in values.values()):
                continue

            values["data_type"] = data_type
            record = TradeRecord.from_mapping(values)

            if self.db.trade_exists(record.trade_id):
                skipped += 1
                skipped_details.append({"row_num": row_num, "trade_id": record.trade_id})
                logger.debug("Row %d: duplicate trade %s skipped", row_num, record.trade_id)
                continue

            try:
                self.trade_service.create_trade(record)
            except DomainError as e:
                errors.append(f"Row {row_num}: {e}")
                continue
            imported += 1

        logger.info(
            "Imported %d trade(s) from %s (%d skipped, %d error(s))",
            imported,
            path.name,
            skipped,
            len(errors),
        )
        return {
            "imported": imported,
            "skipped": skipped,
            "skipped_details": skipped_details,
            "errors": errors,
            "unmapped_columns": unmapped_columns,
        }

    def _read_rows(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        suffix = path.suffix.lower()
        if suffix in CSV_EXTENSIONS:
            return self._read_csv(path)
        if suffix in EXCEL_EXTENSIONS:
            return self._read_excel(path)
        raise ValidationError(
            f"Unsupported file type '{path.suffix}'. "
            f"Supported: {', '.join(sorted(CSV_EXTENSIONS | EXCEL_EXTENSIONS))}"
        )

    def _read_csv(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(4096)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.reader(f, delimiter=delimiter)
            header_row = next(reader, None)
            if header_row is None:
                return [], []
            headers = [h.strip() for h in header_row]
            # Short rows are padded, cells beyond the header are dropped
            rows = [dict(zip(headers, cells + [""] * (len(headers) - len(cells)))) for cells in reader]
        return headers, rows

    def _read_excel(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        try:
            frame = pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
        except Exception as e:
            raise ValidationError(f"Could not read Excel file {path.name}: {e}") from e
        frame.columns = [str(c).strip() for c in frame.columns]
        return list(frame.columns), frame.to_dict(orient="records")
