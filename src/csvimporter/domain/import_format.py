"""Import format domain service."""

from typing import Optional, Sequence

from csvimporter.database.base import Database
from csvimporter.domain import column_types as ct
from csvimporter.domain.entities import ColumnType, ImportFormat, ParseOptions
from csvimporter.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_format_name,
    format_not_found,
)
from csvimporter.domain.session import ParseSession
from csvimporter.domain.tokenizer import check_column_widths
from csvimporter.utils.date_parser import get_date_format


class ImportFormatService:
    """Service for managing saved import formats."""

    def __init__(self, db: Database):
        """Initialize import format service.

        Args:
            db: Database instance
        """
        self.db = db

    def save_format(
        self, name: str, options: ParseOptions, column_types: Sequence[ColumnType]
    ) -> int:
        """Save a named import configuration.

        Args:
            name: Format name
            options: Parse options to remember
            column_types: Column roles to remember

        Returns:
            Format ID

        Raises:
            ValidationError: If the name is blank or the configuration is invalid
            TokenizeError: If fixed-width offsets are invalid
            ConflictError: If a format with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Import format name must not be empty")
        ct.validate(column_types)
        get_date_format(options.date_format)
        if options.fixed_width:
            check_column_widths(options.column_widths)

        if self.db.get_import_format_by_name(name) is not None:
            raise ConflictError(duplicate_format_name(name))

        return self.db.create_import_format(
            name=name,
            encoding=options.encoding,
            separators=list(options.separators),
            custom_separator=options.custom_separator,
            fixed_width=options.fixed_width,
            column_widths=list(options.column_widths),
            date_format=options.date_format,
            column_types=list(column_types),
        )

    def save_from_session(self, name: str, session: ParseSession) -> int:
        """Save the current configuration of a parse session."""
        options, column_types = session.format_snapshot()
        return self.save_format(name, options, column_types)

    def get_format(self, format_id: int) -> Optional[ImportFormat]:
        """Get import format by ID.

        Args:
            format_id: Format ID

        Returns:
            Format entity or None if not found
        """
        return self.db.get_import_format(format_id)

    def get_format_by_name(self, name: str) -> Optional[ImportFormat]:
        """Get import format by name.

        Args:
            name: Format name

        Returns:
            Format entity or None if not found
        """
        return self.db.get_import_format_by_name(name)

    def require_format(self, name: str) -> ImportFormat:
        """Get import format by name, failing if it does not exist.

        Raises:
            NotFoundError: If no format has this name
        """
        fmt = self.get_format_by_name(name)
        if fmt is None:
            raise NotFoundError(format_not_found(name))
        return fmt

    def list_formats(self) -> list[ImportFormat]:
        """List import formats ordered by name."""
        return self.db.list_import_formats()

    def update_format(
        self,
        format_id: int,
        name: Optional[str] = None,
        date_format: Optional[str] = None,
        column_types: Optional[Sequence[ColumnType]] = None,
    ) -> None:
        """Update selected fields of an import format.

        Raises:
            NotFoundError: If the format doesn't exist
            ConflictError: If the new name is taken
            ValidationError: If the new values are invalid
        """
        if self.db.get_import_format(format_id) is None:
            raise NotFoundError(f"Import format {format_id} not found")
        if name is not None and not name.strip():
            raise ValidationError("Import format name must not be empty")
        if date_format is not None:
            get_date_format(date_format)
        if column_types is not None:
            ct.validate(column_types)

        self.db.update_import_format(
            format_id,
            name=name.strip() if name is not None else None,
            date_format=date_format,
            column_types=list(column_types) if column_types is not None else None,
        )

    def delete_format(self, format_id: int) -> None:
        """Delete an import format.

        Raises:
            NotFoundError: If the format doesn't exist
        """
        if self.db.get_import_format(format_id) is None:
            raise NotFoundError(f"Import format {format_id} not found")
        self.db.delete_import_format(format_id)
