"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from csvimporter.domain.entities import ColumnType, ImportFormat


class Database(ABC):
    """Abstract database interface for csvimporter."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Import format operations
    @abstractmethod
    def create_import_format(
        self,
        name: str,
        encoding: str,
        separators: list[str],
        custom_separator: str,
        fixed_width: bool,
        column_widths: list[int],
        date_format: str,
        column_types: list[ColumnType],
    ) -> int:
        """Create a new import format. Returns format ID."""
        pass

    @abstractmethod
    def get_import_format(self, format_id: int) -> Optional[ImportFormat]:
        """Get import format by ID."""
        pass

    @abstractmethod
    def get_import_format_by_name(self, name: str) -> Optional[ImportFormat]:
        """Get import format by name."""
        pass

    @abstractmethod
    def list_import_formats(self) -> list[ImportFormat]:
        """List all import formats ordered by name."""
        pass

    @abstractmethod
    def update_import_format(self, format_id: int, **fields: Any) -> None:
        """Update the given fields of an import format."""
        pass

    @abstractmethod
    def delete_import_format(self, format_id: int) -> None:
        """Delete an import format."""
        pass
