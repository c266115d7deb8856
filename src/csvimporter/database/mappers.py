"""Mapper functions to convert between domain models and SQLAlchemy models."""

from csvimporter.domain import entities as domain
from csvimporter.database.models import ImportFormat as ORMImportFormat


def import_format_to_domain(orm_format: ORMImportFormat) -> domain.ImportFormat:
    """Convert SQLAlchemy ImportFormat model to domain ImportFormat entity."""
    column_types = [
        domain.ColumnType(value) for value in orm_format.column_types.split(",")
    ] if orm_format.column_types else []
    return domain.ImportFormat(
        id=orm_format.id,
        name=orm_format.name,
        encoding=orm_format.encoding,
        separators=list(orm_format.separators or []),
        custom_separator=orm_format.custom_separator or "",
        fixed_width=orm_format.fixed_width,
        column_widths=list(orm_format.column_widths or []),
        date_format=orm_format.date_format,
        column_types=column_types,
        created_at=orm_format.created_at,
    )


def column_types_to_orm(column_types: list[domain.ColumnType]) -> str:
    """Serialize column types for the import_formats.column_types column."""
    return ",".join(ct.value for ct in column_types)
