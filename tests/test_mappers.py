"""Tests for database mappers."""

from datetime import datetime, UTC

from csvimporter.database.models import ImportFormat as ORMImportFormat
from csvimporter.database.mappers import column_types_to_orm, import_format_to_domain
from csvimporter.domain.entities import ColumnType, ImportFormat


class TestImportFormatMapper:
    """Tests for ImportFormat mapper."""

    def test_import_format_to_domain(self):
        """Test converting ORM ImportFormat to domain ImportFormat."""
        orm_format = ORMImportFormat(
            id=1,
            name="Bank",
            encoding="utf-8",
            separators=[";"],
            custom_separator="|",
            fixed_width=False,
            column_widths=[],
            date_format="d-m-y",
            column_types="date,none,description,amount",
            created_at=datetime.now(UTC),
        )
        domain_format = import_format_to_domain(orm_format)

        assert isinstance(domain_format, ImportFormat)
        assert domain_format.id == 1
        assert domain_format.name == "Bank"
        assert domain_format.separators == [";"]
        assert domain_format.custom_separator == "|"
        assert domain_format.column_types == [
            ColumnType.DATE,
            ColumnType.IGNORE,
            ColumnType.DESCRIPTION,
            ColumnType.AMOUNT,
        ]
        assert domain_format.created_at == orm_format.created_at

    def test_empty_column_types(self):
        """Test that an empty column_types string maps to no columns."""
        orm_format = ORMImportFormat(
            id=2,
            name="Empty",
            encoding="utf-8",
            separators=None,
            custom_separator=None,
            fixed_width=True,
            column_widths=[10, 20],
            date_format="y-m-d",
            column_types="",
            created_at=datetime.now(UTC),
        )
        domain_format = import_format_to_domain(orm_format)

        assert domain_format.column_types == []
        assert domain_format.separators == []
        assert domain_format.custom_separator == ""
        assert domain_format.column_widths == [10, 20]

    def test_column_types_to_orm(self):
        """Test serializing column types."""
        assert column_types_to_orm([ColumnType.DATE, ColumnType.AMOUNT]) == "date,amount"
        assert column_types_to_orm([]) == ""


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_import_format_returns_domain_model(self, temp_db):
        format_id = temp_db.create_import_format(
            name="Bank",
            encoding="utf-8",
            separators=[","],
            custom_separator="",
            fixed_width=False,
            column_widths=[],
            date_format="y-m-d",
            column_types=[ColumnType.DATE, ColumnType.AMOUNT],
        )
        fmt = temp_db.get_import_format(format_id)

        assert isinstance(fmt, ImportFormat)
        assert fmt.column_types == [ColumnType.DATE, ColumnType.AMOUNT]
        assert isinstance(fmt.created_at, datetime)
        assert temp_db.get_import_format_by_name("Bank").id == format_id
        assert temp_db.get_import_format(999) is None
