"""Tests for ImportFormatService."""

import pytest

from csvimporter.domain.entities import ColumnType, ParseOptions
from csvimporter.domain.errors import ConflictError, NotFoundError, TokenizeError, ValidationError
from csvimporter.domain.session import ParseSession

TYPES = [ColumnType.DATE, ColumnType.DESCRIPTION, ColumnType.AMOUNT]


def test_save_and_get_format(import_format_service):
    """Test saving an import format and reading it back."""
    options = ParseOptions(encoding="latin-1", separators=[";"], date_format="d-m-y")
    format_id = import_format_service.save_format("Bank", options, TYPES)

    fmt = import_format_service.get_format(format_id)
    assert fmt.name == "Bank"
    assert fmt.encoding == "latin-1"
    assert fmt.separators == [";"]
    assert fmt.fixed_width is False
    assert fmt.date_format == "d-m-y"
    assert fmt.column_types == TYPES
    assert fmt.created_at is not None


def test_save_fixed_width_format(import_format_service):
    options = ParseOptions(fixed_width=True, column_widths=[10, 30])
    format_id = import_format_service.save_format("Fixed", options, [])

    fmt = import_format_service.get_format(format_id)
    assert fmt.fixed_width is True
    assert fmt.column_widths == [10, 30]
    assert fmt.column_types == []


def test_save_format_duplicate_name(import_format_service):
    import_format_service.save_format("Bank", ParseOptions(), TYPES)
    with pytest.raises(ConflictError) as excinfo:
        import_format_service.save_format("Bank", ParseOptions(), TYPES)
    assert "already exists" in str(excinfo.value)


def test_save_format_rejects_invalid_configuration(import_format_service):
    with pytest.raises(ValidationError):
        import_format_service.save_format("  ", ParseOptions(), TYPES)
    with pytest.raises(ValidationError):
        import_format_service.save_format("Bank", ParseOptions(), [ColumnType.DATE, ColumnType.DATE])
    with pytest.raises(ValidationError):
        import_format_service.save_format("Bank", ParseOptions(date_format="ymd"), TYPES)
    with pytest.raises(TokenizeError):
        import_format_service.save_format(
            "Bank", ParseOptions(fixed_width=True, column_widths=[20, 10]), TYPES
        )
    assert import_format_service.list_formats() == []


def test_save_from_session(import_format_service):
    session = ParseSession.from_bytes(b"05/01/2023;Coffee;-3.50\n", encoding="utf-8")
    session.set_option("separators", [";"])
    session.set_option("date_format", "d-m-y")
    session.reparse()
    session.set_column_types(TYPES)

    format_id = import_format_service.save_from_session("Session", session)
    fmt = import_format_service.get_format(format_id)

    other = ParseSession.from_bytes(b"06/01/2023;Bagel;-2.25\n", encoding="utf-8")
    other.apply_format(fmt)
    other.convert()
    assert other.error_lines == set()
    assert other.transactions[0].description == "Bagel"


def test_require_format(import_format_service):
    import_format_service.save_format("Bank", ParseOptions(), TYPES)
    assert import_format_service.require_format("Bank").name == "Bank"
    with pytest.raises(NotFoundError):
        import_format_service.require_format("Other")


def test_list_formats_ordered_by_name(import_format_service):
    import_format_service.save_format("Zeta", ParseOptions(), [])
    import_format_service.save_format("Alpha", ParseOptions(), [])
    assert [fmt.name for fmt in import_format_service.list_formats()] == ["Alpha", "Zeta"]


def test_update_format(import_format_service):
    format_id = import_format_service.save_format("Bank", ParseOptions(), TYPES)
    import_format_service.update_format(format_id, name="Bank (old)", date_format="m-d-y")

    fmt = import_format_service.get_format(format_id)
    assert fmt.name == "Bank (old)"
    assert fmt.date_format == "m-d-y"
    assert fmt.column_types == TYPES


def test_update_format_conflicts(import_format_service):
    import_format_service.save_format("Bank", ParseOptions(), TYPES)
    other_id = import_format_service.save_format("Card", ParseOptions(), TYPES)
    with pytest.raises(ConflictError):
        import_format_service.update_format(other_id, name="Bank")


def test_update_format_validates(import_format_service):
    format_id = import_format_service.save_format("Bank", ParseOptions(), TYPES)
    with pytest.raises(ValidationError):
        import_format_service.update_format(format_id, date_format="ymd")
    with pytest.raises(ValidationError):
        import_format_service.update_format(
            format_id, column_types=[ColumnType.AMOUNT, ColumnType.AMOUNT]
        )
    with pytest.raises(NotFoundError):
        import_format_service.update_format(999, name="Other")


def test_delete_format(import_format_service):
    format_id = import_format_service.save_format("Bank", ParseOptions(), TYPES)
    import_format_service.delete_format(format_id)
    assert import_format_service.get_format(format_id) is None
    with pytest.raises(NotFoundError):
        import_format_service.delete_format(format_id)
