"""Shared pytest fixtures for csvimporter tests."""

import tempfile
import os
import pytest

from csvimporter.database.factories import create_sqlite_database
from csvimporter.domain.entities import NumberLocale
from csvimporter.domain.import_format import ImportFormatService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def import_format_service(temp_db):
    """Create an ImportFormatService with a temporary database."""
    return ImportFormatService(temp_db)


@pytest.fixture
def us_locale():
    """Amounts with '.' as decimal point and ',' for thousands."""
    return NumberLocale(decimal_point=".", thousands_sep=",")


@pytest.fixture
def de_locale():
    """Amounts with ',' as decimal point and '.' for thousands."""
    return NumberLocale(decimal_point=",", thousands_sep=".")


@pytest.fixture
def write_file(tmp_path):
    """Write content to a file under tmp_path and return its path."""

    def _write(name: str, content: str | bytes, encoding: str = "utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode(encoding))
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
