"""SQLAlchemy models for csvimporter database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class ImportFormat(Base):
    """Saved import configuration model.

    Only configuration is stored here; parsed transactions never are.
    """

    __tablename__ = "import_formats"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    encoding = Column(String, nullable=False, default="utf-8")
    separators = Column(JSON, nullable=False, default=list)
    custom_separator = Column(String, nullable=False, default="")
    fixed_width = Column(Boolean, default=False, nullable=False)
    column_widths = Column(JSON, nullable=False, default=list)
    date_format = Column(String, nullable=False, default="y-m-d")
    # Comma-separated ColumnType values, e.g. "date,description,amount"
    column_types = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
