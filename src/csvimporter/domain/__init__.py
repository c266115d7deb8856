"""Domain layer for csvimporter."""

from csvimporter.domain.entities import (
    ColumnType,
    ConversionResult,
    ImportFormat,
    NumberLocale,
    ParseOptions,
    RowError,
    RowErrorKind,
    TokenizeResult,
    Transaction,
    TransactionLine,
)
from csvimporter.domain.errors import (
    AmountParseError,
    DateParseError,
    DomainError,
    EncodingError,
    LoadError,
    TokenizeError,
    ValidationError,
)

__all__ = [
    "ColumnType",
    "ConversionResult",
    "ImportFormat",
    "NumberLocale",
    "ParseOptions",
    "RowError",
    "RowErrorKind",
    "TokenizeResult",
    "Transaction",
    "TransactionLine",
    "AmountParseError",
    "DateParseError",
    "DomainError",
    "EncodingError",
    "LoadError",
    "TokenizeError",
    "ValidationError",
]
