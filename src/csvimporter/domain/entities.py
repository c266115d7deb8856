"""Domain model entities for csvimporter.

These are pure data classes describing one import attempt: the options
that drive tokenizing and conversion, the per-row results, and the saved
import formats. They carry no parsing logic of their own.
"""

import locale
from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class ColumnType(Enum):
    """Semantic role of a column in the tokenized grid."""

    IGNORE = "none"
    DATE = "date"
    DESCRIPTION = "description"
    AMOUNT = "amount"


class RowErrorKind(Enum):
    """Why a row did not produce a transaction."""

    TOKENIZE = "tokenize"
    DATE = "date"
    AMOUNT = "amount"


# Stock separators offered by configuration surfaces, in display order.
STOCK_SEPARATORS: dict[str, str] = {
    "space": " ",
    "tab": "\t",
    "comma": ",",
    "colon": ":",
    "semicolon": ";",
    "hyphen": "-",
}


@dataclass
class ParseOptions:
    """Configuration for one parse session.

    Mutated in place as the user adjusts settings; the session decides
    which derived data each change invalidates.
    """

    encoding: str = "utf-8"
    separators: list[str] = field(default_factory=lambda: [","])
    custom_separator: str = ""
    fixed_width: bool = False
    column_widths: list[int] = field(default_factory=list)
    quote_char: str = '"'
    date_format: str = "y-m-d"

    def active_separators(self) -> list[str]:
        """Return the separators actually applied when splitting lines.

        A blank custom separator is never applied.
        """
        active = [sep for sep in self.separators if sep]
        if self.custom_separator and self.custom_separator not in active:
            active.append(self.custom_separator)
        return active


@dataclass(frozen=True)
class NumberLocale:
    """Numeric conventions used to read amount cells."""

    decimal_point: str = "."
    thousands_sep: str = ","
    negative_sign: str = "-"
    currency_symbols: str = "$€£¥"

    @classmethod
    def from_system(cls) -> "NumberLocale":
        """Build a NumberLocale from the process's LC_NUMERIC/LC_MONETARY settings.

        The C locale reports no thousands separator; in that case the
        conventional partner of the decimal point is used.
        """
        conv = locale.localeconv()
        decimal_point = conv.get("decimal_point") or "."
        thousands_sep = conv.get("thousands_sep") or conv.get("mon_thousands_sep") or ""
        if not thousands_sep or thousands_sep == decimal_point:
            thousands_sep = "." if decimal_point == "," else ","
        negative_sign = conv.get("negative_sign") or "-"
        symbols = cls.currency_symbols
        currency = (conv.get("currency_symbol") or "").strip()
        if currency and currency not in symbols:
            symbols += currency
        return cls(
            decimal_point=decimal_point,
            thousands_sep=thousands_sep,
            negative_sign=negative_sign,
            currency_symbols=symbols,
        )


@dataclass(frozen=True)
class Transaction:
    """Transaction record built from one row, not yet posted anywhere."""

    date: date
    description: str
    amount: Decimal
    account: Any = None


@dataclass(frozen=True)
class RowError:
    """Diagnostic for a row that did not convert."""

    line: int
    kind: RowErrorKind
    value: Optional[str]
    message: str


@dataclass(frozen=True)
class TransactionLine:
    """Pairs a grid row with its transaction or its error."""

    line: int
    transaction: Optional[Transaction] = None
    error: Optional[RowError] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


@dataclass(frozen=True)
class TokenizeResult:
    """Grid of raw cells plus the lines that could not be tokenized."""

    grid: list[list[str]]
    failed_lines: set[int] = field(default_factory=set)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one converter run."""

    lines: list[TransactionLine]
    error_lines: set[int]

    @property
    def transactions(self) -> list[Transaction]:
        return [tl.transaction for tl in self.lines if tl.transaction is not None]

    @property
    def errors(self) -> list[RowError]:
        return [tl.error for tl in self.lines if tl.error is not None]


@dataclass(frozen=True)
class ImportFormat:
    """Saved import configuration domain entity."""

    id: int
    name: str
    encoding: str
    separators: list[str]
    custom_separator: str
    fixed_width: bool
    column_widths: list[int]
    date_format: str
    column_types: list[ColumnType]
    created_at: datetime
