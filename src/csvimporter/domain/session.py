"""Parse session: the state of one import attempt."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence

from csvimporter.domain import column_types as ct
from csvimporter.domain import converter
from csvimporter.domain.encoding import guess_encoding, normalize
from csvimporter.domain.entities import (
    ColumnType,
    ConversionResult,
    ImportFormat,
    NumberLocale,
    ParseOptions,
    RowError,
    TokenizeResult,
    Transaction,
    TransactionLine,
)
from csvimporter.domain.errors import EncodingError, LoadError, ValidationError
from csvimporter.domain.tokenizer import column_count, tokenize
from csvimporter.utils.date_parser import get_date_format

logger = logging.getLogger(__name__)

# Options whose change requires re-tokenizing the canonical lines.
TOKENIZE_OPTIONS = frozenset(
    {"separators", "custom_separator", "fixed_width", "column_widths", "quote_char"}
)
CONVERT_OPTIONS = frozenset({"date_format"})


class ParseSession:
    """Owns a loaded file, its configuration and everything derived from it.

    The session never re-reads the file: the raw bytes are kept so a new
    encoding can be tried, and the canonical lines are kept so separators
    can change cheaply. Callers decide when to ``reparse`` and ``convert``.
    """

    def __init__(
        self,
        raw_bytes: bytes,
        options: Optional[ParseOptions] = None,
        path: Optional[Path] = None,
    ):
        self.path = path
        self.raw_bytes = raw_bytes
        self.options = options or ParseOptions()
        self.lines: list[str] = []
        self.grid: list[list[str]] = []
        self.failed_lines: set[int] = set()
        self.column_types: list[ColumnType] = []
        self.transaction_lines: list[TransactionLine] = []
        self.error_lines: set[int] = set()
        self.account: Any = None
        self.number_locale: Optional[NumberLocale] = None
        self.load_error: Optional[EncodingError] = None
        self._needs_reparse = True

    @classmethod
    def load(
        cls,
        path: str | Path,
        encoding: Optional[str] = None,
        options: Optional[ParseOptions] = None,
    ) -> "ParseSession":
        """Read a file and prepare a session for it.

        An encoding problem does not fail the load: the session comes back
        with no lines and ``load_error`` set, and the caller can pick
        another encoding with ``set_encoding``.

        Args:
            path: File to import
            encoding: Encoding to use; guessed from the content if None
            options: Initial parse options

        Returns:
            ParseSession with the grid tokenized and all columns IGNORE

        Raises:
            LoadError: If the file cannot be read
        """
        file_path = Path(path)
        try:
            raw_bytes = file_path.read_bytes()
        except OSError as e:
            raise LoadError(f"Could not read '{file_path}': {e.strerror or e}") from e
        logger.debug("Loaded %d bytes from %s", len(raw_bytes), file_path)
        return cls.from_bytes(raw_bytes, encoding=encoding, options=options, path=file_path)

    @classmethod
    def from_bytes(
        cls,
        raw_bytes: bytes,
        encoding: Optional[str] = None,
        options: Optional[ParseOptions] = None,
        path: Optional[Path] = None,
    ) -> "ParseSession":
        """Build a session from in-memory content. See ``load``."""
        session = cls(raw_bytes, options=options, path=path)
        try:
            session.set_encoding(encoding or guess_encoding(raw_bytes))
        except EncodingError as e:
            logger.warning("Encoding problem while loading: %s", e)
            session.load_error = e
        session.reparse(reguess_column_types=True)
        return session

    @property
    def column_count(self) -> int:
        return len(self.column_types)

    @property
    def needs_reparse(self) -> bool:
        return self._needs_reparse

    @property
    def transactions(self) -> list[Transaction]:
        return [tl.transaction for tl in self.transaction_lines if tl.transaction is not None]

    @property
    def errors(self) -> list[RowError]:
        return [tl.error for tl in self.transaction_lines if tl.error is not None]

    def error_rows(self) -> list[tuple[int, list[str]]]:
        """Return (line index, raw cells) for each error line, in file order."""
        return [(index, self.grid[index]) for index in sorted(self.error_lines)]

    def set_encoding(self, encoding: str) -> None:
        """Re-normalize the retained bytes under a different encoding.

        On failure the previous encoding, lines and grid are left untouched.

        Raises:
            EncodingError: If the bytes are not valid under ``encoding``
        """
        lines = normalize(self.raw_bytes, encoding)
        self.options.encoding = encoding
        self.lines = lines
        self.load_error = None
        self._needs_reparse = True
        logger.debug("Normalized %d lines as %s", len(lines), encoding)

    def set_option(self, key: str, value: Any) -> None:
        """Change one parse option.

        Tokenizing options mark the grid for re-tokenizing; ``date_format``
        only affects the next conversion.

        Raises:
            ValidationError: If the key is unknown or the value is invalid
            EncodingError: If ``encoding`` is set to one that cannot decode the file
        """
        if key == "encoding":
            self.set_encoding(value)
            return
        if key not in TOKENIZE_OPTIONS and key not in CONVERT_OPTIONS:
            raise ValidationError(f"Unknown parse option '{key}'")

        if key == "separators":
            if isinstance(value, str) or not all(isinstance(sep, str) for sep in value):
                raise ValidationError("separators must be a list of strings")
            value = list(value)
        elif key in ("custom_separator", "quote_char"):
            if not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")
            if key == "quote_char" and len(value) > 1:
                raise ValidationError("quote_char must be a single character or empty")
        elif key == "fixed_width":
            value = bool(value)
        elif key == "column_widths":
            value = _check_column_widths(value)
        elif key == "date_format":
            get_date_format(value)

        setattr(self.options, key, value)
        if key in TOKENIZE_OPTIONS:
            self._needs_reparse = True

    def reparse(self, reguess_column_types: bool = False) -> TokenizeResult:
        """Re-tokenize the canonical lines with the current options.

        Derived transactions are dropped so nothing from the previous grid
        survives. Column types are reset to all IGNORE when
        ``reguess_column_types`` is set, otherwise kept by index and
        truncated or padded to the new column count.

        Raises:
            TokenizeError: If the fixed-width offsets are invalid
        """
        result = tokenize(self.lines, self.options)
        self.grid = result.grid
        self.failed_lines = set(result.failed_lines)

        count = column_count(self.grid)
        if reguess_column_types:
            self.column_types = ct.default_assignment(count)
        else:
            self.column_types = ct.resize(self.column_types, count)

        self.transaction_lines = []
        self.error_lines = set()
        self._needs_reparse = False
        return result

    def set_column_types(self, column_types: Sequence[ColumnType]) -> None:
        """Replace the column roles, sized to the grid.

        Raises:
            ValidationError: If a role is held by several columns; the
                previous column types are kept
        """
        self.column_types = ct.resize(ct.apply(column_types), column_count(self.grid))

    def assign_column(self, index: int, role: ColumnType) -> None:
        """Give one column a role, clearing that role from other columns."""
        self.column_types = ct.assign_role(self.column_types, index, role)

    def guess_column_types(self, number_locale: Optional[NumberLocale] = None) -> list[ColumnType]:
        """Replace the column roles with a guess based on the grid contents."""
        if self._needs_reparse:
            self.reparse()
        self.column_types = ct.guess_assignment(
            self.grid, self.options.date_format, number_locale or self.number_locale
        )
        return list(self.column_types)

    def convert(
        self,
        account: Any = None,
        retry_errors_only: bool = False,
        number_locale: Optional[NumberLocale] = None,
    ) -> ConversionResult:
        """Convert the grid into transactions.

        With ``retry_errors_only`` the rows that already produced a
        transaction in the previous run are kept unchanged and only the
        error lines are converted again. The error-line set always
        reflects this run alone.

        Args:
            account: Destination account; remembered for later calls
            retry_errors_only: Only retry the current error lines
            number_locale: Numeric conventions; remembered for later calls

        Raises:
            ValidationError: If the column types are invalid
        """
        if account is not None:
            self.account = account
        if number_locale is not None:
            self.number_locale = number_locale
        if self._needs_reparse:
            self.reparse()

        result = converter.convert(
            self.grid,
            self.column_types,
            self.options.date_format,
            self.account,
            failed_lines=self.failed_lines,
            previous=self.transaction_lines,
            reuse_existing=retry_errors_only,
            number_locale=self.number_locale,
        )
        self.transaction_lines = result.lines
        self.error_lines = set(result.error_lines)
        return result

    def format_snapshot(self) -> tuple[ParseOptions, list[ColumnType]]:
        """Return copies of the options and column types, for saving as a format.

        Later changes to the session do not affect the returned values.
        """
        options = replace(
            self.options,
            separators=list(self.options.separators),
            column_widths=list(self.options.column_widths),
        )
        return options, list(self.column_types)

    def apply_format(self, fmt: ImportFormat) -> None:
        """Load a saved import format into this session and re-tokenize.

        Raises:
            EncodingError: If the saved encoding cannot decode this file
        """
        if fmt.encoding and fmt.encoding != self.options.encoding:
            self.set_encoding(fmt.encoding)
        self.set_option("separators", list(fmt.separators))
        self.set_option("custom_separator", fmt.custom_separator)
        self.set_option("fixed_width", fmt.fixed_width)
        self.set_option("column_widths", list(fmt.column_widths))
        self.set_option("date_format", fmt.date_format)
        self.reparse(reguess_column_types=True)
        self.set_column_types(fmt.column_types)


def _check_column_widths(value: Any) -> list[int]:
    try:
        widths = [int(width) for width in value]
    except (TypeError, ValueError):
        raise ValidationError("column_widths must be a list of integers")
    previous = 0
    for width in widths:
        if width <= previous:
            raise ValidationError(
                f"column_widths must be positive and strictly increasing, got {widths}"
            )
        previous = width
    return widths
