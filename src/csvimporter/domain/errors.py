"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class LoadError(DomainError):
    """The import file could not be read."""


class EncodingError(DomainError):
    """The file's bytes are not valid under the chosen encoding."""


class TokenizeError(DomainError):
    """The tokenizer configuration cannot be applied."""


class RowParseError(DomainError):
    """A single cell could not be interpreted.

    Carries the raw cell text so callers can show it next to the row.
    """

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message)
        self.value = value


class DateParseError(RowParseError):
    """A date cell does not match the active date format."""


class AmountParseError(RowParseError):
    """An amount cell is not a number under the active locale."""


def format_not_found(name: str) -> str:
    """Return message for a missing import format."""
    return f"Import format '{name}' not found"


def duplicate_format_name(name: str) -> str:
    """Return message for an import format name that is already taken."""
    return f"Import format with name '{name}' already exists"


def unknown_date_format(format_id: str, known: list[str]) -> str:
    """Return message for an unsupported date format identifier."""
    return f"Unknown date format '{format_id}'. Must be one of: {', '.join(known)}"


def duplicate_column_role(role: str, indices: list[int]) -> str:
    """Return message when more than one column holds the same role."""
    columns = ", ".join(str(i + 1) for i in indices)
    return f"Only one column may be '{role}' (columns {columns})"
