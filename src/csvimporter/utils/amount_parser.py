"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from csvimporter.domain.entities import NumberLocale
from csvimporter.domain.errors import AmountParseError


def parse_amount(amount_str: str, number_locale: Optional[NumberLocale] = None) -> Decimal:
    """Parse an amount string into a Decimal using locale conventions.

    Handles various formats (shown for a "." decimal point locale):
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "123.45-" (trailing sign)
    - "+123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Under a "," decimal point locale, "1.234,56" reads as 1234.56.

    Args:
        amount_str: Amount string
        number_locale: Numeric conventions; defaults to the process locale

    Returns:
        Decimal amount

    Raises:
        AmountParseError: If amount string is empty or cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise AmountParseError("Empty amount", amount_str)

    conv = number_locale or NumberLocale.from_system()
    text = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1].strip()

    # Remove currency symbols
    if conv.currency_symbols:
        text = re.sub(f"[{re.escape(conv.currency_symbols)}]", "", text).strip()

    sign = conv.negative_sign or "-"
    if text.startswith(sign):
        is_negative = not is_negative
        text = text[len(sign):].strip()
    elif text.endswith(sign):
        is_negative = not is_negative
        text = text[: -len(sign)].strip()
    elif text.startswith("+"):
        text = text[1:].strip()

    # Non-breaking spaces are a common grouping character in exports
    sep = conv.thousands_sep
    for nbsp in ("\u00a0", "\u202f"):
        text = text.replace(nbsp, sep)

    integer, has_fraction, fraction = text.partition(conv.decimal_point)
    if sep and sep in fraction:
        raise AmountParseError(f"Could not parse amount '{amount_str}'", amount_str)
    if sep and sep in integer:
        if not re.fullmatch(rf"\d{{1,3}}({re.escape(sep)}\d{{3}})+", integer):
            raise AmountParseError(f"Could not parse amount '{amount_str}'", amount_str)
        integer = integer.replace(sep, "")
    text = f"{integer}.{fraction}" if has_fraction else integer

    if not re.fullmatch(r"\d+(\.\d*)?|\.\d+", text):
        raise AmountParseError(f"Could not parse amount '{amount_str}'", amount_str)

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise AmountParseError(f"Could not parse amount '{amount_str}': {e}", amount_str) from e
    return -amount if is_negative else amount
