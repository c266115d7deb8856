"""Encoding normalization for import files."""

import codecs
import locale
import logging
import re

from csvimporter.domain.errors import EncodingError

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _candidate_encodings() -> list[str]:
    candidates = ["utf-8"]
    preferred = locale.getpreferredencoding(False)
    if preferred:
        candidates.append(preferred)
    candidates.append("cp1252")

    seen = set()
    unique = []
    for name in candidates:
        key = codecs.lookup(name).name
        if key not in seen:
            seen.add(key)
            unique.append(name)
    return unique


def guess_encoding(raw_bytes: bytes) -> str:
    """Guess the encoding of raw file content.

    Only called once, when the file is loaded. A byte-order mark wins;
    otherwise the first candidate that decodes the whole content is used.

    Args:
        raw_bytes: Unmodified file content

    Returns:
        Encoding name usable with ``normalize``

    Raises:
        EncodingError: If no candidate encoding can decode the bytes
    """
    for bom, name in _BOMS:
        if raw_bytes.startswith(bom):
            logger.debug("Found byte-order mark, using %s", name)
            return name

    for name in _candidate_encodings():
        try:
            raw_bytes.decode(name)
        except UnicodeDecodeError:
            continue
        logger.debug("Guessed encoding %s", name)
        return name

    raise EncodingError("Could not guess the file encoding; please choose one")


def normalize(raw_bytes: bytes, encoding: str) -> list[str]:
    """Decode raw file content and split it into lines.

    Decoding happens before splitting, so multi-byte encodings never see
    a line boundary cut through a character. ``\\r\\n``, ``\\r`` and ``\\n``
    all end a line; a final terminator does not add an empty line.

    Args:
        raw_bytes: Unmodified file content
        encoding: Encoding name, e.g. "utf-8" or "latin-1"

    Returns:
        List of lines without terminators

    Raises:
        EncodingError: If the encoding is unknown or the bytes are invalid under it
    """
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise EncodingError(f"Unknown encoding '{encoding}'")

    try:
        text = raw_bytes.decode(encoding)
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"File is not valid {encoding}: byte {e.start} cannot be decoded"
        ) from e

    if text.startswith("\ufeff"):
        text = text[1:]
    if not text:
        return []

    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines
