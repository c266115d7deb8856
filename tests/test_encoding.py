"""Tests for encoding normalization."""

import codecs

import pytest

from csvimporter.domain.encoding import guess_encoding, normalize
from csvimporter.domain.errors import EncodingError


def test_normalize_splits_universal_line_endings():
    """\\r\\n, \\r and \\n all end a line."""
    raw = b"a,b\r\nc,d\re,f\ng,h"
    assert normalize(raw, "utf-8") == ["a,b", "c,d", "e,f", "g,h"]


def test_normalize_trailing_newline_does_not_add_line():
    assert normalize(b"a\nb\n", "utf-8") == ["a", "b"]


def test_normalize_keeps_inner_blank_lines():
    assert normalize(b"a\n\nb\n", "utf-8") == ["a", "", "b"]


def test_normalize_empty_content():
    assert normalize(b"", "utf-8") == []


def test_normalize_strips_utf8_bom():
    raw = codecs.BOM_UTF8 + "Date,Amount\n".encode("utf-8")
    assert normalize(raw, "utf-8") == ["Date,Amount"]


def test_normalize_latin1():
    raw = "Café,3.50\n".encode("latin-1")
    assert normalize(raw, "latin-1") == ["Café,3.50"]


def test_normalize_invalid_bytes_raise():
    raw = "Café".encode("latin-1")
    with pytest.raises(EncodingError) as excinfo:
        normalize(raw, "utf-8")
    assert "utf-8" in str(excinfo.value)


def test_normalize_unknown_encoding_raises():
    with pytest.raises(EncodingError) as excinfo:
        normalize(b"abc", "no-such-encoding")
    assert "Unknown encoding" in str(excinfo.value)


def test_normalize_utf16_line_breaks_after_decoding():
    """Splitting after decoding keeps multi-byte encodings intact."""
    raw = "a,b\nc,d\n".encode("utf-16")
    assert normalize(raw, "utf-16") == ["a,b", "c,d"]


def test_guess_encoding_utf8():
    assert guess_encoding("Café".encode("utf-8")) == "utf-8"


def test_guess_encoding_bom():
    assert guess_encoding(codecs.BOM_UTF8 + b"abc") == "utf-8-sig"
    assert guess_encoding("abc".encode("utf-16")) == "utf-16"


def test_guess_encoding_falls_back_for_non_utf8():
    """Bytes that are not UTF-8 get a single-byte encoding that decodes them."""
    raw = "Café".encode("cp1252")
    guessed = guess_encoding(raw)
    assert guessed != "utf-8"
    raw.decode(guessed)
