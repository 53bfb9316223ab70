# -*- coding: utf-8 -*-
"""Location: ./toon_codec/scalars.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Scalar grammar shared by the TOON encoder and decoder.

The formatting half decides when a string must be quoted so that the parsing
half can never misread it as a number, boolean or null. Any string the encoder
leaves bare parses back as the same string, and any quoted string is taken
verbatim after unescaping.

Examples:
    >>> from toon_codec.scalars import format_scalar, parse_scalar, split_row
    >>> format_scalar("hello world")
    'hello world'
    >>> format_scalar("true")
    '"true"'
    >>> format_scalar("a,b")
    '"a,b"'
    >>> parse_scalar('"true"')
    'true'
    >>> parse_scalar("true")
    True
    >>> parse_scalar("-17"), parse_scalar("2.5"), parse_scalar("null")
    (-17, 2.5, None)
    >>> [f.text for f in split_row('1, "x,y" ,z')]
    ['1', 'x,y', 'z']
"""

# Standard
import logging
import math
import re
from typing import Any, List, NamedTuple, Optional

# First-Party
from toon_codec.errors import ToonFormatError, UnsupportedStructureError

logger = logging.getLogger(__name__)

# Reserved words that must be quoted if used as string values
_RESERVED_WORDS = frozenset({"null", "true", "false"})

# Escapes written inside quoted strings
_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}

# Characters after a backslash inside quotes; anything else stands for itself
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}

# Characters that force quoting regardless of delimiter
_ALWAYS_QUOTE = frozenset({'"', "\n", "\r", "\t"})

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class RowField(NamedTuple):
    """One tokenized field of a delimited row.

    Attributes:
        text: Field text with quotes removed and escapes resolved.
        quoted: Whether any part of the field was double-quoted.
    """

    text: str
    quoted: bool


# =============================================================================
# Formatting
# =============================================================================


def is_scalar(value: Any) -> bool:
    """Check if value is a scalar (not a nested dict/list).

    Args:
        value: Value to check.

    Returns:
        True if value is None, bool, int, float or str.

    Examples:
        >>> is_scalar(None), is_scalar("x"), is_scalar(1.5)
        (True, True, True)
        >>> is_scalar([1]), is_scalar({"a": 1})
        (False, False)
    """
    return value is None or isinstance(value, (bool, int, float, str))


def looks_like_number(s: str) -> bool:
    """Return True if the decoder would read ``s`` as an int or float.

    Examples:
        >>> looks_like_number("123"), looks_like_number("-1.5e3"), looks_like_number(".5")
        (True, True, True)
        >>> looks_like_number("1_000"), looks_like_number("nan"), looks_like_number("v1")
        (False, False, False)
    """
    s = s.strip()
    return bool(_INT_RE.fullmatch(s) or _FLOAT_RE.fullmatch(s))


def needs_quotes(s: str, delimiter: str = ",") -> bool:
    """Determine if a string value needs to be quoted in TOON.

    Strings need quotes if they:
    - Are empty
    - Equal null, true or false in any letter case
    - Start or end with whitespace (the decoder trims bare values)
    - Contain the delimiter, a double quote, newline, carriage return or tab
    - Parse as a number

    Args:
        s: String to check.
        delimiter: Active array delimiter.

    Returns:
        True if string needs quoting.

    Examples:
        >>> needs_quotes("")
        True
        >>> needs_quotes("NULL")
        True
        >>> needs_quotes("hello world")
        False
        >>> needs_quotes("a|b"), needs_quotes("a|b", delimiter="|")
        (False, True)
        >>> needs_quotes("42")
        True
        >>> needs_quotes(" padded")
        True
    """
    if not s:
        return True
    if s.lower() in _RESERVED_WORDS:
        return True
    if s[0].isspace() or s[-1].isspace():
        return True
    if delimiter in s or not _ALWAYS_QUOTE.isdisjoint(s):
        return True
    return looks_like_number(s)


def quote_string(s: str) -> str:
    """Quote and escape a string unconditionally.

    Args:
        s: String to quote.

    Returns:
        Quoted string with escapes applied.

    Examples:
        >>> print(quote_string('say "hi"\\n'))
        "say \\"hi\\"\\n"
    """
    return '"' + "".join(_ESCAPES.get(char, char) for char in s) + '"'


def format_string(s: str, delimiter: str = ",") -> str:
    """Encode a string value, quoting only when necessary.

    Args:
        s: String to encode.
        delimiter: Active array delimiter.

    Returns:
        TOON string representation.
    """
    if needs_quotes(s, delimiter):
        return quote_string(s)
    return s


def format_float(value: float) -> str:
    """Encode a float using its shortest round-trip text.

    NaN and infinities have no JSON representation and are written as null.

    Examples:
        >>> format_float(19.99), format_float(5.0), format_float(1e16)
        ('19.99', '5.0', '1e+16')
        >>> format_float(float("nan"))
        'null'
    """
    if math.isnan(value) or math.isinf(value):
        return "null"
    return repr(value)


def format_scalar(value: Any, delimiter: str = ",") -> str:
    """Format a scalar value as TOON text.

    Args:
        value: None, bool, int, float or str.
        delimiter: Active array delimiter.

    Returns:
        TOON scalar text.

    Raises:
        UnsupportedStructureError: If the value is not a JSON scalar.

    Examples:
        >>> format_scalar(None), format_scalar(False), format_scalar(42)
        ('null', 'false', '42')
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return format_string(value, delimiter)
    raise UnsupportedStructureError(f"Object of type {type(value).__name__} is not TOON serializable")


# =============================================================================
# Parsing
# =============================================================================


def unescape(s: str) -> str:
    """Resolve backslash escapes in the body of a quoted string.

    Examples:
        >>> unescape('a\\\\tb') == "a\\tb"
        True
        >>> unescape('\\\\q')
        'q'
    """
    result = []
    escape = False
    for char in s:
        if escape:
            result.append(_UNESCAPES.get(char, char))
            escape = False
        elif char == "\\":
            escape = True
        else:
            result.append(char)
    if escape:
        result.append("\\")
    return "".join(result)


def closing_quote(s: str) -> int:
    """Find the quote closing the string opened at ``s[0]``.

    Args:
        s: Text starting with a double quote.

    Returns:
        Index of the closing quote, or -1 if the quote is never closed.

    Examples:
        >>> closing_quote('"ab" c')
        3
        >>> closing_quote('"a\\\\"')
        -1
        >>> closing_quote('"a\\\\\\\\"')
        4
    """
    escape = False
    for i, char in enumerate(s[1:], start=1):
        if escape:
            escape = False
        elif char == "\\":
            escape = True
        elif char == '"':
            return i
    return -1


def parse_scalar(token: str) -> Any:
    """Infer the type of a bare or fully quoted scalar token.

    Order: empty or ``null``, booleans, quoted string, 64-bit integer, finite
    float, raw string.

    Args:
        token: Scalar text.

    Returns:
        Decoded Python value.

    Examples:
        >>> parse_scalar(""), parse_scalar("false")
        (None, False)
        >>> parse_scalar('"with\\\\nnewline"') == "with\\nnewline"
        True
        >>> parse_scalar("9223372036854775807")
        9223372036854775807
        >>> parse_scalar("9223372036854775808")
        9.223372036854776e+18
        >>> parse_scalar("1e3")
        1000.0
        >>> parse_scalar("1e400")
        '1e400'
        >>> parse_scalar("T-Shirt")
        'T-Shirt'
    """
    token = token.strip()
    if not token or token == "null":
        return None
    if token == "true":
        return True
    if token == "false":
        return False

    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return unescape(token[1:-1])

    if _INT_RE.fullmatch(token):
        number = int(token)
        if INT64_MIN <= number <= INT64_MAX:
            return number
    if _FLOAT_RE.fullmatch(token):
        value = float(token)
        if not math.isinf(value):
            return value

    return token


def parse_field(field: RowField) -> Any:
    """Decode a tokenized row field; quoted fields are always strings.

    Examples:
        >>> parse_field(RowField("123", quoted=True)), parse_field(RowField("123", quoted=False))
        ('123', 123)
    """
    if field.quoted:
        return field.text
    return parse_scalar(field.text)


def _finish_field(buf: List[str], quoted: bool, keep: int) -> RowField:
    """Trim unquoted trailing whitespace and build a field.

    Args:
        buf: Collected characters.
        quoted: Whether the field contained a quoted span.
        keep: Length of the prefix ending with the last quoted character.

    Returns:
        The finished field.
    """
    text = "".join(buf)
    if quoted:
        return RowField(text[:keep] + text[keep:].rstrip(), True)
    return RowField(text.rstrip(), False)


def split_row(text: str, delimiter: Optional[str] = ",", strict: bool = False) -> List[RowField]:
    """Split a delimited row into fields, respecting double quotes.

    Inside quotes, backslash escapes are resolved and the delimiter is literal.
    Outside quotes, a backslash is an ordinary character. Whitespace around a
    field is trimmed unless it sits inside quotes. A trailing delimiter yields
    a final empty field.

    Args:
        text: Row text.
        delimiter: Field delimiter.
        strict: Raise on an unterminated quote instead of closing it at end of text.

    Returns:
        List of fields.

    Raises:
        ToonFormatError: If strict and a quote is never closed.

    Examples:
        >>> split_row("a,,b")
        [RowField(text='a', quoted=False), RowField(text='', quoted=False), RowField(text='b', quoted=False)]
        >>> split_row('" x ",y,')
        [RowField(text=' x ', quoted=True), RowField(text='y', quoted=False), RowField(text='', quoted=False)]
        >>> split_row('"open,ended')
        [RowField(text='open,ended', quoted=True)]
        >>> split_row("")
        []
    """
    fields: List[RowField] = []
    buf: List[str] = []
    quoted = False
    in_quotes = False
    escape = False
    keep = 0

    for char in text:
        if in_quotes:
            if escape:
                buf.append(_UNESCAPES.get(char, char))
                escape = False
            elif char == "\\":
                escape = True
                continue
            elif char == '"':
                in_quotes = False
            else:
                buf.append(char)
            keep = len(buf)
            continue

        if char == '"':
            in_quotes = quoted = True
            continue
        if char == delimiter:
            fields.append(_finish_field(buf, quoted, keep))
            buf, quoted, keep = [], False, 0
            continue
        if not buf and not quoted and char.isspace():
            continue
        buf.append(char)

    if in_quotes:
        if strict:
            raise ToonFormatError("Unterminated quoted field", line=text)
        logger.warning(f"Unterminated quoted field closed at end of text: {text!r}")
        if escape:
            buf.append("\\")
            keep = len(buf)

    if buf or quoted or fields:
        fields.append(_finish_field(buf, quoted, keep))
    return fields
