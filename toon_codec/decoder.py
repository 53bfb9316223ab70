# -*- coding: utf-8 -*-
"""Location: ./toon_codec/decoder.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

TOON Decoder.

Reads TOON text line by line. Structure is carried purely by indentation:
a field whose value is empty opens a nested object on the following deeper
lines, and a tabular header owns the deeper rows that follow it. Blank lines
carry no meaning and are dropped before parsing.

Each field line is ``header: value`` where the header is
``name[length]{col1,col2}``, with the bracket and brace parts optional.

Examples:
    >>> from toon_codec.decoder import decode
    >>> decode("name: alice\\nage: 30")
    {'name': 'alice', 'age': 30}
    >>> decode("tags[3]: a,\\"true\\",3")
    {'tags': ['a', 'true', 3]}
    >>> decode("users[2]{id,name}:\\n  1,Ann\\n  2,Bob")
    {'users': [{'id': 1, 'name': 'Ann'}, {'id': 2, 'name': 'Bob'}]}
    >>> decode("store:\\n  open: true\\n  tags[0]:")
    {'store': {'open': True, 'tags': []}}
"""

# Standard
import logging
import re
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

# First-Party
from toon_codec.errors import ToonFormatError, UnsupportedStructureError
from toon_codec.options import DecodeOptions
from toon_codec.scalars import closing_quote, parse_field, parse_scalar, split_row

logger = logging.getLogger(__name__)

_LENGTH_RE = re.compile(r"\d+", re.ASCII)


class _Line(NamedTuple):
    """A non-blank physical line."""

    indent: int
    content: str


class _Header(NamedTuple):
    """Parsed field header."""

    name: str
    length: Optional[int]
    columns: Optional[List[str]]


def decode(text: str, options: Optional[DecodeOptions] = None) -> Dict[str, Any]:
    """Decode TOON text into a dictionary.

    Args:
        text: TOON document.
        options: Delimiter and strictness; defaults to comma, lenient.

    Returns:
        Decoded root object. An empty document decodes to ``{}``.

    Raises:
        ToonFormatError: If the text is structurally invalid.
        UnsupportedStructureError: If an array declares a length with neither
            columns nor inline values.

    Examples:
        >>> decode("")
        {}
        >>> decode("no colon here")
        Traceback (most recent call last):
        ...
        toon_codec.errors.ToonFormatError: Invalid line (missing ':'): 'no colon here'
    """
    options = options or DecodeOptions()
    lines = _scan_lines(text)
    if not lines:
        return {}

    logger.debug(f"Decoding {len(lines)} TOON lines")
    return _Parser(lines, options).parse_document()


def _scan_lines(text: str) -> List[_Line]:
    """Normalize line endings and measure indentation.

    Args:
        text: Raw TOON text.

    Returns:
        Non-blank lines with their leading space count.

    Examples:
        >>> _scan_lines("a:\\r\\n\\n   \\r\\n  b: 1  ")
        [_Line(indent=0, content='a:'), _Line(indent=2, content='b: 1')]
    """
    lines: List[_Line] = []
    for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        body = raw.lstrip(" ")
        content = body.rstrip()
        if not content.strip():
            continue
        lines.append(_Line(len(raw) - len(body), content))
    return lines


def _split_field(content: str) -> Tuple[str, str]:
    """Split a field line at its first colon outside double quotes.

    Args:
        content: Line content.

    Returns:
        Tuple of (header text, value text), both trimmed.

    Raises:
        ToonFormatError: If the line has no unquoted colon.

    Examples:
        >>> _split_field("url: http://example.com")
        ('url', 'http://example.com')
        >>> _split_field("nested:")
        ('nested', '')
    """
    in_quotes = False
    escape = False
    for i, char in enumerate(content):
        if escape:
            escape = False
        elif in_quotes and char == "\\":
            escape = True
        elif char == '"':
            in_quotes = not in_quotes
        elif char == ":" and not in_quotes:
            return content[:i].strip(), content[i + 1 :].strip()
    raise ToonFormatError("Invalid line (missing ':')", line=content)


def _parse_header(header: str) -> _Header:
    """Parse ``name[length]{columns}`` into its parts.

    Column names are always comma-separated, whatever the active delimiter.

    Args:
        header: Header text before the colon.

    Returns:
        Parsed header.

    Raises:
        ToonFormatError: On unbalanced brackets or braces, a non-numeric
            length, or a column list without a length.

    Examples:
        >>> _parse_header("price")
        _Header(name='price', length=None, columns=None)
        >>> _parse_header("tags[3]")
        _Header(name='tags', length=3, columns=None)
        >>> _parse_header("products[2]{id, name}")
        _Header(name='products', length=2, columns=['id', 'name'])
        >>> _parse_header("rows[2]{a|b}")
        _Header(name='rows', length=2, columns=['a|b'])
        >>> _parse_header("bad[x]")
        Traceback (most recent call last):
        ...
        toon_codec.errors.ToonFormatError: Invalid array length in header: 'bad[x]'
    """
    bracket = header.find("[")
    if bracket < 0:
        if "{" in header:
            raise ToonFormatError("Column list requires an array length", line=header)
        if "]" in header or "}" in header:
            raise ToonFormatError("Invalid header (unbalanced bracket)", line=header)
        return _Header(header, None, None)

    name = header[:bracket].strip()
    if any(char in name for char in "]{}"):
        raise ToonFormatError("Invalid header (unbalanced bracket)", line=header)

    close = header.find("]", bracket + 1)
    if close < 0:
        raise ToonFormatError("Invalid header (missing ']')", line=header)

    length_part = header[bracket + 1 : close].strip()
    if not _LENGTH_RE.fullmatch(length_part):
        raise ToonFormatError("Invalid array length in header", line=header)
    length = int(length_part)

    rest = header[close + 1 :].strip()
    if not rest:
        return _Header(name, length, None)
    if not rest.startswith("{"):
        raise ToonFormatError("Invalid header (unexpected text after array length)", line=header)

    close_brace = rest.find("}")
    if close_brace < 0:
        raise ToonFormatError("Invalid header (missing '}')", line=header)
    if rest[close_brace + 1 :].strip():
        raise ToonFormatError("Invalid header (unexpected text after column list)", line=header)

    columns_part = rest[1:close_brace]
    columns = [column.strip() for column in columns_part.split(",") if column.strip()]
    return _Header(name, length, columns)


class _Parser:
    """Recursive-descent parser over scanned lines.

    Holds the cursor for a single decode call.
    """

    def __init__(self, lines: List[_Line], options: DecodeOptions) -> None:
        """Initialize the parser.

        Args:
            lines: Scanned non-blank lines.
            options: Decode options.
        """
        self._lines = lines
        self._options = options
        self._index = 0

    def parse_document(self) -> Dict[str, Any]:
        """Parse the root object, starting at the first line's indentation.

        Returns:
            Root object.

        Raises:
            ToonFormatError: If strict and lines remain after the root object ends.
        """
        root = self._parse_object(self._lines[0].indent)

        if self._index < len(self._lines):
            stray = self._lines[self._index]
            if self._options.strict:
                raise ToonFormatError("Unexpected indentation", line=stray.content)
            logger.warning(f"Ignoring {len(self._lines) - self._index} line(s) from unexpected indentation at {stray.content!r}")

        return root

    def _child_indent(self, parent_indent: int) -> Optional[int]:
        """Return the indentation of the next line if it opens a deeper block.

        Args:
            parent_indent: Indentation of the owning header line.

        Returns:
            Block indentation, or None if the block is empty.
        """
        if self._index < len(self._lines) and self._lines[self._index].indent > parent_indent:
            return self._lines[self._index].indent
        return None

    def _parse_object(self, indent: int) -> Dict[str, Any]:
        """Parse consecutive fields at exactly ``indent``.

        Args:
            indent: Indentation of this object's fields.

        Returns:
            Decoded object.

        Raises:
            UnsupportedStructureError: For a declared length with neither columns nor values.
        """
        obj: Dict[str, Any] = {}

        while self._index < len(self._lines):
            line = self._lines[self._index]
            if line.indent != indent:
                break

            header_text, value_text = _split_field(line.content)
            header = _parse_header(header_text)
            self._index += 1

            if header.length is not None:
                if header.columns is not None:
                    obj[header.name] = self._parse_tabular(header, indent)
                elif value_text:
                    obj[header.name] = self._parse_inline(header, value_text)
                elif header.length == 0:
                    obj[header.name] = []
                else:
                    raise UnsupportedStructureError(
                        f"Array '{header.name}' declares a length of {header.length} but has neither columns nor inline values"
                    )
            elif not value_text:
                child_indent = self._child_indent(indent)
                obj[header.name] = self._parse_object(child_indent) if child_indent is not None else {}
            else:
                obj[header.name] = self._parse_value(value_text)

        return obj

    def _parse_value(self, value_text: str) -> Any:
        """Parse the scalar value of a plain field.

        Args:
            value_text: Text after the colon.

        Returns:
            Decoded scalar.

        Raises:
            ToonFormatError: If strict and a quoted value is never closed.
        """
        if self._options.strict and value_text.startswith('"') and closing_quote(value_text) < 0:
            raise ToonFormatError("Unterminated quoted value", line=value_text)
        return parse_scalar(value_text)

    def _parse_inline(self, header: _Header, value_text: str) -> List[Any]:
        """Parse an inline primitive array.

        Args:
            header: Array header.
            value_text: Delimited values after the colon.

        Returns:
            Decoded values.

        Raises:
            ToonFormatError: If strict and the value count differs from the declared length.
        """
        fields = split_row(value_text, self._options.delimiter, self._options.strict)
        if len(fields) != header.length:
            if self._options.strict:
                raise ToonFormatError(f"Array '{header.name}' declares {header.length} values but has {len(fields)}", line=value_text)
            logger.warning(f"Array '{header.name}' declares {header.length} values but has {len(fields)}")
        return [parse_field(field) for field in fields]

    def _parse_tabular(self, header: _Header, indent: int) -> List[Dict[str, Any]]:
        """Parse up to ``header.length`` rows one level below the header.

        Short rows are padded with None and long rows are truncated to the
        declared columns, unless the decode is strict.

        Args:
            header: Array header with columns.
            indent: Indentation of the header line.

        Returns:
            One object per row.

        Raises:
            ToonFormatError: On a row indented deeper than the block, or in
                strict mode on a field-count or row-count mismatch.
        """
        columns = header.columns or []
        length = header.length or 0
        rows: List[Dict[str, Any]] = []
        row_indent = self._child_indent(indent)

        while row_indent is not None and self._index < len(self._lines) and len(rows) < length:
            line = self._lines[self._index]
            if line.indent < row_indent:
                break
            if line.indent > row_indent:
                raise ToonFormatError("Unexpected indentation in tabular row", line=line.content)
            self._index += 1

            fields = split_row(line.content, self._options.delimiter, self._options.strict)
            if len(fields) != len(columns):
                if self._options.strict:
                    raise ToonFormatError(f"Row has {len(fields)} fields but '{header.name}' declares {len(columns)} columns", line=line.content)
                logger.warning(f"Row of '{header.name}' has {len(fields)} fields for {len(columns)} columns; padding with null or truncating")

            rows.append({column: parse_field(fields[i]) if i < len(fields) else None for i, column in enumerate(columns)})

        if len(rows) < length:
            if self._options.strict:
                raise ToonFormatError(f"Array '{header.name}' declares {length} rows but has {len(rows)}")
            logger.warning(f"Array '{header.name}' declares {length} rows but has {len(rows)}")

        return rows
