# -*- coding: utf-8 -*-
"""Location: ./toon_codec/encoder.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

TOON Encoder.

Walks an object-rooted JSON-like tree depth first and writes one TOON line per
field. Arrays take one of three shapes:

1. Empty arrays: ``key[0]:``
2. Uniform arrays of flat objects: ``key[N]{f1,f2}:`` followed by one row per element
3. Arrays of scalars: ``key[N]: v1,v2,v3``

Any other array is rejected rather than written in a lossy form.

Examples:
    >>> from toon_codec.encoder import encode
    >>> print(encode({"name": "alice", "age": 30}))
    name: alice
    age: 30
    >>> print(encode({"users": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]}))
    users[2]{id,name}:
      1,a
      2,b
    >>> print(encode({"tags": ["x", "y"], "empty": []}))
    tags[2]: x,y
    empty[0]:
"""

# Standard
import logging
from typing import Any, Dict, List, Optional, Sequence

# First-Party
from toon_codec.errors import UnsupportedStructureError
from toon_codec.options import EncodeOptions
from toon_codec.scalars import format_scalar, is_scalar

logger = logging.getLogger(__name__)

# Characters a bare key cannot contain without confusing the header grammar
_KEY_FORBIDDEN = frozenset(':[]{}"')


def encode(tree: Any, options: Optional[EncodeOptions] = None) -> str:
    """Encode an object-rooted tree to TOON text.

    Args:
        tree: Root dictionary of JSON-compatible values.
        options: Indentation and delimiter; defaults to two spaces and comma.

    Returns:
        TOON text, lines joined with ``\\n`` and no trailing newline.

    Raises:
        UnsupportedStructureError: If the root is not a dict, or the tree holds
            an array, key or value this format cannot represent.

    Examples:
        >>> encode({})
        ''
        >>> encode([1, 2])
        Traceback (most recent call last):
        ...
        toon_codec.errors.UnsupportedStructureError: Root value must be an object, got list
    """
    options = options or EncodeOptions()

    if not isinstance(tree, dict):
        raise UnsupportedStructureError(f"Root value must be an object, got {type(tree).__name__}")

    lines: List[str] = []
    _write_object(tree, lines, 0, options)
    logger.debug(f"Encoded {len(tree)} root fields into {len(lines)} TOON lines")
    return "\n".join(lines)


def _encode_key(key: Any, column: bool = False) -> str:
    """Validate an object key for bare use in a field or column header.

    Args:
        key: Object key.
        column: Whether the key is a tabular column name (commas not allowed).

    Returns:
        The key.

    Raises:
        UnsupportedStructureError: If the key cannot be read back unambiguously.

    Examples:
        >>> _encode_key("inStock")
        'inStock'
        >>> _encode_key("a,b")
        'a,b'
        >>> _encode_key("a,b", column=True)
        Traceback (most recent call last):
        ...
        toon_codec.errors.UnsupportedStructureError: Key 'a,b' cannot be written as a TOON name
    """
    if not isinstance(key, str):
        raise UnsupportedStructureError(f"Object keys must be strings, got {type(key).__name__}")
    if (
        not key
        or key != key.strip()
        or not _KEY_FORBIDDEN.isdisjoint(key)
        or (column and "," in key)
        or any(ord(char) < 32 or char == "\x7f" for char in key)
    ):
        raise UnsupportedStructureError(f"Key {key!r} cannot be written as a TOON name")
    return key


def _write_object(obj: Dict[str, Any], lines: List[str], level: int, options: EncodeOptions) -> None:
    """Write the fields of an object at the given nesting level.

    Args:
        obj: Object to write.
        lines: Output buffer.
        level: Nesting level.
        options: Encode options.
    """
    indent = options.indent * level

    for key, value in obj.items():
        name = _encode_key(key)

        if isinstance(value, dict):
            lines.append(f"{indent}{name}:")
            _write_object(value, lines, level + 1, options)
        elif isinstance(value, (list, tuple)):
            _write_array(name, value, lines, level, options)
        else:
            lines.append(f"{indent}{name}: {format_scalar(value, options.delimiter)}")


def _write_array(name: str, arr: Sequence[Any], lines: List[str], level: int, options: EncodeOptions) -> None:
    """Write a named array as empty, tabular or inline.

    Args:
        name: Field name.
        arr: Array elements.
        lines: Output buffer.
        level: Nesting level of the field.
        options: Encode options.

    Raises:
        UnsupportedStructureError: If the array is neither tabular nor primitive.
    """
    indent = options.indent * level
    count = len(arr)

    if count == 0:
        lines.append(f"{indent}{name}[0]:")
        return

    fields = _tabular_fields(arr)
    if fields is not None:
        header = ",".join(_encode_key(field, column=True) for field in fields)
        lines.append(f"{indent}{name}[{count}]{{{header}}}:")
        row_indent = options.indent * (level + 1)
        for item in arr:
            row = options.delimiter.join(format_scalar(item[field], options.delimiter) for field in fields)
            lines.append(f"{row_indent}{row}")
        logger.debug(f"Array '{name}' written as table: {count} rows x {len(fields)} columns")
        return

    if all(not isinstance(item, (dict, list, tuple)) for item in arr):
        values = options.delimiter.join(format_scalar(item, options.delimiter) for item in arr)
        lines.append(f"{indent}{name}[{count}]: {values}")
        return

    raise UnsupportedStructureError(
        f"Array '{name}' is neither an array of primitives nor a uniform array of objects with primitive fields"
    )


def _tabular_fields(arr: Sequence[Any]) -> Optional[List[str]]:
    """Return the shared field names if the array can be written as a table.

    Every element must be a non-empty object with the same field-name sequence
    and only scalar values.

    Args:
        arr: Non-empty array.

    Returns:
        Field names in the first element's order, or None if not tabular.

    Examples:
        >>> _tabular_fields([{"a": 1, "b": 2}, {"a": 3, "b": 4}])
        ['a', 'b']
        >>> _tabular_fields([{"a": 1, "b": 2}, {"b": 3, "a": 4}]) is None
        True
        >>> _tabular_fields([{"a": [1]}]) is None
        True
        >>> _tabular_fields([{}, {}]) is None
        True
    """
    if not all(isinstance(item, dict) for item in arr):
        return None

    fields = list(arr[0].keys())
    if not fields:
        return None

    for item in arr:
        if list(item.keys()) != fields:
            return None
        if not all(is_scalar(value) for value in item.values()):
            return None

    return fields
