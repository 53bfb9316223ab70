# -*- coding: utf-8 -*-
"""Location: ./toon_codec/converter.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

JSON <-> TOON converter facade.

Host objects are mapped to and from the JSON-like tree with pydantic's
``TypeAdapter``; JSON text is handled with orjson. The codec itself only
ever sees plain dicts, lists and scalars.

Examples:
    >>> from toon_codec.converter import deserialize_to_json, serialize_json
    >>> toon = serialize_json('{"items": [{"sku": "A1", "qty": 2}]}')
    >>> print(toon)
    items[1]{sku,qty}:
      A1,2
    >>> deserialize_to_json(toon)
    '{"items":[{"sku":"A1","qty":2}]}'
"""

# Standard
import logging
from typing import Any, Optional, Tuple, Type, TypeVar, Union

# Third-Party
import orjson
from pydantic import TypeAdapter

# First-Party
from toon_codec.decoder import decode
from toon_codec.encoder import encode
from toon_codec.errors import ToonError
from toon_codec.options import DecodeOptions, EncodeOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


def serialize_object(value: Any, options: Optional[EncodeOptions] = None, by_alias: bool = True) -> str:
    """Serialize a host object (pydantic model, dataclass, dict...) to TOON.

    Args:
        value: Object to serialize.
        options: Encode options.
        by_alias: Use field aliases as keys.

    Returns:
        TOON text.

    Raises:
        UnsupportedStructureError: If the dumped tree is not TOON representable.
    """
    tree = TypeAdapter(type(value)).dump_python(value, mode="json", by_alias=by_alias)
    return encode(tree, options)


def serialize_json(json_text: Union[str, bytes], options: Optional[EncodeOptions] = None) -> str:
    """Serialize a JSON document to TOON.

    Args:
        json_text: JSON text.
        options: Encode options.

    Returns:
        TOON text.

    Raises:
        orjson.JSONDecodeError: If the input is not valid JSON.
        UnsupportedStructureError: If the JSON is not TOON representable.
    """
    return encode(orjson.loads(json_text), options)


def deserialize_to_json(toon: str, options: Optional[DecodeOptions] = None, indent: bool = False) -> str:
    """Deserialize TOON to JSON text.

    Args:
        toon: TOON text.
        options: Decode options.
        indent: Pretty-print with two-space indentation.

    Returns:
        JSON text.

    Raises:
        ToonFormatError: If the TOON text is invalid.
    """
    tree = decode(toon, options)
    if indent:
        return orjson.dumps(tree, option=orjson.OPT_INDENT_2).decode()
    return orjson.dumps(tree).decode()


def deserialize_object(toon: str, target_type: Type[T], options: Optional[DecodeOptions] = None) -> T:
    """Deserialize TOON directly into ``target_type``.

    Args:
        toon: TOON text.
        target_type: Pydantic model, dataclass or any type ``TypeAdapter`` accepts.
        options: Decode options.

    Returns:
        Validated instance of ``target_type``.

    Raises:
        ToonFormatError: If the TOON text is invalid.
        pydantic.ValidationError: If the tree does not fit ``target_type``.
    """
    tree = decode(toon, options)
    return TypeAdapter(target_type).validate_python(tree)


def estimate_token_savings(json_text: Union[str, bytes], options: Optional[EncodeOptions] = None) -> Tuple[int, int, float]:
    """Estimate size savings from JSON to TOON conversion.

    This is a rough estimate based on byte count, not actual tokenization.

    Args:
        json_text: Original JSON text.
        options: Encode options.

    Returns:
        Tuple of (json_bytes, toon_bytes, savings_percent). Input that is not
        valid JSON or not TOON representable reports zero savings.

    Examples:
        >>> json_len, toon_len, savings = estimate_token_savings('{"users": [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]}')
        >>> toon_len < json_len and savings > 0
        True
        >>> estimate_token_savings("[1, 2]")
        (6, 6, 0.0)
    """
    raw = json_text.encode("utf-8") if isinstance(json_text, str) else json_text
    try:
        toon = serialize_json(raw, options)
    except (orjson.JSONDecodeError, ToonError) as e:
        logger.debug(f"Cannot estimate TOON savings: {e}")
        return (len(raw), len(raw), 0.0)

    json_len = len(raw)
    toon_len = len(toon.encode("utf-8"))
    savings = ((json_len - toon_len) / json_len) * 100 if json_len > 0 else 0.0
    return (json_len, toon_len, savings)
