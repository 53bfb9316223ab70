# -*- coding: utf-8 -*-
"""Location: ./toon_codec/options.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Encode and decode options.

Options are immutable value objects, read-only for the duration of a call.

Examples:
    >>> from toon_codec.options import DecodeOptions, EncodeOptions
    >>> opts = EncodeOptions()
    >>> opts.indent, opts.delimiter
    ('  ', ',')
    >>> DecodeOptions(delimiter="|").delimiter
    '|'
    >>> try:
    ...     EncodeOptions(indent="\\t")
    ... except ValueError:
    ...     print("error")
    error
"""

# Standard
from typing import Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field, field_validator

# First-Party
from toon_codec.config import get_settings, is_valid_delimiter, Settings


def _check_delimiter(v: str) -> str:
    """Validate a delimiter character.

    Args:
        v: Candidate delimiter.

    Returns:
        str: The delimiter.

    Raises:
        ValueError: If the delimiter is unusable.
    """
    if not is_valid_delimiter(v):
        raise ValueError(f"Invalid delimiter {v!r}")
    return v


class EncodeOptions(BaseModel):
    """TOON serialization options.

    Attributes:
        indent: Indentation unit repeated once per nesting level (spaces only).
        delimiter: Delimiter for tabular rows and inline arrays.
    """

    model_config = ConfigDict(frozen=True)

    indent: str = Field(default="  ", description="Indentation string")
    delimiter: str = Field(default=",", description="Delimiter for tabular and primitive arrays")

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: str) -> str:
        """Indentation is measured in spaces by the decoder.

        Args:
            v: Indentation unit.

        Returns:
            str: The indentation unit.

        Raises:
            ValueError: If the unit is empty or contains anything but spaces.
        """
        if not v or v.strip(" "):
            raise ValueError("indent must be one or more spaces")
        return v

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Validate the delimiter.

        Args:
            v: Delimiter character.

        Returns:
            str: The delimiter.
        """
        return _check_delimiter(v)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "EncodeOptions":
        """Build options from application settings.

        Args:
            settings: Settings to read; defaults to the cached settings.

        Returns:
            EncodeOptions: Options mirroring the settings.

        Examples:
            >>> EncodeOptions.from_settings(Settings(indent=4)).indent
            '    '
        """
        settings = settings or get_settings()
        return cls(indent=" " * settings.indent, delimiter=settings.delimiter)


class DecodeOptions(BaseModel):
    """TOON deserialization options.

    Attributes:
        delimiter: Expected delimiter for arrays.
        strict: Raise instead of padding/truncating rows or closing quotes implicitly.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=",", description="Expected delimiter for arrays")
    strict: bool = Field(default=False, description="Reject lenient fallbacks")

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Validate the delimiter.

        Args:
            v: Delimiter character.

        Returns:
            str: The delimiter.
        """
        return _check_delimiter(v)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DecodeOptions":
        """Build options from application settings.

        Args:
            settings: Settings to read; defaults to the cached settings.

        Returns:
            DecodeOptions: Options mirroring the settings.
        """
        settings = settings or get_settings()
        return cls(delimiter=settings.delimiter, strict=settings.strict)
