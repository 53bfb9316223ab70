# -*- coding: utf-8 -*-
"""Location: ./toon_codec/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

TOON Codec Configuration.
This module defines configuration settings for the TOON command line tool using Pydantic.
It loads configuration from environment variables with sensible defaults.

Environment variables:
- TOON_INDENT: Spaces per indentation level when encoding (default: 2)
- TOON_DELIMITER: Delimiter for inline and tabular arrays (default: ",")
- TOON_STRICT: Reject lenient fallbacks when decoding (default: False)
- TOON_LOG_LEVEL: Logging level (default: "WARNING")
- TOON_LOG_FORMAT: Logging format string

Examples:
    >>> from toon_codec.config import Settings
    >>> s = Settings(indent=4, delimiter="|")
    >>> s.indent, s.delimiter
    (4, '|')
    >>> Settings(log_level="debug").log_level
    'DEBUG'
    >>> try:
    ...     Settings(delimiter=";;")
    ... except ValueError:
    ...     print("error")
    error
"""

# Standard
from functools import lru_cache
import logging
from typing import Any

# Third-Party
from pydantic import Field, field_validator, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Characters that would collide with the quoting or line grammar, or with bare numbers
FORBIDDEN_DELIMITERS = frozenset({'"', "\\", "\n", "\r", " ", ":", "+", "-", "."})


def is_valid_delimiter(v: str) -> bool:
    """Check that ``v`` can separate bare values without ambiguity.

    Letters and digits are rejected since numbers, booleans and null are
    written unquoted.

    Args:
        v: Candidate delimiter.

    Returns:
        bool: True if ``v`` is a usable delimiter.

    Examples:
        >>> [is_valid_delimiter(d) for d in (",", "|", ";", "\\t")]
        [True, True, True, True]
        >>> [is_valid_delimiter(d) for d in ("-", ".", "7", "e", "n", ",,")]
        [False, False, False, False, False, False]
    """
    return len(v) == 1 and v not in FORBIDDEN_DELIMITERS and not v.isalnum()


class Settings(BaseSettings):
    """TOON codec configuration settings.

    Examples:
        >>> s = Settings()
        >>> s.indent
        2
        >>> s.strict
        False
    """

    indent: PositiveInt = Field(default=2, description="Spaces per indentation level when encoding")
    delimiter: str = Field(default=",", description="Delimiter for inline and tabular arrays")
    strict: bool = Field(default=False, description="Treat padded/truncated rows and unterminated quotes as errors")
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Logging format string")

    model_config = SettingsConfigDict(env_prefix="TOON_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Ensure the delimiter is a single usable character.

        Args:
            v: Delimiter from configuration or environment.

        Returns:
            str: The validated delimiter.

        Raises:
            ValueError: If the delimiter is not one character or collides with the grammar.
        """
        if not is_valid_delimiter(v):
            raise ValueError(f"Invalid delimiter {v!r}: must be a single character that is not a letter, digit, sign, dot, quote, backslash, colon, space or newline")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level value.

        Args:
            v: The log level string provided via configuration or environment.

        Returns:
            str: The validated and normalized (uppercase) log level.

        Raises:
            ValueError: If the provided value is not a standard logging level.
        """
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_up = str(v).upper()
        if v_up not in allowed:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {sorted(allowed)}")
        return v_up


@lru_cache()
def get_settings(**kwargs: Any) -> Settings:
    """Get cached settings instance.

    Args:
        **kwargs: Keyword arguments to pass to the Settings setup.

    Returns:
        Settings: A cached instance of the Settings class.

    Examples:
        >>> settings = get_settings()
        >>> settings is get_settings()
        True
    """
    cfg = Settings(**kwargs)
    logger.debug(f"Loaded settings: indent={cfg.indent}, delimiter={cfg.delimiter!r}, strict={cfg.strict}")
    return cfg
