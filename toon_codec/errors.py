# -*- coding: utf-8 -*-
"""Location: ./toon_codec/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

TOON codec exceptions.

Examples:
    >>> from toon_codec.errors import ToonFormatError, ToonError
    >>> err = ToonFormatError("Invalid line (missing ':')", line="oops")
    >>> isinstance(err, ToonError), isinstance(err, ValueError)
    (True, True)
    >>> str(err)
    "Invalid line (missing ':'): 'oops'"
"""

# Standard
from typing import Optional


class ToonError(Exception):
    """Base class for TOON codec errors."""


class ToonFormatError(ToonError, ValueError):
    """Raised when TOON text is structurally invalid.

    Attributes:
        line: Content of the offending line, if known.
    """

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        """Initialize the error.

        Args:
            message: Description of the problem.
            line: Content of the offending line, if known.
        """
        self.line = line
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)


class UnsupportedStructureError(ToonError, ValueError):
    """Raised for data shapes outside the supported TOON subset."""
