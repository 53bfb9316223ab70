# -*- coding: utf-8 -*-
"""TOON codec.

Converts between JSON-like Python trees and TOON (Token-Oriented Object
Notation), a compact indentation-based notation that writes uniform arrays of
flat objects as tables.

SPDX-License-Identifier: Apache-2.0
"""

__version__ = "0.1.0"

# First-Party
from toon_codec.decoder import decode  # noqa: E402
from toon_codec.encoder import encode  # noqa: E402
from toon_codec.errors import ToonError, ToonFormatError, UnsupportedStructureError  # noqa: E402
from toon_codec.options import DecodeOptions, EncodeOptions  # noqa: E402

__all__ = [
    "DecodeOptions",
    "EncodeOptions",
    "ToonError",
    "ToonFormatError",
    "UnsupportedStructureError",
    "decode",
    "encode",
]
