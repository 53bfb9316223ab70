# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
"""

# Standard
import os

# Third-Party
import pytest

# First-Party
from toon_codec.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from TOON_* environment variables and cached settings."""
    for key in list(os.environ):
        if key.upper().startswith("TOON_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store_tree():
    """Object-rooted tree with a nested object and a tabular product array."""
    return {
        "store": {
            "products": [
                {"id": 1, "name": "T-Shirt", "price": 19.99, "inStock": True},
                {"id": 2, "name": "Cap", "price": 14.5, "inStock": False},
                {"id": 3, "name": "Socks", "price": 5.0, "inStock": True},
            ]
        }
    }


@pytest.fixture
def store_toon():
    """TOON text for ``store_tree`` with default options."""
    return "\n".join(
        [
            "store:",
            "  products[3]{id,name,price,inStock}:",
            "    1,T-Shirt,19.99,true",
            "    2,Cap,14.5,false",
            "    3,Socks,5.0,true",
        ]
    )
