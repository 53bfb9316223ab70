# -*- coding: utf-8 -*-
"""Location: ./toon_codec/demo.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Sample store models used by the ``demo`` command.

Examples:
    >>> from toon_codec.demo import build_sample_store
    >>> store = build_sample_store()
    >>> [p.name for p in store.store.products]
    ['T-Shirt', 'Cap', 'Socks']
"""

# Standard
from typing import List

# Third-Party
from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A product row."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = ""
    price: float
    in_stock: bool = Field(alias="inStock")


class Store(BaseModel):
    """A store holding products."""

    products: List[Product] = Field(default_factory=list)


class StoreWrapper(BaseModel):
    """Object root wrapping the store."""

    store: Store


def build_sample_store() -> StoreWrapper:
    """Build the three-product sample store.

    Returns:
        StoreWrapper: Sample data.
    """
    return StoreWrapper(
        store=Store(
            products=[
                Product(id=1, name="T-Shirt", price=19.99, in_stock=True),
                Product(id=2, name="Cap", price=14.5, in_stock=False),
                Product(id=3, name="Socks", price=5.0, in_stock=True),
            ]
        )
    )
