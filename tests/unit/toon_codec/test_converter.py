# -*- coding: utf-8 -*-
"""Unit tests for the JSON <-> TOON converter facade."""

# Standard
from dataclasses import dataclass
from typing import List

# Third-Party
import orjson
from pydantic import ValidationError
import pytest

# First-Party
from toon_codec.converter import deserialize_object, deserialize_to_json, estimate_token_savings, serialize_json, serialize_object
from toon_codec.demo import build_sample_store, Product, StoreWrapper
from toon_codec.errors import ToonFormatError, UnsupportedStructureError
from toon_codec.options import DecodeOptions, EncodeOptions


@dataclass
class Point:
    """Plain dataclass used to exercise the object mapper."""

    x: int
    y: int


@dataclass
class Polygon:
    """Dataclass with a list of dataclasses."""

    name: str
    points: List[Point]


class TestSerialize:
    """Test host object and JSON serialization."""

    def test_serialize_pydantic_model_uses_aliases(self, store_toon):
        """Models are dumped by alias, giving the camelCase column."""
        assert serialize_object(build_sample_store()) == store_toon

    def test_serialize_without_aliases(self):
        """Field names are used when aliases are disabled."""
        result = serialize_object(build_sample_store(), by_alias=False)
        assert "products[3]{id,name,price,in_stock}:" in result

    def test_serialize_dataclass(self):
        """Dataclasses map through the same tree."""
        polygon = Polygon(name="tri", points=[Point(0, 0), Point(1, 0), Point(0, 1)])
        assert serialize_object(polygon) == "name: tri\npoints[3]{x,y}:\n  0,0\n  1,0\n  0,1"

    def test_serialize_dict(self):
        """Plain dicts are accepted."""
        assert serialize_object({"a": [1, 2]}) == "a[2]: 1,2"

    def test_serialize_json(self):
        """JSON text is parsed with orjson and encoded."""
        assert serialize_json('{"a": {"b": [true, null]}}') == "a:\n  b[2]: true,null"
        assert serialize_json(b'{"a": 1}') == "a: 1"

    def test_serialize_json_with_options(self):
        """Encode options are passed through."""
        result = serialize_json('{"a": {"b": ["x", "y"]}}', EncodeOptions(indent="    ", delimiter="|"))
        assert result == "a:\n    b[2]: x|y"

    def test_serialize_json_invalid(self):
        """Invalid JSON raises orjson's decode error."""
        with pytest.raises(orjson.JSONDecodeError):
            serialize_json("{not json")

    def test_serialize_json_root_array(self):
        """A JSON array root is rejected, not wrapped."""
        with pytest.raises(UnsupportedStructureError):
            serialize_json("[1, 2, 3]")


class TestDeserialize:
    """Test TOON to JSON and host object deserialization."""

    def test_deserialize_to_json(self, store_toon):
        """TOON decodes to compact JSON."""
        result = deserialize_to_json(store_toon)
        assert orjson.loads(result)["store"]["products"][0] == {"id": 1, "name": "T-Shirt", "price": 19.99, "inStock": True}
        assert "\n" not in result

    def test_deserialize_to_json_indented(self):
        """Indented output uses two spaces."""
        assert deserialize_to_json("a: 1", indent=True) == '{\n  "a": 1\n}'

    def test_deserialize_to_json_options(self):
        """Decode options are passed through."""
        assert deserialize_to_json("v[2]: a|b", DecodeOptions(delimiter="|")) == '{"v":["a","b"]}'

    def test_deserialize_object(self, store_toon):
        """TOON validates into the target model."""
        decoded = deserialize_object(store_toon, StoreWrapper)
        assert decoded == build_sample_store()
        assert decoded.store.products[1] == Product(id=2, name="Cap", price=14.5, in_stock=False)

    def test_deserialize_dataclass(self):
        """Dataclass targets are supported."""
        decoded = deserialize_object("name: tri\npoints[1]{x,y}:\n  3,4", Polygon)
        assert decoded == Polygon(name="tri", points=[Point(3, 4)])

    def test_deserialize_object_validation_error(self):
        """Trees that do not fit the target raise pydantic's ValidationError."""
        with pytest.raises(ValidationError):
            deserialize_object("store:\n  products[1]{id}:\n    x", StoreWrapper)

    def test_deserialize_invalid_toon(self):
        """Format errors propagate unchanged."""
        with pytest.raises(ToonFormatError):
            deserialize_to_json("broken line")


class TestTokenSavings:
    """Test token savings estimation."""

    def test_savings_array_of_objects(self):
        """Tabular data shows significant savings."""
        data = {"users": [{"id": i, "name": f"user{i}", "score": i * 10} for i in range(10)]}
        json_len, toon_len, savings = estimate_token_savings(orjson.dumps(data).decode())
        assert toon_len < json_len
        assert savings > 20

    def test_savings_bytes_input(self):
        """Bytes input is accepted."""
        json_len, _, savings = estimate_token_savings(b'{"name": "alice", "age": 30}')
        assert json_len == 28
        assert savings > 0

    def test_savings_invalid_json(self):
        """Invalid JSON reports zero savings."""
        json_len, toon_len, savings = estimate_token_savings("not valid json {")
        assert json_len == toon_len
        assert savings == 0.0

    def test_savings_unrepresentable(self):
        """JSON outside the TOON subset reports zero savings."""
        assert estimate_token_savings('{"m": [[1]]}')[2] == 0.0
