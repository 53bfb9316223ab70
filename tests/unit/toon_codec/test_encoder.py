# -*- coding: utf-8 -*-
"""Unit tests for the TOON encoder."""

# Third-Party
import pytest

# First-Party
from toon_codec.encoder import encode
from toon_codec.errors import UnsupportedStructureError
from toon_codec.options import EncodeOptions


class TestRootRule:
    """Test that only objects are accepted at the root."""

    @pytest.mark.parametrize("tree", [[1, 2, 3], [], "text", 42, 3.5, True, None])
    def test_non_object_root_rejected(self, tree):
        """Arrays and scalars at the root raise instead of being wrapped."""
        with pytest.raises(UnsupportedStructureError):
            encode(tree)

    def test_empty_root(self):
        """An empty root object encodes to an empty document."""
        assert encode({}) == ""


class TestEncodeFields:
    """Test scalar fields and nested objects."""

    def test_scalar_fields(self):
        """Scalars are written as name: value in key order."""
        result = encode({"name": "alice", "age": 30, "ratio": 0.5, "admin": False, "manager": None})
        assert result == "name: alice\nage: 30\nratio: 0.5\nadmin: false\nmanager: null"

    def test_nested_object(self):
        """Nested objects open an indented block."""
        result = encode({"outer": {"inner": {"leaf": 1}}, "after": 2})
        assert result == "outer:\n  inner:\n    leaf: 1\nafter: 2"

    def test_empty_nested_object(self):
        """An empty nested object is a bare header."""
        assert encode({"meta": {}, "x": 1}) == "meta:\nx: 1"

    def test_ambiguous_strings_are_quoted(self):
        """Strings that look like literals or numbers are quoted."""
        result = encode({"a": "true", "b": "123", "c": "null", "d": ""})
        assert result == 'a: "true"\nb: "123"\nc: "null"\nd: ""'

    def test_special_strings_are_escaped(self):
        """Strings with quotes and control characters are escaped."""
        result = encode({"text": 'He said "hi"\n\tbye'})
        assert result == 'text: "He said \\"hi\\"\\n\\tbye"'

    def test_custom_indent(self):
        """The indent unit is repeated per nesting level."""
        result = encode({"a": {"b": {"c": 1}}}, EncodeOptions(indent="    "))
        assert result == "a:\n    b:\n        c: 1"


class TestEncodeArrays:
    """Test array classification."""

    def test_empty_array(self):
        """Empty arrays are a header with zero length and no body."""
        assert encode({"tags": []}) == "tags[0]:"

    def test_inline_primitive_array(self):
        """Arrays of scalars are written on one line."""
        assert encode({"nums": [1, 2, 3]}) == "nums[3]: 1,2,3"
        assert encode({"mixed": [1, "two", True, None, 2.5]}) == "mixed[5]: 1,two,true,null,2.5"

    def test_inline_array_quotes_members(self):
        """Inline members containing the delimiter or looking like literals are quoted."""
        assert encode({"tags": ["a,b", "true", "7"]}) == 'tags[3]: "a,b","true","7"'

    def test_tuple_is_array(self):
        """Tuples are written like lists."""
        assert encode({"point": (1, 2)}) == "point[2]: 1,2"

    def test_tabular_shape(self, store_tree):
        """Uniform flat object arrays produce a table header and one row per element."""
        lines = encode(store_tree).split("\n")
        assert lines[1] == "  products[3]{id,name,price,inStock}:"
        assert lines[2:] == ["    1,T-Shirt,19.99,true", "    2,Cap,14.5,false", "    3,Socks,5.0,true"]

    def test_tabular_matches_fixture(self, store_tree, store_toon):
        """The full document matches the expected text."""
        assert encode(store_tree) == store_toon

    def test_tabular_custom_delimiter(self):
        """Rows use the configured delimiter; column names stay comma-separated."""
        data = {"rows": [{"a": 1, "b": "x|y"}, {"a": 2, "b": "z"}]}
        result = encode(data, EncodeOptions(delimiter="|"))
        assert result == 'rows[2]{a,b}:\n  1|"x|y"\n  2|z'

    def test_tabular_rows_with_nulls(self):
        """Null values in rows are written as null."""
        data = {"rows": [{"a": None, "b": 1}]}
        assert encode(data) == "rows[1]{a,b}:\n  null,1"

    @pytest.mark.parametrize(
        "value",
        [
            [[1, 2], [3, 4]],
            [{"a": 1}, 2],
            [{"a": 1}, {"b": 2}],
            [{"a": 1, "b": 2}, {"b": 2, "a": 1}],
            [{"a": {"nested": 1}}],
            [{"a": [1, 2]}],
            [{}, {}],
            [1, [2]],
        ],
    )
    def test_unsupported_arrays(self, value):
        """Heterogeneous, nested and non-uniform arrays are rejected."""
        with pytest.raises(UnsupportedStructureError):
            encode({"items": value})

    def test_error_names_the_array(self):
        """The error message names the offending array."""
        with pytest.raises(UnsupportedStructureError, match="'matrix'"):
            encode({"matrix": [[1]]})


class TestEncodeKeys:
    """Test key validation."""

    @pytest.mark.parametrize("key", ["", " padded", "a:b", "a[1]", "a{b}", 'q"uote', "new\nline"])
    def test_unrepresentable_keys(self, key):
        """Keys the decoder could not read back are rejected."""
        with pytest.raises(UnsupportedStructureError):
            encode({key: 1})

    def test_non_string_key(self):
        """Non-string keys are rejected."""
        with pytest.raises(UnsupportedStructureError):
            encode({1: "one"})

    def test_comma_key_allowed_outside_tables(self):
        """A comma is fine in a field name but not in a column name."""
        assert encode({"a,b": 1}) == "a,b: 1"
        with pytest.raises(UnsupportedStructureError):
            encode({"rows": [{"a,b": 1}]})

    def test_unsupported_value_type(self):
        """Values outside the JSON model are rejected."""
        with pytest.raises(UnsupportedStructureError):
            encode({"when": object()})
