"""Tests for the JSON codec and error types."""

from enum import Enum

import pytest

from hamachi import (
    DeclarationError,
    FrozenInstanceError,
    MalformedSnapshotError,
    TypeMismatch,
    codec,
)


class Size(Enum):
    SMALL = 1
    LARGE = 2


class TestDecode:
    """Tests for codec.decode."""

    def test_decodes_value_tree(self):
        assert codec.decode('{"a":[1,2.5,"x",true,null]}') == {"a": [1, 2.5, "x", True, None]}

    def test_keeps_key_order(self):
        assert list(codec.decode('{"b":1,"a":2}')) == ["b", "a"]

    @pytest.mark.parametrize("text", ['{"name":', "", "{'name': 'Anna'}", "[1,]"])
    def test_raises_for_malformed_text(self, text):
        with pytest.raises(MalformedSnapshotError, match="malformed snapshot at line 1"):
            codec.decode(text)

    def test_malformed_error_is_value_error(self):
        with pytest.raises(ValueError):
            codec.decode("nope")


class TestEncode:
    """Tests for codec.encode."""

    def test_compact_output(self):
        assert codec.encode({"a": [1, None, True]}) == '{"a":[1,null,true]}'

    def test_indented_output(self):
        assert codec.encode({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_enum_members_are_written_as_values(self):
        assert codec.encode({"size": Size.LARGE}) == '{"size":2}'

    def test_writes_models_as_mappings(self, anna):
        assert codec.encode([anna]) == '[{"name":"Anna","gender":"female","age":29}]'

    def test_raises_for_unknown_values(self):
        with pytest.raises(TypeError, match="not JSON serializable"):
            codec.encode({"value": object()})


class TestErrors:
    """Tests for error codes and dict conversion."""

    def test_type_mismatch_to_dict(self):
        error = TypeMismatch("age", "1..100", 9000)
        assert error.to_dict() == {
            "error": "TypeMismatch",
            "code": "type_mismatch",
            "message": "expected age to be 1..100, got 9000",
            "field": "age",
            "expected": "1..100",
        }

    def test_codes(self):
        assert DeclarationError("x").code == "declaration_error"
        assert FrozenInstanceError("x").code == "frozen_instance"
        assert MalformedSnapshotError("x").code == "malformed_snapshot"

    def test_code_override(self):
        error = DeclarationError("bad", code="custom")
        assert error.to_dict() == {
            "error": "DeclarationError",
            "code": "custom",
            "message": "bad",
        }

    def test_builtin_bases(self):
        assert isinstance(TypeMismatch("a", "str", 1), TypeError)
        assert isinstance(DeclarationError("x"), TypeError)
        assert isinstance(FrozenInstanceError("x"), AttributeError)
