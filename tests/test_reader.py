"""Tests for the Reader layer."""

import io
import math

import pytest

from json_pretty.errors import JSONReadError, UnsupportedValueError
from json_pretty.model import Null, VArray, VBool, VNumber, VObject, VString
from json_pretty.reader import from_value, read_json, read_json_file, to_value


# ---------------------------------------------------------------------------
# read_json
# ---------------------------------------------------------------------------

def test_read_scalars():
    assert read_json("null") is Null
    assert read_json("true") == VBool(True)
    assert read_json("12") == VNumber(12)
    assert read_json("1.5") == VNumber(1.5)
    assert read_json('"x"') == VString("x")

def test_read_keeps_key_order():
    value = read_json('{"z": 1, "a": 2, "m": 3}')
    assert value.keys() == ["z", "a", "m"]

def test_read_keeps_duplicate_keys():
    value = read_json('{"a": 1, "a": 2}')
    assert value.entries == (("a", VNumber(1)), ("a", VNumber(2)))

def test_read_nested():
    value = read_json('{"a": [1, {"b": null}]}')
    assert value == VObject((
        ("a", VArray((VNumber(1), VObject((("b", Null),))))),
    ))

def test_read_unescapes_strings():
    assert read_json(r'"a\"b"') == VString('a"b')

def test_read_bytes_with_bom():
    assert read_json(b'\xef\xbb\xbf{"a": 1}') == VObject((("a", VNumber(1)),))

def test_read_invalid_utf8():
    with pytest.raises(JSONReadError):
        read_json(b'"\xff"')

def test_read_nan_literal():
    value = read_json("NaN")
    assert math.isnan(value.value)

def test_read_error_position():
    with pytest.raises(JSONReadError) as info:
        read_json('{"a": }')
    assert info.value.lineno == 1
    assert info.value.colno == 7
    assert "line 1 column 7" in str(info.value)

def test_read_error_is_value_error():
    with pytest.raises(ValueError):
        read_json("")


# ---------------------------------------------------------------------------
# read_json_file
# ---------------------------------------------------------------------------

def test_read_file_path(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('[1, "two"]', encoding="utf-8")
    assert read_json_file(str(path)) == VArray((VNumber(1), VString("two")))

def test_read_file_object():
    assert read_json_file(io.StringIO('{"k": false}')) == VObject((("k", VBool(False)),))

def test_read_binary_file_object():
    assert read_json_file(io.BytesIO(b"[]")) == VArray()

def test_read_missing_file(tmp_path):
    with pytest.raises(JSONReadError):
        read_json_file(str(tmp_path / "missing.json"))


# ---------------------------------------------------------------------------
# to_value / from_value
# ---------------------------------------------------------------------------

class TestToValue:
    def test_bool_before_int(self):
        assert to_value(True) == VBool(True)
        assert to_value(1) == VNumber(1)

    def test_none(self):
        assert to_value(None) is Null

    def test_dict_order(self):
        assert to_value({"b": 1, "a": 2}).keys() == ["b", "a"]

    def test_tuple_becomes_array(self):
        assert to_value((1, "x")) == VArray((VNumber(1), VString("x")))

    def test_value_passthrough(self):
        v = VString("x")
        assert to_value(v) is v

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedValueError):
            to_value({1, 2})

    def test_non_string_key(self):
        with pytest.raises(UnsupportedValueError):
            to_value({1: "a"})


class TestFromValue:
    def test_round_trip(self):
        data = {"a": [1, 2.5, None, True, "s"], "b": {}}
        assert from_value(to_value(data)) == data

    def test_duplicate_keys_last_wins(self):
        assert from_value(read_json('{"a": 1, "a": 2}')) == {"a": 2}

    def test_rejects_non_value(self):
        with pytest.raises(UnsupportedValueError):
            from_value(object())


# ---------------------------------------------------------------------------
# Paths, deep nesting and huge literals
# ---------------------------------------------------------------------------

def test_read_pathlib_path_in_subdirectory(tmp_path, monkeypatch):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.json").write_text('{"x": 1}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert read_json_file(sub / "a.json") == VObject((("x", VNumber(1)),))

def test_read_deeply_nested():
    depth = 500
    text = "[" * depth + "]" * depth
    value = read_json(text)
    for _ in range(depth - 1):
        assert len(value) == 1
        value = value.items[0]
    assert value == VArray()

def test_from_value_deeply_nested():
    depth = 500
    text = '{"a":' * depth + "null" + "}" * depth
    data = from_value(read_json(text))
    for _ in range(depth):
        data = data["a"]
    assert data is None

def test_read_nested_beyond_parser_limit():
    with pytest.raises(JSONReadError):
        read_json("[" * 100000 + "]" * 100000)

def test_read_integer_beyond_digit_limit():
    with pytest.raises(JSONReadError):
        read_json("1" * 5000)
