import codecs
import json

import pytest

from cfgedit.errors import ParseError
from cfgedit.values import (
    FormatConfig, Kind, NodeRef, dumps, kind_of, parse, serialize,
)

DOC = '{"name": "café", "count": 3, "ratio": 0.5, "on": true, "none": null, "list": [1, 2.0, "x"]}'


def test_parse_preserves_order_and_numeric_subtype():
    value = parse(DOC.encode("utf-8"))
    assert list(value) == ["name", "count", "ratio", "on", "none", "list"]
    assert type(value["count"]) is int
    assert type(value["ratio"]) is float
    assert type(value["list"][1]) is float
    assert value["name"] == "café"


@pytest.mark.parametrize("encoding,bom", [
    ("utf-8", b""),
    ("utf-8", codecs.BOM_UTF8),
    ("utf-16-le", b""),
    ("utf-16-le", codecs.BOM_UTF16_LE),
    ("utf-16-be", codecs.BOM_UTF16_BE),
    ("utf-32-le", b""),
    ("utf-32-le", codecs.BOM_UTF32_LE),
    ("utf-32-be", codecs.BOM_UTF32_BE),
])
def test_parse_detects_encoding(encoding, bom):
    value = parse(bom + DOC.encode(encoding))
    assert value["name"] == "café"
    assert value["list"] == [1, 2.0, "x"]


@pytest.mark.parametrize("data", [
    b"", b"{", b'{"a": 1,}', b"// c\n{}", b"{'a': 1}", b'{"a": NaN}', b"[Infinity]", b"\xff\xfe\x00",
])
def test_parse_rejects_malformed(data):
    with pytest.raises(ParseError):
        parse(data)


@pytest.mark.parametrize("data", [
    b"[1e400]",
    b'{"big": -1e400}',
    b'{"s": "\\ud800"}',
    b'{"\\udfff": 1}',
    b'[["ok", "\\udc00x"]]',
])
def test_parse_rejects_values_that_cannot_be_written_back(data):
    with pytest.raises(ParseError):
        parse(data)


@pytest.mark.parametrize("data", [
    b'{"small": 1e-400, "big": 1e308}',
    b'{"emoji": "\\ud83d\\ude00"}',
    b'[123456789012345678901234567890]',
])
def test_parsed_values_round_trip(data):
    value = parse(data)
    assert parse(serialize(value)) == value


def test_serialize_objects_multiline_arrays_single_line():
    value = {"a": 1, "b": {"c": [1, 2, [3, {"d": 4}]], "e": {}}, "f": [], "g": "ü"}
    text = dumps(value)
    assert text == (
        '{\n'
        '    "a": 1,\n'
        '    "b": {\n'
        '        "c": [1, 2, [3, {"d": 4}]],\n'
        '        "e": {}\n'
        '    },\n'
        '    "f": [],\n'
        '    "g": "ü"\n'
        '}\n'
    )
    assert serialize(value) == text.encode("utf-8")


def test_serialize_indent_from_config():
    assert dumps({"a": {"b": 1}}, FormatConfig(indent=2)) == '{\n  "a": {\n    "b": 1\n  }\n}\n'


def test_serialize_scalars_and_root_array():
    assert dumps(None) == "null\n"
    assert dumps(1.0) == "1.0\n"
    assert dumps([0.5, True, None]) == "[0.5, true, null]\n"


def test_round_trip_is_stable():
    value = {"z": 1, "a": [1.0, 2, {"k": [0.25]}], "m": {"n": None, "o": False, "p": 1e-7}}
    once = serialize(value)
    assert parse(once) == value
    assert serialize(parse(once)) == once
    again = parse(once)
    assert list(again) == ["z", "a", "m"]
    assert type(again["a"][0]) is float and type(again["a"][1]) is int


def test_serialized_output_is_valid_json():
    value = {"s": 'quote " and \\ and \n', "list": [{"a": [1]}]}
    assert json.loads(dumps(value)) == value


def test_kind_of_checks_bool_before_int():
    assert kind_of(True) is Kind.BOOL
    assert kind_of(1) is Kind.INT
    assert kind_of(1.0) is Kind.FLOAT
    assert kind_of("") is Kind.STRING
    assert kind_of([]) is Kind.ARRAY
    assert kind_of({}) is Kind.OBJECT
    assert kind_of(None) is Kind.NULL
    assert kind_of(object()) is None


def test_node_ref_writes_through():
    doc = {"a": [1, 2]}
    ref = NodeRef(doc, "a").child(1)
    ref.set(5)
    assert doc == {"a": [1, 5]}
    assert ref.get() == 5
