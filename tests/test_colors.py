import pytest

from cfgedit.colors import ColorShape, from_hex, from_rgba, looks_like_color, to_hex, to_rgba


def test_byte_rgb():
    assert looks_like_color("backgroundColor", [255, 0, 0]) == ColorShape(unit=False, channels=3)


def test_unit_rgba():
    shape = looks_like_color("tintColour", [0.5, 0.5, 0.5, 1.0])
    assert shape == ColorShape(unit=True, channels=4)
    assert shape.has_alpha


@pytest.mark.parametrize("name", ["fillColor", "fillColour", "color", "rimcolour"])
def test_accepted_suffixes(name):
    assert looks_like_color(name, [0, 0, 0]) is not None


@pytest.mark.parametrize("name,value", [
    ("fooColor", [256, 0, 0]),
    ("fooColor", [-1, 0, 0]),
    ("fooColor", [0.5, 0.5, 1.5]),
    ("foo", [1, 0, 0]),
    ("fooCOLOR", [1, 0, 0]),
    ("colorFoo", [1, 0, 0]),
    ("fooColor", [1, 0]),
    ("fooColor", [1, 0, 0, 0, 0]),
    ("fooColor", [0, 0.5, 1]),
    ("fooColor", [True, False, True]),
    ("fooColor", ["1", 0, 0]),
    ("fooColor", {"r": 1}),
])
def test_rejected(name, value):
    assert looks_like_color(name, value) is None


def test_to_rgba_defaults_alpha_for_display():
    assert to_rgba([255, 0, 51], ColorShape(False, 3)) == (1.0, 0.0, 0.2, 1.0)
    assert to_rgba([0.1, 0.2, 0.3, 0.4], ColorShape(True, 4)) == (0.1, 0.2, 0.3, 0.4)


def test_byte_edit_writes_integers_and_keeps_length():
    assert from_rgba((1.0, 0.0, 0.0, 1.0), ColorShape(False, 3)) == [255, 0, 0]
    out = from_rgba((0.5, 0.25, 1.0, 0.0), ColorShape(False, 4))
    assert out == [128, 64, 255, 0]
    assert all(type(c) is int for c in out)


def test_unit_edit_writes_floats():
    out = from_rgba((0.0, 1.0, 0.5, 0.25), ColorShape(True, 3))
    assert out == [0.0, 1.0, 0.5]
    assert all(type(c) is float for c in out)


def test_from_rgba_clamps():
    assert from_rgba((1.2, -0.1, 0.0), ColorShape(False, 3)) == [255, 0, 0]


def test_hex_helpers():
    assert to_hex((0.0, 128 / 255, 1.0, 1.0)) == "#0080ff"
    assert from_hex("#00ff00") == (0.0, 1.0, 0.0, 1.0)
    assert from_hex("00FF00", alpha=0.5)[3] == 0.5
    with pytest.raises(ValueError):
        from_hex("#fff")
