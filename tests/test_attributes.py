import math

import pytest

from lxml_typed import (
    ConversionError,
    Document,
    MissingAttributeError,
    XMLError,
)


@pytest.fixture
def node():
    return Document().add_root("node")


@pytest.mark.parametrize("value", ("value", " spaced ", "ümläut", "a&b<c", "0"))
def test_string_attribute(node, value):
    node.set_attribute("s", value)
    assert node.get_string_attribute("s") == value


@pytest.mark.parametrize("value", (True, False))
def test_bool_attribute(node, value):
    node.set_attribute("flag", value)
    assert node.get_bool_attribute("flag") is value
    assert node.get_string_attribute("flag") == str(value).lower()


@pytest.mark.parametrize(
    ("literal", "expected"),
    (
        ("true", True),
        ("TRUE", True),
        (" True ", True),
        ("false", False),
        ("FaLsE", False),
    ),
)
def test_bool_literals(node, literal, expected):
    node.set_attribute("flag", literal)
    assert node.get_bool_attribute("flag") is expected


@pytest.mark.parametrize("literal", ("1", "0", "yes", "no", "t", "truthy"))
def test_invalid_bool_literals(node, literal):
    node.set_attribute("flag", literal)
    with pytest.raises(ConversionError):
        node.get_bool_attribute("flag")


@pytest.mark.parametrize("value", (0, 1, -1, 42, -2 ** 31, 2 ** 31 - 1))
def test_int_attribute(node, value):
    node.set_attribute("i", value)
    assert node.get_int_attribute("i") == value
    assert node.get_long_attribute("i") == value


@pytest.mark.parametrize(
    ("literal", "base", "expected"),
    (
        ("ff", 16, 255),
        ("-7f", 16, -127),
        ("+1F", 16, 31),
        ("101", 2, 5),
        ("z", 36, 35),
    ),
)
def test_int_attribute_with_base(node, literal, base, expected):
    node.set_attribute("i", literal)
    assert node.get_int_attribute("i", base) == expected
    assert node.get_long_attribute("i", base=base) == expected


@pytest.mark.parametrize("value", (-2 ** 63, 2 ** 63 - 1, 2 ** 31, -2 ** 31 - 1))
def test_long_attribute(node, value):
    node.set_attribute("l", value)
    assert node.get_long_attribute("l") == value


def test_integer_ranges(node):
    node.set_attribute("i", 2 ** 31)
    with pytest.raises(ConversionError):
        node.get_int_attribute("i")

    node.set_attribute("i", -2 ** 31 - 1)
    with pytest.raises(ConversionError):
        node.get_int_attribute("i")

    node.set_attribute("l", 2 ** 63)
    with pytest.raises(ConversionError):
        node.get_long_attribute("l")


@pytest.mark.parametrize("base", (0, 1, 37))
def test_invalid_base(node, base):
    node.set_attribute("i", "10")
    with pytest.raises(ConversionError):
        node.get_int_attribute("i", base=base)


@pytest.mark.parametrize(
    "literal", ("abc", "1.5", "12a", "0xzz", "1_000", "\u0663", " 1", "+", "-")
)
def test_invalid_integers(node, literal):
    node.set_attribute("i", literal)
    with pytest.raises(ConversionError):
        node.get_int_attribute("i")
    with pytest.raises(ValueError):
        node.get_long_attribute("i")


@pytest.mark.parametrize(("literal", "base"), (("ff", 10), ("0x1f", 16), ("102", 2)))
def test_integer_with_wrong_base(node, literal, base):
    node.set_attribute("i", literal)
    with pytest.raises(ConversionError):
        node.get_int_attribute("i", base)


@pytest.mark.parametrize("value", (0.0, 1.5, -3.25, 1e-10, 6.02e23, 100.0))
def test_floating_point_attributes(node, value):
    node.set_attribute("f", value)
    assert node.get_float_attribute("f") == value
    assert node.get_double_attribute("f") == value


@pytest.mark.parametrize(
    "literal",
    ("pi", "1,5", "--1", "1_0.5", "inf", "infinity", "nan", "\u0663.5", "0x1p3"),
)
def test_invalid_floating_point_values(node, literal):
    node.set_attribute("f", literal)
    with pytest.raises(ConversionError):
        node.get_float_attribute("f")
    with pytest.raises(ConversionError):
        node.get_double_attribute("f")


@pytest.mark.parametrize(
    ("literal", "expected"),
    (("Infinity", math.inf), ("-Infinity", -math.inf), (" .5 ", 0.5), ("1E3", 1000.0)),
)
def test_special_floating_point_values(node, literal, expected):
    node.set_attribute("f", literal)
    assert node.get_double_attribute("f") == expected


def test_not_a_number(node):
    node.set_attribute("f", "NaN")
    assert math.isnan(node.get_float_attribute("f"))


def test_enum_attribute(node):
    choices = ("low", "medium", "high")

    node.set_attribute("level", "medium")
    assert node.get_enum_attribute("level", choices) == 1

    node.set_attribute("level", "extreme")
    with pytest.raises(ConversionError):
        node.get_enum_attribute("level", choices)


@pytest.mark.parametrize(
    "getter",
    (
        "get_string_attribute",
        "get_int_attribute",
        "get_long_attribute",
        "get_float_attribute",
        "get_double_attribute",
        "get_bool_attribute",
    ),
)
def test_missing_attribute(node, getter):
    with pytest.raises(MissingAttributeError):
        getattr(node, getter)("missing")

    node.set_attribute("empty", "")
    with pytest.raises(MissingAttributeError) as excinfo:
        getattr(node, getter)("empty")
    assert excinfo.value.name == "empty"


def test_missing_attribute_is_a_lookup_error(node):
    with pytest.raises(LookupError):
        node.get_string_attribute("missing")
    with pytest.raises(XMLError):
        node.get_enum_attribute("missing", ("a",))


def test_other_values_are_stored_as_strings(node):
    node.set_attribute("list", [1, 2])
    assert node.get_string_attribute("list") == "[1, 2]"


def test_has_attribute(node):
    assert not node.has_attribute("a")
    assert "a" not in node

    node.set_attribute("a", "")
    assert node.has_attribute("a")
    assert "a" in node


def test_remove_attribute(node):
    node.set_attribute("a", 1)
    node.set_attribute("b", 2)

    node.remove_attribute("a")
    assert not node.has_attribute("a")
    assert node.attributes == {"b": "2"}

    node.remove_attribute("a")
    assert node.attributes == {"b": "2"}


def test_attributes_are_a_copy(node):
    node.set_attribute("a", "1")
    attributes = node.attributes
    attributes["b"] = "2"
    assert not node.has_attribute("b")


def test_overwrite_attribute(node):
    node.set_attribute("a", "1")
    node.set_attribute("a", True)
    assert node.get_string_attribute("a") == "true"
    assert node.dump() == '<node a="true"/>'


def test_parsed_attributes(config_document):
    controller = next(config_document.root.children())

    assert controller.get_string_attribute("name") == "arm"
    assert controller.get_bool_attribute("enabled") is True
    assert controller.get_double_attribute("frequency") == 100.5

    first, second = controller.children()
    assert first.get_int_attribute("offset") == -12
    assert second.get_int_attribute("offset", 16) == 31
    assert second.get_text() == "elbow"
