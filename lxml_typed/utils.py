import re
from typing import Optional

from lxml import etree

from lxml_typed.exceptions import ConversionError
from lxml_typed.typing import AttributeValue


BOOLEAN_LITERALS = {"true": True, "false": False}

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
FLOAT_LITERAL = re.compile(
    r"[+-]?(NaN|Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)", re.ASCII
)

INT_BITS = 32
LONG_BITS = 64


def detach_element(element: etree._Element):
    """ Removes an element from its parent while the text that follows it, which
        lxml keeps as the element's ``tail``, remains at its position. """
    parent = element.getparent()
    if parent is None:
        return

    tail = element.tail
    if tail is not None:
        previous = element.getprevious()
        if previous is None:
            parent.text = (parent.text or "") + tail
        else:
            previous.tail = (previous.tail or "") + tail
        element.tail = None

    parent.remove(element)


def format_attribute_value(value: AttributeValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)


def parse_bool(value: str) -> bool:
    result = BOOLEAN_LITERALS.get(value.strip().lower())
    if result is None:
        raise ConversionError(f"Invalid boolean value: `{value}`")
    return result


def parse_float(value: str) -> float:
    """ Accepts decimal literals with an optional exponent and the special values
        ``NaN`` and ``Infinity``, surrounding whitespace is ignored. """
    literal = value.strip()
    if FLOAT_LITERAL.fullmatch(literal) is None:
        raise ConversionError(f"Invalid floating point value: `{value}`")
    return float(literal)


def parse_integer(value: str, base: int = 10, bits: Optional[int] = None) -> int:
    """ Parses an integer in the given base, only an optional sign and the digits of
        that base are accepted. With ``bits`` the result must fit into a signed
        integer of that width. """
    if not 2 <= base <= 36:
        raise ConversionError(f"Unsupported base: {base}")

    digits = value[1:] if value[:1] in ("+", "-") else value
    valid_digits = DIGITS[:base]
    if not digits or any(x not in valid_digits for x in digits.lower()):
        raise ConversionError(f"Invalid integer value with base {base}: `{value}`")

    result = int(value, base)

    if bits is not None:
        limit = 1 << (bits - 1)
        if not -limit <= result < limit:
            raise ConversionError(
                f"Value `{value}` exceeds the range of a {bits} bit integer."
            )

    return result


__all__ = (
    detach_element.__name__,
    format_attribute_value.__name__,
    parse_bool.__name__,
    parse_float.__name__,
    parse_integer.__name__,
)
