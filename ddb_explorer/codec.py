"""DynamoDB attribute value codec.

DynamoDB's low-level API returns every attribute as a single-key tagged
mapping ({"S": "x"}, {"N": "42"}, {"L": [...]}, ...). This module decodes
that wire form into a closed set of frozen variant classes and converts
each variant into two projections:

- a display string (what the results and detail screens show), and
- a native value tree (what the JSON export and JSON field view use).

Binary content is never retained: B and BS decode to byte lengths only and
render as "<binary: N bytes>" in both projections. Numbers stay textual
until `to_native`, which tries int, then float, then keeps the text.

Both projections of an item must come from `project_item`, which walks the
decoded item once and fills the display and raw mappings together.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

# ═══════════════════════════════════════════════════════════════════════════════
# VARIANTS
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Number:
    """Arbitrary-precision number kept as the wire text."""

    text: str


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Binary:
    """Binary attribute. Only the byte length survives decoding."""

    length: int


@dataclass(frozen=True)
class List:
    items: tuple["AttributeValue", ...]


@dataclass(frozen=True)
class Map:
    entries: tuple[tuple[str, "AttributeValue"], ...]


@dataclass(frozen=True)
class StringSet:
    members: tuple[str, ...]


@dataclass(frozen=True)
class NumberSet:
    members: tuple[str, ...]


@dataclass(frozen=True)
class BinarySet:
    lengths: tuple[int, ...]


@dataclass(frozen=True)
class Unknown:
    """A wire tag this codec does not recognise."""

    tag: str


AttributeValue = Union[
    String, Number, Boolean, Null, Binary, List, Map, StringSet, NumberSet, BinarySet, Unknown
]

NativeValue = Any
WireValue = Mapping[str, Any]
DisplayItem = dict[str, str]
RawItem = dict[str, NativeValue]

UNKNOWN = "unknown"


def _binary_marker(length: int) -> str:
    return f"<binary: {length} bytes>"


# ═══════════════════════════════════════════════════════════════════════════════
# DECODING
# ═══════════════════════════════════════════════════════════════════════════════


def decode(wire: WireValue) -> AttributeValue:
    """Decode one low-level attribute mapping into its variant.

    Args:
        wire: Tagged mapping such as {"S": "hello"}

    Returns:
        The matching variant; Unknown for unrecognised or malformed input.
    """
    if not isinstance(wire, Mapping):
        return Unknown(tag=type(wire).__name__)
    if len(wire) != 1:
        return Unknown(tag=",".join(sorted(str(k) for k in wire)))

    tag, value = next(iter(wire.items()))
    if tag == "S":
        return String(str(value))
    if tag == "N":
        return Number(str(value))
    if tag == "BOOL":
        return Boolean(bool(value))
    if tag == "NULL":
        return Null()
    if tag == "B":
        return Binary(len(value))
    if tag == "L":
        return List(tuple(decode(v) for v in value))
    if tag == "M":
        return Map(tuple((str(k), decode(v)) for k, v in value.items()))
    if tag == "SS":
        return StringSet(tuple(str(v) for v in value))
    if tag == "NS":
        return NumberSet(tuple(str(v) for v in value))
    if tag == "BS":
        return BinarySet(tuple(len(v) for v in value))
    return Unknown(tag=str(tag))


# ═══════════════════════════════════════════════════════════════════════════════
# PROJECTIONS
# ═══════════════════════════════════════════════════════════════════════════════


def to_display(av: AttributeValue) -> str:
    """Render an attribute value as a single display string."""
    if isinstance(av, String):
        return av.value
    if isinstance(av, Number):
        return av.text
    if isinstance(av, Boolean):
        return "true" if av.value else "false"
    if isinstance(av, Null):
        return "null"
    if isinstance(av, Binary):
        return _binary_marker(av.length)
    if isinstance(av, List):
        return "[" + ", ".join(to_display(v) for v in av.items) + "]"
    if isinstance(av, Map):
        return "{" + ", ".join(f"{k}: {to_display(v)}" for k, v in av.entries) + "}"
    if isinstance(av, (StringSet, NumberSet)):
        return "[" + ", ".join(av.members) + "]"
    if isinstance(av, BinarySet):
        return "[" + ", ".join(_binary_marker(n) for n in av.lengths) + "]"
    if isinstance(av, Unknown):
        return UNKNOWN
    raise TypeError(f"not an attribute value: {av!r}")


def parse_number(text: str) -> int | float | str:
    """int first, then float, else the input text. Never raises."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def to_native(av: AttributeValue) -> NativeValue:
    """Convert an attribute value into a JSON-friendly native value."""
    if isinstance(av, String):
        return av.value
    if isinstance(av, Number):
        return parse_number(av.text)
    if isinstance(av, Boolean):
        return av.value
    if isinstance(av, Null):
        return None
    if isinstance(av, Binary):
        return _binary_marker(av.length)
    if isinstance(av, List):
        return [to_native(v) for v in av.items]
    if isinstance(av, Map):
        return {k: to_native(v) for k, v in av.entries}
    if isinstance(av, (StringSet, NumberSet)):
        return list(av.members)
    if isinstance(av, BinarySet):
        return [_binary_marker(n) for n in av.lengths]
    if isinstance(av, Unknown):
        return UNKNOWN
    raise TypeError(f"not an attribute value: {av!r}")


def is_container(av: AttributeValue) -> bool:
    """List and Map are the only variants with a nested JSON view. Sets are not."""
    return isinstance(av, (List, Map))


def project_item(wire_item: Mapping[str, WireValue]) -> tuple[DisplayItem, RawItem, frozenset[str]]:
    """Build the display and raw projections of one item in a single pass.

    Args:
        wire_item: Item as returned by the low-level client

    Returns:
        (display_item, raw_item, containers): the two projections with
        identical key sets, plus the names of the List/Map attributes
    """
    display: DisplayItem = {}
    raw: RawItem = {}
    containers: set[str] = set()
    for name, wire in wire_item.items():
        av = decode(wire)
        display[name] = to_display(av)
        raw[name] = to_native(av)
        if is_container(av):
            containers.add(name)
    return display, raw, frozenset(containers)
