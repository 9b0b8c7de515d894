"""JSON value shapes.

Heuristics over unknown input never inspect raw Python types directly; they
ask for the `JsonKind` of a value. This keeps `bool` out of the numbers (it is
an `int` subclass) and treats tuples like arrays.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    """The six shapes a decoded JSON value can take."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> JsonKind:
    """Classify a value. Anything unrecognised is reported as NULL."""
    match value:
        case None:
            return JsonKind.NULL
        case bool():
            return JsonKind.BOOL
        case int() | float():
            return JsonKind.NUMBER
        case str():
            return JsonKind.STRING
        case Mapping():
            return JsonKind.OBJECT
        case Sequence():
            return JsonKind.ARRAY
        case _:
            return JsonKind.NULL


def is_number(value: Any) -> bool:
    return json_kind(value) is JsonKind.NUMBER


def is_string(value: Any) -> bool:
    return json_kind(value) is JsonKind.STRING


def is_array(value: Any) -> bool:
    return json_kind(value) is JsonKind.ARRAY


def is_object(value: Any) -> bool:
    return json_kind(value) is JsonKind.OBJECT


def is_scalar_metric(value: Any) -> bool:
    """Numbers and strings are the only values a metrics container may hold."""
    return json_kind(value) in (JsonKind.NUMBER, JsonKind.STRING)


def is_metrics_container(value: Any) -> bool:
    """A non-empty object whose values are all numbers or strings."""
    return is_object(value) and len(value) > 0 and all(is_scalar_metric(v) for v in value.values())


def all_numeric(values: Sequence[Any]) -> bool:
    """True when every value is a number (vacuously true when empty)."""
    return all(is_number(v) for v in values)


__all__ = [
    "JsonKind",
    "json_kind",
    "is_number",
    "is_string",
    "is_array",
    "is_object",
    "is_scalar_metric",
    "is_metrics_container",
    "all_numeric",
]
