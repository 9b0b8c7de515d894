"""Binding resolution for schema props.

A prop value is either a literal or a binding expression. `$data.<path>`
reads from the data context handed to a render pass, `$item.<path>` from the
per-row item context. A path is a dot-separated list of field names; one
segment may carry a single list index, e.g. `orders[0].total`.

A path that does not resolve yields None. Nothing in this module raises for
missing data; callers render None as "no data".
"""

import re
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from dynui.core.json import safe_json_dumps

DATA_PREFIX = "$data."
ITEM_PREFIX = "$item."

_INDEXED_SEGMENT = re.compile(r"^(\w+)\[(\d+)\]$")
_DATA_BINDING = re.compile(r"\$data\.[\w.[\]]+")
_ITEM_BINDING = re.compile(r"\$item\.[\w.[\]]+")
_TEMPLATE_SLOT = re.compile(r"\$\{([^}]+)\}")


def _lookup(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, Sequence) and not isinstance(container, str) and key.isdigit():
        return _index(container, int(key))
    return None


def _index(container: Any, index: int) -> Any:
    if isinstance(container, Sequence) and not isinstance(container, str) and index < len(container):
        return container[index]
    return None


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Read `path` from `obj`.

    Examples:
        >>> get_nested_value({"user": {"name": "Ada"}}, "user.name")
        'Ada'
        >>> get_nested_value({"orders": [{"id": 7}]}, "orders[0].id")
        7
        >>> get_nested_value({"user": None}, "user.name") is None
        True
    """
    if obj is None or not path:
        return None

    current = obj
    for segment in path.split("."):
        if current is None:
            return None

        indexed = _INDEXED_SEGMENT.match(segment)
        if indexed:
            name, index = indexed.groups()
            current = _index(_lookup(current, name), int(index))
        else:
            current = _lookup(current, segment)

    return current


def set_nested_value(obj: MutableMapping[str, Any], path: str, value: Any) -> MutableMapping[str, Any]:
    """
    Write `value` at `path`, creating intermediate dicts as needed.

    Only plain dotted names are understood here. Unlike `get_nested_value`,
    bracket indices are NOT parsed: `"items[0].name"` creates a key literally
    named `"items[0]"`. An intermediate that exists but is not a mapping is
    replaced by a new dict.

    Returns:
        `obj`, mutated in place
    """
    keys = path.split(".")
    last = keys.pop()
    if not last:
        return obj

    current = obj
    for key in keys:
        if not isinstance(current.get(key), MutableMapping):
            current[key] = {}
        current = current[key]

    current[last] = value
    return obj


def resolve_value(value: Any, data: Mapping[str, Any], item: Mapping[str, Any] | None = None) -> Any:
    """
    Resolve a single prop value.

    Detection is by prefix: the binding must be the whole string. Bindings
    embedded in larger text are handled by `interpolate_template`.
    """
    if not isinstance(value, str):
        return value

    if value.startswith(DATA_PREFIX):
        return get_nested_value(data, value[len(DATA_PREFIX) :])

    if value.startswith(ITEM_PREFIX) and item is not None:
        return get_nested_value(item, value[len(ITEM_PREFIX) :])

    return value


def has_binding(value: Any) -> bool:
    """True if the string mentions a `$data.` or `$item.` path anywhere."""
    if not isinstance(value, str):
        return False
    return DATA_PREFIX in value or ITEM_PREFIX in value


def extract_bindings(value: Any) -> list[str]:
    """
    List every binding expression in a string.

    All `$data.` matches come first, then all `$item.` matches, each group in
    document order.

    Examples:
        >>> extract_bindings("$item.c and $data.a.b")
        ['$data.a.b', '$item.c']
    """
    if not isinstance(value, str):
        return []
    return _DATA_BINDING.findall(value) + _ITEM_BINDING.findall(value)


def to_display_string(value: Any) -> str:
    """Render a resolved value the way it would appear in the page text."""
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer():
            return str(int(value))
        case int() | float() | str():
            return str(value)
        case _:
            return safe_json_dumps(value)


def interpolate_template(
    template: str, data: Mapping[str, Any], item: Mapping[str, Any] | None = None
) -> str:
    """
    Replace each `${expression}` with its resolved value.

    Example: "Hello ${$data.user.name}" -> "Hello Ada". Unresolved bindings
    become the empty string.
    """

    def _substitute(match: re.Match[str]) -> str:
        return to_display_string(resolve_value(match.group(1).strip(), data, item))

    return _TEMPLATE_SLOT.sub(_substitute, template)


def resolve_props(
    props: Mapping[str, Any], data: Mapping[str, Any], item: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """
    Resolve every binding in a props mapping into a new dict.

    Lists are resolved element by element (elements themselves are not
    descended into); mappings are resolved recursively. Schemas are trees, so
    the recursion always terminates.
    """
    resolved: dict[str, Any] = {}

    for key, value in props.items():
        if isinstance(value, list):
            resolved[key] = [resolve_value(v, data, item) for v in value]
        elif isinstance(value, Mapping):
            resolved[key] = resolve_props(value, data, item)
        else:
            resolved[key] = resolve_value(value, data, item)

    return resolved


__all__ = [
    "DATA_PREFIX",
    "ITEM_PREFIX",
    "get_nested_value",
    "set_nested_value",
    "resolve_value",
    "has_binding",
    "extract_bindings",
    "to_display_string",
    "interpolate_template",
    "resolve_props",
]
