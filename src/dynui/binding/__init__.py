"""
Data binding
Resolves $data.path and $item.path expressions in schema props.
"""

from .resolver import (
    DATA_PREFIX,
    ITEM_PREFIX,
    get_nested_value,
    set_nested_value,
    resolve_value,
    has_binding,
    extract_bindings,
    to_display_string,
    interpolate_template,
    resolve_props,
)

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
