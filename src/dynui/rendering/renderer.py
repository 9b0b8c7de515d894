"""
Rendering adapter.
Walks a schema, resolves bindings and hands each node to a Renderer.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from dynui.binding import resolve_props
from dynui.components import ComponentKind, ComponentSchema
from dynui.core.logging_config import get_logger
from dynui.core.values import is_array, is_number

logger = get_logger(__name__)

Out = TypeVar("Out")
Out_co = TypeVar("Out_co", covariant=True)

Props = dict[str, Any]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class Renderer(Protocol[Out_co]):
    """Turns resolved nodes into output of some type (markup, widgets, dicts)."""

    def render(self, kind: ComponentKind, props: Props, children: list[Any]) -> Out_co: ...

    def render_error(self, message: str, schema: Any) -> Out_co: ...


def _to_number(value: Any) -> int | float:
    if is_number(value):
        return value
    match = _LEADING_INT.match(value) if isinstance(value, str) else None
    return int(match.group(1)) if match else 0


def _list_props(props: Props) -> Props:
    if not is_array(props.get("items")):
        props["items"] = []
    return props


def _table_props(props: Props) -> Props:
    if props.get("columns") is None:
        props["columns"] = []
    if not is_array(props.get("rows")):
        props["rows"] = []
    return props


def _chart_props(props: Props) -> Props:
    if props.get("type") is None:
        props["type"] = "pie"
    if not props.get("data"):
        props["data"] = {}
    return props


def _progress_props(props: Props) -> Props:
    props["value"] = _to_number(props.get("value"))
    if props.get("max") is None:
        props["max"] = 100
    return props


def _tabs_props(props: Props) -> Props:
    items = props.get("items")
    if not is_array(items):
        items = []
    props["items"] = items
    if not props.get("default"):
        props["default"] = items[0] if items else None
    return props


# Defaults that keep a renderer working when required props are missing or unresolved
PROP_HANDLERS: dict[ComponentKind, Callable[[Props], Props]] = {
    ComponentKind.LIST: _list_props,
    ComponentKind.TABLE: _table_props,
    ComponentKind.CHART: _chart_props,
    ComponentKind.PROGRESS: _progress_props,
    ComponentKind.TABS: _tabs_props,
}


def render_tree(
    schema: ComponentSchema | Mapping[str, Any],
    data: Mapping[str, Any],
    renderer: Renderer[Out],
    item: Mapping[str, Any] | None = None,
) -> Out:
    """
    Render a schema tree against data.

    Invalid nodes and unknown kinds go to `renderer.render_error`; the rest of
    the tree still renders.
    """
    if not isinstance(schema, ComponentSchema):
        try:
            schema = ComponentSchema.model_validate(schema)
        except ValidationError:
            logger.error("invalid_schema", schema=str(schema)[:200])
            return renderer.render_error("Invalid component schema", schema)

    if not schema.component:
        logger.error("invalid_schema", schema=str(schema)[:200])
        return renderer.render_error("Invalid component schema", schema)

    kind = schema.kind
    if kind is None:
        logger.error("component_not_found", component=schema.component)
        return renderer.render_error(f'Component "{schema.component}" not found', schema)

    props = resolve_props(schema.props, data, item)
    handler = PROP_HANDLERS.get(kind)
    if handler is not None:
        try:
            props = handler(props)
        except Exception as e:
            logger.error("prop_defaults_failed", component=schema.component, error=str(e))
            return renderer.render_error(f'Component "{schema.component}" could not be rendered', schema)

    children = [render_tree(child, data, renderer, item) for child in schema.children or []]
    return renderer.render(kind, props, children)


class TreeRenderer:
    """
    Reference renderer producing JSON-ready dicts.

    Each node becomes `{"component", "props", "children"?}`; errors become
    `{"error": message}`.
    """

    def render(self, kind: ComponentKind, props: Props, children: list[dict[str, Any]]) -> dict[str, Any]:
        rendered: dict[str, Any] = {"component": kind.value, "props": props}
        if children:
            rendered["children"] = children
        return rendered

    def render_error(self, message: str, schema: Any) -> dict[str, Any]:
        return {"error": message}


__all__ = ["Renderer", "PROP_HANDLERS", "render_tree", "TreeRenderer"]
