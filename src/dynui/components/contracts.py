"""Component contract table and schema-tree validation.

Validation is advisory and presence-only: it reports unknown kinds and
missing required props, never value types, and never raises. A tree that
fails validation is still handed to the renderer.
"""

from dataclasses import dataclass, field
from typing import Any

from .models import ComponentKind, ComponentSchema


@dataclass(frozen=True)
class ComponentContract:
    """Props a kind accepts and props it cannot do without (in display order)."""

    allowed_props: tuple[str, ...]
    required_props: tuple[str, ...] = ()

    @property
    def optional_props(self) -> tuple[str, ...]:
        return tuple(p for p in self.allowed_props if p not in self.required_props)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a schema tree."""

    valid: bool
    errors: list[str] = field(default_factory=list)


COMPONENT_SPECS: dict[ComponentKind, ComponentContract] = {
    ComponentKind.CONTAINER: ComponentContract(("cols", "gap", "colspan")),
    ComponentKind.CARD: ComponentContract(("title", "subtitle", "actions", "colspan"), ("title",)),
    ComponentKind.SECTION: ComponentContract(("title", "collapsible"), ("title",)),
    ComponentKind.METRIC: ComponentContract(("label", "value", "trend", "icon"), ("label", "value")),
    ComponentKind.TABLE: ComponentContract(("columns", "rows", "sortable"), ("columns", "rows")),
    ComponentKind.LIST: ComponentContract(("items", "avatar", "template", "actions"), ("items",)),
    ComponentKind.CHART: ComponentContract(("type", "data"), ("type", "data")),
    ComponentKind.BUTTON: ComponentContract(("label", "variant", "action"), ("label",)),
    ComponentKind.FILTER: ComponentContract(("options", "multi", "target"), ("options",)),
    ComponentKind.TABS: ComponentContract(("items", "default"), ("items",)),
    ComponentKind.BADGE: ComponentContract(("label", "color"), ("label",)),
    ComponentKind.PROGRESS: ComponentContract(("value", "max", "label"), ("value",)),
}


def _collect_errors(schema: ComponentSchema, errors: list[str]) -> None:
    kind = ComponentKind.parse(schema.component)
    if kind is None:
        errors.append(f"Unknown component: {schema.component}")
        return

    for prop in COMPONENT_SPECS[kind].required_props:
        if prop not in schema.props:
            errors.append(f"{kind.value} missing required prop: {prop}")

    for child in schema.children or []:
        _collect_errors(child, errors)


def validate_schema(schema: ComponentSchema | dict[str, Any]) -> ValidationResult:
    """
    Check a schema tree against the contract table.

    Args:
        schema: Root node, as a model or a plain dict

    Returns:
        ValidationResult with every problem found, in tree order

    Examples:
        >>> validate_schema({"component": "Metric", "props": {}}).errors
        ['Metric missing required prop: label', 'Metric missing required prop: value']
    """
    if isinstance(schema, dict):
        try:
            schema = ComponentSchema.model_validate(schema)
        except ValueError as e:
            return ValidationResult(valid=False, errors=[f"Invalid component schema: {e}"])

    errors: list[str] = []
    _collect_errors(schema, errors)
    return ValidationResult(valid=not errors, errors=errors)


def describe_components() -> list[dict[str, Any]]:
    """The contract table as plain data (for prompts and CLI output)."""
    return [
        {
            "component": kind.value,
            "required": list(contract.required_props),
            "optional": list(contract.optional_props),
        }
        for kind, contract in COMPONENT_SPECS.items()
    ]


__all__ = [
    "ComponentContract",
    "ValidationResult",
    "COMPONENT_SPECS",
    "validate_schema",
    "describe_components",
]
