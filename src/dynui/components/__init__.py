"""Component library: the twelve kinds, their schema model and contracts."""

from .models import ComponentKind, ComponentSchema, node
from .contracts import (
    ComponentContract,
    ValidationResult,
    COMPONENT_SPECS,
    validate_schema,
    describe_components,
)

__all__ = [
    "ComponentKind",
    "ComponentSchema",
    "node",
    "ComponentContract",
    "ValidationResult",
    "COMPONENT_SPECS",
    "validate_schema",
    "describe_components",
]
