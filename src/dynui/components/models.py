"""Component schema models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class ComponentKind(str, Enum):
    """The closed palette of twelve component kinds."""

    CONTAINER = "Container"
    CARD = "Card"
    SECTION = "Section"
    METRIC = "Metric"
    TABLE = "Table"
    LIST = "List"
    CHART = "Chart"
    BUTTON = "Button"
    FILTER = "Filter"
    TABS = "Tabs"
    BADGE = "Badge"
    PROGRESS = "Progress"

    @classmethod
    def parse(cls, value: str) -> "ComponentKind | None":
        """Return the kind for a tag, or None for an unknown tag."""
        try:
            return cls(value)
        except ValueError:
            return None


class ComponentSchema(BaseModel):
    """
    One node of a dashboard schema.

    `component` is kept as a plain string so that trees produced elsewhere
    (an external generator, a hand-written file) can carry an unknown kind
    all the way to the validator and the renderer, which both report it.
    """

    model_config = ConfigDict(extra="ignore")

    component: str = Field(..., description="Component kind tag")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["ComponentSchema"] | None = Field(default=None)

    @property
    def kind(self) -> ComponentKind | None:
        return ComponentKind.parse(self.component)

    @model_serializer(mode="wrap")
    def _omit_empty_children(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Leaves serialize without a "children" key.
        data = handler(self)
        if data.get("children") is None:
            data.pop("children", None)
        return data

    def iter_nodes(self):
        """Depth-first, pre-order walk over the tree."""
        yield self
        for child in self.children or []:
            yield from child.iter_nodes()


def node(kind: ComponentKind, children: list[ComponentSchema] | None = None, **props: Any) -> ComponentSchema:
    """Shorthand used by the generator: `node(ComponentKind.CARD, title="Overview")`."""
    return ComponentSchema(component=kind.value, props=props, children=children)


ComponentSchema.model_rebuild()
