"""Analysis data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import Field

from dynui.core.models import CamelModel


class Layout(str, Enum):
    """Top-level arrangement suggested for a dashboard."""

    GRID = "grid"
    SINGLE_COLUMN = "single-column"
    TABS = "tabs"


class DataType(str, Enum):
    """Tags describing what kinds of values the input holds."""

    METRICS = "metrics"
    LISTS = "lists"
    NESTED = "nested"
    TIMELINE = "timeline"


class Question(CamelModel):
    """A clarifying question; the chosen option is stored under `id`."""

    id: str
    text: str
    options: list[str] = Field(default_factory=list)
    impact: str = Field(default="", description="UI aspect the answer affects")


class LayoutHints(CamelModel):
    """Layout preferences attached to a domain."""

    preferred_layout: Literal["grid", "single-column", "tabs"] | None = None
    metric_display: Literal["cards", "simple", "with-charts"] | None = None
    list_style: Literal["avatar", "simple", "detailed"] | None = None
    emphasize: Literal["metrics", "lists", "timeline", "balanced"] | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DomainConfig(CamelModel):
    """A named family of inputs (GitHub repo, e-commerce, ...) and how to present it."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)
    layout_hints: LayoutHints = Field(default_factory=LayoutHints)
    created_by: Literal["system", "ai"] = "system"
    created_at: str = Field(default_factory=_now)


class InputContext(CamelModel):
    """Wrapped input form: an optional context type plus the data object."""

    type: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class ContextAnalysis(CamelModel):
    """What the analyzer learned about an input."""

    data_types: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)
    suggested_layout: str = Layout.GRID.value
    detected_context: str = "generic"
    questions: list[Question] = Field(default_factory=list)
    matched_domain: DomainConfig | None = None

    def has(self, data_type: DataType) -> bool:
        return data_type.value in self.data_types
