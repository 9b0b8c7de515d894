"""Rule-based schema generator - deterministic, no external calls."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dynui.analysis import ContextAnalysis, DataType, InputContext, unwrap_input
from dynui.binding import DATA_PREFIX, to_display_string
from dynui.components import ComponentKind, ComponentSchema, node, validate_schema
from dynui.core.logging_config import get_logger
from dynui.core.values import all_numeric, is_array, is_metrics_container, is_number, is_object
from .heuristics import (
    DEFAULT_ICON,
    find_best_primary_field,
    find_best_secondary_field,
    focus_keywords,
    format_label,
    guess_icon,
    guess_trend,
    has_avatar,
    select_best_columns,
    sort_entities_by_focus,
)

logger = get_logger(__name__)

TABLE_MIN_FIELDS = 4

LIST_ACTIONS: dict[str, list[str]] = {
    "Quick actions": ["view", "edit"],
    "Full management": ["view", "edit", "delete"],
}


@dataclass(frozen=True)
class GridLayout:
    """Column count of the root grid and the spans of metric and list cards."""

    cols: int
    metric_colspan: int
    list_colspan: int


DEFAULT_LAYOUT = GridLayout(cols=3, metric_colspan=3, list_colspan=2)

LAYOUTS: dict[str, GridLayout] = {
    "Overview metrics": GridLayout(cols=3, metric_colspan=3, list_colspan=1),
    "Detailed lists": GridLayout(cols=3, metric_colspan=2, list_colspan=3),
    "Activity/timeline": GridLayout(cols=2, metric_colspan=2, list_colspan=2),
}


@dataclass(frozen=True)
class Preferences:
    """Answers to the clarifying questions, with defaults filled in."""

    priority: str = "All equal"
    metric_style: str = "Cards with trends"
    list_actions: str = "View only"
    chart_preference: str = "Charts/graphs"
    focus_area: str | None = None

    @classmethod
    def from_answers(cls, answers: Mapping[str, str] | None) -> "Preferences":
        answers = answers or {}
        defaults = cls()
        return cls(
            priority=answers.get("priority") or defaults.priority,
            metric_style=answers.get("metric_style") or defaults.metric_style,
            list_actions=answers.get("list_actions") or defaults.list_actions,
            chart_preference=answers.get("chart_preference") or defaults.chart_preference,
            focus_area=answers.get("focus_area") or None,
        )

    @property
    def layout(self) -> GridLayout:
        return LAYOUTS.get(self.priority, DEFAULT_LAYOUT)

    @property
    def charts(self) -> bool:
        return self.chart_preference == "Charts/graphs"


def _binding(path: str) -> str:
    return f"{DATA_PREFIX}{path}"


class SchemaGenerator:
    """
    Builds a dashboard schema from input data, its analysis and the user's answers.

    Sections are emitted in a fixed order: metrics, then one list or table per
    array entity, then one chart or breakdown per nested object. The result is
    always a root Container, possibly with no children.
    """

    def generate(
        self,
        raw: Mapping[str, Any] | InputContext,
        analysis: ContextAnalysis,
        answers: Mapping[str, str] | None = None,
    ) -> ComponentSchema:
        data, _ = unwrap_input(raw)
        prefs = Preferences.from_answers(answers)
        layout = prefs.layout
        children: list[ComponentSchema] = []

        if analysis.has(DataType.METRICS):
            metrics = self.metrics_section(data, prefs)
            if metrics is not None:
                children.append(metrics)

        entities = analysis.entities
        if prefs.focus_area:
            entities = sort_entities_by_focus(entities, prefs.focus_area)

        for entity in entities:
            items = data.get(entity)
            if not is_array(items):
                continue

            first = items[0] if items else None
            if is_object(first) and len(first) > TABLE_MIN_FIELDS and prefs.chart_preference == "Detailed tables":
                children.append(self.table_section(entity, first))
            else:
                children.append(self.list_section(entity, items, prefs))

        if prefs.chart_preference != "Simple breakdown":
            for key, value in data.items():
                if not is_object(value):
                    continue
                if prefs.charts:
                    colspan = 1 if prefs.metric_style == "With charts" else 2
                    children.append(self.chart_section(key, value, colspan))
                elif is_metrics_container(value):
                    continue
                elif prefs.chart_preference == "Detailed tables":
                    children.append(self.breakdown_section(key, value))

        schema = node(
            ComponentKind.CONTAINER,
            children=children,
            cols=layout.cols,
            gap="lg" if prefs.priority == "Detailed lists" else "md",
        )

        validation = validate_schema(schema)
        if not validation.valid:
            logger.warning("schema_validation_warnings", errors=validation.errors)

        logger.debug("schema_generated", sections=len(children), context=analysis.detected_context)
        return schema

    def metric_candidates(self, data: Mapping[str, Any], prefs: Preferences) -> list[str]:
        """
        Dotted keys of the values that become Metric nodes.

        Top-level numbers always qualify. Numbers inside a flat metrics object
        qualify too, unless that object is going to be drawn as a chart.
        """
        candidates: list[str] = []
        for key, value in data.items():
            if is_number(value):
                candidates.append(key)
            elif not prefs.charts and is_metrics_container(value):
                candidates.extend(f"{key}.{sub}" for sub, v in value.items() if is_number(v))

        keywords = focus_keywords(prefs.focus_area)
        if keywords:
            focused = [c for c in candidates if any(k in c.lower() for k in keywords)]
            # Never filter down to nothing
            if focused:
                return focused

        return candidates

    def metrics_section(self, data: Mapping[str, Any], prefs: Preferences) -> ComponentSchema | None:
        keys = self.metric_candidates(data, prefs)
        if not keys:
            return None

        metrics = []
        for key in keys:
            props: dict[str, Any] = {"label": format_label(key), "value": _binding(key), "icon": guess_icon(key)}
            if prefs.metric_style == "Cards with trends":
                props["trend"] = guess_trend(key)
            metrics.append(ComponentSchema(component=ComponentKind.METRIC.value, props=props))

        count = len(metrics)
        colspan = prefs.layout.metric_colspan

        match prefs.metric_style:
            case "Simple numbers":
                grid = node(ComponentKind.CONTAINER, children=metrics, cols=min(count, 4), gap="sm")
                return node(ComponentKind.SECTION, children=[grid], title="Key Metrics")
            case "With charts":
                grid = node(ComponentKind.CONTAINER, children=metrics, cols=min(count, 3), gap="md")
                return node(ComponentKind.CARD, children=[grid], title="Performance Overview", colspan=colspan)
            case _:
                grid = node(ComponentKind.CONTAINER, children=metrics, cols=min(count, 4), gap="sm")
                return node(ComponentKind.CARD, children=[grid], title="Overview", colspan=colspan)

    def list_section(self, name: str, items: list[Any], prefs: Preferences) -> ComponentSchema:
        first = items[0] if items else None

        props: dict[str, Any] = {
            "items": _binding(name),
            "avatar": has_avatar(first),
            "actions": list(LIST_ACTIONS.get(prefs.list_actions, [])),
        }

        if isinstance(first, Mapping):
            primary = find_best_primary_field(first)
            template = {"primary": primary}
            secondary = find_best_secondary_field(first, primary)
            if secondary is not None:
                template["secondary"] = secondary
            props["template"] = template

        colspan = 3 if prefs.priority == "Detailed lists" else prefs.layout.list_colspan
        return node(
            ComponentKind.CARD,
            children=[ComponentSchema(component=ComponentKind.LIST.value, props=props)],
            title=format_label(name),
            colspan=colspan,
        )

    def table_section(self, name: str, first_item: Mapping[str, Any]) -> ComponentSchema:
        table = node(
            ComponentKind.TABLE,
            columns=select_best_columns(first_item),
            rows=_binding(name),
            sortable=True,
        )
        return node(ComponentKind.CARD, children=[table], title=format_label(name), colspan=3)

    def chart_section(self, name: str, value: Mapping[str, Any], colspan: int) -> ComponentSchema:
        chart_type = "pie" if all_numeric(list(value.values())) else "bar"
        chart = node(ComponentKind.CHART, type=chart_type, data=_binding(name))
        return node(ComponentKind.CARD, children=[chart], title=format_label(name), colspan=colspan)

    def breakdown_section(self, name: str, value: Mapping[str, Any]) -> ComponentSchema:
        rows = [
            node(ComponentKind.METRIC, label=format_label(k), value=to_display_string(v), icon=DEFAULT_ICON)
            for k, v in value.items()
        ]
        grid = node(ComponentKind.CONTAINER, children=rows, cols=1, gap="sm")
        return node(ComponentKind.CARD, children=[grid], title=format_label(name))


_default_generator = SchemaGenerator()


def generate_ui(
    raw: Mapping[str, Any] | InputContext,
    analysis: ContextAnalysis,
    answers: Mapping[str, str] | None = None,
) -> ComponentSchema:
    """
    Build a schema deterministically.

    Args:
        raw: Input data, or a `{type?, data}` wrapper
        analysis: Result of `analyze_context` for the same input
        answers: Question id -> chosen option

    Returns:
        Root Container; never raises for a well-formed analysis
    """
    return _default_generator.generate(raw, analysis, answers)


__all__ = ["GridLayout", "Preferences", "SchemaGenerator", "generate_ui"]
