"""
Context Analyzer
Classifies an arbitrary JSON object and decides which questions to ask.
Purely local: no external calls.
"""

from collections.abc import Mapping
from typing import Any

from dynui.core.logging_config import get_logger
from dynui.core.values import is_array, is_number, is_object
from .domains import (
    DomainRegistry,
    PRIORITY_QUESTION,
    METRIC_STYLE_QUESTION,
    TIME_RANGE_QUESTION,
    SYSTEM_DOMAINS,
    match_domain,
)
from .models import ContextAnalysis, DataType, DomainConfig, InputContext, Layout, Question

logger = get_logger(__name__)

TIME_KEYS = ("date", "time", "timestamp")

# Checked in order; the first context with an exact key hit wins.
CONTEXT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("github_repo", ("commits", "contributors", "stars", "forks", "issues")),
    ("ecommerce", ("products", "orders", "revenue", "customers", "sales")),
    ("analytics", ("pageviews", "visitors", "sessions", "traffic", "bounce")),
    ("financial", ("revenue", "expenses", "profit", "income", "costs")),
    ("project_management", ("tasks", "milestones", "team", "project", "completion")),
    ("iot", ("sensors", "devices", "temperature", "humidity", "alerts")),
    ("social_media", ("followers", "posts", "likes", "comments", "engagement")),
)

_SHARED_KEYWORDS = frozenset(
    keyword
    for _, keywords in CONTEXT_KEYWORDS
    for keyword in keywords
    if sum(keyword in other for _, other in CONTEXT_KEYWORDS) > 1
)

CONTEXT_QUESTIONS: dict[str, Question] = {
    "github_repo": Question(
        id="focus_area",
        text="Which area matters most?",
        options=["Code activity", "Issues & PRs", "Community", "CI/CD"],
        impact="section_priority",
    ),
    "ecommerce": Question(
        id="focus_area",
        text="What should be highlighted?",
        options=["Sales metrics", "Product inventory", "Customer data", "Recent orders"],
        impact="section_priority",
    ),
    "analytics": TIME_RANGE_QUESTION,
    "financial": TIME_RANGE_QUESTION,
    "project_management": Question(
        id="focus_area",
        text="What needs most attention?",
        options=["Task progress", "Team allocation", "Timeline/milestones", "All equal"],
        impact="section_priority",
    ),
    "iot": Question(
        id="focus_area",
        text="What is most important?",
        options=["Device status", "Sensor readings", "Alerts", "All equal"],
        impact="section_priority",
    ),
}

LIST_ACTIONS_QUESTION = Question(
    id="list_actions",
    text="Need actions on list items?",
    options=["View only", "Quick actions", "Full management"],
    impact="interaction_level",
)

CHART_PREFERENCE_QUESTION = Question(
    id="chart_preference",
    text="How to display nested data?",
    options=["Charts/graphs", "Detailed tables", "Simple breakdown"],
    impact="visualization_style",
)


def _has_time_key(value: Mapping[str, Any]) -> bool:
    return any(key in value for key in TIME_KEYS)


def detect_data_types(data: Mapping[str, Any]) -> list[str]:
    """
    Tag the kinds of values found at the top level.

    Returns:
        Tags in first-seen order, without duplicates
    """
    types: dict[str, None] = {}

    for value in data.values():
        if is_number(value):
            types[DataType.METRICS.value] = None
        elif is_array(value):
            types[DataType.LISTS.value] = None
            if any(is_object(item) and _has_time_key(item) for item in value):
                types[DataType.TIMELINE.value] = None
        elif is_object(value):
            tag = DataType.TIMELINE if _has_time_key(value) else DataType.NESTED
            types[tag.value] = None

    return list(types)


def detect_context_type(data: Mapping[str, Any]) -> str:
    """
    Guess a context id from exact top-level key names.

    Examples:
        >>> detect_context_type({"revenue": 1, "products": [1]})
        'ecommerce'
        >>> detect_context_type({"revenue": 1, "expenses": 2})
        'financial'
    """
    if not data:
        return "generic"

    keys = [k.lower() for k in data]
    key_string = " ".join(keys)

    # Keywords listed under one context decide first; shared ones ("revenue")
    # only break the tie when nothing more specific matched.
    for shared in (False, True):
        for context, keywords in CONTEXT_KEYWORDS:
            if context == "financial" and "product" in key_string:
                continue
            if any(k in keywords and (shared or k not in _SHARED_KEYWORDS) for k in keys):
                return context

    return "generic"


def generate_questions(context_type: str, data_types: list[str], entities: list[str]) -> list[Question]:
    """Universal question, then at most one context question, then data-type questions."""
    questions = [PRIORITY_QUESTION]

    if context_type in CONTEXT_QUESTIONS:
        questions.append(CONTEXT_QUESTIONS[context_type])

    if DataType.METRICS.value in data_types:
        questions.append(METRIC_STYLE_QUESTION)

    if DataType.LISTS.value in data_types:
        questions.append(LIST_ACTIONS_QUESTION)

    if DataType.NESTED.value in data_types and entities:
        questions.append(CHART_PREFERENCE_QUESTION)

    return questions


def unwrap_input(raw: Mapping[str, Any] | InputContext) -> tuple[Mapping[str, Any], str | None]:
    """Accept raw data or a `{type?, data}` wrapper; return the data and the provided type."""
    if isinstance(raw, InputContext):
        return raw.data, raw.type

    if isinstance(raw.get("data"), Mapping):
        provided = raw.get("type")
        return raw["data"], provided if isinstance(provided, str) else None

    return raw, None


def _suggest_layout(data_types: list[str], entity_count: int) -> str:
    if data_types == [DataType.LISTS.value]:
        return Layout.SINGLE_COLUMN.value
    if entity_count > 5:
        return Layout.TABS.value
    return Layout.GRID.value


def analyze_context(
    raw: Mapping[str, Any] | InputContext,
    custom_domain: DomainConfig | None = None,
    registry: DomainRegistry | None = None,
) -> ContextAnalysis:
    """
    Analyze an input object.

    Args:
        raw: The data object, or a `{type?, data}` wrapper around it
        custom_domain: Domain to use instead of matching one
        registry: Known domains to match against (built-in domains when omitted)

    Returns:
        ContextAnalysis for the unwrapped data
    """
    data, provided_type = unwrap_input(raw)

    data_types = detect_data_types(data)

    if custom_domain is not None:
        domain = custom_domain
    elif registry is not None:
        domain = registry.match(data)
    else:
        domain = match_domain(data, SYSTEM_DOMAINS)

    detected_context = (domain.id if domain else None) or provided_type or detect_context_type(data)

    entities = [key for key, value in data.items() if is_array(value) or is_object(value)]

    if domain is not None:
        suggested_layout = domain.layout_hints.preferred_layout or Layout.GRID.value
        questions = list(domain.questions)
    else:
        suggested_layout = _suggest_layout(data_types, len(entities))
        questions = generate_questions(detected_context, data_types, entities)

    logger.debug(
        "context_analyzed",
        context=detected_context,
        data_types=data_types,
        entities=len(entities),
        domain=domain.id if domain else None,
    )

    return ContextAnalysis(
        data_types=data_types,
        entities=entities,
        suggested_layout=suggested_layout,
        detected_context=detected_context,
        questions=questions,
        matched_domain=domain,
    )


__all__ = [
    "detect_data_types",
    "detect_context_type",
    "generate_questions",
    "unwrap_input",
    "analyze_context",
]
