"""Naming and field-selection heuristics used by the schema generator."""

import re
from collections.abc import Mapping
from typing import Any, Literal

from dynui.core.values import is_number, is_string

Trend = Literal["up", "down", "neutral"]

ICONS: dict[str, str] = {
    "stars": "star",
    "forks": "fork",
    "issues": "issue",
    "open_issues": "issue",
    "contributors": "users",
    "commits": "git-commit",
    "revenue": "dollar",
    "users": "users",
    "views": "eye",
}
DEFAULT_ICON = "info"

POSITIVE_KEYWORDS = ("revenue", "sales", "growth", "profit", "users", "followers", "stars")
NEGATIVE_KEYWORDS = ("issues", "errors", "bounce", "churn", "expenses")

# focus_area answer -> substrings a metric key must contain to stay in focus
FOCUS_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Code activity": ("commit", "push", "branch", "merge"),
    "Sales metrics": ("revenue", "sales", "orders", "conversion"),
    "Product inventory": ("product", "stock", "inventory"),
    "Task progress": ("task", "completion", "progress"),
    "Device status": ("device", "online", "offline", "status"),
    "Sensor readings": ("temperature", "humidity", "sensor", "reading"),
}

# focus_area answer -> substrings that move an entity to the front
ENTITY_PRIORITIES: dict[str, tuple[str, ...]] = {
    "Code activity": ("commits", "recent_commits", "activity"),
    "Issues & PRs": ("issues", "pull_requests", "prs"),
    "Community": ("contributors", "members", "users"),
    "Sales metrics": ("orders", "recent_orders", "sales"),
    "Product inventory": ("products", "inventory"),
    "Customer data": ("customers", "users", "clients"),
    "Task progress": ("tasks", "todos"),
    "Team allocation": ("team", "members", "team_members"),
    "Device status": ("devices", "sensors"),
    "Sensor readings": ("sensors", "readings", "metrics"),
    "Alerts": ("alerts", "warnings", "notifications"),
}

PRIMARY_FIELDS = ("name", "title", "orderId", "id", "month", "status", "source", "region", "ageGroup")
SECONDARY_FIELDS = ("description", "email", "date", "total", "revenue", "count", "value", "customerName")
COLUMN_PRIORITY = ("id", "name", "title", "status", "date", "total", "revenue", "count")
AVATAR_FIELDS = ("name", "author", "customer", "customerName")
MAX_COLUMNS = 6

_CAPITAL = re.compile(r"([A-Z])")


def format_label(key: str) -> str:
    """
    Humanize a data key.

    Examples:
        >>> format_label("recent_commits")
        'Recent commits'
        >>> format_label("orderId")
        'Order Id'
    """
    label = _CAPITAL.sub(r" \1", key.replace("_", " "))
    return (label[:1].upper() + label[1:]).strip()


def guess_icon(key: str) -> str:
    return ICONS.get(key.lower(), DEFAULT_ICON)


def guess_trend(key: str) -> Trend:
    lower = key.lower()
    if any(k in lower for k in POSITIVE_KEYWORDS):
        return "up"
    if any(k in lower for k in NEGATIVE_KEYWORDS):
        return "down"
    return "neutral"


def focus_keywords(focus_area: str | None) -> tuple[str, ...]:
    return FOCUS_KEYWORDS.get(focus_area or "", ())


def sort_entities_by_focus(entities: list[str], focus_area: str) -> list[str]:
    """Stable sort putting entities that match the focus area first."""
    priority = ENTITY_PRIORITIES.get(focus_area, ())
    return sorted(entities, key=lambda name: not any(k in name.lower() for k in priority))


def find_best_primary_field(first_item: Mapping[str, Any]) -> str:
    """Field shown as a list row's main text."""
    keys = list(first_item)

    for field in PRIMARY_FIELDS:
        if field in first_item:
            return field

    for key in keys:
        if is_string(first_item[key]):
            return key

    return keys[0] if keys else "id"


def find_best_secondary_field(first_item: Mapping[str, Any], primary: str) -> str | None:
    """Field shown under the main text, or None when nothing suitable exists."""
    keys = list(first_item)

    for field in SECONDARY_FIELDS:
        if field in first_item and field != primary:
            return field

    for key in keys:
        if key != primary and is_number(first_item[key]):
            return key

    if len(keys) > 1 and keys[1] != primary:
        return keys[1]
    return None


def select_best_columns(first_item: Mapping[str, Any]) -> list[str]:
    """Priority columns first, then the rest in key order, at most six."""
    selected = [field for field in COLUMN_PRIORITY if field in first_item][:MAX_COLUMNS]
    for key in first_item:
        if len(selected) >= MAX_COLUMNS:
            break
        if key not in selected:
            selected.append(key)
    return selected


def has_avatar(first_item: Any) -> bool:
    return isinstance(first_item, Mapping) and any(field in first_item for field in AVATAR_FIELDS)


__all__ = [
    "format_label",
    "guess_icon",
    "guess_trend",
    "focus_keywords",
    "sort_entities_by_focus",
    "find_best_primary_field",
    "find_best_secondary_field",
    "select_best_columns",
    "has_avatar",
]
