"""
Domain Registry
System-defined domains plus AI-created ones persisted to a JSON file.
"""

import os
import tempfile
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from dynui.core.logging_config import get_logger
from dynui.core.models import CamelModel
from dynui.core.values import is_array
from .models import DomainConfig, LayoutHints, Question

logger = get_logger(__name__)

MATCH_THRESHOLD = 0.3

PRIORITY_QUESTION = Question(
    id="priority",
    text="What is your primary focus?",
    options=["Overview metrics", "Detailed lists", "Activity/timeline", "All equal"],
    impact="layout_weight",
)

METRIC_STYLE_QUESTION = Question(
    id="metric_style",
    text="How should metrics be displayed?",
    options=["Cards with trends", "Simple numbers", "With charts"],
    impact="component_selection",
)

TIME_RANGE_QUESTION = Question(
    id="time_range",
    text="Default time range?",
    options=["Today", "Week", "Month", "Quarter", "Year"],
    impact="data_filter",
)


def _focus(text: str, options: list[str]) -> Question:
    return Question(id="focus_area", text=text, options=options, impact="section_priority")


SYSTEM_DOMAINS: tuple[DomainConfig, ...] = (
    DomainConfig(
        id="github_repo",
        name="GitHub Repository",
        description="Repository stats, commits, contributors, and code metrics",
        keywords=["commits", "contributors", "stars", "forks", "issues", "pull_requests"],
        questions=[
            PRIORITY_QUESTION,
            _focus("Which area matters most?", ["Code activity", "Issues & PRs", "Community", "CI/CD"]),
        ],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="metrics"),
    ),
    DomainConfig(
        id="ecommerce",
        name="E-commerce",
        description="Sales, products, orders, and customer data",
        keywords=["products", "orders", "revenue", "customers", "sales"],
        questions=[
            PRIORITY_QUESTION,
            _focus(
                "What should be highlighted?",
                ["Sales metrics", "Product inventory", "Customer data", "Recent orders"],
            ),
        ],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="balanced"),
    ),
    DomainConfig(
        id="analytics",
        name="Analytics",
        description="Website traffic, page views, and user behavior",
        keywords=["pageviews", "visitors", "sessions", "traffic", "bounce"],
        questions=[PRIORITY_QUESTION, TIME_RANGE_QUESTION],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="metrics"),
    ),
    DomainConfig(
        id="financial",
        name="Financial",
        description="Revenue, expenses, profit, and financial metrics",
        keywords=["revenue", "expenses", "profit", "income", "costs"],
        questions=[PRIORITY_QUESTION, TIME_RANGE_QUESTION],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="metrics"),
    ),
    DomainConfig(
        id="project_management",
        name="Project Management",
        description="Tasks, team members, milestones, and project tracking",
        keywords=["tasks", "milestones", "team", "project", "completion"],
        questions=[
            PRIORITY_QUESTION,
            _focus(
                "What needs most attention?",
                ["Task progress", "Team allocation", "Timeline/milestones", "All equal"],
            ),
        ],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="lists"),
    ),
    DomainConfig(
        id="iot",
        name="IoT/Sensors",
        description="Device monitoring, sensor readings, and alerts",
        keywords=["sensors", "devices", "temperature", "humidity", "alerts"],
        questions=[
            PRIORITY_QUESTION,
            _focus("What is most important?", ["Device status", "Sensor readings", "Alerts", "All equal"]),
        ],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="metrics"),
    ),
    DomainConfig(
        id="social_media",
        name="Social Media",
        description="Followers, posts, engagement, and social metrics",
        keywords=["followers", "posts", "likes", "comments", "engagement"],
        questions=[PRIORITY_QUESTION],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="balanced"),
    ),
)


def match_domain(data: Mapping[str, Any], domains: list[DomainConfig] | tuple[DomainConfig, ...]) -> DomainConfig | None:
    """
    Pick the domain whose keywords best cover the input's top-level keys.

    A keyword counts when it is a substring of some lower-cased key. The score
    is the covered fraction of the domain's keywords; the first domain to
    reach the best score wins, and at least 30% coverage is required.
    """
    keys = [k.lower() for k in data]
    best: tuple[DomainConfig, float] | None = None

    for domain in domains:
        matched = sum(1 for keyword in domain.keywords if any(keyword.lower() in key for key in keys))
        if matched == 0:
            continue

        score = matched / len(domain.keywords)
        if best is None or score > best[1]:
            best = (domain, score)

    if best is not None and best[1] >= MATCH_THRESHOLD:
        return best[0]
    return None


class DomainStore:
    """
    JSON-file persistence for AI-created domains.

    File format: `{"domains": [DomainConfig, ...]}` with camelCase keys.
    Reads never fail loudly: a missing or corrupt file is an empty collection.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> list[DomainConfig]:
        try:
            payload = orjson.loads(self.path.read_bytes())
        except FileNotFoundError:
            return []
        except (OSError, orjson.JSONDecodeError) as e:
            logger.warning("domains_load_failed", path=str(self.path), error=str(e))
            return []

        if not isinstance(payload, dict):
            logger.warning("domains_load_failed", path=str(self.path), error="expected object")
            return []

        entries = payload.get("domains") or []
        if not is_array(entries):
            logger.warning("domains_load_failed", path=str(self.path), error="expected domains array")
            return []

        domains = []
        for raw in entries:
            try:
                domains.append(DomainConfig.model_validate(raw))
            except ValidationError as e:
                logger.warning("domain_skipped", error=str(e))
        return domains

    def append(self, domain: DomainConfig) -> bool:
        """
        Add a domain to the file.

        Returns:
            False if the domain is incomplete, its id already exists, or the
            file cannot be written
        """
        if not domain.keywords:
            logger.warning("domain_rejected", domain=domain.id, reason="no keywords")
            return False

        existing = self.load()
        if any(d.id == domain.id for d in existing):
            logger.warning("domain_rejected", domain=domain.id, reason="duplicate id")
            return False

        existing.append(domain)
        body = orjson.dumps(
            {"domains": [d.to_wire() for d in existing]},
            option=orjson.OPT_INDENT_2,
        )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".domains-", suffix=".json")
            with os.fdopen(fd, "wb") as fh:
                fh.write(body)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("domain_save_failed", domain=domain.id, error=str(e))
            return False

        logger.info("domain_saved", domain=domain.id, total=len(existing))
        return True


class DomainRegistry:
    """
    Known domains: the built-in set followed by AI-created ones.

    Passed explicitly to the analyzer so there is no hidden module state;
    `load()` and `save()` are the only ways the AI collection changes.
    """

    def __init__(
        self,
        store: DomainStore | None = None,
        system_domains: tuple[DomainConfig, ...] = SYSTEM_DOMAINS,
    ) -> None:
        self.store = store
        self._system = list(system_domains)
        self._ai: list[DomainConfig] = []

    def load(self) -> list[DomainConfig]:
        """Replace the AI collection with the persisted one."""
        self._ai = self.store.load() if self.store else []
        logger.info("domains_loaded", system=len(self._system), ai=len(self._ai))
        return list(self._ai)

    def save(self, domain: DomainConfig) -> bool:
        """Persist a confirmed AI domain and make it matchable."""
        if self.get(domain.id) is not None:
            logger.warning("domain_rejected", domain=domain.id, reason="duplicate id")
            return False

        if self.store is not None and not self.store.append(domain):
            return False

        self._ai.append(domain)
        return True

    def all(self) -> list[DomainConfig]:
        return [*self._system, *self._ai]

    def get(self, domain_id: str) -> DomainConfig | None:
        return next((d for d in self.all() if d.id == domain_id), None)

    def match(self, data: Mapping[str, Any]) -> DomainConfig | None:
        return match_domain(data, self.all())


class DomainSuggestion(CamelModel):
    """Result of asking which domain an input belongs to."""

    needs_new_domain: bool
    matched_domain: DomainConfig | None = None
    suggested_domain: DomainConfig | None = None
    reasoning: str = ""


def fallback_domain_suggestion(data: Mapping[str, Any], registry: DomainRegistry) -> DomainSuggestion:
    """
    Local-only domain suggestion.

    Matches against the registry; when nothing matches, proposes a generic
    domain keyed on the first five top-level keys.
    """
    matched = registry.match(data)
    if matched is not None:
        return DomainSuggestion(
            needs_new_domain=False,
            matched_domain=matched,
            reasoning="Local keyword matching",
        )

    generic = DomainConfig(
        id=f"generic_{int(time.time() * 1000)}",
        name="Generic Data",
        description="Custom data structure",
        keywords=[k.lower() for k in list(data)[:5]],
        questions=[PRIORITY_QUESTION, METRIC_STYLE_QUESTION],
        layout_hints=LayoutHints(preferred_layout="grid", emphasize="balanced"),
        created_by="ai",
    )
    return DomainSuggestion(
        needs_new_domain=True,
        suggested_domain=generic,
        reasoning="No match found, generated generic configuration",
    )


__all__ = [
    "MATCH_THRESHOLD",
    "PRIORITY_QUESTION",
    "METRIC_STYLE_QUESTION",
    "TIME_RANGE_QUESTION",
    "SYSTEM_DOMAINS",
    "match_domain",
    "DomainStore",
    "DomainRegistry",
    "DomainSuggestion",
    "fallback_domain_suggestion",
]
