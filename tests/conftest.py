"""Pytest configuration and fixtures."""

import asyncio
import os

import pytest

from dynui.analysis import DomainRegistry, DomainStore, analyze_context
from dynui.components import node, ComponentKind
from dynui.core import configure_logging, get_settings
from dynui.generation import GenerationResponse


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Keep tests off the network and quiet."""
    os.environ["DYNUI_LOG_LEVEL"] = "ERROR"
    os.environ["DYNUI_GEMINI_API_KEY"] = ""
    os.environ["GEMINI_API_KEY"] = ""
    configure_logging("ERROR")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; rebuild them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def github_data():
    """Repository data used throughout the generator tests."""
    return {
        "stars": 1247,
        "forks": 89,
        "recent_commits": [
            {"message": "fix: resolve auth issue", "author": "alice", "time": "2h ago"},
            {"message": "feat: add rate limiting", "author": "bob", "time": "5h ago"},
            {"message": "docs: update README", "author": "carol", "time": "1d ago"},
        ],
        "contributors": [
            {"name": "alice", "commits": 142},
            {"name": "bob", "commits": 89},
            {"name": "carol", "commits": 34},
        ],
        "languages": {"TypeScript": 65, "Python": 30, "Shell": 5},
    }


@pytest.fixture
def github_answers():
    return {
        "priority": "Overview metrics",
        "metric_style": "Cards with trends",
        "list_actions": "Quick actions",
        "chart_preference": "Charts/graphs",
    }


@pytest.fixture
def github_analysis(github_data):
    return analyze_context(github_data)


# ============================================================================
# Domain Fixtures
# ============================================================================

@pytest.fixture
def domains_file(tmp_path):
    return tmp_path / "domains.json"


@pytest.fixture
def registry(domains_file):
    """Registry persisting to a temporary file."""
    registry = DomainRegistry(DomainStore(domains_file))
    registry.load()
    return registry


# ============================================================================
# External Generator Fixtures
# ============================================================================

class FakeGenerator:
    """External generator returning a canned response, or raising."""

    def __init__(self, response: GenerationResponse | None = None, error: Exception | None = None, delay: float = 0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate(self, data, analysis, answers=None):
        self.calls.append((data, analysis, answers))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_generator():
    """Factory for FakeGenerator instances."""
    return FakeGenerator


@pytest.fixture
def simple_schema():
    return node(
        ComponentKind.CONTAINER,
        children=[node(ComponentKind.METRIC, label="Stars", value="$data.stars")],
        cols=1,
        gap="md",
    )
