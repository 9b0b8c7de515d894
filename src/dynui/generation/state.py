"""
Versioned UI state.
A generated schema plus an append-only history of the changes applied to it.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field

from dynui.analysis import InputContext
from dynui.components import ComponentSchema
from dynui.core.hash import context_hash
from dynui.core.logging_config import get_logger
from dynui.core.models import CamelModel

logger = get_logger(__name__)

INITIAL_VERSION = "1.0.0"

Operation = Literal["add", "remove", "update"]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EvolutionDiff(CamelModel):
    """One requested change; `path` is recorded for audit only."""

    operation: Operation
    path: str
    value: ComponentSchema | None = None


class HistoryEntry(CamelModel):
    version: str
    diff: EvolutionDiff
    timestamp: str = Field(default_factory=_timestamp)


class UIState(CamelModel):
    """A schema with its version, origin digest and change history."""

    version: str = INITIAL_VERSION
    context_hash: str
    ui_schema: ComponentSchema = Field(..., alias="schema")
    created_at: str = Field(default_factory=_timestamp)
    history: list[HistoryEntry] = Field(default_factory=list)


def increment_version(version: str) -> str:
    """
    Bump the patch component of a `major.minor.patch` version.

    Raises:
        ValueError: If the version does not have three integer components
    """
    parts = version.split(".")
    if len(parts) != 3:
        raise ValueError(f"Invalid version: {version}")
    major, minor, patch = (int(p) for p in parts)
    return f"{major}.{minor}.{patch + 1}"


def create_ui_state(raw: Mapping[str, Any] | InputContext, schema: ComponentSchema) -> UIState:
    """Start a state at version 1.0.0, tagged with a digest of the input."""
    payload = raw.to_wire() if isinstance(raw, InputContext) else raw
    return UIState(context_hash=context_hash(payload), ui_schema=schema)


def evolve_ui(
    state: UIState,
    operation: Operation,
    path: str,
    value: ComponentSchema | None = None,
) -> UIState:
    """
    Record a change and bump the patch version.

    Only root-level append is applied: an `add` with a value is appended to
    the root's children whatever `path` says. Other operations are recorded
    but leave the schema untouched. The state is modified in place and
    returned.
    """
    new_version = increment_version(state.version)

    state.history.append(
        HistoryEntry(
            version=state.version,
            diff=EvolutionDiff(operation=operation, path=path, value=value),
        )
    )

    if operation == "add" and value is not None:
        if state.ui_schema.children is None:
            state.ui_schema.children = []
        state.ui_schema.children.append(value)

    state.version = new_version
    logger.debug("ui_evolved", operation=operation, path=path, version=new_version)
    return state


__all__ = [
    "INITIAL_VERSION",
    "EvolutionDiff",
    "HistoryEntry",
    "UIState",
    "increment_version",
    "create_ui_state",
    "evolve_ui",
]
