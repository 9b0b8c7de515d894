"""Schema generation: rule-based generator, UI state, external-first orchestration."""

from .generator import GridLayout, Preferences, SchemaGenerator, generate_ui
from .state import (
    EvolutionDiff,
    HistoryEntry,
    UIState,
    increment_version,
    create_ui_state,
    evolve_ui,
)
from .models import GenerationResponse, GenerationResult, ExternalSchemaGenerator
from .orchestrator import SchemaReady, NeedsClarification, SchemaOrchestrator

__all__ = [
    "GridLayout",
    "Preferences",
    "SchemaGenerator",
    "generate_ui",
    "EvolutionDiff",
    "HistoryEntry",
    "UIState",
    "increment_version",
    "create_ui_state",
    "evolve_ui",
    "GenerationResponse",
    "GenerationResult",
    "ExternalSchemaGenerator",
    "SchemaReady",
    "NeedsClarification",
    "SchemaOrchestrator",
]
