"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    MalformedInputError,
    InputProblem,
    GenerationRequest,
    parse_input,
    validate_input,
    validate_json_size,
    validate_json_depth,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import decode_object, extract_json, safe_json_dumps, JSONParseError
from .hash import rolling_hash32, to_base36, context_hash, fingerprint
from .cache import LRUCache, Stats
from .values import JsonKind, json_kind
from .models import CamelModel


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "MalformedInputError",
    "InputProblem",
    "GenerationRequest",
    "parse_input",
    "validate_input",
    "validate_json_size",
    "validate_json_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "decode_object",
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    # Hashing
    "rolling_hash32",
    "to_base36",
    "context_hash",
    "fingerprint",
    # Caching
    "LRUCache",
    "Stats",
    # Values
    "JsonKind",
    "json_kind",
    "CamelModel",
    # DI
    "create_container",
]
