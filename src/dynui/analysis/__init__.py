"""Context analysis and domain matching."""

from .models import (
    Layout,
    DataType,
    Question,
    LayoutHints,
    DomainConfig,
    InputContext,
    ContextAnalysis,
)
from .domains import (
    SYSTEM_DOMAINS,
    match_domain,
    DomainStore,
    DomainRegistry,
    DomainSuggestion,
    fallback_domain_suggestion,
)
from .analyzer import (
    detect_data_types,
    detect_context_type,
    generate_questions,
    unwrap_input,
    analyze_context,
)

__all__ = [
    "Layout",
    "DataType",
    "Question",
    "LayoutHints",
    "DomainConfig",
    "InputContext",
    "ContextAnalysis",
    "SYSTEM_DOMAINS",
    "match_domain",
    "DomainStore",
    "DomainRegistry",
    "DomainSuggestion",
    "fallback_domain_suggestion",
    "detect_data_types",
    "detect_context_type",
    "generate_questions",
    "unwrap_input",
    "analyze_context",
]
