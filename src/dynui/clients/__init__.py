"""Clients for external services."""

from .cache import ResponseCache
from .gemini import ExternalGenerationError, GeminiClient
from .prompts import PromptBuilder

__all__ = ["ResponseCache", "ExternalGenerationError", "GeminiClient", "PromptBuilder"]
