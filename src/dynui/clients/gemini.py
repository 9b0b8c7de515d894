"""Gemini REST client - external schema generator and domain suggester."""

from collections.abc import Mapping
from typing import Any

import httpx
import pybreaker
from pydantic import ValidationError

from dynui.analysis import (
    ContextAnalysis,
    DomainConfig,
    DomainRegistry,
    DomainSuggestion,
    fallback_domain_suggestion,
)
from dynui.components import ComponentKind
from dynui.core.config import Settings
from dynui.core.json import JSONParseError, extract_json
from dynui.core.logging_config import get_logger
from dynui.generation.models import GenerationResponse
from .cache import ResponseCache
from .prompts import PLAIN_JSON_SUFFIX, PromptBuilder

logger = get_logger(__name__)

TOP_K = 40
TOP_P = 0.95
DOMAIN_MAX_TOKENS = 2048

# Gemini's structured output takes an OpenAPI-style subset, without recursion;
# children are accepted as free-form objects and validated on our side.
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "needsQuestions": {"type": "BOOLEAN"},
        "reasoning": {"type": "STRING"},
        "questions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "STRING"},
                    "text": {"type": "STRING"},
                    "options": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "impact": {"type": "STRING"},
                },
                "required": ["id", "text", "options", "impact"],
            },
        },
        "schema": {
            "type": "OBJECT",
            "properties": {
                "component": {"type": "STRING", "enum": [k.value for k in ComponentKind]},
                "props": {"type": "OBJECT", "nullable": True},
                "children": {"type": "ARRAY", "items": {"type": "OBJECT", "nullable": True}},
            },
            "required": ["component"],
        },
    },
    "required": ["needsQuestions", "reasoning"],
}


class ExternalGenerationError(Exception):
    """The hosted model could not produce a usable response."""

    pass


class GeminiClient:
    """
    Client for the Gemini `generateContent` endpoint with circuit breaker protection.

    Implements the external generator contract (`generate`) used by the
    orchestrator, and `suggest_domain` for classifying unfamiliar inputs.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com",
        temperature: float = 0.3,
        max_tokens: int = 8192,
        timeout: float = 30.0,
        cache: ResponseCache | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Gemini API key is required")

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.cache = cache
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout)

        class BreakerListener(pybreaker.CircuitBreakerListener):
            """Log circuit breaker state changes."""

            def state_change(self, cb, old_state, new_state):
                logger.warning(
                    "breaker_state_change",
                    breaker=cb.name,
                    from_state=str(old_state),
                    to_state=str(new_state),
                )

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=5,
            reset_timeout=30,
            name="gemini-http",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", model=model, cache=cache is not None)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        cache = ResponseCache(settings.cache_size, settings.cache_ttl) if settings.enable_cache else None
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            temperature=settings.gemini_temperature,
            max_tokens=settings.gemini_max_tokens,
            timeout=settings.generation_timeout,
            cache=cache,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def _request_body(self, prompt: str, max_tokens: int, structured: bool) -> dict[str, Any]:
        config: dict[str, Any] = {
            "temperature": self.temperature,
            "topK": TOP_K,
            "topP": TOP_P,
            "maxOutputTokens": max_tokens,
        }
        if structured:
            config["responseMimeType"] = "application/json"
            config["responseSchema"] = RESPONSE_SCHEMA

        return {"contents": [{"parts": [{"text": prompt}]}], "generationConfig": config}

    def complete(self, prompt: str, max_tokens: int | None = None, structured: bool = False) -> str:
        """
        Send one prompt and return the model's text.

        Raises:
            ExternalGenerationError: On HTTP errors, an open breaker, or an empty reply
        """
        body = self._request_body(prompt, max_tokens or self.max_tokens, structured)

        def _make_request() -> httpx.Response:
            response = self._client.post(self.endpoint, params={"key": self.api_key}, json=body)
            response.raise_for_status()
            return response

        try:
            response = self._breaker.call(_make_request)
        except (pybreaker.CircuitBreakerError, httpx.HTTPError) as e:
            raise self._request_error(e) from e

        return self._reply_text(response)

    async def complete_async(
        self,
        client: httpx.AsyncClient,
        prompt: str,
        max_tokens: int | None = None,
        structured: bool = False,
    ) -> str:
        """Async `complete` on a caller-owned client. Cancelling it aborts the request."""
        body = self._request_body(prompt, max_tokens or self.max_tokens, structured)

        try:
            with self._breaker.calling():
                response = await client.post(self.endpoint, params={"key": self.api_key}, json=body)
                response.raise_for_status()
        except (pybreaker.CircuitBreakerError, httpx.HTTPError) as e:
            raise self._request_error(e) from e

        return self._reply_text(response)

    @staticmethod
    def _request_error(error: Exception) -> ExternalGenerationError:
        if isinstance(error, pybreaker.CircuitBreakerError):
            return ExternalGenerationError("Gemini circuit breaker is open")
        if isinstance(error, httpx.HTTPStatusError):
            logger.error("gemini_http_error", status=error.response.status_code, body=error.response.text[:500])
            return ExternalGenerationError(f"Gemini API error: {error.response.status_code}")
        return ExternalGenerationError(f"Gemini request failed: {error}")

    @staticmethod
    def _reply_text(response: httpx.Response) -> str:
        try:
            payload = response.json()
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExternalGenerationError("No response from Gemini API") from e

        if not text:
            raise ExternalGenerationError("No response from Gemini API")
        return text

    async def generate(
        self,
        data: dict[str, Any],
        analysis: ContextAnalysis,
        answers: dict[str, str] | None = None,
    ) -> GenerationResponse:
        """
        Ask the model for questions or a schema.

        Structured output is tried first; if that request fails the prompt is
        re-sent once asking for plain JSON. Both attempts run on one async
        client, so a cancelled caller stops whichever request is in flight and
        nothing is cached.

        Raises:
            ExternalGenerationError: If no valid response can be obtained
        """
        key = ResponseCache.key(self.model, data, answers)
        if self.cache:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("cache_hit")
                return cached

        prompt = PromptBuilder.schema_generation(data, analysis, answers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                text = await self.complete_async(client, prompt, structured=True)
            except ExternalGenerationError as e:
                logger.warning("structured_output_failed", error=str(e))
                text = await self.complete_async(client, prompt + PLAIN_JSON_SUFFIX)

        response = self._parse_response(text)

        if self.cache:
            self.cache.set(key, response)
        return response

    @staticmethod
    def _parse_response(text: str) -> GenerationResponse:
        try:
            parsed = extract_json(text)
            response = GenerationResponse.model_validate(parsed)
        except (JSONParseError, ValidationError) as e:
            logger.error("gemini_parse_failed", error=str(e), content_preview=text[:500])
            raise ExternalGenerationError(f"Could not parse Gemini response: {e}") from e

        logger.info(
            "gemini_response",
            needs_questions=response.needs_questions,
            questions=len(response.questions),
            has_schema=response.ui_schema is not None,
        )
        return response

    def suggest_domain(self, data: Mapping[str, Any], registry: DomainRegistry) -> DomainSuggestion:
        """
        Classify data into a known domain or propose a new one.

        Local keyword matching is tried first. Any model failure falls back to
        `fallback_domain_suggestion`.
        """
        local = registry.match(data)
        if local is not None:
            return DomainSuggestion(
                needs_new_domain=False,
                matched_domain=local,
                reasoning="Matched existing domain using keyword analysis",
            )

        try:
            text = self.complete(PromptBuilder.domain_suggestion(data, registry.all()), DOMAIN_MAX_TOKENS)
            parsed = extract_json(text)
            return self._domain_from_reply(parsed, registry)
        except (ExternalGenerationError, JSONParseError, ValidationError) as e:
            logger.warning("domain_suggestion_failed", error=str(e))
            return fallback_domain_suggestion(data, registry)

    @staticmethod
    def _domain_from_reply(parsed: dict[str, Any], registry: DomainRegistry) -> DomainSuggestion:
        reasoning = parsed.get("reasoning") or ""

        new_domain = parsed.get("newDomain")
        if parsed.get("needsNewDomain") and isinstance(new_domain, dict):
            domain = DomainConfig.model_validate({**new_domain, "createdBy": "ai"})
            return DomainSuggestion(needs_new_domain=True, suggested_domain=domain, reasoning=reasoning)

        matched_id = parsed.get("matchedDomainId")
        if matched_id:
            matched = registry.get(matched_id)
            if matched is not None:
                return DomainSuggestion(needs_new_domain=False, matched_domain=matched, reasoning=reasoning)

        raise ExternalGenerationError("Invalid domain suggestion format")

    def close(self) -> None:
        self._client.close()


__all__ = ["ExternalGenerationError", "GeminiClient", "RESPONSE_SCHEMA"]
