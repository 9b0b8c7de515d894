"""
Generation orchestrator.
Tries the external generator once and falls back to rule-based generation.
"""

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from returns.result import Failure, Result, Success

from dynui.analysis import ContextAnalysis, InputContext, Question, unwrap_input
from dynui.components import ComponentSchema, validate_schema
from dynui.core.logging_config import LogContext, get_logger
from .generator import SchemaGenerator
from .models import ExternalSchemaGenerator, GenerationResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class SchemaReady:
    schema: ComponentSchema
    reasoning: str | None = None


@dataclass(frozen=True)
class NeedsClarification:
    questions: list[Question]
    reasoning: str | None = None


ExternalOutcome = Result[SchemaReady | NeedsClarification, str]


class SchemaOrchestrator:
    """
    External-first schema generation.

    The external call is a single attempt bounded by `timeout`. Any failure,
    including a response with neither questions nor a schema, ends in the
    rule-based generator, so `generate` always yields questions or a schema.
    """

    def __init__(
        self,
        external: ExternalSchemaGenerator | None = None,
        timeout: float = 30.0,
        rules: SchemaGenerator | None = None,
    ) -> None:
        self.external = external
        self.timeout = timeout
        self.rules = rules or SchemaGenerator()

        logger.info("initialized", mode="external" if external else "rule-based")

    async def generate(
        self,
        raw: Mapping[str, Any] | InputContext,
        analysis: ContextAnalysis,
        answers: Mapping[str, str] | None = None,
    ) -> GenerationResult:
        with LogContext(detected_context=analysis.detected_context):
            return await self._generate(raw, analysis, answers)

    async def _generate(
        self,
        raw: Mapping[str, Any] | InputContext,
        analysis: ContextAnalysis,
        answers: Mapping[str, str] | None,
    ) -> GenerationResult:
        data, _ = unwrap_input(raw)
        answers = dict(answers or {})

        if self.external is None:
            return self._fallback(data, analysis, answers, "External generator not configured")

        outcome = await self._call_external(dict(data), analysis, answers)

        if isinstance(outcome, Failure):
            reason = outcome.failure()
            logger.warning("external_generation_failed", error=reason)
            return self._fallback(data, analysis, answers, reason)

        result = outcome.unwrap()
        if isinstance(result, NeedsClarification):
            logger.info("external_needs_questions", questions=len(result.questions))
            return GenerationResult(
                needs_questions=True,
                questions=result.questions,
                reasoning=result.reasoning,
                source="external",
            )

        validation = validate_schema(result.schema)
        if not validation.valid:
            logger.warning("schema_validation_warnings", errors=validation.errors, source="external")

        logger.info("external_schema_accepted", root=result.schema.component)
        return GenerationResult(ui_schema=result.schema, reasoning=result.reasoning, source="external")

    async def _call_external(
        self,
        data: dict[str, Any],
        analysis: ContextAnalysis,
        answers: dict[str, str],
    ) -> ExternalOutcome:
        try:
            response = await asyncio.wait_for(
                self.external.generate(data, analysis, answers or None),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return Failure(f"External generator timed out after {self.timeout}s")
        except Exception as e:
            return Failure(str(e) or type(e).__name__)

        if response is None:
            return Failure("External generator returned no response")
        if response.needs_questions and response.questions:
            return Success(NeedsClarification(response.questions, response.reasoning))
        if response.ui_schema is not None:
            return Success(SchemaReady(response.ui_schema, response.reasoning))
        if response.needs_questions:
            return Failure("Invalid response: neither questions nor schema provided")
        return Failure(response.reasoning or "External generator provided no schema")

    def _fallback(
        self,
        data: Mapping[str, Any],
        analysis: ContextAnalysis,
        answers: dict[str, str],
        reason: str,
    ) -> GenerationResult:
        schema = self.rules.generate(data, analysis, answers)
        return GenerationResult(
            ui_schema=schema,
            reasoning=f"Generated using rule-based fallback ({reason})",
            source="rules",
        )


__all__ = ["SchemaReady", "NeedsClarification", "ExternalOutcome", "SchemaOrchestrator"]
