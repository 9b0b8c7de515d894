"""Generation request/response models."""

from typing import Any, Literal, Protocol, runtime_checkable

from pydantic import Field

from dynui.analysis import ContextAnalysis, Question
from dynui.components import ComponentSchema
from dynui.core.models import CamelModel


class GenerationResponse(CamelModel):
    """
    What an external schema generator returns.

    Either questions to ask first (`needs_questions=True`) or a schema.
    """

    needs_questions: bool = False
    questions: list[Question] = Field(default_factory=list)
    ui_schema: ComponentSchema | None = Field(default=None, alias="schema")
    reasoning: str | None = None


class GenerationResult(GenerationResponse):
    """Orchestrator output: a generator response plus where it came from."""

    source: Literal["external", "rules"] = "rules"


@runtime_checkable
class ExternalSchemaGenerator(Protocol):
    """A schema producer outside this process (for example a hosted model)."""

    async def generate(
        self,
        data: dict[str, Any],
        analysis: ContextAnalysis,
        answers: dict[str, str] | None = None,
    ) -> GenerationResponse: ...


__all__ = ["GenerationResponse", "GenerationResult", "ExternalSchemaGenerator"]
