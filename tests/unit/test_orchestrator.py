"""Tests for external-first schema orchestration."""

import pytest
import structlog

from dynui.analysis import Question
from dynui.components import ComponentKind, node
from dynui.generation import GenerationResponse, SchemaOrchestrator, generate_ui


@pytest.mark.unit
@pytest.mark.asyncio
async def test_without_external_uses_rules(github_data, github_analysis, github_answers):
    result = await SchemaOrchestrator().generate(github_data, github_analysis, github_answers)

    assert result.source == "rules"
    assert not result.needs_questions
    assert result.ui_schema == generate_ui(github_data, github_analysis, github_answers)
    assert result.reasoning == "Generated using rule-based fallback (External generator not configured)"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_external_questions_surface(fake_generator, github_data, github_analysis):
    questions = [Question(id="audience", text="Who reads this?", options=["Me", "Team"])]
    external = fake_generator(GenerationResponse(needs_questions=True, questions=questions, reasoning="ambiguous"))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)

    assert result.needs_questions
    assert result.questions == questions
    assert result.ui_schema is None
    assert result.source == "external"
    assert result.reasoning == "ambiguous"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_external_schema_returned(fake_generator, github_data, github_analysis, github_answers):
    schema = node(ComponentKind.CONTAINER, children=[node(ComponentKind.BADGE, label="hi")])
    external = fake_generator(GenerationResponse(ui_schema=schema, reasoning="custom"))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis, github_answers)

    assert result.source == "external"
    assert result.ui_schema == schema
    assert external.calls == [(github_data, github_analysis, github_answers)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_invalid_external_schema_still_returned(fake_generator, github_data, github_analysis):
    schema = node(ComponentKind.CONTAINER, children=[node(ComponentKind.METRIC)])
    external = fake_generator(GenerationResponse(ui_schema=schema))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)

    assert result.source == "external"
    assert result.ui_schema == schema


@pytest.mark.unit
@pytest.mark.asyncio
async def test_external_error_falls_back(fake_generator, github_data, github_analysis):
    external = fake_generator(error=RuntimeError("quota exceeded"))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)

    assert result.source == "rules"
    assert result.ui_schema is not None
    assert result.reasoning == "Generated using rule-based fallback (quota exceeded)"
    assert len(external.calls) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_external_timeout_falls_back(fake_generator, github_data, github_analysis):
    external = fake_generator(GenerationResponse(ui_schema=node(ComponentKind.CONTAINER)), delay=1.0)

    result = await SchemaOrchestrator(external, timeout=0.01).generate(github_data, github_analysis)

    assert result.source == "rules"
    assert "timed out" in result.reasoning


@pytest.mark.unit
@pytest.mark.asyncio
async def test_questions_flag_without_questions_falls_back(fake_generator, github_data, github_analysis):
    external = fake_generator(GenerationResponse(needs_questions=True))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)

    assert result.source == "rules"
    assert not result.needs_questions
    assert "neither questions nor schema" in result.reasoning


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_schema_falls_back(fake_generator, github_data, github_analysis):
    external = fake_generator(GenerationResponse(reasoning="could not decide"))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)

    assert result.source == "rules"
    assert result.reasoning == "Generated using rule-based fallback (could not decide)"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_wrapped_input_is_unwrapped(fake_generator, github_data, github_analysis):
    external = fake_generator(GenerationResponse(ui_schema=node(ComponentKind.CONTAINER)))

    await SchemaOrchestrator(external).generate({"type": "repo", "data": github_data}, github_analysis)

    assert external.calls[0][0] == github_data
    # no answers are passed as None
    assert external.calls[0][2] is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_result_wire_form(fake_generator, github_data, github_analysis):
    external = fake_generator(GenerationResponse(ui_schema=node(ComponentKind.CONTAINER)))

    result = await SchemaOrchestrator(external).generate(github_data, github_analysis)
    wire = result.to_wire()

    assert wire["needsQuestions"] is False
    assert wire["schema"] == {"component": "Container", "props": {}}
    assert wire["source"] == "external"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_detected_context_bound_to_logs(github_data, github_analysis):
    seen = []

    class RecordingGenerator:
        async def generate(self, data, analysis, answers=None):
            seen.append(structlog.contextvars.get_contextvars())
            return GenerationResponse(ui_schema=node(ComponentKind.CONTAINER))

    await SchemaOrchestrator(RecordingGenerator()).generate(github_data, github_analysis)

    assert seen == [{"detected_context": "github_repo"}]
    assert "detected_context" not in structlog.contextvars.get_contextvars()
