"""Tests for prompt construction."""

import pytest

from dynui.analysis import SYSTEM_DOMAINS
from dynui.clients.prompts import PromptBuilder, describe_structure
from dynui.examples import EXAMPLES, get_example


@pytest.mark.unit
def test_describe_structure(github_data):
    assert describe_structure(github_data) == "2 metrics, 2 lists, 1 nested objects, 0 text fields"


@pytest.mark.unit
def test_schema_prompt_without_answers(github_data, github_analysis):
    prompt = PromptBuilder.schema_generation(github_data, github_analysis)

    assert "Keys: stars, forks, recent_commits, contributors, languages" in prompt
    assert "- Detected Context: github_repo" in prompt
    assert "- Domain: GitHub Repository" in prompt
    assert "Set needsQuestions to TRUE" in prompt
    assert "USER PREFERENCES" not in prompt


@pytest.mark.unit
def test_schema_prompt_with_answers(github_data, github_analysis, github_answers):
    prompt = PromptBuilder.schema_generation(github_data, github_analysis, github_answers)

    assert "- chart_preference: Charts/graphs" in prompt
    assert "RULES FOR CHARTS" in prompt
    assert "Set needsQuestions to FALSE and provide the schema" in prompt


@pytest.mark.unit
def test_schema_prompt_without_charts(github_data, github_analysis):
    prompt = PromptBuilder.schema_generation(github_data, github_analysis, {"chart_preference": "Detailed tables"})

    assert "DO NOT create a Chart component" in prompt


@pytest.mark.unit
def test_domain_prompt_lists_known_domains():
    prompt = PromptBuilder.domain_suggestion({"temp_c": 21}, SYSTEM_DOMAINS)

    assert '"id": "github_repo"' in prompt
    assert "Keys: temp_c" in prompt
    assert "needsNewDomain" in prompt


@pytest.mark.unit
def test_bundled_examples_generate():
    assert set(EXAMPLES) == {"github", "ecommerce", "analytics", "project", "iot"}
    assert get_example("github").name == "GitHub Repository"
    assert get_example("nope") is None
