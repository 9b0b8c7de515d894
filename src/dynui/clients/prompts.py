"""
Prompt Builder
Prompts for the hosted model: schema generation and domain suggestion.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from dynui.analysis import ContextAnalysis, DomainConfig
from dynui.components import describe_components
from dynui.core.json import safe_json_dumps
from dynui.core.values import JsonKind, json_kind

SAMPLE_LENGTH = 500

BINDING_RULES = """GENERAL RULES:
- Use data bindings like "$data.fieldName" for dynamic values
- Container component should be the root with cols and gap props
- Wrap content in Card components with titles
- For arrays, use List or Table components with "$data.arrayName" as items/rows
- Follow the component prop requirements strictly
- Create a well-structured, hierarchical layout
"""

NESTED_METRIC_RULES = """IMPORTANT RULES FOR METRICS:
- When you find a nested object where ALL values are numbers (like gymMetrics: {totalMembers: 3456, activeMembers: 2789}),
  create INDIVIDUAL Metric components for EACH number inside
- Use full dot notation paths: "$data.gymMetrics.totalMembers", "$data.gymMetrics.activeMembers", etc.
- Wrap metrics in a Card with a Container inside to display them in a grid
"""

CHART_RULES = """CHART PREFERENCE: User wants charts/graphs for nested data.

RULES FOR CHARTS:
- For nested objects with numeric values (like { TypeScript: 65, Python: 30 }),
  create Chart components with type "pie" or "bar"
- Point to the SPECIFIC nested path containing numbers, NOT the parent object
- Use "pie" for percentage/distribution data, "bar" for comparisons
"""

DECIDE_TASK = """TASK: Analyze the data complexity and decide:

1. If data is SIMPLE (1-3 metrics, 1-2 lists, clear structure):
   - Set needsQuestions to FALSE
   - Generate a complete UI schema directly
   - Use sensible defaults for layout

2. If data is COMPLEX (5+ entities, nested structures, ambiguous priorities):
   - Set needsQuestions to TRUE
   - Generate 2-4 relevant questions to clarify user preferences
   - Do NOT generate schema yet
"""

DOMAIN_OUTPUT_FORMAT = """OUTPUT FORMAT (JSON only, no markdown):
{
  "needsNewDomain": boolean,
  "matchedDomainId": "domain_id" (if match found),
  "reasoning": "brief explanation",
  "newDomain": {
    "id": "snake_case_id",
    "name": "Human Readable Name",
    "description": "Brief description",
    "keywords": ["key1", "key2", "key3"],
    "questions": [
      {"id": "question_id", "text": "Question text?", "options": ["Option 1", "Option 2", "Option 3"],
       "impact": "layout_weight|section_priority|component_selection|visualization_style"}
    ],
    "layoutHints": {"preferredLayout": "grid|single-column|tabs", "emphasize": "metrics|lists|timeline|balanced"}
  } (only if needsNewDomain is true)
}

IMPORTANT:
- Generate 2-4 specific questions relevant to this data domain
- Provide 3-4 options per question
- Keywords should be lowercase and match actual data keys"""

PLAIN_JSON_SUFFIX = "\n\nRespond with valid JSON only, no markdown code blocks."


def describe_structure(data: Mapping[str, Any]) -> str:
    """One-line census of the top-level values, e.g. `2 metrics, 1 lists, ...`."""
    counts = {JsonKind.NUMBER: 0, JsonKind.ARRAY: 0, JsonKind.OBJECT: 0, JsonKind.STRING: 0}
    for value in data.values():
        kind = json_kind(value)
        if kind in counts:
            counts[kind] += 1

    return (
        f"{counts[JsonKind.NUMBER]} metrics, {counts[JsonKind.ARRAY]} lists, "
        f"{counts[JsonKind.OBJECT]} nested objects, {counts[JsonKind.STRING]} text fields"
    )


class PromptBuilder:
    """Builds prompts for the external generator."""

    @staticmethod
    def schema_generation(
        data: Mapping[str, Any],
        analysis: ContextAnalysis,
        answers: Mapping[str, str] | None = None,
    ) -> str:
        """
        Prompt asking for either clarifying questions or a complete schema.

        With answers the model is told to skip questions; without them it
        decides based on how complex the data looks.
        """
        sample = safe_json_dumps(dict(data), indent=2)[:SAMPLE_LENGTH]

        parts = [
            "You are an expert UI generator. Generate a dashboard UI schema from the provided data.",
            "AVAILABLE COMPONENTS (you must use ONLY these 12 components):\n"
            + safe_json_dumps(describe_components(), indent=2),
            "DATA TO VISUALIZE:\n"
            f"Keys: {', '.join(data)}\n"
            f"Structure: {describe_structure(data)}\n"
            f"Sample: {sample}...",
            PromptBuilder._analysis_section(analysis),
        ]

        if answers:
            preferences = "\n".join(f"- {key}: {value}" for key, value in answers.items())
            parts.append(f"USER PREFERENCES:\n{preferences}")
            parts.append(
                "TASK: Generate the complete UI schema based on the data and user preferences.\n"
                "Set needsQuestions to FALSE and provide the schema."
            )
            if answers.get("chart_preference") == "Charts/graphs":
                parts.append(CHART_RULES)
            else:
                parts.append(
                    NESTED_METRIC_RULES
                    + "- DO NOT create a Chart component for objects containing only numbers\n"
                )
        else:
            parts.append(DECIDE_TASK)
            parts.append(NESTED_METRIC_RULES)

        parts.append(BINDING_RULES)
        return "\n\n".join(parts)

    @staticmethod
    def domain_suggestion(data: Mapping[str, Any], domains: Sequence[DomainConfig]) -> str:
        """Prompt asking whether the data fits a known domain or needs a new one."""
        known = [{"id": d.id, "name": d.name, "keywords": d.keywords} for d in domains]

        return "\n\n".join(
            [
                "You are an expert at analyzing data structures and categorizing them into domains.",
                "EXISTING DOMAINS:\n" + safe_json_dumps(known, indent=2),
                "JSON DATA TO ANALYZE:\n"
                f"Keys: {', '.join(data)}\n"
                f"Structure: {describe_structure(data)}",
                "TASK:\n"
                "1. Determine if this JSON data fits into one of the existing domains (at least 30% keyword match)\n"
                "2. If yes, return the matching domain ID and explain why\n"
                "3. If no, create a NEW domain configuration",
                DOMAIN_OUTPUT_FORMAT,
            ]
        )

    @staticmethod
    def _analysis_section(analysis: ContextAnalysis) -> str:
        lines = [
            "CONTEXT ANALYSIS:",
            f"- Detected Context: {analysis.detected_context}",
            f"- Data Types: {', '.join(analysis.data_types)}",
            f"- Entities: {', '.join(analysis.entities)}",
            f"- Suggested Layout: {analysis.suggested_layout}",
        ]
        if analysis.matched_domain is not None:
            lines.append(f"- Domain: {analysis.matched_domain.name}")
        return "\n".join(lines)


__all__ = ["PLAIN_JSON_SUFFIX", "describe_structure", "PromptBuilder"]
