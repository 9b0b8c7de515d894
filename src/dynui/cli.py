"""Command line front end for the dashboard builder."""

import asyncio
from pathlib import Path
from typing import Annotated, Any, NoReturn, Optional

import typer
from pydantic import ValidationError

from dynui.analysis import DomainConfig, DomainRegistry, analyze_context, fallback_domain_suggestion
from dynui.clients import GeminiClient
from dynui.components import validate_schema
from dynui.core import (
    GenerationRequest,
    MalformedInputError,
    Settings,
    configure_logging,
    create_container,
    get_settings,
    parse_input,
    safe_json_dumps,
)
from dynui.examples import EXAMPLES
from dynui.generation import SchemaOrchestrator, create_ui_state, generate_ui
from dynui.rendering import TreeRenderer, render_tree

app = typer.Typer(help="Build dashboards from JSON data")
domains_app = typer.Typer(help="Manage domain configurations")

app.add_typer(domains_app, name="domains")


@app.callback()
def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)


def _echo_json(obj: Any) -> None:
    typer.echo(safe_json_dumps(obj, indent=2))


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _read_json(path: Path, settings: Settings) -> dict[str, Any]:
    if not path.exists():
        _fail(f"File not found: {path}")

    try:
        return parse_input(
            path.read_text(encoding="utf-8"),
            max_size=settings.max_input_size,
            max_depth=settings.max_json_depth,
        )
    except MalformedInputError as e:
        _fail(f"Malformed input in {path}: {e}")


def _registry(settings: Settings) -> DomainRegistry:
    return create_container(settings).get(DomainRegistry)


@app.command("analyze")
def analyze(
    file_path: Annotated[Path, typer.Argument(help="JSON data file")],
):
    """Shows the data types, entities, context and questions for a data file."""
    settings = get_settings()
    data = _read_json(file_path, settings)
    analysis = analyze_context(data, registry=_registry(settings))
    _echo_json(analysis.to_wire())


@app.command("generate")
def generate(
    file_path: Annotated[Path, typer.Argument(help="JSON data file")],
    answer: Annotated[
        Optional[list[str]], typer.Option("--answer", "-a", help="Answer as question_id=option")
    ] = None,
    ai: Annotated[bool, typer.Option("--ai", help="Try the external generator first")] = False,
    state: Annotated[bool, typer.Option("--state", help="Wrap the schema in a versioned UI state")] = False,
):
    """Generates a dashboard schema for a data file."""
    settings = get_settings()
    data = _read_json(file_path, settings)

    try:
        answers = GenerationRequest.from_pairs(answer or []).answers
    except (ValueError, ValidationError) as e:
        _fail(f"Invalid answers: {e}")

    container = create_container(settings)
    analysis = analyze_context(data, registry=container.get(DomainRegistry))

    if ai:
        orchestrator = container.get(SchemaOrchestrator)
        try:
            result = asyncio.run(orchestrator.generate(data, analysis, answers))
        finally:
            if isinstance(orchestrator.external, GeminiClient):
                orchestrator.external.close()
        if result.needs_questions:
            _echo_json(result.to_wire())
            return
        schema = result.ui_schema
        typer.echo(f"Source: {result.source} ({result.reasoning})", err=True)
    else:
        schema = generate_ui(data, analysis, answers)

    if state:
        _echo_json(create_ui_state(data, schema).to_wire())
    else:
        _echo_json(schema.model_dump(mode="json"))


@app.command("render")
def render(
    file_path: Annotated[Path, typer.Argument(help="JSON data file")],
    schema_path: Annotated[Path, typer.Argument(help="Schema JSON file")],
):
    """Renders a schema against data into a resolved component tree."""
    settings = get_settings()
    data = _read_json(file_path, settings)
    raw_schema = _read_json(schema_path, settings)

    # A saved UI state carries its schema under "schema"
    if "component" not in raw_schema and isinstance(raw_schema.get("schema"), dict):
        raw_schema = raw_schema["schema"]

    _echo_json(render_tree(raw_schema, data, TreeRenderer()))


@app.command("validate")
def validate(
    schema_path: Annotated[Path, typer.Argument(help="Schema JSON file")],
):
    """Checks a schema against the component contracts."""
    settings = get_settings()
    result = validate_schema(_read_json(schema_path, settings))

    if result.valid:
        typer.echo(f"Schema {schema_path} is valid.")
        return

    for error in result.errors:
        typer.echo(f"- {error}", err=True)
    raise typer.Exit(code=1)


@app.command("example")
def example(
    name: Annotated[str, typer.Argument(help="Example id")],
):
    """Prints a bundled sample dataset."""
    found = EXAMPLES.get(name)
    if found is None:
        _fail(f"Unknown example '{name}'. Available: {', '.join(EXAMPLES)}")
    _echo_json(found.data)


@domains_app.command("list")
def domains_list():
    """Lists system and saved domains."""
    registry = _registry(get_settings())
    for domain in registry.all():
        typer.echo(f"[{domain.created_by}] {domain.id}: {domain.name}")


@domains_app.command("add")
def domains_add(
    file_path: Annotated[Path, typer.Argument(help="Domain configuration JSON file")],
):
    """Saves a domain configuration."""
    settings = get_settings()
    raw = _read_json(file_path, settings)

    try:
        domain = DomainConfig.model_validate({**raw, "createdBy": "ai"})
    except ValidationError as e:
        _fail(f"Invalid domain configuration: {e}")

    if not _registry(settings).save(domain):
        _fail(f"Domain '{domain.id}' was not saved (duplicate id or missing keywords)")
    typer.echo(f"Domain saved: {domain.id}")


@domains_app.command("suggest")
def domains_suggest(
    file_path: Annotated[Path, typer.Argument(help="JSON data file")],
):
    """Matches data to a domain, or proposes a new one."""
    settings = get_settings()
    data = _read_json(file_path, settings)
    registry = _registry(settings)

    if settings.ai_enabled:
        client = GeminiClient.from_settings(settings)
        try:
            suggestion = client.suggest_domain(data, registry)
        finally:
            client.close()
    else:
        suggestion = fallback_domain_suggestion(data, registry)

    _echo_json(suggestion.to_wire())


if __name__ == "__main__":
    app()
