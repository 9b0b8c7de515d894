"""Configuration tests."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dynui.analysis import DomainRegistry
from dynui.core import Settings, create_container, get_settings
from dynui.generation import SchemaOrchestrator


@pytest.mark.unit
def test_settings_defaults():
    """Test default settings load correctly."""
    settings = get_settings()

    assert settings.gemini_model == "gemini-2.0-flash"
    assert settings.generation_timeout == 30.0
    assert settings.enable_cache is True
    assert settings.ai_enabled is False


@pytest.mark.unit
def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DYNUI_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DYNUI_DOMAINS_FILE", str(tmp_path / "d.json"))
    monkeypatch.setenv("DYNUI_GEMINI_API_KEY", "secret")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.domains_file == tmp_path / "d.json"
    assert settings.ai_enabled


@pytest.mark.unit
def test_settings_cached():
    assert get_settings() is get_settings()


@pytest.mark.unit
def test_settings_validation():
    """Test settings validation."""
    assert Settings(gemini_temperature=0.5).gemini_temperature == 0.5

    with pytest.raises(ValidationError):
        Settings(gemini_temperature=3.0)

    with pytest.raises(ValidationError):
        Settings(generation_timeout=0)


@pytest.mark.unit
def test_container_without_key(tmp_path):
    settings = Settings(gemini_api_key="", domains_file=tmp_path / "domains.json")
    container = create_container(settings)

    assert container.get(Settings) is settings
    assert container.get(DomainRegistry) is container.get(DomainRegistry)

    orchestrator = container.get(SchemaOrchestrator)
    assert orchestrator.external is None
    assert orchestrator.timeout == 30.0


@pytest.mark.unit
def test_container_with_key(tmp_path):
    settings = Settings(gemini_api_key="secret", generation_timeout=5, domains_file=Path(tmp_path / "d.json"))

    orchestrator = create_container(settings).get(SchemaOrchestrator)

    assert orchestrator.external is not None
    assert orchestrator.external.cache is not None
    assert orchestrator.timeout == 5
    orchestrator.external.close()
