"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from dynui.analysis import DomainRegistry, DomainStore
from dynui.clients import GeminiClient
from dynui.generation import SchemaOrchestrator
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_domain_registry(self, settings: Settings) -> DomainRegistry:
        """Registry with the persisted AI domains already loaded."""
        registry = DomainRegistry(DomainStore(settings.domains_file))
        registry.load()
        return registry

    @singleton
    @provider
    def provide_orchestrator(self, settings: Settings) -> SchemaOrchestrator:
        """Orchestrator backed by Gemini when an API key is configured."""
        external = GeminiClient.from_settings(settings) if settings.ai_enabled else None
        return SchemaOrchestrator(external=external, timeout=settings.generation_timeout)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings or get_settings())])
