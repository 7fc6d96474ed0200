"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..agents.translator import CommandTranslator, TextGenerator
from ..clients.gemini import GeminiClient
from ..clients.shows import ShowsClient
from ..handlers.data import ShowDataService
from ..handlers.design import DesignService
from ..services.store import DesignStore, InMemoryDesignStore, JsonFileDesignStore
from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger(__name__)


class CoreModule(Module):
    """Core dependencies."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: DesignStore | None = None,
        generator: TextGenerator | None = None,
        shows_client: ShowsClient | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.generator = generator
        self.shows_client = shows_client

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_store(self, settings: Settings) -> DesignStore:
        """JSON file store when a path is configured, in-memory otherwise."""
        if self.store is not None:
            return self.store
        if settings.store_path:
            return JsonFileDesignStore(settings.store_path)
        logger.info("store_in_memory")
        return InMemoryDesignStore()

    @singleton
    @provider
    def provide_generator(self, settings: Settings) -> TextGenerator:
        """Provide the Gemini client unless a generator was supplied."""
        if self.generator is not None:
            return self.generator
        return GeminiClient.from_settings(settings)

    @singleton
    @provider
    def provide_translator(self, settings: Settings, generator: TextGenerator) -> CommandTranslator:
        return CommandTranslator(
            generator=generator,
            enable_cache=settings.enable_cache,
            cache_size=settings.cache_size,
            cache_ttl=settings.cache_ttl,
        )

    @singleton
    @provider
    def provide_design_service(
        self, settings: Settings, store: DesignStore, translator: CommandTranslator
    ) -> DesignService:
        """Provide design service with all dependencies."""
        return DesignService(
            store=store,
            translator=translator,
            history_cap=settings.history_cap,
            max_prompt_length=settings.max_prompt_length,
        )

    @singleton
    @provider
    def provide_shows_client(self, settings: Settings) -> ShowsClient:
        if self.shows_client is not None:
            return self.shows_client
        return ShowsClient.from_settings(settings)

    @singleton
    @provider
    def provide_data_service(self, client: ShowsClient) -> ShowDataService:
        return ShowDataService(client)


def create_container(
    settings: Settings | None = None,
    store: DesignStore | None = None,
    generator: TextGenerator | None = None,
    shows_client: ShowsClient | None = None,
) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings, store, generator, shows_client)])
