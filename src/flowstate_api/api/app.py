"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from flowstate import (
    CompletionClient,
    ContentFilter,
    PlaylistAssembler,
    PlaylistGenerator,
    SuggestionGenerator,
    VideoResolver,
    create_http_client,
)
from flowstate.providers import create_providers
from flowstate.services.retry import RetryPolicy
from rich.console import Console
from rich.logging import RichHandler
from sqlalchemy import Engine

from flowstate_api.api.container import Services
from flowstate_api.api.exceptions import register_exception_handlers
from flowstate_api.api.routes import ai, health, playlists, search
from flowstate_api.db import PlaylistRepository, create_db_engine, init_db
from flowstate_api.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Configure logging with Rich handler for all loggers including uvicorn."""
    console = Console(force_terminal=True)

    handler = RichHandler(
        console=console, rich_tracebacks=True, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    # Configure root logger
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.log_level)

    # Configure uvicorn loggers to use Rich
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    # httpx logs full request URLs, which carry API keys
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_services(settings: Settings, engine: Engine) -> Services:
    """Create all application services with proper dependency wiring.

    Args:
        settings: Application settings.
        engine: Database engine for the playlist repository.

    Returns:
        Services container with all application services.
    """
    completion_config = settings.completion_config()
    completion = CompletionClient(completion_config)
    retry = RetryPolicy()

    # One HTTP client shared by every search tier
    http = create_http_client()
    resolver = VideoResolver(create_providers(settings.resolver_config(), http))

    suggestions = SuggestionGenerator(completion, completion_config, retry)
    content_filter = ContentFilter(completion, completion_config, retry)
    repository = PlaylistRepository(engine, settings.storage_namespace)

    generator = PlaylistGenerator(
        suggestions,
        resolver,
        content_filter,
        PlaylistAssembler(repository),
        settings.generator_config(),
        closers=(completion.aclose, http.aclose),
    )

    return Services(
        suggestions=suggestions,
        resolver=resolver,
        content_filter=content_filter,
        generator=generator,
        repository=repository,
    )


def create_api_router() -> APIRouter:
    """Create the API router with all routes under /api prefix."""
    api_router = APIRouter(prefix="/api")
    api_router.include_router(health.router)
    api_router.include_router(ai.router)
    api_router.include_router(search.router)
    api_router.include_router(playlists.router)
    return api_router


def create_app(
    settings: Settings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """Create and configure the main FastAPI application.

    Args:
        settings: Optional settings. Loaded from the environment if not provided.
        services: Optional prebuilt services container. Built from settings
            at startup if not provided.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info("Starting application...")
        engine: Engine | None = None

        if services is None:
            engine = create_db_engine(settings.db_path, echo=settings.debug)
            init_db(engine)
            logger.info("Database ready at %s", settings.db_path)
            app.state.services = create_services(settings, engine)
        else:
            app.state.services = services
        logger.info("Services initialized")

        yield

        await app.state.services.aclose()
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="flowstate",
        description="Prompt-to-playlist generation API",
        version=version("flowstate"),
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Register exception handlers
    register_exception_handlers(app)

    # CORS middleware (type ignore needed due to Starlette typing limitations)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes under /api prefix
    app.include_router(create_api_router())

    return app
