"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import importlib
import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from seedsift import __version__
from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.exceptions import AdapterError, ConfigurationError
from seedsift.adapters.base.remote import RemoteJSONAdapter
from seedsift.api.deps import set_engine
from seedsift.api.router import router as api_router
from seedsift.config.settings import Settings
from seedsift.core.engine import SeedSiftEngine
from seedsift.errors import MethodNotAllowedError, SeedSiftError
from seedsift.history.store import HistoryStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads the YAML file named by
            ``SEEDSIFT_CONFIG`` (or ``./seedsift-config.yaml``) when present,
            otherwise the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        yaml_path = Path(os.environ.get("SEEDSIFT_CONFIG", "seedsift-config.yaml"))
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting SeedSift v%s", __version__)

        # A corrupt history file is fatal: StorageError propagates
        history = HistoryStore(
            settings.history.file,
            max_entries=settings.history.max_entries,
            max_results_per_entry=settings.history.max_results_per_entry,
        )
        engine = SeedSiftEngine(settings, history=history)

        # Auto-register adapters from configuration
        _register_adapters(engine, settings)
        await engine.initialize()

        registry = engine.adapter_registry
        fallback_id = settings.search.fallback_adapter
        if fallback_id and registry.get(fallback_id) is None:
            logger.warning("Fallback adapter '%s' is not available, running without fallback", fallback_id)
            fallback_id = ""
        try:
            registry.configure(settings.search.default_adapter, fallback_id)
        except ConfigurationError as e:
            logger.error("Adapter configuration problem, running degraded: %s", e)

        set_engine(engine)
        app.state.settings = settings
        app.state.engine = engine

        logger.info("SeedSift is ready to serve requests on port %d", settings.server.port)
        yield

        # Shutdown
        logger.info("Shutting down SeedSift...")
        await engine.shutdown()
        set_engine(None)
        logger.info("SeedSift shutdown complete")

    app = FastAPI(
        title="SeedSift",
        description=(
            "Magnet search aggregator — queries pluggable torrent search backends "
            "with automatic fallback and keeps a bounded search history."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def cors(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Answer preflight requests and tag every response with CORS headers."""
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    _register_error_handlers(app)

    # Register API routers
    app.include_router(api_router, prefix="/api")

    return app


# ── Error handling ──


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=CORS_HEADERS)


async def _seedsift_error_handler(request: Request, exc: SeedSiftError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return _error(405, MethodNotAllowedError(request.method).message)
    return _error(exc.status_code, str(exc.detail))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "Invalid request parameters")


async def _internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, "Internal server error")


def _register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SeedSiftError, _seedsift_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _internal_error_handler)


# ── Adapter auto-registration ──

# Maps adapter ids to (module_path, class_name) for lazy import
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "apibay": ("seedsift.adapters.apibay.adapter", "ApiBayAdapter"),
    "nyaa": ("seedsift.adapters.nyaa.adapter", "NyaaAdapter"),
    "sukebei": ("seedsift.adapters.sukebei.adapter", "SukebeiAdapter"),
    "sample": ("seedsift.adapters.sample.adapter", "SampleAdapter"),
}


def _register_adapters(engine: SeedSiftEngine, settings: Settings) -> None:
    """Construct and register adapters declared in settings.

    For each adapter entry in ``settings.search.adapters`` that is enabled,
    the corresponding adapter class is imported, constructed and registered.
    An adapter that cannot be constructed (e.g. missing sample data) is
    logged and skipped.
    """
    for adapter_id, adapter_cfg in settings.search.adapters.items():
        if not adapter_cfg.enabled:
            logger.info("Adapter '%s' is disabled, skipping", adapter_id)
            continue

        entry = _ADAPTER_MAP.get(adapter_id)
        if entry is None:
            logger.warning(
                "Unknown adapter '%s' — no built-in class found. "
                "Register it manually via engine.adapter_registry.register().",
                adapter_id,
            )
            continue

        module_path, class_name = entry
        try:
            module = importlib.import_module(module_path)
            adapter_class: type[SearchAdapter] = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            logger.warning("Failed to import adapter '%s': %s", adapter_id, e)
            continue

        # Remote adapters take endpoint + trackers, local ones a data file
        kwargs: dict[str, Any] = {}
        if issubclass(adapter_class, RemoteJSONAdapter):
            kwargs["trackers"] = list(settings.search.trackers)
            if adapter_cfg.endpoint:
                kwargs["endpoint"] = adapter_cfg.endpoint
        elif adapter_cfg.data_file:
            kwargs["data_file"] = adapter_cfg.data_file
        if adapter_cfg.timeout:
            kwargs["timeout"] = adapter_cfg.timeout
        kwargs.update(adapter_cfg.extra)

        try:
            adapter = adapter_class(**kwargs)
        except (AdapterError, TypeError) as e:
            logger.warning("Adapter '%s' is unavailable: %s", adapter_id, e)
            continue

        engine.adapter_registry.register(adapter)
