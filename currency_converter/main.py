from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import api, health, ui
from .services.rates.base import FetchError, RateFetcher
from .services.rates.providers import make_rate_fetcher
from .services.sessions import build_session_registry


def create_app(
    settings_override: Settings | None = None,
    fetcher_override: RateFetcher | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    fetcher_override: replaces the HTTP rate fetcher (tests use a stub so no
    network is touched).
    """
    settings = settings_override or get_settings()
    init_logging(debug=settings.debug)

    fetcher = fetcher_override or make_rate_fetcher(
        settings.rate_provider,
        settings.rates_base_url,
        timeout=settings.http_timeout_seconds,
    )

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.rate_fetcher = fetcher
    app.state.sessions = build_session_registry(settings, fetcher)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(FetchError, errors.fetch_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(ui.router)
    app.include_router(api.router)

    @app.get("/")
    async def root():
        return {"message": "Currency Converter", "version": settings.version}

    return app


app = create_app()
