"""FastAPI application factory for suggest_relay."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from suggest_relay import __version__
from suggest_relay.config import Settings, get_settings
from suggest_relay.routes import health, metrics, suggest
from suggest_relay.services.relay import Credentials, SearchBackendClient
from suggest_relay.services.suggest import SuggestionService
from suggest_relay.utils.errors import (
    ApiError,
    api_error_handler,
    http_exception_handler,
    request_validation_exception_handler,
    unexpected_exception_handler,
)
from suggest_relay.utils.logging import configure_logging, logging_middleware

OPENAPI_TAGS: list[dict[str, str]] = [
    {
        "name": "health",
        "description": "Liveness probe exposing uptime and build metadata.",
    },
    {
        "name": "suggest",
        "description": "Search suggestions relayed from the enterprise search backend.",
    },
]


def build_backend(settings: Settings) -> SearchBackendClient:
    """Return the backend client configured from ``settings``."""
    return SearchBackendClient(
        login_url=settings.login_url,
        search_url=settings.search_api_url,
        credentials=Credentials(settings.search_username, settings.search_password),
        index_key=settings.index_key,
        limit=settings.result_limit,
        timeout=settings.upstream_timeout,
    )


def create_app() -> FastAPI:
    """Instantiate FastAPI application with configured routes and services."""
    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title="suggest-relay",
        description=(
            "Relay between a browser search-suggestion widget and the enterprise "
            "search backend: session login, query forwarding and result reshaping."
        ),
        version=__version__,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
    )
    # Preflight requests from the widget origin are answered here; simple GET
    # responses are decorated by the suggest route itself.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.middleware("http")(logging_middleware)

    app.state.allowed_origin = settings.allowed_origin
    app.state.suggestion_service = SuggestionService(
        build_backend(settings), base_url=settings.suggest_base_url
    )

    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(suggest.router)

    app.add_exception_handler(Exception, unexpected_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    return app


app = create_app()
