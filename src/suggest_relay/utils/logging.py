"""Structured logging utilities leveraging loguru.

Each suggestion request walks through three upstream-facing stages (login,
search, parse). Logs carry the request trace identifier and the query being
relayed so a slow or failing backend can be traced to a single keystroke of
the widget. Credentials and session cookies are never bound to a record.
"""

from __future__ import annotations

import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator

from fastapi import Request, Response
from loguru import logger

from suggest_relay.config import get_settings


@dataclass
class RequestLogContext:
    """State carried across the lifecycle of a request for logging.

    Attributes
    ----------
    query:
        Trimmed suggestion query once the route has validated it.
    stage:
        Name of the pipeline stage currently executing, ``None`` outside
        :func:`log_stage`.
    stage_started_at:
        ``time.perf_counter`` value recorded when the active stage began.

    """

    query: str | None = None
    stage: str | None = None
    stage_started_at: float | None = None


_TRACE_ID: ContextVar[str] = ContextVar("trace_id", default="unknown")
_REQUEST_CONTEXT: ContextVar[RequestLogContext | None] = ContextVar("request_context", default=None)


def configure_logging() -> None:
    """Configure loguru to output JSON logs with a trace identifier."""
    settings = get_settings()
    logger.remove()
    logger.add(sys.stdout, level=settings.log_level.upper(), serialize=True)


def get_trace_id() -> str:
    """Return the current request trace identifier."""
    return _TRACE_ID.get()


def get_request_context() -> RequestLogContext:
    """Return the current structured logging context."""
    context = _REQUEST_CONTEXT.get()
    if context is None:
        context = RequestLogContext()
        _REQUEST_CONTEXT.set(context)
    return context


def set_request_metadata(*, query: str | None = None) -> None:
    """Enrich the structured context with the relayed query."""
    if query is not None:
        get_request_context().query = query


def _elapsed_ms(started_at: float | None) -> float:
    if started_at is None:
        return 0.0
    return (time.perf_counter() - started_at) * 1000


@contextmanager
def log_stage(stage: str) -> Iterator[None]:
    """Context manager logging stage completion/failure with latency metrics."""
    context = get_request_context()
    previous_stage = context.stage
    previous_started_at = context.stage_started_at
    context.stage = stage
    context.stage_started_at = time.perf_counter()
    try:
        yield
    except Exception:
        logger.bind(
            request_id=get_trace_id(),
            trace_id=get_trace_id(),
            stage=stage,
            latency_ms=_elapsed_ms(context.stage_started_at),
            query=context.query,
        ).warning("stage.failed")
        raise
    else:
        logger.bind(
            request_id=get_trace_id(),
            trace_id=get_trace_id(),
            stage=stage,
            latency_ms=_elapsed_ms(context.stage_started_at),
            query=context.query,
        ).info("stage.completed")
    finally:
        context.stage = previous_stage
        context.stage_started_at = previous_started_at


async def logging_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """FastAPI middleware injecting a trace identifier into logging context."""
    trace_id = request.headers.get("x-trace-id", str(uuid.uuid4()))
    trace_token = _TRACE_ID.set(trace_id)
    context_token = _REQUEST_CONTEXT.set(RequestLogContext())
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        status_code = response.status_code if response is not None else 500
        context = get_request_context()
        # Headers and the raw query string stay out of the record; only the
        # trimmed query bound by the route is attached.
        logger.bind(
            path=request.url.path,
            method=request.method,
            status_code=status_code,
            duration_ms=duration_ms,
            trace_id=trace_id,
            request_id=trace_id,
            stage=context.stage or "request",
            query=context.query,
        ).info("request.completed")
        _TRACE_ID.reset(trace_token)
        _REQUEST_CONTEXT.reset(context_token)
    if response is None:
        raise RuntimeError("Downstream middleware returned no response object")
    response.headers["X-Trace-Id"] = trace_id
    return response


__all__ = [
    "RequestLogContext",
    "configure_logging",
    "get_trace_id",
    "get_request_context",
    "set_request_metadata",
    "log_stage",
    "logging_middleware",
]
