"""Response decoration granting the suggestion widget cross-origin access."""

from __future__ import annotations

from starlette.responses import Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def cors_headers(origin: str) -> dict[str, str]:
    """Return the headers every suggestion response carries for ``origin``."""
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET",
        "Content-Type": JSON_CONTENT_TYPE,
    }


def decorate_response(response: Response, origin: str) -> Response:
    """Apply :func:`cors_headers` to ``response`` in place and return it."""
    for name, value in cors_headers(origin).items():
        response.headers[name] = value
    return response


__all__ = ["JSON_CONTENT_TYPE", "cors_headers", "decorate_response"]
