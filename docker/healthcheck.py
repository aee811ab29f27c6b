"""Docker health probe that checks the relay ``/health`` endpoint.

The probe retries for a short boot window so a container whose uvicorn
worker is still starting is not reported unhealthy on the first attempt.
The port follows the same ``PORT`` variable the relay binds to.
"""

from __future__ import annotations

import http.client
import os
import sys
import time
from contextlib import suppress

_HOST = "localhost"
_DEFAULT_PORT = 5001
_TIMEOUT_SECONDS = 3
_RETRY_ATTEMPTS = 30
_RETRY_DELAY_SECONDS = 1.0


def _port() -> int:
    """Return the port from ``PORT`` or the relay default when unset or blank."""
    raw = os.environ.get("PORT", "").strip()
    return int(raw) if raw else _DEFAULT_PORT


def _create_connection() -> http.client.HTTPConnection:
    """Return a fresh HTTP connection to the relay container."""
    return http.client.HTTPConnection(_HOST, _port(), timeout=_TIMEOUT_SECONDS)


def _probe_once() -> bool:
    """Attempt a single ``GET /health`` request and return ``True`` on success."""
    connection: http.client.HTTPConnection | None = None
    try:
        connection = _create_connection()
        connection.request("GET", "/health")
        response = connection.getresponse()
        return response.status == 200
    except (OSError, http.client.HTTPException):
        return False
    finally:
        with suppress(Exception):
            if connection is not None:
                connection.close()


def main() -> int:
    """Return ``0`` when the probe succeeds and ``1`` once every retry failed."""
    for attempt in range(1, _RETRY_ATTEMPTS + 1):
        if _probe_once():
            return 0
        if attempt < _RETRY_ATTEMPTS:
            time.sleep(_RETRY_DELAY_SECONDS)
    print(
        "healthcheck failed: unable to reach http://%s:%s/health after %d attempts"
        % (_HOST, _port(), _RETRY_ATTEMPTS),
        file=sys.stderr,
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
