"""Health endpoint reporting service status."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from suggest_relay import __version__

_router_start = time.time()

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Report service health",
    description="Expose the process uptime and build version; never calls the backend.",
    response_description="Current relay status.",
)
def health() -> Dict[str, object]:
    """Return uptime and version."""
    return {
        "status": "ok",
        "version": __version__,
        "uptime": time.time() - _router_start,
        "checked_at": datetime.now(tz=timezone.utc).isoformat(),
    }
