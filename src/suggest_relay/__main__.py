"""Serve the relay with uvicorn on the configured host and port."""

from __future__ import annotations

import uvicorn

from suggest_relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "suggest_relay.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
