"""Test fixtures for suggest_relay."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from upstream_stub import (  # noqa: E402
    ALLOWED_ORIGIN,
    BASE_URL,
    LOGIN_URL,
    SEARCH_URL,
    FakeSearchBackend,
)

os.environ.setdefault("ALLOWED_ORIGIN", ALLOWED_ORIGIN)
os.environ.setdefault("SUGGEST_BASE_URL", BASE_URL)
os.environ.setdefault("LOGIN_URL", LOGIN_URL)
os.environ.setdefault("SEARCH_API_URL", SEARCH_URL)
os.environ.setdefault("SEARCH_USERNAME", "igadmin")
os.environ.setdefault("SEARCH_PASSWORD", "igadmin")

from suggest_relay.app import create_app  # noqa: E402
from suggest_relay.services.metrics import metrics  # noqa: E402
from suggest_relay.services.suggest import SuggestionService  # noqa: E402


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def fake_backend() -> FakeSearchBackend:
    return FakeSearchBackend()


@pytest.fixture()
def test_app(fake_backend: FakeSearchBackend) -> FastAPI:
    metrics.reset()
    app = create_app()
    app.state.suggestion_service = SuggestionService(fake_backend.client(), base_url=BASE_URL)
    return app


@pytest.fixture()
def client(test_app: FastAPI) -> Iterator[TestClient]:
    with TestClient(test_app) as client:
        yield client
