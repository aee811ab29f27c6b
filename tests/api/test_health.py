"""Tests for the liveness endpoint."""

from __future__ import annotations

from suggest_relay import __version__


def test_health_reports_version(client, fake_backend) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["version"] == __version__
    assert payload["uptime"] >= 0
    assert fake_backend.requests == []


def test_responses_carry_trace_id(client) -> None:
    response = client.get("/health", headers={"X-Trace-Id": "trace-42"})

    assert response.headers["X-Trace-Id"] == "trace-42"
