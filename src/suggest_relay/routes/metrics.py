"""Prometheus metrics exposition endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response

from suggest_relay.services.metrics import metrics

router = APIRouter(tags=["metrics"])


@router.get(
    "/metrics",
    include_in_schema=False,
)
async def metrics_endpoint() -> Response:
    """Expose application metrics using the Prometheus text format."""
    return Response(content=metrics.render(), media_type=metrics.content_type)


__all__ = ["router", "metrics_endpoint"]
