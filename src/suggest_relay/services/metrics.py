"""Prometheus metrics helpers for the suggestion relay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

OUTCOMES: Final[tuple[str, ...]] = ("empty_query", "auth_failed", "upstream_error", "ok")


@dataclass
class MetricsRegistry:
    """Container owning the collectors exposed on ``/metrics``.

    * ``suggest_requests_total`` counts suggestion requests by pipeline outcome.
    * ``suggest_items_skipped_total`` counts upstream hits dropped because their
      title or display URL could not be extracted.
    """

    registry: CollectorRegistry = field(init=False)
    requests: Counter = field(init=False)
    items_skipped: Counter = field(init=False)

    def __post_init__(self) -> None:
        self._initialise()

    def _initialise(self) -> None:
        """Instantiate collectors on a fresh private registry."""
        self.registry = CollectorRegistry()
        self.requests = Counter(
            "suggest_requests_total",
            "Number of suggestion requests grouped by pipeline outcome.",
            ("outcome",),
            registry=self.registry,
        )
        self.items_skipped = Counter(
            "suggest_items_skipped_total",
            "Number of upstream hits dropped during suggestion parsing.",
            registry=self.registry,
        )

    def reset(self) -> None:
        """Reset all collectors to an empty state (useful for deterministic tests)."""
        self._initialise()

    def record_outcome(self, outcome: str) -> None:
        """Increment the request counter for ``outcome``."""
        if outcome not in OUTCOMES:
            raise ValueError(f"unknown outcome '{outcome}'")
        self.requests.labels(outcome=outcome).inc()

    def record_skipped_item(self) -> None:
        self.items_skipped.inc()

    def render(self) -> bytes:
        """Return the latest metrics snapshot in Prometheus exposition format."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST


metrics: Final[MetricsRegistry] = MetricsRegistry()


__all__ = ["metrics", "MetricsRegistry", "OUTCOMES"]
