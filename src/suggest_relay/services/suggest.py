"""Suggestion pipeline: login, search, and reshaping of upstream hits."""

from __future__ import annotations

from typing import List, Mapping

from loguru import logger

from suggest_relay.schemas.suggest import (
    PLACEHOLDER_SUGGESTION,
    Suggestion,
    SuggestionAttributes,
    SuggestionResponse,
)
from suggest_relay.services.metrics import metrics
from suggest_relay.services.relay import Hit, SearchBackendProtocol, extract_hit
from suggest_relay.utils.errors import AuthenticationFailed, UpstreamError
from suggest_relay.utils.logging import get_trace_id, log_stage, set_request_metadata

AUTH_FAILED_MESSAGE = "Auth failed"


class SuggestionService:
    """Turn a widget query into the suggestion list shown under the search box.

    Every failure degrades to an empty list. Only a failed login is reported
    back to the caller, through the ``Error`` field.
    """

    def __init__(self, backend: SearchBackendProtocol, *, base_url: str) -> None:
        self.backend = backend
        self.base_url = base_url

    async def suggest(self, raw_query: str | None) -> SuggestionResponse:
        """Return suggestions for ``raw_query`` (blank queries short-circuit)."""
        query = (raw_query or "").strip()
        if not query:
            metrics.record_outcome("empty_query")
            return SuggestionResponse()
        set_request_metadata(query=query)
        logger.bind(trace_id=get_trace_id(), query=query).info("suggest.received")
        try:
            payload = await self.backend.fetch(query)
        except AuthenticationFailed as exc:
            logger.bind(trace_id=get_trace_id(), details=exc.details).warning("suggest.auth_failed")
            metrics.record_outcome("auth_failed")
            return SuggestionResponse(Error=AUTH_FAILED_MESSAGE)
        except UpstreamError as exc:
            logger.bind(trace_id=get_trace_id(), details=exc.details).warning(
                "suggest.upstream_error: {}", exc.message
            )
            metrics.record_outcome("upstream_error")
            return SuggestionResponse()
        if not isinstance(payload, Mapping):
            logger.bind(trace_id=get_trace_id(), payload_type=type(payload).__name__).warning(
                "suggest.unexpected_payload"
            )
            metrics.record_outcome("upstream_error")
            return SuggestionResponse()
        with log_stage("parse"):
            suggestions = self.build_suggestions(payload)
        metrics.record_outcome("ok")
        return SuggestionResponse(Suggestions=suggestions)

    def build_suggestions(self, payload: Mapping[str, object]) -> List[Suggestion]:
        """Return the placeholder followed by one suggestion per usable hit."""
        suggestions: List[Suggestion] = [PLACEHOLDER_SUGGESTION]
        values = payload.get("values")
        if not isinstance(values, list):
            if values is not None:
                logger.bind(values_type=type(values).__name__).warning("suggest.values_not_a_list")
            return suggestions
        for index, item in enumerate(values):
            try:
                extraction = extract_hit(item)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.bind(index=index).warning("suggest.item_skipped: parsing error {}", exc)
                metrics.record_skipped_item()
                continue
            if extraction.hit is None:
                logger.bind(index=index, reason=extraction.reason).debug("suggest.item_skipped")
                metrics.record_skipped_item()
                continue
            suggestions.append(self.to_suggestion(extraction.hit))
        return suggestions

    def to_suggestion(self, hit: Hit) -> Suggestion:
        """Build the widget entry for ``hit``; the URL is a plain concatenation."""
        url = f"{self.base_url}{hit.display_url}"
        return Suggestion(
            Text=hit.title,
            Attributes=SuggestionAttributes(url=url, query=hit.title, previewPaneUrl=url),
        )


__all__ = ["AUTH_FAILED_MESSAGE", "SuggestionService"]
