"""Pydantic models describing the suggestion widget payload.

Field names mirror the widget contract verbatim (``Suggestions``, ``Text``,
``previewPaneUrl``...), so no alias generator is applied.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SuggestionAttributes(BaseModel):
    """Navigation metadata attached to a single suggestion."""

    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., description="Absolute URL opened when the suggestion is picked.")
    query: str = Field(..., description="Text echoed back into the widget search box.")
    previewPaneUrl: str = Field(..., description="URL rendered in the widget preview pane.")


class Suggestion(BaseModel):
    """One autocomplete entry."""

    model_config = ConfigDict(extra="forbid")

    Text: str = Field(..., description="Display text shown in the suggestion list.")
    Attributes: SuggestionAttributes


class SuggestionResponse(BaseModel):
    """Envelope returned by ``GET /suggest``."""

    model_config = ConfigDict(extra="forbid")

    Suggestions: List[Suggestion] = Field(default_factory=list)
    Error: str | None = Field(
        default=None,
        description="Present only when the backend login did not yield a session.",
    )

    def to_payload(self) -> dict[str, object]:
        """Return the JSON document, omitting ``Error`` when unset."""
        return self.model_dump(exclude_none=True)


PLACEHOLDER_SUGGESTION = Suggestion(
    Text="🔧 Test Suggestion",
    Attributes=SuggestionAttributes(
        url="https://en.wikipedia.org/wiki/Test",
        query="Test Suggestion",
        previewPaneUrl="https://en.wikipedia.org/wiki/Test",
    ),
)


__all__ = [
    "SuggestionAttributes",
    "Suggestion",
    "SuggestionResponse",
    "PLACEHOLDER_SUGGESTION",
]
