"""HTTP endpoint answering the search-suggestion widget."""

from __future__ import annotations

from typing import Annotated, List, cast

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import ORJSONResponse
from loguru import logger

from suggest_relay.schemas.suggest import SuggestionResponse
from suggest_relay.services.suggest import SuggestionService
from suggest_relay.utils.cors import decorate_response

router = APIRouter(tags=["suggest"])


def get_suggestion_service(request: Request) -> SuggestionService:
    """Return the suggestion service stored on the FastAPI application state."""
    return cast(SuggestionService, request.app.state.suggestion_service)


ServiceDep = Annotated[SuggestionService, Depends(get_suggestion_service)]


@router.get(
    "/suggest",
    response_model=SuggestionResponse,
    response_model_exclude_none=True,
    summary="Suggest search results for a partial query",
    description=(
        "Relays the query to the enterprise search backend and returns the best hits "
        "in the suggestion widget format. Always answers 200."
    ),
    response_description="Placeholder entry followed by one entry per backend hit.",
)
async def suggest(
    request: Request,
    service: ServiceDep,
    qry: Annotated[
        List[str] | None,
        Query(description="Text typed into the search box."),
    ] = None,
) -> ORJSONResponse:
    """Relay ``qry`` upstream and answer with the widget's JSON payload."""
    try:
        result = await service.suggest(_first_non_blank(qry))
    except Exception:
        logger.exception("suggest.failed")
        result = SuggestionResponse()
    response = ORJSONResponse(result.to_payload())
    return cast(ORJSONResponse, decorate_response(response, request.app.state.allowed_origin))


def _first_non_blank(values: List[str] | None) -> str | None:
    """Return the first ``qry`` value containing more than whitespace."""
    for value in values or []:
        if value.strip():
            return value
    return None
