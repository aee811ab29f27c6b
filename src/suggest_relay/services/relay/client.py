"""Async HTTP client for the enterprise search backend.

The backend requires a two-step exchange for every lookup: a Basic-auth
``POST`` against the login endpoint hands back a session cookie, and the
search RPC accepts that cookie in place of the credentials. Sessions are not
cached; each :meth:`SearchBackendClient.fetch` call logs in afresh.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Protocol

import httpx
from loguru import logger

from suggest_relay.services.relay.extract import DISPLAY_URL_FIELD, TITLE_FIELD
from suggest_relay.types import JSONDict
from suggest_relay.utils.errors import AuthenticationFailed, UpstreamError
from suggest_relay.utils.logging import log_stage


@dataclass(frozen=True, slots=True)
class Credentials:
    """Static Basic-auth account used for the login exchange."""

    username: str
    password: str = field(repr=False)

    def basic_auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self.username, self.password)


@dataclass(frozen=True, slots=True)
class SessionToken:
    """``name=value`` pair lifted from the login ``Set-Cookie`` header."""

    value: str = field(repr=False)

    @classmethod
    def from_set_cookie(cls, header: str) -> "SessionToken":
        """Keep everything before the first ``;`` (cookie attributes are dropped)."""
        return cls(header.split(";", 1)[0].strip())


def build_search_envelope(query: str, *, limit: int = 10, index_key: str = "multiplex") -> JSONDict:
    """Return the RPC body asking for title and display URL of the best hits.

    The natural-language query is itself a JSON document serialised into the
    ``query`` string parameter.
    """
    nested_query = json.dumps({"query": {"nlq": {"text": query}}}, separators=(",", ":"))
    return {
        "parameters": {
            "querySyntax": "js",
            "query": nested_query,
            "limit": limit,
            "attributes": [{"name": TITLE_FIELD}, {"name": DISPLAY_URL_FIELD}],
        },
        "indexKey": index_key,
    }


class SearchBackendProtocol(Protocol):
    """Protocol describing the subset of client behaviour used by the suggestion service."""

    async def fetch(self, query: str) -> object:
        """Log in, run the search and return the decoded JSON body."""


class SearchBackendClient:
    """Thin async wrapper around the backend login and search endpoints."""

    def __init__(
        self,
        *,
        login_url: str,
        search_url: str,
        credentials: Credentials,
        index_key: str = "multiplex",
        limit: int = 10,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not login_url or not search_url:
            raise ValueError("login_url and search_url must be provided for SearchBackendClient")
        self._login_url = login_url
        self._search_url = search_url
        self._credentials = credentials
        self._index_key = index_key
        self._limit = limit
        self._timeout = timeout
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def authenticate(self, http_client: httpx.AsyncClient) -> SessionToken:
        """Perform the Basic-auth login and return the session token.

        Raises :class:`AuthenticationFailed` when the backend answers without a
        ``Set-Cookie`` header, and :class:`UpstreamError` on transport errors.
        """
        try:
            response = await http_client.post(
                self._login_url, auth=self._credentials.basic_auth()
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Failed to reach login endpoint: {exc}") from exc
        cookies = response.headers.get_list("set-cookie")
        if not cookies:
            raise AuthenticationFailed(
                "Auth failed", details={"status_code": response.status_code}
            )
        return SessionToken.from_set_cookie(cookies[0])

    async def search(
        self, http_client: httpx.AsyncClient, token: SessionToken, query: str
    ) -> object:
        """Post the search envelope with the session cookie and decode the JSON body."""
        body = build_search_envelope(query, limit=self._limit, index_key=self._index_key)
        # The jar filled by the login response is dropped; the session travels
        # only through the explicit ``Cookie`` header.
        http_client.cookies.clear()
        try:
            response = await http_client.post(
                self._search_url, json=body, headers={"Cookie": token.value}
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Failed to query search backend: {exc}") from exc
        if not response.is_success:
            logger.bind(status_code=response.status_code).warning("search.rejected")
            raise UpstreamError(
                f"Search backend responded with {response.status_code}",
                details={"status_code": response.status_code},
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("Search backend returned invalid JSON") from exc

    async def fetch(self, query: str) -> object:
        """Run the login and search exchange for ``query`` on a fresh connection."""
        async with self._http_client() as http_client:
            with log_stage("login"):
                token = await self.authenticate(http_client)
            with log_stage("search"):
                return await self.search(http_client, token, query)


__all__ = [
    "Credentials",
    "SessionToken",
    "build_search_envelope",
    "SearchBackendProtocol",
    "SearchBackendClient",
]
