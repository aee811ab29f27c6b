"""Search backend client and result parsing helpers."""

from .client import (
    Credentials,
    SearchBackendClient,
    SearchBackendProtocol,
    SessionToken,
    build_search_envelope,
)
from .extract import Extraction, Hit, HitExtraction, extract_field, extract_hit

__all__ = [
    "Credentials",
    "SearchBackendClient",
    "SearchBackendProtocol",
    "SessionToken",
    "build_search_envelope",
    "Extraction",
    "Hit",
    "HitExtraction",
    "extract_field",
    "extract_hit",
]
