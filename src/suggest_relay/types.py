"""Common type aliases shared across the application.

Upstream search payloads are loosely typed; these aliases keep the parsing
helpers honest about handling JSON-compatible values rather than ``Any``.
"""

from __future__ import annotations

from typing import Dict, List, TypeAlias, Union

JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONPrimitive, Dict[str, object], List[object]]
JSONDict: TypeAlias = Dict[str, JSONValue]

__all__ = ["JSONPrimitive", "JSONValue", "JSONDict"]
