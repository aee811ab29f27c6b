"""Search-suggestion relay between a browser widget and an enterprise search backend."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
