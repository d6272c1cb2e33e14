"""Decoded request context.

The router never parses raw requests. The host hands it a method and a
path, either directly or via the ASGI/WSGI adapters below.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RequestContext:
    """The method and path of the request being dispatched."""

    method: str = "GET"
    path: str = "/"

    @classmethod
    def from_scope(cls, scope: Mapping[str, Any]) -> RequestContext:
        """Build from an ASGI HTTP scope."""
        return cls(
            method=scope.get("method") or "GET",
            path=scope.get("path") or "/",
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> RequestContext:
        """Build from a WSGI environ.

        Uses ``PATH_INFO``, so the query string never reaches the matcher.
        """
        return cls(
            method=environ.get("REQUEST_METHOD") or "GET",
            path=environ.get("PATH_INFO") or "/",
        )
