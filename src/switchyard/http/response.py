"""Response values produced by the router itself.

Everything else a handler returns is passed through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect response. ``headers`` carries the ``Location`` to emit."""

    url: str
    status: int = 301
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def to(cls, url: str, status: int = 301) -> Redirect:
        return cls(url=url, status=status, headers=(("Location", url),))
