"""Switchyard exception hierarchy.

Shared across Route, Router, invoker, and presenter loading so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when router setup is invalid.

    Typically an unresolvable handler or presenter reference.
    """


class RouteNotFound(SwitchyardError, LookupError):  # noqa: N818
    """No registered route carries the requested name.

    Raised by ``Router.route()``. Never recovered internally.
    """

    def __init__(self, name: str) -> None:
        super().__init__("No route with that name.")
        self.name = name


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RedirectRequested(HTTPError):  # noqa: N818
    """Raised by ``Router.redirect()`` to stop the current handler.

    ``Router.dispatch()`` turns it into a ``Redirect`` response. Outside
    of dispatch it propagates to the caller like any other exception.
    """

    def __init__(self, location: str, status: int = 301) -> None:
        super().__init__(
            status=status,
            detail=f"Redirect to {location}",
            headers=(("Location", location),),
        )

    @property
    def location(self) -> str:
        return dict(self.headers)["Location"]
