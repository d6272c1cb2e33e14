"""Route and RouteMatch.

A Route binds a method string and a path pattern to a handler reference.
Matching returns an explicit ``RouteMatch``; the route keeps no state
from one match to the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import zip_longest
from typing import TYPE_CHECKING, Any

from switchyard.routing.pattern import CompiledPath, compile_path, normalise_path

if TYPE_CHECKING:
    from switchyard._internal.invoke import HandlerInvoker
    from switchyard.http.request import RequestContext

type ParamValue = str | None | bool


class Route:
    """A single method + path + handler + optional name binding.

    ``method`` and ``path`` are fixed at construction. ``name`` can be
    reassigned through :meth:`name`::

        route = Route("GET", "/users/{id}/", show_user).name("user")
    """

    __slots__ = ("_compiled", "_handler", "_method", "_name", "_path")

    def __init__(self, method: str, path: str, handler: Any, name: str | None = None) -> None:
        self._method = method
        self._path = path
        self._handler = handler
        self._name = name
        self._compiled: CompiledPath = compile_path(path)

    @property
    def method(self) -> str:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def handler(self) -> Any:
        return self._handler

    @property
    def param_names(self) -> tuple[str, ...]:
        """Placeholder names recognised in the path, in order."""
        return self._compiled.param_names

    def name(self, name: str | None = None) -> Route | str | None:
        """Get or set the route name.

        With a non-empty *name*, sets it and returns the route for
        chaining. Without one, returns the current name.
        """
        if name:
            self._name = name
            return self
        return self._name

    def matches(self, method: str, path: str) -> RouteMatch | None:
        """Test this route against a request method and path.

        An exact method and path comparison is tried first. Otherwise the
        compiled pattern is searched in the normalised *path*; the method
        is not consulted on this branch.

        Returns ``None`` when the route does not match.
        """
        if self._method == method and self._path == path:
            return RouteMatch(route=self, params={})

        regex = self._compiled.regex
        if regex is None:
            return None

        found = regex.search(normalise_path(path))
        if found is None:
            return None

        values: list[ParamValue] = [value or None for value in found.groups()]
        if not values:
            return None

        names = self._compiled.param_names
        # Names without a capture get False; extra captures are dropped
        params = dict(zip_longest(names, values[: len(names)], fillvalue=False))
        return RouteMatch(route=self, params=params)

    def dispatch(
        self,
        invoker: HandlerInvoker,
        params: dict[str, ParamValue] | None = None,
        request: RequestContext | None = None,
    ) -> Any:
        """Hand the stored handler to *invoker* and return its result.

        Errors raised by the handler propagate unchanged.
        """
        return invoker.invoke(self._handler, params or {}, request)

    def __repr__(self) -> str:
        return f"Route({self._method!r}, {self._path!r}, name={self._name!r})"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, ParamValue]
