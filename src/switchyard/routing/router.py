"""Router — ordered route table with dispatch and fallbacks.

Routes are tested in registration order and the first match wins, so
overlapping patterns resolve to whichever was registered first.

Usage::

    router = Router()
    router.get("/users/{id}/", show_user).name("user")
    router.any("/hooks/{source}/", receive_hook)
    router.error_handler(404, lambda: "nothing here")

    result = router.dispatch(RequestContext("GET", "/users/42/"))
    router.route("user", {"id": 42})  # "/users/42/"
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, NoReturn

from switchyard._internal.invoke import CallableInvoker, HandlerInvoker, invoke
from switchyard.config import RouterConfig
from switchyard.context import request_var
from switchyard.errors import ConfigurationError, RedirectRequested, RouteNotFound
from switchyard.http.request import RequestContext
from switchyard.http.response import Redirect
from switchyard.presenter import ExceptionPresenter, load_presenter
from switchyard.routing.pattern import expand_path
from switchyard.routing.route import ParamValue, Route, RouteMatch

logger = logging.getLogger("switchyard.routing")

# Method string registered by Router.any(), kept as one compound token
ANY_METHOD = "GET|POST|PUT|DELETE|PATCH|OPTIONS"

NOT_ALLOWED = 400
NOT_FOUND = 404
SERVER_ERROR = 500


def _not_allowed() -> str:
    return "not allowed"


def _not_found() -> str:
    return "not found"


def _server_error() -> str:
    return "server error"


_DEFAULT_ERROR_HANDLERS: dict[int, Callable[[], str]] = {
    NOT_ALLOWED: _not_allowed,
    NOT_FOUND: _not_found,
    SERVER_ERROR: _server_error,
}


def call_error_handler(
    handler: Callable[..., Any],
    request: RequestContext | None,
    exc: BaseException | None,
) -> Any:
    """Invoke an error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc)
    args. Supports both sync and async error handlers.
    """
    try:
        params = inspect.signature(handler).parameters
    except (TypeError, ValueError):
        # Builtins and some C callables expose no signature
        return invoke(handler)
    if len(params) >= 2:
        return invoke(handler, request, exc)
    if len(params) == 1:
        return invoke(handler, request)
    return invoke(handler)


class Router:
    """Request router.

    One instance serves one request at a time: ``dispatch`` records the
    matched route and its parameters on the router, and lazily installs
    default error handlers. Hosts serving requests concurrently should
    give each worker its own router.
    """

    __slots__ = (
        "_config",
        "_current",
        "_error_handlers",
        "_invoker",
        "_parameters",
        "_presenter",
        "_routes",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        invoker: HandlerInvoker | None = None,
        presenter: ExceptionPresenter | None = None,
    ) -> None:
        self._config = config or RouterConfig()
        self._invoker: HandlerInvoker = invoker or CallableInvoker()
        self._presenter = presenter
        self._routes: list[Route] = []
        self._error_handlers: dict[int, Callable[..., Any]] = {}
        self._current: Route | None = None
        self._parameters: dict[str, ParamValue] = {}

        if self._config.log_level:
            logging.getLogger("switchyard").setLevel(self._config.log_level.upper())

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def routes(self) -> list[Route]:
        """Registered routes in match order."""
        return list(self._routes)

    @property
    def error_handlers(self) -> dict[int, Callable[..., Any]]:
        """Registered and lazily installed error handlers by status code."""
        return dict(self._error_handlers)

    # -- Registration --

    def add_route(
        self,
        method: str,
        path: str,
        handler: Any,
        name: str | None = None,
    ) -> Route:
        """Append a route and return it for chaining."""
        route = Route(method, path, handler, name)
        self._routes.append(route)
        logger.debug("Registered %s %s", method, path)
        return route

    def get(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a GET route."""
        return self.add_route("GET", path, handler, name)

    def post(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a POST route."""
        return self.add_route("POST", path, handler, name)

    def put(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a PUT route."""
        return self.add_route("PUT", path, handler, name)

    def delete(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a DELETE route."""
        return self.add_route("DELETE", path, handler, name)

    def patch(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a PATCH route."""
        return self.add_route("PATCH", path, handler, name)

    def options(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add an OPTIONS route."""
        return self.add_route("OPTIONS", path, handler, name)

    def any(self, path: str, handler: Any, name: str | None = None) -> Route:
        """Add a single route whose method is the compound ``ANY_METHOD``.

        The compound string never equals a real request method, so these
        routes only match through their placeholders.
        """
        return self.add_route(ANY_METHOD, path, handler, name)

    def error_handler(self, code: int, callback: Callable[..., Any]) -> None:
        """Register or replace the fallback for a status code."""
        if not callable(callback):
            msg = f"Error handler for {code} must be callable, got {callback!r}."
            raise ConfigurationError(msg)
        self._error_handlers[code] = callback

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, if any."""
        for route in self._routes:
            found = route.matches(method, path)
            if found is not None:
                return found
        return None

    def current(self) -> Route | None:
        """The route matched by the most recent dispatch."""
        return self._current

    def parameters(self) -> dict[str, ParamValue]:
        """Path parameters extracted by the most recent dispatch."""
        return dict(self._parameters)

    # -- Dispatch --

    def dispatch(self, request: RequestContext | None = None) -> Any:
        """Match *request* and return the handler's or a fallback's result.

        Without an explicit *request*, the one bound in
        ``switchyard.context`` is used, else the configured defaults.
        """
        if request is None:
            request = request_var.get(None) or RequestContext(
                method=self._config.default_method,
                path=self._config.default_path,
            )

        token = request_var.set(request)
        try:
            return self._dispatch(request)
        finally:
            request_var.reset(token)

    def _dispatch(self, request: RequestContext) -> Any:
        found = self.match(request.method, request.path)

        if found is not None:
            self._current = found.route
            self._parameters = found.params
            logger.debug("%s %s -> %r %r", request.method, request.path, found.route, found.params)

            try:
                return found.route.dispatch(self._invoker, found.params, request)
            except RedirectRequested as redirect:
                logger.debug("%d %s -> %s", redirect.status, request.path, redirect.location)
                return Redirect.to(redirect.location, redirect.status)
            except Exception as exc:
                logger.exception("500 %s %s", request.method, request.path)
                result = self._present(exc)
                if result is not None:
                    return result
                return self.dispatch_error(request, exc)

        if request.path in self._paths():
            logger.debug("%d %s %s (method not allowed)", NOT_ALLOWED, request.method, request.path)
            return self.dispatch_not_allowed(request)

        logger.debug("%d %s %s (no route)", NOT_FOUND, request.method, request.path)
        return self.dispatch_not_found(request)

    def _paths(self) -> list[str]:
        return [route.path for route in self._routes]

    def _present(self, exc: Exception) -> Any | None:
        presenter = self._presenter
        if presenter is None and self._config.exception_presenter:
            presenter = load_presenter(self._config.exception_presenter)
        if presenter is None:
            return None

        result = presenter.present(exc)
        if result is None:
            logger.warning("Exception presenter declined %s", type(exc).__name__)
        return result

    # -- Fallbacks --

    def dispatch_not_allowed(self, request: RequestContext | None = None) -> Any:
        """Run the method-not-allowed fallback (status key 400)."""
        return self._fallback(NOT_ALLOWED, request, None)

    def dispatch_not_found(self, request: RequestContext | None = None) -> Any:
        """Run the not-found fallback (status key 404)."""
        return self._fallback(NOT_FOUND, request, None)

    def dispatch_error(
        self,
        request: RequestContext | None = None,
        exc: BaseException | None = None,
    ) -> Any:
        """Run the server-error fallback (status key 500)."""
        return self._fallback(SERVER_ERROR, request, exc)

    def _fallback(
        self,
        code: int,
        request: RequestContext | None,
        exc: BaseException | None,
    ) -> Any:
        handler = self._error_handlers.get(code)
        if handler is None:
            handler = self._error_handlers[code] = _DEFAULT_ERROR_HANDLERS[code]
        return call_error_handler(handler, request, exc)

    # -- Reverse lookup and redirects --

    def route(self, name: str, parameters: Mapping[str, Any] | None = None) -> str:
        """Build the path of the first route named *name*.

        Raises ``RouteNotFound`` if no route carries that name.
        """
        for route in self._routes:
            if route.name() == name:
                return expand_path(route.path, parameters or {})
        raise RouteNotFound(name)

    def redirect(self, path: str) -> NoReturn:
        """Stop the current handler and redirect to *path*.

        Inside ``dispatch`` this becomes a ``Redirect`` response with the
        configured permanent status.
        """
        raise RedirectRequested(path, self._config.redirect_status)
