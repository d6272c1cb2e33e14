"""Switchyard — a small HTTP request router.

Registers method/path patterns, matches decoded requests against them,
extracts path parameters, and dispatches to handlers or fallbacks.

Basic usage::

    from switchyard import RequestContext, Router

    router = Router()

    def show_user(id: int) -> str:
        return f"user {id}"

    router.get("/users/{id}/", show_user).name("user")

    router.dispatch(RequestContext("GET", "/users/42/"))  # "user 42"
    router.route("user", {"id": 7})                         # "/users/7/"
"""

import importlib

__version__ = "0.1.0"

# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "switchyard.errors",
    "ExceptionPresenter": "switchyard.presenter",
    "HTTPError": "switchyard.errors",
    "Redirect": "switchyard.http.response",
    "RedirectRequested": "switchyard.errors",
    "RequestContext": "switchyard.http.request",
    "Route": "switchyard.routing.route",
    "RouteMatch": "switchyard.routing.route",
    "RouteNotFound": "switchyard.errors",
    "Router": "switchyard.routing.router",
    "RouterConfig": "switchyard.config",
    "SwitchyardError": "switchyard.errors",
    "get_request": "switchyard.context",
}

__all__ = [
    "ConfigurationError",
    "ExceptionPresenter",
    "HTTPError",
    "Redirect",
    "RedirectRequested",
    "RequestContext",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "SwitchyardError",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
