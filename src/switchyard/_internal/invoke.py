"""Invoke helpers — resolve a handler reference and call it.

A route's handler is opaque to the router. The invoker turns it into a
callable and supplies request context. Accepted references:

- any callable, used as-is
- ``"package.module:qualname"`` strings, imported on first use
- ``(target, "action")`` pairs naming a controller action; a class
  target is instantiated with no arguments before the lookup

Handlers can be ``def`` or ``async def``. The router is synchronous, so
an awaitable result is driven to completion with ``anyio.run``.

Usage::

    from switchyard._internal.invoke import CallableInvoker

    result = CallableInvoker().invoke(("app.views:Users", "show"), {"id": "7"}, request)
"""

import importlib
import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

import anyio

from switchyard.errors import ConfigurationError
from switchyard.http.request import RequestContext


class HandlerInvoker(Protocol):
    """Anything that can resolve and call a route handler."""

    def invoke(
        self,
        handler: Any,
        params: Mapping[str, Any],
        request: RequestContext | None,
    ) -> Any: ...


def import_reference(reference: str) -> Any:
    """Import the object named by ``"package.module:qualname"``."""
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        msg = f"Reference {reference!r} must look like 'package.module:attribute'."
        raise ConfigurationError(msg)

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import module {module_name!r} for reference {reference!r}."
        raise ConfigurationError(msg) from exc

    for attr in qualname.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            msg = f"Module {module_name!r} has no attribute {qualname!r}."
            raise ConfigurationError(msg) from None
    return target


def resolve_handler(handler: Any) -> Callable[..., Any]:
    """Turn a handler reference into a callable.

    Raises ``ConfigurationError`` if the reference cannot be resolved.
    """
    if isinstance(handler, str):
        handler = import_reference(handler)
    elif isinstance(handler, tuple) and len(handler) == 2 and isinstance(handler[1], str):
        target, action = handler
        if isinstance(target, str):
            target = import_reference(target)
        if inspect.isclass(target):
            target = target()
        try:
            handler = getattr(target, action)
        except AttributeError:
            msg = f"{type(target).__name__} has no action {action!r}."
            raise ConfigurationError(msg) from None

    if not callable(handler):
        msg = f"Handler {handler!r} is not callable."
        raise ConfigurationError(msg)
    return handler


def build_handler_kwargs(
    handler: Callable[..., Any],
    params: Mapping[str, Any],
    request: RequestContext | None,
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + path params.

    Resolution order:
    1. ``request`` parameter (by name or ``RequestContext`` annotation)
    2. Path parameters (by name, converted to the annotated type when the
       value is a string and the conversion succeeds)
    """
    try:
        sig = inspect.signature(handler, eval_str=True)
    except NameError:
        # Postponed annotation naming a TYPE_CHECKING-only import
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        # Builtins and some C callables expose no signature
        return {}

    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is RequestContext:
            kwargs[name] = request
        elif name in params:
            value = params[name]
            target = param.annotation
            if isinstance(value, str) and isinstance(target, type) and target is not str:
                try:
                    kwargs[name] = target(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value
    return kwargs


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def invoke(handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a handler and run the result to completion if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        try:
            result = anyio.run(_await, result)
        except RuntimeError:
            # anyio refuses to start inside a running event loop
            if inspect.iscoroutine(result):
                result.close()
            raise
    return result


class CallableInvoker:
    """Default ``HandlerInvoker``: resolve, inject arguments, call."""

    __slots__ = ()

    def invoke(
        self,
        handler: Any,
        params: Mapping[str, Any],
        request: RequestContext | None,
    ) -> Any:
        func = resolve_handler(handler)
        return invoke(func, **build_handler_kwargs(func, params, request))
