"""Request-scoped context via ContextVar.

``Router.dispatch()`` binds the request it is serving for the duration of
the handler call, so handlers deep in the call stack can reach it without
threading it through every signature.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local otherwise.
"""

from contextvars import ContextVar

from switchyard.http.request import RequestContext

request_var: ContextVar[RequestContext] = ContextVar("switchyard_request")
"""The request currently being dispatched."""


def get_request() -> RequestContext:
    """Return the current request.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return request_var.get()

