"""Exception presenter protocol and loading.

A presenter gets the first look at an exception raised by a route
handler. Returning anything other than ``None`` makes that value the
response; returning ``None`` falls through to the router's 500 handler.
"""

import inspect
from typing import Any, Protocol

from switchyard._internal.invoke import import_reference
from switchyard.errors import ConfigurationError


class ExceptionPresenter(Protocol):
    """Protocol for exception presenters.

    Any object with a ``present`` method qualifies::

        class JSONErrors:
            def present(self, exc: BaseException) -> dict[str, str] | None:
                if isinstance(exc, ValueError):
                    return {"error": str(exc)}
                return None
    """

    def present(self, exc: BaseException) -> Any | None: ...


def load_presenter(reference: str) -> ExceptionPresenter:
    """Import a presenter from ``"package.module:attr"``.

    Classes are instantiated with no arguments; anything else is used
    as-is. Raises ``ConfigurationError`` if the result has no
    ``present`` method.
    """
    target = import_reference(reference)
    presenter = target() if inspect.isclass(target) else target
    if not callable(getattr(presenter, "present", None)):
        msg = f"Exception presenter {reference!r} has no present() method."
        raise ConfigurationError(msg)
    return presenter
