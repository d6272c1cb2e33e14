"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups. Loading it from files or the environment is the
host application's job.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(exception_presenter="myapp.errors:Presenter")
    """

    # Request used when dispatch() gets none and none is bound in context
    default_method: str = "GET"
    default_path: str = "/"

    # "package.module:attr" naming an ExceptionPresenter class or instance
    exception_presenter: str | None = None

    # Status for Router.redirect()
    redirect_status: int = 301

    # Applied to the process-wide "switchyard" logger when a Router is
    # built (e.g. "debug"). The level stays after the Router is gone.
    log_level: str | None = None
