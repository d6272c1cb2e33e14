"""Route path patterns: normalisation, compilation, and reverse expansion.

A pattern is a path made of literal segments and placeholders::

    /users/{id}/          required placeholder ``id``
    /posts/{slug?}/       optional placeholder ``slug``

A placeholder is only recognised when a ``/`` follows it. ``/users/{id}``
has no trailing slash after the placeholder, so it compiles to a static
pattern and can only ever match exactly.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# ``{name}/`` or ``{name?}/`` in a normalised route path
PLACEHOLDER = re.compile(r"\{([^}]+)\}/")

# Any leftover ``{...}`` after reverse expansion
_UNFILLED = re.compile(r"\{[^}]+\}")

_REPEATED_SLASHES = re.compile(r"/{2,}")

REQUIRED_CAPTURE = r"([^/]+)/"
OPTIONAL_CAPTURE = r"([^/]*)(?:/?)"


@dataclass(frozen=True, slots=True)
class CompiledPath:
    """A route path compiled once at registration time.

    ``regex`` is ``None`` when the path has no recognised placeholder.
    Such a path never matches dynamically.
    """

    source: str
    regex: re.Pattern[str] | None
    param_names: tuple[str, ...]

    @property
    def is_dynamic(self) -> bool:
        return self.regex is not None


def normalise_path(path: str) -> str:
    """Wrap *path* in single slashes and collapse repeated ones.

    Examples::

        "users/42"    -> "/users/42/"
        "//a//b/"     -> "/a/b/"
        ""            -> "/"
    """
    path = path.strip("/")
    return _REPEATED_SLASHES.sub("/", f"/{path}/")


def compile_path(path: str) -> CompiledPath:
    """Compile a route path into a search expression and parameter names.

    Literal text between placeholders is escaped, so ``.`` and ``+`` in a
    path only ever match themselves.
    """
    normalised = normalise_path(path)
    # Only a slash written in the source terminates a placeholder; the one
    # normalisation appends does not count.
    scanned = normalised if path.endswith("/") else normalised[:-1]
    param_names: list[str] = []
    parts: list[str] = []
    pos = 0

    for found in PLACEHOLDER.finditer(scanned):
        parts.append(re.escape(normalised[pos : found.start()]))
        token = found.group(1)
        param_names.append(token.rstrip("?"))
        parts.append(OPTIONAL_CAPTURE if token.endswith("?") else REQUIRED_CAPTURE)
        pos = found.end()

    if not param_names:
        return CompiledPath(source=path, regex=None, param_names=())

    parts.append(re.escape(normalised[pos:]))
    return CompiledPath(
        source=path,
        regex=re.compile("".join(parts)),
        param_names=tuple(param_names),
    )


def expand_path(path: str, parameters: Mapping[str, Any]) -> str:
    """Fill placeholders in *path* from *parameters*.

    Both ``{key}`` and ``{key?}`` are replaced with ``str(value)``.
    Placeholders left unfilled are removed along with their braces;
    parameters that do not appear in the path are ignored.
    """
    for key, value in parameters.items():
        text = str(value)
        path = path.replace(f"{{{key}}}", text).replace(f"{{{key}?}}", text)
    return _UNFILLED.sub("", path)
