"""Path normalization helpers for workspace lookups.

Paths are plain ``/``-separated strings. The normalized form strips leading
and trailing separator runs and nothing else, so interior ``//`` and segment
case survive verbatim.
"""

import re

SEPARATOR = "/"

_LEADING = re.compile(r"^/+")
_TRAILING = re.compile(r"/+$")


def normalize_path(path: str) -> str:
    """Strip leading and trailing separator runs from a raw path."""
    return _TRAILING.sub("", _LEADING.sub("", path))


def get_subpaths(path: str) -> list[str]:
    """Return the strict ancestor chain of a path, outermost first.

    The path itself is not included, e.g. ``"some/example/path"`` yields
    ``["some", "some/example"]`` and a single segment yields ``[]``.
    """
    segments = normalize_path(path).split(SEPARATOR)
    result: list[str] = []
    current = ""
    for segment in segments[:-1]:
        current = f"{current}{SEPARATOR}{segment}" if result else segment
        result.append(current)
    return result


def parent_path(path: str) -> str | None:
    """Return the normalized prefix up to the last separator, or None."""
    normalized = normalize_path(path)
    idx = normalized.rfind(SEPARATOR)
    if idx < 0:
        return None
    return normalized[:idx]
