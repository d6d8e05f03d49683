"""Per-path marker bags with dynamic field names.

The store itself knows nothing about the tree. Membership checks are
delegated to a ``contains`` callable supplied by the owning Workspace so
writes against paths outside the current index are rejected.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from ..errors import (
    ArgumentError,
    MarkerFieldNotFoundError,
    MarkerNotFoundError,
    NotInWorkspaceError,
)
from ..types import WorkspaceMarkerUpdate

logger = logging.getLogger(__name__)


def _require_path(path: str | None) -> str:
    if path is None:
        raise ArgumentError("path must not be None")
    return path


class MarkerStore:
    """Mapping from normalized path to a bag of named marker values."""

    def __init__(self, contains: Callable[[str], bool]) -> None:
        self._contains = contains
        self._bags: dict[str, dict[str, Any]] = {}

    def get_value(self, path: str, field: str) -> Any:
        bag = self._bags.get(_require_path(path))
        if bag is None:
            raise MarkerNotFoundError(f'There are no marker fields for path "{path}".')
        if field not in bag:
            raise MarkerFieldNotFoundError(
                f'The marker field "{field}" does not exist for path "{path}".'
            )
        return bag[field]

    def has(self, path: str, field: str) -> bool:
        bag = self._bags.get(_require_path(path))
        return bag is not None and field in bag

    def get_all(self, path: str) -> dict[str, Any]:
        return dict(self._bags.get(_require_path(path), {}))

    def set_value(self, path: str, field: str, value: Any) -> None:
        if not field:
            raise ArgumentError("empty field names are not allowed")
        _require_path(path)
        if not self._contains(path):
            raise NotInWorkspaceError(f'No element for path "{path}" in this workspace')
        self._bags.setdefault(path, {})[field] = value

    def update(self, updates: Iterable[WorkspaceMarkerUpdate]) -> int:
        """Apply every (path, field, value) triple, skipping failures.

        Returns the number of fields written.
        """
        applied = 0
        for update in updates:
            for field, value in update.markers.items():
                try:
                    self.set_value(update.path, field, value)
                    applied += 1
                except Exception as e:
                    logger.warning(
                        'Skipping update of marker "%s" for path "%s": %s',
                        field,
                        update.path,
                        e,
                    )
                    logger.debug("Marker update failed", exc_info=True)
        return applied

    def prune(self, keep: Callable[[str], bool]) -> list[str]:
        """Drop every bag whose path fails ``keep``; return removed paths."""
        stale = [p for p in self._bags if not keep(p)]
        for p in stale:
            del self._bags[p]
        if stale:
            logger.debug("Cleared stale markers for %d path(s)", len(stale))
        return stale
