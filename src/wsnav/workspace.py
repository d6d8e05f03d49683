"""Workspace: path index, marker overlay and navigation over one tree.

The tree itself is supplied by a loader and never modified here. Each
``reload`` rebuilds the flat path index in pre-order, optionally prunes
markers of vanished paths and re-resolves UI references by path.

Key components:
  - Workspace.reload: install a new tree generation
  - marker API: set/get/has/update/clear_stale markers
  - observe / observe_marker: register long-lived observer chains
  - navigation: expansion, selection, successor/predecessor, requests
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

from .errors import ArgumentError, NotFoundError, NotInitializedError
from .markers import MarkerObserver, MarkerStore, ObservationEngine, WorkspaceObserver
from .paths import get_subpaths, normalize_path, parent_path
from .types import (
    ElementType,
    WorkspaceElement,
    WorkspaceElementInfo,
    WorkspaceMarkerUpdate,
)
from .ui_state import NewElementRequest, RenameElementRequest, UiState

logger = logging.getLogger(__name__)


def _key(path: str | None) -> str:
    if path is None:
        raise ArgumentError("path must not be None")
    return normalize_path(path)


def _index_of(elements: list[WorkspaceElement], element: WorkspaceElement) -> int:
    """Position of ``element`` among ``elements`` by identity, or -1."""
    for i, candidate in enumerate(elements):
        if candidate is element:
            return i
    return -1


def _info(element: WorkspaceElement) -> WorkspaceElementInfo:
    return WorkspaceElementInfo(
        name=element.name,
        path=element.path,
        type=element.type,
        child_paths=tuple(c.path for c in element.children),
    )


class Workspace:
    """In-memory model of a workspace tree for a single owner."""

    def __init__(
        self,
        root: WorkspaceElement | None = None,
        *,
        error_delay: float = 0.0,
    ) -> None:
        self._root: WorkspaceElement | None = None
        self._index: dict[str, WorkspaceElement] = {}
        self._ui = UiState()
        self._markers = MarkerStore(self._contains_key)
        self._engine = ObservationEngine(
            self._markers, apply_updates=self.update_markers, error_delay=error_delay
        )
        if root is not None:
            self.reload(root)

    # --- Tree generation ---

    @property
    def initialized(self) -> bool:
        return self._root is not None

    @property
    def ui_state(self) -> UiState:
        return self._ui

    def reload(
        self, new_root: WorkspaceElement | None, clear_stale_markers: bool = True
    ) -> None:
        """Replace the tree and rebuild the path index."""
        self._root = new_root
        self._index.clear()
        if new_root is None:
            self._ui.selected_element = None
            self._ui.new_element_request = None
            self._ui.rename_element_request = None
            logger.info("Workspace unloaded")
            return

        # Pre-order walk, children pushed in reverse to keep document order
        stack = [new_root]
        while stack:
            element = stack.pop()
            self._index[normalize_path(element.path)] = element
            stack.extend(reversed(element.children))

        self._ui.set_expanded(normalize_path(new_root.path), True)
        if clear_stale_markers:
            self.clear_stale_markers()
        self._resolve_ui_references()
        logger.info("Workspace reloaded: %d element(s)", len(self._index))

    def _resolve_ui_references(self) -> None:
        """Point selection and pending requests at the new tree generation."""
        ui = self._ui
        if ui.selected_element is not None:
            ui.selected_element = self._index.get(normalize_path(ui.selected_element.path))

        request = ui.new_element_request
        if request is not None and request.selected_element is not None:
            current = self._index.get(normalize_path(request.selected_element.path))
            if current is None:
                logger.info(
                    "Dropping new element request: %s is gone",
                    request.selected_element.path,
                )
                ui.new_element_request = None
            else:
                request.selected_element = current

        rename = ui.rename_element_request
        if rename is not None:
            current = self._index.get(normalize_path(rename.selected_element.path))
            if current is None:
                logger.info(
                    "Dropping rename request: %s is gone", rename.selected_element.path
                )
                ui.rename_element_request = None
            else:
                rename.selected_element = current

    def _require_initialized(self) -> WorkspaceElement:
        if self._root is None:
            raise NotInitializedError("The workspace has not been loaded yet.")
        return self._root

    def _contains_key(self, key: str) -> bool:
        return key in self._index

    def _element(self, path: str | None) -> WorkspaceElement:
        self._require_initialized()
        key = _key(path)
        element = self._index.get(key)
        if element is None:
            raise NotFoundError(f'There is no element with path "{path}" in this workspace.')
        return element

    # --- Path queries ---

    @staticmethod
    def get_subpaths(path: str) -> list[str]:
        return get_subpaths(path)

    def contains(self, path: str | None) -> bool:
        self._require_initialized()
        return path is not None and normalize_path(path) in self._index

    def get_element_info(self, path: str) -> WorkspaceElementInfo:
        return _info(self._element(path))

    def get_parent(self, path: str) -> WorkspaceElement | None:
        root = self._require_initialized()
        normalized = _key(path)
        if normalized == "":
            return None
        prefix = parent_path(normalized)
        if prefix is not None:
            return self._index.get(prefix)
        if normalize_path(root.path) == "":
            return root
        return None

    def get_root_path(self) -> str:
        return self._require_initialized().path

    def has_sub_elements(self, path: str) -> bool:
        return len(self._element(path).children) > 0

    def name_without_file_extension(self, path: str) -> str:
        name = self._element(path).name
        idx = name.rfind(".")
        return name[:idx] if idx >= 0 else name

    # --- Markers ---

    def set_marker_value(self, path: str, field: str, value: Any) -> None:
        self._require_initialized()
        if not field:
            raise ArgumentError("empty field names are not allowed")
        self._markers.set_value(_key(path), field, value)

    def get_marker_value(self, path: str, field: str) -> Any:
        self._require_initialized()
        return self._markers.get_value(_key(path), field)

    def has_marker(self, path: str, field: str) -> bool:
        self._require_initialized()
        return self._markers.has(_key(path), field)

    def get_markers(self, path: str) -> dict[str, Any]:
        self._require_initialized()
        return self._markers.get_all(_key(path))

    def update_markers(self, updates: Iterable[WorkspaceMarkerUpdate]) -> None:
        """Apply a batch of marker updates; failing entries are skipped."""
        normalized = [
            WorkspaceMarkerUpdate(
                path=normalize_path(u.path) if u.path is not None else u.path,
                markers=u.markers,
            )
            for u in updates
        ]
        self._markers.update(normalized)

    def clear_stale_markers(self) -> None:
        self._markers.prune(self._contains_key)

    # --- Observation ---

    def observe(self, observer: WorkspaceObserver) -> asyncio.Task[None]:
        """Start a bulk marker observation chain (needs a running loop)."""
        return self._engine.start_workspace_chain(observer)

    def observe_marker(self, observer: MarkerObserver[Any]) -> asyncio.Task[None]:
        """Start observing one (path, field) marker (needs a running loop)."""
        self._require_initialized()
        key = _key(observer.path)
        if key not in self._index:
            raise NotFoundError(
                f'There is no element with path "{observer.path}" in this workspace.'
            )
        if not self._markers.has(key, observer.field):
            # Present-but-unknown while the first poll is in flight
            self._markers.set_value(key, observer.field, None)
        initial = self._markers.get_value(key, observer.field)
        return self._engine.start_marker_chain(observer, key, initial)

    async def stop_observing(self) -> None:
        await self._engine.stop()

    # --- Editor state ---

    def get_active(self) -> str | None:
        return self._ui.active_editor_path

    def set_active(self, path: str) -> None:
        if self.contains(path):
            self._ui.active_editor_path = path
        else:
            logger.warning("Cannot activate %s: not in workspace", path)

    def is_dirty(self, path: str) -> bool:
        return self._ui.is_dirty(_key(path))

    def set_dirty(self, path: str, dirty: bool) -> None:
        self._ui.set_dirty(_key(path), dirty)

    # --- Selection ---

    def get_selected(self) -> str | None:
        selected = self._ui.selected_element
        return selected.path if selected is not None else None

    def is_selected(self, path: str | None) -> bool:
        selected = self.get_selected()
        if selected is None or path is None:
            return selected is None and path is None
        return normalize_path(selected) == normalize_path(path)

    def set_selected(self, path: str | None) -> None:
        self._ui.selected_element = None if path is None else self._element(path)

    # --- Expansion ---

    def is_expanded(self, path: str) -> bool:
        return self._ui.is_expanded(_key(path))

    def set_expanded(self, path: str, expanded: bool) -> None:
        if self.contains(path) and self._element(path).type == ElementType.FOLDER:
            self._ui.set_expanded(normalize_path(path), expanded)

    def toggle_expanded(self, path: str) -> None:
        self.set_expanded(path, not self.is_expanded(path))

    def collapse_all(self) -> None:
        root = self._require_initialized()
        self._ui.clear_expanded()
        self._ui.set_expanded(normalize_path(root.path), True)

    def reveal_element(self, path: str) -> None:
        root = self._require_initialized()
        for subpath in get_subpaths(_key(path)):
            self._ui.set_expanded(subpath, True)
        self._ui.set_expanded(normalize_path(root.path), True)

    # --- Requests ---

    def new_element(self, type: ElementType | str) -> None:
        selected = self._ui.selected_element
        if selected is not None and selected.type == ElementType.FOLDER:
            self._ui.set_expanded(normalize_path(selected.path), True)
        self._ui.new_element_request = NewElementRequest(
            selected_element=selected, type=ElementType(type)
        )

    def has_new_element_request(self) -> bool:
        return self._ui.new_element_request is not None

    def get_new_element(self) -> WorkspaceElementInfo | None:
        request = self._ui.new_element_request
        if request is None or request.selected_element is None:
            return None
        return _info(request.selected_element)

    def get_new_element_type(self) -> ElementType | None:
        request = self._ui.new_element_request
        return request.type if request is not None else None

    def remove_new_element_request(self) -> None:
        self._ui.new_element_request = None

    def rename_selected_element(self) -> None:
        selected = self._ui.selected_element
        if selected is None:
            logger.info("There is no selected element to rename")
            return
        self._ui.rename_element_request = RenameElementRequest(selected_element=selected)

    def has_rename_element_request(self) -> bool:
        return self._ui.rename_element_request is not None

    def get_rename_element(self) -> WorkspaceElementInfo | None:
        request = self._ui.rename_element_request
        return _info(request.selected_element) if request is not None else None

    def remove_rename_element_request(self) -> None:
        self._ui.rename_element_request = None

    # --- Visibility traversal ---

    def select_successor(self) -> None:
        selected = self._ui.selected_element
        if selected is None:
            return
        successor = self._next_visible(selected)
        if successor is not None:
            self._ui.selected_element = successor

    def select_predecessor(self) -> None:
        selected = self._ui.selected_element
        if selected is None:
            return
        predecessor = self._previous_visible(selected)
        if predecessor is not None:
            self._ui.selected_element = predecessor

    def _next_visible(self, element: WorkspaceElement) -> WorkspaceElement | None:
        if element.children and self._ui.is_expanded(normalize_path(element.path)):
            return element.children[0]
        current = element
        parent = self.get_parent(element.path)
        while parent is not None:
            idx = _index_of(parent.children, current)
            if 0 <= idx < len(parent.children) - 1:
                return parent.children[idx + 1]
            current, parent = parent, self.get_parent(parent.path)
        return None

    def _previous_visible(self, element: WorkspaceElement) -> WorkspaceElement | None:
        parent = self.get_parent(element.path)
        if parent is None:
            return None
        idx = _index_of(parent.children, element)
        if idx <= 0:
            return parent
        return self._last_visible_descendant(parent.children[idx - 1])

    def _last_visible_descendant(self, element: WorkspaceElement) -> WorkspaceElement:
        while (
            element.type == ElementType.FOLDER
            and element.children
            and self._ui.is_expanded(normalize_path(element.path))
        ):
            element = element.children[-1]
        return element
