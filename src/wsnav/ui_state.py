"""Ephemeral navigation state of a workspace tree view.

Nothing here is persisted. Path sets are keyed by normalized path; the
owning Workspace normalizes before calling in.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import ElementType, WorkspaceElement


@dataclass
class NewElementRequest:
    """Pending request to create an element next to/below the selection."""

    selected_element: WorkspaceElement | None
    type: ElementType


@dataclass
class RenameElementRequest:
    """Pending request to rename the selected element."""

    selected_element: WorkspaceElement


@dataclass
class UiState:
    """Expansion, selection, editor and request state of one session."""

    expanded_paths: set[str] = field(default_factory=set)
    dirty_paths: set[str] = field(default_factory=set)
    active_editor_path: str | None = None
    selected_element: WorkspaceElement | None = None
    new_element_request: NewElementRequest | None = None
    rename_element_request: RenameElementRequest | None = None

    def is_expanded(self, path: str) -> bool:
        return path in self.expanded_paths

    def set_expanded(self, path: str, expanded: bool) -> None:
        if expanded:
            self.expanded_paths.add(path)
        else:
            self.expanded_paths.discard(path)

    def clear_expanded(self) -> None:
        self.expanded_paths.clear()

    def is_dirty(self, path: str) -> bool:
        return path in self.dirty_paths

    def set_dirty(self, path: str, dirty: bool) -> None:
        if dirty:
            self.dirty_paths.add(path)
        else:
            self.dirty_paths.discard(path)
