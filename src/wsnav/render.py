"""Plain-text rendering of the visible workspace tree.

Walks the tree the same way the navigation does: pre-order, never
descending into collapsed folders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .indicators import IndicatorFieldSetup
from .types import ElementType

if TYPE_CHECKING:
    from .workspace import Workspace

INDENT = "  "


def render_tree(
    workspace: Workspace, setup: IndicatorFieldSetup | None = None
) -> list[str]:
    """Return one line per visible element, root first."""
    lines: list[str] = []
    stack: list[tuple[str, int]] = [(workspace.get_root_path(), 0)]
    while stack:
        path, depth = stack.pop()
        info = workspace.get_element_info(path)
        is_folder = info.type == ElementType.FOLDER
        expanded = is_folder and workspace.is_expanded(path)

        if is_folder:
            icon = "▾" if expanded else "▸"
        else:
            icon = "·"
        cursor = ">" if workspace.is_selected(path) else " "
        line = f"{cursor} {INDENT * depth}{icon} {info.name}"
        if workspace.is_dirty(path):
            line += "*"
        if setup is not None:
            indicators = setup.active_indicators(info, workspace.get_markers(path))
            if indicators:
                line += " " + " ".join(i.style for i in indicators)
        lines.append(line)

        if expanded:
            stack.extend((child, depth + 1) for child in reversed(info.child_paths))
    return lines
