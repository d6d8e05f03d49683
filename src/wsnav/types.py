"""Data models for workspace elements, marker updates and element states."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Marker field holding the last known ElementState of a test file
TEST_STATUS_FIELD = "testStatus"


class ElementType(str, Enum):
    """Kind of a workspace element."""

    FILE = "file"
    FOLDER = "folder"


class ElementState(str, Enum):
    """Execution state of a workspace element as reported by the backend."""

    IDLE = "idle"
    RUNNING = "running"
    LAST_RUN_SUCCESSFUL = "success"
    LAST_RUN_FAILED = "failed"

    @classmethod
    def from_status(cls, status: str) -> ElementState:
        """Parse a backend status string (IDLE, RUNNING, SUCCESS, FAILED)."""
        normalized = status.strip().lower()
        for state in cls:
            if state.value == normalized:
                return state
        logger.debug("Unknown element status %r, treating as idle", status)
        return cls.IDLE


@dataclass
class WorkspaceElement:
    """One node (file or folder) of the workspace tree."""

    name: str
    path: str  # raw, may carry leading/trailing separators
    type: ElementType = ElementType.FILE
    children: list[WorkspaceElement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type.value,
            "children": [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkspaceElement:
        return cls(
            name=data.get("name", ""),
            path=data.get("path", ""),
            type=ElementType(data.get("type", ElementType.FILE.value)),
            children=[cls.from_dict(c) for c in data.get("children", [])],
        )


@dataclass(frozen=True)
class WorkspaceElementInfo:
    """Flat projection of an element: its children are referenced by path."""

    name: str
    path: str
    type: ElementType
    child_paths: tuple[str, ...] = ()


@dataclass
class WorkspaceMarkerUpdate:
    """A batch of marker field values for one path."""

    path: str
    markers: dict[str, Any] = field(default_factory=dict)
