"""Marker overlay: per-path field bags and the observers that refresh them."""

from .engine import ObservationEngine
from .observer import MarkerObserver, WorkspaceObserver
from .store import MarkerStore

__all__ = [
    "MarkerObserver",
    "MarkerStore",
    "ObservationEngine",
    "WorkspaceObserver",
]
