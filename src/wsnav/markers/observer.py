"""Observer protocols consumed by the observation engine.

A marker source implements one of two capabilities:
  - WorkspaceObserver: each poll yields a batch of WorkspaceMarkerUpdate.
  - MarkerObserver: bound to one (path, field); each poll yields a value.

Both pair an async ``observe()`` step with a synchronous ``stop_on``
predicate that decides whether the polling chain ends after a value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..types import WorkspaceMarkerUpdate

V = TypeVar("V")


class WorkspaceObserver(ABC):
    """Produces marker-update batches for arbitrary paths."""

    @abstractmethod
    async def observe(self) -> list[WorkspaceMarkerUpdate]:
        """Wait for and return the next batch of updates."""

    def stop_on(self, updates: list[WorkspaceMarkerUpdate]) -> bool:
        return False


class MarkerObserver(ABC, Generic[V]):
    """Produces successive values of a single marker field."""

    def __init__(self, path: str, field: str) -> None:
        self.path = path
        self.field = field

    @abstractmethod
    async def observe(self) -> V:
        """Wait for and return the next value of the observed field."""

    @abstractmethod
    def stop_on(self, value: V) -> bool:
        """Return True when observation should end after ``value``."""
