"""Observation engine: self-perpetuating marker polling chains.

Each registered observer runs as one asyncio task executing an explicit
loop: poll, apply, decide whether to continue. Poll n+1 is only issued after
poll n has been applied, so a chain is strictly ordered with respect to
itself; separate chains are not ordered with respect to each other.

Failures never end a chain. A failed poll is logged and polling resumes
(after ``error_delay`` seconds); ``stop_on`` is only consulted for values
that were actually received.

Key components:
  - ObservationEngine.start_workspace_chain: bulk WorkspaceObserver chain
  - ObservationEngine.start_marker_chain: single-field MarkerObserver chain
  - ObservationEngine.stop: cancel all live chains
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable

from ..types import WorkspaceMarkerUpdate
from .observer import MarkerObserver, WorkspaceObserver
from .store import MarkerStore

logger = logging.getLogger(__name__)


class ObservationEngine:
    """Runs observer chains against a MarkerStore."""

    def __init__(
        self,
        store: MarkerStore,
        *,
        apply_updates: Callable[[Iterable[WorkspaceMarkerUpdate]], Any] | None = None,
        error_delay: float = 0.0,
    ) -> None:
        self._store = store
        self._apply_updates = apply_updates or store.update
        self._error_delay = error_delay
        self._tasks: set[asyncio.Task[None]] = set()
        self._running = True

    # --- Registration ---

    def start_workspace_chain(self, observer: WorkspaceObserver) -> asyncio.Task[None]:
        return self._spawn(self._workspace_chain(observer), "workspace-observer")

    def start_marker_chain(
        self, observer: MarkerObserver[Any], path: str, initial: Any = None
    ) -> asyncio.Task[None]:
        return self._spawn(
            self._marker_chain(observer, path, initial),
            f"marker-observer:{path}#{observer.field}",
        )

    def _spawn(self, coro: Any, name: str) -> asyncio.Task[None]:
        loop = asyncio.get_running_loop()
        self._running = True
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def stop(self) -> None:
        """Stop re-polling and cancel every live chain."""
        self._running = False
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if tasks:
            logger.info("Stopped %d observer chain(s)", len(tasks))

    # --- Chains ---

    async def _workspace_chain(self, observer: WorkspaceObserver) -> None:
        logger.debug("Workspace observer %r started", observer)
        while self._running:
            try:
                updates = await observer.observe()
            except Exception as e:
                logger.warning(
                    "Problem occurred while observing markers of this workspace: %s", e
                )
                logger.debug("Workspace observer %r failed", observer, exc_info=True)
                await asyncio.sleep(self._error_delay)
                continue

            try:
                self._apply_updates(updates or [])
            except Exception as e:
                logger.warning("Discarding malformed marker batch: %s", e)
                logger.debug("Malformed batch from %r", observer, exc_info=True)
            if observer.stop_on(updates):
                break
        logger.debug("Workspace observer %r finished", observer)

    async def _marker_chain(
        self, observer: MarkerObserver[Any], path: str, value: Any
    ) -> None:
        field = observer.field
        logger.debug('Observing "%s" of "%s"', field, path)
        while self._running:
            try:
                value = await observer.observe()
            except Exception as e:
                logger.warning(
                    'Problem occurred while observing "%s" of "%s": %s', field, path, e
                )
                logger.debug("Marker observer %r failed", observer, exc_info=True)
                # Continue with the last known value as payload
                self._write(path, field, value)
                await asyncio.sleep(self._error_delay)
                continue

            self._write(path, field, value)
            if observer.stop_on(value):
                break
        logger.debug('Stopped observing "%s" of "%s"', field, path)

    def _write(self, path: str, field: str, value: Any) -> None:
        try:
            self._store.set_value(path, field, value)
        except Exception as e:
            logger.warning('Skipping update of marker "%s" for path "%s": %s', field, path, e)
            logger.debug("Marker write failed", exc_info=True)
