"""Test execution backend client and the marker observers built on it.

The backend is poll-only: it starts test runs and reports their state, but
never pushes. The observers below turn that into marker chains:
  - TestStatusObserver: follows one running test until it finishes
  - AllStatusObserver: refreshes the state of every known test forever
  - run_test: start a run and register its TestStatusObserver
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from .errors import ServiceError
from .markers import MarkerObserver, WorkspaceObserver
from .types import TEST_STATUS_FIELD, ElementState, WorkspaceMarkerUpdate

if TYPE_CHECKING:
    from .workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class TestExecutionClient:
    """Async HTTP client for the test execution service."""

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> TestExecutionClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ServiceError(f"{method} {url} failed: {e}") from e
        return resp

    async def execute(self, path: str) -> int:
        """Start a test run for ``path``; return the HTTP status code."""
        resp = await self._request("POST", "/execute", params={"resource": path})
        logger.info("Started test run for %s (%d)", path, resp.status_code)
        return resp.status_code

    async def status(self, path: str) -> ElementState:
        """Return the execution state of ``path``; the backend long-polls."""
        resp = await self._request(
            "GET", "/status", params={"resource": path, "wait": "true"}
        )
        return ElementState.from_status(resp.text)

    async def status_all(self) -> dict[str, ElementState]:
        """Return the execution state of every test the backend knows."""
        resp = await self._request("GET", "/status/all")
        try:
            entries = resp.json()
        except ValueError as e:
            raise ServiceError(f"Malformed status list: {e}") from e
        return {
            entry["path"]: ElementState.from_status(entry.get("status", ""))
            for entry in entries
            if entry.get("path")
        }


class TestStatusObserver(MarkerObserver[ElementState]):
    """Follows the test status of one path until it stops running."""

    __test__ = False

    def __init__(
        self, client: TestExecutionClient, path: str, poll_interval: float = 1.0
    ) -> None:
        super().__init__(path, TEST_STATUS_FIELD)
        self._client = client
        self._poll_interval = poll_interval
        self._polls = 0

    async def observe(self) -> ElementState:
        if self._polls:
            await asyncio.sleep(self._poll_interval)
        self._polls += 1
        return await self._client.status(self.path)

    def stop_on(self, value: ElementState) -> bool:
        return value != ElementState.RUNNING


class AllStatusObserver(WorkspaceObserver):
    """Refreshes the test status marker of every path the backend reports."""

    def __init__(self, client: TestExecutionClient, poll_interval: float = 1.0) -> None:
        self._client = client
        self._poll_interval = poll_interval
        self._polls = 0

    async def observe(self) -> list[WorkspaceMarkerUpdate]:
        if self._polls:
            await asyncio.sleep(self._poll_interval)
        self._polls += 1
        states = await self._client.status_all()
        return [
            WorkspaceMarkerUpdate(path=path, markers={TEST_STATUS_FIELD: state})
            for path, state in states.items()
        ]


async def run_test(
    workspace: Workspace,
    client: TestExecutionClient,
    path: str,
    poll_interval: float = 1.0,
) -> asyncio.Task[None]:
    """Start a test run and observe its status marker until it finishes."""
    await client.execute(path)
    workspace.set_marker_value(path, TEST_STATUS_FIELD, ElementState.RUNNING)
    return workspace.observe_marker(TestStatusObserver(client, path, poll_interval))
