"""Persistence backend client for loading the workspace tree."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import ServiceError
from .types import WorkspaceElement

logger = logging.getLogger(__name__)

LIST_FILES_URL = "/workspace/list-files"


class PersistenceClient:
    """Async HTTP client for the workspace persistence service."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> PersistenceClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_files(self) -> WorkspaceElement:
        """Fetch the complete workspace tree."""
        try:
            resp = await self._client.get(LIST_FILES_URL)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise ServiceError(f"Listing workspace files failed: {e}") from e
        except ValueError as e:
            raise ServiceError(f"Malformed workspace listing: {e}") from e
        root = WorkspaceElement.from_dict(data)
        logger.debug("Listed workspace rooted at %r", root.path)
        return root
