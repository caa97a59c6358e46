"""Catalog service API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class CatalogClient(Protocol):
    """Interface for catalog service interactions."""

    async def list_images(self) -> dict[str, object]:
        """Return the raw image listing payload."""


@dataclass
class HttpxCatalogClient(CatalogClient):
    """HTTPX-backed catalog client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxCatalogClient":
        """Create a catalog client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def list_images(self) -> dict[str, object]:
        """Fetch the active image listing."""
        url = f"{self.base_url.rstrip('/')}/fotos"
        response = await self.http_client.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
