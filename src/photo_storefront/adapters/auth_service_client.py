"""Authentication service API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


@dataclass(frozen=True)
class ServiceResponse:
    """Status code and decoded JSON body of a service call."""

    status_code: int
    payload: dict[str, object]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AuthServiceClient(Protocol):
    """Interface for authentication service interactions.

    Implementations raise ``httpx.TransportError`` when the service cannot be
    reached; any HTTP response, successful or not, is returned.
    """

    async def login(self, email: str, password: str) -> ServiceResponse:
        """Submit login credentials."""

    async def register(self, name: str, email: str, password: str) -> ServiceResponse:
        """Submit a registration request."""


@dataclass
class HttpxAuthServiceClient(AuthServiceClient):
    """HTTPX-backed authentication service client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxAuthServiceClient":
        """Create an auth client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def login(self, email: str, password: str) -> ServiceResponse:
        """POST credentials to /auth/login."""
        return await self._post("/auth/login", {"email": email, "password": password})

    async def register(self, name: str, email: str, password: str) -> ServiceResponse:
        """POST a new account to /auth/register."""
        return await self._post(
            "/auth/register", {"name": name, "email": email, "password": password}
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(self, path: str, body: dict[str, str]) -> ServiceResponse:
        response = await self.http_client.post(
            f"{self.base_url.rstrip('/')}{path}", json=body, timeout=self.timeout
        )
        return ServiceResponse(
            status_code=response.status_code, payload=_json_object(response)
        )


def _json_object(response: httpx.Response) -> dict[str, object]:
    """Return the response body as a JSON object, or an empty dict."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
