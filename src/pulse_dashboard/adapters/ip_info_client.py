"""IP geolocation API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from pulse_dashboard.adapters.http_errors import raise_for_response
from pulse_dashboard.domain.errors import FetchError


class IpInfoClient(Protocol):
    """Interface for the IP info endpoint."""

    async def fetch_ip_info(self) -> dict[str, object]:
        """Return raw IP info for the caller's public address."""


@dataclass
class HttpxIpInfoClient(IpInfoClient):
    """HTTPX-backed IP info client."""

    url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, url: str, timeout: float = 15) -> "HttpxIpInfoClient":
        """Create a client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def fetch_ip_info(self) -> dict[str, object]:
        """Fetch IP info from the configured endpoint."""
        try:
            response = await self.http_client.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise FetchError(f"Request failed: {exc}") from exc
        return raise_for_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
