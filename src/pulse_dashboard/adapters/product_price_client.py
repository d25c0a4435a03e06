"""Product price tracking API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from pulse_dashboard.adapters.http_errors import raise_for_response
from pulse_dashboard.domain.errors import FetchError


class ProductPriceClient(Protocol):
    """Interface for the product price endpoint."""

    async def fetch_product(self, sku: str) -> dict[str, object]:
        """Return the raw price bundle for a SKU."""


@dataclass
class HttpxProductPriceClient(ProductPriceClient):
    """HTTPX-backed product price client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxProductPriceClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def fetch_product(self, sku: str) -> dict[str, object]:
        """Fetch the price bundle for ``sku``."""
        url = f"{self.base_url.rstrip('/')}/{quote(sku, safe='')}"
        try:
            response = await self.http_client.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise FetchError(f"Request failed: {exc}") from exc
        payload = raise_for_response(response)
        if payload.get("success") is not True:
            raise FetchError("API returned failure")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
