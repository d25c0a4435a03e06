"""Product price service with a keyed cache."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from pulse_dashboard.adapters.product_price_client import ProductPriceClient
from pulse_dashboard.domain.cache import CacheEntry
from pulse_dashboard.domain.errors import FetchError
from pulse_dashboard.domain.product import ProductPrice
from pulse_dashboard.services.cache import TtlCache

PRODUCT_PRICE_STORE_KEY = "product_price_cache"

_logger = logging.getLogger(__name__)


def normalize_sku(sku: str) -> str:
    """Strip whitespace from a SKU and reject blank values."""
    cleaned = sku.strip()
    if not cleaned:
        raise ValueError("SKU must not be blank")
    return cleaned


@dataclass
class ProductPriceService:
    """Fetches product price bundles for a SKU.

    Only the most recently fetched SKU is cached; fetching another SKU
    replaces it.
    """

    client: ProductPriceClient
    cache: TtlCache[ProductPrice]
    default_sku: str

    def cached(self, sku: str) -> CacheEntry[ProductPrice] | None:
        """Return the stored bundle for ``sku`` regardless of age."""
        return self.cache.get(normalize_sku(sku))

    def fresh(self, sku: str) -> CacheEntry[ProductPrice] | None:
        """Return the stored bundle for ``sku`` if it is within the TTL."""
        return self.cache.get_fresh(normalize_sku(sku))

    async def fetch(self, sku: str) -> CacheEntry[ProductPrice]:
        """Fetch the bundle for ``sku`` and store it on success."""
        cleaned = normalize_sku(sku)
        payload = await self.client.fetch_product(cleaned)
        try:
            product = ProductPrice.model_validate(payload)
        except ValidationError as exc:
            raise FetchError("Malformed payload") from exc
        if not product.success:
            raise FetchError("API returned failure")
        _logger.info(
            "Fetched product price: sku=%s price=%s",
            cleaned,
            product.data.currentPrice.price,
        )
        return self.cache.set(cleaned, product)
