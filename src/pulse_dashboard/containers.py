"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from pulse_dashboard.adapters.file_store import FileKeyValueStore
from pulse_dashboard.adapters.ip_info_client import HttpxIpInfoClient
from pulse_dashboard.adapters.product_price_client import HttpxProductPriceClient
from pulse_dashboard.config import Settings
from pulse_dashboard.domain.ip_info import IpInfo
from pulse_dashboard.domain.product import ProductPrice
from pulse_dashboard.services.cache import (
    InMemoryKeyValueStore,
    KeyValueStore,
    TtlCache,
)
from pulse_dashboard.services.ip_info import IP_INFO_STORE_KEY, IpInfoService
from pulse_dashboard.services.product_price import (
    PRODUCT_PRICE_STORE_KEY,
    ProductPriceService,
    normalize_sku,
)
from pulse_dashboard.services.views import CachedView


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    ip_info_service: IpInfoService
    product_price_service: ProductPriceService
    ip_info_view: CachedView[IpInfo]
    product_price_view: CachedView[ProductPrice]
    close_resources: Callable[[], Awaitable[None]]


def build_views(
    ip_info_service: IpInfoService, product_price_service: ProductPriceService
) -> tuple[CachedView[IpInfo], CachedView[ProductPrice]]:
    """Create the panel views on top of their services."""
    ip_info_view: CachedView[IpInfo] = CachedView(
        name="ip_info",
        lookup=lambda _key: ip_info_service.cached(),
        fetch=lambda _key: ip_info_service.fetch(),
    )
    product_price_view: CachedView[ProductPrice] = CachedView(
        name="product_price",
        lookup=product_price_service.cached,
        fetch=product_price_service.fetch,
        default_key=product_price_service.default_sku,
        normalize_key=normalize_sku,
    )
    return ip_info_view, product_price_view


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store: KeyValueStore = (
        FileKeyValueStore(resolved_settings.cache_dir)
        if resolved_settings.persist_cache
        else InMemoryKeyValueStore()
    )
    ttl = timedelta(seconds=resolved_settings.cache_ttl_seconds)
    ip_info_client = HttpxIpInfoClient.create(
        url=resolved_settings.ip_info_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    product_price_client = HttpxProductPriceClient.create(
        base_url=resolved_settings.product_api_base,
        timeout=resolved_settings.http_timeout_seconds,
    )
    ip_info_service = IpInfoService(
        client=ip_info_client,
        cache=TtlCache(store, IP_INFO_STORE_KEY, IpInfo, ttl=ttl),
    )
    product_price_service = ProductPriceService(
        client=product_price_client,
        cache=TtlCache(store, PRODUCT_PRICE_STORE_KEY, ProductPrice, ttl=ttl),
        default_sku=resolved_settings.default_sku,
    )
    ip_info_view, product_price_view = build_views(
        ip_info_service, product_price_service
    )

    async def close_resources() -> None:
        await ip_info_client.close()
        await product_price_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        ip_info_service=ip_info_service,
        product_price_service=product_price_service,
        ip_info_view=ip_info_view,
        product_price_view=product_price_view,
        close_resources=close_resources,
    )
