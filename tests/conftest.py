"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from pulse_dashboard.adapters.ip_info_client import IpInfoClient
from pulse_dashboard.adapters.product_price_client import ProductPriceClient
from pulse_dashboard.config import Settings
from pulse_dashboard.containers import AppContainer, build_views
from pulse_dashboard.domain.errors import FetchError
from pulse_dashboard.domain.ip_info import IpInfo
from pulse_dashboard.domain.product import ProductPrice
from pulse_dashboard.services.cache import InMemoryKeyValueStore, TtlCache
from pulse_dashboard.services.ip_info import IP_INFO_STORE_KEY, IpInfoService
from pulse_dashboard.services.product_price import (
    PRODUCT_PRICE_STORE_KEY,
    ProductPriceService,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


def ip_payload(ip: str = "203.0.113.7") -> dict[str, object]:
    return {
        "ip": ip,
        "ASN": 4134,
        "ISP": "Example Telecom",
        "publicIP": ip,
        "country": "CN",
        "city": "Shanghai",
        "region": "Shanghai",
        "latitude": "31.2222",
        "longitude": "121.4581",
        "postalCode": "",
        "timezone": "Asia/Shanghai",
    }


def product_payload(sku: str = "100209267857", price: str = "5999.00") -> dict:
    return {
        "success": True,
        "data": {
            "product": {
                "id": "p-1",
                "name": "Example Phone",
                "searchKeyword": "phone",
                "jdSkuId": sku,
                "jdUrl": f"https://item.jd.com/{sku}.html",
                "variant": "256GB",
                "imageUrl": "",
                "shopName": "Example Store",
                "isActive": True,
                "createdAt": "2026-10-01T00:00:00Z",
                "updatedAt": "2026-10-18T00:00:00Z",
            },
            "currentPrice": {
                "price": price,
                "shopName": "Example Store",
                "inStock": True,
                "updatedAt": "2026-10-18T00:00:00Z",
            },
            "priceHistory": [
                {"price": "6199.00", "createdAt": "2026-10-10T00:00:00Z"},
                {"price": price, "createdAt": "2026-10-18T00:00:00Z"},
            ],
            "stats": {
                "minPrice": price,
                "maxPrice": "6199.00",
                "avgPrice": "6099.005",
                "recordCount": "2",
            },
        },
    }


@dataclass
class FakeClock:
    """Settable clock for cache tests."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now


@dataclass
class FailingStore:
    """Store whose reads and writes always fail."""

    def read(self, key: str) -> str | None:
        return None

    def write(self, key: str, value: str) -> bool:
        return False

    def delete(self, key: str) -> bool:
        return False


@dataclass
class FakeIpInfoClient(IpInfoClient):
    """Fake IP info client returning queued payloads or errors."""

    responses: list[dict[str, object] | Exception] = field(
        default_factory=lambda: [ip_payload()]
    )
    calls: int = 0

    async def fetch_ip_info(self) -> dict[str, object]:
        self.calls += 1
        response = self.responses[min(self.calls, len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class FakeProductPriceClient(ProductPriceClient):
    """Fake product client keyed by SKU."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    async def fetch_product(self, sku: str) -> dict[str, object]:
        self.requested.append(sku)
        if sku not in self.payloads:
            raise FetchError("Request failed: 404", status_code=404)
        return self.payloads[sku]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(cache_dir=tmp_path / "cache", persist_cache=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def ip_cache(store: InMemoryKeyValueStore, clock: FakeClock) -> TtlCache[IpInfo]:
    return TtlCache(store, IP_INFO_STORE_KEY, IpInfo, clock=clock)


@pytest.fixture
def product_cache(
    store: InMemoryKeyValueStore, clock: FakeClock
) -> TtlCache[ProductPrice]:
    return TtlCache(store, PRODUCT_PRICE_STORE_KEY, ProductPrice, clock=clock)


@pytest.fixture
def ip_client() -> FakeIpInfoClient:
    return FakeIpInfoClient()


@pytest.fixture
def product_client() -> FakeProductPriceClient:
    return FakeProductPriceClient(
        payloads={"100209267857": product_payload("100209267857")}
    )


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    ip_cache: TtlCache[IpInfo],
    product_cache: TtlCache[ProductPrice],
    ip_client: FakeIpInfoClient,
    product_client: FakeProductPriceClient,
) -> AppContainer:
    ip_info_service = IpInfoService(client=ip_client, cache=ip_cache)
    product_price_service = ProductPriceService(
        client=product_client,
        cache=product_cache,
        default_sku=settings.default_sku,
    )
    ip_info_view, product_price_view = build_views(
        ip_info_service, product_price_service
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        ip_info_service=ip_info_service,
        product_price_service=product_price_service,
        ip_info_view=ip_info_view,
        product_price_view=product_price_view,
        close_resources=close_resources,
    )
