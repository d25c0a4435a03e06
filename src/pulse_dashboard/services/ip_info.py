"""IP info service with a singleton cache."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from pulse_dashboard.adapters.ip_info_client import IpInfoClient
from pulse_dashboard.domain.cache import CacheEntry
from pulse_dashboard.domain.errors import FetchError
from pulse_dashboard.domain.ip_info import IpInfo
from pulse_dashboard.services.cache import TtlCache

IP_INFO_STORE_KEY = "ip_info_cache"

_logger = logging.getLogger(__name__)


@dataclass
class IpInfoService:
    """Fetches public IP details and keeps the last good response."""

    client: IpInfoClient
    cache: TtlCache[IpInfo]

    def cached(self) -> CacheEntry[IpInfo] | None:
        """Return the stored IP info regardless of age."""
        return self.cache.get()

    def fresh(self) -> CacheEntry[IpInfo] | None:
        """Return the stored IP info if it is still within the TTL."""
        return self.cache.get_fresh()

    async def fetch(self) -> CacheEntry[IpInfo]:
        """Fetch IP info and store it on success."""
        payload = await self.client.fetch_ip_info()
        try:
            info = IpInfo.model_validate(payload)
        except ValidationError as exc:
            raise FetchError("Malformed payload") from exc
        _logger.info("Fetched IP info: country=%s", info.country)
        return self.cache.set(None, info)
