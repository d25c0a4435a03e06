"""Single-slot TTL read-through cache backed by a key-value store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Generic, Protocol, TypeVar

from pydantic import AwareDatetime, BaseModel, ValidationError

from pulse_dashboard.domain.cache import CacheEntry

DEFAULT_TTL = timedelta(hours=24)

ModelT = TypeVar("ModelT", bound=BaseModel)

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistent string store.

    Implementations report problems through return values and never raise for
    I/O failures: ``read`` yields ``None`` for a missing or unreadable slot,
    ``write`` and ``delete`` yield ``False`` when they could not complete.
    """

    def read(self, key: str) -> str | None:
        """Return the raw value stored under ``key``."""

    def write(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``."""

    def delete(self, key: str) -> bool:
        """Remove the value stored under ``key``."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store used when persistence is disabled."""

    values: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True

    def delete(self, key: str) -> bool:
        self.values.pop(key, None)
        return True


class _StoredSlot(BaseModel):
    key: str | None = None
    payload: dict[str, Any]
    stored_at: AwareDatetime


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TtlCache(Generic[ModelT]):
    """Time-boxed cache holding at most one entry.

    Writing an entry for one key evicts the entry for any other key. Expiry
    is judged when reading; nothing is removed in the background.
    """

    store: KeyValueStore
    store_key: str
    payload_type: type[ModelT]
    ttl: timedelta = DEFAULT_TTL
    clock: Callable[[], datetime] = _utcnow

    def get(self, key: str | None = None) -> CacheEntry[ModelT] | None:
        """Return the stored entry for ``key`` regardless of its age."""
        entry = self._read()
        if entry is None or entry.key != key:
            return None
        return entry

    def get_fresh(self, key: str | None = None) -> CacheEntry[ModelT] | None:
        """Return the stored entry for ``key`` only while it is within the TTL."""
        entry = self.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    def set(self, key: str | None, payload: ModelT) -> CacheEntry[ModelT]:
        """Overwrite the slot with ``payload`` stamped with the current time."""
        entry = CacheEntry(key=key, payload=payload, stored_at=self.clock())
        slot = _StoredSlot(
            key=key,
            payload=payload.model_dump(mode="json"),
            stored_at=entry.stored_at,
        )
        if not self.store.write(self.store_key, slot.model_dump_json()):
            _logger.warning("Cache write failed: store_key=%s", self.store_key)
        return entry

    def stored_at(self, key: str | None = None) -> datetime | None:
        """Return when the entry for ``key`` was written."""
        entry = self.get(key)
        return entry.stored_at if entry else None

    def clear(self) -> None:
        """Delete the slot."""
        if not self.store.delete(self.store_key):
            _logger.warning("Cache delete failed: store_key=%s", self.store_key)

    def is_fresh(self, entry: CacheEntry[ModelT]) -> bool:
        """Return True when ``entry`` is younger than the TTL."""
        return self.clock() - entry.stored_at < self.ttl

    def _read(self) -> CacheEntry[ModelT] | None:
        raw = self.store.read(self.store_key)
        if raw is None:
            return None
        return self._decode(raw)

    def _decode(self, raw: str) -> CacheEntry[ModelT] | None:
        try:
            slot = _StoredSlot.model_validate_json(raw)
            payload = self.payload_type.model_validate(slot.payload)
        except ValidationError:
            _logger.info("Ignoring unreadable cache slot: store_key=%s", self.store_key)
            return None
        return CacheEntry(key=slot.key, payload=payload, stored_at=slot.stored_at)


def describe_age(stored_at: datetime, now: datetime | None = None) -> str:
    """Describe how long ago ``stored_at`` was, in whole elapsed units."""
    current = now or _utcnow()
    seconds = (current - stored_at) // timedelta(seconds=1)
    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    return f"{seconds // 86400} days ago"
