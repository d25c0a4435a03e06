"""Cache domain models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Last successfully fetched payload for a cache slot."""

    key: str | None
    payload: T
    stored_at: datetime
