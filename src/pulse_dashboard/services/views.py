"""Stale-while-revalidate view state for cached panels."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

from pulse_dashboard.domain.cache import CacheEntry
from pulse_dashboard.domain.errors import FetchError
from pulse_dashboard.services.cache import describe_age

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState(Generic[T]):
    """What a panel currently shows.

    ``loading`` is the primary indicator, set only when there is nothing to
    show while fetching. ``refreshing`` is the secondary indicator shown over
    cached data.
    """

    key: str | None = None
    requested_key: str | None = None
    data: T | None = None
    stored_at: datetime | None = None
    loading: bool = False
    refreshing: bool = False
    error: str | None = None
    possibly_stale: bool = False

    def updated_ago(self, now: datetime | None = None) -> str | None:
        """Human description of the data age."""
        if self.stored_at is None:
            return None
        return describe_age(self.stored_at, now)

    def to_dict(self, now: datetime | None = None) -> dict[str, object]:
        """Return a JSON-ready snapshot."""
        data = self.data
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        return {
            "key": self.key,
            "requested_key": self.requested_key,
            "data": data,
            "stored_at": self.stored_at.isoformat() if self.stored_at else None,
            "updated_ago": self.updated_ago(now),
            "loading": self.loading,
            "refreshing": self.refreshing,
            "error": self.error,
            "possibly_stale": self.possibly_stale,
        }


@dataclass
class CachedView(Generic[T]):
    """Shows cached data immediately and revalidates it with a fetch."""

    name: str
    lookup: Callable[[str | None], CacheEntry[T] | None]
    fetch: Callable[[str | None], Awaitable[CacheEntry[T]]]
    default_key: str | None = None
    normalize_key: Callable[[str], str] | None = None
    state: ViewState[T] = field(default_factory=ViewState)
    _listeners: list[Callable[[ViewState[T]], None]] = field(
        default_factory=list, repr=False
    )
    _background_loads: int = field(default=0, repr=False)

    def subscribe(self, listener: Callable[[ViewState[T]], None]) -> None:
        """Call ``listener`` with every new state."""
        self._listeners.append(listener)

    async def load(self, key: str | None = None) -> ViewState[T]:
        """Show cached data for ``key`` and fetch a fresh copy.

        Only ``FetchError`` is turned into view state; anything else
        propagates once the indicator set by this load has been cleared.
        """
        if self.state.loading:
            _logger.info("%s load ignored: fetch already in flight", self.name)
            return self.state
        resolved_key = self.default_key if key is None else key
        if resolved_key is not None and self.normalize_key is not None:
            resolved_key = self.normalize_key(resolved_key)
        cached = self.lookup(resolved_key)
        background = cached is not None
        if cached is not None:
            self._background_loads += 1
            self._update(
                key=cached.key,
                requested_key=resolved_key,
                data=cached.payload,
                stored_at=cached.stored_at,
                possibly_stale=True,
                refreshing=True,
                error=None,
            )
        else:
            self._update(requested_key=resolved_key, loading=True, error=None)

        try:
            entry = await self.fetch(resolved_key)
        except FetchError as exc:
            _logger.warning(
                "%s fetch failed: key=%s background=%s error=%s",
                self.name,
                resolved_key,
                background,
                exc,
            )
            if not background:
                self._update(error=str(exc))
        else:
            self._update(
                key=entry.key,
                data=entry.payload,
                stored_at=entry.stored_at,
                possibly_stale=False,
                error=None,
            )
        finally:
            self._clear_indicator(background)
        return self.state

    async def retry(self) -> ViewState[T]:
        """Re-run the load for the last requested key."""
        return await self.load(self.state.requested_key)

    def _clear_indicator(self, background: bool) -> None:
        if not background:
            self._update(loading=False)
            return
        # Overlapping refreshes share one flag; the last one to finish clears it.
        self._background_loads -= 1
        if self._background_loads == 0:
            self._update(refreshing=False)

    def _update(self, **changes: object) -> None:
        self.state = replace(self.state, **changes)
        for listener in self._listeners:
            listener(self.state)
