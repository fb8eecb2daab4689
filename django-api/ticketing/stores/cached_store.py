"""Caching decorator for any EventStore.

Only snapshots are cached. Availability depends on the current time and is
always computed fresh from the snapshot.
"""

import structlog
from django.conf import settings
from django.core.cache import cache

from ticketing.domain import Event, EventId
from ticketing.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)

EVENT_LIST_CACHE_KEY = "events:list"


def event_cache_key(event_id: str) -> str:
    return f"events:{event_id}"


def invalidate_event(event_id: str) -> None:
    cache.delete_many([EVENT_LIST_CACHE_KEY, event_cache_key(event_id)])
    logger.debug("event_cache_invalidated", event_id=event_id)


class CachedEventStore(EventStore):
    """Wraps another store and caches its snapshots in the Django cache."""

    def __init__(self, inner: EventStore, timeout: int | None = None) -> None:
        self._inner = inner
        self._timeout = (
            timeout if timeout is not None else settings.AVAILABILITY_CACHE_TIMEOUT
        )

    def list_published_events(self) -> list[Event]:
        events = cache.get(EVENT_LIST_CACHE_KEY)
        if events is None:
            events = self._inner.list_published_events()
            cache.set(EVENT_LIST_CACHE_KEY, events, self._timeout)
        return events

    def get_event(self, event_id: EventId) -> Event | None:
        key = event_cache_key(event_id.value)
        event = cache.get(key)
        if event is None:
            event = self._inner.get_event(event_id)
            # Misses are not cached so a newly synced event shows up at once.
            if event is not None:
                cache.set(key, event, self._timeout)
        return event
