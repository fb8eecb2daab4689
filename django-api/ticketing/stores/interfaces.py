"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from ticketing.domain import Event, EventId


class EventStore(ABC):
    """Interface for reading event snapshots."""

    @abstractmethod
    def list_published_events(self) -> list[Event]:
        """Return published events ordered by start_date ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its ticket types, or None if not found.

        Ticket types come back in display order.
        """
        ...
