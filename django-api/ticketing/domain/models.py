"""Domain models representing a read-only snapshot of ticketing state.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ticketing.domain.value_objects import (
    Capacity,
    EventId,
    Money,
    OrderLimits,
    SalesWindow,
    TicketTypeId,
)


class EventStatus(Enum):
    """Publication state of an event."""

    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TicketType:
    """Read-only snapshot of one ticket type's inventory at a point in time.

    Only the sold counter is stored; ``quantity_available`` is derived from it
    and never goes below zero, even for an oversold row.
    """

    id: TicketTypeId
    event_id: EventId
    name: str
    price: Money
    quantity_total: Capacity
    quantity_sold: int = 0
    limits: OrderLimits = field(default_factory=OrderLimits)
    sales_window: SalesWindow = field(default_factory=SalesWindow)
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.quantity_sold < 0:
            raise ValueError("Quantity sold cannot be negative")

    @property
    def quantity_available(self) -> int:
        return max(0, self.quantity_total.value - self.quantity_sold)

    @property
    def min_per_order(self) -> int:
        return self.limits.minimum

    @property
    def max_per_order(self) -> int:
        return self.limits.maximum


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event with its ticket types.

    ``legacy_available`` carries the event-level ticket count some upstream
    records still report. It is only used for display when the event has
    no ticket types.
    """

    id: EventId
    name: str
    status: EventStatus
    start_date: datetime
    end_date: datetime
    ticket_types: tuple[TicketType, ...] = ()
    legacy_available: int | None = None

    def find_ticket_type(self, ticket_type_id: TicketTypeId) -> TicketType | None:
        for ticket_type in self.ticket_types:
            if ticket_type.id == ticket_type_id:
                return ticket_type
        return None
