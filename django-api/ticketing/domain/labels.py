"""User-facing text derived from availability results.

Every display string for a status, rejection or badge comes from here, so
consumers branch on the typed values and never compare strings.
"""

from datetime import datetime
from enum import Enum

from ticketing.domain.availability import (
    Available,
    EventAvailability,
    Inactive,
    NotYetOnSale,
    PurchaseRejection,
    RejectionCode,
    SalesEnded,
    SoldOut,
    TicketTypeStatus,
)
from ticketing.domain.models import Event, EventStatus


class EventPhase(Enum):
    """Where an event sits relative to its own dates."""

    UPCOMING = "upcoming"
    HAPPENING_NOW = "happening_now"
    PAST = "past"


class UnavailableReason(Enum):
    """Why an event cannot currently be booked."""

    NOT_PUBLISHED = "This event is not available for booking"
    EVENT_ENDED = "This event has ended"
    NO_TICKET_TYPES = "No tickets are currently available for purchase"
    ALL_INACTIVE = "All ticket types are currently inactive"
    SOLD_OUT = "This event is sold out"
    SALES_NOT_STARTED = "Ticket sales have not started yet"
    SALES_ENDED = "Ticket sales have ended"

    @property
    def message(self) -> str:
        return self.value


BADGE_SOLD_OUT = "Sold Out"
BADGE_HAPPENING_NOW = "Happening Now"
BADGE_UPCOMING = "Upcoming"
BADGE_PAST = "Past Event"


def status_label(status: TicketTypeStatus) -> str:
    match status:
        case Inactive():
            return "Inactive"
        case NotYetOnSale():
            return "Sales not started"
        case SalesEnded():
            return "Sales ended"
        case SoldOut():
            return "Sold Out"
        case Available(quantity=quantity):
            return f"{quantity} available"


def status_code(status: TicketTypeStatus) -> str:
    """Stable machine-readable name of a status, e.g. ``NOT_YET_ON_SALE``."""
    match status:
        case Inactive():
            return "INACTIVE"
        case NotYetOnSale():
            return "NOT_YET_ON_SALE"
        case SalesEnded():
            return "SALES_ENDED"
        case SoldOut():
            return "SOLD_OUT"
        case Available():
            return "AVAILABLE"


def rejection_message(rejection: PurchaseRejection) -> str:
    limit = rejection.limit
    match rejection.code:
        case RejectionCode.INVALID_QUANTITY:
            return "Quantity must be at least 1"
        case RejectionCode.INACTIVE:
            return "This ticket type is currently inactive"
        case RejectionCode.NOT_YET_ON_SALE:
            return "Ticket sales have not started yet"
        case RejectionCode.SALES_ENDED:
            return "Ticket sales have ended"
        case RejectionCode.SOLD_OUT:
            return "The selected ticket type is sold out"
        case RejectionCode.BELOW_MINIMUM:
            return f"Minimum order quantity is {limit}"
        case RejectionCode.ABOVE_MAXIMUM:
            return f"Maximum order quantity is {limit}"
        case RejectionCode.INSUFFICIENT_INVENTORY:
            noun = "ticket" if limit == 1 else "tickets"
            return f"Only {limit} {noun} available"


def event_phase(event: Event, now: datetime) -> EventPhase:
    if now < event.start_date:
        return EventPhase.UPCOMING
    if now < event.end_date:
        return EventPhase.HAPPENING_NOW
    return EventPhase.PAST


def displayed_available(event: Event, availability: EventAvailability) -> int:
    """Count shown to buyers.

    Ticket-type sums always win; the legacy event-level count is only used
    when the event has no ticket types at all.
    """
    if event.ticket_types:
        return availability.total_available
    return event.legacy_available or 0


def listing_badge(event: Event, availability: EventAvailability, now: datetime) -> str:
    if displayed_available(event, availability) <= 0:
        return BADGE_SOLD_OUT
    phase = event_phase(event, now)
    if phase is EventPhase.HAPPENING_NOW:
        return BADGE_HAPPENING_NOW
    if phase is EventPhase.UPCOMING:
        return BADGE_UPCOMING
    return BADGE_PAST


def event_closed_reason(event: Event, now: datetime) -> UnavailableReason | None:
    """Event-level reason no ticket of this event can be bought, or None."""
    if event.status is not EventStatus.PUBLISHED:
        return UnavailableReason.NOT_PUBLISHED
    if now >= event.end_date:
        return UnavailableReason.EVENT_ENDED
    return None


def unavailable_reason(
    event: Event, availability: EventAvailability, now: datetime
) -> UnavailableReason | None:
    """Explain why an event is not purchasable, or None if it is."""
    if availability.is_purchasable:
        return None
    closed = event_closed_reason(event, now)
    if closed is not None:
        return closed
    if not event.ticket_types:
        return UnavailableReason.NO_TICKET_TYPES

    statuses = [status for _, status in availability.per_type_statuses]
    if all(isinstance(status, Inactive) for status in statuses):
        return UnavailableReason.ALL_INACTIVE
    if all(ticket_type.quantity_available == 0 for ticket_type in event.ticket_types):
        return UnavailableReason.SOLD_OUT
    if any(isinstance(status, NotYetOnSale) for status in statuses):
        return UnavailableReason.SALES_NOT_STARTED
    if any(isinstance(status, SalesEnded) for status in statuses):
        return UnavailableReason.SALES_ENDED
    return UnavailableReason.SOLD_OUT
