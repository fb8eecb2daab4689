"""Ticket availability and purchase eligibility.

Pure functions over a snapshot of an event's ticket types. The current time
is always passed in by the caller; nothing here reads the clock, performs
I/O, or mutates its inputs.

Results are advisory. The external purchase API decides admission under
contention, so a purchase can still fail after a local ``Available``.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ticketing.domain.models import Event, EventStatus, TicketType
from ticketing.domain.value_objects import TicketTypeId


@dataclass(frozen=True)
class Inactive:
    """The ticket type has been switched off administratively."""


@dataclass(frozen=True)
class NotYetOnSale:
    """The sales window has not opened."""


@dataclass(frozen=True)
class SalesEnded:
    """The sales window has closed."""


@dataclass(frozen=True)
class SoldOut:
    """On sale, but nothing is left."""


@dataclass(frozen=True)
class Available:
    """On sale with ``quantity`` units remaining."""

    quantity: int


TicketTypeStatus = Inactive | NotYetOnSale | SalesEnded | SoldOut | Available


class RejectionCode(Enum):
    """Reasons a purchase request fails the pre-flight check."""

    INVALID_QUANTITY = "INVALID_QUANTITY"
    INACTIVE = "INACTIVE"
    NOT_YET_ON_SALE = "NOT_YET_ON_SALE"
    SALES_ENDED = "SALES_ENDED"
    SOLD_OUT = "SOLD_OUT"
    BELOW_MINIMUM = "BELOW_MINIMUM"
    ABOVE_MAXIMUM = "ABOVE_MAXIMUM"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"


@dataclass(frozen=True)
class PurchaseRejection:
    """A failed pre-flight check.

    ``limit`` carries the bound that was violated for BELOW_MINIMUM,
    ABOVE_MAXIMUM and INSUFFICIENT_INVENTORY, and is None otherwise.
    """

    code: RejectionCode
    limit: int | None = None


@dataclass(frozen=True)
class EventAvailability:
    """Aggregate availability of an event at a point in time."""

    total_available: int
    is_purchasable: bool
    per_type_statuses: tuple[tuple[TicketTypeId, TicketTypeStatus], ...]


_UNAVAILABLE_REJECTIONS = {
    Inactive: RejectionCode.INACTIVE,
    NotYetOnSale: RejectionCode.NOT_YET_ON_SALE,
    SalesEnded: RejectionCode.SALES_ENDED,
    SoldOut: RejectionCode.SOLD_OUT,
}


def evaluate_ticket_type(ticket_type: TicketType, now: datetime) -> TicketTypeStatus:
    """Return the status of a single ticket type at ``now``.

    Checks run in a fixed order and the first match wins, so an inactive
    type reports Inactive even when it is also sold out or out of window.
    """
    if not ticket_type.is_active:
        return Inactive()
    if ticket_type.sales_window.opens_after(now):
        return NotYetOnSale()
    if ticket_type.sales_window.closed_before(now):
        return SalesEnded()
    remaining = ticket_type.quantity_available
    if remaining <= 0:
        return SoldOut()
    return Available(quantity=remaining)


def evaluate_event(event: Event, now: datetime) -> EventAvailability:
    """Return the aggregate availability of an event at ``now``.

    Per-type statuses keep the input order of ``event.ticket_types``.
    """
    statuses = tuple(
        (ticket_type.id, evaluate_ticket_type(ticket_type, now))
        for ticket_type in event.ticket_types
    )
    total = sum(
        status.quantity for _, status in statuses if isinstance(status, Available)
    )
    purchasable = (
        event.status is EventStatus.PUBLISHED and total > 0 and now < event.end_date
    )
    return EventAvailability(
        total_available=total,
        is_purchasable=purchasable,
        per_type_statuses=statuses,
    )


def validate_purchase_request(
    ticket_type: TicketType, requested_quantity: int, now: datetime
) -> PurchaseRejection | None:
    """Pre-flight check for buying ``requested_quantity`` of a ticket type.

    Returns None when the request may be submitted to the purchase API,
    otherwise the first failing check.
    """
    if requested_quantity < 1:
        return PurchaseRejection(RejectionCode.INVALID_QUANTITY)

    status = evaluate_ticket_type(ticket_type, now)
    if not isinstance(status, Available):
        return PurchaseRejection(_UNAVAILABLE_REJECTIONS[type(status)])

    if requested_quantity < ticket_type.min_per_order:
        return PurchaseRejection(RejectionCode.BELOW_MINIMUM, ticket_type.min_per_order)
    if requested_quantity > ticket_type.max_per_order:
        return PurchaseRejection(RejectionCode.ABOVE_MAXIMUM, ticket_type.max_per_order)
    if requested_quantity > status.quantity:
        return PurchaseRejection(RejectionCode.INSUFFICIENT_INVENTORY, status.quantity)
    return None
