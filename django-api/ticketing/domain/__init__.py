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
    evaluate_event,
    evaluate_ticket_type,
    validate_purchase_request,
)
from ticketing.domain.models import Event, EventStatus, TicketType
from ticketing.domain.value_objects import (
    Capacity,
    EventId,
    Money,
    OrderLimits,
    SalesWindow,
    TicketTypeId,
)

__all__ = [
    "Event",
    "EventStatus",
    "TicketType",
    "EventId",
    "TicketTypeId",
    "Money",
    "Capacity",
    "OrderLimits",
    "SalesWindow",
    "Available",
    "Inactive",
    "NotYetOnSale",
    "SalesEnded",
    "SoldOut",
    "TicketTypeStatus",
    "EventAvailability",
    "PurchaseRejection",
    "RejectionCode",
    "evaluate_event",
    "evaluate_ticket_type",
    "validate_purchase_request",
]
