"""Availability service - orchestration around the pure evaluator.

Services:
- Depend only on interfaces (stores)
- Own the clock; the domain functions receive ``now`` explicitly
- Perform ID validation and error mapping
- Return result objects or raise domain errors
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import structlog
from django.utils import timezone

from ticketing.domain import (
    Event,
    EventAvailability,
    EventId,
    PurchaseRejection,
    TicketType,
    TicketTypeId,
    TicketTypeStatus,
    evaluate_event,
    validate_purchase_request,
)
from ticketing.domain.errors import (
    EventNotFoundError,
    InvalidEventIdError,
    InvalidTicketTypeIdError,
    TicketTypeNotFoundError,
)
from ticketing.domain.labels import (
    UnavailableReason,
    displayed_available,
    event_closed_reason,
    listing_badge,
    unavailable_reason,
)
from ticketing.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class TicketTypeSummary:
    ticket_type: TicketType
    status: TicketTypeStatus


@dataclass(frozen=True)
class EventSummary:
    """An event together with its availability at ``evaluated_at``."""

    event: Event
    availability: EventAvailability
    ticket_types: tuple[TicketTypeSummary, ...]
    displayed_available: int
    badge: str
    unavailable_reason: UnavailableReason | None
    evaluated_at: datetime


@dataclass(frozen=True)
class PurchaseCheck:
    """Outcome of a pre-flight purchase check."""

    event_id: EventId
    ticket_type_id: TicketTypeId
    quantity: int
    rejection: PurchaseRejection | None
    evaluated_at: datetime
    event_reason: UnavailableReason | None = None

    @property
    def eligible(self) -> bool:
        return self.rejection is None and self.event_reason is None


def _parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError:
        raise InvalidEventIdError() from None


def _parse_ticket_type_id(ticket_type_id: str) -> TicketTypeId:
    try:
        return TicketTypeId.from_string(ticket_type_id)
    except ValueError:
        raise InvalidTicketTypeIdError() from None


def summarize(event: Event, now: datetime) -> EventSummary:
    availability = evaluate_event(event, now)
    ticket_types = tuple(
        TicketTypeSummary(ticket_type=ticket_type, status=status)
        for ticket_type, (_, status) in zip(
            event.ticket_types, availability.per_type_statuses
        )
    )
    return EventSummary(
        event=event,
        availability=availability,
        ticket_types=ticket_types,
        displayed_available=displayed_available(event, availability),
        badge=listing_badge(event, availability, now),
        unavailable_reason=unavailable_reason(event, availability, now),
        evaluated_at=now,
    )


class AvailabilityService:
    """Service for availability queries and purchase pre-flight checks."""

    def __init__(self, store: EventStore, clock: Clock = timezone.now) -> None:
        self._store = store
        self._clock = clock

    def list_event_summaries(self) -> list[EventSummary]:
        """Return availability for every published event."""
        now = self._clock()
        return [summarize(event, now) for event in self._store.list_published_events()]

    def get_event_availability(self, event_id: str) -> EventSummary:
        """Return availability for one event.

        Raises:
            InvalidEventIdError: If the event_id is blank.
            EventNotFoundError: If the event does not exist.
        """
        event = self._get_event(event_id)
        summary = summarize(event, self._clock())
        logger.info(
            "event_availability_evaluated",
            event_id=event.id.value,
            total_available=summary.availability.total_available,
            is_purchasable=summary.availability.is_purchasable,
        )
        return summary

    def check_purchase(
        self, event_id: str, ticket_type_id: str, quantity: int
    ) -> PurchaseCheck:
        """Pre-flight check for buying ``quantity`` tickets of one type.

        A rejection is a normal result, not an error. An event that is not
        published or has ended is rejected before any ticket-type check runs,
        with ``event_reason`` set. Passing the check does not reserve
        anything; the purchase API may still refuse the order.

        Raises:
            InvalidEventIdError: If the event_id is blank.
            InvalidTicketTypeIdError: If the ticket_type_id is blank.
            EventNotFoundError: If the event does not exist.
            TicketTypeNotFoundError: If the ticket type is not part of the event.
        """
        parsed_ticket_type_id = _parse_ticket_type_id(ticket_type_id)
        event = self._get_event(event_id)
        ticket_type = event.find_ticket_type(parsed_ticket_type_id)
        if ticket_type is None:
            raise TicketTypeNotFoundError(event.id.value, parsed_ticket_type_id.value)

        now = self._clock()
        event_reason = event_closed_reason(event, now)
        if event_reason is not None:
            logger.info(
                "purchase_check_rejected",
                event_id=event.id.value,
                ticket_type_id=ticket_type.id.value,
                quantity=quantity,
                code=event_reason.name,
            )
            return PurchaseCheck(
                event_id=event.id,
                ticket_type_id=ticket_type.id,
                quantity=quantity,
                rejection=None,
                evaluated_at=now,
                event_reason=event_reason,
            )

        rejection = validate_purchase_request(ticket_type, quantity, now)
        if rejection is not None:
            logger.info(
                "purchase_check_rejected",
                event_id=event.id.value,
                ticket_type_id=ticket_type.id.value,
                quantity=quantity,
                code=rejection.code.value,
                limit=rejection.limit,
            )
        else:
            logger.info(
                "purchase_check_passed",
                event_id=event.id.value,
                ticket_type_id=ticket_type.id.value,
                quantity=quantity,
            )
        return PurchaseCheck(
            event_id=event.id,
            ticket_type_id=ticket_type.id,
            quantity=quantity,
            rejection=rejection,
            evaluated_at=now,
        )

    def _get_event(self, event_id: str) -> Event:
        parsed = _parse_event_id(event_id)
        event = self._store.get_event(parsed)
        if event is None:
            logger.info("event_not_found", event_id=parsed.value)
            raise EventNotFoundError(parsed.value)
        return event
