"""Django ORM implementation of the EventStore.

Rows are turned into the same record shape the marketplace API returns and
go through the normalizer, so defaults and inconsistency logging live in
one place.
"""

from typing import Any
from uuid import UUID

from django.db.models import Prefetch

from ticketing import models
from ticketing.domain import Event, EventId
from ticketing.domain.normalization import event_from_payload
from ticketing.stores.interfaces import EventStore


def _parse_pk(event_id: EventId) -> UUID | None:
    try:
        return UUID(event_id.value)
    except ValueError:
        return None


def _ticket_type_record(row: models.TicketType) -> dict[str, Any]:
    return {
        "id": str(row.id),
        "name": row.name,
        "price": row.price,
        "quantity": row.quantity,
        "sold": row.sold,
        "min_per_order": row.min_per_order,
        "max_per_order": row.max_per_order,
        "sales_start_date": row.sales_start_date,
        "sales_end_date": row.sales_end_date,
        "is_active": row.is_active,
    }


def _event_record(row: models.Event) -> dict[str, Any]:
    return {
        "id": str(row.id),
        "name": row.name,
        "status": row.status,
        "start_date": row.start_date,
        "end_date": row.end_date,
        "available_tickets": row.available_tickets,
        "ticket_quantity": row.ticket_quantity,
        "tickets_sold": row.tickets_sold,
        "ticket_types": [_ticket_type_record(t) for t in row.ticket_types.all()],
    }


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def _queryset(self):
        return models.Event.objects.prefetch_related(
            Prefetch(
                "ticket_types",
                queryset=models.TicketType.objects.order_by("position", "created_at"),
            )
        )

    def list_published_events(self) -> list[Event]:
        rows = self._queryset().filter(status=models.Event.Status.PUBLISHED)
        return [event_from_payload(_event_record(row)) for row in rows.order_by("start_date")]

    def get_event(self, event_id: EventId) -> Event | None:
        pk = _parse_pk(event_id)
        if pk is None:
            return None
        row = self._queryset().filter(pk=pk).first()
        if row is None:
            return None
        return event_from_payload(_event_record(row))
