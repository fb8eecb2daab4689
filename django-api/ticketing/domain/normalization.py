"""Normalization of upstream JSON records into domain models.

The marketplace API reports ticket inventory in several shapes
(``sold``, ``quantity_available`` or ``available``) and leaves optional
fields out. Defaults are applied here, once, so that the evaluator never
has to guess.

Inconsistent upstream data is logged and passed through; it is not
corrected and never becomes an evaluator error.
"""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from ticketing.domain.models import Event, EventStatus, TicketType
from ticketing.domain.value_objects import (
    DEFAULT_MAX_PER_ORDER,
    DEFAULT_MIN_PER_ORDER,
    Capacity,
    EventId,
    Money,
    OrderLimits,
    SalesWindow,
    TicketTypeId,
)

logger = structlog.get_logger(__name__)


class PayloadError(ValueError):
    """Raised when an upstream record cannot be normalized."""

    def __init__(self, field: str, reason: str = "missing") -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


def _require(payload: Mapping[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None or value == "":
        raise PayloadError(key)
    return value


def _as_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PayloadError(field, "not an integer") from None


def _as_datetime(value: Any, field: str) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(str(value))
        except ValueError:
            parsed = None
        if parsed is None:
            raise PayloadError(field, "not an ISO-8601 datetime")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _as_money(value: Any) -> Money:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise PayloadError("price", "not a number") from None
    if not amount.is_finite():
        raise PayloadError("price", "not a number")
    try:
        return Money(amount)
    except ValueError:
        raise PayloadError("price", "negative") from None


def _sold_count(payload: Mapping[str, Any], quantity: int) -> int:
    # A reported remaining count wins over the sold counter.
    for key in ("quantity_available", "available"):
        if payload.get(key) is not None:
            return max(0, quantity - _as_int(payload[key], key))
    if payload.get("sold") is not None:
        return _as_int(payload["sold"], "sold")
    return 0


def _order_limits(payload: Mapping[str, Any], ticket_type_id: str) -> OrderLimits:
    minimum = _as_int(payload.get("min_per_order") or DEFAULT_MIN_PER_ORDER, "min_per_order")
    maximum = _as_int(payload.get("max_per_order") or DEFAULT_MAX_PER_ORDER, "max_per_order")
    try:
        return OrderLimits(minimum=minimum, maximum=maximum)
    except ValueError:
        logger.warning(
            "ticket_type_order_limits_invalid",
            ticket_type_id=ticket_type_id,
            min_per_order=minimum,
            max_per_order=maximum,
        )
        return OrderLimits()


def ticket_type_from_payload(payload: Mapping[str, Any], event_id: EventId) -> TicketType:
    """Build a TicketType from an upstream ticket-type record."""
    raw_id = str(_require(payload, "id"))
    quantity = _as_int(payload.get("quantity") or 0, "quantity")
    try:
        capacity = Capacity(quantity)
    except ValueError:
        raise PayloadError("quantity", "negative") from None

    sold = _sold_count(payload, quantity)
    if sold < 0:
        raise PayloadError("sold", "negative")
    if sold > quantity:
        logger.warning(
            "ticket_type_oversold",
            ticket_type_id=raw_id,
            event_id=event_id.value,
            quantity=quantity,
            sold=sold,
        )

    window = SalesWindow(
        starts_at=_as_datetime(payload.get("sales_start_date"), "sales_start_date"),
        ends_at=_as_datetime(payload.get("sales_end_date"), "sales_end_date"),
    )
    if window.is_inverted:
        logger.warning(
            "ticket_type_sales_window_inverted",
            ticket_type_id=raw_id,
            event_id=event_id.value,
            sales_start=window.starts_at.isoformat(),
            sales_end=window.ends_at.isoformat(),
        )

    return TicketType(
        id=TicketTypeId.from_string(raw_id),
        event_id=event_id,
        name=str(payload.get("name") or ""),
        price=_as_money(_require(payload, "price")),
        quantity_total=capacity,
        quantity_sold=sold,
        limits=_order_limits(payload, raw_id),
        sales_window=window,
        is_active=payload.get("is_active") is not False,
    )


def legacy_available_tickets(payload: Mapping[str, Any]) -> int | None:
    """Event-level availability from the legacy aggregate fields.

    Only meaningful for events that have no ticket-type records.
    """
    available = payload.get("available_tickets")
    if available is not None:
        return max(0, _as_int(available, "available_tickets"))
    quantity = payload.get("ticket_quantity")
    if quantity is None:
        return None
    quantity = _as_int(quantity, "ticket_quantity")
    sold = payload.get("tickets_sold")
    if sold is not None:
        return max(0, quantity - _as_int(sold, "tickets_sold"))
    return max(0, quantity)


def event_from_payload(payload: Mapping[str, Any]) -> Event:
    """Build an Event, with its ticket types in input order."""
    event_id = EventId.from_string(str(_require(payload, "id")))
    try:
        status = EventStatus(payload.get("status") or EventStatus.PUBLISHED.value)
    except ValueError:
        raise PayloadError("status", "unknown status") from None

    records = payload.get("ticket_types")
    if records is None:
        records = payload.get("ticketTypes") or []
    ticket_types = tuple(ticket_type_from_payload(record, event_id) for record in records)

    return Event(
        id=event_id,
        name=str(payload.get("name") or ""),
        status=status,
        start_date=_as_datetime(_require(payload, "start_date"), "start_date"),
        end_date=_as_datetime(_require(payload, "end_date"), "end_date"),
        ticket_types=ticket_types,
        legacy_available=legacy_available_tickets(payload),
    )
