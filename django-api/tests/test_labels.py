"""Unit tests for display labels, badges and unavailable reasons.

Run with: pytest tests/test_labels.py -v
"""

from datetime import timedelta

import pytest

from factories import NOW, build_event, build_ticket_type
from ticketing.domain import (
    Available,
    EventStatus,
    Inactive,
    NotYetOnSale,
    PurchaseRejection,
    RejectionCode,
    SalesEnded,
    SoldOut,
    evaluate_event,
)
from ticketing.domain.labels import (
    EventPhase,
    UnavailableReason,
    displayed_available,
    event_closed_reason,
    event_phase,
    listing_badge,
    rejection_message,
    status_code,
    status_label,
    unavailable_reason,
)


class TestStatusText:
    """Tests for status_label and status_code."""

    @pytest.mark.parametrize(
        ("status", "label", "code"),
        [
            (Inactive(), "Inactive", "INACTIVE"),
            (NotYetOnSale(), "Sales not started", "NOT_YET_ON_SALE"),
            (SalesEnded(), "Sales ended", "SALES_ENDED"),
            (SoldOut(), "Sold Out", "SOLD_OUT"),
            (Available(7), "7 available", "AVAILABLE"),
        ],
    )
    def test_every_status_has_text(self, status, label, code):
        assert status_label(status) == label
        assert status_code(status) == code


class TestRejectionMessage:
    """Tests for rejection_message."""

    @pytest.mark.parametrize(
        ("rejection", "message"),
        [
            (PurchaseRejection(RejectionCode.INVALID_QUANTITY), "Quantity must be at least 1"),
            (PurchaseRejection(RejectionCode.INACTIVE), "This ticket type is currently inactive"),
            (PurchaseRejection(RejectionCode.NOT_YET_ON_SALE), "Ticket sales have not started yet"),
            (PurchaseRejection(RejectionCode.SALES_ENDED), "Ticket sales have ended"),
            (PurchaseRejection(RejectionCode.SOLD_OUT), "The selected ticket type is sold out"),
            (PurchaseRejection(RejectionCode.BELOW_MINIMUM, 2), "Minimum order quantity is 2"),
            (PurchaseRejection(RejectionCode.ABOVE_MAXIMUM, 10), "Maximum order quantity is 10"),
            (PurchaseRejection(RejectionCode.INSUFFICIENT_INVENTORY, 3), "Only 3 tickets available"),
            (PurchaseRejection(RejectionCode.INSUFFICIENT_INVENTORY, 1), "Only 1 ticket available"),
        ],
    )
    def test_messages(self, rejection, message):
        assert rejection_message(rejection) == message

    def test_every_code_has_a_message(self):
        for code in RejectionCode:
            assert rejection_message(PurchaseRejection(code, 1))


class TestEventPhase:
    """Tests for event_phase."""

    def test_upcoming(self):
        assert event_phase(build_event(start_date=NOW + timedelta(hours=1)), NOW) is EventPhase.UPCOMING

    def test_happening_now_from_start(self):
        event = build_event(start_date=NOW, end_date=NOW + timedelta(hours=3))
        assert event_phase(event, NOW) is EventPhase.HAPPENING_NOW

    def test_past_at_end_instant(self):
        """At end_date the event is over, matching is_purchasable."""
        event = build_event(
            build_ticket_type(), start_date=NOW - timedelta(hours=3), end_date=NOW
        )
        assert event_phase(event, NOW) is EventPhase.PAST
        availability = evaluate_event(event, NOW)
        assert listing_badge(event, availability, NOW) == "Past Event"
        assert unavailable_reason(event, availability, NOW) is UnavailableReason.EVENT_ENDED

    def test_past(self):
        event = build_event(start_date=NOW - timedelta(days=2), end_date=NOW - timedelta(days=1))
        assert event_phase(event, NOW) is EventPhase.PAST


class TestListingBadge:
    """Tests for listing_badge and displayed_available."""

    def test_sold_out_wins_over_phase(self):
        event = build_event(
            build_ticket_type(total=10, sold=10),
            start_date=NOW - timedelta(hours=1),
        )
        assert listing_badge(event, evaluate_event(event, NOW), NOW) == "Sold Out"

    def test_happening_now(self):
        event = build_event(
            build_ticket_type(),
            start_date=NOW - timedelta(hours=1),
            end_date=NOW + timedelta(hours=1),
        )
        assert listing_badge(event, evaluate_event(event, NOW), NOW) == "Happening Now"

    def test_upcoming(self):
        event = build_event(build_ticket_type())
        assert listing_badge(event, evaluate_event(event, NOW), NOW) == "Upcoming"

    def test_past_event_with_open_sales(self):
        event = build_event(
            build_ticket_type(ends_at=None),
            start_date=NOW - timedelta(days=3),
            end_date=NOW - timedelta(days=2),
        )
        assert listing_badge(event, evaluate_event(event, NOW), NOW) == "Past Event"

    def test_legacy_count_used_without_ticket_types(self):
        event = build_event(legacy_available=25)
        availability = evaluate_event(event, NOW)
        assert displayed_available(event, availability) == 25
        assert listing_badge(event, availability, NOW) == "Upcoming"

    def test_legacy_count_ignored_when_ticket_types_exist(self):
        event = build_event(build_ticket_type(total=5, sold=5), legacy_available=25)
        availability = evaluate_event(event, NOW)
        assert displayed_available(event, availability) == 0
        assert listing_badge(event, availability, NOW) == "Sold Out"

    def test_no_ticket_types_and_no_legacy_count_is_sold_out(self):
        event = build_event()
        assert listing_badge(event, evaluate_event(event, NOW), NOW) == "Sold Out"


class TestUnavailableReason:
    """Tests for unavailable_reason."""

    def reason(self, event):
        return unavailable_reason(event, evaluate_event(event, NOW), NOW)

    def test_none_when_purchasable(self):
        assert self.reason(build_event(build_ticket_type())) is None

    def test_not_published(self):
        event = build_event(build_ticket_type(), status=EventStatus.DRAFT)
        assert self.reason(event) is UnavailableReason.NOT_PUBLISHED

    def test_event_ended(self):
        event = build_event(
            build_ticket_type(ends_at=None),
            start_date=NOW - timedelta(days=2),
            end_date=NOW - timedelta(days=1),
        )
        assert self.reason(event) is UnavailableReason.EVENT_ENDED

    def test_no_ticket_types(self):
        assert self.reason(build_event()) is UnavailableReason.NO_TICKET_TYPES

    def test_all_inactive(self):
        event = build_event(
            build_ticket_type(id="a", is_active=False),
            build_ticket_type(id="b", is_active=False, sold=50),
        )
        assert self.reason(event) is UnavailableReason.ALL_INACTIVE

    def test_sold_out(self):
        event = build_event(
            build_ticket_type(id="a", total=5, sold=5),
            build_ticket_type(id="b", total=5, sold=5, ends_at=NOW - timedelta(days=1)),
        )
        assert self.reason(event) is UnavailableReason.SOLD_OUT
        assert self.reason(event).message == "This event is sold out"

    def test_sales_not_started(self):
        event = build_event(
            build_ticket_type(id="a", starts_at=NOW + timedelta(days=1)),
            build_ticket_type(id="b", ends_at=NOW - timedelta(days=1)),
        )
        assert self.reason(event) is UnavailableReason.SALES_NOT_STARTED

    def test_sales_ended(self):
        event = build_event(build_ticket_type(ends_at=NOW - timedelta(days=1)))
        assert self.reason(event) is UnavailableReason.SALES_ENDED


class TestEventClosedReason:
    """Tests for event_closed_reason."""

    def test_open_event(self):
        assert event_closed_reason(build_event(build_ticket_type()), NOW) is None

    def test_ignores_ticket_inventory(self):
        event = build_event(build_ticket_type(total=10, sold=10))
        assert event_closed_reason(event, NOW) is None

    @pytest.mark.parametrize("status", [EventStatus.DRAFT, EventStatus.CANCELLED, EventStatus.COMPLETED])
    def test_not_published(self, status):
        event = build_event(build_ticket_type(), status=status)
        assert event_closed_reason(event, NOW) is UnavailableReason.NOT_PUBLISHED

    def test_ended_at_end_instant(self):
        event = build_event(build_ticket_type(), start_date=NOW - timedelta(hours=2), end_date=NOW)
        assert event_closed_reason(event, NOW) is UnavailableReason.EVENT_ENDED
