"""Integration tests for the availability endpoints.

Run with: pytest tests/test_availability_api.py -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from ticketing import models


@pytest.fixture
def event(db):
    now = timezone.now()
    event = models.Event.objects.create(
        name="Harbour Lights",
        location="Pier 9",
        start_date=now + timedelta(days=10),
        end_date=now + timedelta(days=10, hours=5),
    )
    models.TicketType.objects.create(
        event=event,
        name="VIP",
        price=Decimal("80.00"),
        quantity=10,
        sold=10,
        position=0,
    )
    models.TicketType.objects.create(
        event=event,
        name="General",
        price=Decimal("20.00"),
        quantity=50,
        sold=10,
        position=1,
    )
    return event


def availability_url(event_id) -> str:
    return reverse("event-availability", kwargs={"event_id": str(event_id)})


def purchase_check_url(event_id, ticket_type_id) -> str:
    return reverse(
        "purchase-check",
        kwargs={"event_id": str(event_id), "ticket_type_id": str(ticket_type_id)},
    )


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_lists_published_events_with_badge(self, api_client: APIClient, event):
        models.Event.objects.create(
            name="Private rehearsal",
            status=models.Event.Status.DRAFT,
            start_date=event.start_date,
            end_date=event.end_date,
        )
        response = api_client.get(reverse("event-list"))

        assert response.status_code == 200
        assert len(response.data) == 1
        item = response.data[0]
        assert item["id"] == str(event.id)
        assert item["total_available"] == 40
        assert item["is_purchasable"] is True
        assert item["badge"] == "Upcoming"
        assert "ticket_types" not in item

    def test_empty_catalog(self, api_client: APIClient, db):
        response = api_client.get(reverse("event-list"))
        assert response.status_code == 200
        assert response.data == []

    def test_legacy_event_without_ticket_types(self, api_client: APIClient, db):
        now = timezone.now()
        models.Event.objects.create(
            name="Old listing",
            start_date=now + timedelta(days=1),
            end_date=now + timedelta(days=2),
            ticket_quantity=100,
            tickets_sold=40,
        )
        item = api_client.get(reverse("event-list")).data[0]
        assert item["total_available"] == 0
        assert item["displayed_available"] == 60
        assert item["is_purchasable"] is False
        assert item["badge"] == "Upcoming"


@pytest.mark.django_db
class TestEventAvailability:
    """Tests for GET /api/events/{id}/availability"""

    def test_returns_per_type_statuses_in_display_order(self, api_client: APIClient, event):
        response = api_client.get(availability_url(event.id))

        assert response.status_code == 200
        assert response.data["total_available"] == 40
        assert response.data["unavailable_reason"] is None
        types = response.data["ticket_types"]
        assert [t["name"] for t in types] == ["VIP", "General"]
        assert types[0]["status"] == "SOLD_OUT"
        assert types[0]["available"] == 0
        assert types[0]["label"] == "Sold Out"
        assert types[1]["status"] == "AVAILABLE"
        assert types[1]["available"] == 40
        assert types[1]["price"] == "20.00"
        assert (types[1]["min_per_order"], types[1]["max_per_order"]) == (1, 10)

    def test_unavailable_reason(self, api_client: APIClient, event):
        event.ticket_types.update(is_active=False)
        response = api_client.get(availability_url(event.id))
        assert response.data["is_purchasable"] is False
        assert response.data["unavailable_reason"] == {
            "code": "ALL_INACTIVE",
            "message": "All ticket types are currently inactive",
        }

    def test_not_found(self, api_client: APIClient, db):
        response = api_client.get(availability_url(uuid.uuid4()))
        assert response.status_code == 404
        assert response.data == {"code": "EVENT_NOT_FOUND", "message": "Event not found"}

    def test_malformed_id_is_not_found(self, api_client: APIClient, db):
        response = api_client.get(availability_url("not-a-uuid"))
        assert response.status_code == 404

    def test_blank_id_is_bad_request(self, api_client: APIClient, db):
        response = api_client.get(availability_url(" "))
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_EVENT_ID"


@pytest.mark.django_db
class TestPurchaseCheck:
    """Tests for POST /api/events/{id}/ticket-types/{id}/purchase-check"""

    def general(self, event):
        return event.ticket_types.get(name="General")

    def test_eligible(self, api_client: APIClient, event):
        response = api_client.post(
            purchase_check_url(event.id, self.general(event).id), {"quantity": 5}, format="json"
        )
        assert response.status_code == 200
        assert response.data["eligible"] is True
        assert response.data["reason"] is None
        assert response.data["quantity"] == 5

    def test_above_maximum(self, api_client: APIClient, event):
        response = api_client.post(
            purchase_check_url(event.id, self.general(event).id), {"quantity": 15}, format="json"
        )
        assert response.status_code == 200
        assert response.data["eligible"] is False
        assert response.data["reason"] == {
            "code": "ABOVE_MAXIMUM",
            "limit": 10,
            "message": "Maximum order quantity is 10",
        }

    def test_zero_is_a_rejection_not_a_bad_request(self, api_client: APIClient, event):
        response = api_client.post(
            purchase_check_url(event.id, self.general(event).id), {"quantity": 0}, format="json"
        )
        assert response.status_code == 200
        assert response.data["reason"]["code"] == "INVALID_QUANTITY"

    @pytest.mark.parametrize("body", [{}, {"quantity": "many"}, {"quantity": 2.5}])
    def test_malformed_quantity(self, api_client: APIClient, event, body):
        response = api_client.post(
            purchase_check_url(event.id, self.general(event).id), body, format="json"
        )
        assert response.status_code == 400
        assert "quantity" in response.data

    def test_sold_out_type(self, api_client: APIClient, event):
        vip = event.ticket_types.get(name="VIP")
        response = api_client.post(purchase_check_url(event.id, vip.id), {"quantity": 1}, format="json")
        assert response.data["reason"]["code"] == "SOLD_OUT"

    def test_ticket_type_from_another_event(self, api_client: APIClient, event):
        other = models.Event.objects.create(
            name="Other", start_date=event.start_date, end_date=event.end_date
        )
        stranger = models.TicketType.objects.create(
            event=other, name="GA", price=Decimal("5.00"), quantity=5
        )
        response = api_client.post(
            purchase_check_url(event.id, stranger.id), {"quantity": 1}, format="json"
        )
        assert response.status_code == 404
        assert response.data["code"] == "TICKET_TYPE_NOT_FOUND"

    def test_cancelled_event_is_not_eligible(self, api_client: APIClient, event):
        event.status = models.Event.Status.CANCELLED
        event.save()
        response = api_client.post(
            purchase_check_url(event.id, self.general(event).id), {"quantity": 1}, format="json"
        )
        assert response.status_code == 200
        assert response.data["eligible"] is False
        assert response.data["reason"] == {
            "code": "NOT_PUBLISHED",
            "limit": None,
            "message": "This event is not available for booking",
        }

    def test_check_does_not_change_inventory(self, api_client: APIClient, event):
        general = self.general(event)
        api_client.post(purchase_check_url(event.id, general.id), {"quantity": 5}, format="json")
        general.refresh_from_db()
        assert general.sold == 10
