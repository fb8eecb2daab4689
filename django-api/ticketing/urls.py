from django.urls import path

from ticketing.handlers import EventAvailabilityView, EventListView, PurchaseCheckView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path(
        "events/<str:event_id>/availability",
        EventAvailabilityView.as_view(),
        name="event-availability",
    ),
    path(
        "events/<str:event_id>/ticket-types/<str:ticket_type_id>/purchase-check",
        PurchaseCheckView.as_view(),
        name="purchase-check",
    ),
]
