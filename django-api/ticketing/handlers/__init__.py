from ticketing.handlers.views import EventAvailabilityView, EventListView, PurchaseCheckView

__all__ = ["EventListView", "EventAvailabilityView", "PurchaseCheckView"]
