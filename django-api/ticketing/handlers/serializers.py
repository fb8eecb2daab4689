"""Serializers for transforming availability results to API responses."""

from rest_framework import serializers

from ticketing.domain import Available
from ticketing.domain.labels import rejection_message, status_code, status_label


class TicketTypeAvailabilitySerializer(serializers.Serializer):
    """Serializer for TicketTypeSummary."""

    id = serializers.CharField(source="ticket_type.id.value")
    name = serializers.CharField(source="ticket_type.name")
    price = serializers.SerializerMethodField()
    min_per_order = serializers.IntegerField(source="ticket_type.min_per_order")
    max_per_order = serializers.IntegerField(source="ticket_type.max_per_order")
    status = serializers.SerializerMethodField()
    available = serializers.SerializerMethodField()
    label = serializers.SerializerMethodField()

    def get_price(self, obj) -> str:
        return str(obj.ticket_type.price)

    def get_status(self, obj) -> str:
        return status_code(obj.status)

    def get_available(self, obj) -> int:
        return obj.status.quantity if isinstance(obj.status, Available) else 0

    def get_label(self, obj) -> str:
        return status_label(obj.status)


class EventSummarySerializer(serializers.Serializer):
    """Serializer for EventSummary as shown in listings."""

    id = serializers.CharField(source="event.id.value")
    name = serializers.CharField(source="event.name")
    status = serializers.SerializerMethodField()
    start_date = serializers.DateTimeField(source="event.start_date")
    end_date = serializers.DateTimeField(source="event.end_date")
    total_available = serializers.IntegerField(source="availability.total_available")
    displayed_available = serializers.IntegerField()
    is_purchasable = serializers.BooleanField(source="availability.is_purchasable")
    badge = serializers.CharField()

    def get_status(self, obj) -> str:
        return obj.event.status.value


class EventAvailabilitySerializer(EventSummarySerializer):
    """Serializer for EventSummary with per-type detail."""

    unavailable_reason = serializers.SerializerMethodField()
    evaluated_at = serializers.DateTimeField()
    ticket_types = TicketTypeAvailabilitySerializer(many=True)

    def get_unavailable_reason(self, obj) -> dict | None:
        reason = obj.unavailable_reason
        if reason is None:
            return None
        return {"code": reason.name, "message": reason.message}


class PurchaseCheckRequestSerializer(serializers.Serializer):
    """Validates the body of a purchase check.

    Only the format is checked here; quantities below one are a domain
    rejection, not a request error.
    """

    quantity = serializers.IntegerField()


class PurchaseCheckSerializer(serializers.Serializer):
    """Serializer for PurchaseCheck."""

    eligible = serializers.BooleanField()
    event_id = serializers.CharField(source="event_id.value")
    ticket_type_id = serializers.CharField(source="ticket_type_id.value")
    quantity = serializers.IntegerField()
    reason = serializers.SerializerMethodField()
    evaluated_at = serializers.DateTimeField()

    def get_reason(self, obj) -> dict | None:
        if obj.event_reason is not None:
            return {
                "code": obj.event_reason.name,
                "limit": None,
                "message": obj.event_reason.message,
            }
        rejection = obj.rejection
        if rejection is None:
            return None
        return {
            "code": rejection.code.value,
            "limit": rejection.limit,
            "message": rejection_message(rejection),
        }
