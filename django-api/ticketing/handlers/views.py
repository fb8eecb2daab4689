"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import structlog
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.domain.errors import DomainError, ErrorCode
from ticketing.handlers.serializers import (
    EventAvailabilitySerializer,
    EventSummarySerializer,
    PurchaseCheckRequestSerializer,
    PurchaseCheckSerializer,
)
from ticketing.services.availability_service import AvailabilityService
from ticketing.stores.cached_store import CachedEventStore
from ticketing.stores.django_store import DjangoEventStore

logger = structlog.get_logger(__name__)

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TICKET_TYPE_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_TYPE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def get_availability_service() -> AvailabilityService:
    return AvailabilityService(store=CachedEventStore(DjangoEventStore()))


class DomainAPIView(APIView):
    """APIView that renders domain errors as ``{"code", "message"}``."""

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            logger.info("domain_error", code=exc.code.value, path=self.request.path)
            return Response(
                {"code": exc.code.value, "message": exc.message},
                status=ERROR_STATUS[exc.code],
            )
        return super().handle_exception(exc)


class EventListView(DomainAPIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        summaries = get_availability_service().list_event_summaries()
        return Response(EventSummarySerializer(summaries, many=True).data)


class EventAvailabilityView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/availability"""

    def get(self, request: Request, event_id: str) -> Response:
        summary = get_availability_service().get_event_availability(event_id)
        return Response(EventAvailabilitySerializer(summary).data)


class PurchaseCheckView(DomainAPIView):
    """Handler for POST /api/events/{event_id}/ticket-types/{ticket_type_id}/purchase-check"""

    def post(self, request: Request, event_id: str, ticket_type_id: str) -> Response:
        body = PurchaseCheckRequestSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        check = get_availability_service().check_purchase(
            event_id, ticket_type_id, body.validated_data["quantity"]
        )
        return Response(PurchaseCheckSerializer(check).data)
