"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to attendance.handlers.errors
- Never contain business logic
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from attendance.domain.errors import RecordValidationError
from attendance.handlers.serializers import (
    AttendanceEventSerializer,
    AttendanceInputSerializer,
    CertificateSerializer,
    CheckOutResultSerializer,
    CodeAttendanceInputSerializer,
    ImportReportSerializer,
    ParticipantsReportSerializer,
    ParticipantStatusSerializer,
    TicketInputSerializer,
    TicketSerializer,
    TicketTypeInputSerializer,
    TicketTypeSerializer,
    TicketUpdateSerializer,
)
from attendance.services import get_services


def _validated(serializer_class, request: Request, partial: bool = False) -> dict:
    serializer = serializer_class(data=request.data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def _import_items(request: Request) -> list:
    if not isinstance(request.data, list):
        raise RecordValidationError("Request body must be a JSON array")
    return request.data


class TicketTypeListView(APIView):
    """Handler for GET/POST /api/ticket-types"""

    def get(self, request: Request) -> Response:
        ticket_types = get_services().registration.list_ticket_types()
        return Response(TicketTypeSerializer(ticket_types, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(TicketTypeInputSerializer, request)
        ticket_type = get_services().registration.create_ticket_type(
            data["name"], data["minimum_hours_for_certificate"]
        )
        return Response(TicketTypeSerializer(ticket_type).data, status=status.HTTP_201_CREATED)


class TicketTypeDetailView(APIView):
    """Handler for PATCH/DELETE /api/ticket-types/{ticket_type_id}"""

    def patch(self, request: Request, ticket_type_id: str) -> Response:
        data = _validated(TicketTypeInputSerializer, request, partial=True)
        ticket_type = get_services().registration.update_ticket_type(
            ticket_type_id,
            name=data.get("name"),
            minimum_hours=data.get("minimum_hours_for_certificate"),
        )
        return Response(TicketTypeSerializer(ticket_type).data)

    def delete(self, request: Request, ticket_type_id: str) -> Response:
        get_services().registration.delete_ticket_type(ticket_type_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TicketListView(APIView):
    """Handler for GET/POST /api/tickets"""

    def get(self, request: Request) -> Response:
        tickets = get_services().registration.list_tickets()
        return Response(TicketSerializer(tickets, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(TicketInputSerializer, request)
        ticket = get_services().registration.create_ticket(
            data["name"],
            data["email"],
            str(data["ticket_type_id"]),
            data.get("unique_code") or None,
        )
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailView(APIView):
    """Handler for GET/PATCH/DELETE /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        ticket = get_services().registration.get_ticket(ticket_id)
        return Response(TicketSerializer(ticket).data)

    def patch(self, request: Request, ticket_id: str) -> Response:
        data = _validated(TicketUpdateSerializer, request, partial=True)
        ticket_type_id = data.get("ticket_type_id")
        ticket = get_services().registration.update_ticket(
            ticket_id,
            name=data.get("name"),
            email=data.get("email"),
            ticket_type_id=str(ticket_type_id) if ticket_type_id else None,
        )
        return Response(TicketSerializer(ticket).data)

    def delete(self, request: Request, ticket_id: str) -> Response:
        get_services().registration.delete_ticket(ticket_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TicketByCodeView(APIView):
    """Handler for GET /api/tickets/by-code/{code}"""

    def get(self, request: Request, code: str) -> Response:
        ticket = get_services().registration.find_ticket_by_code(code)
        return Response(TicketSerializer(ticket).data)


class TicketImportView(APIView):
    """Handler for POST /api/tickets/import"""

    def post(self, request: Request) -> Response:
        report = get_services().registration.import_participants(_import_items(request))
        return Response(ImportReportSerializer(report).data)


class TicketCheckInView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/check-in"""

    def post(self, request: Request, ticket_id: str) -> Response:
        data = _validated(AttendanceInputSerializer, request)
        event = get_services().attendance.check_in(ticket_id, data.get("timestamp"))
        return Response(AttendanceEventSerializer(event).data, status=status.HTTP_201_CREATED)


class TicketCheckOutView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/check-out"""

    def post(self, request: Request, ticket_id: str) -> Response:
        data = _validated(AttendanceInputSerializer, request)
        result = get_services().attendance.check_out(ticket_id, data.get("timestamp"))
        return Response(CheckOutResultSerializer(result).data, status=status.HTTP_201_CREATED)


class CodeCheckInView(APIView):
    """Handler for POST /api/check-in (scanned ticket code)"""

    def post(self, request: Request) -> Response:
        data = _validated(CodeAttendanceInputSerializer, request)
        event = get_services().attendance.check_in_by_code(data["code"], data.get("timestamp"))
        return Response(AttendanceEventSerializer(event).data, status=status.HTTP_201_CREATED)


class CodeCheckOutView(APIView):
    """Handler for POST /api/check-out (scanned ticket code)"""

    def post(self, request: Request) -> Response:
        data = _validated(CodeAttendanceInputSerializer, request)
        result = get_services().attendance.check_out_by_code(
            data["code"], data.get("timestamp")
        )
        return Response(CheckOutResultSerializer(result).data, status=status.HTTP_201_CREATED)


class AttendanceImportView(APIView):
    """Handler for POST /api/attendance/import"""

    def post(self, request: Request) -> Response:
        report = get_services().attendance.import_attendance(_import_items(request))
        return Response(ImportReportSerializer(report).data)


class ParticipantListView(APIView):
    """Handler for GET /api/participants"""

    def get(self, request: Request) -> Response:
        statuses = get_services().attendance.get_all_statuses()
        return Response(ParticipantStatusSerializer(statuses, many=True).data)


class ParticipantDetailView(APIView):
    """Handler for GET /api/participants/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        participant = get_services().attendance.get_status(ticket_id)
        return Response(ParticipantStatusSerializer(participant).data)


class ParticipantsReportView(APIView):
    """Handler for GET /api/reports/participants"""

    def get(self, request: Request) -> Response:
        report = get_services().attendance.participants_report()
        return Response(ParticipantsReportSerializer(report).data)


class CertificateListView(APIView):
    """Handler for GET /api/certificates"""

    def get(self, request: Request) -> Response:
        certificates = get_services().attendance.list_certificates()
        return Response(CertificateSerializer(certificates, many=True).data)


class TicketCertificateView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/certificate"""

    def post(self, request: Request, ticket_id: str) -> Response:
        certificate = get_services().attendance.generate_certificate(ticket_id)
        return Response(CertificateSerializer(certificate).data)


class CertificateDownloadedView(APIView):
    """Handler for POST /api/certificates/{certificate_id}/downloaded"""

    def post(self, request: Request, certificate_id: str) -> Response:
        certificate = get_services().attendance.mark_certificate_downloaded(certificate_id)
        return Response(CertificateSerializer(certificate).data)
