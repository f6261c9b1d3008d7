"""Serializers for request input and domain model responses."""

from rest_framework import serializers


class TicketTypeSerializer(serializers.Serializer):
    """Serializer for TicketType domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    minimum_hours_for_certificate = serializers.FloatField(
        source="minimum_hours_for_certificate.value"
    )
    created_at = serializers.DateTimeField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.EmailField()
    unique_code = serializers.CharField()
    ticket_type_id = serializers.CharField()
    created_at = serializers.DateTimeField()


class AttendanceEventSerializer(serializers.Serializer):
    """Serializer for AttendanceEvent domain model."""

    id = serializers.CharField()
    ticket_id = serializers.CharField()
    timestamp = serializers.DateTimeField()
    kind = serializers.CharField(source="kind.value")


class CertificateSerializer(serializers.Serializer):
    """Serializer for Certificate domain model."""

    id = serializers.CharField()
    ticket_id = serializers.CharField()
    participation_hours = serializers.FloatField(source="participation_hours.value")
    generated_at = serializers.DateTimeField()
    downloaded = serializers.BooleanField()


class ParticipantStatusSerializer(serializers.Serializer):
    """Serializer for ParticipantStatus snapshots."""

    ticket = TicketSerializer()
    ticket_type = TicketTypeSerializer()
    is_checked_in = serializers.BooleanField()
    total_hours = serializers.FloatField()
    is_eligible_for_certificate = serializers.BooleanField()
    certificate_generated = serializers.BooleanField()
    last_check_in = serializers.DateTimeField(allow_null=True)
    check_history = AttendanceEventSerializer(many=True)


class ParticipantsReportSerializer(serializers.Serializer):
    total_participants = serializers.IntegerField()
    checked_in_count = serializers.IntegerField()
    eligible_for_certificate = serializers.IntegerField()
    certificates_generated = serializers.IntegerField()
    participants = ParticipantStatusSerializer(many=True)
    generated_at = serializers.DateTimeField()


class ImportIssueSerializer(serializers.Serializer):
    index = serializers.IntegerField()
    reason = serializers.CharField()


class ImportReportSerializer(serializers.Serializer):
    created_ticket_types = serializers.IntegerField()
    created_tickets = serializers.IntegerField()
    created_events = serializers.IntegerField()
    errors = ImportIssueSerializer(many=True)


class CheckOutResultSerializer(serializers.Serializer):
    event = AttendanceEventSerializer()
    certificate = CertificateSerializer(allow_null=True)


# Request bodies


class TicketTypeInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    minimum_hours_for_certificate = serializers.FloatField(min_value=0, default=0)


class TicketInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    ticket_type_id = serializers.UUIDField(format="hex_verbose")
    unique_code = serializers.RegexField(
        r"^[A-Za-z0-9]+$", max_length=64, required=False, allow_blank=True
    )


class TicketUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(max_length=255, required=False)
    ticket_type_id = serializers.UUIDField(format="hex_verbose", required=False)


class AttendanceInputSerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField(required=False)


class CodeAttendanceInputSerializer(AttendanceInputSerializer):
    code = serializers.CharField(max_length=64)
