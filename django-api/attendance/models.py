"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class TicketType(models.Model):
    """Persistence model for ticket types."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    minimum_hours_for_certificate = models.FloatField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.name


class Ticket(models.Model):
    """Persistence model for participant tickets."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255)
    unique_code = models.CharField(max_length=64, unique=True)
    ticket_type = models.ForeignKey(
        TicketType, on_delete=models.PROTECT, related_name="tickets"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["email"], name="attendance_ticket_email_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class AttendanceEvent(models.Model):
    """Persistence model for check-in/check-out events."""

    class Kind(models.TextChoices):
        CHECK_IN = "check_in", "Check-in"
        CHECK_OUT = "check_out", "Check-out"

    sequence = models.BigAutoField(primary_key=True)
    event_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    ticket = models.ForeignKey(
        Ticket, on_delete=models.CASCADE, related_name="attendance_events"
    )
    timestamp = models.DateTimeField()
    kind = models.CharField(max_length=16, choices=Kind.choices)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sequence"]
        indexes = [
            models.Index(
                fields=["ticket", "sequence"], name="attendance_event_ticket_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.ticket_id} {self.kind} @ {self.timestamp}"


class Certificate(models.Model):
    """Persistence model for issued certificates."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket = models.ForeignKey(
        Ticket, on_delete=models.CASCADE, related_name="certificates"
    )
    participation_hours = models.FloatField()
    generated_at = models.DateTimeField()
    downloaded = models.BooleanField(default=False)

    class Meta:
        ordering = ["generated_at"]
        constraints = [
            models.UniqueConstraint(fields=["ticket"], name="one_certificate_per_ticket"),
        ]

    def __str__(self) -> str:
        return f"Certificate {self.ticket_id} ({self.participation_hours:.2f}h)"
