"""Certificate delivery.

Delivery runs after the certificate is stored; a failed delivery never
undoes the certificate.
"""

import logging
from abc import ABC, abstractmethod

from django.core.mail import send_mail
from django.template.loader import render_to_string

from attendance.domain import Certificate, ParticipantStatus

logger = logging.getLogger(__name__)


class CertificateNotifier(ABC):
    """Delivers a freshly issued certificate to its participant."""

    @abstractmethod
    def certificate_issued(self, status: ParticipantStatus, certificate: Certificate) -> None:
        ...


class NullCertificateNotifier(CertificateNotifier):
    """Delivers nothing; used when certificate emails are turned off."""

    def certificate_issued(self, status: ParticipantStatus, certificate: Certificate) -> None:
        logger.debug("Certificate delivery disabled for ticket %s", certificate.ticket_id)


def render_certificate(
    status: ParticipantStatus, certificate: Certificate, event_name: str
) -> str:
    return render_to_string(
        "attendance/certificate.txt",
        {
            "event_name": event_name,
            "participant_name": status.ticket.name,
            "ticket_type": status.ticket_type.name,
            "hours": f"{certificate.participation_hours.value:.2f}",
            "generated_at": certificate.generated_at,
            "certificate_id": certificate.id,
        },
    )


class EmailCertificateNotifier(CertificateNotifier):
    """Emails the rendered certificate through Django's mail framework."""

    def __init__(self, event_name: str, from_email: str | None = None) -> None:
        self._event_name = event_name
        self._from_email = from_email

    def certificate_issued(self, status: ParticipantStatus, certificate: Certificate) -> None:
        body = render_certificate(status, certificate, self._event_name)
        send_mail(
            subject=f"Your {self._event_name} certificate",
            message=body,
            from_email=self._from_email,
            recipient_list=[status.ticket.email],
        )
        logger.info(
            "Certificate %s emailed to %s", certificate.id, status.ticket.email
        )
