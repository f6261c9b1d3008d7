"""Certificate issuance.

Each ticket moves through ``not_eligible -> eligible -> certificate_generated``
and never back. Issuing re-resolves the status from the store right before
writing and relies on the store's conditional write, so repeated or
concurrent requests leave at most one certificate per ticket.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from attendance.domain import Certificate, Hours, ParticipantStatus, TicketId
from attendance.domain.errors import (
    CertificateNotEligibleError,
    CertificateNotFoundError,
    TicketNotFoundError,
)
from attendance.services.cache import PARTICIPANT_STATUSES_KEY, ReadThroughCache
from attendance.services.notifications import CertificateNotifier, NullCertificateNotifier
from attendance.services.status_resolver import ParticipantStatusResolver
from attendance.stores.interfaces import AttendanceStore

logger = logging.getLogger(__name__)


class CertificationState(Enum):
    NOT_ELIGIBLE = "not_eligible"
    ELIGIBLE = "eligible"
    CERTIFICATE_GENERATED = "certificate_generated"


def certification_state(status: ParticipantStatus) -> CertificationState:
    if status.certificate_generated:
        return CertificationState.CERTIFICATE_GENERATED
    if status.is_eligible_for_certificate:
        return CertificationState.ELIGIBLE
    return CertificationState.NOT_ELIGIBLE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CertificateIssuanceController:
    """Issues at most one certificate per ticket."""

    def __init__(
        self,
        store: AttendanceStore,
        resolver: ParticipantStatusResolver,
        cache: ReadThroughCache,
        notifier: CertificateNotifier | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._cache = cache
        self._notifier = notifier or NullCertificateNotifier()
        self._clock = clock

    def generate(self, ticket_id: TicketId) -> Certificate:
        """Issue the ticket's certificate, or return the one already issued.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            CertificateNotEligibleError: If the minimum hours are not met.
            CertificateNotFoundError: If the issued certificate vanished
                while it was being looked up.
        """
        status = self._resolver.resolve(ticket_id)
        state = certification_state(status)
        if state is CertificationState.CERTIFICATE_GENERATED:
            existing = self._store.get_certificate_for_ticket(ticket_id)
            if existing is not None:
                return existing
            # Deleted between the status read and this lookup.
            if self._store.get_ticket(ticket_id) is None:
                raise TicketNotFoundError(str(ticket_id))
            raise CertificateNotFoundError(str(ticket_id))
        if state is CertificationState.NOT_ELIGIBLE:
            raise CertificateNotEligibleError(
                str(ticket_id),
                status.total_hours,
                status.ticket_type.minimum_hours_for_certificate.value,
            )
        certificate, _ = self._issue(status)
        return certificate

    def issue_if_eligible(self, ticket_id: TicketId) -> Certificate | None:
        """Issue a certificate when the ticket just became eligible.

        Returns None when the ticket is not eligible or already certified.
        """
        status = self._resolver.resolve(ticket_id)
        if certification_state(status) is not CertificationState.ELIGIBLE:
            return None
        certificate, created = self._issue(status)
        return certificate if created else None

    def _issue(self, status: ParticipantStatus) -> tuple[Certificate, bool]:
        generated_at = self._clock()
        certificate, created = self._store.create_certificate_if_absent(
            status.ticket.id, Hours(status.total_hours), generated_at
        )
        if not created:
            logger.info(
                "Certificate for ticket %s already issued; returning existing one",
                status.ticket.id,
            )
            return certificate, False

        self._cache.invalidate(PARTICIPANT_STATUSES_KEY)
        logger.info(
            "Issued certificate %s for ticket %s (%.2f hours)",
            certificate.id,
            status.ticket.id,
            status.total_hours,
        )
        self._deliver(status, certificate)
        return certificate, True

    def _deliver(self, status: ParticipantStatus, certificate: Certificate) -> None:
        try:
            self._notifier.certificate_issued(status, certificate)
        except Exception:
            logger.exception(
                "Delivery of certificate %s for ticket %s failed",
                certificate.id,
                status.ticket.id,
            )

    def list_certificates(self) -> list[Certificate]:
        return self._store.list_certificates()

    def mark_downloaded(self, certificate_id: UUID) -> Certificate:
        certificate = self._store.mark_certificate_downloaded(certificate_id)
        if certificate is None:
            raise CertificateNotFoundError(str(certificate_id))
        self._cache.invalidate(PARTICIPANT_STATUSES_KEY)
        return certificate
