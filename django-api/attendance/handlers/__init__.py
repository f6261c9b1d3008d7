from attendance.handlers.views import (
    AttendanceImportView,
    CertificateDownloadedView,
    CertificateListView,
    CodeCheckInView,
    CodeCheckOutView,
    ParticipantDetailView,
    ParticipantListView,
    ParticipantsReportView,
    TicketByCodeView,
    TicketCertificateView,
    TicketCheckInView,
    TicketCheckOutView,
    TicketDetailView,
    TicketImportView,
    TicketListView,
    TicketTypeDetailView,
    TicketTypeListView,
)

__all__ = [
    "AttendanceImportView",
    "CertificateDownloadedView",
    "CertificateListView",
    "CodeCheckInView",
    "CodeCheckOutView",
    "ParticipantDetailView",
    "ParticipantListView",
    "ParticipantsReportView",
    "TicketByCodeView",
    "TicketCertificateView",
    "TicketCheckInView",
    "TicketCheckOutView",
    "TicketDetailView",
    "TicketImportView",
    "TicketListView",
    "TicketTypeDetailView",
    "TicketTypeListView",
]
