from django.urls import path

from attendance.handlers import (
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

urlpatterns = [
    path("ticket-types", TicketTypeListView.as_view(), name="ticket-type-list"),
    path(
        "ticket-types/<str:ticket_type_id>",
        TicketTypeDetailView.as_view(),
        name="ticket-type-detail",
    ),
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path("tickets/import", TicketImportView.as_view(), name="ticket-import"),
    path("tickets/by-code/<str:code>", TicketByCodeView.as_view(), name="ticket-by-code"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path(
        "tickets/<str:ticket_id>/check-in",
        TicketCheckInView.as_view(),
        name="ticket-check-in",
    ),
    path(
        "tickets/<str:ticket_id>/check-out",
        TicketCheckOutView.as_view(),
        name="ticket-check-out",
    ),
    path(
        "tickets/<str:ticket_id>/certificate",
        TicketCertificateView.as_view(),
        name="ticket-certificate",
    ),
    path("check-in", CodeCheckInView.as_view(), name="code-check-in"),
    path("check-out", CodeCheckOutView.as_view(), name="code-check-out"),
    path("attendance/import", AttendanceImportView.as_view(), name="attendance-import"),
    path("participants", ParticipantListView.as_view(), name="participant-list"),
    path(
        "participants/<str:ticket_id>",
        ParticipantDetailView.as_view(),
        name="participant-detail",
    ),
    path("reports/participants", ParticipantsReportView.as_view(), name="participants-report"),
    path("certificates", CertificateListView.as_view(), name="certificate-list"),
    path(
        "certificates/<str:certificate_id>/downloaded",
        CertificateDownloadedView.as_view(),
        name="certificate-downloaded",
    ),
]
