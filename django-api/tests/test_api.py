"""API tests for the attendance endpoints.

Run with: pytest tests/test_api.py -v
"""

from uuid import uuid4

import pytest
from django.core import mail
from django.core.management import call_command

from attendance import models as orm


@pytest.fixture
def ticket_type(api_client):
    response = api_client.post(
        "/api/ticket-types",
        {"name": "Attendee", "minimum_hours_for_certificate": 2},
        format="json",
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def ticket(api_client, ticket_type):
    response = api_client.post(
        "/api/tickets",
        {
            "name": "Ana Lima",
            "email": "ana@example.com",
            "ticket_type_id": ticket_type["id"],
            "unique_code": "ANA123",
        },
        format="json",
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.django_db
class TestTicketTypeEndpoints:
    """Tests for /api/ticket-types."""

    def test_list_ticket_types(self, api_client, ticket_type):
        response = api_client.get("/api/ticket-types")
        assert response.status_code == 200
        assert response.json() == [ticket_type]

    def test_create_rejects_negative_hours(self, api_client):
        response = api_client.post(
            "/api/ticket-types",
            {"name": "Bad", "minimum_hours_for_certificate": -1},
            format="json",
        )
        assert response.status_code == 400
        body = response.json()["error"]
        assert body["code"] == "VALIDATION_FAILED"
        assert "minimum_hours_for_certificate" in body["details"]

    def test_patch_updates_minimum(self, api_client, ticket_type):
        response = api_client.patch(
            f"/api/ticket-types/{ticket_type['id']}",
            {"minimum_hours_for_certificate": 3.5},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["minimum_hours_for_certificate"] == 3.5
        assert response.json()["name"] == "Attendee"

    def test_patch_unknown_type_returns_404(self, api_client):
        response = api_client.patch(
            f"/api/ticket-types/{uuid4()}", {"name": "X"}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TICKET_TYPE_NOT_FOUND"

    def test_delete_type_in_use_returns_409(self, api_client, ticket_type, ticket):
        response = api_client.delete(f"/api/ticket-types/{ticket_type['id']}")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TICKET_TYPE_IN_USE"

    def test_delete_unused_type(self, api_client, ticket_type):
        response = api_client.delete(f"/api/ticket-types/{ticket_type['id']}")
        assert response.status_code == 204
        assert api_client.get("/api/ticket-types").json() == []


@pytest.mark.django_db
class TestTicketEndpoints:
    """Tests for /api/tickets."""

    def test_create_normalises_code(self, ticket):
        assert ticket["unique_code"] == "ana123"

    def test_get_ticket(self, api_client, ticket):
        response = api_client.get(f"/api/tickets/{ticket['id']}")
        assert response.status_code == 200
        assert response.json() == ticket

    def test_get_invalid_id_returns_400(self, api_client):
        response = api_client.get("/api/tickets/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ID"

    def test_get_unknown_ticket_returns_404(self, api_client):
        response = api_client.get(f"/api/tickets/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == {
            "code": "TICKET_NOT_FOUND",
            "message": "Ticket not found",
        }

    def test_find_by_code(self, api_client, ticket):
        response = api_client.get("/api/tickets/by-code/Ana123")
        assert response.status_code == 200
        assert response.json()["id"] == ticket["id"]

    def test_duplicate_code_returns_409(self, api_client, ticket_type, ticket):
        response = api_client.post(
            "/api/tickets",
            {
                "name": "Bo",
                "email": "bo@example.com",
                "ticket_type_id": ticket_type["id"],
                "unique_code": "ana123",
            },
            format="json",
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_TICKET_CODE"

    def test_create_with_unknown_type_returns_404(self, api_client):
        response = api_client.post(
            "/api/tickets",
            {"name": "Bo", "email": "bo@example.com", "ticket_type_id": str(uuid4())},
            format="json",
        )
        assert response.status_code == 404

    def test_create_with_bad_email_returns_400(self, api_client, ticket_type):
        response = api_client.post(
            "/api/tickets",
            {"name": "Bo", "email": "nope", "ticket_type_id": ticket_type["id"]},
            format="json",
        )
        assert response.status_code == 400
        assert "email" in response.json()["error"]["details"]

    def test_patch_ticket(self, api_client, ticket):
        response = api_client.patch(
            f"/api/tickets/{ticket['id']}", {"name": "Ana Souza"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Ana Souza"

    def test_delete_ticket(self, api_client, ticket):
        assert api_client.delete(f"/api/tickets/{ticket['id']}").status_code == 204
        assert api_client.get(f"/api/tickets/{ticket['id']}").status_code == 404

    def test_import_participants(self, api_client, ticket):
        response = api_client.post(
            "/api/tickets/import",
            [
                {"name": "Bo", "email": "bo@example.com", "sector": "Staff"},
                {"name": "Ana", "email": "ana@example.com", "sector": "Attendee"},
            ],
            format="json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["created_tickets"] == 1
        assert body["created_ticket_types"] == 1
        assert body["errors"] == [
            {"index": 1, "reason": "Participant already registered: ana@example.com"}
        ]

    def test_import_requires_array(self, api_client):
        response = api_client.post("/api/tickets/import", {"name": "Bo"}, format="json")
        assert response.status_code == 400


@pytest.mark.django_db
class TestAttendanceEndpoints:
    """Tests for check-in, check-out and participant status."""

    def test_check_in_and_status(self, api_client, ticket):
        response = api_client.post(
            f"/api/tickets/{ticket['id']}/check-in",
            {"timestamp": "2024-05-04T09:00:00Z"},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["kind"] == "check_in"

        status = api_client.get(f"/api/participants/{ticket['id']}").json()
        assert status["is_checked_in"] is True
        assert status["total_hours"] == 0
        assert len(status["check_history"]) == 1

    def test_check_out_issues_certificate_and_emails_it(self, api_client, ticket):
        api_client.post(
            f"/api/tickets/{ticket['id']}/check-in",
            {"timestamp": "2024-05-04T09:00:00Z"},
            format="json",
        )
        response = api_client.post(
            f"/api/tickets/{ticket['id']}/check-out",
            {"timestamp": "2024-05-04T11:30:00Z"},
            format="json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["event"]["kind"] == "check_out"
        assert body["certificate"]["participation_hours"] == 2.5

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["ana@example.com"]
        assert "2.50 hours" in mail.outbox[0].body

        status = api_client.get(f"/api/participants/{ticket['id']}").json()
        assert status["certificate_generated"] is True
        assert status["is_eligible_for_certificate"] is True

    def test_short_check_out_has_no_certificate(self, api_client, ticket):
        api_client.post("/api/check-in", {"code": "ANA123", "timestamp": "2024-05-04T09:00:00Z"}, format="json")
        response = api_client.post(
            "/api/check-out",
            {"code": "ana123", "timestamp": "2024-05-04T10:00:00Z"},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["certificate"] is None
        assert mail.outbox == []

    def test_check_in_unknown_code_returns_404(self, api_client):
        response = api_client.post("/api/check-in", {"code": "nobody"}, format="json")
        assert response.status_code == 404

    def test_check_in_unknown_ticket_returns_404(self, api_client):
        response = api_client.post(f"/api/tickets/{uuid4()}/check-in", {}, format="json")
        assert response.status_code == 404

    def test_participants_list_reflects_new_events(self, api_client, ticket):
        assert api_client.get("/api/participants").json()[0]["is_checked_in"] is False
        api_client.post(f"/api/tickets/{ticket['id']}/check-in", {}, format="json")
        assert api_client.get("/api/participants").json()[0]["is_checked_in"] is True

    def test_attendance_import(self, api_client, ticket):
        response = api_client.post(
            "/api/attendance/import",
            [
                {"code": "ana123", "timestamp": "2024-05-04T09:00:00Z", "kind": "check_in"},
                {"code": "ana123", "timestamp": "2024-05-04T11:00:00Z", "kind": "check_out"},
                {"code": "ana123", "kind": "check_in"},
            ],
            format="json",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["created_events"] == 2
        assert body["errors"][0]["index"] == 2
        assert orm.Certificate.objects.count() == 1

    def test_report(self, api_client, ticket):
        api_client.post(f"/api/tickets/{ticket['id']}/check-in", {}, format="json")
        report = api_client.get("/api/reports/participants").json()
        assert report["total_participants"] == 1
        assert report["checked_in_count"] == 1
        assert report["certificates_generated"] == 0


@pytest.mark.django_db
class TestCertificateEndpoints:
    """Tests for certificate generation and listing."""

    def attend(self, api_client, ticket, end):
        api_client.post(
            f"/api/tickets/{ticket['id']}/check-in",
            {"timestamp": "2024-05-04T09:00:00Z"},
            format="json",
        )
        api_client.post(
            f"/api/tickets/{ticket['id']}/check-out", {"timestamp": end}, format="json"
        )

    def test_generate_not_eligible_returns_409(self, api_client, ticket):
        self.attend(api_client, ticket, "2024-05-04T10:00:00Z")
        response = api_client.post(f"/api/tickets/{ticket['id']}/certificate")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CERTIFICATE_NOT_ELIGIBLE"

    def test_generate_returns_existing_certificate(self, api_client, ticket):
        self.attend(api_client, ticket, "2024-05-04T12:00:00Z")
        first = api_client.post(f"/api/tickets/{ticket['id']}/certificate").json()
        second = api_client.post(f"/api/tickets/{ticket['id']}/certificate").json()
        assert first == second
        assert len(api_client.get("/api/certificates").json()) == 1

    def test_mark_downloaded(self, api_client, ticket):
        self.attend(api_client, ticket, "2024-05-04T12:00:00Z")
        certificate = api_client.get("/api/certificates").json()[0]
        response = api_client.post(f"/api/certificates/{certificate['id']}/downloaded")
        assert response.status_code == 200
        assert response.json()["downloaded"] is True

    def test_mark_downloaded_unknown_returns_404(self, api_client):
        response = api_client.post(f"/api/certificates/{uuid4()}/downloaded")
        assert response.status_code == 404


@pytest.mark.django_db
class TestManagementCommands:
    def test_import_participants_command(self, tmp_path, capsys):
        path = tmp_path / "participants.json"
        path.write_text(
            '[{"name": "Ana", "email": "ana@example.com", "sector": "Attendee"},'
            ' {"name": "Bo", "sector": "Attendee"}]',
            encoding="utf-8",
        )
        call_command("import_participants", str(path))
        captured = capsys.readouterr()
        assert "Created 1 ticket types and 1 tickets (1 rejected)" in captured.out
        assert "item 1: Missing required fields: email" in captured.err
        assert orm.Ticket.objects.count() == 1

    def test_participants_report_summary(self, api_client, ticket, capsys):
        call_command("participants_report", "--summary")
        assert "participants=1 checked_in=0" in capsys.readouterr().out
