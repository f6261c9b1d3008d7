import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from attendance.services import get_services


class Command(BaseCommand):
    help = "Register participants from a JSON export (a list of name/email/sector records)."

    def add_arguments(self, parser):
        parser.add_argument("path", type=Path, help="JSON file holding the participant list")

    def handle(self, *args, **options):
        path: Path = options["path"]
        try:
            items = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(items, list):
            raise CommandError(f"{path} must contain a JSON array")

        report = get_services().registration.import_participants(items)
        for issue in report.errors:
            self.stderr.write(f"item {issue.index}: {issue.reason}")
        style = self.style.SUCCESS if report.ok else self.style.WARNING
        self.stdout.write(
            style(
                f"Created {report.created_ticket_types} ticket types and "
                f"{report.created_tickets} tickets ({len(report.errors)} rejected)"
            )
        )
