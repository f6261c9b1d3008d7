import csv

from django.core.management.base import BaseCommand

from attendance.services import get_services

COLUMNS = [
    "name",
    "email",
    "ticket_type",
    "checked_in",
    "total_hours",
    "eligible",
    "certificate",
    "last_check_in",
]


class Command(BaseCommand):
    help = "Write the participant status report as CSV to stdout."

    def add_arguments(self, parser):
        parser.add_argument(
            "--summary",
            action="store_true",
            help="Print only the aggregate counters",
        )

    def handle(self, *args, **options):
        report = get_services().attendance.participants_report()
        if options["summary"]:
            self.stdout.write(
                f"participants={report.total_participants} "
                f"checked_in={report.checked_in_count} "
                f"eligible={report.eligible_for_certificate} "
                f"certificates={report.certificates_generated}"
            )
            return

        writer = csv.writer(self.stdout)
        writer.writerow(COLUMNS)
        for status in report.participants:
            writer.writerow(
                [
                    status.ticket.name,
                    status.ticket.email,
                    status.ticket_type.name,
                    "yes" if status.is_checked_in else "no",
                    f"{status.total_hours:.2f}",
                    "yes" if status.is_eligible_for_certificate else "no",
                    "yes" if status.certificate_generated else "no",
                    status.last_check_in.isoformat() if status.last_check_in else "",
                ]
            )
