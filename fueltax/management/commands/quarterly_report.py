from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from fueltax.domain.types import InsufficientDataNotice
from fueltax.services.report import ReportError, generate_report
from fueltax.services.report_export import report_filename, report_to_csv


class Command(BaseCommand):
    help = "Generate a quarterly IFTA jurisdiction report for one user"

    def add_arguments(self, parser):
        parser.add_argument("--user", required=True, help="Username whose entries are aggregated")
        parser.add_argument("--year", type=int, required=True, help="Calendar year, e.g. 2024")
        parser.add_argument("--quarter", type=int, required=True, help="Quarter number 1-4")
        parser.add_argument(
            "--output",
            default=None,
            help="Write the CSV to this path, or to a directory using the default file name",
        )

    def handle(self, *args, **options):
        user_model = get_user_model()
        try:
            user = user_model.objects.get(**{user_model.USERNAME_FIELD: options["user"]})
        except user_model.DoesNotExist as exc:
            raise CommandError(f"User not found: {options['user']}") from exc

        year = options["year"]
        quarter = options["quarter"]
        try:
            outcome = generate_report(user_id=user.pk, year=year, quarter=quarter)
        except ReportError as exc:
            raise CommandError(str(exc)) from exc

        if isinstance(outcome, InsufficientDataNotice):
            self.stdout.write(self.style.WARNING(outcome.message))
            return

        csv_text = report_to_csv(outcome, year=year, quarter=quarter)
        if options["output"] is None:
            self.stdout.write(csv_text, ending="")
            return

        output_path = Path(options["output"]).expanduser()
        if output_path.is_dir():
            output_path = output_path / report_filename(year, quarter)
        output_path.write_text(csv_text, encoding="utf-8")

        self.stdout.write(
            self.style.SUCCESS(f"Wrote {len(outcome.rows)} jurisdiction rows to {output_path.resolve()}")
        )
