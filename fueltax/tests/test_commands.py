import tempfile
from datetime import datetime
from datetime import timezone as dt_timezone
from io import StringIO
from pathlib import Path

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings

from fueltax.models import FuelEntry

UTC = dt_timezone.utc


@override_settings(TIME_ZONE="UTC")
class QuarterlyReportCommandTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = get_user_model().objects.create_user(username="driver", password="secret-pass-123")
        for when, odometer, state, amount in (
            (datetime(2024, 10, 3, tzinfo=UTC), 200000, "TX", 100),
            (datetime(2024, 11, 20, tzinfo=UTC), 200750, "OK", 80),
        ):
            FuelEntry.objects.create(
                user=cls.user,
                truck_number="7",
                date_time=when,
                odometer=odometer,
                state=state,
                fuel_type=FuelEntry.FuelType.DIESEL,
                amount=amount,
                cost=amount * 4,
            )

    def test_prints_csv_to_stdout(self):
        out = StringIO()

        call_command("quarterly_report", user="driver", year=2024, quarter=4, stdout=out)

        lines = out.getvalue().splitlines()
        self.assertEqual(lines[1], "Quarter,Q4")
        self.assertEqual(lines[3], "Overall Fleet MPG,4.17")
        self.assertIn("TX,750.00,100.00,400.00", lines)

    def test_writes_csv_into_directory(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            out = StringIO()

            call_command("quarterly_report", user="driver", year=2024, quarter=4, output=tmp_dir, stdout=out)

            written = Path(tmp_dir) / "IFTA_Report_Q4_2024.csv"
            self.assertTrue(written.exists())
            self.assertIn("OK,0.00,80.00,320.00", written.read_text(encoding="utf-8"))
            self.assertIn("Wrote 2 jurisdiction rows", out.getvalue())

    def test_reports_insufficient_data(self):
        out = StringIO()

        call_command("quarterly_report", user="driver", year=2024, quarter=1, stdout=out)

        self.assertIn("At least two entries", out.getvalue())

    def test_unknown_user_and_bad_quarter_raise(self):
        with self.assertRaises(CommandError):
            call_command("quarterly_report", user="nobody", year=2024, quarter=1)

        with self.assertRaises(CommandError):
            call_command("quarterly_report", user="driver", year=2024, quarter=9)
