from datetime import datetime
from datetime import timezone as dt_timezone
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from fueltax.models import FuelEntry, Truck

UTC = dt_timezone.utc


def _entry_payload(**overrides) -> dict:
    payload = {
        "truckNumber": "T1",
        "dateTime": "2024-01-05T10:30:00Z",
        "odometer": 10000,
        "city": "Phoenix",
        "state": "az",
        "fuelType": "diesel",
        "amount": 50,
        "cost": 175,
    }
    payload.update(overrides)
    return payload


class ApiTestCase(TestCase):
    @classmethod
    def setUpTestData(cls):
        user_model = get_user_model()
        cls.user = user_model.objects.create_user(username="driver", password="secret-pass-123")
        cls.other_user = user_model.objects.create_user(username="other", password="secret-pass-123")

    def setUp(self):
        self.client.force_login(self.user)

    def _create_entry(self, user=None, **overrides) -> FuelEntry:
        values = {
            "user": user or self.user,
            "truck_number": "T1",
            "date_time": datetime(2024, 1, 5, tzinfo=UTC),
            "odometer": 10000,
            "city": "Phoenix",
            "state": "AZ",
            "fuel_type": FuelEntry.FuelType.DIESEL,
            "amount": 50,
            "cost": 175,
        }
        values.update(overrides)
        return FuelEntry.objects.create(**values)


@override_settings(TIME_ZONE="UTC")
class QuarterlyReportApiTests(ApiTestCase):
    def _seed_example(self):
        self._create_entry()
        self._create_entry(
            date_time=datetime(2024, 2, 10, tzinfo=UTC),
            odometer=10500,
            city="Barstow",
            state="CA",
            amount=60,
            cost=210,
        )

    def test_report_endpoint_returns_rows_and_mpg(self):
        self._seed_example()

        response = self.client.post(
            "/api/reports/quarterly/",
            data={"year": 2024, "quarter": 1},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(
            body["reportRows"],
            [
                {"jurisdiction": "AZ", "totalMiles": 500.0, "totalFuel": 50.0, "totalCost": 175.0},
                {"jurisdiction": "CA", "totalMiles": 0.0, "totalFuel": 60.0, "totalCost": 210.0},
            ],
        )
        self.assertAlmostEqual(body["overallMPG"], 500 / 110, places=6)

    def test_report_endpoint_returns_message_when_data_is_insufficient(self):
        self._create_entry()
        self._create_entry(date_time=datetime(2024, 2, 10, tzinfo=UTC), odometer=10500, is_ignored=True)

        response = self.client.post(
            "/api/reports/quarterly/",
            data={"year": 2024, "quarter": 1},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("message", response.json())
        self.assertNotIn("reportRows", response.json())

    def test_report_endpoint_ignores_other_users_entries(self):
        self._create_entry()
        self._create_entry(user=self.other_user, date_time=datetime(2024, 2, 10, tzinfo=UTC), odometer=10500)

        response = self.client.post(
            "/api/reports/quarterly/",
            data={"year": 2024, "quarter": 1},
            content_type="application/json",
        )

        self.assertIn("message", response.json())

    def test_report_endpoint_validates_quarter(self):
        response = self.client.post(
            "/api/reports/quarterly/",
            data={"year": 2024, "quarter": 5},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("quarter", response.json())

    def test_report_endpoint_requires_year(self):
        response = self.client.post(
            "/api/reports/quarterly/",
            data={"quarter": 2},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("year", response.json())

    def test_report_endpoint_requires_authentication(self):
        self.client.logout()

        response = self.client.post(
            "/api/reports/quarterly/",
            data={"year": 2024, "quarter": 1},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 401)

    @patch("fueltax.services.report.DjangoEntryStore.query")
    def test_report_endpoint_hides_internal_errors(self, mock_query):
        mock_query.side_effect = RuntimeError("database is locked")

        with self.assertLogs("fueltax.services.report", level="ERROR"):
            response = self.client.post(
                "/api/reports/quarterly/",
                data={"year": 2024, "quarter": 1},
                content_type="application/json",
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"detail": "Failed to generate report. Please try again."})
        self.assertNotIn("database is locked", response.content.decode())

    def test_csv_endpoint_renders_report(self):
        self._seed_example()

        response = self.client.get("/api/reports/quarterly/csv/", {"year": 2024, "quarter": 1})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response["Content-Type"].startswith("text/csv"))
        self.assertIn('filename="IFTA_Report_Q1_2024.csv"', response["Content-Disposition"])
        self.assertEqual(
            response.content.decode().splitlines(),
            [
                "IFTA Report",
                "Quarter,Q1",
                "Year,2024",
                "Overall Fleet MPG,4.55",
                "",
                "Jurisdiction,Total Miles Driven,Total Fuel Purchased (Gallons),Total Fuel Cost ($)",
                "AZ,500.00,50.00,175.00",
                "CA,0.00,60.00,210.00",
            ],
        )

    def test_csv_endpoint_returns_message_when_data_is_insufficient(self):
        response = self.client.get("/api/reports/quarterly/csv/", {"year": 2024, "quarter": 1})

        self.assertEqual(response.status_code, 200)
        self.assertIn("message", response.json())

    def test_csv_endpoint_validates_query(self):
        response = self.client.get("/api/reports/quarterly/csv/", {"year": 2024, "quarter": 0})

        self.assertEqual(response.status_code, 400)
        self.assertIn("quarter", response.json())

    @override_settings(TIME_ZONE="America/Phoenix")
    def test_report_endpoint_rejects_years_outside_four_digit_range(self):
        for year in (999, 9999):
            with self.subTest(year=year):
                response = self.client.post(
                    "/api/reports/quarterly/",
                    data={"year": year, "quarter": 4},
                    content_type="application/json",
                )

                self.assertEqual(response.status_code, 400)
                self.assertIn("year", response.json())


class FuelEntryApiTests(ApiTestCase):
    def test_create_entry_normalizes_state(self):
        response = self.client.post("/api/entries/", data=_entry_payload(), content_type="application/json")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(len(body), 1)
        self.assertEqual(body[0]["state"], "AZ")
        self.assertEqual(body[0]["truckNumber"], "T1")
        self.assertFalse(body[0]["isIgnored"])
        self.assertEqual(FuelEntry.objects.get().user, self.user)

    def test_create_entry_with_second_fuel_adds_def_companion(self):
        response = self.client.post(
            "/api/entries/",
            data=_entry_payload(secondFuel={"amount": 5, "cost": 17.5}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 201)
        fuel_types = sorted(FuelEntry.objects.values_list("fuel_type", flat=True))
        self.assertEqual(fuel_types, ["def", "diesel"])
        companion = FuelEntry.objects.get(fuel_type="def")
        self.assertEqual(companion.amount, 5.0)
        self.assertEqual(companion.odometer, 10000.0)
        self.assertEqual(companion.state, "AZ")

    def test_custom_fuel_with_second_fuel_adds_diesel_companion(self):
        response = self.client.post(
            "/api/entries/",
            data=_entry_payload(
                fuelType="custom",
                customFuelType="Reefer",
                amount=12,
                cost=40,
                secondFuel={"amount": 50, "cost": 175},
            ),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual([entry["fuelType"] for entry in response.json()], ["custom", "diesel"])
        companion = FuelEntry.objects.get(fuel_type="diesel")
        self.assertEqual(companion.amount, 50.0)
        self.assertEqual(companion.cost, 175.0)
        self.assertEqual(companion.custom_fuel_type, "")
        self.assertEqual(companion.odometer, 10000.0)

    def test_empty_second_fuel_is_skipped(self):
        response = self.client.post(
            "/api/entries/",
            data=_entry_payload(secondFuel={"amount": 0, "cost": 0}),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(FuelEntry.objects.count(), 1)

    def test_custom_fuel_requires_label(self):
        response = self.client.post(
            "/api/entries/",
            data=_entry_payload(fuelType="custom"),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("customFuelType", response.json())

    def test_rejects_negative_amount_and_bad_state(self):
        response = self.client.post(
            "/api/entries/",
            data=_entry_payload(amount=-1, state="Arizona"),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("amount", response.json())
        self.assertIn("state", response.json())

    def test_list_entries_is_paginated_newest_first(self):
        for day in range(1, 4):
            self._create_entry(date_time=datetime(2024, 1, day, tzinfo=UTC), odometer=1000 * day)
        self._create_entry(user=self.other_user)

        response = self.client.get("/api/entries/", {"page": 1, "limit": 2})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["totalPages"], 2)
        self.assertEqual(body["currentPage"], 1)
        self.assertEqual([entry["odometer"] for entry in body["entries"]], [3000.0, 2000.0])

    def test_update_entry(self):
        entry = self._create_entry()

        response = self.client.patch(
            f"/api/entries/{entry.pk}/",
            data={"cost": 180.25, "city": "Tucson"},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        entry.refresh_from_db()
        self.assertEqual(entry.cost, 180.25)
        self.assertEqual(entry.city, "Tucson")

    def test_update_entry_with_second_fuel_adds_companion(self):
        entry = self._create_entry()

        response = self.client.patch(
            f"/api/entries/{entry.pk}/",
            data={"odometer": 10020, "secondFuel": {"amount": 4, "cost": 14}},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], entry.pk)
        self.assertNotIn("secondFuel", response.json())
        companion = FuelEntry.objects.exclude(pk=entry.pk).get()
        self.assertEqual(companion.fuel_type, "def")
        self.assertEqual(companion.amount, 4.0)
        self.assertEqual(companion.odometer, 10020.0)
        self.assertEqual(companion.user, self.user)

    def test_update_without_second_fuel_adds_nothing(self):
        entry = self._create_entry(fuel_type=FuelEntry.FuelType.CUSTOM, custom_fuel_type="Reefer")

        response = self.client.put(
            f"/api/entries/{entry.pk}/",
            data=_entry_payload(fuelType="custom", customFuelType="Reefer", amount=30),
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(FuelEntry.objects.count(), 1)

    def test_ignore_toggle(self):
        entry = self._create_entry()

        response = self.client.post(
            f"/api/entries/{entry.pk}/ignore/",
            data={"isIgnored": True},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["isIgnored"])
        entry.refresh_from_db()
        self.assertTrue(entry.is_ignored)

    def test_delete_entry(self):
        entry = self._create_entry()

        response = self.client.delete(f"/api/entries/{entry.pk}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(FuelEntry.objects.exists())

    def test_other_users_entries_are_not_found(self):
        entry = self._create_entry(user=self.other_user)

        self.assertEqual(self.client.get(f"/api/entries/{entry.pk}/").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/entries/{entry.pk}/").status_code, 404)
        self.assertTrue(FuelEntry.objects.filter(pk=entry.pk).exists())


class TruckApiTests(ApiTestCase):
    def test_create_and_list_trucks(self):
        response = self.client.post(
            "/api/trucks/",
            data={"number": " 101 ", "makeModel": "Freightliner Cascadia"},
            content_type="application/json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["number"], "101")

        listing = self.client.get("/api/trucks/").json()
        self.assertEqual([truck["makeModel"] for truck in listing], ["Freightliner Cascadia"])

    def test_duplicate_truck_number_is_rejected(self):
        Truck.objects.create(user=self.user, number="101")

        response = self.client.post("/api/trucks/", data={"number": "101"}, content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("number", response.json())

    def test_delete_truck_keeps_entries(self):
        truck = Truck.objects.create(user=self.user, number="T1")
        self._create_entry()

        response = self.client.delete(f"/api/trucks/{truck.pk}/")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(FuelEntry.objects.filter(truck_number="T1").count(), 1)
