from datetime import datetime
from typing import Protocol

from fueltax.domain.types import FuelEntryRecord
from fueltax.models import FuelEntry


class EntryStore(Protocol):
    def query(self, user_id: int, start: datetime, end: datetime) -> list[FuelEntryRecord]:
        """Non-ignored entries for ``user_id`` with start <= date_time <= end, oldest first."""
        ...


def to_record(entry: FuelEntry) -> FuelEntryRecord:
    return FuelEntryRecord(
        id=entry.pk,
        truck_number=entry.truck_number,
        date_time=entry.date_time,
        odometer=float(entry.odometer),
        state=entry.state,
        fuel_type=entry.fuel_type,
        amount=float(entry.amount),
        cost=float(entry.cost),
        city=entry.city,
        is_ignored=entry.is_ignored,
    )


class DjangoEntryStore:
    def query(self, user_id: int, start: datetime, end: datetime) -> list[FuelEntryRecord]:
        queryset = FuelEntry.objects.filter(
            user_id=user_id,
            is_ignored=False,
            date_time__gte=start,
            date_time__lte=end,
        ).order_by("date_time", "id")
        return [to_record(entry) for entry in queryset]
