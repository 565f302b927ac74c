import logging
import math
from typing import Any

from django.db import transaction

from fueltax.models import FuelEntry

logger = logging.getLogger(__name__)

SHARED_STOP_FIELDS = ("truck_number", "date_time", "odometer", "city", "state", "receipt_url", "is_ignored")


def _companion_fuel_type(primary_fuel_type: str) -> str:
    if primary_fuel_type == FuelEntry.FuelType.DIESEL:
        return FuelEntry.FuelType.DEF
    return FuelEntry.FuelType.DIESEL


def _companion_entry_data(primary: FuelEntry, second_fuel: dict[str, float] | None) -> dict[str, Any] | None:
    if not second_fuel:
        return None

    amount = float(second_fuel.get("amount") or 0.0)
    cost = float(second_fuel.get("cost") or 0.0)
    if amount <= 0 and cost <= 0:
        return None

    return {
        **{name: getattr(primary, name) for name in SHARED_STOP_FIELDS},
        "fuel_type": _companion_fuel_type(primary.fuel_type),
        "custom_fuel_type": "",
        "amount": amount,
        "cost": cost,
    }


def create_entries(user, entry_data: dict[str, Any], second_fuel: dict[str, float] | None = None) -> list[FuelEntry]:
    """Create an entry and, for a dual-fuel stop, its companion entry.

    The companion copies truck, time, odometer and location from the primary
    entry. A diesel primary gets a DEF companion; any other primary gets a
    diesel one.
    """
    with transaction.atomic():
        primary = FuelEntry.objects.create(user=user, **entry_data)
        created = [primary]
        companion_data = _companion_entry_data(primary, second_fuel)
        if companion_data is not None:
            created.append(FuelEntry.objects.create(user=user, **companion_data))

    logger.info("Created %s fuel entries for user=%s", len(created), user.pk)
    return created


def update_entry(
    entry: FuelEntry,
    entry_data: dict[str, Any],
    second_fuel: dict[str, float] | None = None,
) -> list[FuelEntry]:
    """Apply edits to an entry and add a companion for a newly declared second fuel."""
    with transaction.atomic():
        for name, value in entry_data.items():
            setattr(entry, name, value)
        entry.save()
        saved = [entry]
        companion_data = _companion_entry_data(entry, second_fuel)
        if companion_data is not None:
            saved.append(FuelEntry.objects.create(user=entry.user, **companion_data))

    logger.info("Updated entry %s for user=%s, %s companion entries added", entry.pk, entry.user_id, len(saved) - 1)
    return saved


def paginate_entries(user, page: int, limit: int) -> dict[str, Any]:
    queryset = FuelEntry.objects.filter(user=user).order_by("-date_time", "-id")
    total = queryset.count()
    offset = (page - 1) * limit
    return {
        "entries": list(queryset[offset : offset + limit]),
        "totalPages": math.ceil(total / limit),
        "currentPage": page,
    }


def set_ignored(entry: FuelEntry, is_ignored: bool) -> FuelEntry:
    entry.is_ignored = is_ignored
    entry.save(update_fields=["is_ignored", "last_edited_at"])
    logger.info("Entry %s for user=%s is_ignored=%s", entry.pk, entry.user_id, is_ignored)
    return entry
