from collections.abc import Sequence

from fueltax.domain.types import (
    FuelEntryRecord,
    InsufficientDataNotice,
    JurisdictionTotals,
    QuarterlyReport,
    ReportOutcome,
)

MIN_ENTRIES_FOR_MILEAGE = 2
DEFAULT_TRUCK_KEY = "default"
DIESEL_FUEL_TYPE = "diesel"
INSUFFICIENT_DATA_MESSAGE = "At least two entries are required to calculate mileage for this quarter."


def _group_by_truck(entries: Sequence[FuelEntryRecord]) -> dict[str, list[FuelEntryRecord]]:
    grouped: dict[str, list[FuelEntryRecord]] = {}
    for entry in entries:
        key = entry.truck_number or DEFAULT_TRUCK_KEY
        grouped.setdefault(key, []).append(entry)
    return grouped


def _miles_by_jurisdiction(entries: Sequence[FuelEntryRecord]) -> tuple[dict[str, float], float]:
    miles: dict[str, float] = {}
    total_miles = 0.0

    for truck_entries in _group_by_truck(entries).values():
        for idx in range(len(truck_entries) - 1):
            departing = truck_entries[idx]
            arriving = truck_entries[idx + 1]
            # Miles between two fill-ups belong to the state the truck left from.
            leg_miles = abs(float(arriving.odometer) - float(departing.odometer))
            miles[departing.state] = miles.get(departing.state, 0.0) + leg_miles
            total_miles += leg_miles

    return miles, total_miles


def _fuel_and_cost_by_jurisdiction(
    entries: Sequence[FuelEntryRecord],
) -> tuple[dict[str, float], dict[str, float]]:
    fuel: dict[str, float] = {}
    cost: dict[str, float] = {}
    for entry in entries:
        fuel[entry.state] = fuel.get(entry.state, 0.0) + float(entry.amount)
        cost[entry.state] = cost.get(entry.state, 0.0) + float(entry.cost)
    return fuel, cost


def _diesel_gallons(entries: Sequence[FuelEntryRecord]) -> float:
    return sum(float(entry.amount) for entry in entries if entry.fuel_type == DIESEL_FUEL_TYPE)


def aggregate_entries(entries: Sequence[FuelEntryRecord]) -> ReportOutcome:
    """Build the per-jurisdiction report for one quarter's entries.

    ``entries`` must already be filtered to the quarter, exclude ignored
    entries and be ordered by ``date_time`` ascending.
    """
    if len(entries) < MIN_ENTRIES_FOR_MILEAGE:
        return InsufficientDataNotice(message=INSUFFICIENT_DATA_MESSAGE, entry_count=len(entries))

    miles, total_miles = _miles_by_jurisdiction(entries)
    fuel, cost = _fuel_and_cost_by_jurisdiction(entries)

    total_diesel_gallons = _diesel_gallons(entries)
    overall_mpg = total_miles / total_diesel_gallons if total_diesel_gallons > 0 else 0.0

    rows = [
        JurisdictionTotals(
            jurisdiction=jurisdiction,
            total_miles=miles.get(jurisdiction, 0.0),
            total_fuel=fuel.get(jurisdiction, 0.0),
            total_cost=cost.get(jurisdiction, 0.0),
        )
        for jurisdiction in sorted(set(miles) | set(fuel))
    ]

    return QuarterlyReport(
        rows=rows,
        overall_mpg=overall_mpg,
        total_miles=total_miles,
        total_diesel_gallons=total_diesel_gallons,
    )
