from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


@dataclass(frozen=True)
class FuelEntryRecord:
    id: int | str
    truck_number: str
    date_time: datetime
    odometer: float
    state: str
    fuel_type: str
    amount: float
    cost: float
    city: str = ""
    is_ignored: bool = False


@dataclass(frozen=True)
class QuarterRange:
    year: int
    quarter: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class JurisdictionTotals:
    jurisdiction: str
    total_miles: float
    total_fuel: float
    total_cost: float

    def to_payload(self) -> dict[str, Any]:
        return {
            "jurisdiction": self.jurisdiction,
            "totalMiles": self.total_miles,
            "totalFuel": self.total_fuel,
            "totalCost": self.total_cost,
        }


@dataclass(frozen=True)
class QuarterlyReport:
    rows: list[JurisdictionTotals]
    overall_mpg: float
    total_miles: float
    total_diesel_gallons: float
    kind: Literal["report"] = field(default="report", init=False)

    def to_payload(self) -> dict[str, Any]:
        return {
            "reportRows": [row.to_payload() for row in self.rows],
            "overallMPG": self.overall_mpg,
        }


@dataclass(frozen=True)
class InsufficientDataNotice:
    message: str
    entry_count: int
    kind: Literal["insufficient_data"] = field(default="insufficient_data", init=False)

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message}


ReportOutcome = QuarterlyReport | InsufficientDataNotice
