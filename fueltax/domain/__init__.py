from fueltax.domain.aggregator import aggregate_entries
from fueltax.domain.quarters import InvalidQuarterError, quarter_range, validate_period
from fueltax.domain.types import (
    FuelEntryRecord,
    InsufficientDataNotice,
    JurisdictionTotals,
    QuarterlyReport,
    QuarterRange,
    ReportOutcome,
)

__all__ = [
    "FuelEntryRecord",
    "InsufficientDataNotice",
    "InvalidQuarterError",
    "JurisdictionTotals",
    "QuarterRange",
    "QuarterlyReport",
    "ReportOutcome",
    "aggregate_entries",
    "quarter_range",
    "validate_period",
]
