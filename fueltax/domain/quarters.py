import calendar
from datetime import datetime, tzinfo

from fueltax.domain.types import QuarterRange

MONTHS_PER_QUARTER = 3
# Quarter bounds must stay representable as UTC datetimes in any configured zone.
MIN_REPORT_YEAR = 1000
MAX_REPORT_YEAR = 9998


class InvalidQuarterError(ValueError):
    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field_name = field_name


def validate_period(year: int | None, quarter: int | None) -> tuple[int, int]:
    if year is None:
        raise InvalidQuarterError("year", "Year is required")
    if quarter is None:
        raise InvalidQuarterError("quarter", "Quarter is required")
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidQuarterError("year", "Year must be an integer")
    if isinstance(quarter, bool) or not isinstance(quarter, int):
        raise InvalidQuarterError("quarter", "Quarter must be an integer")
    if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
        raise InvalidQuarterError("year", f"Year must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}")
    if not 1 <= quarter <= 4:
        raise InvalidQuarterError("quarter", "Quarter must be between 1 and 4")
    return year, quarter


def quarter_range(year: int, quarter: int, tz: tzinfo) -> QuarterRange:
    """Inclusive bounds of a calendar quarter.

    Starts at 00:00:00 on the first day of the quarter's first month and ends
    at 23:59:59 on the last day of its third month, both in ``tz``.
    """
    year, quarter = validate_period(year, quarter)

    first_month = (quarter - 1) * MONTHS_PER_QUARTER + 1
    last_month = quarter * MONTHS_PER_QUARTER
    last_day = calendar.monthrange(year, last_month)[1]

    start = datetime(year, first_month, 1, 0, 0, 0, tzinfo=tz)
    end = datetime(year, last_month, last_day, 23, 59, 59, tzinfo=tz)
    return QuarterRange(year=year, quarter=quarter, start=start, end=end)
