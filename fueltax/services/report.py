import logging

from django.utils import timezone

from fueltax.domain.aggregator import aggregate_entries
from fueltax.domain.quarters import InvalidQuarterError, quarter_range
from fueltax.domain.types import ReportOutcome
from fueltax.services.entry_store import DjangoEntryStore, EntryStore

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate report. Please try again."


class ReportError(Exception):
    pass


class ReportAuthenticationError(ReportError):
    pass


class InvalidReportRequest(ReportError):
    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field_name = field_name


class ReportGenerationError(ReportError):
    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)


def generate_report(
    user_id: int | None,
    year: int | None,
    quarter: int | None,
    store: EntryStore | None = None,
) -> ReportOutcome:
    """Aggregate a user's fuel entries for one calendar quarter.

    Raises ``ReportAuthenticationError`` without a caller, ``InvalidReportRequest``
    for a bad period and ``ReportGenerationError`` when the store read or the
    computation fails. Fewer than two qualifying entries is not an error: an
    ``InsufficientDataNotice`` is returned instead of a report.
    """
    if user_id is None:
        raise ReportAuthenticationError("Must be authenticated")

    try:
        period = quarter_range(year, quarter, timezone.get_current_timezone())
    except InvalidQuarterError as exc:
        raise InvalidReportRequest(exc.field_name, str(exc)) from exc

    if store is None:
        store = DjangoEntryStore()

    try:
        entries = store.query(user_id, period.start, period.end)
        outcome = aggregate_entries(entries)
    except Exception as exc:
        logger.exception(
            "Report generation failed for user=%s year=%s quarter=%s",
            user_id,
            period.year,
            period.quarter,
        )
        raise ReportGenerationError() from exc

    logger.info(
        "Generated %s for user=%s Q%s %s from %s entries",
        outcome.kind,
        user_id,
        period.quarter,
        period.year,
        len(entries),
    )
    return outcome
