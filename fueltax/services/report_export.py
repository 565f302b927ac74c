import csv
import io

from fueltax.domain.types import QuarterlyReport

CSV_HEADERS = [
    "Jurisdiction",
    "Total Miles Driven",
    "Total Fuel Purchased (Gallons)",
    "Total Fuel Cost ($)",
]


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def report_filename(year: int, quarter: int) -> str:
    return f"IFTA_Report_Q{quarter}_{year}.csv"


def report_to_csv(report: QuarterlyReport, year: int, quarter: int) -> str:
    """Render a report as a metadata block followed by one row per jurisdiction."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(["IFTA Report"])
    writer.writerow(["Quarter", f"Q{quarter}"])
    writer.writerow(["Year", year])
    writer.writerow(["Overall Fleet MPG", _fmt(report.overall_mpg)])
    writer.writerow([])
    writer.writerow(CSV_HEADERS)
    for row in report.rows:
        writer.writerow(
            [
                row.jurisdiction,
                _fmt(row.total_miles),
                _fmt(row.total_fuel),
                _fmt(row.total_cost),
            ]
        )
    return output.getvalue()
