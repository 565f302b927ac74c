from django.urls import path

from fueltax.api.views import (
    FuelEntryDetailView,
    FuelEntryIgnoreView,
    FuelEntryListView,
    QuarterlyReportCsvView,
    QuarterlyReportView,
    TruckDetailView,
    TruckListView,
)

urlpatterns = [
    path("reports/quarterly/", QuarterlyReportView.as_view(), name="quarterly-report"),
    path("reports/quarterly/csv/", QuarterlyReportCsvView.as_view(), name="quarterly-report-csv"),
    path("entries/", FuelEntryListView.as_view(), name="entry-list"),
    path("entries/<int:entry_id>/", FuelEntryDetailView.as_view(), name="entry-detail"),
    path("entries/<int:entry_id>/ignore/", FuelEntryIgnoreView.as_view(), name="entry-ignore"),
    path("trucks/", TruckListView.as_view(), name="truck-list"),
    path("trucks/<int:truck_id>/", TruckDetailView.as_view(), name="truck-detail"),
]
