from django.contrib import admin

from fueltax.models import FuelEntry, Truck


@admin.register(Truck)
class TruckAdmin(admin.ModelAdmin):
    list_display = ("number", "make_model", "user", "created_at")
    search_fields = ("number", "make_model", "user__username")


@admin.register(FuelEntry)
class FuelEntryAdmin(admin.ModelAdmin):
    list_display = (
        "date_time",
        "user",
        "truck_number",
        "city",
        "state",
        "fuel_type",
        "amount",
        "cost",
        "odometer",
        "is_ignored",
    )
    list_filter = ("state", "fuel_type", "is_ignored")
    search_fields = ("truck_number", "city", "state", "user__username")
    date_hierarchy = "date_time"
