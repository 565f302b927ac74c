from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Truck(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="trucks")
    number = models.CharField(max_length=64)
    make_model = models.CharField(max_length=128, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "number"],
                name="unique_truck_number_per_user",
            ),
        ]

    def __str__(self):
        return self.number


class FuelEntry(models.Model):
    class FuelType(models.TextChoices):
        DIESEL = "diesel", "Diesel"
        DEF = "def", "DEF"
        CUSTOM = "custom", "Custom"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="fuel_entries")
    truck_number = models.CharField(max_length=64, blank=True, default="")
    date_time = models.DateTimeField()
    odometer = models.FloatField(validators=[MinValueValidator(0)])
    city = models.CharField(max_length=128, blank=True, default="")
    state = models.CharField(max_length=8)
    fuel_type = models.CharField(max_length=16, choices=FuelType.choices, default=FuelType.DIESEL)
    custom_fuel_type = models.CharField(max_length=64, blank=True, default="")
    amount = models.FloatField(validators=[MinValueValidator(0)])
    cost = models.FloatField(validators=[MinValueValidator(0)])
    is_ignored = models.BooleanField(default=False)
    receipt_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    last_edited_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_time", "-id"]
        indexes = [
            models.Index(fields=["user", "date_time"], name="fueltax_entry_user_dt_idx"),
            models.Index(fields=["user", "is_ignored", "date_time"], name="fueltax_entry_user_ign_dt_idx"),
        ]

    def __str__(self):
        truck = self.truck_number or "-"
        return f"{truck} @ {self.city}, {self.state} ({self.date_time:%Y-%m-%d})"
