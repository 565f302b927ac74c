import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Truck",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.CharField(max_length=64)),
                ("make_model", models.CharField(blank=True, default="", max_length=128)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="trucks",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="FuelEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("truck_number", models.CharField(blank=True, default="", max_length=64)),
                ("date_time", models.DateTimeField()),
                ("odometer", models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("city", models.CharField(blank=True, default="", max_length=128)),
                ("state", models.CharField(max_length=8)),
                (
                    "fuel_type",
                    models.CharField(
                        choices=[("diesel", "Diesel"), ("def", "DEF"), ("custom", "Custom")],
                        default="diesel",
                        max_length=16,
                    ),
                ),
                ("custom_fuel_type", models.CharField(blank=True, default="", max_length=64)),
                ("amount", models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("cost", models.FloatField(validators=[django.core.validators.MinValueValidator(0)])),
                ("is_ignored", models.BooleanField(default=False)),
                ("receipt_url", models.URLField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("last_edited_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fuel_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-date_time", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="truck",
            constraint=models.UniqueConstraint(fields=("user", "number"), name="unique_truck_number_per_user"),
        ),
        migrations.AddIndex(
            model_name="fuelentry",
            index=models.Index(fields=["user", "date_time"], name="fueltax_entry_user_dt_idx"),
        ),
        migrations.AddIndex(
            model_name="fuelentry",
            index=models.Index(fields=["user", "is_ignored", "date_time"], name="fueltax_entry_user_ign_dt_idx"),
        ),
    ]
