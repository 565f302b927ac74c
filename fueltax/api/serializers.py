from django.conf import settings
from rest_framework import serializers

from fueltax.domain.quarters import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from fueltax.models import FuelEntry, Truck


class QuarterlyReportRequestSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=MIN_REPORT_YEAR, max_value=MAX_REPORT_YEAR)
    quarter = serializers.IntegerField(min_value=1, max_value=4)


class JurisdictionRowSerializer(serializers.Serializer):
    jurisdiction = serializers.CharField()
    totalMiles = serializers.FloatField()
    totalFuel = serializers.FloatField()
    totalCost = serializers.FloatField()


class QuarterlyReportResponseSerializer(serializers.Serializer):
    reportRows = JurisdictionRowSerializer(many=True)
    overallMPG = serializers.FloatField()


class InsufficientDataResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class EntryListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(
        min_value=1,
        max_value=settings.ENTRIES_MAX_PAGE_SIZE,
        default=settings.ENTRIES_PAGE_SIZE,
    )


class SecondFuelSerializer(serializers.Serializer):
    amount = serializers.FloatField(min_value=0, default=0.0)
    cost = serializers.FloatField(min_value=0, default=0.0)


class FuelEntrySerializer(serializers.ModelSerializer):
    truckNumber = serializers.CharField(source="truck_number", max_length=64, allow_blank=True, required=False)
    dateTime = serializers.DateTimeField(source="date_time")
    odometer = serializers.FloatField(min_value=0)
    city = serializers.CharField(max_length=128, allow_blank=True, required=False)
    state = serializers.CharField(max_length=8)
    fuelType = serializers.ChoiceField(
        source="fuel_type",
        choices=FuelEntry.FuelType.choices,
        default=FuelEntry.FuelType.DIESEL,
    )
    customFuelType = serializers.CharField(
        source="custom_fuel_type",
        max_length=64,
        allow_blank=True,
        required=False,
    )
    amount = serializers.FloatField(min_value=0)
    cost = serializers.FloatField(min_value=0)
    isIgnored = serializers.BooleanField(source="is_ignored", required=False)
    receiptUrl = serializers.URLField(source="receipt_url", max_length=500, allow_blank=True, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    lastEditedAt = serializers.DateTimeField(source="last_edited_at", read_only=True)

    class Meta:
        model = FuelEntry
        fields = [
            "id",
            "truckNumber",
            "dateTime",
            "odometer",
            "city",
            "state",
            "fuelType",
            "customFuelType",
            "amount",
            "cost",
            "isIgnored",
            "receiptUrl",
            "createdAt",
            "lastEditedAt",
        ]
        read_only_fields = ["id"]

    def validate_state(self, value: str) -> str:
        normalized = value.strip().upper()
        if len(normalized) != 2 or not normalized.isalpha():
            raise serializers.ValidationError("State must be a 2-letter jurisdiction code.")
        return normalized

    def validate(self, attrs):
        fuel_type = attrs.get("fuel_type", getattr(self.instance, "fuel_type", FuelEntry.FuelType.DIESEL))
        custom_label = attrs.get("custom_fuel_type", getattr(self.instance, "custom_fuel_type", ""))

        if fuel_type == FuelEntry.FuelType.CUSTOM:
            if not (custom_label or "").strip():
                raise serializers.ValidationError({"customFuelType": "Required when fuelType is custom."})
            attrs["custom_fuel_type"] = custom_label.strip()
        elif "fuel_type" in attrs or "custom_fuel_type" in attrs:
            attrs["custom_fuel_type"] = ""

        return attrs


class FuelEntryWriteSerializer(FuelEntrySerializer):
    secondFuel = SecondFuelSerializer(required=False, write_only=True)

    class Meta(FuelEntrySerializer.Meta):
        fields = FuelEntrySerializer.Meta.fields + ["secondFuel"]


class EntryIgnoreSerializer(serializers.Serializer):
    isIgnored = serializers.BooleanField()


class TruckSerializer(serializers.ModelSerializer):
    makeModel = serializers.CharField(source="make_model", max_length=128, allow_blank=True, required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Truck
        fields = ["id", "number", "makeModel", "createdAt"]
        read_only_fields = ["id"]

    def validate_number(self, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise serializers.ValidationError("Truck number cannot be empty.")

        user = self.context["request"].user
        if Truck.objects.filter(user=user, number=normalized).exists():
            raise serializers.ValidationError("A truck with this number already exists.")
        return normalized
