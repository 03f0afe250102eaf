import re

from rest_framework import serializers

from .models import DEFAULT_DAY_HOURS, WEEKDAYS, Place, PlaceCategory

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class DayHoursSerializer(serializers.Serializer):
    open = serializers.CharField(required=False, allow_blank=True, default=DEFAULT_DAY_HOURS["open"])  # noqa: A003
    close = serializers.CharField(required=False, allow_blank=True, default=DEFAULT_DAY_HOURS["close"])
    closed = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if not attrs.get("closed"):
            for key in ("open", "close"):
                value = attrs.get(key) or ""
                if not TIME_RE.match(value):
                    raise serializers.ValidationError({key: "Time must be in HH:MM format"})
        return attrs


class ContactInfoSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, max_length=40, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    website = serializers.URLField(required=False, allow_blank=True, default="")


class PlaceSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        max_length=255,
        trim_whitespace=True,
        error_messages={"blank": "Place name is required", "required": "Place name is required"},
    )
    latitude = serializers.FloatField(
        min_value=-90.0,
        max_value=90.0,
        error_messages={"invalid": "Valid latitude is required", "required": "Valid latitude is required"},
    )
    longitude = serializers.FloatField(
        min_value=-180.0,
        max_value=180.0,
        error_messages={"invalid": "Valid longitude is required", "required": "Valid longitude is required"},
    )
    category = serializers.ChoiceField(
        choices=PlaceCategory.choices,
        default=PlaceCategory.OTHER,
        error_messages={"invalid_choice": "Valid category is required"},
    )
    description = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True, default="")
    opening_hours = serializers.JSONField(required=False)
    contact_info = serializers.JSONField(required=False)

    class Meta:
        model = Place
        fields = [
            "id",
            "name",
            "description",
            "category",
            "latitude",
            "longitude",
            "opening_hours",
            "contact_info",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_opening_hours(self, value):
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Opening hours must be an object keyed by weekday")

        unknown = sorted(set(value) - set(WEEKDAYS))
        if unknown:
            raise serializers.ValidationError(f"Unknown weekday(s): {', '.join(unknown)}")

        hours = {}
        errors = {}
        for day in WEEKDAYS:
            day_serializer = DayHoursSerializer(data=value.get(day) or dict(DEFAULT_DAY_HOURS))
            if day_serializer.is_valid():
                hours[day] = dict(day_serializer.validated_data)
            else:
                errors[day] = day_serializer.errors
        if errors:
            raise serializers.ValidationError(errors)
        return hours

    def validate_contact_info(self, value):
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Contact info must be an object")

        contact = ContactInfoSerializer(data=value)
        if not contact.is_valid():
            raise serializers.ValidationError(contact.errors)
        return dict(contact.validated_data)
