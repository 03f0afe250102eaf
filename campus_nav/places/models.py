from django.db import models

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_DAY_HOURS = {"open": "09:00", "close": "17:00", "closed": False}


def default_opening_hours():
    return {day: dict(DEFAULT_DAY_HOURS) for day in WEEKDAYS}


def default_contact_info():
    return {"phone": "", "email": "", "website": ""}


class PlaceCategory(models.TextChoices):
    EATERIES = "eateries", "Eateries"  # restaurants, cafes
    RECREATION = "recreation", "Recreation"  # stadium, courts, gym
    EDUCATIONAL = "educational", "Educational"
    ADMINISTRATION = "administration", "Administration"
    STAFF_QUARTERS = "staff_quarters", "Staff Quarters"
    HOSTEL = "hostel", "Hostel"
    LIBRARY = "library", "Library"
    OTHER = "other", "Other"


def coerce_category(value) -> str:
    """Map anything outside the closed category set to ``other``."""
    if isinstance(value, str) and value.strip().lower() in PlaceCategory.values:
        return value.strip().lower()
    return PlaceCategory.OTHER


class Place(models.Model):
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    category = models.CharField(
        max_length=20, choices=PlaceCategory.choices, default=PlaceCategory.OTHER, db_index=True
    )

    latitude = models.FloatField()
    longitude = models.FloatField()

    opening_hours = models.JSONField(default=default_opening_hours, blank=True)
    contact_info = models.JSONField(default=default_contact_info, blank=True)

    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category", "is_active"], name="place_category_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"

    def save(self, *args, **kwargs):
        self.category = coerce_category(self.category)
        super().save(*args, **kwargs)
