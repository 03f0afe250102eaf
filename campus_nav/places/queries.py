from __future__ import annotations

from django.db.models import QuerySet

from campus_nav.places.models import Place, PlaceCategory


def get_active_places(category: str | None = None) -> QuerySet[Place]:
    qs = Place.objects.filter(is_active=True)
    if category:
        qs = qs.filter(category=category)
    return qs.order_by("name")


def place_exists(name: str) -> bool:
    return Place.objects.filter(name=name.strip()).exists()


def get_active_places_by_category() -> dict[str, list[Place]]:
    """Active places keyed by category, in category declaration order; empty categories are left out."""
    grouped: dict[str, list[Place]] = {category: [] for category in PlaceCategory.values}
    for place in get_active_places():
        grouped.setdefault(place.category or PlaceCategory.OTHER, []).append(place)
    return {category: places for category, places in grouped.items() if places}
