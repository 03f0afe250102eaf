"""
Bulk ingest jobs for the place store.

Every job walks its input one item at a time and sorts each item into one of
three buckets (``created``, ``failed``, ``skipped``). A failing item never
aborts the rest of the batch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.conf import settings

from campus_nav.core.exceptions import UpstreamServiceError
from campus_nav.routing.geo import grid_points, haversine_meters
from campus_nav.routing.geocoding import GeocodingService

from .college_places import COLLEGE_PLACES, FALLBACK_LATITUDE, FALLBACK_LONGITUDE, KNOWN_CAMPUS_NAMES, infer_category
from .models import Place, coerce_category
from .queries import place_exists
from .serializers import PlaceSerializer

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "Already exists"

GRID_HALF_SPAN_DEG = 0.01
GRID_STEP_DEG = 0.005


def item_name(item) -> str:
    """Stripped ``name`` of a raw import item, ``""`` when missing or not a string."""
    name = item.get("name") if isinstance(item, dict) else None
    return name.strip() if isinstance(name, str) else ""


@dataclass
class ImportResults:
    created: list[dict] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)
    skipped: list[dict] = field(default_factory=list)

    def add_created(self, place: Place, note: str | None = None):
        entry = {"name": place.name, "coordinates": {"lat": place.latitude, "lng": place.longitude}}
        if note:
            entry["note"] = note
        self.created.append(entry)

    def add_failed(self, name: str, error):
        self.failed.append({"name": name or "Unknown", "error": error})

    def add_skipped(self, name: str, reason: str = ALREADY_EXISTS):
        self.skipped.append({"name": name, "reason": reason})

    def summary(self, label: str) -> str:
        return f"{label}: {len(self.created)} created, {len(self.failed)} failed, {len(self.skipped)} skipped"

    def as_response(self, label: str) -> dict:
        return {
            "message": self.summary(label),
            "results": {"created": self.created, "failed": self.failed, "skipped": self.skipped},
        }


class PlacePopulator:
    def __init__(self, geocoder: GeocodingService | None = None, search=None):
        self._geocoder = geocoder
        self._search = search

    @property
    def geocoder(self) -> GeocodingService:
        if self._geocoder is None:
            self._geocoder = GeocodingService()
        return self._geocoder

    @property
    def search(self):
        if self._search is None:
            from campus_nav.routing.search import PlaceSearchService

            self._search = PlaceSearchService()
        return self._search

    def populate_college_places(self, places: list[dict] | None = None) -> ImportResults:
        """Seed the fixed campus list; unknown coordinates fall back to the campus centre."""
        results = ImportResults()
        city = settings.CAMPUS["city"]

        for item in COLLEGE_PLACES if places is None else places:
            name = item_name(item)
            try:
                self._populate_one(results, item, name, city)
            except Exception as e:
                logger.exception("Populating %r failed", name)
                results.add_failed(name, str(e))

        logger.info(results.summary("College places populated"))
        return results

    def _populate_one(self, results: ImportResults, item: dict, name: str, city: str):
        if not name:
            results.add_failed(name, "Name is required")
            return
        if place_exists(name):
            results.add_skipped(name)
            return

        geocoded = self.geocoder.geocode(name, city)
        if geocoded is None:
            place = self._create(
                name=name,
                description=item.get("description") or name,
                category=item.get("category"),
                latitude=FALLBACK_LATITUDE,
                longitude=FALLBACK_LONGITUDE,
            )
            results.add_created(place, note="Used approximate coordinates")
            return

        place = self._create(
            name=name,
            description=item.get("description") or geocoded.display_name,
            category=item.get("category"),
            latitude=geocoded.latitude,
            longitude=geocoded.longitude,
        )
        results.add_created(place)

    def import_from_osm(self, items: list[dict]) -> ImportResults:
        """Geocode free-text names through Nominatim; no coordinate fallback."""
        results = ImportResults()
        default_city = settings.CAMPUS["default_city"]

        for item in items:
            item = item if isinstance(item, dict) else {}
            name = item_name(item)
            try:
                self._import_one(results, item, name, default_city)
            except Exception as e:
                logger.exception("Importing %r failed", name)
                results.add_failed(name, str(e))

        logger.info(results.summary("Import completed"))
        return results

    def _import_one(self, results: ImportResults, item: dict, name: str, default_city: str):
        if not name:
            results.add_failed(name, "Name is required")
            return
        if place_exists(name):
            results.add_skipped(name)
            return

        city = item.get("city") if isinstance(item.get("city"), str) else None
        geocoded = self.geocoder.geocode(name, city or default_city)
        if geocoded is None:
            results.add_failed(name, "Could not find coordinates")
            return

        place = self._create(
            name=name,
            description=item.get("description") or geocoded.display_name,
            category=item.get("category"),
            latitude=geocoded.latitude,
            longitude=geocoded.longitude,
        )
        results.add_created(place)

    def bulk_import(self, items: list[dict]) -> ImportResults:
        """Insert fully specified records; each one is validated on its own."""
        results = ImportResults()

        for item in items:
            item = dict(item) if isinstance(item, dict) else {}
            name = item_name(item)

            if name and place_exists(name):
                results.add_skipped(name)
                continue

            item["category"] = coerce_category(item.get("category"))
            serializer = PlaceSerializer(data=item)
            if not serializer.is_valid():
                results.add_failed(name, serializer.errors)
                continue

            try:
                place = serializer.save()
            except Exception as e:
                logger.exception("Saving %r failed", name)
                results.add_failed(name, str(e))
                continue
            results.add_created(place)

        logger.info(results.summary("Bulk import completed"))
        return results

    def fetch_from_mapbox(self) -> ImportResults:
        """
        Best-effort campus seeding from Mapbox.

        Known campus names are looked up first, then a small grid around the
        campus centre is reverse-geocoded for points of interest. Anything
        farther than ``CAMPUS["max_poi_distance_m"]`` from the centre is
        dropped.
        """
        results = ImportResults()
        center_lng, center_lat = settings.CAMPUS["center"]
        max_distance = settings.CAMPUS["max_poi_distance_m"]
        seen: set[str] = set()

        def consider(feature, description: str):
            name = (feature.text or feature.name).strip()
            if not name or name.lower() in seen:
                return
            seen.add(name.lower())

            if haversine_meters(center_lat, center_lng, feature.lat, feature.lng) > max_distance:
                results.add_skipped(name, "Too far from campus")
                return
            try:
                if place_exists(name):
                    results.add_skipped(name)
                    return

                place = self._create(
                    name=name,
                    description=description or feature.name,
                    category=infer_category(name, *feature.categories),
                    latitude=feature.lat,
                    longitude=feature.lng,
                )
            except Exception as e:
                logger.exception("Saving Mapbox place %r failed", name)
                results.add_failed(name, str(e))
                return
            results.add_created(place)

        for known in KNOWN_CAMPUS_NAMES:
            try:
                hits = self.search.search(known, limit=1)
            except UpstreamServiceError as e:
                results.add_failed(known, str(e.detail))
                continue
            if not hits:
                results.add_failed(known, "Not found on Mapbox")
                continue
            consider(hits[0], hits[0].name)

        for lng, lat in grid_points(center_lng, center_lat, GRID_HALF_SPAN_DEG, GRID_STEP_DEG):
            try:
                features = self.search.reverse(lng, lat)
            except UpstreamServiceError as e:
                results.add_failed(f"grid {lat:.4f},{lng:.4f}", str(e.detail))
                continue
            for feature in features:
                consider(feature, feature.name)

        logger.info(results.summary("Mapbox fetch completed"))
        return results

    def _create(self, *, name, description, category, latitude, longitude) -> Place:
        return Place.objects.create(
            name=name,
            description=description or "",
            category=coerce_category(category),
            latitude=latitude,
            longitude=longitude,
            is_active=True,
        )
