from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from campus_nav.core.exceptions import UpstreamServiceError
from campus_nav.routing.types import GeocodedFeature

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
DEBOUNCE_SECONDS = 0.3
PLACE_CACHE_REFRESH_SECONDS = 60.0


@dataclass(frozen=True)
class Suggestion:
    name: str
    lng: float
    lat: float
    context: str
    is_local: bool
    description: str = ""
    place_id: Optional[int] = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "lng": self.lng,
            "lat": self.lat,
            "context": self.context,
            "isLocal": self.is_local,
            "description": self.description,
            "placeId": self.place_id,
        }


def category_label(category: str | None) -> str:
    if not category:
        return "College Place"
    return category.replace("_", " ").capitalize()


def match_local_places(places: Iterable[dict], query: str) -> list[Suggestion]:
    """Case-insensitive substring match on name or description, in store order."""
    needle = (query or "").strip().lower()
    if not needle:
        return []

    matches = []
    for place in places:
        name = place.get("name") or ""
        description = place.get("description") or ""
        if needle in name.lower() or needle in description.lower():
            matches.append(
                Suggestion(
                    name=name,
                    lng=place["longitude"],
                    lat=place["latitude"],
                    context=category_label(place.get("category")),
                    is_local=True,
                    description=description,
                    place_id=place.get("id"),
                )
            )
    return matches


def external_suggestions(features: Iterable[GeocodedFeature]) -> list[Suggestion]:
    return [
        Suggestion(name=f.name, lng=f.lng, lat=f.lat, context=f.context or "External Location", is_local=False)
        for f in features
    ]


def merge_suggestions(local: list[Suggestion], external: list[Suggestion]) -> list[Suggestion]:
    """Every local match, then the geocoder's, each keeping its own order."""
    return [s for s in local if s.is_local] + [s for s in external if not s.is_local]


class PlaceCache:
    """Place list for local matching, refetched once it is older than ``refresh_interval``."""

    def __init__(
        self,
        fetch: Callable[[], list[dict]],
        refresh_interval: float = PLACE_CACHE_REFRESH_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch = fetch
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._places: list[dict] = []
        self._loaded_at: Optional[float] = None

    def get(self) -> list[dict]:
        now = self._clock()
        if self._loaded_at is None or now - self._loaded_at >= self.refresh_interval:
            self.refresh()
        return self._places

    def refresh(self) -> None:
        try:
            places = self._fetch()
        except Exception as e:
            # keep serving the previous list
            logger.warning("Place cache refresh failed: %s", e)
            if self._loaded_at is None:
                self._loaded_at = self._clock()
            return
        self._places = list(places) if isinstance(places, list) else []
        self._loaded_at = self._clock()


class Debouncer:
    """Holds the latest value until ``delay`` seconds pass without a new one."""

    def __init__(self, delay: float = DEBOUNCE_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self._clock = clock
        self._value = None
        self._pushed_at: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._pushed_at is not None

    def push(self, value) -> None:
        self._value = value
        self._pushed_at = self._clock()

    def pop_ready(self):
        """Return the settled value once, or ``None`` while still waiting."""
        if self._pushed_at is None or self._clock() - self._pushed_at < self.delay:
            return None
        value, self._value, self._pushed_at = self._value, None, None
        return value


class SuggestionSearch:
    """
    Local places first, external geocoder hits after.

    ``suggest`` answers immediately. ``type`` and ``poll`` are the keystroke
    path: each keystroke restarts the debounce window and ``poll`` runs the
    search only once the query has been stable for ``debounce`` seconds.
    """

    def __init__(
        self,
        places,
        search_service=None,
        debounce: float = DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._places = places
        self.search_service = search_service
        self._debouncer = Debouncer(debounce, clock)
        self.suggestions: list[Suggestion] = []

    def places(self) -> list[dict]:
        if isinstance(self._places, PlaceCache):
            return self._places.get()
        return list(self._places or [])

    def suggest(self, query: str) -> list[Suggestion]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        local = match_local_places(self.places(), query)

        external = []
        if self.search_service is not None:
            try:
                external = external_suggestions(self.search_service.search(query))
            except UpstreamServiceError as e:
                logger.warning("External place search failed for %r: %s", query, e.detail)

        return merge_suggestions(local, external)

    def type(self, query: str) -> None:  # noqa: A003
        self._debouncer.push(query or "")

    def poll(self) -> Optional[list[Suggestion]]:
        query = self._debouncer.pop_ready()
        if query is None:
            return None
        self.suggestions = self.suggest(query)
        return self.suggestions

    def clear(self) -> None:
        self.suggestions = []
