from __future__ import annotations

import logging
from urllib.parse import quote

from django.conf import settings

import requests

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError

from .types import GeocodedFeature

logger = logging.getLogger(__name__)


class PlaceSearchService:
    """Mapbox forward/reverse geocoding, biased to the campus."""

    def __init__(self, access_token: str | None = None, base_url: str | None = None, timeout: float = 15):
        self.access_token = (access_token if access_token is not None else settings.MAPBOX_ACCESS_TOKEN).strip()
        self.base_url = (base_url or settings.MAPBOX_BASE_URL).rstrip("/")
        self.timeout = timeout

        campus = settings.CAMPUS
        self.proximity = "{},{}".format(*campus["center"])
        self.bbox = ",".join(str(v) for v in campus["bbox"])
        self.limit = campus["search_limit"]

        if not self.access_token:
            raise ConfigurationError("MAPBOX_ACCESS_TOKEN is missing")

    def search(self, query: str, limit: int | None = None) -> list[GeocodedFeature]:
        query = (query or "").strip()
        if not query:
            return []

        params = {
            "access_token": self.access_token,
            "proximity": self.proximity,
            "bbox": self.bbox,
            "limit": limit or self.limit,
        }
        return self._request(quote(query, safe=""), params)

    def reverse(self, lng: float, lat: float, types: str = "poi", limit: int = 5) -> list[GeocodedFeature]:
        params = {
            "access_token": self.access_token,
            "types": types,
            "limit": limit,
        }
        return self._request(f"{lng},{lat}", params)

    def _request(self, path_query: str, params: dict) -> list[GeocodedFeature]:
        url = f"{self.base_url}/geocoding/v5/mapbox.places/{path_query}.json"

        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Mapbox geocoding request failed: %s", e)
            raise UpstreamServiceError(f"Place search failed: {e}")

        features = []
        for feat in data.get("features") or []:
            try:
                features.append(GeocodedFeature.from_mapbox(feat))
            except (KeyError, TypeError, ValueError):
                continue
        return features
