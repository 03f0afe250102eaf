from __future__ import annotations

import logging

from django.conf import settings

import requests

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError

from .types import DirectionsResult, Location

logger = logging.getLogger(__name__)

PROFILES = ("driving", "walking", "cycling")


class DirectionsService:
    """Turn-by-turn routing through the Mapbox Directions API. No retries."""

    def __init__(self, access_token: str | None = None, base_url: str | None = None, timeout: float = 30):
        self.access_token = (access_token if access_token is not None else settings.MAPBOX_ACCESS_TOKEN).strip()
        self.base_url = (base_url or settings.MAPBOX_BASE_URL).rstrip("/")
        self.timeout = timeout

        if not self.access_token:
            raise ConfigurationError("MAPBOX_ACCESS_TOKEN is missing")

    def get_directions(self, start: Location, end: Location, profile: str = "driving") -> DirectionsResult:
        if profile not in PROFILES:
            raise ValueError(f"Unknown travel profile: {profile}")

        coordinates = f"{start.lng},{start.lat};{end.lng},{end.lat}"
        url = f"{self.base_url}/directions/v5/mapbox/{profile}/{coordinates}"
        params = {
            "access_token": self.access_token,
            "geometries": "geojson",
            "steps": "true",
            "overview": "full",
        }

        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Directions request failed: %s", e)
            raise UpstreamServiceError(f"Directions request failed: {e}")

        try:
            data = resp.json()
        except ValueError:
            raise UpstreamServiceError(
                f"Directions provider returned {resp.status_code}", provider_status=resp.status_code
            )

        routes = data.get("routes") or []
        if data.get("code") != "Ok" or not routes:
            msg = data.get("message") or data.get("code") or f"HTTP {resp.status_code}"
            logger.warning("Directions lookup %s -> %s (%s) failed: %s", start.coords, end.coords, profile, msg)
            raise UpstreamServiceError(f"Could not calculate route: {msg}", provider_status=resp.status_code)

        route = routes[0]
        return DirectionsResult(
            geometry=route["geometry"],
            duration=float(route.get("duration") or 0.0),
            distance=float(route.get("distance") or 0.0),
        )
