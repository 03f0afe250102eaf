from __future__ import annotations

import logging
import time

from django.conf import settings

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from .types import GeocodeResult

logger = logging.getLogger(__name__)

MIN_DELAY_SECONDS = 1.0


class GeocodingService:
    """
    Place-name to coordinate lookup against OpenStreetMap Nominatim.

    Nominatim's usage policy allows one request per second, so every call
    sleeps ``min_delay`` seconds *before* issuing its request. This is a plain
    sequential throttle: callers block, nothing is queued or bucketed.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        min_delay: float | None = None,
        timeout: float = 10,
        geolocator=None,
        sleep=time.sleep,
    ):
        configured = settings.GEOCODE_MIN_DELAY_SECONDS if min_delay is None else min_delay
        self.min_delay = max(MIN_DELAY_SECONDS, configured)
        self.geolocator = geolocator or Nominatim(
            user_agent=user_agent or settings.NOMINATIM_USER_AGENT,
            timeout=timeout,
        )
        self._sleep = sleep

    def geocode(self, name: str, city: str | None = None) -> GeocodeResult | None:
        """Best match for ``"<name>, <city>"`` or ``None`` when nothing is found."""
        query = f"{name.strip()}, {city or settings.CAMPUS['default_city']}"

        self._sleep(self.min_delay)

        try:
            location = self.geolocator.geocode(query, exactly_one=True, addressdetails=True)
        except GeopyError as e:
            logger.warning("Geocoding %r failed: %s", query, e)
            return None

        if not location:
            logger.info("No geocoding match for %r", query)
            return None

        raw = getattr(location, "raw", None) or {}
        return GeocodeResult(
            latitude=float(location.latitude),
            longitude=float(location.longitude),
            display_name=location.address or name,
            address=raw.get("address") or {},
        )
