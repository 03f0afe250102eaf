from __future__ import annotations

import logging

from django.conf import settings

import requests

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)


class WeatherService:
    """Current conditions from OpenWeatherMap, reshaped for the map widget."""

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: float = 15):
        self.api_key = (api_key if api_key is not None else settings.OPENWEATHER_API_KEY).strip()
        self.base_url = (base_url or settings.OPENWEATHER_BASE_URL).rstrip("/")
        self.timeout = timeout

        if not self.api_key:
            raise ConfigurationError("Weather API key not configured")

    def get_current(self, lat: float, lng: float) -> dict:
        url = f"{self.base_url}/data/2.5/weather"
        params = {"lat": lat, "lon": lng, "appid": self.api_key, "units": "metric"}

        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Weather API error: %s", e)
            raise UpstreamServiceError("Failed to fetch weather data")

        cod = self._status(data.get("cod"), resp.status_code)
        if cod != 200:
            raise UpstreamServiceError(data.get("message") or "Failed to fetch weather data", provider_status=cod)

        weather = (data.get("weather") or [{}])[0]
        main = data.get("main") or {}
        return {
            "temp": main.get("temp"),
            "feelsLike": main.get("feels_like"),
            "description": weather.get("description"),
            "icon": weather.get("icon"),
            "humidity": main.get("humidity"),
            "windSpeed": (data.get("wind") or {}).get("speed"),
            "location": data.get("name"),
        }

    def _status(self, cod, fallback: int) -> int:
        # OpenWeatherMap reports ``cod`` as an int on success and a string on errors
        try:
            return int(cod)
        except (TypeError, ValueError):
            return fallback
