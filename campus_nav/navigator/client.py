from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"API request failed with {status_code}: {payload}")

    @property
    def field_errors(self) -> dict:
        if isinstance(self.payload, dict) and isinstance(self.payload.get("errors"), dict):
            return self.payload["errors"]
        return {}


class CampusNavClient:
    """Thin JSON client for the campus navigation REST gateway."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        session: requests.Session | None = None,
        timeout: float = 15,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # places

    def list_places(self, category: str | None = None) -> list[dict]:
        params = {"category": category} if category else None
        return self._request("GET", "/places", params=params)

    def get_place(self, place_id) -> dict:
        return self._request("GET", f"/places/{place_id}")

    def create_place(self, payload: dict) -> dict:
        return self._request("POST", "/places", json=payload)

    def update_place(self, place_id, payload: dict) -> dict:
        return self._request("PUT", f"/places/{place_id}", json=payload)

    def delete_place(self, place_id) -> dict:
        return self._request("DELETE", f"/places/{place_id}")

    def populate_college_places(self) -> dict:
        return self._request("POST", "/places/populate-college-places")

    # routes

    def list_routes(self) -> list[dict]:
        return self._request("GET", "/routes")

    def get_route(self, route_id) -> dict:
        return self._request("GET", f"/routes/{route_id}")

    def create_route(self, payload: dict) -> dict:
        return self._request("POST", "/routes", json=payload)

    def update_route(self, route_id, payload: dict) -> dict:
        return self._request("PUT", f"/routes/{route_id}", json=payload)

    def delete_route(self, route_id) -> dict:
        return self._request("DELETE", f"/routes/{route_id}")

    # misc

    def weather(self, lat: float, lng: float) -> dict:
        return self._request("GET", "/weather", params={"lat": lat, "lng": lng})

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)

        try:
            data = resp.json()
        except ValueError:
            data = resp.text

        if resp.status_code >= 400:
            logger.warning("%s %s -> %s", method, url, resp.status_code)
            raise ApiError(resp.status_code, data)
        return data
