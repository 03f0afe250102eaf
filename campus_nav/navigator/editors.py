"""Route and place edit forms: local validation, then create/update through the gateway."""
from __future__ import annotations

import copy
from typing import Optional

from campus_nav.places.models import WEEKDAYS, PlaceCategory, default_contact_info, default_opening_hours
from campus_nav.routes.models import DEFAULT_ROUTE_COLOR
from campus_nav.routes.serializers import MIN_WAYPOINTS

from .client import CampusNavClient


class EditorValidationError(ValueError):
    def __init__(self, errors: dict):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class RouteEditor:

    def __init__(self, client: CampusNavClient, route: Optional[dict] = None):
        self.client = client
        self.route_id = route.get("id") if route else None
        self.name = (route or {}).get("name") or ""
        self.description = (route or {}).get("description") or ""
        self.color = (route or {}).get("color") or DEFAULT_ROUTE_COLOR
        waypoints = sorted((route or {}).get("waypoints") or [], key=lambda wp: wp.get("order", 0))
        self.waypoints: list[dict] = [dict(wp) for wp in waypoints]
        self.drawing = False
        self.errors: dict = {}

    # drawing mode

    def set_drawing(self, enabled: bool) -> None:
        self.drawing = bool(enabled)

    def toggle_drawing(self) -> bool:
        self.drawing = not self.drawing
        return self.drawing

    @property
    def map_click_callback(self):
        """Handler for map clicks while drawing, else ``None``."""
        return self.add_waypoint_from_map if self.drawing else None

    def add_waypoint_from_map(self, lng: float, lat: float) -> None:
        self.waypoints.append({"latitude": lat, "longitude": lng, "name": "", "order": self._next_order()})

    # manual editing

    def add_waypoint(self) -> None:
        self.waypoints.append({"latitude": 0, "longitude": 0, "name": "", "order": self._next_order()})

    def update_waypoint(self, index: int, field: str, value) -> None:
        if field in ("latitude", "longitude"):
            value = _to_float(value)
        self.waypoints[index] = {**self.waypoints[index], field: value}

    def remove_waypoint(self, index: int) -> None:
        del self.waypoints[index]
        self._renumber()

    def move_waypoint(self, index: int, direction: str) -> None:
        target = index - 1 if direction == "up" else index + 1
        if target < 0 or target >= len(self.waypoints):
            return
        self.waypoints[index], self.waypoints[target] = self.waypoints[target], self.waypoints[index]
        self._renumber()

    def _next_order(self) -> int:
        # loaded routes may carry gapped or 1-based orders
        return max((wp.get("order", -1) for wp in self.waypoints), default=-1) + 1

    def _renumber(self) -> None:
        self.waypoints = [{**wp, "order": i} for i, wp in enumerate(self.waypoints)]

    # submit

    def validate(self) -> dict:
        errors = {}
        if not self.name.strip():
            errors["name"] = "Route name is required"
        if len(self.waypoints) < MIN_WAYPOINTS:
            errors["waypoints"] = f"At least {MIN_WAYPOINTS} waypoints are required"
        for index, wp in enumerate(self.waypoints):
            if wp.get("latitude") == 0 and wp.get("longitude") == 0:
                errors[f"waypoint_{index}"] = "Waypoint coordinates cannot be (0, 0)"
        self.errors = errors
        return errors

    def payload(self) -> dict:
        return {
            "name": self.name.strip(),
            "description": self.description,
            "color": self.color,
            "waypoints": copy.deepcopy(self.waypoints),
        }

    def submit(self) -> dict:
        errors = self.validate()
        if errors:
            raise EditorValidationError(errors)

        if self.route_id is not None:
            saved = self.client.update_route(self.route_id, self.payload())
        else:
            saved = self.client.create_route(self.payload())
            self.route_id = saved.get("id")

        self.drawing = False
        return saved


class PlaceEditor:

    def __init__(self, client: CampusNavClient, place: Optional[dict] = None):
        place = place or {}
        self.client = client
        self.place_id = place.get("id")
        self.name = place.get("name") or ""
        self.description = place.get("description") or ""
        self.category = place.get("category") or PlaceCategory.OTHER.value
        self.latitude = place.get("latitude", "")
        self.longitude = place.get("longitude", "")
        self.opening_hours = copy.deepcopy(place.get("opening_hours") or default_opening_hours())
        self.contact_info = {**default_contact_info(), **(place.get("contact_info") or {})}
        self.errors: dict = {}

    def set_hours(self, day: str, field: str, value) -> None:
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day}")
        self.opening_hours[day] = {**self.opening_hours.get(day, {}), field: value}

    def set_contact(self, field: str, value: str) -> None:
        self.contact_info[field] = value

    def set_location(self, lng: float, lat: float) -> None:
        self.longitude = lng
        self.latitude = lat

    def validate(self) -> dict:
        errors = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        for field in ("latitude", "longitude"):
            value = getattr(self, field)
            try:
                if value in ("", None):
                    raise ValueError
                float(value)
            except (TypeError, ValueError):
                errors[field] = f"Valid {field} is required"
        if self.category not in PlaceCategory.values:
            errors["category"] = "Valid category is required"
        self.errors = errors
        return errors

    def payload(self) -> dict:
        return {
            "name": self.name.strip(),
            "description": self.description,
            "category": self.category,
            "latitude": float(self.latitude),
            "longitude": float(self.longitude),
            "opening_hours": copy.deepcopy(self.opening_hours),
            "contact_info": dict(self.contact_info),
        }

    def submit(self) -> dict:
        errors = self.validate()
        if errors:
            raise EditorValidationError(errors)

        if self.place_id is not None:
            return self.client.update_place(self.place_id, self.payload())

        saved = self.client.create_place(self.payload())
        self.place_id = saved.get("id")
        return saved
