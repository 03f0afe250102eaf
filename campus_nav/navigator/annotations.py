"""
Map annotation layer.

Keeps a :class:`~campus_nav.navigator.surface.MapSurface` in step with three
independent inputs: the place list, the route list (with an optional selected
route) and an optional navigation result. Each input owns its own set of
markers/lines and is rebuilt wholesale when it changes.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from campus_nav.core.exceptions import ConfigurationError, UpstreamServiceError
from campus_nav.routing.geo import Bounds
from campus_nav.routes.models import DEFAULT_ROUTE_COLOR

from .picking import PickController, PickResult
from .surface import Line, MapSurface, Marker, Popup
from .types import NavigationInfo, NavigationRequest

logger = logging.getLogger(__name__)

CATEGORY_ICONS = {
    "eateries": "🍽️",
    "recreation": "⚽",
    "educational": "📚",
    "administration": "🏛️",
    "staff_quarters": "🏠",
    "hostel": "🏘️",
    "library": "📖",
    "other": "📍",
}
DEFAULT_ICON = "📍"

ROUTE_FIT_PADDING = 50
SELECTED_FIT_PADDING = 100
NAVIGATION_FIT_PADDING = 100
SEARCH_RESULT_ZOOM = 16

NAV_START_COLOR = "#4CAF50"
NAV_END_COLOR = "#f44336"
NAV_LINE_COLOR = "#667eea"
NAV_LINE_ID = "nav-route"
SEARCH_MARKER_ID = "search-result"

ROUTE_FAILED_MESSAGE = "Failed to calculate route. Please try again."


def icon_for_category(category: str | None) -> str:
    return CATEGORY_ICONS.get(category or "", DEFAULT_ICON)


def ordered_waypoints(route: dict) -> list[dict]:
    return sorted(route.get("waypoints") or [], key=lambda wp: wp.get("order", 0))


def route_coordinates(route: dict) -> list[list[float]]:
    """``[lng, lat]`` pairs in waypoint ``order``, whatever the storage order."""
    return [[wp["longitude"], wp["latitude"]] for wp in ordered_waypoints(route)]


class MapAnnotationLayer:

    def __init__(self, surface: MapSurface, directions=None):
        self.surface = surface
        self.directions = directions

        self.places: list[dict] = []
        self.routes: list[dict] = []
        self.selected_route_id = None
        self.navigation_info: Optional[NavigationInfo] = None

        self._place_marker_ids: list[str] = []
        self._route_marker_ids: list[str] = []
        self._route_line_ids: list[str] = []
        self._nav_marker_ids: list[str] = []
        self._nav_line_id: Optional[str] = None

    # places

    def set_places(
        self,
        places: list[dict],
        *,
        pick: Optional[PickController] = None,
        on_place_select: Optional[Callable[[dict], None]] = None,
    ) -> None:
        for marker_id in self._place_marker_ids:
            self.surface.remove_marker(marker_id)
        self._place_marker_ids = []

        self.places = [p for p in places or [] if p.get("is_active", True)]
        for place in self.places:
            marker_id = f"place-{place['id']}"
            description = place.get("description") or ""
            self.surface.add_marker(
                Marker(
                    id=marker_id,
                    lng=place["longitude"],
                    lat=place["latitude"],
                    kind="place",
                    icon=icon_for_category(place.get("category")),
                    popup=Popup(title=place["name"], body=description[:50]),
                    on_click=self._place_click_handler(place, pick, on_place_select),
                )
            )
            self._place_marker_ids.append(marker_id)

    def _place_click_handler(self, place, pick, on_place_select):
        def handler():
            return self.handle_place_click(place, pick=pick, on_place_select=on_place_select)

        return handler

    def handle_place_click(
        self,
        place: dict,
        *,
        pick: Optional[PickController] = None,
        on_place_select: Optional[Callable[[dict], None]] = None,
    ) -> Optional[PickResult]:
        """A pending pick takes the place first; otherwise the place is opened."""
        if pick is not None and pick.is_active:
            return pick.resolve(place["longitude"], place["latitude"], place.get("name") or "")
        if on_place_select is not None:
            on_place_select(place)
        return None

    # routes

    def set_routes(self, routes: list[dict], selected=None) -> None:
        """
        Redraw every route. ``selected`` is a route id or route dict; when
        set, only that route keeps its line and the view fits to it alone.
        """
        for marker_id in self._route_marker_ids:
            self.surface.remove_marker(marker_id)
        for line_id in self._route_line_ids:
            self.surface.remove_line(line_id)
        self._route_marker_ids = []
        self._route_line_ids = []

        self.routes = [r for r in routes or [] if r.get("is_active", True)]
        selected_id = selected.get("id") if isinstance(selected, dict) else selected
        if selected_id is not None and not any(r.get("id") == selected_id for r in self.routes):
            logger.debug("Selected route %s is not on the map; clearing selection", selected_id)
            selected_id = None
        self.selected_route_id = selected_id

        for route in self.routes:
            self._draw_route(route, is_selected=route.get("id") == selected_id)

        self._fit_routes()

    def select_route(self, selected) -> None:
        self.set_routes(self.routes, selected)

    def _draw_route(self, route: dict, is_selected: bool) -> None:
        color = route.get("color") or DEFAULT_ROUTE_COLOR
        waypoints = ordered_waypoints(route)

        for index, wp in enumerate(waypoints):
            marker_id = f"route-{route['id']}-wp-{index}"
            self.surface.add_marker(
                Marker(
                    id=marker_id,
                    lng=wp["longitude"],
                    lat=wp["latitude"],
                    kind="waypoint",
                    color=color,
                    highlighted=is_selected,
                    popup=Popup(title=wp.get("name") or f"Point {index + 1}", body=f"Route: {route.get('name', '')}"),
                )
            )
            self._route_marker_ids.append(marker_id)

        if len(waypoints) >= 2 and (self.selected_route_id is None or is_selected):
            line_id = f"route-{route['id']}"
            self.surface.set_line(
                Line(
                    id=line_id,
                    coordinates=route_coordinates(route),
                    kind="route",
                    color=color,
                    width=6 if is_selected else 4,
                    opacity=1.0 if is_selected else 0.7,
                )
            )
            self._route_line_ids.append(line_id)

    def _fit_routes(self) -> None:
        if self.selected_route_id is not None:
            route = next(r for r in self.routes if r.get("id") == self.selected_route_id)
            bounds = Bounds.from_coordinates(route_coordinates(route))
            padding = SELECTED_FIT_PADDING
        else:
            bounds = Bounds.from_coordinates(c for r in self.routes for c in route_coordinates(r))
            padding = ROUTE_FIT_PADDING

        if bounds is not None:
            self.surface.fit_bounds(bounds, padding)

    # navigation

    def show_navigation(self, request: NavigationRequest) -> Optional[NavigationInfo]:
        self.clear_navigation()

        for marker_id, location, color, label in (
            ("nav-start", request.start, NAV_START_COLOR, "Start"),
            ("nav-end", request.end, NAV_END_COLOR, "End"),
        ):
            self.surface.add_marker(
                Marker(
                    id=marker_id,
                    lng=location.lng,
                    lat=location.lat,
                    kind=marker_id,
                    color=color,
                    popup=Popup(title=label, body=location.name),
                )
            )
            self._nav_marker_ids.append(marker_id)

        try:
            if self.directions is None:
                raise ConfigurationError("Directions service is not configured")
            result = self.directions.get_directions(request.start, request.end, request.profile)
        except (UpstreamServiceError, ConfigurationError, ValueError) as e:
            logger.warning("Navigation %s -> %s failed: %s", request.start.name, request.end.name, e)
            self.surface.alert(ROUTE_FAILED_MESSAGE)
            return None

        self.surface.set_line(
            Line(
                id=NAV_LINE_ID,
                coordinates=result.coordinates,
                kind="navigation",
                color=NAV_LINE_COLOR,
                width=6,
                opacity=0.8,
            )
        )
        self._nav_line_id = NAV_LINE_ID

        bounds = Bounds.from_coordinates(result.coordinates)
        if bounds is not None:
            self.surface.fit_bounds(bounds, NAVIGATION_FIT_PADDING)

        self.navigation_info = NavigationInfo.from_result(result)
        self.surface.show_navigation_info(self.navigation_info)
        return self.navigation_info

    def clear_navigation(self) -> None:
        for marker_id in self._nav_marker_ids:
            self.surface.remove_marker(marker_id)
        self._nav_marker_ids = []
        if self._nav_line_id is not None:
            self.surface.remove_line(self._nav_line_id)
            self._nav_line_id = None
        if self.navigation_info is not None:
            self.navigation_info = None
            self.surface.show_navigation_info(None)

    # clicks and search

    def handle_map_click(
        self,
        lng: float,
        lat: float,
        *,
        pick: Optional[PickController] = None,
        on_draw: Optional[Callable[[float, float], None]] = None,
    ) -> Optional[PickResult]:
        """A pending pick wins over drawing mode."""
        if pick is not None and pick.is_active:
            return pick.resolve(lng, lat)
        if on_draw is not None:
            on_draw(lng, lat)
        return None

    def select_suggestion(self, suggestion, *, pick: Optional[PickController] = None) -> Optional[PickResult]:
        result = None
        if pick is not None and pick.is_active:
            result = pick.resolve(suggestion.lng, suggestion.lat, suggestion.name)

        self.surface.fly_to(suggestion.lng, suggestion.lat, SEARCH_RESULT_ZOOM)
        self.surface.remove_marker(SEARCH_MARKER_ID)
        self.surface.add_marker(
            Marker(
                id=SEARCH_MARKER_ID,
                lng=suggestion.lng,
                lat=suggestion.lat,
                kind="search",
                color=NAV_LINE_COLOR,
                popup=Popup(title=suggestion.name),
            )
        )
        return result
