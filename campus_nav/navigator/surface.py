"""
Map surface abstraction.

The annotation layer never talks to a rendering SDK directly. It issues
marker/line/bounds commands against a :class:`MapSurface`. ``SceneSurface``
is the in-process implementation: it keeps the current scene as plain data so
it can be serialised for a front end (``GET /api/map/scene``) and clicked
through in tests.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Callable, Optional

from campus_nav.routing.geo import Bounds


@dataclass
class Popup:
    title: str
    body: str = ""


@dataclass
class Marker:
    id: str  # noqa: A003
    lng: float
    lat: float
    kind: str
    icon: Optional[str] = None
    color: Optional[str] = None
    highlighted: bool = False
    popup: Optional[Popup] = None
    on_click: Optional[Callable[[], object]] = field(default=None, repr=False, compare=False)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "coordinates": [self.lng, self.lat],
            "icon": self.icon,
            "color": self.color,
            "highlighted": self.highlighted,
            "popup": {"title": self.popup.title, "body": self.popup.body} if self.popup else None,
        }


@dataclass
class Line:
    id: str  # noqa: A003
    coordinates: list[list[float]]
    kind: str
    color: str
    width: int = 4
    opacity: float = 0.7

    def as_feature(self) -> dict:
        return {
            "type": "Feature",
            "id": self.id,
            "properties": {"kind": self.kind, "color": self.color, "width": self.width, "opacity": self.opacity},
            "geometry": {"type": "LineString", "coordinates": self.coordinates},
        }


class MapSurface(abc.ABC):

    @abc.abstractmethod
    def add_marker(self, marker: Marker) -> None: ...

    @abc.abstractmethod
    def remove_marker(self, marker_id: str) -> None: ...

    @abc.abstractmethod
    def set_line(self, line: Line) -> None:
        """Add the line, or replace the existing line with the same id."""

    @abc.abstractmethod
    def remove_line(self, line_id: str) -> None: ...

    @abc.abstractmethod
    def fit_bounds(self, bounds: Bounds, padding: int) -> None: ...

    @abc.abstractmethod
    def fly_to(self, lng: float, lat: float, zoom: float) -> None: ...

    @abc.abstractmethod
    def alert(self, message: str) -> None: ...

    @abc.abstractmethod
    def show_navigation_info(self, info) -> None:
        """Display (or, with ``None``, hide) the travel time/distance panel."""


class SceneSurface(MapSurface):

    def __init__(self):
        self.markers: dict[str, Marker] = {}
        self.lines: dict[str, Line] = {}
        self.bounds: Optional[Bounds] = None
        self.padding = 0
        self.camera: Optional[dict] = None
        self.alerts: list[str] = []
        self.navigation_info = None

    def add_marker(self, marker: Marker) -> None:
        self.markers[marker.id] = marker

    def remove_marker(self, marker_id: str) -> None:
        self.markers.pop(marker_id, None)

    def set_line(self, line: Line) -> None:
        self.lines[line.id] = line

    def remove_line(self, line_id: str) -> None:
        self.lines.pop(line_id, None)

    def fit_bounds(self, bounds: Bounds, padding: int) -> None:
        self.bounds = bounds
        self.padding = padding

    def fly_to(self, lng: float, lat: float, zoom: float) -> None:
        self.camera = {"center": [lng, lat], "zoom": zoom}

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def show_navigation_info(self, info) -> None:
        self.navigation_info = info

    def click_marker(self, marker_id: str):
        marker = self.markers[marker_id]
        return marker.on_click() if marker.on_click else None

    def markers_of_kind(self, kind: str) -> list[Marker]:
        return [m for m in self.markers.values() if m.kind == kind]

    def lines_of_kind(self, kind: str) -> list[Line]:
        return [ln for ln in self.lines.values() if ln.kind == kind]

    def as_dict(self) -> dict:
        info = self.navigation_info
        return {
            "markers": [m.as_dict() for m in self.markers.values()],
            "lines": {"type": "FeatureCollection", "features": [ln.as_feature() for ln in self.lines.values()]},
            "bounds": self.bounds.as_list() if self.bounds else None,
            "padding": self.padding,
            "camera": self.camera,
            "navigation": info.as_dict() if info else None,
            "alerts": list(self.alerts),
        }
