from __future__ import annotations

from dataclasses import dataclass

from campus_nav.routing.directions import PROFILES
from campus_nav.routing.formatting import format_distance, format_duration
from campus_nav.routing.types import DirectionsResult, Location


@dataclass(frozen=True)
class NavigationRequest:
    start: Location
    end: Location
    profile: str = "driving"

    def __post_init__(self):
        if self.profile not in PROFILES:
            raise ValueError(f"Unknown travel profile: {self.profile}")

    @classmethod
    def from_dict(cls, data: dict) -> "NavigationRequest":
        def location(raw, default_name):
            if not isinstance(raw, dict):
                raise ValueError("Both start and end locations are required")
            try:
                lng = float(raw.get("lng", raw.get("longitude")))
                lat = float(raw.get("lat", raw.get("latitude")))
            except (TypeError, ValueError):
                raise ValueError("Locations need numeric lng and lat")
            return Location(name=raw.get("name") or default_name, lng=lng, lat=lat)

        return cls(
            start=location(data.get("start"), "Start Location"),
            end=location(data.get("end"), "End Location"),
            profile=data.get("profile") or "driving",
        )


@dataclass(frozen=True)
class NavigationInfo:
    time: str
    distance: str
    duration: float
    distance_meters: float

    @classmethod
    def from_result(cls, result: DirectionsResult) -> "NavigationInfo":
        return cls(
            time=format_duration(result.duration),
            distance=format_distance(result.distance),
            duration=result.duration,
            distance_meters=result.distance,
        )

    def as_dict(self) -> dict:
        return {
            "time": self.time,
            "distance": self.distance,
            "duration": self.duration,
            "distanceMeters": self.distance_meters,
        }
