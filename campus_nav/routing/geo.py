from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt
from typing import Iterable

EARTH_RADIUS_M = 6371008.8


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * asin(sqrt(a))


@dataclass(frozen=True)
class Bounds:
    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_coordinates(cls, coords: Iterable[Iterable[float]]) -> "Bounds | None":
        """Smallest box around ``[lng, lat]`` pairs, or ``None`` for no points."""
        coords = [tuple(c) for c in coords]
        if not coords:
            return None
        lngs = [c[0] for c in coords]
        lats = [c[1] for c in coords]
        return cls(west=min(lngs), south=min(lats), east=max(lngs), north=max(lats))

    def as_list(self) -> list[list[float]]:
        return [[self.west, self.south], [self.east, self.north]]

    def contains(self, lng: float, lat: float) -> bool:
        return self.west <= lng <= self.east and self.south <= lat <= self.north


def grid_points(center_lng: float, center_lat: float, half_span: float, step: float) -> list[tuple[float, float]]:
    """Square grid of ``(lng, lat)`` points around a centre, row by row from the south-west corner."""
    if step <= 0:
        raise ValueError("step must be positive")

    count = int(round((2 * half_span) / step)) + 1
    points = []
    for row in range(count):
        lat = round(center_lat - half_span + row * step, 6)
        for col in range(count):
            lng = round(center_lng - half_span + col * step, 6)
            points.append((lng, lat))
    return points
