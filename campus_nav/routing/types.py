from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Location:
    name: str
    lng: float
    lat: float

    @property
    def coords(self) -> list[float]:
        return [self.lng, self.lat]


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    display_name: str
    address: dict = field(default_factory=dict)


@dataclass(frozen=True)
class GeocodedFeature:
    """A single Mapbox geocoding feature, flattened."""

    name: str
    text: str
    lng: float
    lat: float
    context: str = ""
    categories: tuple[str, ...] = ()

    @classmethod
    def from_mapbox(cls, feature: dict) -> "GeocodedFeature":
        lng, lat = feature["center"]
        context = ", ".join(ctx.get("text", "") for ctx in feature.get("context") or [] if ctx.get("text"))
        props = feature.get("properties") or {}
        categories = tuple(c.strip() for c in (props.get("category") or "").split(",") if c.strip())
        return cls(
            name=feature.get("place_name") or feature.get("text") or "",
            text=feature.get("text") or "",
            lng=float(lng),
            lat=float(lat),
            context=context,
            categories=categories,
        )


@dataclass(frozen=True)
class DirectionsResult:
    geometry: dict
    duration: float  # seconds
    distance: float  # meters

    @property
    def coordinates(self) -> list[list[float]]:
        return self.geometry.get("coordinates") or []
