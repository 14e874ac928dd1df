"""Coordinates and great-circle distance."""
from math import asin, cos, radians, sin, sqrt
from typing import Any, Dict, NamedTuple, Optional

EARTH_RADIUS_M = 6371000
METERS_PER_MILE = 1609.344


class Coordinate(NamedTuple):
    lat: float
    lng: float

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"

    @classmethod
    def from_geometry(cls, place: Optional[Dict[str, Any]]) -> Optional["Coordinate"]:
        """Read ``geometry.location`` from a Google place/geocode record."""
        location = ((place or {}).get("geometry") or {}).get("location") or {}
        lat, lng = location.get("lat"), location.get("lng")
        if lat is None or lng is None:
            return None
        return cls(float(lat), float(lng))


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Calculate distance between two points in meters using Haversine formula."""
    dlat = radians(b.lat - a.lat)
    dlng = radians(b.lng - a.lng)
    lat1, lat2 = radians(a.lat), radians(b.lat)

    x = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * asin(sqrt(x))


def meters_to_miles(meters: float) -> float:
    return round(meters / METERS_PER_MILE, 2)
