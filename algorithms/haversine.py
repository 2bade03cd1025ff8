"""
Haversine Algorithm - Calculate distance between two geographical points
Used to find donors near a hospital and requests near a donor
"""

import math
from dataclasses import dataclass

from algorithms.exceptions import InvalidCoordinates

# Radius of earth in kilometers
EARTH_RADIUS_KM = 6371


def _coordinate(value, name, limit):
    if isinstance(value, bool):
        raise InvalidCoordinates(f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinates(f"{name} must be a number") from None

    if not math.isfinite(number) or not -limit <= number <= limit:
        raise InvalidCoordinates(f"{name} must be between -{limit} and {limit}")
    return number


@dataclass(frozen=True)
class GeoPoint:
    """A (latitude, longitude) pair in decimal degrees"""
    latitude: float
    longitude: float

    def __post_init__(self):
        object.__setattr__(self, 'latitude', _coordinate(self.latitude, 'latitude', 90))
        object.__setattr__(self, 'longitude', _coordinate(self.longitude, 'longitude', 180))

    @classmethod
    def from_geojson(cls, geometry):
        """
        Build a point from a stored GeoJSON geometry.
        GeoJSON keeps coordinates as [longitude, latitude].
        """
        try:
            longitude, latitude = geometry['coordinates']
        except (KeyError, TypeError, ValueError):
            raise InvalidCoordinates("Location must be a GeoJSON point") from None
        return cls(latitude=latitude, longitude=longitude)

    def to_geojson(self):
        return {'type': 'Point', 'coordinates': [self.longitude, self.latitude]}

    def as_dict(self):
        return {'latitude': self.latitude, 'longitude': self.longitude}


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate straight-line distance between two points.
    Note: This is "as the crow flies" distance, not road distance.

    Args:
        lat1, lon1: Latitude and longitude of point 1
        lat2, lon2: Latitude and longitude of point 2

    Returns:
        Distance in kilometers
    """
    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push a a hair above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, a)))

    return c * EARTH_RADIUS_KM


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two GeoPoints"""
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def find_nearby(origin: GeoPoint, items, radius_km, location=lambda item: item.geo_point):
    """
    Find all items within radius_km of origin

    Args:
        origin: GeoPoint to measure from
        items: QuerySet or list of objects
        radius_km: Maximum distance in km (inclusive)
        location: callable returning an item's GeoPoint, or None when unknown

    Returns:
        List of tuples: (item, distance) sorted by distance
    """
    nearby = []

    for item in items:
        point = location(item)
        if point is None:
            continue

        distance = distance_km(origin, point)
        if distance <= radius_km:
            nearby.append((item, distance))

    # Sort by distance (closest first)
    nearby.sort(key=lambda x: x[1])

    return nearby
