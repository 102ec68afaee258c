"""Spherical-Earth helpers used by measurement and sector-drawing features.

All functions treat the Earth as a sphere of mean radius 6,371 km, which is
well within the accuracy needed for on-map measurements.
"""

import math

from .models import GeoPoint

EARTH_RADIUS_M = 6371000.0


def _normalise_longitude(lng: float) -> float:
    """Wrap a longitude in degrees into (-180, 180]."""
    lng = (lng + 540.0) % 360.0 - 180.0
    if lng == -180.0:
        return 180.0
    return lng


def destination_point(origin: GeoPoint, bearing: float, distance: float) -> GeoPoint:
    """Point reached by travelling *distance* metres from *origin* on *bearing*.

    Bearing is in degrees clockwise from north and may be outside 0-360.
    """
    d = distance / EARTH_RADIUS_M
    brng = math.radians(bearing % 360.0)
    lat1 = math.radians(origin.lat)
    lon1 = math.radians(origin.lng)

    sin_lat2 = math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(brng)
    # asin() raises on values a rounding error past +/-1
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(
        math.sin(brng) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2),
    )

    return GeoPoint(math.degrees(lat2), _normalise_longitude(math.degrees(lon2)))


def bearing_to(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from *a* to *b*, in degrees [0, 360).

    Returns 0.0 for coincident points.
    """
    d_lng = math.radians(b.lng - a.lng)
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)

    y = math.sin(d_lng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lng)

    bearing = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
    # (x + 360) % 360 can round up to exactly 360 for tiny negative angles
    return 0.0 if bearing >= 360.0 else bearing


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in metres between two points."""
    lat1, lon1, lat2, lon2 = map(math.radians, [a.lat, a.lng, b.lat, b.lng])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))
