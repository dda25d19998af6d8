"""Geospatial helpers."""

from __future__ import annotations

from math import atan2, cos, isfinite, radians, sin, sqrt


EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance between two coordinates in kilometers."""

    phi1 = radians(lat1)
    phi2 = radians(lat2)
    delta_phi = radians(lat2 - lat1)
    delta_lambda = radians(lon2 - lon1)

    a = sin(delta_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(delta_lambda / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def is_valid_coordinate(latitude: object, longitude: object) -> bool:
    """Return ``True`` for finite numbers inside the latitude/longitude ranges."""

    for value in (latitude, longitude):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not isfinite(value):
            return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0  # type: ignore[operator]


def parse_degrees(value: object) -> float | None:
    """Parse a number or numeric string, returning ``None`` for blanks and NaN."""

    if value in (None, "", "null") or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not isfinite(number):
        return None
    return number
