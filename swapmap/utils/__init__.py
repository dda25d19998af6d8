"""Utility helpers for swapmap."""

from .geo import haversine_distance, is_valid_coordinate, parse_degrees
from .formatting import (
    LOCATION_UNAVAILABLE,
    format_distance,
    format_location_label,
    truncate_text,
)
from .io import detect_encoding

__all__ = [
    "haversine_distance",
    "is_valid_coordinate",
    "parse_degrees",
    "LOCATION_UNAVAILABLE",
    "format_distance",
    "format_location_label",
    "truncate_text",
    "detect_encoding",
]
