"""Core domain primitives for swapmap."""

from .models import Coordinate, GeoItem, PlaceMatch, RankedItem
from .exceptions import (
    GeocodingError,
    InvalidCoordinateError,
    ListingError,
    MapLifecycleError,
    SwapMapError,
)

__all__ = [
    "Coordinate",
    "GeoItem",
    "PlaceMatch",
    "RankedItem",
    "SwapMapError",
    "InvalidCoordinateError",
    "GeocodingError",
    "ListingError",
    "MapLifecycleError",
]
