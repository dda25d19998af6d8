"""Service layer exports."""

from .geocoding import NominatimClient
from .listings import ListingLoader
from .location import DEFAULT_LOCATION, LocationResolver
from .ranking import ProximityRanker, distance_between
from .search import PlaceSearchCoordinator

__all__ = [
    "NominatimClient",
    "ListingLoader",
    "DEFAULT_LOCATION",
    "LocationResolver",
    "ProximityRanker",
    "distance_between",
    "PlaceSearchCoordinator",
]
