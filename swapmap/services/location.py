"""Resolve the user's position and free-text places to coordinates."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import GEOCODING_CONFIG, MAP_CONFIG
from ..core import Coordinate, PlaceMatch
from ..core.exceptions import GeocodingError
from ..utils import LOCATION_UNAVAILABLE, format_location_label
from .geocoding import NominatimClient

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = Coordinate(MAP_CONFIG.default_latitude, MAP_CONFIG.default_longitude)

GeolocationProvider = Callable[[], object]


class LocationResolver:
    """Turn device positions and search text into :class:`Coordinate` values.

    ``geolocation`` is any callable returning a ``(latitude, longitude)``
    pair, a :class:`Coordinate`, or ``None`` when the position is unknown.
    """

    def __init__(
        self,
        *,
        geolocation: Optional[GeolocationProvider] = None,
        geocoder: Optional[NominatimClient] = None,
        default: Coordinate = DEFAULT_LOCATION,
        min_query_length: int = GEOCODING_CONFIG.min_query_length,
        max_results: int = GEOCODING_CONFIG.search_limit,
    ):
        self.geolocation = geolocation
        self.geocoder = geocoder or NominatimClient()
        self.default = default
        self.min_query_length = min_query_length
        self.max_results = max_results

    def resolve_current_location(self, geolocation: Optional[GeolocationProvider] = None) -> Coordinate:
        """Return the device position, or the default location when it is unknown."""

        provider = geolocation or self.geolocation
        if provider is None:
            return self.default

        try:
            position = provider()
        except Exception as exc:  # platform failures and permission denials alike
            logger.warning("Geolocation unavailable, using default location: %s", exc)
            return self.default

        if isinstance(position, Coordinate):
            return position
        if position is None:
            return self.default

        try:
            latitude, longitude = position  # type: ignore[misc]
        except (TypeError, ValueError):
            logger.warning("Geolocation returned an unexpected value: %r", position)
            return self.default

        coordinate = Coordinate.try_parse(latitude, longitude)
        if coordinate is None:
            logger.warning("Geolocation returned invalid coordinates: %r", position)
            return self.default
        return coordinate

    def search_place(self, query: str) -> list[PlaceMatch]:
        query = (query or "").strip()
        if len(query) < self.min_query_length:
            return []

        try:
            matches = self.geocoder.search(query, limit=self.max_results)
        except GeocodingError as exc:
            logger.warning("Place search for %r failed: %s", query, exc)
            return []
        return matches[: self.max_results]

    def describe_location(self, coordinate: Coordinate) -> str:
        """Return a short "locality, region, country" label for ``coordinate``."""

        try:
            address = self.geocoder.reverse(coordinate)
        except GeocodingError as exc:
            logger.warning("Reverse geocoding failed for %s: %s", coordinate.as_tuple(), exc)
            return LOCATION_UNAVAILABLE
        return format_location_label(address)
