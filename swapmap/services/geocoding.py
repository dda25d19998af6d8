"""Client for Nominatim-compatible geocoding services."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from ..config import GEOCODING_CONFIG, GeocodingConfig
from ..core import Coordinate, PlaceMatch
from ..core.exceptions import GeocodingError

logger = logging.getLogger(__name__)


class _HTTPClient:
    """Small wrapper around :mod:`requests` that sends the required headers."""

    def __init__(self, user_agent: str):
        self.session = requests.Session()
        # Nominatim's usage policy requires an identifying User-Agent.
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    def get_json(self, url: str, params: Dict[str, object], timeout: int) -> object:
        response = self.session.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()


class NominatimClient:
    """Forward and reverse geocoding against a Nominatim endpoint."""

    def __init__(self, http_client=None, config: GeocodingConfig = GEOCODING_CONFIG):
        self.config = config
        self.http_client = http_client or _HTTPClient(config.user_agent)

    def search(self, query: str, *, limit: Optional[int] = None) -> list[PlaceMatch]:
        """Resolve free text to at most ``limit`` places.

        Raises :class:`GeocodingError` when the service cannot be reached or
        returns something other than a list of records.
        """

        limit = self.config.search_limit if limit is None else limit
        params = {
            "format": "json",
            "q": query,
            "limit": limit,
            "accept-language": self.config.language,
        }
        payload = self._get(self.config.search_url, params)
        if not isinstance(payload, list):
            raise GeocodingError("Unexpected search response", details={"query": query})

        matches: list[PlaceMatch] = []
        for record in payload:
            if not isinstance(record, dict):
                continue
            coordinate = Coordinate.try_parse(record.get("lat"), record.get("lon"))
            if coordinate is None:
                logger.debug("Skipping search result without usable coordinates: %r", record)
                continue
            label = str(record.get("display_name") or "").strip()
            matches.append(PlaceMatch(label=label, coordinate=coordinate))
            if len(matches) >= limit:
                break
        return matches

    def reverse(self, coordinate: Coordinate) -> dict | None:
        """Return the structured address for ``coordinate`` or ``None``."""

        params = {
            "format": "json",
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "zoom": 18,
            "addressdetails": 1,
            "accept-language": self.config.language,
        }
        payload = self._get(self.config.reverse_url, params)
        if not isinstance(payload, dict):
            return None
        address = payload.get("address")
        return address if isinstance(address, dict) else None

    def _get(self, url: str, params: Dict[str, object]) -> object:
        try:
            return self.http_client.get_json(url, params, self.config.timeout)
        except (requests.RequestException, ValueError) as exc:
            raise GeocodingError(
                f"Geocoding request failed: {exc}", details={"url": url}
            ) from exc
