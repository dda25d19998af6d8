from __future__ import annotations

from typing import Dict, List, Tuple

import requests

from swapmap.config import GeocodingConfig
from swapmap.core import Coordinate
from swapmap.services import DEFAULT_LOCATION, LocationResolver, NominatimClient
from swapmap.utils import LOCATION_UNAVAILABLE

CONFIG = GeocodingConfig()


class DummyHttpClient:
    def __init__(self) -> None:
        self.responses: Dict[str, object] = {}
        self.calls: List[Tuple[str, Dict[str, object]]] = []

    def queue(self, url: str, payload: object) -> None:
        self.responses[url] = payload

    def get_json(self, url: str, params: Dict[str, object], timeout: int) -> object:
        self.calls.append((url, params))
        if url not in self.responses:
            raise AssertionError(f"Unexpected request for {url}")
        payload = self.responses[url]
        if isinstance(payload, Exception):
            raise payload
        return payload


def build_resolver(client: DummyHttpClient, **kwargs) -> LocationResolver:
    return LocationResolver(geocoder=NominatimClient(http_client=client), **kwargs)


def place(name: str, lat: str, lon: str) -> dict:
    return {"display_name": name, "lat": lat, "lon": lon}


def test_default_location_is_london():
    assert DEFAULT_LOCATION == Coordinate(51.505, -0.09)


def test_resolve_current_location_uses_provider():
    resolver = build_resolver(DummyHttpClient(), geolocation=lambda: (40.7128, -74.006))
    assert resolver.resolve_current_location() == Coordinate(40.7128, -74.006)


def test_resolve_current_location_falls_back_on_failure():
    def denied():
        raise PermissionError("User denied geolocation")

    resolver = build_resolver(DummyHttpClient(), geolocation=denied)
    assert resolver.resolve_current_location() == DEFAULT_LOCATION


def test_resolve_current_location_falls_back_on_invalid_values():
    client = DummyHttpClient()
    assert build_resolver(client).resolve_current_location() == DEFAULT_LOCATION
    assert build_resolver(client, geolocation=lambda: None).resolve_current_location() == DEFAULT_LOCATION
    assert (
        build_resolver(client, geolocation=lambda: (float("nan"), 1.0)).resolve_current_location()
        == DEFAULT_LOCATION
    )
    assert build_resolver(client, geolocation=lambda: "here").resolve_current_location() == DEFAULT_LOCATION


def test_resolve_current_location_accepts_override_provider():
    resolver = build_resolver(DummyHttpClient())
    assert resolver.resolve_current_location(lambda: Coordinate(1.0, 2.0)) == Coordinate(1.0, 2.0)


def test_search_place_ignores_short_queries():
    client = DummyHttpClient()
    resolver = build_resolver(client)

    assert resolver.search_place("lo") == []
    assert resolver.search_place("  lo  ") == []
    assert resolver.search_place("") == []
    assert client.calls == []


def test_search_place_returns_up_to_five_matches():
    client = DummyHttpClient()
    client.queue(
        CONFIG.search_url,
        [place("Broken", "nan", "0")]
        + [place(f"London {i}", "51.5", f"-0.{i}") for i in range(1, 7)],
    )
    resolver = build_resolver(client)

    matches = resolver.search_place("London")

    assert [match.label for match in matches] == [f"London {i}" for i in range(1, 6)]
    assert matches[0].coordinate == Coordinate(51.5, -0.1)
    url, params = client.calls[0]
    assert url == CONFIG.search_url
    assert params["q"] == "London"
    assert params["limit"] == 5
    assert params["format"] == "json"


def test_search_place_returns_empty_on_transport_failure():
    client = DummyHttpClient()
    client.queue(CONFIG.search_url, requests.ConnectionError("offline"))

    assert build_resolver(client).search_place("London") == []
    assert len(client.calls) == 1


def test_search_place_returns_empty_on_unexpected_payload():
    client = DummyHttpClient()
    client.queue(CONFIG.search_url, {"error": "rate limited"})

    assert build_resolver(client).search_place("London") == []


def test_describe_location_builds_label():
    client = DummyHttpClient()
    client.queue(
        CONFIG.reverse_url,
        {"address": {"town": "Guildford", "state": "England", "country": "United Kingdom"}},
    )

    label = build_resolver(client).describe_location(Coordinate(51.24, -0.57))

    assert label == "Guildford, England, United Kingdom"
    assert client.calls[0][1]["addressdetails"] == 1


def test_describe_location_degrades_gracefully():
    client = DummyHttpClient()
    client.queue(CONFIG.reverse_url, {"error": "Unable to geocode"})
    assert build_resolver(client).describe_location(Coordinate(0, 0)) == LOCATION_UNAVAILABLE

    client.queue(CONFIG.reverse_url, requests.Timeout("slow"))
    assert build_resolver(client).describe_location(Coordinate(0, 0)) == LOCATION_UNAVAILABLE
