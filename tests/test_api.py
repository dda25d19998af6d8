from __future__ import annotations

from types import SimpleNamespace

import pytest
from rq.exceptions import NoSuchJobError

from swapmap import create_app
from swapmap.config import GeocodingConfig
from swapmap.core import Coordinate, GeoItem
from swapmap.services import LocationResolver, NominatimClient

from .test_location import DummyHttpClient

ITEMS = [
    GeoItem(identifier="2", name="Lamp", description="Works", coordinate=Coordinate(48.85, 2.35)),
    GeoItem(identifier="1", name="Oak table", description="Solid oak", coordinate=Coordinate(51.51, -0.10)),
    GeoItem(identifier="3", name="Unplaced", description="", coordinate=None),
]


class FakeQueue:
    def __init__(self) -> None:
        self.enqueued: list[dict] = []

    def enqueue(self, func, *, kwargs, meta):
        self.enqueued.append({"func": func, "kwargs": kwargs, "meta": meta})
        return SimpleNamespace(id="job-1", get_status=lambda refresh=False: "queued")


@pytest.fixture()
def http_client() -> DummyHttpClient:
    return DummyHttpClient()


@pytest.fixture()
def app(http_client: DummyHttpClient):
    resolver = LocationResolver(geocoder=NominatimClient(http_client=http_client))
    app = create_app(listings=ITEMS, resolver=resolver)
    app.extensions["rq"]["queue"] = FakeQueue()
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "healthy"}


def test_location_defaults_without_browser_position(client):
    assert client.get("/api/location").get_json() == {"latitude": 51.505, "longitude": -0.09}
    assert client.get("/api/location?lat=abc&lng=1").get_json() == {"latitude": 51.505, "longitude": -0.09}


def test_location_uses_browser_position(client):
    response = client.get("/api/location?lat=40.7128&lng=-74.006")
    assert response.get_json() == {"latitude": 40.7128, "longitude": -74.006}


def test_place_search(client, http_client: DummyHttpClient):
    http_client.queue(
        GeocodingConfig().search_url,
        [{"display_name": "London, Greater London, England", "lat": "51.5074", "lon": "-0.1278"}],
    )

    assert client.get("/api/places/search?q=lo").get_json() == {"results": []}
    assert http_client.calls == []

    results = client.get("/api/places/search?q=london").get_json()["results"]
    assert results == [
        {"label": "London, Greater London, England", "latitude": 51.5074, "longitude": -0.1278}
    ]


def test_nearby_items(client):
    payload = client.get("/api/items/nearby?lat=51.505&lng=-0.09").get_json()

    assert payload["reference"] == {"latitude": 51.505, "longitude": -0.09}
    assert [item["id"] for item in payload["items"]] == ["1", "2"]
    assert payload["items"][0]["distance_km"] == pytest.approx(0.9, abs=0.1)

    limited = client.get("/api/items/nearby?limit=1").get_json()
    assert [item["id"] for item in limited["items"]] == ["1"]


@pytest.mark.parametrize("limit", ["-1", "many"])
def test_nearby_items_rejects_bad_limit(client, limit):
    response = client.get(f"/api/items/nearby?limit={limit}")
    assert response.status_code == 400


def test_create_location_label_enqueues_job(client, app):
    response = client.post("/api/location-labels", json={"latitude": 51.51, "longitude": -0.1})

    assert response.status_code == 202
    assert response.get_json()["job_id"] == "job-1"
    enqueued = app.extensions["rq"]["queue"].enqueued
    assert enqueued[0]["func"] == "swapmap.tasks.resolve_location_label"
    assert enqueued[0]["kwargs"] == {"latitude": 51.51, "longitude": -0.1}


def test_create_location_label_rejects_invalid_coordinates(client, app):
    response = client.post("/api/location-labels", json={"latitude": 200, "longitude": 0})

    assert response.status_code == 400
    assert "message" in response.get_json()["error"]
    assert app.extensions["rq"]["queue"].enqueued == []


def test_create_location_label_rejects_non_object_body(client, app):
    response = client.post("/api/location-labels", json=[51.5, -0.1])

    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["message"] == "Request body must be a JSON object"
    assert error["details"] == {"type": "list"}
    assert app.extensions["rq"]["queue"].enqueued == []


def test_location_label_status(client, monkeypatch):
    finished = SimpleNamespace(
        id="job-1",
        meta={"created_at": "2024-01-01T00:00:00"},
        is_finished=True,
        is_failed=False,
        result={"label": "London, England, United Kingdom"},
        get_status=lambda refresh=True: "finished",
    )

    class FakeJob:
        @staticmethod
        def fetch(job_id, connection):
            if job_id != "job-1":
                raise NoSuchJobError(job_id)
            return finished

    monkeypatch.setattr("swapmap.api.routes.Job", FakeJob)

    assert client.get("/api/location-labels/missing").status_code == 404
    payload = client.get("/api/location-labels/job-1").get_json()
    assert payload["status"] == "finished"
    assert payload["result"]["label"] == "London, England, United Kingdom"


def test_map_page(client):
    response = client.get("/map?lat=51.505&lng=-0.09&zoom=12")

    assert response.status_code == 200
    assert response.mimetype == "text/html"
    page = response.get_data(as_text=True)
    assert "Oak table" in page
    assert "Lamp" in page
    assert "Unplaced" not in page
    assert "], 12);" in page


def test_map_page_with_selection(client):
    page = client.get("/map?select=1").get_data(as_text=True)
    assert 'map.on("click"' in page
