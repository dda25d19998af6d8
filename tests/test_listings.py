from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from swapmap.core import Coordinate, ListingError
from swapmap.services import ListingLoader


@pytest.fixture()
def listings_json(tmp_path: Path) -> Path:
    path = tmp_path / "listings.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "name": "Oak table",
                    "description": "Solid oak, a few scratches",
                    "imageUrl": "/uploads/table.jpg",
                    "condition": "Good",
                    "latitude": 51.51,
                    "longitude": -0.10,
                },
                {"id": "2", "name": "Lamp", "description": "", "image": "/uploads/lamp.jpg", "latitude": "48.85", "longitude": "2.35"},
                {"id": "3", "name": "Mystery box", "description": "No location", "latitude": None, "longitude": None},
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_load_json_listings(listings_json: Path):
    items = ListingLoader().load(listings_json)

    assert [item.identifier for item in items] == ["1", "2", "3"]
    assert items[0].coordinate == Coordinate(51.51, -0.10)
    assert items[0].image == "/uploads/table.jpg"
    assert items[0].condition == "Good"
    assert items[1].image == "/uploads/lamp.jpg"
    assert items[1].coordinate == Coordinate(48.85, 2.35)
    assert items[2].coordinate is None


def test_load_csv_listings(tmp_path: Path):
    path = tmp_path / "listings.csv"
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=["id", "name", "description", "latitude", "longitude"])
        writer.writeheader()
        writer.writerow({"id": "7", "name": "Bike", "description": "Needs a tyre", "latitude": "51.5", "longitude": "-0.12"})
        writer.writerow({"id": "8", "name": "Chair", "description": "", "latitude": "abc", "longitude": ""})

    items = ListingLoader(encoding="auto").load(path)

    assert [item.name for item in items] == ["Bike", "Chair"]
    assert items[0].coordinate == Coordinate(51.5, -0.12)
    assert items[1].coordinate is None


def test_csv_missing_columns_raises(tmp_path: Path):
    path = tmp_path / "listings.csv"
    path.write_text("id,name\n1,Bike\n", encoding="utf-8")

    with pytest.raises(ListingError) as excinfo:
        ListingLoader().load(path)

    assert excinfo.value.details["missing"] == ["latitude", "longitude"]


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(ListingError):
        ListingLoader().load(tmp_path / "absent.json")


def test_json_must_be_an_array(tmp_path: Path):
    path = tmp_path / "listings.json"
    path.write_text('{"id": "1"}', encoding="utf-8")

    with pytest.raises(ListingError):
        ListingLoader().load(path)
