"""Domain models used throughout swapmap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from ..utils.formatting import format_distance
from ..utils.geo import is_valid_coordinate, parse_degrees
from .exceptions import InvalidCoordinateError


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A validated latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not is_valid_coordinate(self.latitude, self.longitude):
            raise InvalidCoordinateError(
                "Coordinate is not finite or out of range",
                details={"latitude": self.latitude, "longitude": self.longitude},
            )

    @classmethod
    def parse(cls, latitude: object, longitude: object) -> "Coordinate":
        """Build a coordinate from numbers or numeric strings."""

        lat = parse_degrees(latitude)
        lon = parse_degrees(longitude)
        if lat is None or lon is None:
            raise InvalidCoordinateError(
                "Coordinate is missing or not numeric",
                details={"latitude": latitude, "longitude": longitude},
            )
        return cls(lat, lon)

    @classmethod
    def try_parse(cls, latitude: object, longitude: object) -> "Coordinate | None":
        try:
            return cls.parse(latitude, longitude)
        except InvalidCoordinateError:
            return None

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class GeoItem:
    """A listing as supplied by the listing store."""

    identifier: str
    name: str
    description: str
    coordinate: Coordinate | None
    image: str | None = None
    condition: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "GeoItem":
        def text(key: str) -> str | None:
            value = record.get(key)
            if value in (None, ""):
                return None
            return str(value).strip() or None

        return cls(
            identifier=text("id") or "",
            name=text("name") or "",
            description=text("description") or "",
            coordinate=Coordinate.try_parse(record.get("latitude"), record.get("longitude")),
            image=text("imageUrl") or text("image"),
            condition=text("condition"),
        )

    def as_dict(self) -> dict:
        payload: dict[str, object] = {
            "id": self.identifier,
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image,
            "condition": self.condition,
        }
        if self.coordinate is not None:
            payload.update(self.coordinate.as_dict())
        return payload


@dataclass(frozen=True, slots=True)
class RankedItem:
    """A :class:`GeoItem` with its distance from a reference point."""

    item: GeoItem
    distance_km: float

    def as_dict(self) -> dict:
        payload = self.item.as_dict()
        payload["distance_km"] = round(self.distance_km, 3)
        payload["distance"] = format_distance(self.distance_km)
        return payload


@dataclass(frozen=True, slots=True)
class PlaceMatch:
    """A single geocoding search result."""

    label: str
    coordinate: Coordinate

    def as_dict(self) -> dict:
        return {"label": self.label, **self.coordinate.as_dict()}
