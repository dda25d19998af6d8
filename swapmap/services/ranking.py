"""Rank listings by distance from a reference point."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..config import RANKING_CONFIG
from ..core import Coordinate, GeoItem, RankedItem
from ..utils import haversine_distance


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometers."""

    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


@dataclass(slots=True)
class ProximityRanker:
    """Sort geotagged items by haversine distance and keep the closest."""

    default_limit: int = RANKING_CONFIG.default_limit

    def rank(
        self,
        reference: Coordinate,
        items: Iterable[GeoItem],
        limit: Optional[int] = None,
    ) -> list[RankedItem]:
        limit = self.default_limit if limit is None else limit
        if limit < 0:
            raise ValueError("limit must not be negative")

        ranked = [
            RankedItem(item=item, distance_km=distance_between(reference, item.coordinate))
            for item in items
            if item.coordinate is not None
        ]
        # sorted() is stable, so equal distances keep their input order.
        ranked = sorted(ranked, key=lambda entry: entry.distance_km)
        return ranked[:limit]
