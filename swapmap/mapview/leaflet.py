"""Leaflet-backed widget that renders a standalone HTML map page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Optional

from ..core import Coordinate
from ..core.exceptions import MapLifecycleError
from .container import MapContainer
from .templates import environment
from .widget import ClickHandler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TileLayer:
    url: str
    attribution: str
    max_zoom: int


@dataclass(slots=True)
class LeafletMarker:
    marker_id: int
    coordinate: Coordinate
    popup: Optional[str] = None
    kind: str = "item"

    def as_dict(self) -> dict:
        return {
            "id": self.marker_id,
            "lat": self.coordinate.latitude,
            "lon": self.coordinate.longitude,
            "popup": str(self.popup) if self.popup else None,
            "kind": self.kind,
        }


@dataclass
class LeafletWidget:
    """In-memory model of a Leaflet map; :meth:`render` emits the page."""

    container: MapContainer
    center: Coordinate
    zoom: int
    tile_layers: list[TileLayer] = field(default_factory=list)
    markers: list[LeafletMarker] = field(default_factory=list)
    click_handlers: list[ClickHandler] = field(default_factory=list)
    size_invalidations: int = 0
    removed: bool = False
    _ids: count = field(default_factory=lambda: count(1), repr=False)

    def set_view(self, center: Coordinate, zoom: int) -> None:
        self._ensure_live()
        self.center = center
        self.zoom = zoom

    def add_tile_layer(self, url: str, *, attribution: str, max_zoom: int) -> None:
        self._ensure_live()
        self.tile_layers.append(TileLayer(url=url, attribution=attribution, max_zoom=max_zoom))

    def add_marker(self, coordinate: Coordinate, *, popup: str | None = None, kind: str = "item") -> LeafletMarker:
        self._ensure_live()
        marker = LeafletMarker(next(self._ids), coordinate, popup, kind)
        self.markers.append(marker)
        return marker

    def remove_marker(self, marker: object) -> None:
        if marker in self.markers:
            self.markers.remove(marker)  # type: ignore[arg-type]

    def on_click(self, handler: ClickHandler) -> None:
        self.click_handlers.append(handler)

    def click(self, latitude: float, longitude: float) -> None:
        """Dispatch a click at the given position to the registered handlers."""

        self._ensure_live()
        coordinate = Coordinate(latitude, longitude)
        for handler in list(self.click_handlers):
            handler(coordinate)

    def invalidate_size(self) -> None:
        self._ensure_live()
        self.size_invalidations += 1

    def remove(self) -> None:
        if self.removed:
            raise MapLifecycleError(
                "Map already removed", details={"container": self.container.element_id}
            )
        self.removed = True
        self.markers.clear()
        self.click_handlers.clear()

    def render(self) -> str:
        self._ensure_live()
        template = environment().get_template("map.html")
        return template.render(
            element_id=self.container.element_id,
            container_css=self.container.css(),
            min_height=max(int(self.container.height), 0),
            center=self.center,
            zoom=self.zoom,
            tile_layers=self.tile_layers,
            markers=[marker.as_dict() for marker in self.markers],
            selectable=bool(self.click_handlers),
        )

    def _ensure_live(self) -> None:
        if self.removed:
            raise MapLifecycleError(
                "Map has been removed", details={"container": self.container.element_id}
            )


class LeafletFactory:
    """Creates :class:`LeafletWidget` instances once the templates are loaded."""

    def __init__(self) -> None:
        self.loaded = False

    async def load(self) -> None:
        if not self.loaded:
            environment().get_template("map.html")
            self.loaded = True
            logger.debug("Leaflet templates loaded")

    def create(self, container: MapContainer, center: Coordinate, zoom: int) -> LeafletWidget:
        if not self.loaded:
            raise MapLifecycleError("Mapping library not loaded")
        return LeafletWidget(container=container, center=center, zoom=zoom)
