"""Interfaces implemented by map widget backends."""

from __future__ import annotations

from typing import Callable, Protocol

from ..core import Coordinate
from .container import MapContainer

ClickHandler = Callable[[Coordinate], None]


class MapWidget(Protocol):
    """A live interactive map bound to one container."""

    def set_view(self, center: Coordinate, zoom: int) -> None: ...

    def add_tile_layer(self, url: str, *, attribution: str, max_zoom: int) -> None: ...

    def add_marker(self, coordinate: Coordinate, *, popup: str | None = None, kind: str = "item") -> object: ...

    def remove_marker(self, marker: object) -> None: ...

    def on_click(self, handler: ClickHandler) -> None: ...

    def invalidate_size(self) -> None: ...

    def remove(self) -> None: ...


class WidgetFactory(Protocol):
    """Loads the mapping library and creates widgets."""

    async def load(self) -> None: ...

    def create(self, container: MapContainer, center: Coordinate, zoom: int) -> MapWidget: ...
