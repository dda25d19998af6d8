"""Build the HTML map page for a set of listings."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..config import MAP_CONFIG
from ..core import Coordinate, GeoItem
from ..core.exceptions import MapLifecycleError
from ..mapview import ContainerRegistry, LeafletFactory, MapContainer, MapState, MapView

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapPagePipeline:
    """Mounts a Leaflet map, renders it and tears it down again."""

    factory: LeafletFactory = field(default_factory=LeafletFactory)
    registry: ContainerRegistry = field(default_factory=ContainerRegistry)

    async def render(
        self,
        *,
        items: Sequence[GeoItem],
        reference: Coordinate,
        zoom: Optional[int] = None,
        selectable: bool = False,
    ) -> str:
        container = MapContainer(
            element_id=f"map-{uuid.uuid4().hex[:8]}",
            style={"width": "100%", "height": f"{MAP_CONFIG.min_container_height}px"},
        )
        view = MapView(
            self.factory,
            registry=self.registry,
            items=items,
            center=reference,
            zoom=zoom,
            reference=None if selectable else reference,
            on_location_select=_log_selection if selectable else None,
        )

        await view.mount(container)
        try:
            if view.state is not MapState.READY or view.handle is None:
                raise MapLifecycleError(
                    "Map could not be initialized", details={"container": container.element_id}
                )
            page = view.handle.widget.render()
        finally:
            await view.unmount()

        logger.info("Rendered map with %d listings", len(items))
        return page

    @classmethod
    def default(cls) -> "MapPagePipeline":
        return cls()


def _log_selection(coordinate: Coordinate) -> None:
    logger.debug("Location selected at %s", coordinate.as_tuple())
