"""Map widget lifecycle management."""

from .container import MapContainer
from .leaflet import LeafletFactory, LeafletWidget
from .lifecycle import MapHandle, MapState, MapView
from .registry import DEFAULT_REGISTRY, ContainerRegistry
from .stabilizer import SizeStabilizer

__all__ = [
    "MapContainer",
    "LeafletFactory",
    "LeafletWidget",
    "MapHandle",
    "MapState",
    "MapView",
    "ContainerRegistry",
    "DEFAULT_REGISTRY",
    "SizeStabilizer",
]
