"""Track which map handle owns each container."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional

from ..core.exceptions import MapLifecycleError
from .container import MapContainer

if TYPE_CHECKING:
    from .lifecycle import MapHandle

logger = logging.getLogger(__name__)


class ContainerRegistry:
    """Maps container ids to the single live :class:`MapHandle` attached to each.

    A handle must be released before another one can claim the same container.
    """

    def __init__(self) -> None:
        self._owners: Dict[str, "MapHandle"] = {}

    def owner(self, container: MapContainer) -> Optional["MapHandle"]:
        handle = self._owners.get(container.element_id)
        if handle is not None and handle.destroyed:
            del self._owners[container.element_id]
            return None
        return handle

    def claim(self, container: MapContainer, handle: "MapHandle") -> None:
        current = self.owner(container)
        if current is not None and current is not handle:
            raise MapLifecycleError(
                "Container already has a live map",
                details={"container": container.element_id},
            )
        self._owners[container.element_id] = handle

    def release(self, container: MapContainer, handle: "MapHandle") -> None:
        if self._owners.get(container.element_id) is handle:
            del self._owners[container.element_id]
            logger.debug("Released container %s", container.element_id)

    def __len__(self) -> int:
        return sum(1 for handle in self._owners.values() if not handle.destroyed)


# Views built without an explicit registry share this one, so every default
# view sees every other view's containers.
DEFAULT_REGISTRY = ContainerRegistry()
