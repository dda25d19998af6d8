"""Lifecycle management for map widgets.

A :class:`MapView` owns at most one live :class:`MapHandle`. Mounting moves the
view from ``UNMOUNTED`` through ``INITIALIZING`` to ``READY``; unmounting (or
replacing the widget) destroys the handle and returns to ``UNMOUNTED``.

Initialization suspends while the mapping library loads. Every attempt is
numbered, and an attempt that resumes after a newer one has started gives up
without touching the container, so two widgets never attach to the same
element. Ownership of containers is tracked in a :class:`ContainerRegistry`.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from functools import partial
from typing import Callable, Iterable, Optional

from ..config import MAP_CONFIG, MapConfig
from ..core import Coordinate, GeoItem
from .container import MapContainer
from .popups import item_popup
from .registry import DEFAULT_REGISTRY, ContainerRegistry
from .stabilizer import SizeStabilizer, Sleep
from .widget import MapWidget, WidgetFactory

logger = logging.getLogger(__name__)

LocationSelectCallback = Callable[[Coordinate], None]

_UNSET = object()


class MapState(enum.Enum):
    UNMOUNTED = "unmounted"
    INITIALIZING = "initializing"
    READY = "ready"


class MapHandle:
    """One live widget bound to one container."""

    def __init__(
        self,
        container: MapContainer,
        widget: MapWidget,
        registry: ContainerRegistry,
        *,
        attempt: int,
        on_destroy: Optional[Callable[["MapHandle"], None]] = None,
    ):
        self.container = container
        self.widget = widget
        self.registry = registry
        self.attempt = attempt
        self.on_destroy = on_destroy
        self.markers: list[object] = []
        self.selection_marker: object | None = None
        self.stabilizer: SizeStabilizer | None = None
        self.destroyed = False

    def destroy(self) -> None:
        """Remove the widget and release the container. Safe to call twice."""

        if self.destroyed:
            return
        self.destroyed = True

        if self.stabilizer is not None:
            self.stabilizer.cancel()
        try:
            self.widget.remove()
        except Exception as exc:
            logger.error("Error removing map from %s: %s", self.container.element_id, exc)
        finally:
            self.markers.clear()
            self.selection_marker = None
            self.registry.release(self.container, self)

        if self.on_destroy is not None:
            self.on_destroy(self)


class MapView:
    """Stateful wrapper that owns a map widget's lifecycle."""

    def __init__(
        self,
        factory: WidgetFactory,
        *,
        registry: Optional[ContainerRegistry] = None,
        items: Iterable[GeoItem] = (),
        center: Optional[Coordinate] = None,
        zoom: Optional[int] = None,
        reference: Optional[Coordinate] = None,
        on_location_select: Optional[LocationSelectCallback] = None,
        config: MapConfig = MAP_CONFIG,
        sleep: Sleep = asyncio.sleep,
    ):
        self.factory = factory
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.config = config
        self.items = list(items)
        self.center = center or Coordinate(config.default_latitude, config.default_longitude)
        self.zoom = config.default_zoom if zoom is None else zoom
        self.reference = reference
        self.on_location_select = on_location_select
        self.sleep = sleep

        self.container: Optional[MapContainer] = None
        self.attempts = 0
        self.initializing = False
        self._state = MapState.UNMOUNTED
        self._handle: Optional[MapHandle] = None

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def handle(self) -> Optional[MapHandle]:
        return self._handle

    async def mount(self, container: MapContainer) -> None:
        self.container = container
        await self._initialize()

    async def update(
        self,
        *,
        items=_UNSET,
        center=_UNSET,
        zoom=_UNSET,
        container=_UNSET,
    ) -> None:
        """Apply new inputs, panning or rebuilding the widget as needed."""

        view_changed = False
        if center is not _UNSET:
            view_changed = view_changed or center != self.center
            self.center = center or Coordinate(
                self.config.default_latitude, self.config.default_longitude
            )
        if zoom is not _UNSET:
            view_changed = view_changed or zoom != self.zoom
            self.zoom = self.config.default_zoom if zoom is None else zoom
        items_changed = items is not _UNSET
        if items_changed:
            self.items = list(items)

        if self.container is None and container is _UNSET:
            # Unmounted views keep the new inputs for the next mount.
            return

        if container is not _UNSET and container is not self.container:
            self.container = container
            if container is None:
                await self.unmount()
            else:
                await self._initialize()
            return

        handle = self._handle
        if self._state is not MapState.READY or handle is None:
            # An in-flight attempt reads the new inputs when it resumes.
            if self.container is not None and not self.initializing:
                await self._initialize()
            return

        if view_changed:
            try:
                handle.widget.set_view(self.center, self.zoom)
            except Exception as exc:
                logger.error("Error updating existing map, re-initializing: %s", exc)
                await self._initialize()
                return
        if items_changed:
            self._replace_markers(handle)

    async def unmount(self) -> None:
        self.attempts += 1
        self.initializing = False
        self._teardown()
        self.container = None
        self._state = MapState.UNMOUNTED

    async def _initialize(self) -> None:
        container = self.container
        if container is None:
            logger.warning("Map container not available")
            return

        self.attempts += 1
        attempt = self.attempts
        self.initializing = True
        self._state = MapState.INITIALIZING
        logger.info("Starting map initialization (attempt %d)", attempt)

        self._teardown()
        if not container.has_layout():
            logger.warning(
                "Invalid container dimensions %sx%s; forcing minimum height",
                container.width,
                container.height,
            )
            container.force_min_size(self.config.min_container_height)

        handle: Optional[MapHandle] = None
        try:
            await self.factory.load()
            if attempt != self.attempts:
                logger.info("Newer map initialization started; abandoning attempt %d", attempt)
                return

            previous = self.registry.owner(container)
            if previous is not None:
                logger.warning("Container %s already has a live map; removing it", container.element_id)
                previous.destroy()

            widget = self.factory.create(container, self.center, self.zoom)
            handle = MapHandle(
                container,
                widget,
                self.registry,
                attempt=attempt,
                on_destroy=self._handle_destroyed,
            )
            self.registry.claim(container, handle)
            self._handle = handle

            widget.add_tile_layer(
                self.config.tile_url,
                attribution=self.config.attribution,
                max_zoom=self.config.max_zoom,
            )
            self._place_markers(handle)
            if self.on_location_select is not None:
                widget.on_click(partial(self._select_location, handle))

            self._state = MapState.READY
            handle.stabilizer = SizeStabilizer(
                widget,
                partial(self._is_current, handle),
                delay=self.config.stabilize_delay,
                max_retries=self.config.stabilize_retries,
                sleep=self.sleep,
            ).start()
            logger.info("Map initialization completed (attempt %d)", attempt)
        except Exception as exc:
            logger.error("Error creating map instance (attempt %d): %s", attempt, exc)
            if handle is not None:
                handle.destroy()
            if attempt == self.attempts:
                self._state = MapState.UNMOUNTED
        finally:
            if attempt == self.attempts:
                self.initializing = False

    def _place_markers(self, handle: MapHandle) -> None:
        widget = handle.widget
        placed = 0
        for item in self.items:
            if item.coordinate is None:
                continue
            handle.markers.append(widget.add_marker(item.coordinate, popup=item_popup(item)))
            placed += 1

        if self.reference is not None:
            handle.markers.append(
                widget.add_marker(self.reference, popup="Your location", kind="reference")
            )
        elif not placed and self.on_location_select is None:
            handle.markers.append(widget.add_marker(self.center, kind="center"))

    def _replace_markers(self, handle: MapHandle) -> None:
        for marker in handle.markers:
            handle.widget.remove_marker(marker)
        handle.markers.clear()
        self._place_markers(handle)

    def _select_location(self, handle: MapHandle, coordinate: Coordinate) -> None:
        callback = self.on_location_select
        if callback is None or not self._is_current(handle):
            return
        callback(coordinate)

        if handle.selection_marker is not None:
            handle.widget.remove_marker(handle.selection_marker)
        handle.selection_marker = handle.widget.add_marker(coordinate, kind="selection")

    def _is_current(self, handle: MapHandle) -> bool:
        return self._handle is handle and not handle.destroyed

    def _teardown(self) -> None:
        handle = self._handle
        if handle is None:
            return
        logger.info("Cleaning up existing map instance")
        handle.destroy()

    def _handle_destroyed(self, handle: MapHandle) -> None:
        if self._handle is handle:
            self._handle = None
            if self._state is MapState.READY:
                self._state = MapState.UNMOUNTED
