"""Last-writer-wins place search for interactive input fields."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from ..core import PlaceMatch
from .location import LocationResolver

logger = logging.getLogger(__name__)


class PlaceSearchCoordinator:
    """Run place searches so that only the newest query per field wins.

    Each field keeps a generation number. A search that finishes after a newer
    one has started for the same field is discarded, and its pending task is
    cancelled as soon as the newer search begins.
    """

    def __init__(self, resolver: LocationResolver):
        self.resolver = resolver
        self._generations: Dict[str, int] = {}
        self._pending: Dict[str, asyncio.Task] = {}
        self._results: Dict[str, list[PlaceMatch]] = {}

    async def search(self, field: str, query: str) -> Optional[list[PlaceMatch]]:
        """Search for ``query`` on behalf of ``field``.

        Returns the matches, or ``None`` when a newer search for the same
        field superseded this one.
        """

        generation = self._generations.get(field, 0) + 1
        self._generations[field] = generation

        previous = self._pending.pop(field, None)
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.ensure_future(asyncio.to_thread(self.resolver.search_place, query))
        self._pending[field] = task
        try:
            matches = await task
        except asyncio.CancelledError:
            if self._generations.get(field) != generation:
                logger.debug("Search %r for field %s superseded", query, field)
                return None
            raise
        finally:
            if self._pending.get(field) is task:
                del self._pending[field]

        if self._generations.get(field) != generation:
            logger.debug("Discarding stale results for %r on field %s", query, field)
            return None

        self._results[field] = matches
        return matches

    def results(self, field: str) -> list[PlaceMatch]:
        """Return the latest applied results for ``field``."""

        return list(self._results.get(field, []))

    def close(self) -> None:
        """Cancel every pending search and forget their results."""

        for field, task in list(self._pending.items()):
            self._generations[field] = self._generations.get(field, 0) + 1
            task.cancel()
        self._pending.clear()
