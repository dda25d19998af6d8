from __future__ import annotations

import asyncio

from swapmap import MapPagePipeline
from swapmap.core import Coordinate, GeoItem

ITEMS = [GeoItem(identifier="1", name="Oak table", description="Solid oak", coordinate=Coordinate(51.51, -0.10))]


def test_render_releases_container():
    pipeline = MapPagePipeline.default()

    page = asyncio.run(pipeline.render(items=ITEMS, reference=Coordinate(51.505, -0.09)))

    assert "Oak table" in page
    assert "Your location" in page
    assert len(pipeline.registry) == 0
