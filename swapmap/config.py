"""Runtime configuration for the swapmap backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoragePaths:
    """Collection of filesystem paths used by the application."""

    listings: Path


@dataclass(frozen=True)
class GeocodingConfig:
    """Settings for the Nominatim-compatible geocoding service."""

    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "swapmap/1.0"
    timeout: int = 10  # seconds
    search_limit: int = 5
    min_query_length: int = 3
    language: str = "en"

    @property
    def search_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/search"

    @property
    def reverse_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/reverse"


@dataclass(frozen=True)
class MapConfig:
    """Defaults for rendered maps."""

    default_latitude: float = 51.505
    default_longitude: float = -0.09
    default_zoom: int = 13
    tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    attribution: str = (
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
    )
    max_zoom: int = 19
    min_container_height: int = 300  # pixels
    stabilize_delay: float = 0.5  # seconds
    stabilize_retries: int = 3


@dataclass(frozen=True)
class RankingConfig:
    default_limit: int = 10


@dataclass(frozen=True)
class QueueConfig:
    """Configuration for the Redis-backed task queue."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "swapmap"
    default_timeout: int = 60  # seconds


GEOCODING_CONFIG = GeocodingConfig(
    base_url=os.environ.get("SWAPMAP_GEOCODER_URL", GeocodingConfig.base_url),
    user_agent=os.environ.get("SWAPMAP_USER_AGENT", GeocodingConfig.user_agent),
    timeout=int(os.environ.get("SWAPMAP_GEOCODER_TIMEOUT", GeocodingConfig.timeout)),
)
MAP_CONFIG = MapConfig(
    tile_url=os.environ.get("SWAPMAP_TILE_URL", MapConfig.tile_url),
    default_zoom=int(os.environ.get("SWAPMAP_DEFAULT_ZOOM", MapConfig.default_zoom)),
)
RANKING_CONFIG = RankingConfig(
    default_limit=int(os.environ.get("SWAPMAP_NEARBY_LIMIT", RankingConfig.default_limit)),
)
STORAGE_PATHS = StoragePaths(
    listings=Path(os.environ.get("SWAPMAP_LISTINGS", "listings.json")),
)
QUEUE_CONFIG = QueueConfig(
    redis_url=os.environ.get("SWAPMAP_REDIS_URL", QueueConfig.redis_url),
    queue_name=os.environ.get("SWAPMAP_QUEUE", QueueConfig.queue_name),
    default_timeout=int(
        os.environ.get("SWAPMAP_QUEUE_TIMEOUT", QueueConfig.default_timeout)
    ),
)
