"""Top-level package for the swapmap backend."""

from .api.app_factory import create_app
from .pipelines.map_page import MapPagePipeline

__all__ = ["create_app", "MapPagePipeline"]
