"""Processing pipelines."""

from .map_page import MapPagePipeline

__all__ = ["MapPagePipeline"]
