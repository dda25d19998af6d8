"""RQ task definitions for asynchronous lookups."""

from __future__ import annotations

from rq import get_current_job

from .core import Coordinate
from .services import LocationResolver


def resolve_location_label(*, latitude: float, longitude: float) -> dict:
    """Reverse geocode a listing position into a short location label."""

    job = get_current_job()
    coordinate = Coordinate.parse(latitude, longitude)
    label = LocationResolver().describe_location(coordinate)

    if job:
        job.meta["label"] = label
        job.save_meta()

    return {"label": label, **coordinate.as_dict()}
