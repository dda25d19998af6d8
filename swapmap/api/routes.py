"""REST API and page blueprints."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, jsonify, request
from rq.exceptions import NoSuchJobError
from rq.job import Job

from ..core import Coordinate, InvalidCoordinateError

api_bp = Blueprint("api", __name__)
pages_bp = Blueprint("pages", __name__)


@api_bp.get("/location")
def current_location():
    """Resolve the browser-reported position, falling back to the default."""

    coordinate = _reference_point()
    return jsonify(coordinate.as_dict())


@api_bp.get("/places/search")
def search_places():
    query = request.args.get("q", "")
    matches = _services()["resolver"].search_place(query)
    return jsonify({"results": [match.as_dict() for match in matches]})


@api_bp.get("/items/nearby")
def nearby_items():
    limit = _limit()
    if limit is None:
        return jsonify({"error": "limit must be a non-negative integer"}), 400

    services = _services()
    reference = _reference_point()
    ranked = services["ranker"].rank(reference, services["listings"], limit)
    return jsonify(
        {
            "reference": reference.as_dict(),
            "items": [entry.as_dict() for entry in ranked],
        }
    )


@api_bp.post("/location-labels")
def create_location_label():
    """Queue a reverse geocoding lookup for a listing position."""

    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidCoordinateError(
            "Request body must be a JSON object",
            details={"type": type(payload).__name__},
        )
    coordinate = Coordinate.parse(payload.get("latitude"), payload.get("longitude"))

    created_at = datetime.now(timezone.utc).isoformat()
    job = _queue().enqueue(
        "swapmap.tasks.resolve_location_label",
        kwargs=coordinate.as_dict(),
        meta={"created_at": created_at},
    )

    response = {
        "job_id": job.id,
        "status": job.get_status(refresh=False),
        "created_at": created_at,
    }
    return jsonify(response), 202


@api_bp.get("/location-labels/<job_id>")
def location_label_status(job_id: str):
    try:
        job = Job.fetch(job_id, connection=_connection())
    except NoSuchJobError:
        return jsonify({"error": "Job not found"}), 404

    payload: dict[str, object] = {
        "job_id": job.id,
        "status": job.get_status(refresh=True),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_finished:
        payload["result"] = job.result or {}
        return jsonify(payload), 200
    if job.is_failed:
        payload["error"] = "Location lookup failed"
        return jsonify(payload), 500
    return jsonify(payload), 200


@pages_bp.get("/map")
def map_page():
    services = _services()
    zoom = request.args.get("zoom", type=int)
    selectable = request.args.get("select") in {"1", "true", "yes"}

    page = asyncio.run(
        services["map_pipeline"].render(
            items=services["listings"],
            reference=_reference_point(),
            zoom=zoom,
            selectable=selectable,
        )
    )
    return Response(page, mimetype="text/html")


def _reference_point() -> Coordinate:
    def browser_position():
        if "lat" not in request.args or "lng" not in request.args:
            return None
        return Coordinate.parse(request.args["lat"], request.args["lng"])

    return _services()["resolver"].resolve_current_location(browser_position)


def _limit() -> int | None:
    raw = request.args.get("limit")
    if raw in (None, ""):
        return current_app.extensions["swapmap"]["ranker"].default_limit
    try:
        limit = int(raw)
    except ValueError:
        return None
    return limit if limit >= 0 else None


def _services() -> dict:
    return current_app.extensions["swapmap"]


def _queue():
    return current_app.extensions["rq"]["queue"]


def _connection():
    return current_app.extensions["rq"]["connection"]
