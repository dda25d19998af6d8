"""Flask application factory."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from flask import Flask, jsonify
from flask_cors import CORS
from redis import Redis
from rq import Queue

from ..config import QUEUE_CONFIG, STORAGE_PATHS
from ..core import GeoItem
from ..core.exceptions import InvalidCoordinateError, ListingError
from ..pipelines import MapPagePipeline
from ..services import ListingLoader, LocationResolver, ProximityRanker
from .routes import api_bp, pages_bp

logger = logging.getLogger(__name__)


def create_app(
    *,
    listings: Optional[Sequence[GeoItem]] = None,
    resolver: Optional[LocationResolver] = None,
) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)

    CORS(app)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(pages_bp)

    redis_connection = Redis.from_url(QUEUE_CONFIG.redis_url)
    queue = Queue(
        name=QUEUE_CONFIG.queue_name,
        connection=redis_connection,
        default_timeout=QUEUE_CONFIG.default_timeout,
    )
    app.extensions["rq"] = {"queue": queue, "connection": redis_connection}
    app.extensions["swapmap"] = {
        "listings": list(listings) if listings is not None else _load_listings(),
        "resolver": resolver or LocationResolver(),
        "ranker": ProximityRanker(),
        "map_pipeline": MapPagePipeline.default(),
    }

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.errorhandler(InvalidCoordinateError)
    def invalid_coordinate(error: InvalidCoordinateError):
        return jsonify({"error": error.as_dict()}), 400

    logger.info("Flask application initialised")
    return app


def _load_listings() -> list[GeoItem]:
    try:
        items = ListingLoader(encoding="auto").load(STORAGE_PATHS.listings)
    except ListingError as exc:
        logger.warning("Starting without listings: %s", exc)
        return []
    logger.info("Loaded %d listings from %s", len(items), STORAGE_PATHS.listings)
    return items
