"""Entry point for the swapmap Flask application."""

from __future__ import annotations

import logging
import os

from swapmap import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()


def _is_production() -> bool:
    """Return ``True`` when the app should run in production mode."""

    return os.environ.get("FLASK_ENV", "production") == "production"


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    debug = not _is_production()
    app.run(host="0.0.0.0", port=port, debug=debug, use_reloader=debug)
