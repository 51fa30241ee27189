"""
Moto Trip Planner – main application entry point

* Flask app serving the planner page and its JSON API under `/travel`.
* Plan generation runs on asyncio inside each request; nothing is shared
  between requests apart from the autocomplete client.
"""

import os
import logging

from flask import Flask, redirect, url_for
from flask_cors import CORS
from dotenv import load_dotenv

from moto_trip.api.config import get_port
from moto_trip.routes.travel import create_travel_blueprint

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

base_dir = os.path.dirname(os.path.abspath(__file__))


def create_app(suggestion_client=None, orchestrator_factory=None):
    """Build the Flask application.

    Collaborators can be injected for tests; by default they are created
    from the environment.
    """
    app = Flask(__name__)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=86400,
    )

    # CORS for local dev / cross‑origin front‑end requests
    CORS(app, origins="*", supports_credentials=True)

    app.register_blueprint(create_travel_blueprint(
        base_dir,
        suggestion_client=suggestion_client,
        orchestrator_factory=orchestrator_factory,
    ))

    @app.route("/")
    def root():
        return redirect(url_for("travel.index"))

    @app.route("/debug")
    def debug():
        """Simple JSON health endpoint."""
        return {
            "status": "ok",
            "endpoints": {
                "planner": "/travel/",
                "plan": "/travel/api/plan",
                "suggestions": "/travel/api/suggestions",
            },
        }

    return app


app = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python -m moto_trip.main` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting trip planner on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=False)

__all__ = ["app", "create_app"]
