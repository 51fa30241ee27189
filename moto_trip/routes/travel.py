# moto_trip/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging
import os

from flask import Blueprint, Response, jsonify, render_template, request

from moto_trip.api.config import get_google_maps_config
from moto_trip.api.errors import FormatError, TripPlannerError, ValidationError
from moto_trip.api.geocoding import SuggestionClient
from moto_trip.api.models import TripPlan, TripRequest
from moto_trip.api.services.export_service import ExportService
from moto_trip.api.services.map_service import MapService
from moto_trip.api.services.trip_service import PlanRequestOrchestrator, TripService

logger = logging.getLogger(__name__)


def _plan_from_body() -> TripPlan:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a trip plan JSON object.")
    try:
        return TripPlan.from_dict(data.get("plan", data))
    except FormatError as e:
        raise ValidationError(e.message) from e


def create_travel_blueprint(base_dir, suggestion_client=None, orchestrator_factory=None):
    """Create and configure the travel blueprint.

    Args:
        base_dir: Absolute path to the application directory
        suggestion_client: Autocomplete client; one is created when omitted
        orchestrator_factory: Callable returning a PlanRequestOrchestrator

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint(
        "travel",
        __name__,
        template_folder=os.path.join(base_dir, 'templates'),
        url_prefix="/travel"
    )

    suggestions = suggestion_client or SuggestionClient()
    make_orchestrator = orchestrator_factory or PlanRequestOrchestrator

    @travel_bp.errorhandler(TripPlannerError)
    def handle_planner_error(error):
        logger.warning(f"{type(error).__name__} on {request.path}: {error.message}")
        return jsonify({"error": error.message}), error.status_code

    @travel_bp.route("/")
    def index():
        """Main trip planner page."""
        return render_template("planner.html")

    @travel_bp.route("/api/config")
    def api_config():
        """Return Google Maps configuration for frontend."""
        config = get_google_maps_config()

        if config.get("api_key"):
            return jsonify({
                "auth_type": "api_key",
                "google_maps_api_key": config["api_key"],
            })
        else:
            return jsonify({
                "error": "No Google Maps API key configured"
            }), 500

    @travel_bp.route("/api/plan", methods=["POST"])
    def api_plan():
        """Generate a new trip plan."""
        trip_request = TripRequest.from_dict(request.get_json(silent=True))
        plan = TripService.plan_trip(trip_request, make_orchestrator())
        return jsonify(plan.to_dict())

    @travel_bp.route("/api/plan/reroute", methods=["POST"])
    def api_reroute():
        """Re-plan the last trip via a stop picked on the map."""
        data = request.get_json(silent=True) or {}
        plan = TripService.reroute_with_stop(data.get("stop", ""), make_orchestrator())
        return jsonify(plan.to_dict())

    @travel_bp.route("/api/suggestions")
    def api_suggestions():
        """Autocomplete suggestions for a partial address."""
        result = suggestions.fetch_suggestions(request.args.get("q", ""))
        return jsonify(result.to_dict())

    @travel_bp.route("/api/export/csv", methods=["POST"])
    def api_export_csv():
        plan = _plan_from_body()
        filename = ExportService.csv_filename(plan)
        return Response(
            ExportService.plan_to_csv(plan),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @travel_bp.route("/api/export/maps-url", methods=["POST"])
    def api_export_maps_url():
        plan = _plan_from_body()
        return jsonify({"url": ExportService.build_google_maps_url(plan)})

    @travel_bp.route("/api/map", methods=["POST"])
    def api_map():
        """Polyline, markers and bounds for drawing a plan."""
        plan = _plan_from_body()
        return jsonify(MapService.build_map_payload(plan))

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ['create_travel_blueprint']
