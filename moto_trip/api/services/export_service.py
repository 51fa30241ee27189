# moto_trip/api/services/export_service.py
"""Service layer for exporting trip plans."""

import csv
import io
import logging
import re
from typing import Iterator, List
from urllib.parse import quote

from moto_trip.api.errors import ExportError
from moto_trip.api.models import TripPlan

logger = logging.getLogger(__name__)

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/?api=1"

CSV_HEADER = ["Category", "Name/Title", "Location/Details", "Description", "Severity/Type"]


class ExportService:
    """Turns a plan into a Google Maps link or a CSV document."""

    @staticmethod
    def build_google_maps_url(plan: TripPlan) -> str:
        """Build a driving directions URL for the plan.

        The first and last route path points give more accurate endpoints than
        the waypoint names, so they are used when present.

        Raises:
            ExportError: If the plan has no waypoints
        """
        if not plan.waypoints:
            raise ExportError("Not enough waypoints to generate a map link.")

        if plan.route_path:
            first, last = plan.route_path[0], plan.route_path[-1]
            origin = f"{first.lat},{first.lng}"
            destination = f"{last.lat},{last.lng}"
        else:
            origin = quote(plan.waypoints[0].location, safe="")
            destination = quote(plan.waypoints[-1].location, safe="")

        url = f"{GOOGLE_MAPS_DIRECTIONS_URL}&origin={origin}&destination={destination}"

        stops = "|".join(quote(wp.location, safe="") for wp in plan.waypoints[1:-1])
        if stops:
            url += f"&waypoints={stops}"

        return url + "&travelmode=driving"

    @staticmethod
    def iter_csv_rows(plan: TripPlan) -> Iterator[List[str]]:
        """Yield one row per plan entry, section by section."""
        for wp in plan.waypoints:
            yield ["Waypoint", wp.location, "", wp.description, ""]
        for fs in plan.fuel_stops:
            yield ["Fuel Stop", fs.name, fs.location, "", fs.type]
        for poi in plan.points_of_interest:
            yield ["Point of Interest", poi.name, poi.location, poi.description, ""]
        for w in plan.weather_points:
            yield ["Weather", w.location, w.temperature, w.forecast, ""]
        for ta in plan.traffic_advisories:
            yield ["Traffic Advisory", ta.location, "", ta.advisory, ""]
        for adv in plan.vehicle_advisories:
            yield ["Advisory", adv.title, adv.details, "", adv.severity]

    @staticmethod
    def plan_to_csv(plan: TripPlan) -> str:
        """Render the plan as a CSV document."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        count = 0
        for row in ExportService.iter_csv_rows(plan):
            writer.writerow(row)
            count += 1
        logger.debug(f"Exported {count} rows for '{plan.trip_title}'")
        return buffer.getvalue()

    @staticmethod
    def csv_filename(plan: TripPlan) -> str:
        """Download file name derived from the trip title."""
        stem = re.sub(r"[^a-z0-9]", "_", plan.trip_title, flags=re.IGNORECASE).lower()
        return f"{stem}_trip_plan.csv"


__all__ = ['ExportService', 'CSV_HEADER']
