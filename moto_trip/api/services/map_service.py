# moto_trip/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from moto_trip.api.models import TripPlan

logger = logging.getLogger(__name__)


class MapService:
    """Prepares plan data for the front-end map."""

    @staticmethod
    def validate_coordinates(lat: float, lng: float) -> bool:
        """Validate that coordinates are within valid ranges.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            True if valid, False otherwise
        """
        return -90 <= lat <= 90 and -180 <= lng <= 180

    @staticmethod
    def _plan_coordinates(plan: TripPlan) -> Iterable[Tuple[float, float]]:
        for point in plan.route_path:
            yield point.lat, point.lng
        for wp in plan.weather_points:
            yield wp.lat, wp.lng
        for stop in plan.fuel_stops:
            yield stop.lat, stop.lng

    @staticmethod
    def calculate_bounds(plan: TripPlan) -> Dict[str, Any]:
        """Calculate bounding box for everything drawn on the map.

        Args:
            plan: Trip plan with coordinates

        Returns:
            Dictionary with north, south, east, west bounds
        """
        coords = [
            (lat, lng) for lat, lng in MapService._plan_coordinates(plan)
            if MapService.validate_coordinates(lat, lng)
        ]
        if not coords:
            return {}

        lats = [lat for lat, _ in coords]
        lngs = [lng for _, lng in coords]
        return {
            'north': max(lats),
            'south': min(lats),
            'east': max(lngs),
            'west': min(lngs)
        }

    @staticmethod
    def build_map_payload(plan: TripPlan) -> Dict[str, Any]:
        """Collect the polyline, markers and bounds for a plan.

        Fuel stop markers carry their location name so the page can offer a
        reroute through that stop.
        """
        polyline: List[List[float]] = []
        for point in plan.route_path:
            if MapService.validate_coordinates(point.lat, point.lng):
                polyline.append([point.lat, point.lng])
            else:
                logger.warning(f"Skipping invalid route point {point.lat}, {point.lng}")

        markers: List[Dict[str, Any]] = []
        if polyline and plan.waypoints:
            markers.append({'kind': 'start', 'position': polyline[0],
                            'label': plan.waypoints[0].location})
            markers.append({'kind': 'end', 'position': polyline[-1],
                            'label': plan.waypoints[-1].location})

        for wp in plan.weather_points:
            if not MapService.validate_coordinates(wp.lat, wp.lng):
                logger.warning(f"Skipping weather marker with invalid coordinates: {wp.location}")
                continue
            markers.append({
                'kind': 'weather',
                'position': [wp.lat, wp.lng],
                'label': wp.location,
                'forecast': wp.forecast,
                'temperature': wp.temperature,
            })

        for stop in plan.fuel_stops:
            if not MapService.validate_coordinates(stop.lat, stop.lng):
                logger.warning(f"Skipping fuel stop with invalid coordinates: {stop.name}")
                continue
            markers.append({
                'kind': 'fuel',
                'position': [stop.lat, stop.lng],
                'label': stop.name,
                'location': stop.location,
                'type': stop.type,
                'url': stop.url,
            })

        return {
            'polyline': polyline,
            'markers': markers,
            'bounds': MapService.calculate_bounds(plan),
        }


# Export for use in other modules
__all__ = ['MapService']
