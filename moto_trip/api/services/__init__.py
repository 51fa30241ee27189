"""Business logic used by the travel routes."""

from .export_service import ExportService
from .map_service import MapService
from .trip_service import PlanRequestOrchestrator, TripService

__all__ = ["ExportService", "MapService", "PlanRequestOrchestrator", "TripService"]
