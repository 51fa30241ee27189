# moto_trip/api/errors.py
"""Error types surfaced by the trip planner."""


class TripPlannerError(Exception):
    """Base class for planner failures that carry a user-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(TripPlannerError):
    """A required credential or setting is missing."""


class UpstreamError(TripPlannerError):
    """The AI provider or the network failed."""

    status_code = 502


class FormatError(TripPlannerError):
    """The AI response was not a well-formed trip plan."""

    status_code = 502


class ValidationError(TripPlannerError):
    """The caller sent an unusable request."""

    status_code = 400


class ExportError(TripPlannerError):
    """A plan could not be exported."""

    status_code = 400


__all__ = [
    "TripPlannerError",
    "ConfigError",
    "UpstreamError",
    "FormatError",
    "ValidationError",
    "ExportError",
]
