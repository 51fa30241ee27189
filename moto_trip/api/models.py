"""Shared data structures for trip planning.

The dataclasses mirror the JSON the model is asked to return. ``from_dict``
accepts the wire (camelCase) shape and ``to_dict`` produces it again, so the
same objects flow from the AI response through the merge step to the
browser and the exporters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from moto_trip.api.errors import FormatError, ValidationError

VEHICLE_TYPES = ("motorcycle", "car")

# Text the model writes into weather points that will be replaced by live data
LIVE_DATA_PLACEHOLDER = "Live data unavailable"

# Outcome of the live weather overlay, reported alongside the plan
LIVE_WEATHER_NOT_REQUESTED = "not_requested"
LIVE_WEATHER_LIVE = "live"
LIVE_WEATHER_UNAVAILABLE = "unavailable"


@dataclass
class TripRequest:
    """What the user asked for."""

    destinations: List[str]
    travel_time: datetime
    vehicle_type: str = "motorcycle"
    is_electric: bool = False

    @property
    def start(self) -> str:
        return self.destinations[0]

    @property
    def end(self) -> str:
        return self.destinations[-1]

    @property
    def waypoints(self) -> List[str]:
        return self.destinations[1:-1]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripRequest":
        """Build a request from the planner form payload.

        Raises:
            ValidationError: If any field is missing or unusable
        """
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")

        destinations = data.get("destinations")
        if destinations is None and "start" in data and "end" in data:
            destinations = [data.get("start"), data.get("end")]
        if not isinstance(destinations, list):
            raise ValidationError("Please provide a list of destinations.")

        destinations = [d.strip() if isinstance(d, str) else "" for d in destinations]
        if len(destinations) < 2 or not all(destinations):
            raise ValidationError("Please fill in all fields: start, end, and date/time.")

        raw_time = data.get("dateTime")
        if not raw_time:
            raise ValidationError("Please fill in all fields: start, end, and date/time.")
        try:
            travel_time = datetime.fromisoformat(str(raw_time).replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid date/time: {raw_time}")

        vehicle_type = data.get("vehicleType", "motorcycle")
        if vehicle_type not in VEHICLE_TYPES:
            raise ValidationError(f"Vehicle type must be one of: {', '.join(VEHICLE_TYPES)}")

        return cls(
            destinations=destinations,
            travel_time=travel_time,
            vehicle_type=vehicle_type,
            is_electric=bool(data.get("isElectric", False)),
        )

    def to_dict(self) -> dict:
        return {
            "destinations": list(self.destinations),
            "dateTime": self.travel_time.isoformat(),
            "vehicleType": self.vehicle_type,
            "isElectric": self.is_electric,
        }


@dataclass
class TripSummary:
    total_distance: str
    estimated_duration: str

    def to_dict(self) -> dict:
        return {
            "totalDistance": self.total_distance,
            "estimatedDuration": self.estimated_duration,
        }


@dataclass
class Waypoint:
    location: str
    description: str

    def to_dict(self) -> dict:
        return {"location": self.location, "description": self.description}


@dataclass
class RoutePoint:
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


@dataclass
class WeatherPoint:
    """Forecast for one location along the route."""

    location: str
    forecast: str
    temperature: str
    lat: float
    lng: float

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "forecast": self.forecast,
            "temperature": self.temperature,
            "lat": self.lat,
            "lng": self.lng,
        }


@dataclass
class LiveWeather:
    """One entry of the live weather overlay, aligned by index."""

    location: str
    forecast: str
    temperature: str


@dataclass
class TrafficAdvisory:
    location: str
    advisory: str

    def to_dict(self) -> dict:
        return {"location": self.location, "advisory": self.advisory}


@dataclass
class FuelStop:
    """Petrol station or EV charger; ``type`` is Petrol, EV Charger or Both."""

    name: str
    location: str
    type: str
    lat: float
    lng: float
    url: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "location": self.location,
            "type": self.type,
            "lat": self.lat,
            "lng": self.lng,
        }
        if self.url:
            data["url"] = self.url
        return data


@dataclass
class PointOfInterest:
    name: str
    location: str
    description: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "location": self.location,
            "description": self.description,
        }


@dataclass
class Advisory:
    """Vehicle-specific advisory; ``severity`` is Low, Medium or High."""

    title: str
    details: str
    severity: str

    def to_dict(self) -> dict:
        return {"title": self.title, "details": self.details, "severity": self.severity}


@dataclass
class TripPlan:
    """Complete plan as returned by the model."""

    trip_title: str
    summary: TripSummary
    waypoints: List[Waypoint] = field(default_factory=list)
    route_path: List[RoutePoint] = field(default_factory=list)
    weather_points: List[WeatherPoint] = field(default_factory=list)
    traffic_advisories: List[TrafficAdvisory] = field(default_factory=list)
    fuel_stops: List[FuelStop] = field(default_factory=list)
    points_of_interest: List[PointOfInterest] = field(default_factory=list)
    vehicle_advisories: List[Advisory] = field(default_factory=list)
    live_weather_status: str = LIVE_WEATHER_NOT_REQUESTED

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripPlan":
        """Build a plan from the model's JSON.

        Only the envelope is checked: required keys must be present and list
        fields must be lists. Values inside the entries are taken as given.

        Raises:
            FormatError: If the JSON does not have the trip plan shape
        """
        if not isinstance(data, dict):
            raise FormatError("The AI returned an invalid response format. Please try again.")

        missing = [key for key in _REQUIRED_KEYS if key not in data]
        if missing:
            raise FormatError(f"The trip plan is missing required fields: {', '.join(missing)}")

        summary = data["summary"]
        if not isinstance(summary, dict):
            raise FormatError("The trip plan summary has an invalid format.")

        try:
            return cls(
                trip_title=str(data["tripTitle"]),
                summary=TripSummary(
                    total_distance=str(summary.get("totalDistance", "")),
                    estimated_duration=str(summary.get("estimatedDuration", "")),
                ),
                waypoints=[
                    Waypoint(w["location"], w["description"])
                    for w in _as_list(data, "waypoints")
                ],
                route_path=[
                    RoutePoint(float(p["lat"]), float(p["lng"]))
                    for p in _as_list(data, "routePath")
                ],
                weather_points=[
                    WeatherPoint(
                        w["location"], w["forecast"], w["temperature"],
                        float(w["lat"]), float(w["lng"]),
                    )
                    for w in _as_list(data, "weatherPoints")
                ],
                traffic_advisories=[
                    TrafficAdvisory(t["location"], t["advisory"])
                    for t in _as_list(data, "trafficAdvisories")
                ],
                fuel_stops=[
                    FuelStop(
                        f["name"], f["location"], f["type"],
                        float(f["lat"]), float(f["lng"]), f.get("url") or None,
                    )
                    for f in _as_list(data, "fuelStops")
                ],
                points_of_interest=[
                    PointOfInterest(p["name"], p["location"], p["description"])
                    for p in _as_list(data, "pointsOfInterest")
                ],
                vehicle_advisories=[
                    Advisory(a["title"], a["details"], a["severity"])
                    for a in _as_list(data, "motorcycleAdvisories")
                ],
                live_weather_status=data.get("liveWeatherStatus", LIVE_WEATHER_NOT_REQUESTED),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise FormatError(f"The trip plan has an invalid entry: {exc}") from exc

    def to_dict(self) -> dict:
        return {
            "tripTitle": self.trip_title,
            "summary": self.summary.to_dict(),
            "waypoints": [w.to_dict() for w in self.waypoints],
            "routePath": [p.to_dict() for p in self.route_path],
            "weatherPoints": [w.to_dict() for w in self.weather_points],
            "trafficAdvisories": [t.to_dict() for t in self.traffic_advisories],
            "fuelStops": [f.to_dict() for f in self.fuel_stops],
            "pointsOfInterest": [p.to_dict() for p in self.points_of_interest],
            "motorcycleAdvisories": [a.to_dict() for a in self.vehicle_advisories],
            "liveWeatherStatus": self.live_weather_status,
        }


_REQUIRED_KEYS = (
    "tripTitle",
    "summary",
    "waypoints",
    "routePath",
    "weatherPoints",
    "trafficAdvisories",
    "fuelStops",
    "pointsOfInterest",
    "motorcycleAdvisories",
)


def _as_list(data: Dict[str, Any], key: str) -> list:
    value = data[key]
    if not isinstance(value, list):
        raise FormatError(f"The trip plan field '{key}' must be a list.")
    return value
