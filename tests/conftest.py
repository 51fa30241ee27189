"""Shared fixtures for the trip planner tests."""
import copy
import json
from datetime import datetime, timezone

import pytest

from moto_trip.api.llm import GenerationClient

NOW = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc)

SAMPLE_PLAN = {
    "tripTitle": "Coastal Curves: SF to LA",
    "summary": {"totalDistance": "450 miles (724 km)", "estimatedDuration": "9 hours driving"},
    "waypoints": [
        {"location": "San Francisco, CA", "description": "Head south on Highway 1."},
        {"location": "Big Sur, CA", "description": "Cliffside riding, stop at Bixby Bridge."},
        {"location": "Los Angeles, CA", "description": "Arrive via the Pacific Coast Highway."},
    ],
    "routePath": [
        {"lat": 37.7749, "lng": -122.4194},
        {"lat": 36.2704, "lng": -121.8081},
        {"lat": 34.0522, "lng": -118.2437},
    ],
    "weatherPoints": [
        {"location": "San Francisco", "forecast": "Live data unavailable",
         "temperature": "Live data unavailable", "lat": 37.77, "lng": -122.42},
        {"location": "Big Sur", "forecast": "Live data unavailable",
         "temperature": "Live data unavailable", "lat": 36.27, "lng": -121.81},
        {"location": "Los Angeles", "forecast": "Live data unavailable",
         "temperature": "Live data unavailable", "lat": 34.05, "lng": -118.24},
    ],
    "trafficAdvisories": [
        {"location": "US-101 near San Jose", "advisory": "Heavy commute traffic 7-9 AM."},
    ],
    "fuelStops": [
        {"name": "Shell", "location": "near Big Sur", "type": "Petrol",
         "lat": 36.3, "lng": -121.9, "url": "https://maps.google.com/?q=shell+big+sur"},
        {"name": "Chevron", "location": "San Luis Obispo", "type": "Both",
         "lat": 35.28, "lng": -120.66, "url": None},
    ],
    "pointsOfInterest": [
        {"name": "Bixby Bridge", "location": "Big Sur", "description": "Iconic, photogenic bridge."},
        {"name": "Hearst Castle", "location": "San Simeon", "description": "Historic estate."},
    ],
    "motorcycleAdvisories": [
        {"title": "Crosswinds", "details": "Strong gusts on exposed cliffs, grip firmly.", "severity": "High"},
        {"title": "Fog", "details": "Morning fog, reduce speed.", "severity": "Medium"},
    ],
}


class FakeGenerationClient(GenerationClient):
    """Replays scripted responses and records every call.

    Each scripted item is either the raw text to return or an exception to
    raise.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    async def generate(self, instructions, schema, *, temperature, model=None,
                       schema_name="response"):
        self.calls.append({
            "instructions": instructions,
            "schema": schema,
            "temperature": temperature,
            "model": model,
            "schema_name": schema_name,
        })
        if not self.responses:
            raise AssertionError("unexpected generation call")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def aclose(self):
        self.closed = True


def live_weather_json(*entries):
    return json.dumps({"weather": [
        {"location": loc, "forecast": forecast, "temperature": temp}
        for loc, forecast, temp in entries
    ]})


@pytest.fixture
def plan_dict():
    return copy.deepcopy(SAMPLE_PLAN)


@pytest.fixture
def plan_json(plan_dict):
    return json.dumps(plan_dict)


@pytest.fixture
def clock():
    return lambda: NOW
