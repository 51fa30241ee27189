"""Tests for request and plan parsing."""
from datetime import datetime

import pytest

from moto_trip.api.errors import FormatError, ValidationError
from moto_trip.api.models import LIVE_WEATHER_NOT_REQUESTED, TripPlan, TripRequest


def test_trip_request_from_form_payload():
    request = TripRequest.from_dict({
        "destinations": [" Denver, CO ", "Moab, UT", "Salt Lake City, UT"],
        "dateTime": "2026-06-02T08:30",
        "vehicleType": "car",
        "isElectric": True,
    })

    assert request.start == "Denver, CO"
    assert request.waypoints == ["Moab, UT"]
    assert request.end == "Salt Lake City, UT"
    assert request.travel_time == datetime(2026, 6, 2, 8, 30)
    assert request.vehicle_type == "car"
    assert request.is_electric is True


def test_trip_request_accepts_start_and_end_fields():
    request = TripRequest.from_dict({"start": "A", "end": "B", "dateTime": "2026-06-02T08:30Z"})
    assert request.destinations == ["A", "B"]
    assert request.travel_time.utcoffset().total_seconds() == 0
    assert request.vehicle_type == "motorcycle"


@pytest.mark.parametrize("payload", [
    None,
    {"destinations": ["Only one"], "dateTime": "2026-06-02T08:30"},
    {"destinations": ["A", ""], "dateTime": "2026-06-02T08:30"},
    {"destinations": ["A", "B"]},
    {"destinations": ["A", "B"], "dateTime": "next tuesday"},
    {"destinations": ["A", "B"], "dateTime": "2026-06-02T08:30", "vehicleType": "truck"},
])
def test_trip_request_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        TripRequest.from_dict(payload)


def test_trip_request_round_trips_through_session_form():
    request = TripRequest(["A", "B"], datetime(2026, 6, 2, 8, 30), "car", False)
    assert TripRequest.from_dict(request.to_dict()) == request


def test_plan_from_dict_maps_wire_names(plan_dict):
    plan = TripPlan.from_dict(plan_dict)

    assert plan.summary.total_distance == "450 miles (724 km)"
    assert len(plan.route_path) == 3
    assert plan.fuel_stops[0].url.startswith("https://")
    assert plan.fuel_stops[1].url is None
    assert plan.vehicle_advisories[0].severity == "High"
    assert plan.live_weather_status == LIVE_WEATHER_NOT_REQUESTED


def test_plan_to_dict_uses_wire_names(plan_dict):
    data = TripPlan.from_dict(plan_dict).to_dict()

    assert data["tripTitle"] == plan_dict["tripTitle"]
    assert data["motorcycleAdvisories"] == plan_dict["motorcycleAdvisories"]
    assert "url" not in data["fuelStops"][1]
    assert data["liveWeatherStatus"] == LIVE_WEATHER_NOT_REQUESTED


def test_plan_rejects_non_list_sections(plan_dict):
    plan_dict["waypoints"] = "Big Sur"
    with pytest.raises(FormatError, match="waypoints"):
        TripPlan.from_dict(plan_dict)


def test_plan_rejects_entries_missing_fields(plan_dict):
    del plan_dict["weatherPoints"][0]["lat"]
    with pytest.raises(FormatError):
        TripPlan.from_dict(plan_dict)
