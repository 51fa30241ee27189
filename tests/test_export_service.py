"""Tests for CSV and Google Maps export."""
import csv
import io

import pytest

from moto_trip.api.errors import ExportError
from moto_trip.api.models import TripPlan
from moto_trip.api.services.export_service import CSV_HEADER, ExportService


@pytest.fixture
def plan(plan_dict):
    return TripPlan.from_dict(plan_dict)


def read_rows(text):
    return list(csv.reader(io.StringIO(text)))


def test_csv_has_one_row_per_entry_in_section_order(plan):
    rows = read_rows(ExportService.plan_to_csv(plan))

    assert rows[0] == CSV_HEADER
    categories = [row[0] for row in rows[1:]]
    assert categories == (
        ["Waypoint"] * 3
        + ["Fuel Stop"] * 2
        + ["Point of Interest"] * 2
        + ["Weather"] * 3
        + ["Traffic Advisory"] * 1
        + ["Advisory"] * 2
    )
    assert [row[1] for row in rows[1:4]] == [
        "San Francisco, CA", "Big Sur, CA", "Los Angeles, CA",
    ]


def test_csv_columns_per_category(plan):
    rows = read_rows(ExportService.plan_to_csv(plan))
    by_category = {}
    for row in rows[1:]:
        by_category.setdefault(row[0], row)

    assert by_category["Fuel Stop"] == ["Fuel Stop", "Shell", "near Big Sur", "", "Petrol"]
    assert by_category["Weather"] == [
        "Weather", "San Francisco", "Live data unavailable", "Live data unavailable", "",
    ]
    assert by_category["Advisory"] == [
        "Advisory", "Crosswinds", "Strong gusts on exposed cliffs, grip firmly.", "", "High",
    ]


def test_csv_quotes_commas_quotes_and_newlines(plan):
    plan.points_of_interest[0].description = 'The "best" view,\nreally'
    text = ExportService.plan_to_csv(plan)

    assert '"The ""best"" view,\nreally"' in text
    rows = read_rows(text)
    poi = [row for row in rows if row[0] == "Point of Interest"][0]
    assert poi[3] == 'The "best" view,\nreally'


def test_csv_filename_from_title(plan):
    assert ExportService.csv_filename(plan) == "coastal_curves__sf_to_la_trip_plan.csv"


def test_maps_url_uses_route_path_endpoints(plan):
    url = ExportService.build_google_maps_url(plan)

    assert url.startswith("https://www.google.com/maps/dir/?api=1")
    assert "&origin=37.7749,-122.4194" in url
    assert "&destination=34.0522,-118.2437" in url
    assert "&waypoints=Big%20Sur%2C%20CA" in url
    assert url.endswith("&travelmode=driving")


def test_maps_url_falls_back_to_waypoint_names(plan):
    plan.route_path = []
    plan.waypoints = plan.waypoints[::2]
    url = ExportService.build_google_maps_url(plan)

    assert "&origin=San%20Francisco%2C%20CA" in url
    assert "&destination=Los%20Angeles%2C%20CA" in url
    assert "waypoints=" not in url


def test_maps_url_requires_waypoints(plan):
    plan.waypoints = []
    with pytest.raises(ExportError):
        ExportService.build_google_maps_url(plan)
