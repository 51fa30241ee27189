# moto_trip/api/schemas.py
"""JSON schemas handed to the model as structured-output contracts.

Structured outputs in strict mode need every property listed as required and
``additionalProperties`` disabled, so optional values are expressed as
nullable types instead.
"""

from typing import Any, Dict


def _obj(properties: Dict[str, Any], description: str = "") -> Dict[str, Any]:
    schema = {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }
    if description:
        schema["description"] = description
    return schema


def _array(items: Dict[str, Any], description: str = "") -> Dict[str, Any]:
    schema = {"type": "array", "items": items}
    if description:
        schema["description"] = description
    return schema


def _str(description: str = "", nullable: bool = False) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": ["string", "null"] if nullable else "string"}
    if description:
        schema["description"] = description
    return schema


def _num(description: str) -> Dict[str, Any]:
    return {"type": "number", "description": description}


TRIP_PLAN_SCHEMA = _obj({
    "tripTitle": _str("A catchy title for the trip."),
    "summary": _obj({
        "totalDistance": _str("e.g., '450 miles (724 km)'"),
        "estimatedDuration": _str("e.g., '9 hours driving'"),
    }),
    "waypoints": _array(
        _obj({
            "location": _str("City, town, or specific point of interest."),
            "description": _str("A brief description of this leg of the journey or what to see there."),
        }),
        "A list of 4-6 key waypoints or segments of the journey.",
    ),
    "routePath": _array(
        _obj({"lat": _num("Latitude"), "lng": _num("Longitude")}),
        "An array of 15-20 latitude/longitude points to draw the route on a map. "
        "These points should trace the main roads of the recommended route.",
    ),
    "weatherPoints": _array(
        _obj({
            "location": _str("The city or area for the forecast."),
            "forecast": _str("e.g., 'Sunny, 75°F'"),
            "temperature": _str("e.g., '75°F / 24°C'"),
            "lat": _num("Latitude of the weather location."),
            "lng": _num("Longitude of the weather location."),
        }),
        "Weather forecasts for 5-7 key locations along the route, relevant to the "
        "travel date and time. Include coordinates for each location.",
    ),
    "trafficAdvisories": _array(
        _obj({
            "location": _str("The area or highway segment prone to traffic."),
            "advisory": _str("Details about the traffic, e.g., 'Heavy commute traffic likely between 4 PM - 6 PM'."),
        }),
        "A list of 2-4 potential traffic-heavy areas or times based on the provided travel schedule.",
    ),
    "fuelStops": _array(
        _obj({
            "name": _str("e.g., 'Shell' or 'Electrify America'."),
            "location": _str("e.g., 'near Big Sur'."),
            "type": {"type": "string", "enum": ["Petrol", "EV Charger", "Both"]},
            "lat": _num("Latitude of the fuel stop."),
            "lng": _num("Longitude of the fuel stop."),
            "url": _str("A URL to the station's details, like a Google Maps link or official site.", nullable=True),
        }),
        "A list of recommended petrol or EV charging stations along the route.",
    ),
    "pointsOfInterest": _array(
        _obj({"name": _str(), "location": _str(), "description": _str()}),
        "3-5 interesting tourist spots or attractions.",
    ),
    "motorcycleAdvisories": _array(
        _obj({
            "title": _str(),
            "details": _str(),
            "severity": {"type": "string", "enum": ["Low", "Medium", "High"]},
        }),
        "Crucial advisories for the specified vehicle type.",
    ),
})

# One entry per requested location; the count is not fixed by the schema.
LIVE_WEATHER_SCHEMA = _obj({
    "weather": _array(
        _obj({
            "location": _str("The location name, matching the input."),
            "forecast": _str("e.g., 'Partly Cloudy'"),
            "temperature": _str("e.g., '68°F / 20°C'"),
        }),
        "One weather entry for each requested location, in the same order.",
    ),
})
