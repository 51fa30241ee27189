# moto_trip/api/weather.py
"""Live weather overlay for near-term trips."""

import json
import logging
from typing import List, Optional, Sequence

from moto_trip.api.config import get_planner_config
from moto_trip.api.errors import UpstreamError
from moto_trip.api.llm import GenerationClient
from moto_trip.api.models import LiveWeather, WeatherPoint
from moto_trip.api.schemas import LIVE_WEATHER_SCHEMA

logger = logging.getLogger(__name__)


def _build_prompt(locations: List[dict]) -> str:
    return (
        "Act as a live weather API. Based on the current, real-time weather "
        "conditions, provide a brief forecast and temperature for the following "
        "list of locations.\n"
        "Return the data as JSON that strictly matches the provided schema, with "
        "one weather entry for each location in the same order they were provided.\n\n"
        f"Locations: {json.dumps(locations)}"
    )


def _parse_response(content: str) -> List[LiveWeather]:
    payload = json.loads(content.strip())
    if isinstance(payload, dict):
        payload = payload["weather"]
    if not isinstance(payload, list):
        raise ValueError("live weather response is not a list")
    return [
        LiveWeather(
            location=entry.get("location", ""),
            forecast=entry["forecast"],
            temperature=entry["temperature"],
        )
        for entry in payload
    ]


class LiveWeatherMerger:
    """Fetches current conditions for an ordered list of weather points.

    The result is aligned by index with the input. Matching it against the
    original list is the caller's job; nothing here reorders or keys by name.
    """

    def __init__(self, client: GenerationClient, model: Optional[str] = None,
                 temperature: Optional[float] = None):
        cfg = get_planner_config()
        self.client = client
        self.model = model or cfg["weather_model"]
        self.temperature = cfg["weather_temperature"] if temperature is None else temperature

    async def merge(self, weather_points: Sequence[WeatherPoint]) -> List[LiveWeather]:
        """Return one live entry per weather point, in input order.

        Raises:
            UpstreamError: If the request or the response parsing fails
        """
        locations = [
            {"location": wp.location, "lat": wp.lat, "lng": wp.lng}
            for wp in weather_points
        ]

        try:
            content = await self.client.generate(
                _build_prompt(locations),
                LIVE_WEATHER_SCHEMA,
                temperature=self.temperature,
                model=self.model,
                schema_name="live_weather",
            )
            return _parse_response(content)
        except Exception as exc:
            logger.error("Error fetching live weather: %s", exc)
            raise UpstreamError("Failed to fetch live weather data.") from exc
