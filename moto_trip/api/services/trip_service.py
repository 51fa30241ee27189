# moto_trip/api/services/trip_service.py
"""Service layer for trip plan generation and session management."""

import asyncio
import json
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from flask import session

from moto_trip.api.config import NEAR_TERM_DAYS, get_planner_config
from moto_trip.api.errors import FormatError, TripPlannerError, UpstreamError, ValidationError
from moto_trip.api.llm import GenerationClient, create_generation_client
from moto_trip.api.models import (
    LIVE_DATA_PLACEHOLDER,
    LIVE_WEATHER_LIVE,
    LIVE_WEATHER_UNAVAILABLE,
    TripPlan,
    TripRequest,
)
from moto_trip.api.schemas import TRIP_PLAN_SCHEMA
from moto_trip.api.weather import LiveWeatherMerger

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are local time
    return value if value.tzinfo else value.astimezone()


def days_until_travel(travel_time: datetime, now: datetime) -> float:
    """Fractional days from ``now`` until departure (negative if in the past)."""
    delta = _as_aware(travel_time) - _as_aware(now)
    return delta.total_seconds() / SECONDS_PER_DAY


def is_near_term(days: float) -> bool:
    """True when departure falls inside the live-weather window (both ends inclusive)."""
    return 0 <= days <= NEAR_TERM_DAYS


def build_plan_prompt(request: TripRequest, near_term: bool) -> str:
    """Compose the instructions for the primary trip plan request."""
    vehicle = request.vehicle_type
    vehicle_description = (
        f"an electric {vehicle}" if request.is_electric else f"a gas-powered {vehicle}"
    )

    if request.is_electric:
        fuel_instruction = ("The list of 'fuelStops' must prioritize EV charging stations. "
                            "Also provide their lat/lng coordinates and a URL.")
    else:
        fuel_instruction = ("The list of 'fuelStops' should be petrol stations. "
                            "Also provide their lat/lng coordinates and a URL.")

    if request.waypoints:
        route_description = (f"from {request.start} to {request.end}, via the following "
                             f"stops in order: {', '.join(request.waypoints)}.")
    else:
        route_description = f"from {request.start} to {request.end}."

    if vehicle == "motorcycle":
        advisory_instruction = ("Crucial motorcycle-specific advisories (e.g., road conditions, "
                                "crosswinds, wildlife, high-theft areas).")
    else:
        advisory_instruction = ("Crucial car-specific advisories (e.g., parking information, "
                                "toll roads, narrow streets, road closures).")

    if near_term:
        weather_instruction = (
            "For the 'weatherPoints' section, populate it with 5-7 key locations along "
            "the route, including their coordinates. For the 'forecast' and 'temperature' "
            f"fields, use the placeholder text '{LIVE_DATA_PLACEHOLDER}' as this will be "
            "updated separately with real-time data."
        )
    else:
        weather_instruction = (
            "For the 'weatherPoints' section, generate a predictive weather forecast for "
            "5-7 key locations along the route, with coordinates, valid for the estimated "
            "time of arrival at those locations based on the travel date."
        )

    departure_date = request.travel_time.strftime("%A, %B %d, %Y")
    departure_time = request.travel_time.strftime("%H:%M")

    return f"""Act as an expert trip planner for {vehicle_description}. Create a detailed trip plan for a ride {route_description}
The user plans to depart on {departure_date} at {departure_time}. All time-sensitive information like traffic should be based on this.

The plan must be comprehensive and tailored for a {vehicle}. Include the following sections:
1. A catchy, inspiring title for the trip.
2. A summary with total distance and estimated driving time.
3. A list of logical waypoints describing each leg of the journey. This should incorporate the user's requested stops.
4. A 'routePath' of 15-20 latitude/longitude points that trace the recommended route for drawing on a map.
5. {weather_instruction}
6. 'trafficAdvisories' highlighting areas known for congestion around the user's travel time.
7. {fuel_instruction}
8. 3-5 interesting points of interest.
9. {advisory_instruction} Assign a severity (Low, Medium, High).

Generate the output in a structured JSON format that strictly adheres to the provided schema."""


def parse_plan(content: str) -> TripPlan:
    """Check the response envelope and parse it into a TripPlan.

    Raises:
        FormatError: If the text is not a JSON object with the plan shape
    """
    text = (content or "").strip()
    if not text.startswith("{") or not text.endswith("}"):
        raise FormatError("The AI returned an invalid response format. Please try again.")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse trip plan JSON: %s", exc)
        raise FormatError(
            "Failed to parse the trip plan from the AI. The format was invalid."
        ) from exc
    return TripPlan.from_dict(payload)


class PlanRequestOrchestrator:
    """Runs the primary plan request and the optional live weather overlay.

    The two model calls run one after the other; the weather request needs
    the locations the plan produced. A failed plan request aborts the whole
    operation, a failed weather request only leaves the placeholders in place.
    """

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        merger: Optional[LiveWeatherMerger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.merger = merger
        self.clock = clock

    async def generate_plan(
        self,
        destinations: Sequence[str],
        travel_time: datetime,
        vehicle_type: str,
        is_electric: bool,
    ) -> TripPlan:
        """Generate a trip plan for an ordered list of destinations.

        Args:
            destinations: Start, optional waypoints in order, end
            travel_time: Planned departure
            vehicle_type: ``motorcycle`` or ``car``
            is_electric: Whether the vehicle is electric

        Returns:
            The plan, with live weather merged in when available

        Raises:
            ConfigError: If no API key is configured (before any request)
            UpstreamError: If the plan request fails
            FormatError: If the plan response is malformed
        """
        # A client built here lives for this call only and is closed before returning
        owns_client = self.client is None
        client = create_generation_client() if owns_client else self.client
        try:
            return await self._generate(client, destinations, travel_time, vehicle_type, is_electric)
        finally:
            if owns_client:
                await client.aclose()

    async def _generate(
        self,
        client: GenerationClient,
        destinations: Sequence[str],
        travel_time: datetime,
        vehicle_type: str,
        is_electric: bool,
    ) -> TripPlan:
        cfg = get_planner_config()

        request = TripRequest(list(destinations), travel_time, vehicle_type, is_electric)
        days = days_until_travel(travel_time, self.clock())
        near_term = is_near_term(days)

        logger.info(
            "Planning trip %s -> %s (%d stops, %s, electric=%s, %.2f days out, live weather=%s)",
            request.start, request.end, len(request.waypoints),
            vehicle_type, is_electric, days, near_term,
        )

        try:
            content = await client.generate(
                build_plan_prompt(request, near_term),
                TRIP_PLAN_SCHEMA,
                temperature=cfg["plan_temperature"],
                model=cfg["plan_model"],
                schema_name="trip_plan",
            )
        except TripPlannerError:
            raise
        except Exception as exc:
            logger.error("Error calling the AI for the trip plan: %s", exc)
            raise UpstreamError(
                "Failed to generate trip plan. The AI model may be temporarily "
                "unavailable or the request was too complex."
            ) from exc

        plan = parse_plan(content)

        if near_term and plan.weather_points:
            await self._merge_live_weather(plan, client)

        return plan

    async def _merge_live_weather(self, plan: TripPlan, client: GenerationClient) -> None:
        merger = self.merger or LiveWeatherMerger(client)
        logger.info("Fetching live weather data for the trip...")
        try:
            live = await merger.merge(plan.weather_points)
        except Exception as exc:
            logger.error("Could not fetch live weather, keeping placeholder data: %s", exc)
            plan.live_weather_status = LIVE_WEATHER_UNAVAILABLE
            return

        if len(live) != len(plan.weather_points):
            logger.warning(
                "Live weather data length mismatch (%d != %d), using placeholder data.",
                len(live), len(plan.weather_points),
            )
            plan.live_weather_status = LIVE_WEATHER_UNAVAILABLE
            return

        for point, entry in zip(plan.weather_points, live):
            point.forecast = entry.forecast
            point.temperature = entry.temperature
        plan.live_weather_status = LIVE_WEATHER_LIVE
        logger.info("Successfully merged live weather data.")


class TripService:
    """Runs plan requests for the web layer and remembers the last query."""

    @staticmethod
    def plan_trip(request: TripRequest,
                  orchestrator: Optional[PlanRequestOrchestrator] = None) -> TripPlan:
        """Generate a plan and remember its query in the session."""
        orchestrator = orchestrator or PlanRequestOrchestrator()
        try:
            plan = asyncio.run(orchestrator.generate_plan(
                request.destinations,
                request.travel_time,
                request.vehicle_type,
                request.is_electric,
            ))
        except TripPlannerError as e:
            logger.error(f"Failed to generate trip plan: {e}")
            raise

        TripService.store_in_session(request)
        return plan

    @staticmethod
    def reroute_with_stop(stop: str,
                          orchestrator: Optional[PlanRequestOrchestrator] = None) -> TripPlan:
        """Re-plan the last simple A to B query via an extra stop.

        Raises:
            ValidationError: If there is no stored query or the stop is blank
        """
        if not stop or not stop.strip():
            raise ValidationError("Please choose a stop to reroute through.")

        query = TripService.get_last_query()
        if query is None:
            raise ValidationError("There is no trip to reroute. Please plan a trip first.")

        logger.info(f"Rerouting from {query.start} to {query.end} via {stop}")
        request = TripRequest(
            destinations=[query.start, stop.strip(), query.end],
            travel_time=query.travel_time,
            vehicle_type=query.vehicle_type,
            is_electric=query.is_electric,
        )
        return TripService.plan_trip(request, orchestrator)

    @staticmethod
    def store_in_session(request: TripRequest) -> None:
        """Keep the query when it is a simple A to B trip.

        Plans themselves are too large for the session cookie and are not kept.
        """
        # Reroutes always go from the original start to the original end
        if len(request.destinations) != 2:
            return
        session['current_query'] = request.to_dict()
        session.modified = True
        logger.debug(f"Stored query in session: {request.start} -> {request.end}")

    @staticmethod
    def get_last_query() -> Optional[TripRequest]:
        data = session.get('current_query')
        if not data:
            return None
        return TripRequest.from_dict(data)


__all__ = [
    'PlanRequestOrchestrator',
    'TripService',
    'build_plan_prompt',
    'days_until_travel',
    'is_near_term',
    'parse_plan',
]
