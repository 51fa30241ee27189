# moto_trip/api/geocoding.py
"""Address suggestions backed by Google Places autocomplete."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import googlemaps
from googlemaps import exceptions as gmaps_exceptions

from moto_trip.api.config import get_autocomplete_config, get_google_maps_config

logger = logging.getLogger(__name__)


@dataclass
class Suggestion:
    display_name: str

    def to_dict(self) -> dict:
        return {"displayName": self.display_name}


@dataclass
class SuggestionResult:
    """Either a list of suggestions or an error with no suggestions."""

    suggestions: List[Suggestion] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, suggestions: List[Suggestion]) -> "SuggestionResult":
        return cls(suggestions=suggestions)

    @classmethod
    def failed(cls, reason: str) -> "SuggestionResult":
        return cls(suggestions=[], error=reason)

    def to_dict(self) -> dict:
        return {
            "status": "ok" if self.ok else "error",
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


class SuggestionClient:
    """Explicitly constructed holder for a lazily created googlemaps.Client."""

    def __init__(self, api_key: Optional[str] = None, min_query_length: Optional[int] = None):
        cfg = get_autocomplete_config()
        self.api_key = api_key if api_key is not None else get_google_maps_config().get("api_key", "")
        self.min_query_length = min_query_length or cfg["min_query_length"]
        self._gmaps: Optional[googlemaps.Client] = None

    def _get_client(self) -> googlemaps.Client:
        if self._gmaps is None:
            if not self.api_key:
                raise ValueError("GOOGLE_MAPS_API_KEY not set in config.")
            logger.info(f"Initializing Google Maps client with key: {self.api_key[:10]}...")
            self._gmaps = googlemaps.Client(key=self.api_key)
        return self._gmaps

    def fetch_suggestions(self, query: str) -> SuggestionResult:
        """Return display names for a partial address.

        Short queries return an empty success without a provider call. Any
        provider or transport error yields an empty, failed result.
        """
        query = (query or "").strip()
        if len(query) < self.min_query_length:
            return SuggestionResult.success([])

        try:
            client = self._get_client()
            predictions: List[Dict[str, Any]] = client.places_autocomplete(input_text=query)
        except ValueError as e:
            logger.error(f"Google Maps client unavailable: {e}")
            return SuggestionResult.failed(str(e))
        except gmaps_exceptions.ApiError as e:
            logger.error(f"Google Places API returned an error status: {e.status}")
            return SuggestionResult.failed(f"api_error:{e.status}")
        except gmaps_exceptions.Timeout:
            logger.error(f"Google Places request timed out for '{query}'")
            return SuggestionResult.failed("timeout")
        except (gmaps_exceptions.HTTPError, gmaps_exceptions.TransportError) as e:
            logger.error(f"Failed to fetch geocoding suggestions: {e}")
            return SuggestionResult.failed("transport_error")

        suggestions = [
            Suggestion(display_name=p["description"])
            for p in predictions or []
            if p.get("description")
        ]
        logger.debug(f"Found {len(suggestions)} suggestions for '{query}'")
        return SuggestionResult.success(suggestions)


class CancellationToken:
    """Cooperative cancellation flag shared between a task and its owner."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class SuggestionTask:
    """Debounced suggestion lookup that can be abandoned before it completes.

    ``run`` returns ``None`` when the token was cancelled during the debounce
    delay or while the provider call was in flight.
    """

    def __init__(self, client: SuggestionClient, query: str,
                 debounce_seconds: Optional[float] = None,
                 token: Optional[CancellationToken] = None):
        self.client = client
        self.query = query
        if debounce_seconds is None:
            debounce_seconds = get_autocomplete_config()["debounce_seconds"]
        self.debounce_seconds = debounce_seconds
        self.token = token or CancellationToken()

    def cancel(self) -> None:
        self.token.cancel()

    async def run(self) -> Optional[SuggestionResult]:
        await asyncio.sleep(self.debounce_seconds)
        if self.token.cancelled:
            return None

        result = await asyncio.to_thread(self.client.fetch_suggestions, self.query)
        if self.token.cancelled:
            logger.debug(f"Discarding suggestions for '{self.query}' after cancellation")
            return None
        return result


__all__ = [
    "CancellationToken",
    "Suggestion",
    "SuggestionClient",
    "SuggestionResult",
    "SuggestionTask",
]
