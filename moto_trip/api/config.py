# moto_trip/api/config.py
"""Configuration management for the trip planner."""
import os
from dotenv import load_dotenv

from moto_trip.api.errors import ConfigError

load_dotenv()

# Travel within this many days (inclusive) gets live weather instead of a
# predictive forecast.
NEAR_TERM_DAYS = 2


def get_openai_api_key():
    """Get OpenAI API key from environment."""
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ConfigError("OPENAI_API_KEY not set in config.")
    return api_key


def get_planner_config():
    """Get model and transport settings for the generation calls."""
    return {
        "plan_model": os.getenv("OPENAI_PLAN_MODEL", "gpt-4.1"),
        "weather_model": os.getenv("OPENAI_WEATHER_MODEL", "gpt-4.1-mini"),
        "plan_temperature": float(os.getenv("PLAN_TEMPERATURE", "0.7")),
        "weather_temperature": float(os.getenv("WEATHER_TEMPERATURE", "0.2")),

        # Seconds; handed to the SDK as its request timeout
        "request_timeout": float(os.getenv("PLANNER_REQUEST_TIMEOUT", "60")),
        # Extra attempts after the first one; 0 means a single attempt
        "max_retries": int(os.getenv("PLANNER_MAX_RETRIES", "0")),
    }


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", "")
    }


def get_autocomplete_config():
    """Get address autocomplete settings."""
    return {
        "min_query_length": int(os.getenv("AUTOCOMPLETE_MIN_CHARS", "3")),
        "debounce_seconds": float(os.getenv("AUTOCOMPLETE_DEBOUNCE_SECONDS", "0.3")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 3000))
