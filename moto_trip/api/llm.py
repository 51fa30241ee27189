"""LLM boundary for the trip planner.

Every model request goes through :class:`GenerationClient.generate`, which
takes free-text instructions, a strict JSON schema and a sampling
temperature, and returns the raw response text. Parsing is left to the
caller so that envelope checks stay next to the code that owns the plan.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from moto_trip.api.config import get_openai_api_key, get_planner_config
from moto_trip.api.errors import UpstreamError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a trip planning assistant. Reply only with JSON that strictly "
    "matches the provided schema."
)


class GenerationClient:
    """Interface for a structured JSON generation call."""

    async def generate(
        self,
        instructions: str,
        schema: Dict[str, Any],
        *,
        temperature: float,
        model: Optional[str] = None,
        schema_name: str = "response",
    ) -> str:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release transport resources; nothing to release by default."""


class OpenAIGenerationClient(GenerationClient):
    """Structured generation through the OpenAI Chat Completions API.

    Retries are owned here through tenacity; the SDK's own retry loop is
    switched off so that ``max_retries`` is the only policy in effect.
    """

    def __init__(
        self,
        api_key: str,
        *,
        default_model: str = "gpt-4.1",
        timeout: float = 60.0,
        max_retries: int = 0,
    ):
        self.default_model = default_model
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def generate(
        self,
        instructions: str,
        schema: Dict[str, Any],
        *,
        temperature: float,
        model: Optional[str] = None,
        schema_name: str = "response",
    ) -> str:
        model = model or self.default_model
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": instructions},
        ]

        logger.debug(
            "Calling OpenAI ChatCompletion: model=%s schema=%s temperature=%.2f",
            model,
            schema_name,
            temperature,
        )

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries + 1),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type((OpenAIError, httpx.HTTPError)),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.chat.completions.create(
                        model=model,
                        messages=messages,
                        temperature=temperature,
                        response_format={
                            "type": "json_schema",
                            "json_schema": {
                                "name": schema_name,
                                "schema": schema,
                                "strict": True,
                            },
                        },
                    )
        except (OpenAIError, httpx.HTTPError) as exc:
            logger.error("OpenAI request failed (%s): %s", schema_name, exc)
            raise UpstreamError(
                "Failed to generate trip plan. The AI model may be temporarily "
                "unavailable or the request was too complex."
            ) from exc

        if not response.choices:
            raise UpstreamError("The AI returned an empty response.")
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


def create_generation_client() -> OpenAIGenerationClient:
    """Build the default client from configuration.

    Raises:
        ConfigError: If OPENAI_API_KEY is not set
    """
    api_key = get_openai_api_key()
    cfg = get_planner_config()
    return OpenAIGenerationClient(
        api_key,
        default_model=cfg["plan_model"],
        timeout=cfg["request_timeout"],
        max_retries=cfg["max_retries"],
    )
