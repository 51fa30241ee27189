"""Tests for the OpenAI generation client."""
import asyncio
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from moto_trip.api import llm
from moto_trip.api.errors import ConfigError, UpstreamError
from moto_trip.api.schemas import TRIP_PLAN_SCHEMA


class FakeCompletions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        message = SimpleNamespace(content=outcome)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_openai(monkeypatch):
    created = {}

    def install(*outcomes):
        completions = FakeCompletions(outcomes)

        class FakeAsyncOpenAI:
            def __init__(self, **kwargs):
                created.update(kwargs)
                self.chat = SimpleNamespace(completions=completions)

            async def close(self):
                created["closed"] = True

        monkeypatch.setattr(llm, "AsyncOpenAI", FakeAsyncOpenAI)
        return completions, created

    return install


def generate(client, **kwargs):
    return asyncio.run(client.generate("plan my ride", TRIP_PLAN_SCHEMA, **kwargs))


def test_generate_sends_strict_json_schema(fake_openai):
    completions, created = fake_openai('{"tripTitle": "x"}')
    client = llm.OpenAIGenerationClient("sk-test", default_model="gpt-test", timeout=12)

    text = generate(client, temperature=0.7, schema_name="trip_plan")

    assert text == '{"tripTitle": "x"}'
    assert created == {"api_key": "sk-test", "timeout": 12, "max_retries": 0}
    request = completions.requests[0]
    assert request["model"] == "gpt-test"
    assert request["temperature"] == 0.7
    assert request["messages"][-1] == {"role": "user", "content": "plan my ride"}
    response_format = request["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "trip_plan"
    assert response_format["json_schema"]["strict"] is True
    assert response_format["json_schema"]["schema"] is TRIP_PLAN_SCHEMA


def test_explicit_model_overrides_default(fake_openai):
    completions, _ = fake_openai("{}")
    client = llm.OpenAIGenerationClient("sk-test", default_model="gpt-test")

    generate(client, temperature=0.2, model="gpt-weather")

    assert completions.requests[0]["model"] == "gpt-weather"


def test_empty_content_becomes_empty_string(fake_openai):
    fake_openai(None)
    client = llm.OpenAIGenerationClient("sk-test")
    assert generate(client, temperature=0.2) == ""


def test_provider_error_is_upstream_error_without_retry(fake_openai):
    completions, _ = fake_openai(OpenAIError("rate limited"))
    client = llm.OpenAIGenerationClient("sk-test")

    with pytest.raises(UpstreamError):
        generate(client, temperature=0.7)
    assert len(completions.requests) == 1


def test_configured_retries_are_attempted(fake_openai):
    completions, _ = fake_openai(OpenAIError("overloaded"), '{"ok": true}')
    client = llm.OpenAIGenerationClient("sk-test", max_retries=1)

    assert generate(client, temperature=0.7) == '{"ok": true}'
    assert len(completions.requests) == 2


def test_create_generation_client_reads_config(monkeypatch, fake_openai):
    _, created = fake_openai()
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.setenv("OPENAI_PLAN_MODEL", "gpt-plan")
    monkeypatch.setenv("PLANNER_REQUEST_TIMEOUT", "30")
    monkeypatch.setenv("PLANNER_MAX_RETRIES", "2")

    client = llm.create_generation_client()

    assert client.default_model == "gpt-plan"
    assert client.max_retries == 2
    assert created["timeout"] == 30.0


def test_create_generation_client_requires_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ConfigError):
        llm.create_generation_client()


def test_aclose_closes_the_sdk_client(fake_openai):
    _, created = fake_openai()
    client = llm.OpenAIGenerationClient("sk-test")

    asyncio.run(client.aclose())

    assert created["closed"] is True
