"""Tests for AI insight generation and its fallback."""

import json

import httpx
import pytest

from src.config import Config
from src.services import AIService
from src.services.ai_service import build_prompt, fallback_insight, parse_ai_response
from tests.conftest import make_token


class TestFallbackInsight:

    @pytest.mark.parametrize("change,sentiment", [
        (7.5, "Bullish"),
        (-6.0, "Bearish"),
        (5.0, "Neutral"),
        (-5.0, "Neutral"),
    ])
    def test_sentiment_thresholds(self, change, sentiment):
        assert fallback_insight(make_token(change_24h=change)).sentiment == sentiment

    def test_reasoning(self):
        insight = fallback_insight(make_token(change_24h=-6.0, market_cap=20e9))
        assert insight.reasoning == (
            "The token shows 6.00% loss in the last 24 hours. "
            "Market cap of $20.00B indicates high market capitalization."
        )


class TestParseResponse:

    def test_extracts_embedded_json(self):
        text = 'Here you go: {"reasoning": "Strong momentum", "sentiment": "Bullish"} done'
        insight = parse_ai_response(text)
        assert insight.reasoning == "Strong momentum"
        assert insight.sentiment == "Bullish"

    def test_truncates_reasoning(self):
        text = json.dumps({"reasoning": "x" * 800, "sentiment": "Neutral"})
        assert len(parse_ai_response(text).reasoning) == 500

    @pytest.mark.parametrize("text", [
        "",
        "no json here",
        '{"reasoning": "missing sentiment"}',
        "{not valid json}",
    ])
    def test_unusable(self, text):
        assert parse_ai_response(text) is None


def test_prompt_mentions_token():
    prompt = build_prompt(make_token())
    assert "Bitcoin (BTC)" in prompt
    assert "24h Change: 2.50%" in prompt


@pytest.mark.asyncio
async def test_huggingface_success():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        generated = 'Analysis: {"reasoning": "Volume is rising", "sentiment": "Bullish"}'
        return httpx.Response(200, json=[{"generated_text": generated}])

    config = Config(ai_provider="HUGGINGFACE", huggingface_api_key="hf-key")
    service = AIService(config, transport=httpx.MockTransport(handler))
    insight = await service.generate_insight(make_token())
    await service.close()

    assert insight.sentiment == "Bullish"
    assert seen[0].url.path.endswith("/tiiuae/falcon-7b-instruct")
    assert seen[0].headers["Authorization"] == "Bearer hf-key"


@pytest.mark.asyncio
async def test_openai_success():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["model"] == "gpt-3.5-turbo"
        content = json.dumps({"reasoning": "Sideways market", "sentiment": "Neutral"})
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    config = Config(ai_provider="OPENAI", openai_api_key="sk-test")
    service = AIService(config, transport=httpx.MockTransport(handler))
    insight = await service.generate_insight(make_token())
    await service.close()

    assert insight.reasoning == "Sideways market"
    assert service.model_info().model == "gpt-3.5-turbo"


@pytest.mark.asyncio
async def test_provider_error_falls_back():
    config = Config(ai_provider="OPENAI", openai_api_key="sk-test")
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    service = AIService(config, transport=transport)
    insight = await service.generate_insight(make_token(change_24h=8.0))
    await service.close()
    assert insight.sentiment == "Bullish"


@pytest.mark.asyncio
async def test_missing_key_falls_back():
    service = AIService(Config(ai_provider="HUGGINGFACE"))
    insight = await service.generate_insight(make_token(change_24h=-9.0))
    assert insight.sentiment == "Bearish"


@pytest.mark.asyncio
async def test_unknown_provider_falls_back():
    service = AIService(Config(ai_provider="ACME"))
    insight = await service.generate_insight(make_token())
    assert insight.sentiment == "Neutral"
    assert service.model_info().model == "fallback"
