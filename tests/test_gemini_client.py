"""
Unit tests for services/gemini.py with a mocked google-genai client.
"""
from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors as gerrors

from config import Settings
from core.errors import AIServiceError, ConfigurationError
from services.gemini import GeminiClient


def _fake_genai(*side_effects) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=list(side_effects))
    return client


def _reply(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(text=text)


def _rate_limit() -> gerrors.ClientError:
    return gerrors.ClientError(
        429,
        {"error": {"code": 429, "message": "quota exhausted", "status": "RESOURCE_EXHAUSTED"}},
    )


# ── configuration ───────────────────────────────────────────────────
def test_missing_key_is_configuration_error():
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        GeminiClient(api_key=None, client=_fake_genai())
    with pytest.raises(ConfigurationError):
        GeminiClient(api_key="", client=_fake_genai())


def test_from_settings_uses_session_wide_config():
    cfg = Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_temperature=0.3,
        gemini_top_p=0.9,
        gemini_top_k=20,
        gemini_max_output_tokens=512,
    )
    client = GeminiClient.from_settings(cfg, client=_fake_genai())
    assert client.model == "gemini-test"
    gc = client.generation_config
    assert (gc.temperature, gc.top_p, gc.top_k, gc.max_output_tokens) == (0.3, 0.9, 20, 512)


def test_default_generation_settings():
    client = GeminiClient(api_key="k", client=_fake_genai())
    gc = client.generation_config
    assert client.model == "gemini-2.5-flash"
    assert (gc.temperature, gc.top_p, gc.top_k, gc.max_output_tokens) == (0.7, 0.95, 40, 1024)


# ── send_prompt ─────────────────────────────────────────────────────
def test_send_prompt_returns_text():
    fake = _fake_genai(_reply('{"ok": true}'))
    client = GeminiClient(api_key="k", client=fake)

    assert asyncio.run(client.send_prompt("hello")) == '{"ok": true}'

    kwargs = fake.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["contents"] == ["hello"]
    assert kwargs["config"] is client.generation_config


def test_every_call_reuses_the_same_config():
    fake = _fake_genai(_reply("a"), _reply("b"))
    client = GeminiClient(api_key="k", client=fake)
    asyncio.run(client.send_prompt("one"))
    asyncio.run(client.send_prompt("two"))
    configs = [c.kwargs["config"] for c in fake.aio.models.generate_content.await_args_list]
    assert configs[0] is configs[1]


def test_failure_is_wrapped():
    client = GeminiClient(api_key="k", client=_fake_genai(RuntimeError("boom")))
    with pytest.raises(AIServiceError, match="AI service error: boom") as info:
        asyncio.run(client.send_prompt("hello"))
    assert isinstance(info.value.original_error, RuntimeError)


def test_empty_answer_is_an_error():
    client = GeminiClient(api_key="k", client=_fake_genai(_reply(None)))
    with pytest.raises(AIServiceError, match="empty response"):
        asyncio.run(client.send_prompt("hello"))


def test_rate_limit_is_retried():
    fake = _fake_genai(_rate_limit(), _reply("finally"))
    client = GeminiClient(api_key="k", client=fake, retry_base_delay=0.0)
    assert asyncio.run(client.send_prompt("hello")) == "finally"
    assert fake.aio.models.generate_content.await_count == 2


def test_rate_limit_retries_are_bounded():
    fake = _fake_genai(_rate_limit(), _rate_limit(), _rate_limit())
    client = GeminiClient(api_key="k", client=fake, max_retries=3, retry_base_delay=0.0)
    with pytest.raises(AIServiceError):
        asyncio.run(client.send_prompt("hello"))
    assert fake.aio.models.generate_content.await_count == 3


def test_other_client_errors_are_not_retried():
    bad_request = gerrors.ClientError(
        400, {"error": {"code": 400, "message": "bad prompt", "status": "INVALID_ARGUMENT"}}
    )
    fake = _fake_genai(bad_request, _reply("unused"))
    client = GeminiClient(api_key="k", client=fake, retry_base_delay=0.0)
    with pytest.raises(AIServiceError):
        asyncio.run(client.send_prompt("hello"))
    assert fake.aio.models.generate_content.await_count == 1
