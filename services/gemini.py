# services/gemini.py
from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Protocol

from google import genai
from google.genai import types, errors as gerrors

from config import Settings
from core.errors import AIServiceError, ConfigurationError

_LOG = logging.getLogger(__name__)


class ModelClient(Protocol):
    """Anything that can turn one prompt into one text answer."""

    async def send_prompt(self, text: str) -> str: ...


def _rate_limited(exc: gerrors.APIError) -> bool:
    return (
        getattr(exc, "code", None) == 429
        or getattr(exc, "status", None) == "RESOURCE_EXHAUSTED"
    )


# ───────────── Client (one per session) ─────────────
class GeminiClient:
    """
    Session-scoped Gemini wrapper.

    Sampling settings are fixed when the client is built and reused for every
    call; callers only ever pass the prompt text.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        top_p: float = 0.95,
        top_k: int = 40,
        max_output_tokens: int = 1024,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        client: Any | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not set in environment")

        self._client = client or genai.Client(api_key=api_key)
        self.model = model
        self.max_retries = max(1, max_retries)
        self.retry_base_delay = retry_base_delay
        self.generation_config = types.GenerateContentConfig(
            temperature=temperature,
            top_p=top_p,
            top_k=top_k,
            max_output_tokens=max_output_tokens,
        )
        _LOG.info("Gemini client ready (model=%s)", model)

    @classmethod
    def from_settings(cls, settings: Settings, client: Any | None = None) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
            top_p=settings.gemini_top_p,
            top_k=settings.gemini_top_k,
            max_output_tokens=settings.gemini_max_output_tokens,
            max_retries=settings.gemini_max_retries,
            client=client,
        )

    async def send_prompt(self, text: str) -> str:
        """Run one generation and return the model's text, retrying on rate limits."""
        for attempt in range(self.max_retries):
            try:
                resp = await self._client.aio.models.generate_content(
                    model=self.model,
                    contents=[text],
                    config=self.generation_config,
                )
            except gerrors.APIError as e:
                if _rate_limited(e) and attempt + 1 < self.max_retries:
                    backoff = self.retry_base_delay * (2 ** attempt + random.random())
                    _LOG.warning("Gemini rate limited, retrying in %.1fs", backoff)
                    await asyncio.sleep(backoff)
                    continue
                _LOG.error("Gemini generation failed: %s", e)
                raise AIServiceError(f"AI service error: {e}", e) from e
            except Exception as e:
                _LOG.error("Gemini generation failed: %s", e)
                raise AIServiceError(f"AI service error: {e}", e) from e

            answer = resp.text
            if not answer:
                raise AIServiceError("AI service error: empty response from model")
            return answer

        raise AIServiceError("AI service error: rate-limit retries exhausted")
