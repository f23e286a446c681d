"""
Centralised settings loader.

Values come from the environment (or a local `.env`), read once at start-up.
The Gemini generation settings are session-wide constants: every model call
made during a session uses the same sampling configuration.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ────────────────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"

    # ─── Gemini ─────────────────────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = Field(0.7, ge=0.0, le=2.0)
    gemini_top_p: float = Field(0.95, gt=0.0, le=1.0)
    gemini_top_k: int = Field(40, ge=1)
    gemini_max_output_tokens: int = Field(1024, ge=1)
    gemini_max_retries: int = Field(3, ge=1)  # rate-limit retries only

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


Settings = _Settings


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
