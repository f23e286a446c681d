from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from config import settings
from api.v1.router import api_router
from services.chat_session import ChatSession
from services.gemini import GeminiClient

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_LOG = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    # A missing API key raises ConfigurationError here and aborts start-up.
    if app.state.chat_session is None:
        app.state.chat_session = ChatSession(GeminiClient.from_settings(settings))
        _LOG.info("Chat session started (env=%s)", settings.env_name)
    yield


def create_app(chat_session: ChatSession | None = None) -> FastAPI:
    app = FastAPI(title="Meal-Plan Chat API", version="1.0.0", lifespan=_lifespan)
    app.state.chat_session = chat_session

    # CORS (local browser client only – no auth, single in-memory session)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.env_name}

    return app


app = create_app()
