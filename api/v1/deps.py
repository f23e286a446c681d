from __future__ import annotations

from fastapi import Request

from services.chat_session import ChatSession


def get_chat_session(request: Request) -> ChatSession:
    """The single in-memory session created at start-up."""
    return request.app.state.chat_session
