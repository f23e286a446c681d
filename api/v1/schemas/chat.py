from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from core.transcript import ConversationTurn


class MessageIn(BaseModel):
    text: str = Field(..., examples=["How much protein should I eat per day?"])

    @field_validator("text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message text must not be blank")
        return v


class TurnsOut(BaseModel):
    turns: list[ConversationTurn]


class SessionStatus(BaseModel):
    busy: bool
    turn_count: int
