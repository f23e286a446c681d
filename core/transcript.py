"""
core/transcript.py
────────────────────────────────────────────────────────────────────────
Append-only conversation log.

A turn's payload is one of three shapes, told apart by `kind`:

    PlainText        – ordinary chat text (or an error notice)
    StructuredResult – a normalised MealPlan
    ActionPrompt     – follow-up actions offered to the user

Insertion order is display order is chronological order.  Turns can not be
edited or removed, and readers always get copies.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from core.models.meal_plan import MealPlan


class Author(str, Enum):
    user = "user"
    assistant = "assistant"


class Action(str, Enum):
    download_json = "download_json"
    new_meal_plan = "new_meal_plan"


class PlainText(BaseModel):
    kind: Literal["text"] = "text"
    text: str
    is_error: bool = False

    model_config = ConfigDict(frozen=True)


class StructuredResult(BaseModel):
    kind: Literal["meal_plan"] = "meal_plan"
    meal_plan: MealPlan

    model_config = ConfigDict(frozen=True)


class ActionPrompt(BaseModel):
    kind: Literal["actions"] = "actions"
    actions: frozenset[Action]
    text: str = ""

    model_config = ConfigDict(frozen=True)

    @field_serializer("actions")
    def _sorted_actions(self, actions: frozenset[Action]) -> list[str]:
        return sorted(a.value for a in actions)


TurnPayload = Annotated[
    Union[PlainText, StructuredResult, ActionPrompt],
    Field(discriminator="kind"),
]


class ConversationTurn(BaseModel):
    id: str
    author: Author
    created_at: datetime
    payload: TurnPayload

    model_config = ConfigDict(frozen=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Transcript:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow
        self._turns: list[ConversationTurn] = []
        self._by_id: dict[str, int] = {}
        self._last_stamp = 0

    def next_id(self, now: datetime) -> str:
        """Millisecond timestamp, bumped past the previous id when the clock hasn't moved."""
        stamp = int(now.timestamp() * 1000)
        if stamp <= self._last_stamp:
            stamp = self._last_stamp + 1
        self._last_stamp = stamp
        return str(stamp)

    def new_turn(self, author: Author, payload: TurnPayload) -> ConversationTurn:
        now = self._clock()
        return ConversationTurn(
            id=self.next_id(now), author=author, created_at=now, payload=payload
        )

    def append(self, turn: ConversationTurn) -> None:
        """Store a copy of `turn`; ValueError if its id is already taken."""
        if turn.id in self._by_id:
            raise ValueError(f"duplicate turn id {turn.id}")
        if turn.id.isdigit():
            self._last_stamp = max(self._last_stamp, int(turn.id))
        self._by_id[turn.id] = len(self._turns)
        self._turns.append(turn.model_copy(deep=True))

    def add(self, author: Author, payload: TurnPayload) -> ConversationTurn:
        """Build a turn with a fresh id, append it and return a copy."""
        turn = self.new_turn(author, payload)
        self.append(turn)
        return turn.model_copy(deep=True)

    def all(self) -> tuple[ConversationTurn, ...]:
        return tuple(t.model_copy(deep=True) for t in self._turns)

    def get(self, turn_id: str) -> ConversationTurn | None:
        idx = self._by_id.get(turn_id)
        return None if idx is None else self._turns[idx].model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._turns)
