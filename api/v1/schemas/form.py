from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.transcript import ConversationTurn


class FieldStateOut(BaseModel):
    touched: bool
    error: str

    model_config = ConfigDict(from_attributes=True)


class FormOut(BaseModel):
    values: dict[str, str]
    fields: dict[str, FieldStateOut]
    can_submit: bool


class FormEventIn(BaseModel):
    event: Literal["changed", "blurred"]
    field: str = Field(..., examples=["age"])
    value: str = ""


class SubmitOut(BaseModel):
    accepted: bool
    form: FormOut
    turns: list[ConversationTurn] = []
