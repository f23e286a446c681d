# api/v1/chat.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from core.errors import SessionBusyError
from core.transcript import ConversationTurn
from services.chat_session import ChatSession
from api.v1.deps import get_chat_session
from api.v1.schemas import MessageIn, SessionStatus, TurnsOut

router = APIRouter()


@router.get(
    "/transcript",
    response_model=list[ConversationTurn],
    summary="Every turn so far, oldest first",
)
def read_transcript(
    chat: ChatSession = Depends(get_chat_session),
) -> list[ConversationTurn]:
    return list(chat.transcript.all())


@router.post(
    "/messages",
    response_model=TurnsOut,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    body: MessageIn,
    chat: ChatSession = Depends(get_chat_session),
) -> TurnsOut:
    try:
        turns = await chat.send_message(body.text)
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=exc.message) from exc
    return TurnsOut(turns=turns)


@router.get("/status", response_model=SessionStatus)
def session_status(chat: ChatSession = Depends(get_chat_session)) -> SessionStatus:
    return SessionStatus(busy=chat.busy, turn_count=len(chat.transcript))
