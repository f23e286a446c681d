# api/v1/meal_plan.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.errors import SessionBusyError
from core.form_state import MealPlanForm
from services.chat_session import ChatSession
from services.export import download_json
from api.v1.deps import get_chat_session
from api.v1.schemas import FieldStateOut, FormEventIn, FormOut, SubmitOut

router = APIRouter()


# ───────────────────────── helpers ──────────────────────────
def _form_out(form: MealPlanForm) -> FormOut:
    return FormOut(
        values=form.values,
        fields={
            name: FieldStateOut.model_validate(st, from_attributes=True)
            for name, st in form.validation_state().items()
        },
        can_submit=form.can_submit,
    )


# ───────────────────────── form ─────────────────────────────
@router.get("/form", response_model=FormOut)
def read_form(chat: ChatSession = Depends(get_chat_session)) -> FormOut:
    return _form_out(chat.form)


@router.post("/form/events", response_model=FormOut)
def form_event(
    body: FormEventIn,
    chat: ChatSession = Depends(get_chat_session),
) -> FormOut:
    try:
        if body.event == "changed":
            chat.form.field_changed(body.field, body.value)
        else:
            chat.form.field_blurred(body.field)
    except KeyError as exc:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown form field: {body.field}",
        ) from exc
    return _form_out(chat.form)


@router.post("/new", response_model=FormOut, summary="Start over with a blank form")
def new_meal_plan(chat: ChatSession = Depends(get_chat_session)) -> FormOut:
    chat.start_new_meal_plan()
    return _form_out(chat.form)


# ───────────────────────── submit ───────────────────────────
@router.post("/submit", response_model=SubmitOut)
async def submit(chat: ChatSession = Depends(get_chat_session)) -> SubmitOut:
    try:
        outcome = await chat.submit_meal_plan()
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=exc.message) from exc
    return SubmitOut(
        accepted=outcome.accepted,
        form=_form_out(chat.form),
        turns=outcome.turns,
    )


# ───────────────────────── export ───────────────────────────
@router.get(
    "/{turn_id}/download",
    summary="Download the plan held by a transcript turn as prompt_output.json",
)
def download(
    turn_id: str,
    chat: ChatSession = Depends(get_chat_session),
) -> Response:
    try:
        plan = chat.meal_plan_for(turn_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Turn not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    export = download_json(plan)
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
