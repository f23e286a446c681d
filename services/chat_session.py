"""
services/chat_session.py
────────────────────────────────────────────────────────────────────────
One user's chat: transcript + meal-plan form + the injected model client.

Only one model request may be in flight at a time.  `busy` is raised before
the call is awaited and cleared in `finally`, after the answer (or the
failure) has been written to the transcript.  Recoverable failures never
leave this class: AI errors become an assistant error turn, unusable plan
responses become a plain-text turn quoting what the model said.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from core.errors import AIServiceError, NormalizationError, SessionBusyError
from core.form_state import MealPlanForm
from core.models.meal_plan import MealPlan
from core.prompt_builder import build_meal_plan_prompt, build_user_request_summary
from core.response_normalizer import normalize
from core.transcript import (
    Action,
    ActionPrompt,
    Author,
    ConversationTurn,
    PlainText,
    StructuredResult,
    Transcript,
)
from services.gemini import ModelClient

_LOG = logging.getLogger(__name__)

PLAN_FOLLOW_UP = "Download the plan as JSON, or start a new meal plan."


@dataclass
class SubmitOutcome:
    accepted: bool
    errors: dict[str, str] = field(default_factory=dict)
    turns: list[ConversationTurn] = field(default_factory=list)
    meal_plan: MealPlan | None = None


def fallback_text(exc: NormalizationError) -> str:
    """Plain-text stand-in for a response that could not become a plan."""
    text = (
        f"I couldn't format the meal plan ({exc.message}). "
        f"Here is the response as received:\n\n{exc.raw_excerpt}"
    )
    if exc.truncated:
        text += f"\n\n… (truncated, {exc.raw_length} characters in total)"
    return text


class ChatSession:
    def __init__(
        self,
        model: ModelClient,
        transcript: Transcript | None = None,
        form: MealPlanForm | None = None,
    ) -> None:
        self._model = model
        self.transcript = transcript or Transcript()
        self.form = form or MealPlanForm()
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    # ───────────────────────── free chat ─────────────────────────────
    async def send_message(self, text: str) -> list[ConversationTurn]:
        """Send `text` as-is; blank input is ignored and returns no turns."""
        if not text.strip():
            return []
        self._claim()
        try:
            turns = [self.transcript.add(Author.user, PlainText(text=text))]
            try:
                answer = await self._call_model(text)
            except AIServiceError as exc:
                turns.append(self._error_turn(exc))
            else:
                turns.append(self.transcript.add(Author.assistant, PlainText(text=answer)))
            return turns
        finally:
            self._busy = False

    # ───────────────────────── meal plan ─────────────────────────────
    async def submit_meal_plan(self) -> SubmitOutcome:
        if self._busy:
            raise SessionBusyError("A request is already in progress")

        profile = self.form.submit()
        if profile is None:
            return SubmitOutcome(accepted=False, errors=self.form.errors)

        self._claim()
        try:
            outcome = SubmitOutcome(accepted=True)
            summary = build_user_request_summary(profile)
            outcome.turns.append(self.transcript.add(Author.user, PlainText(text=summary)))

            try:
                raw = await self._call_model(build_meal_plan_prompt(profile))
            except AIServiceError as exc:
                outcome.turns.append(self._error_turn(exc))
                return outcome

            try:
                plan = normalize(raw)
            except NormalizationError as exc:
                outcome.turns.append(
                    self.transcript.add(Author.assistant, PlainText(text=fallback_text(exc)))
                )
                return outcome

            _LOG.info("Meal plan generated with %d meals", len(plan.meals))
            outcome.meal_plan = plan
            outcome.turns.append(
                self.transcript.add(Author.assistant, StructuredResult(meal_plan=plan))
            )
            outcome.turns.append(
                self.transcript.add(
                    Author.assistant,
                    ActionPrompt(
                        actions=frozenset({Action.download_json, Action.new_meal_plan}),
                        text=PLAN_FOLLOW_UP,
                    ),
                )
            )
            return outcome
        finally:
            self._busy = False

    def start_new_meal_plan(self) -> None:
        self.form.reset()

    def meal_plan_for(self, turn_id: str) -> MealPlan:
        """Plan carried by turn `turn_id`; KeyError if absent, ValueError if not a plan."""
        turn = self.transcript.get(turn_id)
        if turn is None:
            raise KeyError(turn_id)
        if not isinstance(turn.payload, StructuredResult):
            raise ValueError(f"turn {turn_id} does not hold a meal plan")
        return turn.payload.meal_plan

    # ───────────────────────── internals ─────────────────────────────
    def _claim(self) -> None:
        if self._busy:
            raise SessionBusyError("A request is already in progress")
        self._busy = True

    async def _call_model(self, prompt: str) -> str:
        try:
            return await self._model.send_prompt(prompt)
        except AIServiceError:
            raise
        except Exception as exc:
            _LOG.exception("Model client raised an unexpected error")
            raise AIServiceError(f"AI service error: {exc}", exc) from exc

    def _error_turn(self, exc: AIServiceError) -> ConversationTurn:
        _LOG.error("Model request failed: %s", exc.message)
        return self.transcript.add(
            Author.assistant, PlainText(text=f"Error: {exc.message}", is_error=True)
        )
