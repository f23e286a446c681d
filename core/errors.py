"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Exception taxonomy shared by the core and the services.

* ConfigurationError  – fatal, raised once at start-up
* AIServiceError      – the model call failed
* ParseError          – no JSON could be read from the model's answer
* SchemaError         – JSON parsed but the plan keys are missing
* SessionBusyError    – a model request is already in flight

Per-field validation problems are never raised; they live in the form
state (see core.form_state).
"""

from __future__ import annotations

RAW_EXCERPT_LIMIT = 1000


class MealChatError(Exception):
    """Base error for the meal-plan chat core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(MealChatError):
    """Required configuration (the API credential) is missing."""


class AIServiceError(MealChatError):
    """The model call itself failed."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class NormalizationError(MealChatError):
    """
    The model answered but the answer is not a usable meal plan.

    Carries the head of the *original* raw response so the caller can show
    the user what the model actually said.
    """

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw_excerpt = raw[:RAW_EXCERPT_LIMIT]
        self.raw_length = len(raw)

    @property
    def truncated(self) -> bool:
        return self.raw_length > RAW_EXCERPT_LIMIT


class ParseError(NormalizationError):
    """No parseable JSON payload in the response."""


class SchemaError(NormalizationError):
    """JSON payload lacks one of the required top-level keys."""


class SessionBusyError(MealChatError):
    """A request was made while another one is still outstanding."""
