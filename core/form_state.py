"""
core/form_state.py
────────────────────────────────────────────────────────────────────────
Validation state for the "create my meal plan" form.

Each field is Untouched until the user edits it or leaves it; from then on
its error (if any) is shown.  Errors are always recomputed from scratch
from the current values and the touched set, never patched field by field,
so what is displayed can not drift from what is typed.

`submit()` touches every required field first, so errors on fields the
user never visited surface too, and only returns a `UserProfile` when the
whole form is clean.  Values are never auto-corrected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from core.field_validation import (
    AGE_RANGE,
    CALORIE_DEFICIT_RANGE,
    HEIGHT_CM_RANGE,
    WEIGHT_LBS_RANGE,
    FieldResult,
    error_message,
    validate_choice,
    validate_height,
    validate_int_field,
)
from core.models.profile import ActivityLevel, Gender, UserProfile

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    label: str
    check: Callable[[str], FieldResult]
    bounds: tuple[float, float] | None = None
    unit: str = ""


def _int_spec(label: str, bounds: tuple[int, int], unit: str = "") -> FieldSpec:
    low, high = bounds
    return FieldSpec(label, lambda v: validate_int_field(v, low, high), bounds, unit)


# ─────────────────────────── field table ─────────────────────────────
FIELD_SPECS: dict[str, FieldSpec] = {
    "gender": FieldSpec("Gender", lambda v: validate_choice(v, [g.value for g in Gender])),
    "age": _int_spec("Age", AGE_RANGE),
    "height": FieldSpec("Height", validate_height, HEIGHT_CM_RANGE, "cm"),
    "weight": _int_spec("Weight", WEIGHT_LBS_RANGE, "lbs"),
    "activity_level": FieldSpec(
        "Activity level", lambda v: validate_choice(v, [a.value for a in ActivityLevel])
    ),
    "calorie_deficit": _int_spec("Calorie deficit", CALORIE_DEFICIT_RANGE, "kcal"),
}

REQUIRED_FIELDS: tuple[str, ...] = tuple(FIELD_SPECS)
OPTIONAL_FIELDS: tuple[str, ...] = ("dietary_preferences",)
ALL_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + OPTIONAL_FIELDS

DEFAULT_VALUES: dict[str, str] = {
    "gender": Gender.male.value,
    "age": "",
    "height": "",
    "weight": "",
    "activity_level": ActivityLevel.moderately_active.value,
    "calorie_deficit": "500",
    "dietary_preferences": "",
}


@dataclass(frozen=True)
class FieldState:
    touched: bool = False
    error: str = ""


# ─────────────────────────── pure helpers ────────────────────────────
def check_values(values: Mapping[str, str]) -> dict[str, FieldResult]:
    return {name: spec.check(values.get(name, "")) for name, spec in FIELD_SPECS.items()}


def validate_values(values: Mapping[str, str]) -> dict[str, str]:
    """Error message for every invalid field, touched or not."""
    out: dict[str, str] = {}
    for name, result in check_values(values).items():
        if result.error is not None:
            spec = FIELD_SPECS[name]
            out[name] = error_message(spec.label, result.error, spec.bounds, spec.unit)
    return out


def _require_field(name: str) -> None:
    if name not in ALL_FIELDS:
        raise KeyError(f"unknown form field: {name!r}")


# ─────────────────────────── state machine ───────────────────────────
class MealPlanForm:
    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(DEFAULT_VALUES)
        for name, value in (values or {}).items():
            _require_field(name)
            self._values[name] = value
        self._touched: set[str] = set()
        self._state: dict[str, FieldState] = {}
        self._recompute()

    # --------------- read side --------------------------------------
    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def touched(self) -> frozenset[str]:
        return frozenset(self._touched)

    def validation_state(self) -> dict[str, FieldState]:
        return dict(self._state)

    @property
    def errors(self) -> dict[str, str]:
        """Errors the user should currently see (touched fields only)."""
        return {name: st.error for name, st in self._state.items() if st.error}

    @property
    def can_submit(self) -> bool:
        return not validate_values(self._values)

    # --------------- events -----------------------------------------
    def field_changed(self, name: str, value: str) -> dict[str, FieldState]:
        _require_field(name)
        self._values[name] = value
        self._touched.add(name)
        return self._recompute()

    def field_blurred(self, name: str) -> dict[str, FieldState]:
        _require_field(name)
        self._touched.add(name)
        return self._recompute()

    def submit(self) -> UserProfile | None:
        """Return the profile when every field is valid, else None (errors shown)."""
        self._touched.update(REQUIRED_FIELDS)
        self._recompute()
        if self.errors:
            _LOG.debug("Form submit blocked: %s", sorted(self.errors))
            return None

        results = check_values(self._values)
        return UserProfile(
            gender=results["gender"].value,
            age=results["age"].value,
            height=self._values["height"].strip(),
            height_cm=results["height"].value,
            weight_lbs=results["weight"].value,
            activity_level=results["activity_level"].value,
            calorie_deficit=results["calorie_deficit"].value,
            dietary_preferences=self._values["dietary_preferences"].strip(),
        )

    def reset(self) -> None:
        self._values = dict(DEFAULT_VALUES)
        self._touched.clear()
        self._recompute()

    # --------------- internals --------------------------------------
    def _recompute(self) -> dict[str, FieldState]:
        messages = validate_values(self._values)
        self._state = {
            name: FieldState(
                touched=name in self._touched,
                error=messages.get(name, "") if name in self._touched else "",
            )
            for name in ALL_FIELDS
        }
        return dict(self._state)
