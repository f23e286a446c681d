"""
core/field_validation.py
────────────────────────────────────────────────────────────────────────
Pure validators for the meal-plan form's free-text fields.

Every validator returns a `FieldResult`; nothing here raises for bad user
input.  Height accepts a handful of textual shapes and is normalised to
centimetres:

    5'10"   5'10    → (feet*12 + inches) * 2.54
    5ft             → feet * 30.48
    170cm           → as is
    1.70m   170m    → metres * 100
    170     170.5   → assumed centimetres
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

# ──────────────────────────────────────────────────────────────────────
#  Bounds (closed intervals)
# ──────────────────────────────────────────────────────────────────────
HEIGHT_CM_RANGE = (100.0, 250.0)
AGE_RANGE = (18, 100)
WEIGHT_LBS_RANGE = (50, 500)
# The form advertises 300-800 kcal (sustainable → aggressive loss).
CALORIE_DEFICIT_RANGE = (300, 800)

_NUM = r"(\d+(?:\.\d+)?)"
_FEET_INCHES = re.compile(rf"^{_NUM}\s*'\s*{_NUM}\s*\"?$")
_FEET = re.compile(rf"^{_NUM}\s*ft$", re.IGNORECASE)
_CENTIMETRES = re.compile(rf"^{_NUM}\s*cm$", re.IGNORECASE)
_METRES = re.compile(rf"^{_NUM}\s*m$", re.IGNORECASE)
_BARE = re.compile(rf"^{_NUM}$")
_INTEGER = re.compile(r"^[+-]?\d+$")

# (pattern, cm per unit)
_SINGLE_UNIT_FORMS = [
    (_FEET, 30.48),
    (_CENTIMETRES, 1.0),
    (_METRES, 100.0),
    (_BARE, 1.0),
]


class ErrorKind(str, Enum):
    required = "required"
    negative_value = "negative_value"
    invalid_format = "invalid_format"
    out_of_range = "out_of_range"


@dataclass(frozen=True)
class FieldResult:
    value: float | int | str | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _fail(kind: ErrorKind) -> FieldResult:
    return FieldResult(error=kind)


# ──────────────────────────────────────────────────────────────────────
#  Height
# ──────────────────────────────────────────────────────────────────────
def parse_height_cm(text: str) -> float | None:
    """Convert an already-trimmed height string to cm, or None if unknown shape."""
    m = _FEET_INCHES.match(text)
    if m:
        feet, inches = float(m.group(1)), float(m.group(2))
        return (feet * 12 + inches) * 2.54

    for pattern, factor in _SINGLE_UNIT_FORMS:
        m = pattern.match(text)
        if m:
            return float(m.group(1)) * factor
    return None


def validate_height(raw: str | None) -> FieldResult:
    text = (raw or "").strip()
    if not text:
        return _fail(ErrorKind.required)
    if "-" in text:
        return _fail(ErrorKind.negative_value)

    cm = parse_height_cm(text)
    if cm is None:
        return _fail(ErrorKind.invalid_format)

    low, high = HEIGHT_CM_RANGE
    if not low <= cm <= high:
        return _fail(ErrorKind.out_of_range)
    return FieldResult(value=cm)


# ──────────────────────────────────────────────────────────────────────
#  Integers / choices
# ──────────────────────────────────────────────────────────────────────
def validate_int_field(raw: str | int | None, low: int, high: int) -> FieldResult:
    text = str(raw).strip() if raw is not None else ""
    if not text:
        return _fail(ErrorKind.required)
    if not _INTEGER.match(text):
        return _fail(ErrorKind.invalid_format)

    try:
        value = int(text)
    except ValueError:
        # past the interpreter's int-conversion digit limit
        return _fail(ErrorKind.out_of_range)
    if not low <= value <= high:
        return _fail(ErrorKind.out_of_range)
    return FieldResult(value=value)


def validate_choice(raw: str | None, choices: Iterable[str]) -> FieldResult:
    text = (raw or "").strip()
    if not text:
        return _fail(ErrorKind.required)
    for choice in choices:
        if text.lower() == choice.lower():
            return FieldResult(value=choice)
    return _fail(ErrorKind.invalid_format)


# ──────────────────────────────────────────────────────────────────────
#  Messages
# ──────────────────────────────────────────────────────────────────────
def error_message(
    label: str,
    kind: ErrorKind,
    bounds: tuple[float, float] | None = None,
    unit: str = "",
) -> str:
    """Human-readable text for a failed field, e.g. 'Age must be between 18 and 100'."""
    if kind is ErrorKind.required:
        return f"{label} is required"
    if kind is ErrorKind.negative_value:
        return f"{label} cannot be negative"
    if kind is ErrorKind.out_of_range and bounds is not None:
        low, high = (f"{b:g}" for b in bounds)
        suffix = f" {unit}" if unit else ""
        return f"{label} must be between {low} and {high}{suffix}"
    if kind is ErrorKind.out_of_range:
        return f"{label} is out of range"
    return f"{label} has an invalid format"
