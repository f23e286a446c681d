"""
core/models/profile.py
────────────────────────────────────────────────────────────────────────
The validated user profile a meal-plan prompt is built from.

Only `MealPlanForm.submit()` produces one in practice; the field bounds are
repeated here so a profile can not be built around the form.
"""
from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from core.field_validation import (
    AGE_RANGE,
    CALORIE_DEFICIT_RANGE,
    HEIGHT_CM_RANGE,
    WEIGHT_LBS_RANGE,
)


class Gender(str, Enum):
    male = "Male"
    female = "Female"


class ActivityLevel(str, Enum):
    sedentary = "Sedentary"
    lightly_active = "Lightly Active"
    moderately_active = "Moderately Active"
    heavily_active = "Heavily Active"


class UserProfile(BaseModel):
    """Validated form input; only ever built by a successful form submit."""

    gender: Gender
    age: int = Field(..., ge=AGE_RANGE[0], le=AGE_RANGE[1])
    height: str = Field(..., description="height as the user typed it")
    height_cm: float = Field(..., ge=HEIGHT_CM_RANGE[0], le=HEIGHT_CM_RANGE[1])
    weight_lbs: int = Field(..., ge=WEIGHT_LBS_RANGE[0], le=WEIGHT_LBS_RANGE[1])
    activity_level: ActivityLevel
    calorie_deficit: int = Field(
        ..., ge=CALORIE_DEFICIT_RANGE[0], le=CALORIE_DEFICIT_RANGE[1]
    )
    dietary_preferences: str = ""

    model_config = ConfigDict(frozen=True)
