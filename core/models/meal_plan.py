"""
Typed view of the JSON meal plan the model is asked to produce.

Python names are snake_case; the aliases are the exact keys of the prompt's
schema.  Only the three top-level keys are mandatory: nested numbers may
arrive as strings ("450", "450 kcal") and missing nested fields fall back
to empty defaults, so display code must go through `as_number()`.
"""

from __future__ import annotations

import re
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float, str, None]

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def as_number(value: Any) -> float | None:
    """Best-effort numeric reading of a model-supplied value."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUMBER.search(value.replace(",", ""))
        return float(m.group()) if m else None
    return None


class _PlanModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MealItem(_PlanModel):
    food: str = ""
    portion: str = ""

    @field_validator("food", "portion", mode="before")
    @classmethod
    def _scalar_to_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        return str(v) if isinstance(v, (int, float)) else v


class Meal(_PlanModel):
    name: str = Field("", alias="meal_name")
    estimated_calories: Number = Field(None, alias="estimated_calories_kcal")
    description: str = ""
    items: list[MealItem] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class TDEECalculation(_PlanModel):
    estimated_tdee_kcal: Number = Field(None, alias="estimated_TDEE_kcal")
    target_deficit_kcal: Number = None
    target_intake_kcal: Number = Field(None, alias="target_calorie_intake_kcal")


class DailyMacroTargets(_PlanModel):
    protein_grams: Number = Field(None, alias="protein")
    fat_grams: Number = Field(None, alias="fat")
    carb_grams: Number = Field(None, alias="carbohydrates")


class MealPlan(_PlanModel):
    tdee_calculation: TDEECalculation = Field(alias="TDEE_Calculation")
    macro_targets: DailyMacroTargets = Field(alias="Daily_Macro_Targets_Grams")
    meals: list[Meal] = Field(alias="Meal_Plan")

    def total_calories(self) -> float:
        """Sum of the meals' calorie estimates; unreadable values count as 0."""
        return sum(as_number(m.estimated_calories) or 0.0 for m in self.meals)

    def to_json_dict(self) -> dict[str, Any]:
        """The plan in the prompt's JSON shape (aliased keys, schema order)."""
        return self.model_dump(by_alias=True, exclude_unset=True)


REQUIRED_KEYS = ("TDEE_Calculation", "Daily_Macro_Targets_Grams", "Meal_Plan")
