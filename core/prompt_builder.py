"""
core/prompt_builder.py
────────────────────────────────────────────────────────────────────────
Turns a validated `UserProfile` into the meal-plan instruction sent to the
model.  The output is a pure function of the profile (no dates, no
randomness), so identical profiles give byte-identical prompts.
"""

from __future__ import annotations

from core.models.meal_plan import REQUIRED_KEYS
from core.models.profile import UserProfile

MEAL_NAMES = ("Breakfast", "Lunch", "Dinner", "Snack")

# Literal skeleton embedded in the prompt.  Keys must stay in sync with
# core.models.meal_plan aliases.
MEAL_PLAN_SCHEMA = """{
  "TDEE_Calculation": {
    "estimated_TDEE_kcal": "[Number]",
    "target_deficit_kcal": "[Number]",
    "target_calorie_intake_kcal": "[Number]"
  },
  "Daily_Macro_Targets_Grams": {
    "protein": "[Number]",
    "fat": "[Number]",
    "carbohydrates": "[Number]"
  },
  "Meal_Plan": [
    {
      "meal_name": "[String: one of 'Breakfast', 'Lunch', 'Dinner', 'Snack']",
      "estimated_calories_kcal": "[Number]",
      "description": "[String: a brief summary of the meal]",
      "items": [
        {
          "food": "[String: e.g. 'Oatmeal']",
          "portion": "[String: e.g. '1/2 cup dry', '1 whole']"
        }
      ]
    }
  ]
}"""


def _height_text(profile: UserProfile) -> str:
    return f"{profile.height} ({profile.height_cm:.1f} cm)"


def build_meal_plan_prompt(profile: UserProfile) -> str:
    preferences = profile.dietary_preferences.strip() or "None"
    keys = ", ".join(REQUIRED_KEYS[:-1]) + f", and {REQUIRED_KEYS[-1]}"
    meals = ", ".join(MEAL_NAMES)

    return f"""CRITICAL: Respond with ONLY valid JSON. No other text, no explanations, no markdown formatting, no code fences.

MEAL PLAN REQUEST

I am a {profile.gender.value}, {profile.age} years old.
My height is {_height_text(profile)} and my weight is {profile.weight_lbs} lbs.
My daily activity level is {profile.activity_level.value}.

Goal:
I want to keep a daily deficit of {profile.calorie_deficit} calories.

Dietary restrictions, allergies or preferences: {preferences}.

OUTPUT: a single valid JSON object that follows the schema below exactly.
It must contain three top-level keys: {keys}.

TDEE_Calculation: my estimated Total Daily Energy Expenditure (TDEE), the target deficit and the resulting daily calorie target.
Daily_Macro_Targets_Grams: estimated daily grams of protein, fat and carbohydrates for the whole plan.
Meal_Plan: a one-day plan ({meals}) that hits the calorie target.

Required JSON schema:
{MEAL_PLAN_SCHEMA}

RULES:
- Replace every placeholder ([Number], [String]) with a real value
- Numbers must be plain JSON numbers, not strings
- Do NOT write anything before or after the JSON object
- Do NOT wrap the JSON in markdown code blocks
- The response must be parseable as JSON
- Include exactly 4 meals: {meals}"""


def build_user_request_summary(profile: UserProfile) -> str:
    """Short transcript line standing in for the (long) prompt."""
    prefs = profile.dietary_preferences.strip()
    line = (
        f"Generate a meal plan: {profile.gender.value}, {profile.age} y, "
        f"{_height_text(profile)}, {profile.weight_lbs} lbs, "
        f"{profile.activity_level.value}, {profile.calorie_deficit} kcal deficit"
    )
    return f"{line}, preferences: {prefs}" if prefs else line
