# tests/test_prompt_builder.py
from __future__ import annotations

import pytest

from core.models.profile import UserProfile
from core.prompt_builder import (
    MEAL_NAMES,
    build_meal_plan_prompt,
    build_user_request_summary,
)

PROFILE = UserProfile(
    gender="Male",
    age=30,
    height="5'10\"",
    height_cm=177.8,
    weight_lbs=180,
    activity_level="Moderately Active",
    calorie_deficit=500,
    dietary_preferences="No shellfish",
)


def test_prompt_is_deterministic():
    same = UserProfile(**PROFILE.model_dump())
    assert build_meal_plan_prompt(PROFILE) == build_meal_plan_prompt(same)


def test_prompt_names_required_keys():
    prompt = build_meal_plan_prompt(PROFILE)
    for key in ("TDEE_Calculation", "Daily_Macro_Targets_Grams", "Meal_Plan"):
        assert f'"{key}"' in prompt


def test_prompt_interpolates_profile():
    prompt = build_meal_plan_prompt(PROFILE)
    assert "I am a Male, 30 years old." in prompt
    assert "5'10\" (177.8 cm)" in prompt
    assert "180 lbs" in prompt
    assert "Moderately Active" in prompt
    assert "daily deficit of 500 calories" in prompt
    assert "No shellfish" in prompt


def test_prompt_demands_json_only_and_four_meals():
    prompt = build_meal_plan_prompt(PROFILE)
    assert prompt.startswith("CRITICAL: Respond with ONLY valid JSON")
    assert "Do NOT wrap the JSON in markdown code blocks" in prompt
    assert "Include exactly 4 meals: Breakfast, Lunch, Dinner, Snack" in prompt
    assert MEAL_NAMES == ("Breakfast", "Lunch", "Dinner", "Snack")


def test_blank_preferences_read_none():
    profile = PROFILE.model_copy(update={"dietary_preferences": ""})
    assert "preferences: None." in build_meal_plan_prompt(profile)


def test_different_profiles_differ():
    other = PROFILE.model_copy(update={"age": 31})
    assert build_meal_plan_prompt(other) != build_meal_plan_prompt(PROFILE)


def test_summary_line():
    line = build_user_request_summary(PROFILE)
    assert line.startswith("Generate a meal plan: Male, 30 y")
    assert line.endswith("preferences: No shellfish")


def test_profile_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        UserProfile(**{**PROFILE.model_dump(), "age": 15})
