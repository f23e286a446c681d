# tests/test_export.py
from __future__ import annotations

import json

from core.models.meal_plan import MealPlan
from services.export import DEFAULT_FILENAME, download_json


def test_export_defaults(plan_payload):
    export = download_json(MealPlan.model_validate(plan_payload))
    assert export.filename == DEFAULT_FILENAME == "prompt_output.json"
    assert export.media_type == "application/json"
    assert json.loads(export.content.decode("utf-8")) == plan_payload


def test_export_is_indented_in_schema_order(plan_payload):
    # key order of the input must not matter
    shuffled = dict(reversed(list(plan_payload.items())))
    text = download_json(MealPlan.model_validate(shuffled)).content.decode("utf-8")
    assert list(json.loads(text)) == [
        "TDEE_Calculation",
        "Daily_Macro_Targets_Grams",
        "Meal_Plan",
    ]
    assert '\n  "TDEE_Calculation": {\n    "estimated_TDEE_kcal": 2450' in text


def test_export_is_stable(plan_payload):
    plan = MealPlan.model_validate(plan_payload)
    assert download_json(plan).content == download_json(plan).content


def test_export_keeps_non_ascii(plan_payload):
    plan_payload["Meal_Plan"][0]["items"][0]["food"] = "Crème fraîche"
    text = download_json(MealPlan.model_validate(plan_payload)).content.decode("utf-8")
    assert "Crème fraîche" in text
