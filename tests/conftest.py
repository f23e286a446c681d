from __future__ import annotations

import copy
import json

import pytest

PLAN = {
    "TDEE_Calculation": {
        "estimated_TDEE_kcal": 2450,
        "target_deficit_kcal": 500,
        "target_calorie_intake_kcal": 1950,
    },
    "Daily_Macro_Targets_Grams": {"protein": 150, "fat": 65, "carbohydrates": 190},
    "Meal_Plan": [
        {
            "meal_name": "Breakfast",
            "estimated_calories_kcal": 450,
            "description": "Oats with berries and whey",
            "items": [
                {"food": "Oatmeal", "portion": "1/2 cup dry"},
                {"food": "Blueberries", "portion": "1 cup"},
                {"food": "Whey protein", "portion": "1 scoop"},
            ],
        },
        {
            "meal_name": "Lunch",
            "estimated_calories_kcal": 550,
            "description": "Chicken rice bowl",
            "items": [
                {"food": "Chicken breast", "portion": "150 g"},
                {"food": "Brown rice", "portion": "3/4 cup cooked"},
            ],
        },
        {
            "meal_name": "Dinner",
            "estimated_calories_kcal": 650,
            "description": "Salmon with potatoes and greens",
            "items": [
                {"food": "Salmon fillet", "portion": "170 g"},
                {"food": "Baby potatoes", "portion": "200 g"},
                {"food": "Green beans", "portion": "1 cup"},
            ],
        },
        {
            "meal_name": "Snack",
            "estimated_calories_kcal": 300,
            "description": "Greek yogurt and almonds",
            "items": [
                {"food": "Greek yogurt", "portion": "170 g"},
                {"food": "Almonds", "portion": "15 g"},
            ],
        },
    ],
}

VALID_FORM = {
    "gender": "Female",
    "age": "34",
    "height": "5'6\"",
    "weight": "150",
    "activity_level": "Lightly Active",
    "calorie_deficit": "400",
    "dietary_preferences": "Vegetarian",
}


class FakeModel:
    """Stand-in ModelClient: replays canned answers (or raises canned errors)."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts: list[str] = []

    async def send_prompt(self, text: str) -> str:
        self.prompts.append(text)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def plan_payload() -> dict:
    return copy.deepcopy(PLAN)


@pytest.fixture
def plan_json(plan_payload) -> str:
    return json.dumps(plan_payload, indent=2)


@pytest.fixture
def fenced_plan(plan_json) -> str:
    return f"Sure! Here is your plan:\n```json\n{plan_json}\n```\nEnjoy your meals."


@pytest.fixture
def valid_form_values() -> dict:
    return dict(VALID_FORM)


@pytest.fixture
def make_model():
    return FakeModel
