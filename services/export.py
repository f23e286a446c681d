from __future__ import annotations

import json
from dataclasses import dataclass

from core.models.meal_plan import MealPlan

DEFAULT_FILENAME = "prompt_output.json"


@dataclass(frozen=True)
class JsonExport:
    filename: str
    content: bytes
    media_type: str = "application/json"


def download_json(plan: MealPlan, filename: str = DEFAULT_FILENAME) -> JsonExport:
    """Pretty-printed plan, keys in schema order, ready to hand out as a file."""
    body = json.dumps(plan.to_json_dict(), indent=2, ensure_ascii=False)
    return JsonExport(filename=filename, content=body.encode("utf-8"))
