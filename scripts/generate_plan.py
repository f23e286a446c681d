"""
scripts/generate_plan.py
────────────────────────────────────────────────────────────────────────
Request one meal plan from the terminal and save it as JSON:

    python -m scripts.generate_plan --age 30 --height "5'10\"" --weight 170

Print the prompt without calling the model:

    python -m scripts.generate_plan --age 30 --height 178cm --weight 170 --dry-run
"""
from __future__ import annotations

import asyncio
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path

from config import settings
from core.errors import MealChatError, NormalizationError
from core.form_state import DEFAULT_VALUES, MealPlanForm
from core.prompt_builder import build_meal_plan_prompt
from core.response_normalizer import normalize
from services.chat_session import fallback_text
from services.export import DEFAULT_FILENAME, download_json
from services.gemini import GeminiClient


def _parser() -> ArgumentParser:
    ap = ArgumentParser(description="Generate a one-day meal plan with Gemini")
    ap.add_argument("--gender", default=DEFAULT_VALUES["gender"])
    ap.add_argument("--age", required=True)
    ap.add_argument("--height", required=True, help="e.g. 5'10\", 5ft, 178cm, 1.78m")
    ap.add_argument("--weight", required=True, help="pounds")
    ap.add_argument("--activity-level", default=DEFAULT_VALUES["activity_level"])
    ap.add_argument("--calorie-deficit", default=DEFAULT_VALUES["calorie_deficit"])
    ap.add_argument("--dietary-preferences", default="")
    ap.add_argument("--out", default=DEFAULT_FILENAME, help="output JSON path")
    ap.add_argument("--dry-run", action="store_true", help="print the prompt and stop")
    return ap


async def _run(args: Namespace) -> int:
    form = MealPlanForm(
        {
            "gender": args.gender,
            "age": args.age,
            "height": args.height,
            "weight": args.weight,
            "activity_level": args.activity_level,
            "calorie_deficit": args.calorie_deficit,
            "dietary_preferences": args.dietary_preferences,
        }
    )
    profile = form.submit()
    if profile is None:
        for name, msg in form.errors.items():
            print(f"{name}: {msg}", file=sys.stderr)
        return 2

    prompt = build_meal_plan_prompt(profile)
    if args.dry_run:
        print(prompt)
        return 0

    client = GeminiClient.from_settings(settings)
    raw = await client.send_prompt(prompt)
    try:
        plan = normalize(raw)
    except NormalizationError as exc:
        print(fallback_text(exc), file=sys.stderr)
        return 1

    out = Path(args.out)
    export = download_json(plan, out.name)
    out.write_bytes(export.content)

    tdee = plan.tdee_calculation
    print(f"TDEE {tdee.estimated_tdee_kcal} kcal → target {tdee.target_intake_kcal} kcal")
    for meal in plan.meals:
        print(f"  {meal.name:<10} {meal.estimated_calories} kcal  {meal.description}")
    print(f"Total: {plan.total_calories():g} kcal, saved to {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except MealChatError as exc:
        raise SystemExit(f"error: {exc.message}") from exc


if __name__ == "__main__":
    sys.exit(main())
