"""
core/response_normalizer.py
────────────────────────────────────────────────────────────────────────
Raw model text → validated `MealPlan`.

The model is told to answer with bare JSON but regularly wraps it in a
```json fence, prefixes a sentence or trails a remark.  Steps:

1. trim
2. drop every ```json marker and every ``` marker (if a ```json fence is
   present), else drop every ``` marker
3. keep the span from the first "{" to the last "}" (greedy, across lines)
4. json.loads            → ParseError on failure (too-deep nesting included)
5. top-level key check   → SchemaError when a required key is missing/null

Errors carry the head of the *original* text, never the cleaned one.
No retries happen here.
"""

from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from core.errors import ParseError, SchemaError
from core.models.meal_plan import REQUIRED_KEYS, MealPlan

_LOG = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
_FENCE = "```"
# Greedy: first "{" to last "}", newlines included.
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


def extract_json_span(text: str) -> str | None:
    """First "{" … last "}" of `text`, or None when there is no such span."""
    match = _JSON_SPAN.search(text)
    return match.group(0) if match else None


def clean_response(raw: str) -> str:
    """Steps 1-3: the string that will be handed to the JSON parser."""
    text = raw.strip()
    if _JSON_FENCE.search(text):
        text = _JSON_FENCE.sub("", text).replace(_FENCE, "")
    elif _FENCE in text:
        text = text.replace(_FENCE, "")

    span = extract_json_span(text)
    return span if span is not None else text


def normalize(raw: str) -> MealPlan:
    cleaned = clean_response(raw)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        _LOG.warning("Model response is not JSON (%d chars): %s", len(raw), exc)
        raise ParseError(f"Could not parse model response as JSON: {exc.msg}", raw) from exc
    except RecursionError as exc:
        _LOG.warning("Model response JSON is nested too deeply (%d chars)", len(raw))
        raise ParseError("Could not parse model response as JSON: nested too deeply", raw) from exc

    if not isinstance(data, dict) or any(data.get(k) is None for k in REQUIRED_KEYS):
        _LOG.warning("Model response JSON lacks required keys")
        raise SchemaError("Response missing required fields", raw)

    try:
        return MealPlan.model_validate(data)
    except ValidationError as exc:
        _LOG.warning("Model response has an unusable plan shape: %s", exc.error_count())
        raise SchemaError("Response has an invalid meal plan structure", raw) from exc
    except RecursionError as exc:
        _LOG.warning("Model response plan is nested too deeply")
        raise SchemaError("Response has an invalid meal plan structure", raw) from exc
