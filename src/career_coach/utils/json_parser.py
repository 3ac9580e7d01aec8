"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re

from career_coach.errors import JsonExtractionError

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


def extract_json(text: str) -> dict | list:
    """Extract JSON from LLM response, handling ```json blocks.

    Tries in order, first success wins:
    1. Direct json.loads on the full text
    2. Contents of a fenced code block (optional "json" tag)
    3. First '{' to last '}'

    Bare scalars ("42", "\"ok\"") do not count as a successful parse.
    """
    if not isinstance(text, str):
        raise JsonExtractionError("Expected response text, got nothing", text="")
    stripped = text.strip()

    # 1) Direct parse
    result = _loads_container(stripped)
    if result is not None:
        return result

    # 2) Fenced code block
    for match in _FENCE_RE.finditer(stripped):
        result = _loads_container(match.group(1).strip())
        if result is not None:
            return result

    # 3) First '{' to last '}'
    result = _extract_braces(stripped)
    if result is not None:
        return result

    raise JsonExtractionError(f"Could not extract JSON from text: {stripped[:200]}...", text=text)


def extract_json_object(text: str) -> dict:
    """Like extract_json, but the top-level value must be an object."""
    data = extract_json(text)
    if not isinstance(data, dict):
        raise JsonExtractionError(
            f"Expected a JSON object, got {type(data).__name__}", text=text
        )
    return data


def _loads_container(text: str) -> dict | list | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, (dict, list)) else None


def _extract_braces(text: str) -> dict | None:
    """Try to extract JSON object from first '{' to last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None
