import json
import re

from services.errors import MalformedResponseError

# ```json / ``` fences Gemini wraps around JSON output, with the newline they usually sit on
_FENCE_RE = re.compile(r"```json\n?|\n?```")


def clean_response_text(raw: str) -> str:
    """Strips markdown code fences and surrounding whitespace from model output."""
    return _FENCE_RE.sub("", raw).strip()


def parse_json_response(raw: str):
    """
    Cleans the model text and parses it as JSON.

    Raises MalformedResponseError (carrying the raw text) instead of letting
    json.JSONDecodeError escape.
    """
    cleaned = clean_response_text(raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        print(f"[response_parser] Error decoding Gemini JSON response: {e}\nRaw response was: {raw[:500]}")
        raise MalformedResponseError(raw, str(e)) from e


def parse_json_object(raw: str) -> dict:
    parsed = parse_json_response(raw)
    if not isinstance(parsed, dict):
        raise MalformedResponseError(raw, f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_json_array(raw: str) -> list:
    parsed = parse_json_response(raw)
    if not isinstance(parsed, list):
        raise MalformedResponseError(raw, f"expected a JSON array, got {type(parsed).__name__}")
    return parsed
