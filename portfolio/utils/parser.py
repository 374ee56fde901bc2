"""
Strict JSON parser for language model replies.

Models often wrap JSON in ```json ... ``` blocks. The fences are stripped and
the remainder must parse as JSON; no repair is attempted on broken output.
"""

import json
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from portfolio.errors import MalformedResponseError

T = TypeVar("T")

_OPENING_FENCE = re.compile(r"^\s*```[\w-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang line and a trailing ``` around the reply.

    Backticks inside the payload are left alone.
    """
    text = _OPENING_FENCE.sub("", text, count=1)
    return _CLOSING_FENCE.sub("", text, count=1).strip()


def extract_json(text: str, expect_array: bool | None = None) -> Any:
    """
    Parse the JSON payload of a model reply.

    Args:
        text: Raw model reply
        expect_array: True requires a list, False requires an object, None accepts either

    Returns:
        Parsed JSON value

    Raises:
        MalformedResponseError: If the reply is empty, not JSON, or the wrong container type
    """
    if not text or not text.strip():
        raise MalformedResponseError("Model returned an empty response")

    try:
        result = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Model response is not valid JSON: {e.msg}") from e

    if expect_array is True and not isinstance(result, list):
        raise MalformedResponseError(f"Expected a JSON array, got {type(result).__name__}")
    if expect_array is False and not isinstance(result, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(result).__name__}")

    return result


def parse_model_json(text: str, shape: type[T]) -> T:
    """
    Parse a model reply and validate it against a pydantic-compatible type.

    ``shape`` is anything TypeAdapter accepts, e.g. ``list[JobSearchResult]``.
    """
    origin = getattr(shape, "__origin__", None)
    expect_array = True if origin is list else None
    data = extract_json(text, expect_array=expect_array)

    try:
        return TypeAdapter(shape).validate_python(data)
    except SchemaError as e:
        raise MalformedResponseError(
            f"Model response does not match expected shape ({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e
