"""JSON parsing for generator output and fast encoding for storage."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code fence (```json ... ``` or ``` ... ```).

    Args:
        text: Raw model output

    Returns:
        Text without the fence markers
    """
    text = text.strip()
    if not text.startswith("```"):
        return text

    first_newline = text.find("\n")
    if first_newline == -1:
        # Single-line fence such as ```{"a": 1}```
        text = text[3:]
        if text.lower().startswith("json"):
            text = text[4:]
    else:
        text = text[first_newline + 1:]

    if text.rstrip().endswith("```"):
        text = text.rstrip()[:-3]
    return text.strip()


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from model output.

    Args:
        text: Text containing JSON, optionally fenced
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If no object could be parsed
    """
    cleaned = strip_code_fences(text)

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError("No JSON object found in text")

    json_str = cleaned[start:end + 1]

    # msgspec first (fastest)
    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)
    else:
        if not isinstance(result, dict):
            raise JSONParseError(f"Expected dict, got {type(result).__name__}")
        return result

    # Last resort: json_repair
    try:
        result = json.loads(repair_json(json_str))
    except (ValueError, TypeError) as e:
        raise JSONParseError(f"JSON repair failed: {e}", e)

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected dict, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except TypeError:
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    if indent == 2:
        try:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        except TypeError:
            pass

    return json.dumps(obj, indent=indent if indent > 0 else None)


def loads(data: bytes | str) -> Any:
    """Decode JSON bytes or text."""
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e)
