"""JSON codec: strict decoding for user input, lenient extraction for model output."""

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


_decoder = msgspec.json.Decoder()


def decode_object(text: str | bytes) -> dict[str, Any]:
    """
    Decode a JSON document that must be an object.

    Raises:
        JSONParseError: If the text is not valid JSON or not an object
    """
    raw = text.encode("utf-8") if isinstance(text, str) else text
    try:
        result = _decoder.decode(raw)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected JSON object, got {type(result).__name__}")
    return result


def strip_code_fences(text: str) -> str:
    """Drop a surrounding markdown code block (```json ... ```) if present."""
    if "```" not in text:
        return text

    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3

    end = text.find("```", start)
    if end == -1:
        return text[start:].strip()
    return text[start:end].strip()


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Pull the outermost JSON object out of free-form model output.

    Args:
        text: Text containing a JSON object, possibly fenced or surrounded by prose
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If no object can be recovered
    """
    working = strip_code_fences(text.strip())

    start = working.find("{")
    end = working.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError("No JSON object found in text")

    candidate = working[start : end + 1]

    try:
        return decode_object(candidate)
    except JSONParseError:
        if not repair:
            raise

    try:
        repaired = json.loads(repair_json(candidate))
    except (ValueError, TypeError) as e:
        raise JSONParseError(f"JSON repair failed: {e}", e) from e

    if not isinstance(repaired, dict):
        raise JSONParseError(f"Expected JSON object, got {type(repaired).__name__}")
    return repaired


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string.

    Compact output goes through orjson (no whitespace, like JSON.stringify);
    indented output and anything orjson rejects go through the stdlib.
    """
    indent = kwargs.get("indent", 0)

    if not indent:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except TypeError:
            # integers outside 64-bit range and other edge cases
            pass

    return json.dumps(
        obj,
        indent=indent or None,
        ensure_ascii=False,
        separators=None if indent else (",", ":"),
        default=str,
    )
