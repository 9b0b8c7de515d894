"""Input validation: reject malformed data before it reaches the analyzer."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from returns.result import Failure, Result, Success

from .json import JSONParseError, decode_object

# Validation limits
MAX_INPUT_SIZE = 1024 * 1024  # 1MB
MAX_JSON_DEPTH = 20
MAX_ANSWER_LENGTH = 200


class MalformedInputError(Exception):
    """Top-level input is not usable structured data."""

    pass


@dataclass(frozen=True)
class InputProblem:
    """Why an input was rejected (for the Result form)."""

    message: str
    field: str | None = None


def validate_json_size(data: str, max_size: int = MAX_INPUT_SIZE, name: str = "Input") -> None:
    """
    Reject oversized documents before decoding them.

    Raises:
        MalformedInputError: If size exceeds limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise MalformedInputError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Reject pathologically nested documents.

    Raises:
        MalformedInputError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise MalformedInputError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def parse_input(
    text: str,
    max_size: int = MAX_INPUT_SIZE,
    max_depth: int = MAX_JSON_DEPTH,
) -> dict[str, Any]:
    """
    Parse raw input text into the object handed to the analyzer.

    Args:
        text: JSON document; must be an object (`{}` is accepted)
        max_size: Maximum document size in bytes
        max_depth: Maximum nesting depth

    Returns:
        Decoded object

    Raises:
        MalformedInputError: If the text is not a JSON object within limits
    """
    validate_json_size(text, max_size)

    try:
        data = decode_object(text)
    except JSONParseError as e:
        raise MalformedInputError(str(e)) from e

    validate_json_depth(data, max_depth)
    return data


def validate_input(text: str, **limits: int) -> Result[dict[str, Any], InputProblem]:
    """`parse_input` in Result form."""
    try:
        return Success(parse_input(text, **limits))
    except MalformedInputError as e:
        return Failure(InputProblem(str(e)))


class GenerationRequest(BaseModel):
    """Validated answers to the clarifying questions."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    answers: dict[str, str] = Field(default_factory=dict)

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, v: dict[str, str]) -> dict[str, str]:
        """Question ids and chosen options must be non-empty and short."""
        cleaned = {}
        for key, value in v.items():
            key, value = key.strip(), value.strip()
            if not key or not value:
                raise ValueError("Answer keys and values cannot be empty")
            if len(value) > MAX_ANSWER_LENGTH:
                raise ValueError(f"Answer for '{key}' is longer than {MAX_ANSWER_LENGTH} characters")
            cleaned[key] = value
        return cleaned

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "GenerationRequest":
        """Build from `key=value` strings (CLI form)."""
        answers = {}
        for pair in pairs:
            if "=" not in pair:
                raise ValueError(f"Expected key=value, got '{pair}'")
            key, value = pair.split("=", 1)
            answers[key] = value
        return cls(answers=answers)
