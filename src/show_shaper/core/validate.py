"""Request validation for the HTTP boundary."""

import sys
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator, ConfigDict

from .errors import SchemaValidationError


# Validation limits
MAX_PAYLOAD_SIZE = 256 * 1024  # 256KB
MAX_JSON_DEPTH = 20
MAX_PROMPT_LENGTH = 2_000


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    errors: tuple[dict[str, Any], ...] = ()


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class PromptRequest(RequestValidator):
    """Natural-language edit request."""

    prompt: str = Field(min_length=1, max_length=MAX_PROMPT_LENGTH)

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Ensure prompt is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Prompt cannot be empty")
        return stripped


class UserIdentity(RequestValidator):
    """Mock header identity (x-user-id)."""

    user_id: str = Field(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.:@-]+$")


def validate_json_size(data: str, max_size: int = MAX_PAYLOAD_SIZE, name: str = "JSON") -> None:
    """
    Validate serialized payload size.

    Raises:
        SchemaValidationError: If size exceeds limit
    """
    size = sys.getsizeof(data)
    if size > max_size:
        raise SchemaValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        SchemaValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise SchemaValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
