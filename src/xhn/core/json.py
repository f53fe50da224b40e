"""Fast JSON encoding and decoding with multiple backends."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def _to_bytes(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        # Lone surrogates cannot be represented in UTF-8
        raise JSONParseError(f"Invalid text encoding: {e}", e) from e


def loads_json(
    text: str | bytes,
    max_size: int | None = None,
    max_depth: int | None = None,
) -> Any:
    """
    Parse a JSON document with size and depth guards.

    Args:
        text: JSON document
        max_size: Maximum allowed size in bytes (None = unlimited)
        max_depth: Maximum allowed nesting depth (None = unlimited)

    Returns:
        Parsed value (dict, list or scalar)

    Raises:
        JSONParseError: If the input is not a JSON document or breaks a limit
    """
    if not isinstance(text, (str, bytes)):
        raise JSONParseError(f"Expected str or bytes, got {type(text).__name__}")

    data = _to_bytes(text)
    if max_size is not None:
        validate_json_size(data, max_size, "Document")

    # Try orjson first (fastest)
    try:
        result = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        # orjson rejects integers outside 64-bit range; msgspec does not
        try:
            result = msgspec.json.decode(data)
        except msgspec.DecodeError:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if max_depth is not None:
        validate_json_depth(result, max_depth)
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0) or 0

    # Use orjson for compact or two-space output (fastest)
    if indent in (0, 2):
        option = orjson.OPT_INDENT_2 if indent == 2 else 0
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use msgspec for compact output (very fast)
    if indent == 0:
        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # Use stdlib for other indentations or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None)


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate JSON size before parsing.

    Args:
        data: JSON document to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(_to_bytes(data))
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 64, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion while reviving.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
