"""
Argument Validators

Ad hoc argument checks used by the tool handlers. Tool arguments arrive
untyped from the client, so each handler pulls what it needs through these
helpers and lets the raised ToolError reach the dispatcher.
"""

import json
from typing import Any, Optional

from errors import InvalidArgumentError, MissingArgumentError


def require_argument(arguments: dict[str, Any], name: str) -> Any:
    """Return arguments[name], raising MissingArgumentError if absent or None."""
    value = arguments.get(name)
    if value is None:
        raise MissingArgumentError(name)
    return value


def require_string(arguments: dict[str, Any], name: str) -> str:
    value = require_argument(arguments, name)
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"Argument '{name}' must be a non-empty string")
    return value


def _decode_json(value: Any, name: str, expected: str) -> Any:
    # MCP clients sometimes send objects as JSON strings
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            raise InvalidArgumentError(f"{name} parameter must be a valid JSON {expected}")
    return value


def require_object(arguments: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a mapping argument, decoding it first if it was sent as a JSON string."""
    value = _decode_json(require_argument(arguments, name), name, "object")
    if not isinstance(value, dict):
        raise InvalidArgumentError(f"Argument '{name}' must be an object")
    return value


def require_rows(arguments: dict[str, Any], name: str) -> list[dict[str, Any]]:
    """Return an object-or-array-of-objects argument as a list of row mappings."""
    value = _decode_json(require_argument(arguments, name), name, "object or array")
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list) and value and all(isinstance(row, dict) for row in value):
        return value
    raise InvalidArgumentError(f"Argument '{name}' must be an object or a non-empty array of objects")


def optional_count(arguments: dict[str, Any], name: str, default: int) -> int:
    """Return a non-negative integer argument, accepting numeric strings and whole floats."""
    value: Optional[Any] = arguments.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Argument '{name}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Argument '{name}' must be a number")
    if number < 0 or number != int(number):
        raise InvalidArgumentError(f"Argument '{name}' must be a non-negative whole number")
    return int(number)
