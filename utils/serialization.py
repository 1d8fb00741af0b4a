"""
JSON helpers for driver-native values
"""

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID


def serialize_result(obj: Any) -> Any:
    """JSON serialization helper for non-native types."""
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, timedelta):
        return str(obj)
    if isinstance(obj, (UUID, Decimal)):
        # Decimal as text keeps every digit of NUMERIC/DECIMAL columns
        return str(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj).hex()
    return str(obj)


def to_json(data: Any) -> str:
    """Pretty-printed JSON (2-space indent, non-ASCII kept as-is) with driver values serialized."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=serialize_result)
