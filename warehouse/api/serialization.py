"""Serialization of models into backend request payloads."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_payload(obj: Any, exclude: set[str] | None = None) -> dict:
    """Convert a dataclass or dict into a JSON-ready payload.

    ``None`` values are dropped so optional fields are left untouched
    on update.
    """
    if is_dataclass(obj):
        data = {f.name: getattr(obj, f.name) for f in fields(obj)}
    elif isinstance(obj, dict):
        data = obj
    else:
        raise TypeError(f"Cannot build payload from {type(obj).__name__}")

    skip = exclude or set()
    return {
        key: serialize_value(value)
        for key, value in data.items()
        if value is not None and key not in skip
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize_value(getattr(value, f.name)) for f in fields(value)}
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value
