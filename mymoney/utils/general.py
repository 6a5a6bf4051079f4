"""General Utility Functions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from pydantic import TypeAdapter

__all__ = ["convert_to_json_safe", "ensure_utc", "utc_now"]


JsonSafeType = Union[
    None,
    str,
    int,
    bool,
    float,
    Dict[str, "JsonSafeType"],
    List["JsonSafeType"],
]
"""The set of types that are natively representable in JSON."""

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def utc_now() -> datetime:
    """Return the current instant as an aware UTC ``datetime``."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware values are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def convert_to_json_safe(data: object) -> JsonSafeType:
    """Convert a value to the JSON form Supabase receives.

    Uses the same encoder as ``BaseModel.model_dump(mode="json")`` so that
    filter bounds and stored fields share one representation:
    ``datetime`` -> ISO-8601 string, ``Decimal`` -> string, enums -> value.
    """
    if isinstance(data, datetime):
        data = ensure_utc(data)
    return _JSON_ADAPTER.dump_python(data, mode="json")
