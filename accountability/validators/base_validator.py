"""
Base validation utilities shared across validators and services.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def is_populated(value: Any) -> bool:
    """
    Uniform emptiness rule for leader data.

    - None is empty
    - A string is empty if blank after trimming
    - A sequence or set is empty if it has no elements
    - A mapping is empty if it has no keys
    - A pydantic record is empty if none of its fields are populated, since
      a model always carries every key
    - Numbers and booleans (including 0 and False) are populated

    Args:
        value: Any leader attribute or sub-record

    Returns:
        True if the value carries data
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, BaseModel):
        return any(is_populated(v) for v in value.__dict__.values())
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def has_any_populated(record: Any, fields: tuple[str, ...]) -> bool:
    """True if at least one of the named fields on a record or mapping is populated."""
    if record is None:
        return False
    for name in fields:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if is_populated(value):
            return True
    return False
