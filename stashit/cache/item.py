"""
StashIt — Item Model

Canonical record shape stored by every adapter, plus the validation
rules shared by the façade and the adapters.
"""

from datetime import datetime
from numbers import Number
from typing import Any

from pydantic import BaseModel, Field

from ..errors import ValidationError

Key = str
Extra = dict[str, Any]
Ttl = int | float | datetime | None


class _Unset:
    """Marker for an argument the caller did not pass."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Item(BaseModel):
    """A stored cache record."""

    key: Key
    value: Any = None
    extra: Extra = Field(default_factory=dict)
    ttl: Ttl = None


def validate_key(key: Any) -> None:
    """Ensure key is a non-empty string."""
    if not isinstance(key, str):
        raise ValidationError("'key' must be a string.", details={"type": type(key).__name__})

    if not key:
        raise ValidationError("'key' can't be empty.")


def validate_extra(extra: Any) -> None:
    """
    Ensure extra is a plain mapping.

    Lists, strings, numbers, booleans, callables and None are all rejected.
    """
    if not isinstance(extra, dict):
        raise ValidationError("'extra' must be an object.", details={"type": type(extra).__name__})


def validate_ttl(ttl: Any) -> None:
    """
    Ensure ttl has an acceptable shape.

    None and datetime are sentinels passed through untouched; anything else
    must be a strictly positive whole number of seconds. Expiry is never
    enforced here.
    """
    if ttl is None or isinstance(ttl, datetime):
        return

    if isinstance(ttl, bool) or not isinstance(ttl, Number):
        raise ValidationError("'ttl' needs to be a number.", details={"type": type(ttl).__name__})

    if isinstance(ttl, float) and not ttl.is_integer():
        raise ValidationError("'ttl' needs to be an intiger.", details={"ttl": ttl})

    if not isinstance(ttl, int | float):
        raise ValidationError("'ttl' needs to be an intiger.", details={"ttl": str(ttl)})

    if ttl <= 0:
        raise ValidationError(f"'ttl' needs to be greater than 0 (value passed: {ttl}).", details={"ttl": ttl})


def create_item(key: Key, value: Any, extra: Any = UNSET, ttl: Any = None) -> Item:
    """
    Build a validated Item.

    Args:
        key: Item key (non-empty string)
        value: Any serializable value
        extra: Metadata mapping (defaults to an empty dict when omitted)
        ttl: Optional positive integer seconds, datetime, or None

    Returns:
        Item instance

    Raises:
        ValidationError: If key, extra or ttl is malformed
    """
    if extra is UNSET:
        extra = {}

    validate_key(key)
    validate_extra(extra)
    validate_ttl(ttl)

    return Item(key=key, value=value, extra=extra, ttl=ttl)
