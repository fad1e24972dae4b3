"""Numeric input coercion and validation for submitted activity fields."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Iterable


def coerce_number(raw: Any) -> float:
    """
    Convert a raw form value into a float.

    Blank, non-numeric, or otherwise unconvertible input becomes NaN so the
    validator rejects it through the same path as a non-positive value.
    """
    if isinstance(raw, bool):
        return math.nan
    if isinstance(raw, Real):
        try:
            return float(raw)
        except OverflowError:
            return math.nan
    if raw is None:
        return math.nan
    text = str(raw).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def is_positive_number(value: Any) -> bool:
    """True for a finite real number strictly greater than zero."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value) and value > 0
    except (TypeError, ValueError, OverflowError):
        return False


def is_valid_positive_set(values: Iterable[Any]) -> bool:
    """
    Return True iff every element is a finite number > 0.

    Empty or malformed input returns False; this never raises.
    """
    try:
        items = list(values)
    except TypeError:
        return False
    if not items:
        return False
    return all(is_positive_number(v) for v in items)
