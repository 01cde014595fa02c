"""Shared parsing helpers for tolerant numeric/string coercion."""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    """Parse number-like input into float, returning None when invalid."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            parsed = float(raw)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def safe_int(value: Any) -> int | None:
    """Parse integer-like input into int, returning None for fractional or invalid values."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.startswith("+"):
            raw = raw[1:]
        try:
            return int(raw)
        except ValueError:
            try:
                parsed = float(raw)
            except ValueError:
                return None
            if not math.isfinite(parsed):
                return None
            rounded = round(parsed)
            if abs(parsed - rounded) > 1e-6:
                return None
            return int(rounded)
    return None


def clean_text(value: Any) -> str:
    """Return stripped text, treating None as empty."""
    if value is None:
        return ""
    return str(value).strip()
