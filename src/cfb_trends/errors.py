"""Error types for trends flows."""

from __future__ import annotations


class TrendsError(RuntimeError):
    """Base error for trends operations."""


class PayloadError(TrendsError):
    """Raised when an input payload file is not a JSON array of objects."""


class CLIError(TrendsError):
    """User-facing CLI error for trends commands."""
