"""Utility helpers for identifiers and time operations."""

from .time import elapsed_ms, iso_timestamp, monotonic_ms, new_id, utc_now

__all__ = ["new_id", "utc_now", "iso_timestamp", "monotonic_ms", "elapsed_ms"]
