"""UTC time and identifier helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def new_id() -> str:
    """Generate a unique record/session identifier as UUID text."""
    return str(uuid4())


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Render ``moment`` (default: now) as ISO-8601 UTC with millisecond precision."""
    moment = moment or utc_now()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def elapsed_ms(start_ms: float) -> int:
    """Whole milliseconds since ``start_ms``, never negative."""
    return max(0, int(monotonic_ms() - start_ms))
