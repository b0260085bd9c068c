"""Exception types raised inside the reporting path.

None of these ever reach the caller of a wrapped tool; the reporter absorbs them.
"""

from __future__ import annotations

from typing import Optional


class MonitorError(Exception):
    """Base class for mcp-monitor failures."""


class ExportError(MonitorError):
    """Raised by an exporter when the collector rejects or drops a record."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
