"""Core record, sanitization, reporting, session and interception modules for mcp-monitor."""

from .interceptor import ToolInterceptor, classify_registration
from .record import LogRecord, Outcome, Status
from .reporter import Reporter
from .sanitize import sanitize_params, sanitize_response
from .session import Session, SessionTracker

__all__ = [
    "LogRecord",
    "Outcome",
    "Status",
    "Reporter",
    "Session",
    "SessionTracker",
    "ToolInterceptor",
    "classify_registration",
    "sanitize_params",
    "sanitize_response",
]
