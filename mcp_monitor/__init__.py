"""mcp-monitor package.

Transparent tool-call telemetry for Model Context Protocol (MCP) servers.
"""

from .config import MonitorConfig
from .core.record import LogRecord, Status
from .core.session import Session
from .monitor import Monitor, create_monitor, create_monitor_from_env

__all__ = [
    "create_monitor",
    "create_monitor_from_env",
    "Monitor",
    "MonitorConfig",
    "LogRecord",
    "Session",
    "Status",
]
