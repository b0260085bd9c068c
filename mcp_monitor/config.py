"""Resolved settings for a monitor instance."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Optional

DEFAULT_API_URL = "https://mcp-monitor-production.up.railway.app"
DEFAULT_AGENT = "default-agent"
SIGNUP_URL = "https://mcp-monitor.vercel.app"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class MonitorConfig:
    """Immutable monitor settings.

    ``api_key`` is optional; without it the monitor runs in pass-through mode.
    ``batch_size`` is accepted for forward compatibility and currently ignored.
    """

    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    agent: str = DEFAULT_AGENT
    enabled: bool = True
    batch_size: int = 1
    debug: bool = False
    timeout_s: float = 10.0

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def logs_endpoint(self) -> str:
        return f"{self.api_url.rstrip('/')}/api/logs"

    def with_overrides(self, **overrides: Any) -> "MonitorConfig":
        """Return a copy with non-``None`` overrides applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    @classmethod
    def from_env(cls, **overrides: Any) -> "MonitorConfig":
        """Build config from ``MCP_MONITOR_*`` environment variables; explicit overrides win."""
        batch_size = os.getenv("MCP_MONITOR_BATCH_SIZE")
        config = cls(
            api_key=os.getenv("MCP_MONITOR_API_KEY") or None,
            api_url=os.getenv("MCP_MONITOR_API_URL") or DEFAULT_API_URL,
            agent=os.getenv("MCP_MONITOR_AGENT") or DEFAULT_AGENT,
            enabled=_env_bool("MCP_MONITOR_ENABLED") is not False,
            batch_size=int(batch_size) if batch_size else 1,
            debug=bool(_env_bool("MCP_MONITOR_DEBUG")),
        )
        return config.with_overrides(**overrides)
