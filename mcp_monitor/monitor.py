"""High-level entry points for monitoring MCP servers."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from .config import SIGNUP_URL, MonitorConfig
from .core.interceptor import ToolInterceptor
from .core.reporter import Reportable, Reporter
from .core.session import Session, SessionTracker
from .exporters.base import Exporter
from .exporters.http import HttpExporter

logger = logging.getLogger(__name__)


class Monitor:
    """A configured monitor instance.

    ``create_session`` and ``send_log`` are ``None`` when no API key was
    supplied; ``wrap`` is always available.
    """

    def __init__(self, config: MonitorConfig, *, exporter: Optional[Exporter] = None) -> None:
        self.config = config
        self.reporter: Optional[Reporter] = None
        self.sessions: Optional[SessionTracker] = None
        self.create_session: Optional[Callable[..., Session]] = None
        self.send_log: Optional[Callable[[Reportable], Awaitable[None]]] = None

        if config.has_api_key:
            self.reporter = Reporter(config, exporter or HttpExporter(config))
            self.sessions = SessionTracker(self.reporter)
            self.create_session = self.sessions.create_session
            self.send_log = self.reporter.report
        else:
            logger.warning("[mcp-monitor] No API key provided. Get one at %s", SIGNUP_URL)

        self.interceptor = ToolInterceptor(self.reporter, agent=config.agent)

    @property
    def is_active(self) -> bool:
        return self.reporter is not None

    def wrap(self, server: Any) -> Any:
        return self.interceptor.wrap(server)

    async def flush(self) -> None:
        """Wait for detached reports that are still in flight."""
        if self.reporter is not None:
            await self.reporter.drain()

    async def aclose(self) -> None:
        if self.reporter is not None:
            await self.reporter.aclose()


def create_monitor(
    *,
    api_key: Optional[str] = None,
    api_url: Optional[str] = None,
    agent: Optional[str] = None,
    enabled: Optional[bool] = None,
    batch_size: Optional[int] = None,
    debug: Optional[bool] = None,
    timeout_s: Optional[float] = None,
    exporter: Optional[Exporter] = None,
) -> Monitor:
    """Create a monitor; omitted options take their defaults."""
    config = MonitorConfig().with_overrides(
        api_key=api_key,
        api_url=api_url,
        agent=agent,
        enabled=enabled,
        batch_size=batch_size,
        debug=debug,
        timeout_s=timeout_s,
    )
    return Monitor(config, exporter=exporter)


def create_monitor_from_env(*, exporter: Optional[Exporter] = None, **overrides: Any) -> Monitor:
    """Create a monitor from ``MCP_MONITOR_*`` environment variables."""
    from .exporters import create_exporter_from_env

    config = MonitorConfig.from_env(**overrides)
    if exporter is None and config.has_api_key:
        exporter = create_exporter_from_env(config)
    return Monitor(config, exporter=exporter)
