"""Best-effort delivery of log records to the collector."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Set, Union

from ..config import MonitorConfig
from ..exporters.base import Exporter
from .record import LogRecord

logger = logging.getLogger(__name__)

Reportable = Union[LogRecord, Mapping[str, Any]]


def _payload(record: Reportable) -> Dict[str, Any]:
    if isinstance(record, LogRecord):
        return record.to_dict()
    return dict(record)


class Reporter:
    """Hands records to an exporter and absorbs every delivery failure.

    Two submission modes are offered: :meth:`report_joined` waits for delivery,
    :meth:`report_detached` spawns it as an independent task.
    """

    def __init__(self, config: MonitorConfig, exporter: Exporter) -> None:
        self.config = config
        self.exporter = exporter
        self._pending: Set[asyncio.Task] = set()

    def debug(self, message: str, *args: Any) -> None:
        if self.config.debug:
            logger.info("[mcp-monitor] " + message, *args)

    async def report(self, record: Reportable) -> None:
        """Deliver ``record``; never raises."""
        if not self.config.enabled:
            return

        try:
            payload = _payload(record)
            await self.exporter.export(payload)
        except Exception as exc:
            self.debug("Error sending log: %s", exc)
            return
        self.debug("Sent: %s [%s] %sms", payload.get("tool"), payload.get("status"), payload.get("duration"))

    async def report_joined(self, record: Reportable) -> None:
        await self.report(record)

    def report_detached(self, record: Reportable) -> Optional[asyncio.Task]:
        """Schedule delivery without waiting for it.

        Returns the spawned task, or ``None`` when reporting is disabled or no
        event loop is running; in the latter case the record is dropped.
        """
        if not self.config.enabled:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.debug("Dropped log for %s: no running event loop", _payload(record).get("tool"))
            return None

        task = loop.create_task(self.report(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for all detached deliveries started so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        await self.exporter.close()
