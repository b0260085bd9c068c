from typing import Any, Dict, List

import pytest

from mcp_monitor.exporters.base import Exporter


class RecordingExporter(Exporter):
    """Keeps exported payloads in memory."""

    def __init__(self) -> None:
        self.payloads: List[Dict[str, Any]] = []
        self.closed = False

    async def export(self, payload: Dict[str, Any]) -> None:
        self.payloads.append(payload)

    async def close(self) -> None:
        self.closed = True


class FailingExporter(Exporter):
    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.attempts = 0

    async def export(self, payload: Dict[str, Any]) -> None:
        self.attempts += 1
        raise self.exc


@pytest.fixture
def exporter() -> RecordingExporter:
    return RecordingExporter()


@pytest.fixture
def failing_exporter_factory():
    return FailingExporter
