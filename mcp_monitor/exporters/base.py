"""Base exporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class Exporter(ABC):
    """Abstract base class for telemetry exporters."""

    @abstractmethod
    async def export(self, payload: Dict[str, Any]) -> None:
        """Deliver one serialized log record; raise on failure."""

    async def close(self) -> None:
        """Close exporter resources if needed."""
