"""Exporter implementations for mcp-monitor."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .base import Exporter
from .http import HttpExporter

if TYPE_CHECKING:
    from ..config import MonitorConfig

__all__ = ["Exporter", "HttpExporter", "PostgresExporter", "create_exporter_from_env"]


def __getattr__(name: str):
    if name == "PostgresExporter":
        from .postgres import PostgresExporter

        return PostgresExporter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def create_exporter_from_env(config: "MonitorConfig") -> Exporter:
    """Create a Postgres exporter if a DSN is configured, otherwise the HTTP collector exporter."""
    dsn = os.getenv("MCP_MONITOR_PG_DSN")
    if dsn:
        from .postgres import PostgresExporter

        return PostgresExporter(dsn=dsn)
    return HttpExporter(config)
