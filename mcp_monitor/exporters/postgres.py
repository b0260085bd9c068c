"""PostgreSQL exporter that stores tool logs directly, bypassing the HTTP collector."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional

import asyncpg

from .base import Exporter

INSERT_SQL = """
INSERT INTO mcp_tool_logs (
    id,
    tool,
    params,
    response,
    error,
    status,
    duration_ms,
    agent,
    session_id,
    session_name,
    step,
    created_at
)
VALUES (
    $1::uuid, $2, $3::jsonb, $4::jsonb, $5, $6,
    $7, $8, $9, $10, $11, $12
)
"""


def _json_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, default=str)


class PostgresExporter(Exporter):
    """Exporter that persists log records into PostgreSQL using ``asyncpg``."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresExporter.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def export(self, payload: Dict[str, Any]) -> None:
        """Insert one serialized log record."""
        if self._pool is None:
            await self.connect()

        assert self._pool is not None
        created_at = datetime.fromisoformat(payload["timestamp"].replace("Z", "+00:00"))

        async with self._pool.acquire() as conn:
            await conn.execute(
                INSERT_SQL,
                payload["id"],
                payload["tool"],
                _json_or_none(payload.get("params")),
                _json_or_none(payload.get("response")),
                payload.get("error"),
                payload["status"],
                payload["duration"],
                payload["agent"],
                payload["sessionId"],
                payload["sessionName"],
                payload["step"],
                created_at,
            )

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
