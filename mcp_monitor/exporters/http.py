"""HTTP collector exporter built on ``httpx``."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..config import MonitorConfig
from ..errors import ExportError
from .base import Exporter


class HttpExporter(Exporter):
    """POSTs each record as JSON to ``{api_url}/api/logs``."""

    def __init__(
        self,
        config: MonitorConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._client = client
        self._transport = transport
        self._owns_client = client is None

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Api-Key": self._config.api_key or "",
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout_s, transport=self._transport)
        return self._client

    async def export(self, payload: Dict[str, Any]) -> None:
        response = await self._get_client().post(self._config.logs_endpoint, json=payload, headers=self.headers)
        if not response.is_success:
            raise ExportError(f"collector returned {response.status_code}", status_code=response.status_code)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
