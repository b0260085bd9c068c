"""Example: monitor an MCP-style server and group a batch of calls into a session."""

from __future__ import annotations

import asyncio
import os

from mcp_monitor import create_monitor
from mcp_monitor.demo.server import DemoToolServer


async def fetch_invoice(params: dict, extra: dict | None = None) -> dict:
    return {"invoice_id": params["invoice_id"], "amount": 120.0, "currency": "USD"}


async def main() -> None:
    monitor = create_monitor(
        api_key=os.getenv("MCP_MONITOR_API_KEY"),
        agent="billing-agent",
        debug=True,
    )
    server = monitor.wrap(DemoToolServer())
    server.tool("fetch_invoice", "Look up an invoice by id", {"invoice_id": "string"}, fetch_invoice)

    try:
        invoice = await server.call_tool(
            "fetch_invoice",
            {"invoice_id": "INV-1001"},
            {"sessionId": "sess-demo-001", "sessionName": "billing review"},
        )
        print("Tool result:", invoice)

        if monitor.create_session is not None:
            session = monitor.create_session("nightly-reconcile")
            for invoice_id in ("INV-1001", "INV-1002"):
                params = {"invoice_id": invoice_id}
                await session.track_call("fetch_invoice", params, lambda p=params: fetch_invoice(p))
    finally:
        await monitor.aclose()


if __name__ == "__main__":
    asyncio.run(main())
