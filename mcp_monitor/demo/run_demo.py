"""Run the demo server under a monitor and print each tool result."""

from __future__ import annotations

import asyncio
import logging
import os

from mcp_monitor import create_monitor

from .server import DemoToolServer, build_demo_server


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    monitor = create_monitor(
        api_key=os.getenv("MCP_MONITOR_API_KEY"),
        api_url=os.getenv("MCP_MONITOR_API_URL"),
        agent="demo-agent",
        debug=True,
    )

    # Registrations made after wrap() are the ones that get observed.
    server = monitor.wrap(DemoToolServer())
    for name, registered in build_demo_server().tools.items():
        if registered.description is None:
            server.tool(name, registered.schema, registered.handler)
        else:
            server.tool(name, registered.description, registered.schema, registered.handler)

    try:
        print("ADD:", await server.call_tool("add", {"a": 1, "b": 2}, {"sessionId": "demo-1"}))
        print("LOOKUP:", await server.call_tool("lookup", {"key": "alpha"}))
        try:
            await server.call_tool("divide", {"a": 1, "b": 0})
        except ZeroDivisionError as exc:
            print("DIVIDE failed:", exc)

        if monitor.create_session is not None:
            session = monitor.create_session("demo-batch")
            total = await session.track_call("sum", {"values": [1, 2, 3]}, lambda: sum([1, 2, 3]))
            print(f"{session.session_name} step {session.step}:", total)
    finally:
        await monitor.aclose()


if __name__ == "__main__":
    asyncio.run(main())
