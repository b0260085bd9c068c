"""Demo MCP-like tool server with the ambiguous ``tool()`` registration shape."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


@dataclass
class RegisteredTool:
    name: str
    schema: Any
    handler: Callable[..., Any]
    description: Optional[str] = None


@dataclass
class DemoToolServer:
    """In-process stand-in for an MCP server.

    ``tool`` accepts ``(name, schema, handler)`` or ``(name, description, schema, handler)``;
    any other shape is rejected the way a real server would reject it.
    """

    tools: Dict[str, RegisteredTool] = field(default_factory=dict)

    def tool(self, name: str, *args: Any) -> RegisteredTool:
        if len(args) == 2:
            registered = RegisteredTool(name=name, schema=args[0], handler=args[1])
        elif len(args) == 3:
            registered = RegisteredTool(name=name, description=args[0], schema=args[1], handler=args[2])
        else:
            raise TypeError(f"tool() expects a schema and handler, got {len(args)} arguments")
        self.tools[name] = registered
        return registered

    async def call_tool(self, name: str, params: Any = None, extra: Any = None) -> Any:
        result = self.tools[name].handler(params, extra)
        if inspect.isawaitable(result):
            result = await result
        return result


def build_demo_server() -> DemoToolServer:
    """Register a few arithmetic and lookup tools on a fresh server."""
    server = DemoToolServer()

    async def add(params: dict, extra: Any = None) -> int:
        return params["a"] + params["b"]

    async def divide(params: dict, extra: Any = None) -> float:
        return params["a"] / params["b"]

    def lookup(params: dict, extra: Any = None) -> dict:
        return {"key": params["key"], "found": params["key"] in {"alpha", "beta"}}

    server.tool("add", {"a": "number", "b": "number"}, add)
    server.tool("divide", "Divide a by b", {"a": "number", "b": "number"}, divide)
    server.tool("lookup", {"key": "string"}, lookup)
    return server
