import asyncio
import logging

import pytest

from mcp_monitor import create_monitor
from mcp_monitor.core.interceptor import (
    Unrecognized,
    WithDescriptionSchemaAndHandler,
    WithSchemaAndHandler,
    classify_registration,
    resolve_session,
)
from mcp_monitor.demo.server import DemoToolServer, build_demo_server


class RecordingServer:
    """Records raw registration calls without validating their shape."""

    def __init__(self) -> None:
        self.calls = []

    def tool(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return name


async def add(params, extra=None):
    return params["a"] + params["b"]


def test_classify_registration_by_argument_count() -> None:
    handler = object()
    assert classify_registration(({"a": "number"}, handler)) == WithSchemaAndHandler({"a": "number"}, handler)
    assert classify_registration(("desc", {}, handler)) == WithDescriptionSchemaAndHandler("desc", {}, handler)
    assert isinstance(classify_registration((handler,)), Unrecognized)
    assert isinstance(classify_registration(()), Unrecognized)
    assert isinstance(classify_registration((1, 2, 3, 4)), Unrecognized)


def test_add_tool_reports_one_success_record(exporter) -> None:
    monitor = create_monitor(api_key="key", agent="calc-agent", exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("add", {"a": "number", "b": "number"}, add)

    async def run() -> None:
        assert await server.call_tool("add", {"a": 1, "b": 2}) == 3
        await monitor.flush()

    asyncio.run(run())

    (payload,) = exporter.payloads
    assert payload["tool"] == "add"
    assert payload["status"] == "success"
    assert payload["response"] == 3
    assert payload["error"] is None
    assert payload["params"] == {"a": 1, "b": 2}
    assert payload["step"] == 0
    assert payload["agent"] == "calc-agent"
    assert payload["sessionName"] == "Auto Session"
    assert payload["duration"] >= 0
    assert payload["timestamp"].endswith("Z")


def test_error_is_reraised_unchanged_and_reported(exporter) -> None:
    original = ValueError("boom")

    async def explode(params, extra=None):
        raise original

    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("explode", "Always fails", {}, explode)

    async def run() -> None:
        with pytest.raises(ValueError) as excinfo:
            await server.call_tool("explode", {"x": 1})
        assert excinfo.value is original
        await monitor.flush()

    asyncio.run(run())

    (payload,) = exporter.payloads
    assert payload["status"] == "error"
    assert payload["error"] == "boom"
    assert payload["response"] is None


def test_error_without_message_reports_type_name(exporter) -> None:
    async def explode(params, extra=None):
        raise KeyError()

    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("explode", {}, explode)

    async def run() -> None:
        with pytest.raises(KeyError):
            await server.call_tool("explode", {})
        await monitor.flush()

    asyncio.run(run())
    assert exporter.payloads[0]["error"] == "KeyError"


def test_wrapped_handlers_match_unwrapped_results(exporter) -> None:
    plain = build_demo_server()
    monitor = create_monitor(api_key="key", exporter=exporter)
    wrapped = monitor.wrap(DemoToolServer())
    for name, registered in plain.tools.items():
        if registered.description is None:
            wrapped.tool(name, registered.schema, registered.handler)
        else:
            wrapped.tool(name, registered.description, registered.schema, registered.handler)

    calls = [
        ("add", {"a": 2, "b": 5}),
        ("divide", {"a": 9, "b": 3}),
        ("lookup", {"key": "beta"}),
        ("lookup", {"key": "gamma"}),
    ]

    async def run() -> None:
        for name, params in calls:
            assert await wrapped.call_tool(name, params) == await plain.call_tool(name, params)
        with pytest.raises(ZeroDivisionError):
            await plain.call_tool("divide", {"a": 1, "b": 0})
        with pytest.raises(ZeroDivisionError):
            await wrapped.call_tool("divide", {"a": 1, "b": 0})
        await monitor.flush()

    asyncio.run(run())
    assert monitor.interceptor.registered_tools == ["add", "divide", "lookup"]
    assert [p["status"] for p in exporter.payloads].count("error") == 1
    assert len(exporter.payloads) == len(calls) + 1


def test_registration_shapes_are_forwarded(exporter) -> None:
    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(RecordingServer())
    handler_only = object()

    server.tool("two", {"s": 1}, add)
    server.tool("three", "description", {"s": 1}, add)
    server.tool("one", handler_only)
    server.tool("five", 1, 2, 3, 4, annotations={"readOnlyHint": True})

    two, three, one, five = server.calls
    assert two[1][0] == {"s": 1} and two[1][1] is not add
    assert three[1][:2] == ("description", {"s": 1}) and three[1][2] is not add
    assert one == ("one", (handler_only,), {})
    assert five == ("five", (1, 2, 3, 4), {"annotations": {"readOnlyHint": True}})
    assert monitor.interceptor.registered_tools == ["two", "three"]
    assert two[1][1].__name__ == "add"


def test_handler_receives_original_arguments(exporter) -> None:
    seen = []

    def only_params(params):
        seen.append(params)
        return "ok"

    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(RecordingServer())
    server.tool("single", {}, only_params)
    wrapped = server.calls[0][1][1]

    async def run() -> None:
        payload = {"q": 1}
        assert await wrapped(payload) == "ok"
        assert seen[0] is payload
        await monitor.flush()

    asyncio.run(run())
    assert exporter.payloads[0]["response"] == "ok"


def test_session_identity_from_extra_then_params() -> None:
    assert resolve_session({"sessionId": "p"}, {"sessionId": "e", "sessionName": "E"}) == ("e", "E")
    assert resolve_session({"sessionId": "p", "sessionName": "P"}, None) == ("p", "P")

    class Extra:
        session_id = "attr-session"

    assert resolve_session(None, Extra()) == ("attr-session", "Auto Session")

    generated, name = resolve_session(None, None)
    assert generated and name == "Auto Session"
    assert resolve_session(None, None)[0] != generated


def test_large_payloads_are_sanitized(exporter) -> None:
    async def echo(params, extra=None):
        return {"data": "y" * 20000}

    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("echo", {}, echo)

    async def run() -> None:
        result = await server.call_tool("echo", {"blob": "x" * 6000}, {"sessionId": "s-9"})
        assert len(result["data"]) == 20000
        await monitor.flush()

    asyncio.run(run())

    (payload,) = exporter.payloads
    assert payload["params"]["truncated"] is True
    assert payload["response"]["truncated"] is True
    assert payload["sessionId"] == "s-9"


def test_missing_key_wraps_without_reporting(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="mcp_monitor"):
        monitor = create_monitor()
    assert "No API key provided" in caplog.text
    assert monitor.is_active is False
    assert monitor.create_session is None
    assert monitor.send_log is None

    server = monitor.wrap(DemoToolServer())
    server.tool("add", {}, add)

    async def run() -> None:
        assert await server.call_tool("add", {"a": 4, "b": 4}) == 8
        await monitor.flush()

    asyncio.run(run())
    assert monitor.interceptor.registered_tools == ["add"]


def test_enabled_false_keeps_api_but_sends_nothing(exporter) -> None:
    monitor = create_monitor(api_key="key", enabled=False, exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("add", {}, add)

    async def run() -> None:
        assert await server.call_tool("add", {"a": 1, "b": 1}) == 2
        session = monitor.create_session()
        await session.track_call("add", {}, lambda: 2)
        await monitor.send_log({"tool": "manual"})
        await monitor.flush()

    asyncio.run(run())
    assert exporter.payloads == []


def test_wrap_without_tool_method_warns_and_returns_object(caplog) -> None:
    target = object()
    monitor = create_monitor(api_key="key")
    with caplog.at_level(logging.WARNING, logger="mcp_monitor"):
        assert monitor.wrap(target) is target
    assert "Could not find .tool() method" in caplog.text


class DecoratorServer:
    """FastMCP-style registrar whose ``tool()`` returns a decorator."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, name=None, description=None):
        def decorator(fn):
            self.tools[name or fn.__name__] = (description, fn)
            return fn

        return decorator


def test_decorator_registration_forms_pass_through(exporter) -> None:
    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(DecoratorServer())

    @server.tool()
    async def ping(params, extra=None):
        return "pong"

    @server.tool(description="Echo the params")
    async def echo(params, extra=None):
        return params

    @server.tool("renamed")
    async def original_name(params, extra=None):
        return None

    assert server.tools["ping"] == (None, ping)
    assert server.tools["echo"] == ("Echo the params", echo)
    assert server.tools["renamed"] == (None, original_name)
    assert monitor.interceptor.registered_tools == []
    assert asyncio.run(ping({})) == "pong"
    assert exporter.payloads == []


def test_cancelled_call_is_reported_and_reraised(exporter) -> None:
    started = []

    async def slow(params, extra=None):
        started.append(True)
        await asyncio.sleep(10)

    monitor = create_monitor(api_key="key", exporter=exporter)
    server = monitor.wrap(DemoToolServer())
    server.tool("slow", {}, slow)

    async def run() -> None:
        task = asyncio.create_task(server.call_tool("slow", {"n": 1}))
        while not started:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        await monitor.flush()

    asyncio.run(run())

    (payload,) = exporter.payloads
    assert payload["tool"] == "slow"
    assert payload["status"] == "error"
    assert payload["error"] == "CancelledError"
    assert payload["response"] is None
