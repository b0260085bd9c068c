"""Interception of MCP server tool registration."""

from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from ..utils.time import elapsed_ms, monotonic_ms, new_id
from .record import LogRecord, Outcome
from .reporter import Reporter
from .sanitize import sanitize_params, sanitize_response

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Any]

AUTO_SESSION_NAME = "Auto Session"
AUTO_STEP = 0


@dataclass(frozen=True)
class WithSchemaAndHandler:
    """``tool(name, schema, handler)``"""

    schema: Any
    handler: ToolHandler


@dataclass(frozen=True)
class WithDescriptionSchemaAndHandler:
    """``tool(name, description, schema, handler)``"""

    description: Any
    schema: Any
    handler: ToolHandler


@dataclass(frozen=True)
class Unrecognized:
    args: Tuple[Any, ...]


RegistrationShape = Union[WithSchemaAndHandler, WithDescriptionSchemaAndHandler, Unrecognized]


def classify_registration(args: Sequence[Any]) -> RegistrationShape:
    """Classify the arguments following the tool name purely by count."""
    if len(args) == 2:
        return WithSchemaAndHandler(schema=args[0], handler=args[1])
    if len(args) == 3:
        return WithDescriptionSchemaAndHandler(description=args[0], schema=args[1], handler=args[2])
    return Unrecognized(args=tuple(args))


def _lookup(source: Any, *keys: str) -> Optional[Any]:
    if source is None:
        return None
    for key in keys:
        if isinstance(source, Mapping):
            value = source.get(key)
        else:
            value = getattr(source, key, None)
        if value:
            return value
    return None


def resolve_session(params: Any, extra: Any) -> Tuple[str, str]:
    """Session id/name from the request context, then the params, else an ephemeral identity."""
    session_id = (
        _lookup(extra, "sessionId", "session_id")
        or _lookup(params, "sessionId", "session_id")
        or new_id()
    )
    session_name = (
        _lookup(extra, "sessionName", "session_name")
        or _lookup(params, "sessionName", "session_name")
        or AUTO_SESSION_NAME
    )
    return str(session_id), str(session_name)


class ToolInterceptor:
    """Replaces a server's ``tool`` method so every registered handler is observed.

    With ``reporter=None`` handlers are still wrapped and classified but nothing
    is reported.
    """

    def __init__(self, reporter: Optional[Reporter], *, agent: str) -> None:
        self.reporter = reporter
        self.agent = agent
        self.registered_tools: List[str] = []

    def _debug(self, message: str, *args: Any) -> None:
        if self.reporter is not None:
            self.reporter.debug(message, *args)

    def instrument_handler(self, name: str, handler: ToolHandler) -> ToolHandler:
        """Wrap ``handler`` so each call is timed and reported without waiting on delivery."""

        @functools.wraps(handler)
        async def wrapped_handler(*args: Any, **kwargs: Any) -> Any:
            record_id = new_id()
            start = monotonic_ms()
            params = args[0] if args else kwargs.get("params")
            extra = args[1] if len(args) > 1 else kwargs.get("extra")
            session_id, session_name = resolve_session(params, extra)

            try:
                result = handler(*args, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
                outcome: Outcome[Any] = Outcome(value=result)
            except BaseException as exc:
                outcome = Outcome(exception=exc)

            if self.reporter is not None:
                record = LogRecord.from_outcome(
                    outcome,
                    tool=name,
                    params=sanitize_params(params),
                    agent=self.agent,
                    session_id=session_id,
                    session_name=session_name,
                    duration=elapsed_ms(start),
                    step=AUTO_STEP,
                    record_id=record_id,
                )
                if outcome.ok:
                    record.response = sanitize_response(outcome.value)
                self.reporter.report_detached(record)

            return outcome.unwrap()

        return wrapped_handler

    def wrap(self, server: Any) -> Any:
        """Install interception on ``server.tool`` and return the same server object."""
        original_tool = getattr(server, "tool", None)
        if not callable(original_tool):
            logger.warning("[mcp-monitor] Could not find .tool() method on MCP server")
            return server

        def tool(*args: Any, **kwargs: Any) -> Any:
            if not args:
                return original_tool(*args, **kwargs)

            name = args[0]
            shape = classify_registration(args[1:])
            if isinstance(shape, Unrecognized):
                return original_tool(*args, **kwargs)

            self.registered_tools.append(name)
            self._debug("Monitoring tool: %s", name)
            wrapped = self.instrument_handler(name, shape.handler)

            if isinstance(shape, WithDescriptionSchemaAndHandler):
                return original_tool(name, shape.description, shape.schema, wrapped, **kwargs)
            return original_tool(name, shape.schema, wrapped, **kwargs)

        server.tool = tool
        self._debug("Wrapped MCP server (%d tools will be monitored)", len(self.registered_tools))
        return server
