"""Explicit session and step tracking for grouped tool calls."""

from __future__ import annotations

import inspect
import threading
from typing import Any, Awaitable, Callable, Optional, Union

from ..utils.time import elapsed_ms, monotonic_ms, new_id
from .record import LogRecord, Outcome
from .reporter import Reporter

ExecuteFn = Callable[[], Union[Any, Awaitable[Any]]]


class Session:
    """A named group of tracked calls with a private, monotonically increasing step counter."""

    def __init__(self, reporter: Reporter, *, session_id: str, session_name: str) -> None:
        self.session_id = session_id
        self.session_name = session_name
        self._reporter = reporter
        self._step = 0
        self._lock = threading.Lock()

    @property
    def step(self) -> int:
        """Number of calls tracked so far."""
        return self._step

    def _next_step(self) -> int:
        with self._lock:
            self._step += 1
            return self._step

    async def track_call(self, tool_name: str, params: Any, execute_fn: ExecuteFn) -> Any:
        """Run ``execute_fn`` and report it before returning or re-raising.

        Delivery is awaited, so sequential calls on one session are reported in order.
        """
        step = self._next_step()
        start = monotonic_ms()

        try:
            result = execute_fn()
            if inspect.isawaitable(result):
                result = await result
            outcome: Outcome[Any] = Outcome(value=result)
        except BaseException as exc:
            outcome = Outcome(exception=exc)

        record = LogRecord.from_outcome(
            outcome,
            tool=tool_name,
            params=params,
            agent=self._reporter.config.agent,
            session_id=self.session_id,
            session_name=self.session_name,
            duration=elapsed_ms(start),
            step=step,
        )
        await self._reporter.report_joined(record)
        return outcome.unwrap()

    def __repr__(self) -> str:
        return f"Session(session_id={self.session_id!r}, session_name={self.session_name!r}, step={self._step})"


class SessionTracker:
    """Issues sessions; the default-name counter is owned by this tracker."""

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter
        self._count = 0
        self._lock = threading.Lock()

    @property
    def session_count(self) -> int:
        return self._count

    def create_session(self, name: Optional[str] = None) -> Session:
        with self._lock:
            self._count += 1
            number = self._count
        return Session(self._reporter, session_id=new_id(), session_name=name or f"Session #{number}")
