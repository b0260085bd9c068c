"""Telemetry record models for observed tool invocations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from ..utils.time import iso_timestamp, new_id

T = TypeVar("T")


class Status(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


def error_message(exc: BaseException) -> str:
    """Message reported for a failed call; falls back to the exception type name."""
    return str(exc) or type(exc).__name__


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Observed result of a protected call: either a value or the original exception.

    The exception object is kept as-is so callers can re-raise it unchanged.
    """

    value: Optional[T] = None
    exception: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> Status:
        return Status.SUCCESS if self.ok else Status.ERROR

    def unwrap(self) -> T:
        """Return the value, or re-raise the captured exception object."""
        if self.exception is not None:
            raise self.exception
        return self.value  # type: ignore[return-value]


@dataclass
class LogRecord:
    """Represents telemetry for a single tool invocation.

    Field names follow Python conventions; :meth:`to_dict` emits the
    camelCase body the collector expects.
    """

    tool: str
    agent: str
    session_id: str
    session_name: str
    status: Status = Status.SUCCESS
    params: Any = None
    response: Any = None
    error: Optional[str] = None
    duration: int = 0
    step: int = 0
    id: str = field(default_factory=new_id)
    timestamp: str = field(default_factory=iso_timestamp)

    @classmethod
    def from_outcome(
        cls,
        outcome: Outcome[Any],
        *,
        tool: str,
        params: Any,
        agent: str,
        session_id: str,
        session_name: str,
        duration: int,
        step: int,
        record_id: Optional[str] = None,
    ) -> "LogRecord":
        """Assemble a record whose ``response``/``error`` match the outcome status."""
        record = cls(
            tool=tool,
            agent=agent,
            session_id=session_id,
            session_name=session_name,
            status=outcome.status,
            params=params,
            response=outcome.value if outcome.ok else None,
            error=None if outcome.ok else error_message(outcome.exception),  # type: ignore[arg-type]
            duration=duration,
            step=step,
        )
        if record_id is not None:
            record.id = record_id
        return record

    def to_dict(self) -> dict:
        """Serialize the record for exporters."""
        return {
            "id": self.id,
            "tool": self.tool,
            "params": self.params,
            "response": self.response,
            "error": self.error,
            "status": self.status.value,
            "duration": self.duration,
            "agent": self.agent,
            "sessionId": self.session_id,
            "sessionName": self.session_name,
            "step": self.step,
            "timestamp": self.timestamp,
        }
