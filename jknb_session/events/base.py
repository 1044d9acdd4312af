"""
Session Event Base

Every outgoing notification is a SessionEvent: it knows how to turn itself
into a message and post that message through a host port.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict

from ..telemetry import emit_event

EVENT_VERSION = "1.0"

_JSON_SCALARS = (str, int, float, bool, type(None))


def to_wire_value(value: Any) -> Any:
    """Coerce a value to something JSON can carry, stringifying the rest."""
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_wire_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire_value(v) for v in value]
    return str(value)


class SessionEvent:
    """Base class for events posted from a kernel to its host."""

    event_type = "event"

    def __init__(self, task_id: str):
        self.task_id = task_id
        self.ts = datetime.now(timezone.utc).isoformat()

    def content(self) -> Dict[str, Any]:
        """Event specific body of the message."""
        return {}

    def to_message(self) -> Dict[str, Any]:
        return {
            "event_version": EVENT_VERSION,
            "type": self.event_type,
            "task_id": self.task_id,
            "ts": self.ts,
            "content": self.content(),
        }

    def post_to(self, host_port):
        """Deliver this event through host_port; returns the host port result."""
        result = host_port.post(self.to_message())

        event_data = {
            "type": self.event_type,
            "status": result.status.value,
            "latency_ms": result.latency_ms,
            "payload_size": result.payload_size,
            "retry_count": result.retry_count,
        }
        if result.error_code:
            event_data["error_code"] = result.error_code
        if result.reason:
            event_data["reason"] = result.reason

        emit_event(
            "session_event",
            f"posted {self.event_type}",
            level="info" if result.success else "warn",
            task_id=self.task_id,
            data=event_data,
        )
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(task_id={self.task_id!r})"
