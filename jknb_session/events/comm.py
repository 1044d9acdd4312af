"""
Comm Events

Lifecycle and data messages of a kernel comm.
"""

from typing import Any, Dict, Optional

from .base import SessionEvent, to_wire_value


class SessionCommEvent(SessionEvent):
    """Base for events scoped to one comm."""

    def __init__(self, task_id: str, comm_id: str,
                 data: Optional[Dict[str, Any]] = None,
                 metadata: Optional[Dict[str, Any]] = None):
        super().__init__(task_id)
        self.comm_id = comm_id
        self.data = data or {}
        self.metadata = metadata or {}

    def content(self) -> Dict[str, Any]:
        return {
            "comm_id": self.comm_id,
            "data": to_wire_value(self.data),
            "metadata": to_wire_value(self.metadata),
        }


class SessionCommOpenEvent(SessionCommEvent):
    event_type = "comm_open"

    def __init__(self, task_id: str, comm_id: str, target_name: str,
                 data: Optional[Dict[str, Any]] = None,
                 metadata: Optional[Dict[str, Any]] = None):
        super().__init__(task_id, comm_id, data, metadata)
        self.target_name = target_name

    def content(self) -> Dict[str, Any]:
        content = super().content()
        content["target_name"] = self.target_name
        return content


class SessionCommMsgEvent(SessionCommEvent):
    event_type = "comm_msg"


class SessionCommCloseEvent(SessionCommEvent):
    event_type = "comm_close"
