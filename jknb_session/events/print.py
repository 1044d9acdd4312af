"""
Print Event

Text output produced by kernel-side code.
"""

from typing import Any, Dict, List

from .base import SessionEvent, to_wire_value


class SessionPrintEvent(SessionEvent):
    """Items printed by kernel code, in call order."""

    event_type = "print"

    def __init__(self, task_id: str, items: List[Any]):
        super().__init__(task_id)
        self.items = list(items)

    def content(self) -> Dict[str, Any]:
        return {"items": [to_wire_value(item) for item in self.items]}
