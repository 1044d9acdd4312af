"""
Display Data Event

Rich display content resolved from a Displayable.
"""

from collections.abc import Mapping
from typing import Any, Dict

from .base import SessionEvent, to_wire_value


def _is_bundle(to_display: Mapping) -> bool:
    """A bundle has a mapping 'data' and, if present, a mapping or empty 'metadata'."""
    if not isinstance(to_display.get('data'), Mapping):
        return False
    metadata = to_display.get('metadata')
    return metadata is None or isinstance(metadata, Mapping)


class SessionDisplayDataEvent(SessionEvent):
    """A mime bundle the host should render.

    A resolved mapping shaped like a bundle ({'data': {...}, 'metadata': {...}})
    is sent as is, other keys such as 'transient' included. Any other mapping
    is sent whole as the bundle data.
    """

    event_type = "display_data"

    def __init__(self, task_id: str, to_display: Mapping[str, Any]):
        super().__init__(task_id)
        self.to_display = to_display

    def content(self) -> Dict[str, Any]:
        if not _is_bundle(self.to_display):
            return {"data": to_wire_value(self.to_display), "metadata": {}}

        content = to_wire_value(self.to_display)
        if content.get('metadata') is None:
            content['metadata'] = {}
        return content
