"""
Null Host Port Implementation

In-process host port for tests and disabled bridges.
"""

import threading
import time
from typing import Dict, Any, List
from .result import KernelBridgeResult
from .transport import HostPort


class NullHostPort(HostPort):
    """Host port that accepts everything and keeps it in memory."""

    def __init__(self, config=None):
        self.config = config
        self.posted: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def post(self, message: Dict[str, Any]) -> KernelBridgeResult:
        """Record the message and report it delivered."""
        start_time = time.time()
        payload_size = len(self.encode(message))

        with self._lock:
            self.posted.append(message)

        latency_ms = int((time.time() - start_time) * 1000)
        return KernelBridgeResult.delivered(
            payload_size=payload_size,
            latency_ms=latency_ms
        )

    def messages_of_type(self, event_type: str) -> List[Dict[str, Any]]:
        """Posted messages whose 'type' matches."""
        with self._lock:
            return [m for m in self.posted if m.get('type') == event_type]

    def is_available(self) -> bool:
        """Null host port is always available."""
        return True

    def close(self) -> None:
        """No cleanup needed for null host port."""
        pass
