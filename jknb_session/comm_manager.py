"""
Comm Manager

Registry owning every comm created through a kernel bridge, and routing
host messages back to them.
"""

import threading
from typing import Any, Dict, List, Optional

from .comm import SessionKernelComm
from .errors import InvalidArgumentError
from .telemetry import emit_event


class CommManager:
    """Registry of live comms for one kernel bridge."""

    def __init__(self):
        self._comms: Dict[str, SessionKernelComm] = {}
        self._kernel = None
        self._lock = threading.Lock()

    @property
    def kernel(self):
        """The bridge this registry is bound to, or None."""
        return self._kernel

    def bind_to(self, kernel=None) -> None:
        """Make the registry aware of the bridge it serves."""
        if kernel is None:
            raise InvalidArgumentError("bind_to() needs a kernel bridge")
        self._kernel = kernel

    def add(self, comm: SessionKernelComm) -> SessionKernelComm:
        """Take ownership of a comm for routing."""
        with self._lock:
            self._comms[comm.comm_id] = comm

        emit_event(
            "comm_registry",
            f"added comm {comm.target_name}",
            task_id=comm.task_id,
            data={"op": "add", "comm_id": comm.comm_id, "target_name": comm.target_name},
        )
        return comm

    def get(self, comm_id: str) -> Optional[SessionKernelComm]:
        with self._lock:
            return self._comms.get(comm_id)

    def remove(self, comm_id: str) -> Optional[SessionKernelComm]:
        """Forget a comm; returns it, or None if unknown."""
        with self._lock:
            comm = self._comms.pop(comm_id, None)

        if comm is not None:
            emit_event(
                "comm_registry",
                f"removed comm {comm.target_name}",
                task_id=comm.task_id,
                data={"op": "remove", "comm_id": comm_id, "target_name": comm.target_name},
            )
        return comm

    def comms(self) -> List[SessionKernelComm]:
        with self._lock:
            return list(self._comms.values())

    def handle_msg(self, comm_id: str, data: Dict[str, Any]) -> bool:
        """Route a host message to its comm. False when the comm is unknown."""
        comm = self.get(comm_id)
        if comm is None:
            emit_event(
                "comm_registry",
                "message for unknown comm",
                level="warn",
                data={"op": "msg", "comm_id": comm_id},
            )
            return False
        comm.handle_msg(data)
        return True

    def handle_close(self, comm_id: str, data: Optional[Dict[str, Any]] = None) -> bool:
        """Host closed a comm: notify it and drop it from the registry."""
        comm = self.remove(comm_id)
        if comm is None:
            return False
        comm.handle_close(data)
        return True

    def close_all(self) -> None:
        """Close and forget every registered comm."""
        for comm in self.comms():
            comm.close()
            self.remove(comm.comm_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._comms)

    def __contains__(self, comm_id) -> bool:
        with self._lock:
            return comm_id in self._comms
