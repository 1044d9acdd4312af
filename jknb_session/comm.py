"""
Kernel Comm

A named bidirectional channel between kernel code and its host. Comms are
created through KernelBridge.new_comm_for() and routed by a CommManager.
"""

import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

from .errors import CommClosedError
from .events import SessionCommCloseEvent, SessionCommMsgEvent, SessionCommOpenEvent

MessageCallback = Callable[[Dict[str, Any]], None]


class SessionKernelComm:
    """One comm scoped to a task and a host port."""

    def __init__(self, task_id: str, host_port, target_name: str,
                 initial_data: Dict[str, Any], meta_data: Dict[str, Any],
                 comm_id: Optional[str] = None):
        self.task_id = task_id
        self.host_port = host_port
        self.target_name = target_name
        self.initial_data = initial_data
        self.meta_data = meta_data
        self.comm_id = comm_id or uuid.uuid4().hex
        self._opened = False
        self._closed = False
        self._callbacks: List[MessageCallback] = []
        self._close_callbacks: List[MessageCallback] = []
        self._lock = threading.Lock()

    @classmethod
    def new_for(cls, task_id: str, host_port, target_name: str,
                initial_data: Dict[str, Any], meta_data: Dict[str, Any]) -> 'SessionKernelComm':
        """Create a comm for a task; it is opened when first used."""
        return cls(task_id, host_port, target_name, initial_data, meta_data)

    @property
    def is_open(self) -> bool:
        return self._opened and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    def open(self):
        """Announce the comm to the host with its initial data."""
        with self._lock:
            if self._closed:
                raise CommClosedError(f"comm {self.comm_id} is closed")
            if self._opened:
                return None
            self._opened = True
        return SessionCommOpenEvent(
            self.task_id, self.comm_id, self.target_name,
            self.initial_data, self.meta_data
        ).post_to(self.host_port)

    def send(self, data: Dict[str, Any], meta_data: Optional[Dict[str, Any]] = None):
        """Send data to the host side of this comm, opening it first if needed."""
        if self._closed:
            raise CommClosedError(f"comm {self.comm_id} is closed")
        if not self._opened:
            self.open()
        return SessionCommMsgEvent(
            self.task_id, self.comm_id, data, meta_data
        ).post_to(self.host_port)

    def close(self, data: Optional[Dict[str, Any]] = None):
        """Close the comm. Closing twice is a no-op."""
        with self._lock:
            if self._closed:
                return None
            self._closed = True
            was_opened = self._opened
        if not was_opened:
            return None
        return SessionCommCloseEvent(
            self.task_id, self.comm_id, data
        ).post_to(self.host_port)

    def on_msg(self, callback: MessageCallback) -> None:
        """Register a callback for messages arriving from the host."""
        self._callbacks.append(callback)

    def on_close(self, callback: MessageCallback) -> None:
        """Register a callback for a host-initiated close."""
        self._close_callbacks.append(callback)

    def handle_msg(self, data: Dict[str, Any]) -> None:
        """Deliver a host message to every registered callback."""
        if self._closed:
            raise CommClosedError(f"comm {self.comm_id} is closed")
        for callback in list(self._callbacks):
            callback(data)

    def handle_close(self, data: Optional[Dict[str, Any]] = None) -> None:
        """The host closed the comm; no comm_close event is sent back."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for callback in list(self._close_callbacks):
            callback(data or {})

    def __repr__(self) -> str:
        return (f"SessionKernelComm(comm_id={self.comm_id!r}, "
                f"target_name={self.target_name!r}, task_id={self.task_id!r})")
