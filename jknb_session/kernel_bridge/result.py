"""
Kernel Bridge Result Types

Outcome of delivering one session event through a host port. Host ports
return these instead of raising, so a slow or absent host never breaks
kernel code.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class KernelBridgeStatus(Enum):
    """Status of a host port delivery."""
    OK = "ok"
    ERROR = "error"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"


@dataclass
class KernelBridgeResult:
    """Result from a host port post."""

    status: KernelBridgeStatus
    reason: Optional[str] = None
    latency_ms: Optional[int] = None
    payload_size: Optional[int] = None
    ack: Optional[Dict[str, Any]] = None
    error_code: Optional[str] = None
    retry_count: int = 0

    @property
    def success(self) -> bool:
        return self.status is KernelBridgeStatus.OK

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def delivered(cls, payload_size: int = 0, ack: Optional[Dict[str, Any]] = None,
                  latency_ms: Optional[int] = None,
                  retry_count: int = 0) -> 'KernelBridgeResult':
        """The host accepted the message (ack is its reply, if any)."""
        return cls(KernelBridgeStatus.OK, payload_size=payload_size, ack=ack,
                   latency_ms=latency_ms, retry_count=retry_count)

    @classmethod
    def error_result(cls, reason: str, error_code: Optional[str] = None,
                     latency_ms: Optional[int] = None,
                     retry_count: int = 0) -> 'KernelBridgeResult':
        """The host rejected the message or could not be reached."""
        return cls(KernelBridgeStatus.ERROR, reason=reason, error_code=error_code,
                   latency_ms=latency_ms, retry_count=retry_count)

    @classmethod
    def timeout_result(cls, latency_ms: Optional[int] = None,
                       retry_count: int = 0) -> 'KernelBridgeResult':
        return cls(KernelBridgeStatus.TIMEOUT, reason="Post timed out",
                   latency_ms=latency_ms, retry_count=retry_count)

    @classmethod
    def unavailable_result(cls, reason: str = "Host port unavailable") -> 'KernelBridgeResult':
        return cls(KernelBridgeStatus.UNAVAILABLE, reason=reason)

    def dict(self) -> Dict[str, Any]:
        """Plain dictionary with the status as its string value."""
        data = asdict(self)
        data['status'] = self.status.value
        data['success'] = self.success
        return data
