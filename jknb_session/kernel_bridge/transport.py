"""
Host Port Interface

Abstract base class for the transport handle events are posted through.
"""

import json
from abc import ABC, abstractmethod
from typing import Dict, Any
from .result import KernelBridgeResult


class HostPort(ABC):
    """Abstract base class for host ports."""

    def __init__(self, config):
        self.config = config

    @abstractmethod
    def post(self, message: Dict[str, Any]) -> KernelBridgeResult:
        """Deliver one session event message to the host."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the host can currently be reached."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the host port and cleanup resources."""
        pass

    @staticmethod
    def encode(message: Dict[str, Any]) -> bytes:
        """Serialise a message the way every host port sends it."""
        return json.dumps(message, default=str).encode('utf-8')
