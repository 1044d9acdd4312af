"""
Kernel Bridge Module

Gives kernel-side code access to host communication primitives: printing,
comms and rich display. Events are delivered through a host port (null,
unix socket or http) selected by configuration.
"""

from .bridge import KernelBridge
from .config import KernelBridgeConfig
from .result import KernelBridgeResult, KernelBridgeStatus
from .transport import HostPort
from .transport_factory import create_host_port
from .version import KernelVersion, get_version_code_from

__all__ = [
    'KernelBridge',
    'KernelBridgeConfig',
    'KernelBridgeResult',
    'KernelBridgeStatus',
    'HostPort',
    'KernelVersion',
    'create_host_port',
    'get_version_code_from'
]
