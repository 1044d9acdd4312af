"""
jknb_session - kernel side of a notebook session.
"""

from .comm import SessionKernelComm
from .comm_manager import CommManager
from .displayable import AsyncDisplayable, Displayable, JupyterDisplayableMessage
from .kernel_bridge import KernelBridge, KernelBridgeConfig

__version__ = "0.1.0"

__all__ = [
    'AsyncDisplayable',
    'CommManager',
    'Displayable',
    'JupyterDisplayableMessage',
    'KernelBridge',
    'KernelBridgeConfig',
    'SessionKernelComm',
]
