"""
Kernel Bridge Errors

Exceptions raised by the bridge and its collaborators. Each one also derives
from the builtin it refines so callers can catch ValueError / TypeError.
"""


class KernelBridgeError(Exception):
    """Base class for kernel bridge errors."""


class InvalidArgumentError(KernelBridgeError, ValueError):
    """A required argument was missing or empty."""


class NotDisplayableError(KernelBridgeError, TypeError):
    """display() was handed something that is not Displayable."""


class DisplayContentError(KernelBridgeError, TypeError):
    """A Displayable resolved to something other than a mapping."""


class CommClosedError(KernelBridgeError, RuntimeError):
    """A message was sent on a comm that has already been closed."""


class UnsupportedEndpointError(KernelBridgeError, ValueError):
    """No host port implementation handles the configured endpoint."""
