"""
Session Events

Postable notifications sent from a kernel to its host.
"""

from .base import SessionEvent
from .print import SessionPrintEvent
from .display_data import SessionDisplayDataEvent
from .comm import (
    SessionCommEvent,
    SessionCommOpenEvent,
    SessionCommMsgEvent,
    SessionCommCloseEvent,
)

__all__ = [
    'SessionEvent',
    'SessionPrintEvent',
    'SessionDisplayDataEvent',
    'SessionCommEvent',
    'SessionCommOpenEvent',
    'SessionCommMsgEvent',
    'SessionCommCloseEvent',
]
