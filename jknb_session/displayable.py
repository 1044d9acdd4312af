"""
Displayable Capability

Values that can produce rich display content for KernelBridge.display().
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


class Displayable(ABC):
    """Something that can be rendered by the host.

    Synchronous producers implement to_display(); producers that need to wait
    on something override display_content() instead. The bridge only ever
    awaits display_content() once.
    """

    def __new__(cls, *args, **kwargs):
        if (cls.to_display is Displayable.to_display
                and cls.display_content is Displayable.display_content):
            raise TypeError(
                f"Can't instantiate {cls.__name__}: implement to_display() or display_content()"
            )
        return super().__new__(cls)

    def to_display(self) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} must implement to_display() or display_content()"
        )

    async def display_content(self) -> Any:
        return self.to_display()


class AsyncDisplayable(Displayable):
    """Displayable whose content is produced by a coroutine."""

    @abstractmethod
    async def display_content(self) -> Any:
        pass


class JupyterDisplayableMessage(Displayable):
    """A mime bundle, e.g. {'text/plain': 'hi', 'text/html': '<b>hi</b>'}."""

    def __init__(self, data: Mapping[str, Any],
                 metadata: Optional[Mapping[str, Any]] = None):
        self.data = dict(data)
        self.metadata = dict(metadata or {})

    @classmethod
    def text(cls, text: str) -> 'JupyterDisplayableMessage':
        return cls({'text/plain': text})

    @classmethod
    def html(cls, html: str, text: Optional[str] = None) -> 'JupyterDisplayableMessage':
        data = {'text/html': html}
        if text is not None:
            data['text/plain'] = text
        return cls(data)

    def to_display(self) -> Dict[str, Any]:
        return {'data': dict(self.data), 'metadata': dict(self.metadata)}
