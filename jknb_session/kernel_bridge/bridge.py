"""
Kernel Bridge Main Interface

The object kernel-side code uses to print, open comms and display rich
content. One bridge exists per running task.
"""

from collections.abc import Mapping
from typing import Any, Awaitable, Dict, Optional

from .config import DEFAULT_COMM_TARGET, KernelBridgeConfig
from .transport import HostPort
from .transport_factory import create_host_port
from .version import KernelVersion
from ..comm import SessionKernelComm
from ..displayable import Displayable
from ..errors import DisplayContentError, InvalidArgumentError, NotDisplayableError
from ..events.display_data import SessionDisplayDataEvent
from ..events.print import SessionPrintEvent


class KernelBridge:
    """Main kernel bridge interface."""

    _default_comm_target = DEFAULT_COMM_TARGET

    def __init__(self, task_id: str, version_name: str, build_number: int,
                 username: str, host_port: HostPort, comm_manager,
                 bind: bool = True):
        self._task_id = task_id
        self._version = KernelVersion(version_name, build_number)
        self._username = username
        self._host_port = host_port
        self._comm_manager = comm_manager

        # The comm manager needs the bridge for messages sent during its lifetime
        if bind:
            comm_manager.bind_to(kernel=self)

    @classmethod
    def from_config(cls, task_id: str, username: str, comm_manager,
                    config: Optional[KernelBridgeConfig] = None,
                    host_port: Optional[HostPort] = None) -> 'KernelBridge':
        """Build a bridge from configuration (environment by default)."""
        config = config or KernelBridgeConfig.from_env()
        bridge = cls(
            task_id,
            config.version_name,
            config.build_number,
            username,
            host_port or create_host_port(config),
            comm_manager,
        )
        bridge._default_comm_target = config.default_comm_target
        return bridge

    @property
    def version(self) -> Dict[str, Any]:
        """Copy of the {'name', 'code'} version record."""
        return self._version.dict()

    @property
    def task_id(self) -> str:
        return self._task_id

    @property
    def user_name(self) -> str:
        return self._username

    @property
    def host_port(self) -> HostPort:
        return self._host_port

    @property
    def comm_manager(self):
        return self._comm_manager

    def print(self, *items: Any) -> None:
        """Post a print event carrying items; nothing is sent without items."""
        if items:
            SessionPrintEvent(self._task_id, list(items)).post_to(self._host_port)

    def new_comm(self) -> SessionKernelComm:
        """Open a comm on the default target."""
        return self.new_comm_for(target_name=self._default_comm_target)

    def new_comm_for(self, target_name: Optional[str] = None,
                     initial_data: Optional[Dict[str, Any]] = None,
                     meta_data: Optional[Dict[str, Any]] = None) -> SessionKernelComm:
        """Create a comm for target_name and hand it to the comm manager."""
        if not target_name:
            raise InvalidArgumentError(
                'A target_name (aka namespace) must be provided in order to open a new kernel comm.'
            )
        comm = SessionKernelComm.new_for(
            self._task_id,
            self._host_port,
            target_name,
            initial_data or {},
            meta_data or {},
        )
        self._comm_manager.add(comm)
        return comm

    def display(self, what: Displayable) -> Awaitable[None]:
        """
        Display rich content.

        Raises NotDisplayableError right away for anything that is not a
        Displayable. Otherwise returns an awaitable that resolves the content
        and posts a display_data event.
        """
        if not isinstance(what, Displayable):
            raise NotDisplayableError("I can only display Displayable instances.")
        return self._display(what)

    async def _display(self, what: Displayable) -> None:
        to_display = await what.display_content()
        if not isinstance(to_display, Mapping):
            raise DisplayContentError(
                "display_content() must return a mapping or an awaitable resolving to one, "
                f"got {type(to_display).__name__}"
            )
        SessionDisplayDataEvent(self._task_id, to_display).post_to(self._host_port)

    def __repr__(self) -> str:
        return (f"KernelBridge(task_id={self._task_id!r}, "
                f"version={self._version.name!r}, user_name={self._username!r})")
