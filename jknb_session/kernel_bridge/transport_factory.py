"""
Host Port Factory

Lazy loading of host port modules to avoid import issues on unsupported platforms.
"""

from .config import KernelBridgeConfig
from .transport import HostPort
from .null_transport import NullHostPort
from ..errors import UnsupportedEndpointError


def create_host_port(config: KernelBridgeConfig) -> HostPort:
    """Create host port instance based on configuration."""
    if not config.enabled:
        return NullHostPort(config)

    if config.endpoint.startswith('unix://'):
        # Lazy import to avoid platform-specific issues
        from .transports.unix_socket import UnixSocketHostPort
        return UnixSocketHostPort(config)

    elif config.endpoint.startswith(('http://', 'https://')):
        # Lazy import to avoid HTTP dependencies when not needed
        from .transports.http_transport import HttpHostPort
        return HttpHostPort(config)

    else:
        raise UnsupportedEndpointError(f"Unsupported endpoint: {config.endpoint}")
