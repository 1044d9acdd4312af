"""
Kernel Bridge Configuration

Feature flags, host port connection settings and kernel identity defaults.
"""

import os
from pydantic import BaseModel, Field, field_validator


DEFAULT_COMM_TARGET = "jknb.comm"


class KernelBridgeConfig(BaseModel):
    """Configuration for a kernel bridge and its host port."""

    # Feature flags
    enabled: bool = Field(
        default=False,
        description="Deliver events to a real host port (null host port otherwise)"
    )

    # Connection settings
    endpoint: str = Field(
        default="unix:///tmp/jknb-host.sock",
        description="Host endpoint (unix socket or HTTP URL)"
    )

    timeout_ms: int = Field(
        default=5000,
        ge=100,
        le=30000,
        description="Post timeout in milliseconds"
    )

    retry_attempts: int = Field(
        default=2,
        ge=0,
        le=5,
        description="Number of host port retry attempts"
    )

    retry_delay_ms: int = Field(
        default=100,
        ge=10,
        le=1000,
        description="Delay between host port retries in milliseconds"
    )

    # Kernel identity
    default_comm_target: str = Field(
        default=DEFAULT_COMM_TARGET,
        min_length=1,
        description="Target name used by new_comm()"
    )

    version_name: str = Field(
        default="1.0.0",
        description="'x.y.z' kernel client version"
    )

    build_number: int = Field(
        default=0,
        ge=0,
        description="Kernel client build number"
    )

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v):
        """Validate endpoint format."""
        if v.startswith('unix://'):
            path = v[7:]  # Remove 'unix://' prefix
            if not path.startswith('/'):
                raise ValueError('Unix socket path must be absolute')
        elif v.startswith('http://') or v.startswith('https://'):
            if not v.startswith(('http://127.0.0.1', 'http://localhost', 'https://127.0.0.1', 'https://localhost')):
                raise ValueError('HTTP endpoint must be localhost only for security')
        else:
            raise ValueError('Endpoint must be unix:// or http(s)://')
        return v

    @field_validator('version_name')
    @classmethod
    def validate_version_name(cls, v):
        """Require three dot-separated non-negative integers."""
        parts = v.split('.')
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            raise ValueError("version_name must look like 'x.y.z'")
        return v

    @classmethod
    def from_env(cls) -> 'KernelBridgeConfig':
        """Load configuration from environment variables."""
        return cls(
            enabled=os.getenv('JKNB_KERNEL_ENABLED', 'false').lower() == 'true',
            endpoint=os.getenv('JKNB_KERNEL_ENDPOINT', 'unix:///tmp/jknb-host.sock'),
            timeout_ms=int(os.getenv('JKNB_KERNEL_TIMEOUT_MS', '5000')),
            retry_attempts=int(os.getenv('JKNB_KERNEL_RETRY_ATTEMPTS', '2')),
            retry_delay_ms=int(os.getenv('JKNB_KERNEL_RETRY_DELAY_MS', '100')),
            default_comm_target=os.getenv('JKNB_KERNEL_COMM_TARGET', DEFAULT_COMM_TARGET),
            version_name=os.getenv('JKNB_KERNEL_VERSION', '1.0.0'),
            build_number=int(os.getenv('JKNB_KERNEL_BUILD', '0'))
        )
