import os

import pytest

from jknb_session import telemetry
from jknb_session.comm_manager import CommManager
from jknb_session.kernel_bridge.bridge import KernelBridge
from jknb_session.kernel_bridge.null_transport import NullHostPort


@pytest.fixture(autouse=True)
def isolated_telemetry(tmp_path, monkeypatch):
    """Point the event log at a temp dir and start every test with an empty buffer."""
    monkeypatch.setenv("JKNB_TELEMETRY_DIR", str(tmp_path / "telemetry"))
    monkeypatch.setattr(telemetry, "TELEMETRY_BATCH", 1000)
    for key in list(os.environ.keys()):
        if key.startswith("JKNB_KERNEL_"):
            monkeypatch.delenv(key)
    telemetry.clear_buffer()
    yield
    telemetry.clear_buffer()


@pytest.fixture
def host_port():
    return NullHostPort()


@pytest.fixture
def comm_manager():
    return CommManager()


@pytest.fixture
def bridge(host_port, comm_manager):
    return KernelBridge("task-1", "1.2.3", 45, "ada", host_port, comm_manager)
