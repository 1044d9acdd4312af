import os
import sys

from pydantic import ValidationError

from .kernel_bridge.config import KernelBridgeConfig
from .kernel_bridge.transport_factory import create_host_port
from .errors import UnsupportedEndpointError
from .telemetry import get_telemetry_dir, is_enabled


def _telemetry_writable() -> bool:
    if not is_enabled():
        return True
    path = get_telemetry_dir()
    while not path.exists():
        if path.parent == path:
            return False
        path = path.parent
    return os.access(path, os.W_OK)


def doctor_check(strict: bool = False) -> bool:
    """
    Pre-flight check of the kernel bridge environment.
    Validates JKNB_KERNEL_* configuration and that the host can be reached.
    """
    checks = []

    # 1. Configuration parses and validates
    config = None
    try:
        config = KernelBridgeConfig.from_env()
        checks.append(("Config Valid", True))
    except (ValidationError, ValueError):
        checks.append(("Config Valid", False))

    # 2. Host port reachable (null host port when the bridge is disabled)
    reachable = False
    if config is not None:
        try:
            host_port = create_host_port(config)
            reachable = host_port.is_available()
            host_port.close()
        except UnsupportedEndpointError:
            reachable = False
    checks.append(("Endpoint Reachable", reachable))

    # 3. Event log directory writable
    checks.append(("Telemetry Writable", _telemetry_writable()))

    all_passed = True
    print("\n[DOCTOR] Kernel bridge pre-flight check:")
    for name, result in checks:
        status = "PASS" if result else "FAIL"
        print(f"  [{status}] {name}")
        if not result:
            all_passed = False

    if strict and not all_passed:
        print("\n[FATAL] Kernel bridge is not ready.", file=sys.stderr)
        return False

    return all_passed


def main() -> int:
    is_strict = "--strict" in sys.argv
    if not doctor_check(strict=is_strict) and is_strict:
        return 1
    print("\n[DOCTOR] Kernel bridge environment checked.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
