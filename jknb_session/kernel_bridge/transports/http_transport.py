"""
HTTP Host Port Implementation

Posts session events to a host HTTP endpoint (localhost only).
"""

import threading
import time
from typing import Dict, Any, Optional

import requests

from ..result import KernelBridgeResult
from ..transport import HostPort


class HttpHostPort(HostPort):
    """HTTP host port."""

    def __init__(self, config):
        self.config = config
        self._session: Optional[requests.Session] = None
        self._lock = threading.Lock()
        self._base_url = config.endpoint.rstrip('/')

    def _get_session(self) -> requests.Session:
        """Get or create HTTP session."""
        with self._lock:
            if self._session is None:
                self._session = requests.Session()
            return self._session

    def post(self, message: Dict[str, Any]) -> KernelBridgeResult:
        """Post one event message to <endpoint>/api/events."""
        start_time = time.time()
        retry_count = 0
        data = self.encode(message)

        while True:
            try:
                response = self._get_session().post(
                    f"{self._base_url}/api/events",
                    data=data,
                    headers={"Content-Type": "application/json"},
                    timeout=self.config.timeout_ms / 1000
                )

            except requests.Timeout:
                if retry_count < self.config.retry_attempts:
                    retry_count += 1
                    time.sleep(self.config.retry_delay_ms / 1000)
                    continue
                return KernelBridgeResult.timeout_result(
                    latency_ms=int((time.time() - start_time) * 1000),
                    retry_count=retry_count
                )

            except requests.RequestException as e:
                if retry_count < self.config.retry_attempts:
                    retry_count += 1
                    time.sleep(self.config.retry_delay_ms / 1000)
                    continue
                return KernelBridgeResult.error_result(
                    reason=str(e),
                    latency_ms=int((time.time() - start_time) * 1000),
                    retry_count=retry_count
                )

            latency_ms = int((time.time() - start_time) * 1000)

            if response.status_code not in (200, 202, 204):
                return KernelBridgeResult.error_result(
                    reason=f"HTTP {response.status_code}: {response.text}",
                    error_code=str(response.status_code),
                    latency_ms=latency_ms,
                    retry_count=retry_count
                )

            ack = None
            if response.content:
                try:
                    ack = response.json()
                except ValueError as e:
                    return KernelBridgeResult.error_result(
                        reason=f"Invalid JSON ack: {e}",
                        latency_ms=latency_ms,
                        retry_count=retry_count
                    )

            if isinstance(ack, dict) and ack.get('error'):
                return KernelBridgeResult.error_result(
                    reason=ack.get('message', 'Unknown error'),
                    error_code=ack.get('code'),
                    latency_ms=latency_ms,
                    retry_count=retry_count
                )

            return KernelBridgeResult.delivered(
                payload_size=len(data),
                ack=ack if isinstance(ack, dict) else None,
                latency_ms=latency_ms,
                retry_count=retry_count
            )

    def is_available(self) -> bool:
        """Check the host health endpoint."""
        try:
            response = self._get_session().get(f"{self._base_url}/health", timeout=1.0)
            return response.status_code == 200
        except requests.RequestException:
            return False

    def close(self) -> None:
        """Close the HTTP session."""
        with self._lock:
            if self._session:
                self._session.close()
                self._session = None
