"""
Unix Socket Host Port Implementation

Posts session events to a host listening on a unix socket. Every frame is a
4-byte big-endian length followed by UTF-8 JSON.
"""

import json
import os
import socket
import stat
import struct
import threading
import time
from typing import Dict, Any
from ..result import KernelBridgeResult
from ..transport import HostPort

MAX_ACK_BYTES = 1024 * 1024


class UnixSocketHostPort(HostPort):
    """Unix socket host port."""

    def __init__(self, config):
        self.config = config
        self._lock = threading.Lock()
        self._socket_path = config.endpoint[7:]  # Remove 'unix://' prefix

    def _connect(self) -> socket.socket:
        """Connect to the host socket."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.config.timeout_ms / 1000)

        try:
            sock.connect(self._socket_path)
            return sock
        except (ConnectionRefusedError, FileNotFoundError) as e:
            sock.close()
            raise ConnectionError(f"Failed to connect to {self._socket_path}: {e}")
        except OSError:
            sock.close()
            raise

    def _send_frame(self, sock: socket.socket, data: bytes) -> None:
        sock.sendall(struct.pack('!I', len(data)) + data)

    def _receive_frame(self, sock: socket.socket) -> bytes:
        header = sock.recv(4)
        if len(header) != 4:
            raise ConnectionError("Failed to read ack header")

        length = struct.unpack('!I', header)[0]
        if length > MAX_ACK_BYTES:
            raise ConnectionError(f"Ack too large: {length} bytes")

        ack = b''
        while len(ack) < length:
            chunk = sock.recv(min(length - len(ack), 4096))
            if not chunk:
                raise ConnectionError("Connection closed while reading ack")
            ack += chunk

        return ack

    def post(self, message: Dict[str, Any]) -> KernelBridgeResult:
        """Post one event message to the host over the unix socket."""
        start_time = time.time()
        retry_count = 0
        data = self.encode({
            "method": "POST_EVENT",
            "params": message,
            "timestamp": time.time()
        })

        def elapsed() -> int:
            return int((time.time() - start_time) * 1000)

        while True:
            try:
                with self._lock:
                    sock = self._connect()
                    try:
                        self._send_frame(sock, data)
                        raw_ack = self._receive_frame(sock)
                    finally:
                        sock.close()

            except socket.timeout:
                if retry_count < self.config.retry_attempts:
                    retry_count += 1
                    time.sleep(self.config.retry_delay_ms / 1000)
                    continue
                return KernelBridgeResult.timeout_result(
                    latency_ms=elapsed(),
                    retry_count=retry_count
                )

            except ConnectionError as e:
                if retry_count < self.config.retry_attempts:
                    retry_count += 1
                    time.sleep(self.config.retry_delay_ms / 1000)
                    continue
                return KernelBridgeResult.error_result(
                    reason=str(e),
                    latency_ms=elapsed(),
                    retry_count=retry_count
                )

            try:
                ack = json.loads(raw_ack.decode('utf-8'))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                return KernelBridgeResult.error_result(
                    reason=f"Invalid JSON ack: {e}",
                    latency_ms=elapsed(),
                    retry_count=retry_count
                )

            if isinstance(ack, dict) and ack.get('error'):
                return KernelBridgeResult.error_result(
                    reason=ack.get('message', 'Unknown error'),
                    error_code=ack.get('code'),
                    latency_ms=elapsed(),
                    retry_count=retry_count
                )

            return KernelBridgeResult.delivered(
                payload_size=len(data),
                ack=ack if isinstance(ack, dict) else None,
                latency_ms=elapsed(),
                retry_count=retry_count
            )

    def is_available(self) -> bool:
        """Check that the socket path exists and is a socket."""
        try:
            return stat.S_ISSOCK(os.stat(self._socket_path).st_mode)
        except OSError:
            return False

    def close(self) -> None:
        """Connections are per post; nothing is held open."""
        pass
