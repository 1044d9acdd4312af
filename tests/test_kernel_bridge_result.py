"""
Unit tests for kernel bridge result types.
"""

from jknb_session.kernel_bridge.result import KernelBridgeResult, KernelBridgeStatus


class TestKernelBridgeResult:
    """Test kernel bridge result types."""

    def test_delivered(self):
        """Test creating a delivered result."""
        result = KernelBridgeResult.delivered(payload_size=12, ack={"ok": True}, latency_ms=3)

        assert result.success is True
        assert result.status == KernelBridgeStatus.OK
        assert result.payload_size == 12
        assert result.ack == {"ok": True}
        assert result.latency_ms == 3
        assert result.reason is None
        assert result.error_code is None
        assert result.retry_count == 0

    def test_error_result(self):
        """Test creating an error result."""
        result = KernelBridgeResult.error_result(
            reason="Connection failed",
            error_code="CONN_ERROR",
            latency_ms=100,
            retry_count=2
        )

        assert result.success is False
        assert result.status == KernelBridgeStatus.ERROR
        assert result.reason == "Connection failed"
        assert result.error_code == "CONN_ERROR"
        assert result.latency_ms == 100
        assert result.retry_count == 2
        assert result.ack is None

    def test_timeout_result(self):
        """Test creating a timeout result."""
        result = KernelBridgeResult.timeout_result(latency_ms=5000, retry_count=3)

        assert result.success is False
        assert result.status == KernelBridgeStatus.TIMEOUT
        assert result.reason == "Post timed out"
        assert result.retry_count == 3

    def test_unavailable_result(self):
        """Test creating an unavailable result."""
        result = KernelBridgeResult.unavailable_result()

        assert result.success is False
        assert result.status == KernelBridgeStatus.UNAVAILABLE
        assert result.reason == "Host port unavailable"

    def test_result_serialization(self):
        """Test result converts to a plain dict."""
        data = KernelBridgeResult.delivered(payload_size=5, latency_ms=42).dict()

        assert data["success"] is True
        assert data["status"] == "ok"
        assert data["payload_size"] == 5
        assert data["latency_ms"] == 42
        assert data["retry_count"] == 0

    def test_truthiness_follows_status(self):
        """Test a result is truthy only when delivered."""
        assert KernelBridgeResult.delivered()
        assert not KernelBridgeResult.error_result("down")
        assert not KernelBridgeResult.timeout_result()

    def test_delivered_keeps_retry_count(self):
        """Test retries before a successful delivery are reported."""
        result = KernelBridgeResult.delivered(payload_size=1, retry_count=2)

        assert result.success is True
        assert result.retry_count == 2
