"""
Unit tests for session events.
"""

import pytest
from unittest.mock import MagicMock, patch
from jknb_session.events import (
    SessionCommCloseEvent,
    SessionCommMsgEvent,
    SessionCommOpenEvent,
    SessionDisplayDataEvent,
    SessionPrintEvent,
)
from jknb_session.kernel_bridge.null_transport import NullHostPort
from jknb_session.kernel_bridge.result import KernelBridgeResult


class TestEventMessages:
    """Test message shapes."""

    def test_print_message(self):
        message = SessionPrintEvent("t1", ["a", 1]).to_message()

        assert message["event_version"] == "1.0"
        assert message["type"] == "print"
        assert message["task_id"] == "t1"
        assert "ts" in message
        assert message["content"] == {"items": ["a", 1]}

    def test_print_copies_items(self):
        items = ["a"]
        event = SessionPrintEvent("t1", items)
        items.append("b")

        assert event.content() == {"items": ["a"]}

    def test_display_data_plain_mapping(self):
        content = SessionDisplayDataEvent("t1", {"text/plain": "x"}).content()

        assert content == {"data": {"text/plain": "x"}, "metadata": {}}

    def test_display_data_bundle(self):
        event = SessionDisplayDataEvent("t1", {
            "data": {"image/png": "abc"},
            "metadata": {"width": 10},
        })

        assert event.content() == {"data": {"image/png": "abc"}, "metadata": {"width": 10}}

    def test_display_data_bundle_without_metadata(self):
        event = SessionDisplayDataEvent("t1", {"data": {"text/plain": "x"}, "metadata": None})

        assert event.content()["metadata"] == {}

    def test_comm_open_message(self):
        content = SessionCommOpenEvent("t1", "c1", "target", {"a": 1}, {"m": 2}).content()

        assert content == {
            "comm_id": "c1",
            "target_name": "target",
            "data": {"a": 1},
            "metadata": {"m": 2},
        }

    def test_comm_msg_and_close_types(self):
        assert SessionCommMsgEvent("t1", "c1", {"x": 1}).to_message()["type"] == "comm_msg"
        close = SessionCommCloseEvent("t1", "c1").to_message()
        assert close["type"] == "comm_close"
        assert close["content"] == {"comm_id": "c1", "data": {}, "metadata": {}}


class TestEventPosting:
    """Test post_to delivery and its telemetry."""

    def test_post_to_passes_host_port_message(self):
        port = NullHostPort()

        result = SessionPrintEvent("t1", ["x"]).post_to(port)

        assert result.success is True
        assert port.posted[0]["content"] == {"items": ["x"]}

    def test_post_to_returns_host_port_result(self):
        port = MagicMock()
        port.post.return_value = KernelBridgeResult.error_result("down", error_code="E")

        result = SessionPrintEvent("t1", ["x"]).post_to(port)

        assert result is port.post.return_value
        port.post.assert_called_once()

    def test_post_to_emits_telemetry(self):
        with patch('jknb_session.events.base.emit_event') as mock_emit:
            SessionPrintEvent("t1", ["secret text"]).post_to(NullHostPort())

            mock_emit.assert_called_once()
            args, kwargs = mock_emit.call_args
            assert args[0] == "session_event"
            assert kwargs["task_id"] == "t1"
            assert kwargs["level"] == "info"
            assert kwargs["data"]["type"] == "print"
            assert kwargs["data"]["status"] == "ok"
            # Content never reaches the event log
            assert "secret text" not in str(mock_emit.call_args)

    def test_failed_post_is_warned(self):
        port = MagicMock()
        port.post.return_value = KernelBridgeResult.error_result("down", error_code="E")

        with patch('jknb_session.events.base.emit_event') as mock_emit:
            SessionPrintEvent("t1", ["x"]).post_to(port)

            kwargs = mock_emit.call_args[1]
            assert kwargs["level"] == "warn"
            assert kwargs["data"]["status"] == "error"
            assert kwargs["data"]["reason"] == "down"
            assert kwargs["data"]["error_code"] == "E"


class TestDisplayDataShapes:
    """Test how resolved display content maps onto the message."""

    @pytest.mark.parametrize("to_display", [
        {"data": "hello"},
        {"data": 5},
        {"data": ["a", "b"]},
        {"data": {"text/plain": "x"}, "metadata": "x"},
    ])
    def test_non_bundle_sent_whole_as_data(self, to_display):
        content = SessionDisplayDataEvent("t1", to_display).content()

        assert content == {"data": to_display, "metadata": {}}

    def test_bundle_extra_keys_kept(self):
        event = SessionDisplayDataEvent("t1", {
            "data": {"text/plain": "x"},
            "transient": {"display_id": "d1"},
        })

        assert event.content() == {
            "data": {"text/plain": "x"},
            "metadata": {},
            "transient": {"display_id": "d1"},
        }

    def test_mapping_proxy_data(self):
        from types import MappingProxyType

        event = SessionDisplayDataEvent("t1", MappingProxyType({
            "data": MappingProxyType({"text/plain": "x"}),
        }))

        assert event.content() == {"data": {"text/plain": "x"}, "metadata": {}}
