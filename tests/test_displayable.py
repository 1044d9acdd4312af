"""
Unit tests for the Displayable capability.
"""

import pytest
from jknb_session.displayable import AsyncDisplayable, Displayable, JupyterDisplayableMessage


class TestDisplayable:
    """Test displayable construction rules."""

    def test_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError, match="to_display\\(\\) or display_content\\(\\)"):
            Displayable()

    def test_subclass_without_producer_rejected(self):
        class Empty(Displayable):
            pass

        with pytest.raises(TypeError, match="Empty"):
            Empty()

    def test_async_subclass_without_producer_rejected(self):
        class Empty(AsyncDisplayable):
            pass

        with pytest.raises(TypeError):
            Empty()

    @pytest.mark.asyncio
    async def test_sync_producer(self):
        class Text(Displayable):
            def __init__(self, text):
                self.text = text

            def to_display(self):
                return {"text/plain": self.text}

        assert await Text("hi").display_content() == {"text/plain": "hi"}

    @pytest.mark.asyncio
    async def test_jupyter_message_bundle(self):
        message = JupyterDisplayableMessage.html("<b>x</b>", text="x")

        assert await message.display_content() == {
            "data": {"text/html": "<b>x</b>", "text/plain": "x"},
            "metadata": {},
        }
