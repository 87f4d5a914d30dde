"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including a mocked bot,
inbound message factories and sample resolver payloads.
"""

import os
from unittest.mock import AsyncMock

import pytest

# Configuration is read when ttbot.config is imported, before any fixture runs
TEST_SECRET_SEED = "test_secret_seed_placeholder"
os.environ.setdefault("WEBHOOK_SECRET_SEED", TEST_SECRET_SEED)

from ttbot.models import InboundMessage, MessageEntitySpan  # noqa: E402

TEST_BOT_TOKEN = "123456:test_bot_token_placeholder"
GROUP_CHAT_ID = -1001234567890
SENDER_ID = 424242


@pytest.fixture
def mock_bot():
    """Mock telegram.Bot recording every API call."""
    bot = AsyncMock()
    bot.send_chat_action = AsyncMock(return_value=True)
    bot.send_message = AsyncMock()
    bot.send_video = AsyncMock()
    bot.send_media_group = AsyncMock()
    bot.delete_message = AsyncMock(return_value=True)
    return bot


@pytest.fixture
def make_message():
    """Factory for InboundMessage objects posted by a user in a group."""

    def _make(
        text: str | None = None,
        *,
        chat_id: int = GROUP_CHAT_ID,
        sender_id: int = SENDER_ID,
        sender_name: str = "Alice",
        message_id: int = 77,
        is_topic_message: bool = False,
        thread_id: int | None = None,
        entities: list[MessageEntitySpan] | None = None,
    ) -> InboundMessage:
        return InboundMessage(
            chat_id=chat_id,
            sender_id=sender_id,
            sender_name=sender_name,
            message_id=message_id,
            text=text,
            is_topic_message=is_topic_message,
            thread_id=thread_id,
            entities=entities or [],
        )

    return _make


@pytest.fixture
def tikwm_data():
    """``data`` object of a successful tikwm response."""
    return {
        "id": "7301234567890123456",
        "title": "cat does a backflip #cats",
        "play": "/video/media/play/7301234567890123456.mp4",
        "hdplay": "/video/media/hdplay/7301234567890123456.mp4",
        "size": 4_200_000,
        "hd_size": 6_100_000,
        "images": None,
    }


@pytest.fixture
def tikwm_payload(tikwm_data):
    """Full successful tikwm response."""
    return {"code": 0, "msg": "success", "processed_time": 0.41, "data": tikwm_data}
