"""Tests for bot command dispatch."""

from unittest.mock import AsyncMock

import pytest

from ttbot.bot.commands import COMMANDS, dispatch_commands, parse_command_name
from ttbot.bot.messages import START_MESSAGE
from ttbot.models import MessageEntitySpan


def _command(offset: int, length: int) -> MessageEntitySpan:
    return MessageEntitySpan(type="bot_command", offset=offset, length=length)


@pytest.mark.parametrize(
    ("command_text", "expected"),
    [("/help", "help"), ("/help@SomeBot", "help"), ("/start@Some_Bot", "start")],
)
def test_parse_command_name(command_text: str, expected: str) -> None:
    assert parse_command_name(command_text) == expected


@pytest.mark.asyncio
async def test_help_with_bot_suffix_dispatched_once(mock_bot, make_message) -> None:
    start, help_ = AsyncMock(), AsyncMock()
    message = make_message("/help@SomeBot extra text", entities=[_command(0, 13)])

    handled = await dispatch_commands(mock_bot, message, {"start": start, "help": help_})

    assert handled == ["help"]
    help_.assert_awaited_once_with(mock_bot, message)
    start.assert_not_awaited()


@pytest.mark.asyncio
async def test_multiple_commands_in_entity_order(mock_bot, make_message) -> None:
    calls: list[str] = []
    registry = {
        "start": AsyncMock(side_effect=lambda *a: calls.append("start")),
        "help": AsyncMock(side_effect=lambda *a: calls.append("help")),
    }
    message = make_message("/help /start", entities=[_command(0, 5), _command(6, 6)])

    handled = await dispatch_commands(mock_bot, message, registry)

    assert handled == ["help", "start"]
    assert calls == ["help", "start"]


@pytest.mark.asyncio
async def test_unknown_and_case_mismatched_commands_ignored(mock_bot, make_message) -> None:
    help_ = AsyncMock()
    message = make_message(
        "/Help /unknown #tag",
        entities=[
            _command(0, 5),
            _command(6, 8),
            MessageEntitySpan(type="hashtag", offset=15, length=4),
        ],
    )

    handled = await dispatch_commands(mock_bot, message, {"help": help_})

    assert handled == []
    help_.assert_not_awaited()


@pytest.mark.asyncio
async def test_start_command_sends_greeting(mock_bot, make_message) -> None:
    message = make_message("/start", entities=[_command(0, 6)])

    await dispatch_commands(mock_bot, message)

    mock_bot.send_message.assert_awaited_once_with(
        chat_id=message.chat_id, text=START_MESSAGE, message_thread_id=None
    )


@pytest.mark.asyncio
async def test_help_command_mentions_size_limit(mock_bot, make_message) -> None:
    message = make_message("/help", entities=[_command(0, 5)])

    await COMMANDS["help"](mock_bot, message)

    text = mock_bot.send_message.await_args.kwargs["text"]
    assert "20 megabytes" in text
