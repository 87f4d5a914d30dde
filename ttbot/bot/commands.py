"""Bot command handlers and dispatch.

Commands are recognized from ``bot_command`` entities rather than from the
leading text, so a command anywhere in a message (or several of them) is
handled. Unknown commands are ignored.
"""

import logging
from collections.abc import Awaitable, Callable

from telegram import Bot
from telegram.constants import MessageEntityType

from ..config import config
from ..models import InboundMessage
from .messages import HELP_MESSAGE, START_MESSAGE

logger = logging.getLogger(__name__)

CommandCallback = Callable[[Bot, InboundMessage], Awaitable[None]]


async def start(bot: Bot, message: InboundMessage) -> None:
    """Handle /start command."""
    await bot.send_message(
        chat_id=message.chat_id,
        text=START_MESSAGE,
        message_thread_id=message.reply_thread_id,
    )


async def help_command(bot: Bot, message: InboundMessage) -> None:
    """Handle /help command.

    Explains why a link may have produced no video.
    """
    await bot.send_message(
        chat_id=message.chat_id,
        text=HELP_MESSAGE.format(max_size_mb=config.resolver.max_video_size_mb),
        message_thread_id=message.reply_thread_id,
    )


COMMANDS: dict[str, CommandCallback] = {
    "start": start,
    "help": help_command,
}


def parse_command_name(command_text: str) -> str:
    """Normalize ``/help@SomeBot`` to ``help``."""
    return command_text.split("@")[0].replace("/", "")


async def dispatch_commands(
    bot: Bot,
    message: InboundMessage,
    commands: dict[str, CommandCallback] | None = None,
) -> list[str]:
    """Invoke registered handlers for every bot command in ``message``.

    Args:
        bot: Bot bound to the token the update was received for.
        message: Inbound message with its entities.
        commands: Registry to dispatch into, defaults to ``COMMANDS``.

    Returns:
        Names of the commands that were handled, in entity order.
    """
    registry = COMMANDS if commands is None else commands
    handled: list[str] = []

    for entity in message.entities:
        if entity.type != MessageEntityType.BOT_COMMAND:
            continue

        name = parse_command_name(message.entity_text(entity))
        handler = registry.get(name)
        if handler is None:
            logger.debug(f"Ignoring unknown command {name!r}")
            continue

        logger.info(f"Handling /{name} in chat {message.chat_id}")
        await handler(bot, message)
        handled.append(name)

    return handled
