"""Message handlers run in the background for accepted webhook updates.

Delegates to the delivery pipeline for TikTok links and to the command
dispatcher for bot commands. ``process_message`` is the unit of work
spawned by the webhook and contains every failure, because nothing awaits
its result.
"""

import logging

from telegram import Bot
from telegram.error import InvalidToken

from ..models import InboundMessage
from .commands import dispatch_commands
from .delivery import delivery_pipeline

logger = logging.getLogger(__name__)


async def handle_message(bot: Bot, message: InboundMessage) -> None:
    """Relay TikTok links, then handle bot commands.

    Commands run unconditionally, also when the message has no links.

    Args:
        bot: Bot bound to the token the update was received for.
        message: Inbound message.
    """
    await delivery_pipeline.deliver(bot, message)
    await dispatch_commands(bot, message)


async def process_message(bot_token: str, message: InboundMessage) -> None:
    """Process one webhook message with its own bot session.

    Args:
        bot_token: Token taken from the webhook path.
        message: Inbound message.
    """
    try:
        async with Bot(bot_token) as bot:
            await handle_message(bot, message)
    except InvalidToken:
        logger.warning(f"Invalid bot token, dropping message {message.message_id}")
    except Exception:
        logger.exception(
            f"Unhandled error processing message {message.message_id} in chat {message.chat_id}"
        )
