"""Media delivery pipeline for TikTok links.

Processes the links of one message strictly in order: resolve the media,
send the video with a caption, send photo slideshows in media groups and
remove the original message. A rejected bot token aborts the remaining
links because every further Bot API call would fail the same way.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum

from telegram import Bot, InputMediaPhoto, ReplyParameters
from telegram.constants import ChatAction, ParseMode
from telegram.error import InvalidToken, TelegramError

from ..config import ResolverConfig, config
from ..models import InboundMessage, MediaDescriptor, ResolveOutcome
from ..services.resolver import TikwmResolver, tikwm_resolver
from .caption import build_caption
from .link_extractor import LinkExtractor, link_extractor
from .messages import SEND_ERROR_MESSAGE, VIDEO_TOO_LARGE_MESSAGE

logger = logging.getLogger(__name__)


class LinkOutcome(str, Enum):
    """Terminal state of a single link."""

    DELIVERED = "delivered"
    DELIVERED_WITH_WARNING = "delivered_with_warning"
    SKIPPED = "skipped"
    FATAL_AUTH = "fatal_auth"


def chunked(items: list[str], size: int) -> Iterator[list[str]]:
    """Split ``items`` into consecutive batches of at most ``size``."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


class DeliveryPipeline:
    """Relays resolved TikTok media for every link found in a message."""

    def __init__(
        self,
        resolver: TikwmResolver | None = None,
        extractor: LinkExtractor | None = None,
        resolver_config: ResolverConfig | None = None,
        delete_original: bool | None = None,
    ):
        self.resolver = resolver or tikwm_resolver
        self.extractor = extractor or link_extractor
        self.resolver_config = resolver_config or config.resolver
        self.delete_original = (
            config.bot.delete_original_message if delete_original is None else delete_original
        )

    async def deliver(self, bot: Bot, message: InboundMessage) -> list[LinkOutcome]:
        """Process all TikTok links of ``message`` one after another.

        Args:
            bot: Bot bound to the token the update was received for.
            message: Inbound message to scan for links.

        Returns:
            Outcome per processed link. A trailing ``FATAL_AUTH`` marks an
            aborted message; links after it were not attempted.
        """
        links = self.extractor.extract_links(message.text)
        if not links:
            return []

        logger.info(f"Got {len(links)} tt links in message {message.message_id}")
        outcomes: list[LinkOutcome] = []
        try:
            await self._send_action(bot, message, ChatAction.UPLOAD_VIDEO)
            for link in links:
                outcomes.append(await self.deliver_link(bot, message, link))
        except InvalidToken:
            logger.warning(
                f"Bot token rejected by Telegram, aborting message {message.message_id} "
                f"in chat {message.chat_id}"
            )
            outcomes.append(LinkOutcome.FATAL_AUTH)
        return outcomes

    async def deliver_link(self, bot: Bot, message: InboundMessage, link: str) -> LinkOutcome:
        """Run the pipeline for one link.

        Raises:
            InvalidToken: If Telegram rejects the bot token.
        """
        logger.info(f"Downloading {link}...")
        result = await self.resolver.resolve(link)

        if result.outcome is ResolveOutcome.MALFORMED:
            return LinkOutcome.SKIPPED

        if result.outcome is ResolveOutcome.TOO_LARGE or result.media is None:
            await self._notify(
                bot,
                message,
                VIDEO_TOO_LARGE_MESSAGE.format(max_size_mb=self.resolver_config.max_video_size_mb),
            )
            return LinkOutcome.SKIPPED

        media = result.media
        caption = build_caption(
            sender_name=message.sender_name,
            sender_id=message.sender_id,
            chat_id=message.chat_id,
            link=link,
            title=media.title,
        )

        delivered = await self._send_video(bot, message, media, caption)

        if media.image_urls:
            await self._send_images(bot, message, media.image_urls, caption)

        if delivered and self.delete_original and not message.is_own_chat_post:
            await self._delete_original(bot, message)

        return LinkOutcome.DELIVERED if delivered else LinkOutcome.DELIVERED_WITH_WARNING

    async def _send_video(
        self, bot: Bot, message: InboundMessage, media: MediaDescriptor, caption: str
    ) -> bool:
        logger.info("Sending video to telegram...")
        await self._send_action(bot, message, ChatAction.UPLOAD_VIDEO)
        try:
            await bot.send_video(
                chat_id=message.chat_id,
                video=media.video_url,
                caption=caption,
                parse_mode=ParseMode.MARKDOWN_V2,
                message_thread_id=message.reply_thread_id,
            )
        except InvalidToken:
            raise
        except TelegramError as e:
            logger.error(f"Error: {e.message}")
            await self._notify(bot, message, SEND_ERROR_MESSAGE.format(description=e.message))
            return False
        return True

    async def _send_images(
        self, bot: Bot, message: InboundMessage, image_urls: list[str], caption: str
    ) -> None:
        await self._send_action(bot, message, ChatAction.UPLOAD_PHOTO)
        logger.info(f"Sending {len(image_urls)} images to telegram...")
        for batch in chunked(image_urls, self.resolver_config.batch_size):
            # Telegram shows the caption of the first item for the whole group
            media = [
                InputMediaPhoto(media=batch[0], caption=caption, parse_mode=ParseMode.MARKDOWN_V2)
            ]
            media.extend(InputMediaPhoto(media=url) for url in batch[1:])
            try:
                await bot.send_media_group(
                    chat_id=message.chat_id,
                    media=media,
                    message_thread_id=message.reply_thread_id,
                )
            except InvalidToken:
                raise
            except TelegramError as e:
                logger.warning(f"Failed to send image batch: {e.message}")

    async def _delete_original(self, bot: Bot, message: InboundMessage) -> None:
        try:
            await bot.delete_message(chat_id=message.chat_id, message_id=message.message_id)
        except TelegramError as e:
            logger.debug(f"Could not delete message {message.message_id}: {e}")

    async def _send_action(self, bot: Bot, message: InboundMessage, action: str) -> None:
        try:
            await bot.send_chat_action(
                chat_id=message.chat_id,
                action=action,
                message_thread_id=message.reply_thread_id,
            )
        except InvalidToken:
            raise
        except TelegramError as e:
            logger.warning(f"Failed to send chat action {action}: {e.message}")

    async def _notify(self, bot: Bot, message: InboundMessage, text: str) -> None:
        try:
            await bot.send_message(
                chat_id=message.chat_id,
                text=text,
                reply_parameters=ReplyParameters(message_id=message.message_id),
                message_thread_id=message.reply_thread_id,
            )
        except InvalidToken:
            raise
        except TelegramError as e:
            logger.warning(f"Failed to notify chat {message.chat_id}: {e.message}")


delivery_pipeline = DeliveryPipeline()
