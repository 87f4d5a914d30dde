"""Data models for the TikTok relay bot.

Defines Pydantic models for the request-scoped data flowing through the
bot: the inbound Telegram message, resolved media descriptors and the
resolver's tagged lookup result.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from telegram import Message, MessageEntity


class MessageEntitySpan(BaseModel):
    """Tagged span within message text.

    Attributes:
        type: Telegram entity type, e.g. ``bot_command``.
        offset: Start of the span in UTF-16 code units.
        length: Length of the span in UTF-16 code units.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    offset: int
    length: int


class InboundMessage(BaseModel):
    """Telegram message reduced to the fields the relay needs.

    Attributes:
        chat_id: Chat the message was posted in.
        sender_id: User (or sender chat) that posted it.
        sender_name: Display name used for the sender mention.
        message_id: Message id inside the chat.
        text: Message text, or the media caption when there is no text.
        is_topic_message: True when posted inside a forum topic.
        thread_id: Forum topic id, if any.
        entities: Entities belonging to ``text`` in message order.
    """

    model_config = ConfigDict(frozen=True)

    chat_id: int
    sender_id: int
    sender_name: str = ""
    message_id: int
    text: str | None = None
    is_topic_message: bool = False
    thread_id: int | None = None
    entities: list[MessageEntitySpan] = Field(default_factory=list)

    @classmethod
    def from_telegram(cls, message: Message) -> "InboundMessage":
        """Build from a parsed ``telegram.Message``.

        Falls back to the caption (and its entities) when the message has no text.
        """
        text = message.text
        entities: tuple[MessageEntity, ...] = message.entities
        if not text and message.caption:
            text = message.caption
            entities = message.caption_entities

        if message.from_user is not None:
            sender_id = message.from_user.id
            sender_name = message.from_user.first_name
        elif message.sender_chat is not None:
            sender_id = message.sender_chat.id
            sender_name = message.sender_chat.title or ""
        else:
            sender_id = message.chat.id
            sender_name = message.chat.title or ""

        return cls(
            chat_id=message.chat.id,
            sender_id=sender_id,
            sender_name=sender_name,
            message_id=message.message_id,
            text=text,
            is_topic_message=bool(message.is_topic_message),
            thread_id=message.message_thread_id,
            entities=[
                MessageEntitySpan(type=str(entity.type), offset=entity.offset, length=entity.length)
                for entity in entities
            ],
        )

    @property
    def reply_thread_id(self) -> int | None:
        """Thread id to send replies into, only set for topic messages."""
        return self.thread_id if self.is_topic_message else None

    @property
    def is_own_chat_post(self) -> bool:
        """True when the sender is the chat itself (private chats, channel posts)."""
        return self.sender_id == self.chat_id

    def entity_text(self, entity: MessageEntitySpan) -> str:
        """Return the text covered by ``entity``.

        Telegram counts offsets in UTF-16 code units, so the slice is taken
        on the UTF-16 encoding of the text.
        """
        if not self.text:
            return ""
        encoded = self.text.encode("utf-16-le")
        start = entity.offset * 2
        end = (entity.offset + entity.length) * 2
        return encoded[start:end].decode("utf-16-le")


class SizeClass(str, Enum):
    """Whether a resolved video can be uploaded through the Bot API."""

    OK = "ok"
    TOO_LARGE = "too_large"


class MediaDescriptor(BaseModel):
    """Downloadable media resolved for a single link.

    Attributes:
        video_url: Playable video URL, None when the video is too large.
        image_urls: Photo slideshow URLs in display order.
        title: Post description, if any.
        size_class: Usability of the video for upload.
    """

    video_url: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    title: str | None = None
    size_class: SizeClass = SizeClass.OK


class ResolveOutcome(str, Enum):
    """Tag of a resolver lookup."""

    OK = "ok"
    TOO_LARGE = "too_large"
    MALFORMED = "malformed"


class ResolveResult(BaseModel):
    """Tagged resolver result.

    Attributes:
        outcome: Lookup outcome tag.
        media: Descriptor for ``OK`` and ``TOO_LARGE`` outcomes.
        raw_body: Response body kept for ``MALFORMED`` outcomes.
    """

    outcome: ResolveOutcome
    media: MediaDescriptor | None = None
    raw_body: str | None = None

    @classmethod
    def ok(cls, media: MediaDescriptor) -> "ResolveResult":
        return cls(outcome=ResolveOutcome.OK, media=media)

    @classmethod
    def too_large(cls, media: MediaDescriptor) -> "ResolveResult":
        return cls(outcome=ResolveOutcome.TOO_LARGE, media=media)

    @classmethod
    def malformed(cls, raw_body: str | None = None) -> "ResolveResult":
        return cls(outcome=ResolveOutcome.MALFORMED, raw_body=raw_body)
