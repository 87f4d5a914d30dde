"""Caption formatting for relayed TikTok media.

Captions are sent with MarkdownV2, so every user-controlled fragment
(sender name, link, title) goes through Telegram's escaping helpers.
"""

from telegram.helpers import escape_markdown, mention_markdown

from .messages import CAPTION_LINK, CAPTION_SENDER_LINE, CAPTION_TITLE


def build_caption(
    sender_name: str,
    sender_id: int,
    chat_id: int,
    link: str,
    title: str | None = None,
) -> str:
    """Compose the MarkdownV2 caption for a relayed video or image batch.

    The sender mention is omitted when the sender is the chat itself, and
    the title is hidden behind a spoiler.

    Args:
        sender_name: Display name of the user who posted the link.
        sender_id: Telegram id of the sender.
        chat_id: Chat the media is relayed to.
        link: Original TikTok link.
        title: Post description returned by the resolver.

    Returns:
        Caption ready to be sent with ``ParseMode.MARKDOWN_V2``.
    """
    caption = ""
    if sender_id != chat_id:
        caption += CAPTION_SENDER_LINE.format(
            mention=mention_markdown(sender_id, sender_name, version=2)
        )

    caption += CAPTION_LINK.format(url=escape_markdown(link, version=2, entity_type="text_link"))
    if title:
        caption += CAPTION_TITLE.format(title=escape_markdown(title, version=2))
    return caption
