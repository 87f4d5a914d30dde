"""Telegram bot message templates and constants.

Contains all user-facing message templates and caption fragments.
Centralizes message management for consistent replies across the
delivery pipeline and command handlers.
"""

# Bot commands and descriptions
START_MESSAGE = (
    "Hi! I am TikTok Downloader 404 Bot!\n"
    "Send me tiktok link, and I'll send you video."
)

HELP_MESSAGE = (
    "If you sent me a tiktok link but I didn't send you the video, it may be because the video is larger "
    "than {max_size_mb} megabytes (telegram bot api does not support uploading videos larger than "
    "{max_size_mb} megabytes) or telegram api failed to upload your video (you can try again)."
)

# Delivery notices
VIDEO_TOO_LARGE_MESSAGE = "Video is over {max_size_mb} MB and cannot be uploaded."
SEND_ERROR_MESSAGE = "Error: {description}"

# Caption fragments (MarkdownV2, arguments must be escaped by the caller)
CAPTION_SENDER_LINE = "Sender by: {mention}\n"
CAPTION_LINK = "[Link]({url})"
CAPTION_TITLE = "\n\n||{title}||"
