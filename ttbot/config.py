"""Configuration management for the TikTok relay bot.

Reads all settings from environment variables and provides structured
configuration classes for the webhook server and the media resolver.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

# Telegram rejects media groups with more than 10 items
TELEGRAM_MEDIA_GROUP_LIMIT = 10


class ResolverConfig(BaseSettings):
    """tikwm.com resolver settings.

    Attributes:
        api_url: Lookup endpoint accepting form-encoded POST requests.
        origin: Base URL used to absolutize relative media paths.
        max_video_size_mb: Largest video the Bot API accepts by URL.
        media_group_size: Number of images sent per media group.
    """
    api_url: str = Field(default="https://tikwm.com/api/", validation_alias="TIKWM_API_URL")
    origin: str = Field(default="https://www.tikwm.com", validation_alias="TIKWM_ORIGIN")
    max_video_size_mb: int = Field(default=20, validation_alias="MAX_VIDEO_SIZE_MB")
    media_group_size: int = Field(default=10, validation_alias="MEDIA_GROUP_SIZE")

    @property
    def max_video_size_bytes(self) -> int:
        """Size ceiling in bytes."""
        return self.max_video_size_mb * 1024 * 1024

    @property
    def batch_size(self) -> int:
        """Media group batch size clamped to the Telegram limit."""
        return max(1, min(self.media_group_size, TELEGRAM_MEDIA_GROUP_LIMIT))


class BotConfig(BaseSettings):
    """Webhook server configuration.

    Attributes:
        secret_seed: Process-wide material the per-bot webhook secrets are derived from.
        port: Server port for the webhook listener.
        listen_host: Interface the webhook listener binds to.
        railway_domain: Railway public domain for webhooks.
        railway_url: Railway URL for webhooks (fallback).
        bot_tokens: Comma separated tokens whose webhooks are registered on startup.
        delete_original_message: Whether to delete the message with the link after upload.
        log_level: Root logging level.
    """
    secret_seed: str = Field(..., validation_alias="WEBHOOK_SECRET_SEED")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    railway_domain: str | None = Field(default=None, validation_alias="RAILWAY_PUBLIC_DOMAIN")
    railway_url: str | None = Field(default=None, validation_alias="RAILWAY_URL")
    bot_tokens: str = Field(default="", validation_alias="BOT_TOKENS")
    delete_original_message: bool = Field(default=True, validation_alias="DELETE_ORIGINAL_MESSAGE")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def webhook_domain(self) -> str | None:
        """Get webhook domain for Railway deployment.

        Returns:
            Domain string if available, None when webhooks are managed externally.
        """
        return self.railway_domain or self.railway_url

    @property
    def registered_tokens(self) -> list[str]:
        """Tokens listed in BOT_TOKENS, blanks removed."""
        return [token.strip() for token in self.bot_tokens.split(",") if token.strip()]


class Config:
    """Application configuration manager.

    Groups the typed configuration sections used by the webhook server
    and the delivery pipeline.
    """

    def __init__(self) -> None:
        self.bot = BotConfig()
        self.resolver = ResolverConfig()


# Global configuration instance
config = Config()
