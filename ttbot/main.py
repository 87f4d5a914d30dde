"""Application entry point.

Main module that configures logging and runs the aiohttp webhook server.
When a public domain and a list of bot tokens are configured, the webhooks
of those bots are pointed at this server on startup with their derived
secrets.
"""

import logging

from aiohttp import web
from telegram import Bot
from telegram.error import TelegramError

from .config import config
from .services.secrets import derive_secret
from .webhook import create_app

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from ``LOG_LEVEL``."""
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=config.bot.log_level.upper(),
    )
    # httpx logs every Bot API request at INFO, including the token in the URL
    logging.getLogger("httpx").setLevel(logging.WARNING)


def webhook_url(bot_token: str, domain: str) -> str:
    """Public URL Telegram delivers updates for ``bot_token`` to."""
    return f"https://{domain}/{bot_token}/tt_bot"


async def register_webhooks(app: web.Application) -> None:
    """Register webhooks for the bots listed in ``BOT_TOKENS``."""
    domain = config.bot.webhook_domain
    if not domain:
        logger.info("No public domain configured; webhooks are managed externally")
        return

    for bot_token in config.bot.registered_tokens:
        try:
            async with Bot(bot_token) as bot:
                await bot.set_webhook(
                    url=webhook_url(bot_token, domain),
                    secret_token=derive_secret(bot_token),
                    allowed_updates=["message"],
                )
                logger.info(f"Webhook registered for @{bot.username}")
        except TelegramError as e:
            logger.error(f"Failed to register webhook: {e}")


def main() -> None:
    """Main application entry point.

    Builds the webhook application and serves it until interrupted.
    """
    configure_logging()

    app = create_app()
    app.on_startup.append(register_webhooks)

    logger.info(f"Starting webhook server on {config.bot.listen_host}:{config.bot.port}")
    # request paths carry bot tokens, keep them out of the access log
    web.run_app(
        app,
        host=config.bot.listen_host,
        port=config.bot.port,
        print=None,
        access_log=None,
    )


if __name__ == "__main__":
    main()
