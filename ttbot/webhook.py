"""Webhook ingress for Telegram updates.

Serves ``POST /{bot_token}/tt_bot`` for any number of bots. Each request is
authenticated with the secret derived from the token in its path, and the
message is handed to a background task so Telegram gets its response
without waiting for the media delivery.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from aiohttp import web
from telegram import Message
from telegram.error import TelegramError

from .bot.handlers import process_message
from .models import InboundMessage
from .services.secrets import SECRET_HEADER, check_secret

logger = logging.getLogger(__name__)

WEBHOOK_ROUTE = "/{bot_token}/tt_bot"

MessageProcessor = Callable[[str, InboundMessage], Awaitable[None]]

BACKGROUND_TASKS = web.AppKey("background_tasks", set)
MESSAGE_PROCESSOR = web.AppKey("message_processor", object)
SECRET_SEED = web.AppKey("secret_seed", object)


def _empty(status: int = 200) -> web.Response:
    return web.Response(status=status, text="")


async def handle_update(request: web.Request) -> web.Response:
    """Validate a webhook request and schedule processing of its message.

    Returns:
        405 for non-POST requests, 400 for non-JSON bodies, 401 when the
        secret header does not match, otherwise an empty 200 response.
    """
    if request.method != "POST":
        return _empty(405)

    if "application/json" not in request.headers.get("Content-Type", ""):
        return _empty(400)

    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Rejected webhook request with invalid JSON body")
        return _empty(400)

    if not isinstance(payload, dict):
        return _empty(400)

    message_data = payload.get("message")
    if not message_data:
        return _empty()

    bot_token = request.match_info["bot_token"]
    secret = request.headers.get(SECRET_HEADER, "")
    if not check_secret(secret, bot_token, request.app[SECRET_SEED]):
        logger.warning("Rejected webhook request with invalid secret token")
        return _empty(401)

    try:
        message = InboundMessage.from_telegram(Message.de_json(message_data, None))
    except (KeyError, TypeError, ValueError, TelegramError) as e:
        logger.warning(f"Failed to parse message from update: {e}")
        return _empty(400)

    schedule_processing(request.app, bot_token, message)
    return _empty()


def schedule_processing(app: web.Application, bot_token: str, message: InboundMessage) -> asyncio.Task:
    """Start processing ``message`` as a detached task tracked by ``app``."""
    processor: MessageProcessor = app[MESSAGE_PROCESSOR]
    task = asyncio.create_task(processor(bot_token, message))

    tasks: set[asyncio.Task] = app[BACKGROUND_TASKS]
    tasks.add(task)
    task.add_done_callback(tasks.discard)
    return task


async def drain_background_tasks(app: web.Application) -> None:
    """Wait for in-flight deliveries before the application shuts down."""
    tasks = app[BACKGROUND_TASKS]
    if tasks:
        logger.info(f"Waiting for {len(tasks)} background tasks to finish")
        await asyncio.gather(*tasks, return_exceptions=True)


def create_app(
    processor: MessageProcessor | None = None,
    secret_seed: str | None = None,
) -> web.Application:
    """Build the aiohttp application serving the webhook route.

    Args:
        processor: Coroutine function run for each accepted message,
            defaults to ``process_message``.
        secret_seed: Seed for secret derivation, defaults to configuration.

    Returns:
        Configured aiohttp application.
    """
    app = web.Application()
    app[BACKGROUND_TASKS] = set()
    app[MESSAGE_PROCESSOR] = processor or process_message
    app[SECRET_SEED] = secret_seed

    app.router.add_route("*", WEBHOOK_ROUTE, handle_update)
    app.on_shutdown.append(drain_background_tasks)
    return app
