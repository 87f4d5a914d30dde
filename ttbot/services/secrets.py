"""Per-bot webhook secret derivation.

Telegram echoes the ``secret_token`` set with ``setWebhook`` in the
``X-Telegram-Bot-Api-Secret-Token`` header of every update. Each bot gets
its own secret derived from its token and the process-wide seed, so no
per-bot state has to be stored.
"""

import hashlib
import hmac

from ..config import config

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def derive_secret(bot_token: str, seed: str | None = None) -> str:
    """Derive the webhook secret for ``bot_token``.

    The hex digest only uses characters allowed in Telegram secret tokens.
    """
    key = (seed if seed is not None else config.bot.secret_seed).encode()
    return hmac.new(key, bot_token.encode(), hashlib.sha256).hexdigest()


def check_secret(secret: str, bot_token: str, seed: str | None = None) -> bool:
    """Constant-time comparison of a received secret against the derived one."""
    if not secret or not bot_token:
        return False
    expected = derive_secret(bot_token, seed).encode()
    return hmac.compare_digest(secret.encode("utf-8", "replace"), expected)
