"""Tests for environment-driven configuration."""

from ttbot.config import BotConfig, ResolverConfig


def test_bot_config_listen_host_defaults_to_localhost(monkeypatch) -> None:
    """BotConfig should bind to localhost by default for safer webhooks."""
    monkeypatch.delenv("BOT_LISTEN_HOST", raising=False)

    bot_config = BotConfig()

    assert bot_config.listen_host == "127.0.0.1"
    assert bot_config.delete_original_message is True


def test_bot_config_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("BOT_LISTEN_HOST", "0.0.0.0")
    monkeypatch.setenv("DELETE_ORIGINAL_MESSAGE", "false")
    monkeypatch.setenv("BOT_TOKENS", " 1:aaa, ,2:bbb ")
    monkeypatch.setenv("RAILWAY_URL", "bot.example.com")

    bot_config = BotConfig()

    assert bot_config.listen_host == "0.0.0.0"
    assert bot_config.delete_original_message is False
    assert bot_config.registered_tokens == ["1:aaa", "2:bbb"]
    assert bot_config.webhook_domain == "bot.example.com"


def test_resolver_batch_size_capped_by_telegram_limit(monkeypatch) -> None:
    monkeypatch.setenv("MEDIA_GROUP_SIZE", "25")
    monkeypatch.setenv("MAX_VIDEO_SIZE_MB", "50")

    resolver_config = ResolverConfig()

    assert resolver_config.batch_size == 10
    assert resolver_config.max_video_size_bytes == 50 * 1024 * 1024
