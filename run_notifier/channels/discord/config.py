"""Configuration for the Discord channel."""

from typing import ClassVar, Literal

from run_notifier.models.config import NotificationConfig


class DiscordConfig(NotificationConfig):
    """Configuration for Discord webhooks.

    Mentions are Discord user IDs (e.g., "123456789012345678").
    """

    webhook_url_env: ClassVar[str | None] = "DISCORD_WEBHOOK_URL"

    type: Literal["discord"] = "discord"
    footer: str = "Test Results"
