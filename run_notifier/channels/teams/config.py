"""Configuration for the Microsoft Teams channel."""

from typing import ClassVar, Literal

from run_notifier.models.config import NotificationConfig


class TeamsConfig(NotificationConfig):
    """Configuration for Teams incoming webhooks (legacy MessageCard format)."""

    webhook_url_env: ClassVar[str | None] = "TEAMS_WEBHOOK_URL"

    type: Literal["teams"] = "teams"
