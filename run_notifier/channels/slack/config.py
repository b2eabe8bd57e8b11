"""Configuration for the Slack channel."""

from typing import ClassVar, Literal

from run_notifier.models.config import NotificationConfig


class SlackConfig(NotificationConfig):
    """Configuration for Slack incoming webhooks.

    Mentions are Slack member IDs (e.g., "U12345678").
    """

    webhook_url_env: ClassVar[str | None] = "SLACK_WEBHOOK_URL"

    type: Literal["slack"] = "slack"
