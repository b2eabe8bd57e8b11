"""Generic webhook channel module."""

from run_notifier.channels.webhook.channel import WebhookChannel
from run_notifier.channels.webhook.config import WebhookConfig
from run_notifier.channels.webhook.manifest import webhook_manifest

__all__ = ["WebhookChannel", "WebhookConfig", "webhook_manifest"]
