"""Generic webhook channel manifest."""

from run_notifier.channels.manifest import ChannelManifest
from run_notifier.channels.webhook.channel import WebhookChannel
from run_notifier.channels.webhook.config import WebhookConfig

webhook_manifest = ChannelManifest(
    config_cls=WebhookConfig,
    channel_factory=WebhookChannel.from_config,
)
