"""Slack channel manifest."""

from run_notifier.channels.manifest import ChannelManifest
from run_notifier.channels.slack.channel import SlackChannel
from run_notifier.channels.slack.config import SlackConfig

slack_manifest = ChannelManifest(
    config_cls=SlackConfig,
    channel_factory=SlackChannel.from_config,
)
