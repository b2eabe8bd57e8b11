"""Console channel manifest."""

from run_notifier.channels.console.channel import ConsoleChannel
from run_notifier.channels.console.config import ConsoleConfig
from run_notifier.channels.manifest import ChannelManifest

console_manifest = ChannelManifest(
    config_cls=ConsoleConfig,
    channel_factory=ConsoleChannel.from_config,
)
