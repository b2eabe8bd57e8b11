"""Discord channel manifest."""

from run_notifier.channels.discord.channel import DiscordChannel
from run_notifier.channels.discord.config import DiscordConfig
from run_notifier.channels.manifest import ChannelManifest

discord_manifest = ChannelManifest(
    config_cls=DiscordConfig,
    channel_factory=DiscordChannel.from_config,
)
