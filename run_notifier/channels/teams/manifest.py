"""Microsoft Teams channel manifest."""

from run_notifier.channels.manifest import ChannelManifest
from run_notifier.channels.teams.channel import TeamsChannel
from run_notifier.channels.teams.config import TeamsConfig

teams_manifest = ChannelManifest(
    config_cls=TeamsConfig,
    channel_factory=TeamsChannel.from_config,
)
