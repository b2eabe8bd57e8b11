"""JSON summary file channel manifest."""

from run_notifier.channels.json_file.channel import JsonFileChannel
from run_notifier.channels.json_file.config import JsonFileConfig
from run_notifier.channels.manifest import ChannelManifest

json_file_manifest = ChannelManifest(
    config_cls=JsonFileConfig,
    channel_factory=JsonFileChannel.from_config,
)
